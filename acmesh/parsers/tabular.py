"""Parser for the table printed by ``acme.sh --list``."""

from __future__ import annotations

import re
from typing import Any

from acmesh import markers
from acmesh.models import CertificateInfo, ListResult

from .base import BaseParser

# Values such as "Lets Encrypt" or "2024-01-15 12:00:00" contain single spaces,
# so columns are only split on runs of two or more.
_COLUMN_SEPARATOR = re.compile(r"\s{2,}")
_QUOTES = "'\""


def split_columns(line: str) -> list[str]:
    return [token.strip().strip(_QUOTES) for token in _COLUMN_SEPARATOR.split(line.strip())]


class TabularListParser(BaseParser):
    """Map each table row onto a ``CertificateInfo`` by header position."""

    name = "list"

    def parse(self, output: str, options: Any = None) -> ListResult:
        lines = output.split("\n")
        if len(lines) < 2:
            return ListResult(success=True, raw_output=output)

        columns = dict(markers.LIST.columns)
        fields = [columns.get(header) for header in split_columns(lines[0])]

        certificates: list[CertificateInfo] = []
        for line in lines[1:]:
            if not line.strip():
                continue
            values = split_columns(line)
            row = {field: value for field, value in zip(fields, values) if field is not None}
            certificates.append(CertificateInfo(**row))

        return ListResult(success=True, raw_output=output, certificates=certificates)
