"""Parser for the ``key=value`` listing printed by ``acme.sh --info``."""

from __future__ import annotations

import logging
from typing import Any

from acmesh import markers
from acmesh.models import InfoResult

from .base import BaseParser

logger = logging.getLogger("acmesh.parsers")


def unquote(value: str) -> str:
    """Strip one layer of matching single or double quotes."""

    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


class KeyValueInfoParser(BaseParser):
    name = "info"

    def parse(self, output: str, options: Any = None) -> InfoResult:
        known = dict(markers.INFO.fields)
        values: dict[str, Any] = {}

        for line in output.split("\n"):
            if not line.strip():
                continue
            key, sep, raw_value = line.partition("=")
            key = key.strip()
            if not sep or not key:
                continue
            field = known.get(key)
            if field is None:
                continue

            value = unquote(raw_value.strip())
            if field in markers.INFO.integer_fields:
                try:
                    values[field] = int(value)
                except ValueError:
                    logger.debug("Ignoring non-numeric %s value %r", key, value)
                continue
            values[field] = value

        return InfoResult(success=True, raw_output=output, **values)
