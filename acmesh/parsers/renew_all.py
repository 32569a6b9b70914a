"""Parser for the per-domain log printed by ``acme.sh --renew-all``."""

from __future__ import annotations

import re
from typing import Any

from acmesh import classifiers, markers
from acmesh.models import RenewAllResult

from .base import BaseParser

_PROCESSING = re.compile(markers.RENEW_ALL.processing)


class RenewAllParser(BaseParser):
    """Attribute each outcome line to the domain currently being renewed.

    ``Renew: '<domain>'`` opens a domain. The first skip, success or failure
    line after it closes the domain; outcome lines with no open domain are
    ignored.
    """

    name = "renew_all"

    def parse(self, output: str, options: Any = None) -> RenewAllResult:
        renew_all = markers.RENEW_ALL
        total = 0
        renewed: list[str] = []
        failed: list[str] = []
        skipped: list[str] = []
        current: str | None = None

        for line in output.split("\n"):
            match = _PROCESSING.search(line)
            if match:
                current = match.group(1)
                total += 1
                continue

            if current is None:
                continue

            if renew_all.skip in line:
                skipped.append(current)
            elif renew_all.success in line:
                renewed.append(current)
            elif any(marker in line for marker in renew_all.failures):
                if current not in failed:
                    failed.append(current)
            else:
                continue
            current = None

        return RenewAllResult(
            success=classifiers.renew_all_succeeded(len(failed)),
            raw_output=output,
            total_certificates=total,
            successful_renewals=len(renewed),
            failed_renewals=len(failed),
            skipped_renewals=len(skipped),
            renewed_domains=renewed,
            failed_domains=failed,
            skipped_domains=skipped,
        )
