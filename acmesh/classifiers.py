"""Success heuristics for acme.sh output.

The exit code alone is not a reliable verdict: a renewal that is not yet due
exits cleanly but is a no-op, and an issue run can exit 0 without producing all
of its files. Each operation therefore decides success from the text it
printed. Marker checks run first; the ``error``/``failed`` substring checks are
applied after them and win where an operation honours them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from acmesh import markers

logger = logging.getLogger("acmesh.classifiers")


def contains_error(output: str, substrings: Iterable[str] = markers.ERROR_SUBSTRINGS) -> bool:
    return any(fragment in output for fragment in substrings)


def issue_succeeded(
    certificate_file: str | None,
    key_file: str | None,
    ca_file: str | None,
    full_chain_file: str | None,
) -> bool:
    """An issue run only counts when all four files were reported."""

    return all((certificate_file, key_file, ca_file, full_chain_file))


def renew_skipped(output: str) -> bool:
    return markers.RENEW.skip in output


def renew_succeeded(output: str, certificate_path: str | None) -> bool:
    if renew_skipped(output):
        return True
    if contains_error(output):
        logger.debug("Renewal output reports an error")
        return False
    return markers.RENEW.success in output and bool(certificate_path)


def install_succeeded(output: str, installed_paths: Iterable[str | None]) -> bool:
    if contains_error(output):
        logger.debug("Install output reports an error")
        return False
    if markers.INSTALL.completed in output or markers.INSTALL.reload_success in output:
        return True
    return any(installed_paths)


def revoke_succeeded(output: str) -> bool:
    if contains_error(output):
        logger.debug("Revoke output reports an error")
        return False
    return any(marker in output for marker in markers.REVOKE.success)


def remove_succeeded(output: str, domain: str) -> bool:
    if markers.REMOVE.removed_quoted.format(domain=domain) in output:
        return True
    if markers.REMOVE.removed.format(domain=domain) in output:
        return True
    if contains_error(output, markers.REMOVE.errors):
        logger.debug("Remove output for '%s' reports an error", domain)
    return False


def renew_all_succeeded(failed_renewals: int) -> bool:
    return failed_renewals == 0
