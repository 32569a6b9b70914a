"""Parsers that recover fields from fixed phrases in acme.sh log lines.

Each field is the remainder of the first line that contains its prefix
phrase. Fields are only kept on the result when the operation succeeded.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from acmesh import classifiers, markers
from acmesh.models import (
    InstallCertResult,
    IssueResult,
    RemoveOptions,
    RemoveResult,
    RenewResult,
    RevokeOptions,
    RevokeResult,
)

from .base import BaseParser, extract_after

logger = logging.getLogger("acmesh.parsers")

_THUMBPRINT = re.compile(re.escape(markers.REVOKE.thumbprint) + r"\s*([A-F0-9]+)", re.IGNORECASE)


def _certificate_paths(output: str) -> tuple[str | None, str | None, str | None, str | None]:
    paths = markers.CERTIFICATE_PATHS
    return (
        extract_after(paths.certificate, output),
        extract_after(paths.key, output),
        extract_after(paths.ca, output),
        extract_after(paths.full_chain, output),
    )


class IssueParser(BaseParser):
    name = "issue"

    def parse(self, output: str, options: Any = None) -> IssueResult:
        certificate, key, ca, full_chain = _certificate_paths(output)
        if not classifiers.issue_succeeded(certificate, key, ca, full_chain):
            logger.debug(
                "Issue output is missing certificate files (cert=%s key=%s ca=%s fullchain=%s)",
                bool(certificate),
                bool(key),
                bool(ca),
                bool(full_chain),
            )
            return IssueResult(success=False, raw_output=output)

        return IssueResult(
            success=True,
            raw_output=output,
            certificate_file=certificate,
            key_file=key,
            ca_file=ca,
            full_chain_file=full_chain,
        )


class RenewParser(BaseParser):
    name = "renew"

    def parse(self, output: str, options: Any = None) -> RenewResult:
        if classifiers.renew_skipped(output):
            return RenewResult(success=True, raw_output=output, skipped=True)

        certificate, key, ca, full_chain = _certificate_paths(output)
        if not classifiers.renew_succeeded(output, certificate):
            return RenewResult(success=False, raw_output=output)

        return RenewResult(
            success=True,
            raw_output=output,
            certificate_path=certificate,
            key_path=key,
            ca_path=ca,
            full_chain_path=full_chain,
        )


class InstallCertParser(BaseParser):
    name = "install_cert"

    def parse(self, output: str, options: Any = None) -> InstallCertResult:
        install = markers.INSTALL
        installed = {
            "installed_cert_file": extract_after(install.certificate, output),
            "installed_key_file": extract_after(install.key, output),
            "installed_ca_file": extract_after(install.ca, output),
            "installed_full_chain_file": extract_after(install.full_chain, output),
        }
        if not classifiers.install_succeeded(output, installed.values()):
            return InstallCertResult(success=False, raw_output=output)

        reload_output = self._reload_output(output)
        return InstallCertResult(
            success=True,
            raw_output=output,
            reload_command_executed=reload_output is not None,
            reload_command_output=reload_output,
            **installed,
        )

    def _reload_output(self, output: str) -> str | None:
        install = markers.INSTALL
        start = output.find(install.reload_started)
        if start == -1:
            return None
        end = output.find(install.reload_success, start)
        if end > start:
            return output[start : end + len(install.reload_success)].strip()
        return output[start:].strip()


class RevokeParser(BaseParser):
    name = "revoke"

    def parse(self, output: str, options: RevokeOptions | None = None) -> RevokeResult:
        echoed: dict[str, Any] = {}
        if options is not None:
            echoed = {"domain": options.domain, "reason": options.reason, "was_ecc": options.ecc}

        if not classifiers.revoke_succeeded(output):
            return RevokeResult(success=False, raw_output=output, **echoed)

        match = _THUMBPRINT.search(output)
        return RevokeResult(
            success=True,
            raw_output=output,
            certificate_thumbprint=match.group(1) if match else None,
            **echoed,
        )


class RemoveParser(BaseParser):
    name = "remove"

    def parse(self, output: str, options: RemoveOptions | None = None) -> RemoveResult:
        if options is None:
            raise ValueError("RemoveParser needs the RemoveOptions that produced the output")

        remove = markers.REMOVE
        was_ecc = options.ecc or remove.already_ecc in output

        if not classifiers.remove_succeeded(output, options.domain):
            return RemoveResult(success=False, raw_output=output, domain=options.domain, was_ecc=was_ecc)

        return RemoveResult(
            success=True,
            raw_output=output,
            domain=options.domain,
            was_ecc=was_ecc,
            certificate_path=extract_after(remove.files_location, output),
        )
