"""Async client for the acme.sh certificate manager."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel

from acmesh import arguments
from acmesh.config import ClientConfig, load_client_config
from acmesh.constants import certificate_file_names
from acmesh.models import (
    GetCertificateOptions,
    GetCertificateResult,
    InfoOptions,
    InfoResult,
    InstallCertOptions,
    InstallCertResult,
    IssueOptions,
    IssueResult,
    ListOptions,
    ListResult,
    RemoveOptions,
    RemoveResult,
    RenewAllOptions,
    RenewAllResult,
    RenewOptions,
    RenewResult,
    RevokeOptions,
    RevokeResult,
)
from acmesh.parsers import get_parser
from acmesh.runner import ProcessError, ProcessRunner

logger = logging.getLogger("acmesh.client")

ResultT = TypeVar("ResultT", bound=BaseModel)

UNKNOWN_CERTIFICATE_DIR = "Unable to determine certificate directory from domain config path"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AcmeClient:
    """Run acme.sh subcommands and return typed results.

    Every method is a single, independent acme.sh invocation. Failures are
    reported through ``success`` and ``error_output`` rather than raised; only
    ``asyncio.CancelledError`` escapes.
    """

    def __init__(
        self,
        acme_sh_path: str | None = None,
        *,
        config: ClientConfig | None = None,
        runner: ProcessRunner | None = None,
    ):
        executable = [acme_sh_path] if acme_sh_path else None
        if config is None:
            config = load_client_config(executable=executable)
        elif executable:
            config = config.model_copy(update={"executable": executable})
        self.config = config
        self._runner = runner or ProcessRunner(config)

    async def list_certificates(self, options: ListOptions | None = None) -> ListResult:
        return await self._execute("list", options or ListOptions(), ListResult)

    async def issue(self, options: IssueOptions) -> IssueResult:
        return await self._execute("issue", options, IssueResult)

    async def renew(self, options: RenewOptions) -> RenewResult:
        result = await self._execute("renew", options, RenewResult)
        if result.success and not result.skipped:
            result = result.model_copy(update={"renewed_at": _utcnow()})
        return result

    async def renew_all(self, options: RenewAllOptions | None = None) -> RenewAllResult:
        result = await self._execute("renew_all", options or RenewAllOptions(), RenewAllResult)
        if result.error_output is None:
            result = result.model_copy(update={"completed_at": _utcnow()})
        return result

    async def install_cert(self, options: InstallCertOptions) -> InstallCertResult:
        result = await self._execute("install_cert", options, InstallCertResult)
        if result.success:
            result = result.model_copy(update={"installed_at": _utcnow()})
        return result

    async def revoke(self, options: RevokeOptions) -> RevokeResult:
        result = await self._execute(
            "revoke",
            options,
            RevokeResult,
            domain=options.domain,
            reason=options.reason,
            was_ecc=options.ecc,
        )
        if result.success:
            result = result.model_copy(update={"revoked_at": _utcnow()})
        return result

    async def remove(self, options: RemoveOptions) -> RemoveResult:
        result = await self._execute(
            "remove",
            options,
            RemoveResult,
            domain=options.domain,
            was_ecc=options.ecc,
        )
        if result.success:
            result = result.model_copy(update={"removed_at": _utcnow()})
        return result

    async def info(self, options: InfoOptions) -> InfoResult:
        return await self._execute("info", options, InfoResult)

    async def get_certificate(self, options: GetCertificateOptions) -> GetCertificateResult:
        """Locate a managed certificate through ``--info`` and read its files.

        The certificate is always read when present; the key, full chain and CA
        bundle only when requested. Missing files leave their fields empty.
        """

        info = await self.info(InfoOptions(domain=options.domain, ecc=options.ecc))
        if not info.success:
            return GetCertificateResult(
                success=False,
                raw_output=info.raw_output,
                error_output=info.error_output,
            )

        cert_dir = os.path.dirname(info.domain_config_path or "")
        if not cert_dir:
            logger.debug("No certificate directory for '%s' (DOMAIN_CONF=%r)", options.domain, info.domain_config_path)
            return GetCertificateResult(
                success=False,
                raw_output=info.raw_output,
                error_output=[UNKNOWN_CERTIFICATE_DIR],
            )

        names = certificate_file_names(options.domain, ecc=options.ecc)
        paths = {
            "certificate_path": os.path.join(cert_dir, names.certificate),
            "key_path": os.path.join(cert_dir, names.key),
            "ca_path": os.path.join(cert_dir, names.ca),
            "full_chain_path": os.path.join(cert_dir, names.full_chain),
        }
        wanted = {
            "certificate": ("certificate_path", True),
            "private_key": ("key_path", options.include_key),
            "full_chain": ("full_chain_path", options.include_full_chain),
            "ca_bundle": ("ca_path", options.include_ca),
        }

        contents: dict[str, str] = {}
        try:
            for field, (path_field, included) in wanted.items():
                path = Path(paths[path_field])
                if included and path.exists():
                    contents[field] = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Failed to read certificate files for '%s': %s", options.domain, exc)
            return GetCertificateResult(
                success=False,
                raw_output=info.raw_output,
                error_output=[f"Error reading certificate files: {exc}"],
            )

        return GetCertificateResult(success=True, raw_output=info.raw_output, **paths, **contents)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _execute(
        self,
        operation: str,
        options: Any,
        result_cls: type[ResultT],
        **failure_fields: Any,
    ) -> ResultT:
        args = arguments.build_arguments(options)
        try:
            stdout_lines = await self._runner.run(args)
        except ProcessError as exc:
            logger.warning("acme.sh %s failed: %s", operation, exc)
            return result_cls(success=False, error_output=list(exc.stderr_lines), **failure_fields)

        output = "\n".join(stdout_lines)
        result = get_parser(operation).parse(output, options)
        logger.debug("acme.sh %s classified as %s", operation, "success" if result.success else "failure")
        return result
