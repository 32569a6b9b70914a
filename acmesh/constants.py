"""Internal defaults and constants for acmesh."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_EXECUTABLE = "acme.sh"
DEFAULT_TIMEOUT_SECONDS = 600
DEFAULT_STREAM_LIMIT = 10 * 1024 * 1024  # 10MB per stream

PATH_ENV_VAR = "ACMESH_PATH"
WORKING_DIR_ENV_VAR = "ACMESH_WORKING_DIR"
TIMEOUT_ENV_VAR = "ACMESH_TIMEOUT_SECONDS"

DEFAULT_KEY_LENGTH = "4096"


@dataclass(frozen=True)
class CertificateFileNames:
    """File names acme.sh writes next to a domain's configuration file."""

    certificate: str
    key: str
    ca: str = "ca.cer"
    full_chain: str = "fullchain.cer"


def certificate_file_names(domain: str, *, ecc: bool = False) -> CertificateFileNames:
    suffix = "_ecc" if ecc else ""
    return CertificateFileNames(
        certificate=f"{domain}{suffix}.cer",
        key=f"{domain}{suffix}.key",
    )
