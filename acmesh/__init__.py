"""Typed async wrapper around the acme.sh certificate manager."""

from __future__ import annotations

from .client import AcmeClient
from .config import ClientConfig, ConfigError, load_client_config
from .models import (
    AcmeResult,
    CertificateInfo,
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
    RevokeReason,
    RevokeResult,
)
from .runner import ProcessError, ProcessRunner

__version__ = "1.0.0"

__all__ = [
    "AcmeClient",
    "AcmeResult",
    "CertificateInfo",
    "ClientConfig",
    "ConfigError",
    "GetCertificateOptions",
    "GetCertificateResult",
    "InfoOptions",
    "InfoResult",
    "InstallCertOptions",
    "InstallCertResult",
    "IssueOptions",
    "IssueResult",
    "ListOptions",
    "ListResult",
    "ProcessError",
    "ProcessRunner",
    "RemoveOptions",
    "RemoveResult",
    "RenewAllOptions",
    "RenewAllResult",
    "RenewOptions",
    "RenewResult",
    "RevokeOptions",
    "RevokeReason",
    "RevokeResult",
    "load_client_config",
]
