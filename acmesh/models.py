"""Pydantic models for acme.sh options and results."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from acmesh.constants import DEFAULT_KEY_LENGTH


class RevokeReason(IntEnum):
    """Certificate revocation reasons (RFC 5280). Value 7 is unused."""

    UNSPECIFIED = 0
    KEY_COMPROMISE = 1
    CA_COMPROMISE = 2
    AFFILIATION_CHANGED = 3
    SUPERSEDED = 4
    CESSATION_OF_OPERATION = 5
    CERTIFICATE_HOLD = 6
    REMOVE_FROM_CRL = 8
    PRIVILEGE_WITHDRAWN = 9
    AA_COMPROMISE = 10


# ----------------------------------------------------------------------
# Options
# ----------------------------------------------------------------------


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True)


class ListOptions(_Options):
    """Options for ``acme.sh --list``."""

    raw: bool = False


class IssueOptions(_Options):
    """Options for ``acme.sh --issue``."""

    domains: list[str] = Field(default_factory=list)
    webroot: str | None = None
    dns_provider: str | None = None
    key_length: str = DEFAULT_KEY_LENGTH
    staging: bool = False
    server: str | None = None

    @field_validator("domains", mode="before")
    @classmethod
    def _ensure_list(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        raise TypeError("domains must be a list of strings or a single string")


class RenewOptions(_Options):
    """Options for ``acme.sh --renew``."""

    domain: str
    force: bool = False
    ecc: bool = False
    server: str | None = None


class RenewAllOptions(_Options):
    """Options for ``acme.sh --renew-all``."""

    stop_renew_on_error: bool = False
    server: str | None = None


class InstallCertOptions(_Options):
    """Options for ``acme.sh --install-cert``.

    Every path is optional; acme.sh only copies the files it is given a
    destination for. ``reload_cmd`` runs after the copy, typically to reload a
    web server (``systemctl reload nginx``).
    """

    domain: str
    ecc: bool = False
    cert_file: str | None = None
    key_file: str | None = None
    ca_file: str | None = None
    fullchain_file: str | None = None
    reload_cmd: str | None = None


class RevokeOptions(_Options):
    """Options for ``acme.sh --revoke``."""

    domain: str
    ecc: bool = False
    reason: RevokeReason | None = None


class RemoveOptions(_Options):
    """Options for ``acme.sh --remove``.

    Removing only drops the certificate from acme.sh management; the files on
    disk are left in place.
    """

    domain: str
    ecc: bool = False


class InfoOptions(_Options):
    """Options for ``acme.sh --info``."""

    domain: str
    ecc: bool = False


class GetCertificateOptions(_Options):
    """Options for reading a managed certificate's files from disk."""

    domain: str
    ecc: bool = False
    include_key: bool = False
    include_full_chain: bool = False
    include_ca: bool = False


AcmeOptions = Union[
    ListOptions,
    IssueOptions,
    RenewOptions,
    RenewAllOptions,
    InstallCertOptions,
    RevokeOptions,
    RemoveOptions,
    InfoOptions,
]


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = False
    raw_output: str | None = None
    error_output: list[str] | None = None


class CertificateInfo(BaseModel):
    """One row of ``acme.sh --list`` output."""

    model_config = ConfigDict(frozen=True)

    main_domain: str | None = None
    key_length: str | None = None
    san_domains: str | None = None
    ca: str | None = None
    created: str | None = None
    next_renew_time: str | None = None


class ListResult(_Result):
    operation: Literal["list"] = "list"
    certificates: list[CertificateInfo] = Field(default_factory=list)


class IssueResult(_Result):
    operation: Literal["issue"] = "issue"
    certificate_file: str | None = None
    key_file: str | None = None
    ca_file: str | None = None
    full_chain_file: str | None = None


class RenewResult(_Result):
    operation: Literal["renew"] = "renew"
    certificate_path: str | None = None
    key_path: str | None = None
    ca_path: str | None = None
    full_chain_path: str | None = None
    skipped: bool = False
    renewed_at: datetime | None = None


class RenewAllResult(_Result):
    operation: Literal["renew_all"] = "renew_all"
    total_certificates: int = 0
    successful_renewals: int = 0
    failed_renewals: int = 0
    skipped_renewals: int = 0
    renewed_domains: list[str] = Field(default_factory=list)
    failed_domains: list[str] = Field(default_factory=list)
    skipped_domains: list[str] = Field(default_factory=list)
    completed_at: datetime | None = None


class InstallCertResult(_Result):
    operation: Literal["install_cert"] = "install_cert"
    installed_cert_file: str | None = None
    installed_key_file: str | None = None
    installed_ca_file: str | None = None
    installed_full_chain_file: str | None = None
    reload_command_executed: bool = False
    reload_command_output: str | None = None
    installed_at: datetime | None = None


class RevokeResult(_Result):
    operation: Literal["revoke"] = "revoke"
    domain: str | None = None
    reason: RevokeReason | None = None
    was_ecc: bool = False
    certificate_thumbprint: str | None = None
    revoked_at: datetime | None = None


class RemoveResult(_Result):
    operation: Literal["remove"] = "remove"
    domain: str | None = None
    was_ecc: bool = False
    certificate_path: str | None = None
    removed_at: datetime | None = None


class InfoResult(_Result):
    operation: Literal["info"] = "info"
    domain_config_path: str | None = None
    domain: str | None = None
    alt_names: str | None = None
    webroot: str | None = None
    pre_hook: str | None = None
    post_hook: str | None = None
    renew_hook: str | None = None
    api_endpoint: str | None = None
    key_length: str | None = None
    order_finalize_url: str | None = None
    link_order_url: str | None = None
    link_cert_url: str | None = None
    cert_create_time: int | None = None
    cert_create_time_str: str | None = None
    next_renew_time: int | None = None
    next_renew_time_str: str | None = None


class GetCertificateResult(_Result):
    operation: Literal["get_certificate"] = "get_certificate"
    certificate_path: str | None = None
    certificate: str | None = None
    key_path: str | None = None
    private_key: str | None = None
    full_chain_path: str | None = None
    full_chain: str | None = None
    ca_path: str | None = None
    ca_bundle: str | None = None


AcmeResult = Annotated[
    Union[
        ListResult,
        IssueResult,
        RenewResult,
        RenewAllResult,
        InstallCertResult,
        RevokeResult,
        RemoveResult,
        InfoResult,
        GetCertificateResult,
    ],
    Field(discriminator="operation"),
]
