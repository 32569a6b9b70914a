"""Marker phrases emitted by acme.sh.

acme.sh has no machine-readable output, so every literal the parsers and
classifiers rely on is collected here, one table per operation. The phrases
must match the tool's output verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass

ERROR_SUBSTRINGS: tuple[str, ...] = ("error", "failed")


@dataclass(frozen=True)
class ListMarkers:
    """Column headers of ``acme.sh --list``, mapped to certificate fields."""

    columns: tuple[tuple[str, str], ...] = (
        ("Main_Domain", "main_domain"),
        ("KeyLength", "key_length"),
        ("SAN_Domains", "san_domains"),
        ("CA", "ca"),
        ("Created", "created"),
        ("Renew", "next_renew_time"),
    )


@dataclass(frozen=True)
class CertificatePathMarkers:
    """Prefixes printed after a certificate is issued or renewed."""

    certificate: str = "Your cert is in:"
    key: str = "Your cert key is in:"
    ca: str = "The intermediate CA cert is in:"
    full_chain: str = "And the full chain certs is in:"


@dataclass(frozen=True)
class RenewMarkers:
    skip: str = "Skip, Next renewal time is"
    success: str = "Cert success"


@dataclass(frozen=True)
class RenewAllMarkers:
    processing: str = r"Renew:\s*'(.+?)'"
    skip: str = "Skip, Next renewal time is:"
    success: str = "Cert success"
    failures: tuple[str, ...] = ("Renew error for", "Error renew")


@dataclass(frozen=True)
class InstallMarkers:
    certificate: str = "Installing cert to:"
    key: str = "Installing key to:"
    ca: str = "Installing CA to:"
    full_chain: str = "Installing full chain to:"
    reload_started: str = "[Info] Run reload cmd:"
    reload_success: str = "[Info] Reload success"
    completed: str = "Certificate installation completed"


@dataclass(frozen=True)
class RevokeMarkers:
    thumbprint: str = "Certificate thumbprint:"
    success: tuple[str, ...] = ("Revoke success", "Cert revoked")


@dataclass(frozen=True)
class RemoveMarkers:
    removed_quoted: str = "'{domain}' has been removed."
    removed: str = "{domain} has been removed"
    files_location: str = "The key and cert files are in"
    already_ecc: str = "seems to already have an ECC cert"
    errors: tuple[str, ...] = ("error", "failed", "Error")


@dataclass(frozen=True)
class InfoMarkers:
    """Keys of the ``key=value`` lines printed by ``acme.sh --info``, mapped to result fields."""

    fields: tuple[tuple[str, str], ...] = (
        ("DOMAIN_CONF", "domain_config_path"),
        ("Le_Domain", "domain"),
        ("Le_Alt", "alt_names"),
        ("Le_Webroot", "webroot"),
        ("Le_PreHook", "pre_hook"),
        ("Le_PostHook", "post_hook"),
        ("Le_RenewHook", "renew_hook"),
        ("Le_API", "api_endpoint"),
        ("Le_Keylength", "key_length"),
        ("Le_OrderFinalize", "order_finalize_url"),
        ("Le_LinkOrder", "link_order_url"),
        ("Le_LinkCert", "link_cert_url"),
        ("Le_CertCreateTime", "cert_create_time"),
        ("Le_CertCreateTimeStr", "cert_create_time_str"),
        ("Le_NextRenewTime", "next_renew_time"),
        ("Le_NextRenewTimeStr", "next_renew_time_str"),
    )
    integer_fields: frozenset[str] = frozenset({"cert_create_time", "next_renew_time"})


LIST = ListMarkers()
CERTIFICATE_PATHS = CertificatePathMarkers()
RENEW = RenewMarkers()
RENEW_ALL = RenewAllMarkers()
INSTALL = InstallMarkers()
REVOKE = RevokeMarkers()
REMOVE = RemoveMarkers()
INFO = InfoMarkers()
