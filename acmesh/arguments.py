"""Build acme.sh argument vectors from option records.

Tokens are handed to the process as discrete argv entries, so no quoting is
applied. Nothing here validates domains or paths; acme.sh reports those errors
itself on stderr.
"""

from __future__ import annotations

from collections.abc import Callable

from acmesh.models import (
    AcmeOptions,
    InfoOptions,
    InstallCertOptions,
    IssueOptions,
    ListOptions,
    RemoveOptions,
    RenewAllOptions,
    RenewOptions,
    RevokeOptions,
)


def _add_flag(args: list[str], flag: str, enabled: bool) -> None:
    if enabled:
        args.append(flag)


def _add_value(args: list[str], flag: str, value: str | None) -> None:
    if value:
        args.extend([flag, value])


def build_list_args(options: ListOptions) -> list[str]:
    args = ["--list"]
    _add_flag(args, "--raw", options.raw)
    return args


def build_issue_args(options: IssueOptions) -> list[str]:
    args = ["--issue"]
    for domain in options.domains:
        args.extend(["-d", domain])
    _add_value(args, "-w", options.webroot)
    _add_value(args, "--dns", options.dns_provider)
    args.extend(["--keylength", options.key_length])
    _add_flag(args, "--staging", options.staging)
    _add_value(args, "--server", options.server)
    return args


def build_renew_args(options: RenewOptions) -> list[str]:
    args = ["--renew", "-d", options.domain]
    _add_flag(args, "--force", options.force)
    _add_flag(args, "--ecc", options.ecc)
    _add_value(args, "--server", options.server)
    return args


def build_renew_all_args(options: RenewAllOptions) -> list[str]:
    args = ["--renew-all"]
    _add_flag(args, "--stop-renew-on-error", options.stop_renew_on_error)
    _add_value(args, "--server", options.server)
    return args


def build_install_cert_args(options: InstallCertOptions) -> list[str]:
    args = ["--install-cert", "-d", options.domain]
    _add_flag(args, "--ecc", options.ecc)
    _add_value(args, "--cert-file", options.cert_file)
    _add_value(args, "--key-file", options.key_file)
    _add_value(args, "--ca-file", options.ca_file)
    _add_value(args, "--fullchain-file", options.fullchain_file)
    _add_value(args, "--reloadcmd", options.reload_cmd)
    return args


def build_revoke_args(options: RevokeOptions) -> list[str]:
    args = ["--revoke", "-d", options.domain]
    _add_flag(args, "--ecc", options.ecc)
    if options.reason is not None:
        args.extend(["--revoke-reason", str(int(options.reason))])
    return args


def build_remove_args(options: RemoveOptions) -> list[str]:
    args = ["--remove", "-d", options.domain]
    _add_flag(args, "--ecc", options.ecc)
    return args


def build_info_args(options: InfoOptions) -> list[str]:
    args = ["--info", "-d", options.domain]
    _add_flag(args, "--ecc", options.ecc)
    return args


_BUILDERS: dict[type, Callable[..., list[str]]] = {
    ListOptions: build_list_args,
    IssueOptions: build_issue_args,
    RenewOptions: build_renew_args,
    RenewAllOptions: build_renew_all_args,
    InstallCertOptions: build_install_cert_args,
    RevokeOptions: build_revoke_args,
    RemoveOptions: build_remove_args,
    InfoOptions: build_info_args,
}


def build_arguments(options: AcmeOptions) -> list[str]:
    """Return the argument vector for any supported options record."""

    builder = _BUILDERS.get(type(options))
    if builder is None:
        raise TypeError(f"No argument builder registered for {type(options).__name__}")
    return builder(options)


__all__ = [
    "build_arguments",
    "build_info_args",
    "build_install_cert_args",
    "build_issue_args",
    "build_list_args",
    "build_remove_args",
    "build_renew_all_args",
    "build_renew_args",
    "build_revoke_args",
]
