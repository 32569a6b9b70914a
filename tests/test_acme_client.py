import asyncio

import pytest

from acmesh.client import UNKNOWN_CERTIFICATE_DIR, AcmeClient
from acmesh.models import (
    GetCertificateOptions,
    InfoOptions,
    InstallCertOptions,
    IssueOptions,
    ListOptions,
    RemoveOptions,
    RenewAllOptions,
    RenewOptions,
    RevokeOptions,
    RevokeReason,
)
from acmesh.runner import ProcessError


def _client(config, runner):
    return AcmeClient(config=config, runner=runner)


def _process_error():
    return ProcessError(
        "acme.sh exited with status 1",
        returncode=1,
        stdout_lines=["Your cert is in: /a/b.cer"],
        stderr_lines=["line1", "line2"],
    )


@pytest.mark.asyncio
async def test_issue_runs_built_arguments(client_config, fake_runner_factory):
    runner = fake_runner_factory(
        [
            "[Info] Your cert is in: /root/.acme.sh/example.com/example.com.cer",
            "[Info] Your cert key is in: /root/.acme.sh/example.com/example.com.key",
            "[Info] The intermediate CA cert is in: /root/.acme.sh/example.com/ca.cer",
            "[Info] And the full chain certs is in: /root/.acme.sh/example.com/fullchain.cer",
        ]
    )
    client = _client(client_config, runner)

    result = await client.issue(IssueOptions(domains=["example.com"], webroot="/var/www/html"))

    assert runner.calls == [["--issue", "-d", "example.com", "-w", "/var/www/html", "--keylength", "4096"]]
    assert result.success is True
    assert result.operation == "issue"
    assert result.raw_output.count("\n") == 3
    assert result.error_output is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, options",
    [
        ("list_certificates", ListOptions()),
        ("issue", IssueOptions(domains=["example.com"])),
        ("renew", RenewOptions(domain="example.com")),
        ("renew_all", RenewAllOptions()),
        ("install_cert", InstallCertOptions(domain="example.com", cert_file="/etc/ssl/a.crt")),
        ("revoke", RevokeOptions(domain="example.com")),
        ("remove", RemoveOptions(domain="example.com")),
        ("info", InfoOptions(domain="example.com")),
        ("get_certificate", GetCertificateOptions(domain="example.com")),
    ],
)
async def test_process_failure_short_circuits(client_config, fake_runner_factory, method, options):
    client = _client(client_config, fake_runner_factory(error=_process_error()))

    result = await getattr(client, method)(options)

    assert result.success is False
    assert result.error_output == ["line1", "line2"]
    assert result.raw_output is None
    for field in (
        "certificates",
        "certificate_file",
        "certificate_path",
        "installed_cert_file",
        "certificate_thumbprint",
        "domain_config_path",
        "renewed_domains",
    ):
        value = getattr(result, field, None)
        assert not value


@pytest.mark.asyncio
async def test_revoke_failure_echoes_options(client_config, fake_runner_factory):
    client = _client(client_config, fake_runner_factory(error=_process_error()))

    result = await client.revoke(RevokeOptions(domain="example.com", ecc=True, reason=RevokeReason.KEY_COMPROMISE))

    assert result.domain == "example.com"
    assert result.reason is RevokeReason.KEY_COMPROMISE
    assert result.was_ecc is True
    assert result.revoked_at is None


@pytest.mark.asyncio
async def test_revoke_success_is_timestamped(client_config, fake_runner_factory):
    client = _client(client_config, fake_runner_factory(["[Info] Revoke success!"]))

    result = await client.revoke(RevokeOptions(domain="example.com"))

    assert result.success is True
    assert result.revoked_at is not None
    assert result.revoked_at.tzinfo is not None


@pytest.mark.asyncio
async def test_remove_success(client_config, fake_runner_factory):
    runner = fake_runner_factory(
        ["example.com has been removed. The key and cert files are in /root/.acme.sh/example.com"]
    )
    client = _client(client_config, runner)

    result = await client.remove(RemoveOptions(domain="example.com"))

    assert runner.calls == [["--remove", "-d", "example.com"]]
    assert result.success is True
    assert result.domain == "example.com"
    assert result.certificate_path == "/root/.acme.sh/example.com"
    assert result.removed_at is not None


@pytest.mark.asyncio
async def test_renew_skip_has_no_renewal_timestamp(client_config, fake_runner_factory):
    runner = fake_runner_factory(["[Info] Renew: 'example.com'", "[Info] Skip, Next renewal time is: 2024-03-15"])
    client = _client(client_config, runner)

    result = await client.renew(RenewOptions(domain="example.com", force=False))

    assert result.success is True
    assert result.skipped is True
    assert result.renewed_at is None


@pytest.mark.asyncio
async def test_renew_all_sets_completion_time(client_config, fake_runner_factory):
    runner = fake_runner_factory(["[Info] Renew: 'example.com'", "[Error] Renew error for example.com"])
    client = _client(client_config, runner)

    result = await client.renew_all(RenewAllOptions(stop_renew_on_error=True))

    assert runner.calls == [["--renew-all", "--stop-renew-on-error"]]
    assert result.success is False
    assert result.failed_domains == ["example.com"]
    assert result.completed_at is not None


@pytest.mark.asyncio
async def test_install_cert_success_is_timestamped(client_config, fake_runner_factory):
    runner = fake_runner_factory(["[Info] Installing cert to: /etc/ssl/a.crt"])
    client = _client(client_config, runner)

    result = await client.install_cert(InstallCertOptions(domain="example.com", cert_file="/etc/ssl/a.crt"))

    assert result.success is True
    assert result.installed_at is not None


@pytest.mark.asyncio
async def test_list_defaults_options(client_config, fake_runner_factory):
    runner = fake_runner_factory(["Main_Domain  KeyLength", "example.com  2048"])
    client = _client(client_config, runner)

    result = await client.list_certificates()

    assert runner.calls == [["--list"]]
    assert result.success is True
    assert result.certificates[0].key_length == "2048"


@pytest.mark.asyncio
async def test_cancellation_propagates(client_config, fake_runner_factory):
    client = _client(client_config, fake_runner_factory(error=asyncio.CancelledError()))

    with pytest.raises(asyncio.CancelledError):
        await client.info(InfoOptions(domain="example.com"))


def test_explicit_path_overrides_config(client_config):
    client = AcmeClient("/usr/local/bin/acme.sh", config=client_config)
    assert client.config.executable == ["/usr/local/bin/acme.sh"]


def test_explicit_path_is_one_token_without_config():
    client = AcmeClient("/opt/my tools/acme.sh")
    assert client.config.executable == ["/opt/my tools/acme.sh"]


def test_explicit_path_is_one_token_with_config(client_config):
    client = AcmeClient("/opt/my tools/acme.sh", config=client_config)
    assert client.config.executable == ["/opt/my tools/acme.sh"]


# ----------------------------------------------------------------------
# get_certificate
# ----------------------------------------------------------------------


def _write_certificate_dir(tmp_path, domain, *, ecc=False):
    suffix = "_ecc" if ecc else ""
    cert_dir = tmp_path / f"{domain}{suffix}"
    cert_dir.mkdir()
    (cert_dir / f"{domain}{suffix}.cer").write_text("CERT")
    (cert_dir / f"{domain}{suffix}.key").write_text("KEY")
    (cert_dir / "ca.cer").write_text("CA")
    (cert_dir / "fullchain.cer").write_text("CHAIN")
    return cert_dir


@pytest.mark.asyncio
async def test_get_certificate_reads_requested_files(tmp_path, client_config, fake_runner_factory):
    cert_dir = _write_certificate_dir(tmp_path, "example.com")
    runner = fake_runner_factory([f"DOMAIN_CONF={cert_dir}/example.com.conf", "Le_Domain=example.com"])
    client = _client(client_config, runner)

    result = await client.get_certificate(GetCertificateOptions(domain="example.com", include_key=True))

    assert runner.calls == [["--info", "-d", "example.com"]]
    assert result.success is True
    assert result.certificate_path == str(cert_dir / "example.com.cer")
    assert result.certificate == "CERT"
    assert result.private_key == "KEY"
    assert result.full_chain is None
    assert result.ca_bundle is None
    assert result.ca_path == str(cert_dir / "ca.cer")
    assert result.full_chain_path == str(cert_dir / "fullchain.cer")


@pytest.mark.asyncio
async def test_get_certificate_ecc_names(tmp_path, client_config, fake_runner_factory):
    cert_dir = _write_certificate_dir(tmp_path, "example.com", ecc=True)
    runner = fake_runner_factory([f"DOMAIN_CONF='{cert_dir}/example.com.conf'"])
    client = _client(client_config, runner)

    options = GetCertificateOptions(domain="example.com", ecc=True, include_full_chain=True, include_ca=True)
    result = await client.get_certificate(options)

    assert runner.calls == [["--info", "-d", "example.com", "--ecc"]]
    assert result.success is True
    assert result.key_path == str(cert_dir / "example.com_ecc.key")
    assert result.certificate == "CERT"
    assert result.private_key is None
    assert result.full_chain == "CHAIN"
    assert result.ca_bundle == "CA"


@pytest.mark.asyncio
async def test_get_certificate_missing_files_are_not_errors(tmp_path, client_config, fake_runner_factory):
    runner = fake_runner_factory([f"DOMAIN_CONF={tmp_path}/example.com.conf"])
    client = _client(client_config, runner)

    result = await client.get_certificate(GetCertificateOptions(domain="example.com", include_key=True))

    assert result.success is True
    assert result.certificate is None
    assert result.private_key is None


@pytest.mark.asyncio
async def test_get_certificate_without_directory(client_config, fake_runner_factory):
    client = _client(client_config, fake_runner_factory(["DOMAIN_CONF=example.com.conf"]))

    result = await client.get_certificate(GetCertificateOptions(domain="example.com"))

    assert result.success is False
    assert result.error_output == [UNKNOWN_CERTIFICATE_DIR]
    assert result.raw_output == "DOMAIN_CONF=example.com.conf"


@pytest.mark.asyncio
async def test_get_certificate_without_domain_conf(client_config, fake_runner_factory):
    client = _client(client_config, fake_runner_factory(["Le_Domain=example.com"]))

    result = await client.get_certificate(GetCertificateOptions(domain="example.com"))

    assert result.success is False
    assert result.error_output == [UNKNOWN_CERTIFICATE_DIR]


@pytest.mark.asyncio
async def test_get_certificate_read_error(tmp_path, client_config, fake_runner_factory):
    cert_dir = tmp_path / "example.com"
    cert_dir.mkdir()
    # A directory where the certificate file should be makes read_text raise.
    (cert_dir / "example.com.cer").mkdir()
    client = _client(client_config, fake_runner_factory([f"DOMAIN_CONF={cert_dir}/example.com.conf"]))

    result = await client.get_certificate(GetCertificateOptions(domain="example.com"))

    assert result.success is False
    assert len(result.error_output) == 1
    assert result.error_output[0].startswith("Error reading certificate files:")
    assert result.certificate_path is None


@pytest.mark.asyncio
async def test_get_certificate_tolerates_undecodable_bytes(tmp_path, client_config, fake_runner_factory):
    cert_dir = tmp_path / "example.com"
    cert_dir.mkdir()
    (cert_dir / "example.com.cer").write_bytes(b"\x30\x82\xff\xfe DER bytes")
    client = _client(client_config, fake_runner_factory([f"DOMAIN_CONF={cert_dir}/example.com.conf"]))

    result = await client.get_certificate(GetCertificateOptions(domain="example.com"))

    assert result.success is True
    assert "\ufffd" in result.certificate
    assert result.certificate.endswith(" DER bytes")
