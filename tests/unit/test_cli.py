import logging

import pytest

from trusted_cert import cli
from trusted_cert.constants import DEFAULT_KEYCHAIN
from trusted_cert.exceptions import ElevationError


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def patched_runner(monkeypatch, make_runner):
    def _patch(**kwargs):
        runner = make_runner(**kwargs)
        monkeypatch.setattr(cli, "get_runner", lambda backend=None, settings=None: runner)
        return runner

    return _patch


def test_parser_collects_repeatable_flags():
    args = cli.build_parser().parse_args(
        ["-d", "-r", "trustRoot", "-p", "ssl", "-p", "smime", "-e", "certExpired", "-u", "9", "/tmp/a.pem"]
    )

    request = cli.request_from_args(args)

    assert request.add_to_admin_store is True
    assert request.policy_constraint.elements == ("ssl", "smime")
    assert request.allowed_error.elements == ("certExpired",)
    assert request.allowed_error.is_scalar is False
    assert request.key_usage_code == 9
    assert request.cert_file == "/tmp/a.pem"


@pytest.mark.asyncio
async def test_dry_run_prints_command(capsys):
    exit_code = await cli.main(["--dry-run", "-d", "-r", "trustRoot", "/tmp/a.pem"])

    assert exit_code == 0
    assert capsys.readouterr().out == (
        f"security add-trusted-cert -d -r trustRoot -k {DEFAULT_KEYCHAIN} /tmp/a.pem\n"
    )


@pytest.mark.asyncio
async def test_success_prints_tool_output(capsys, patched_runner):
    runner = patched_runner(stdout="certificate added\n")

    exit_code = await cli.main(["-k", "/tmp/k.keychain", "/tmp/a.pem"])

    assert exit_code == 0
    assert capsys.readouterr().out == "certificate added\n"
    argv, _ = runner.calls[0]
    assert argv == ["security", "add-trusted-cert", "-k", "/tmp/k.keychain", "/tmp/a.pem"]


@pytest.mark.asyncio
async def test_tool_error_exits_non_zero(capsys, patched_runner):
    patched_runner(stderr="SecCertificateCreateFromData: Unknown format in import.\n")

    exit_code = await cli.main(["/tmp/a.pem"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_elevation_error_exits_non_zero(patched_runner):
    patched_runner(error=ElevationError("User canceled.", returncode=1))

    assert await cli.main(["-d", "/tmp/a.pem"]) == 1


def test_unknown_backend_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--backend", "pkexec", "/tmp/a.pem"])

