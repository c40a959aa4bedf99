"""
Command line entry point.

Mirrors the flags of `security add-trusted-cert` and runs the command with
the configured elevation backend.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from trusted_cert.compiler import build_add_trusted_cert_cmd
from trusted_cert.config import ElevationBackend, get_settings
from trusted_cert.constants import AllowedError, PolicyConstraint, ResultType
from trusted_cert.exceptions import TrustStoreError
from trusted_cert.executor import add_trusted_cert, render_command_line
from trusted_cert.logging_config import setup_logging
from trusted_cert.models import TrustOperationRequest
from trusted_cert.runners import get_runner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trusted-cert",
        description="Add a certificate (DER or PEM) to the per-user or admin trust settings",
    )
    parser.add_argument("cert_file", help="Certificate file to add")
    parser.add_argument(
        "-d", dest="add_to_admin_store", action="store_true", help="Add to admin cert store"
    )
    parser.add_argument(
        "-r",
        dest="result_type",
        metavar="resultType",
        help=f"Result type ({', '.join(r.value for r in ResultType)})",
    )
    parser.add_argument(
        "-p",
        dest="policy_constraint",
        metavar="policy",
        action="append",
        help=f"Policy constraint, repeatable ({', '.join(p.value for p in PolicyConstraint)})",
    )
    parser.add_argument("-a", dest="app_path", metavar="appPath", help="Application constraint")
    parser.add_argument(
        "-s", dest="policy_string", metavar="policyString", help="Policy-specific string"
    )
    parser.add_argument(
        "-e",
        dest="allowed_error",
        metavar="allowedError",
        action="append",
        help=f"Allowed error, repeatable ({', '.join(e.value for e in AllowedError)} or a number)",
    )
    parser.add_argument(
        "-u",
        dest="key_usage_code",
        metavar="keyUsage",
        type=int,
        help="Key usage; add values together for more than one usage (-1 for any)",
    )
    parser.add_argument("-k", dest="keychain", metavar="keychain", help="Keychain to add the cert to")
    parser.add_argument(
        "-i", dest="settings_file_in", metavar="settingsFileIn", help="Input trust settings file"
    )
    parser.add_argument(
        "-o", dest="settings_file_out", metavar="settingsFileOut", help="Output trust settings file"
    )
    parser.add_argument(
        "--backend",
        choices=[b.value for b in ElevationBackend],
        help="Elevation backend (default: from TRUSTED_CERT_ELEVATION_BACKEND)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the command instead of running it"
    )
    parser.add_argument("--log-format", choices=["text", "json"], help="Log output format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def request_from_args(args: argparse.Namespace) -> TrustOperationRequest:
    """Build a request from parsed arguments; repeatable flags become sequences."""
    return TrustOperationRequest(
        add_to_admin_store=args.add_to_admin_store,
        result_type=args.result_type,
        policy_constraint=args.policy_constraint,
        app_path=args.app_path,
        policy_string=args.policy_string,
        allowed_error=args.allowed_error,
        key_usage_code=args.key_usage_code,
        keychain=args.keychain,
        settings_file_in=args.settings_file_in,
        settings_file_out=args.settings_file_out,
        cert_file=args.cert_file,
    )


async def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(
        log_level="DEBUG" if args.verbose else settings.log_level,
        log_format=args.log_format or settings.log_format,
    )

    request = request_from_args(args)

    if args.dry_run:
        tokens = build_add_trusted_cert_cmd(
            request,
            default_keychain=settings.default_keychain,
            scalar_allowed_error_flag=settings.scalar_allowed_error_flag,
        )
        print(render_command_line(tokens, settings.tool_name))
        return 0

    try:
        runner = get_runner(args.backend, settings)
        output = await add_trusted_cert(request, runner=runner, settings=settings)
    except TrustStoreError as e:
        logger.error("Adding trusted certificate failed: %s", e.message)
        return 1

    if output:
        sys.stdout.write(output)
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
