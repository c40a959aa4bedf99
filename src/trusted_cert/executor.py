"""
Privileged execution of `security add-trusted-cert`.

Adds a certificate (DER or PEM) to the per-user or local admin trust
settings. Modifying per-user trust settings requires user authentication
through an authentication dialog; modifying admin trust settings requires
running as root or admin authentication.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from opentelemetry import trace

from trusted_cert.compiler import build_add_trusted_cert_cmd
from trusted_cert.config import TrustedCertSettings, get_settings
from trusted_cert.constants import DEFAULT_ELEVATION_PROMPT, DEFAULT_TOOL_NAME
from trusted_cert.exceptions import ToolError
from trusted_cert.models import ExecutionOutcome, Failure, Success, TrustOperationRequest
from trusted_cert.runners import ElevatedRunner, get_runner

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def render_command_line(tokens: Sequence[Any], tool_name: str = DEFAULT_TOOL_NAME) -> str:
    """Join the tool name and tokens into one whitespace-delimited line, unescaped."""
    return " ".join(str(token) for token in [tool_name, *tokens])


async def execute(
    tokens: Sequence[Any],
    tool_name: str = DEFAULT_TOOL_NAME,
    elevation_prompt: str = DEFAULT_ELEVATION_PROMPT,
    runner: ElevatedRunner | None = None,
) -> ExecutionOutcome:
    """
    Run compiled tokens with elevated privileges.

    Args:
        tokens: Compiled command tokens (without the tool name)
        tool_name: Trust store command to run
        elevation_prompt: Label shown by the authentication prompt
        runner: Elevated runner; defaults to the configured backend

    Returns:
        Success with the captured stdout, or Failure with the runner error or
        the raw stderr text
    """
    runner = runner or get_runner()
    argv = [str(token) for token in [tool_name, *tokens]]

    logger.debug("Executing '%s' command:", render_command_line(tokens[:1], tool_name))
    logger.debug(render_command_line(tokens, tool_name))

    with tracer.start_as_current_span("trusted_cert.execute") as span:
        span.set_attribute("trusted_cert.tool", tool_name)
        span.set_attribute("trusted_cert.runner", type(runner).__name__)

        result = await runner.run(argv, prompt=elevation_prompt)

        if result.error is not None:
            span.set_attribute("trusted_cert.outcome", "error")
            logger.debug("Elevated command failed: %s", result.error)
            return Failure(result.error)

        if result.stderr:
            span.set_attribute("trusted_cert.outcome", "stderr")
            logger.debug("Trust store tool reported: %s", result.stderr.strip())
            return Failure(result.stderr)

        span.set_attribute("trusted_cert.outcome", "success")
        return Success(result.stdout)


async def add_trusted_cert(
    options: TrustOperationRequest | Mapping[str, Any] | None = None,
    cert_file: str | None = None,
    *,
    runner: ElevatedRunner | None = None,
    settings: TrustedCertSettings | None = None,
) -> str:
    """
    Add a certificate to the trust settings.

    See ``man security`` (add-trusted-cert).

    Args:
        options: Trust options, as a TrustOperationRequest or a mapping of its fields
        cert_file: Certificate file to add; may also be given as ``options.cert_file``
        runner: Elevated runner; defaults to the configured backend
        settings: Settings; defaults to the environment

    Returns:
        Output of the `security add-trusted-cert` command

    Raises:
        ElevationError: If the elevated command failed or authentication was declined
        ToolError: If the command reported an error on stderr
    """
    settings = settings or get_settings()
    tokens = build_add_trusted_cert_cmd(
        options if options is not None else {},
        cert_file,
        default_keychain=settings.default_keychain,
        scalar_allowed_error_flag=settings.scalar_allowed_error_flag,
    )

    outcome = await execute(
        tokens,
        tool_name=settings.tool_name,
        elevation_prompt=settings.elevation_prompt,
        runner=runner or get_runner(settings=settings),
    )

    if isinstance(outcome, Failure):
        if isinstance(outcome.cause, Exception):
            raise outcome.cause
        raise ToolError(outcome.cause)

    logger.info("Certificate %s added to trust settings", tokens[-1])
    return outcome.output
