"""
Elevated command runners.

A runner takes the discrete argv of a command plus a human-readable prompt
label, obtains the privileges needed to run it and reports back
``(error, stdout, stderr)`` as a RunnerResult. Runners never raise for a
failed command; the failure is returned in ``RunnerResult.error``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from trusted_cert.config import ElevationBackend, TrustedCertSettings, get_settings
from trusted_cert.exceptions import ConfigurationError, ElevationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunnerResult:
    """Completion of one elevated command."""

    error: Exception | None = None
    stdout: str = ""
    stderr: str = ""


class ElevatedRunner(Protocol):
    """Anything that can run an argv with elevated privileges."""

    async def run(self, argv: Sequence[str], *, prompt: str) -> RunnerResult: ...


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


class DirectRunner:
    """Runs the command as the current user, without any elevation."""

    def build_argv(self, argv: Sequence[str], prompt: str) -> list[str]:
        return list(argv)

    async def run(self, argv: Sequence[str], *, prompt: str) -> RunnerResult:
        return await self._spawn(self.build_argv(argv, prompt))

    async def _spawn(self, command: list[str]) -> RunnerResult:
        logger.debug("Spawning %s", command[0])

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            logger.error("Failed to start %s: %s", command[0], e)
            return RunnerResult(error=ElevationError(f"Failed to start {command[0]}: {e}", argv=command))

        stdout_data, stderr_data = await process.communicate()
        stdout = _decode(stdout_data)
        stderr = _decode(stderr_data)

        if process.returncode != 0:
            detail = stderr.strip() or stdout.strip() or "no output"
            error = ElevationError(
                f"Command failed with exit code {process.returncode}: {detail}",
                argv=command,
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )
            return RunnerResult(error=error, stdout=stdout, stderr=stderr)

        return RunnerResult(stdout=stdout, stderr=stderr)


class SudoRunner(DirectRunner):
    """
    Runs the command through sudo.

    The prompt label is shown as sudo's password prompt. When the process is
    already running as root the command runs directly.
    """

    def __init__(self, sudo_path: str = "sudo") -> None:
        self.sudo_path = sudo_path

    def _is_root(self) -> bool:
        return os.geteuid() == 0

    def build_argv(self, argv: Sequence[str], prompt: str) -> list[str]:
        if self._is_root():
            return list(argv)
        # sudo expands %-sequences in the prompt
        sudo_prompt = prompt.replace("%", "%%") + ": "
        return [self.sudo_path, "-p", sudo_prompt, "--", *argv]


def _applescript_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class OsascriptRunner(DirectRunner):
    """
    Runs the command through the macOS administrator authentication dialog.

    AppleScript's ``do shell script`` needs a single shell string, so every
    token is quoted with shlex before joining. It only returns the command's
    stdout, so the command's stderr is redirected to a temporary file and read
    back after completion.
    """

    def __init__(self, osascript_path: str = "/usr/bin/osascript") -> None:
        self.osascript_path = osascript_path

    async def run(self, argv: Sequence[str], *, prompt: str) -> RunnerResult:
        fd, stderr_path = tempfile.mkstemp(prefix="trusted-cert-", suffix=".stderr")
        os.close(fd)
        try:
            result = await self._spawn(self.build_argv(argv, prompt, stderr_path=stderr_path))
            with open(stderr_path, encoding="utf-8", errors="replace") as f:
                command_stderr = f.read()
        finally:
            os.unlink(stderr_path)

        stdout = result.stdout
        # osascript prints the script result followed by a newline of its own
        if stdout.endswith("\n"):
            stdout = stdout[:-1]

        return RunnerResult(error=result.error, stdout=stdout, stderr=command_stderr + result.stderr)

    def build_argv(
        self, argv: Sequence[str], prompt: str, stderr_path: str | None = None
    ) -> list[str]:
        shell_command = " ".join(shlex.quote(str(arg)) for arg in argv)
        if stderr_path is not None:
            shell_command = f"{shell_command} 2>{shlex.quote(stderr_path)}"
        script = (
            f"do shell script {_applescript_string(shell_command)} "
            f"with prompt {_applescript_string(prompt)} "
            "with administrator privileges without altering line endings"
        )
        return [self.osascript_path, "-e", script]


def get_runner(
    backend: ElevationBackend | str | None = None,
    settings: TrustedCertSettings | None = None,
) -> ElevatedRunner:
    """
    Create the runner for an elevation backend.

    Args:
        backend: Backend name; defaults to the configured backend
        settings: Settings to read backend paths from

    Returns:
        Runner instance

    Raises:
        ConfigurationError: If the backend is unknown
    """
    settings = settings or get_settings()
    try:
        backend = ElevationBackend(backend or settings.elevation_backend)
    except ValueError as e:
        raise ConfigurationError(f"Unknown elevation backend: {backend!r}") from e

    if backend is ElevationBackend.SUDO:
        return SudoRunner(settings.sudo_path)
    if backend is ElevationBackend.OSASCRIPT:
        return OsascriptRunner(settings.osascript_path)
    return DirectRunner()
