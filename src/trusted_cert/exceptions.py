"""
Custom exceptions for trust store operations.
"""

from __future__ import annotations

from collections.abc import Sequence


class TrustStoreError(Exception):
    """Base exception class for trust store operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(TrustStoreError):
    """Exception raised for configuration-related errors."""


class ElevationError(TrustStoreError):
    """
    Exception raised when the elevated command could not run to completion.

    Covers a declined or cancelled authentication prompt, a missing binary,
    and a non-zero exit status of the elevated process.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] | None = None,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = list(argv) if argv is not None else []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ToolError(TrustStoreError):
    """Exception raised when the trust store tool reports a failure on its error stream."""

    def __init__(self, stderr: str) -> None:
        super().__init__(stderr.strip() or "Trust store tool reported an error.")
        self.stderr = stderr
