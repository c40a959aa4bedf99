"""Add certificates to the macOS trust settings with `security add-trusted-cert`."""

from trusted_cert.compiler import build_add_trusted_cert_cmd
from trusted_cert.constants import (
    AllowedError,
    KeyUsageCode,
    PolicyConstraint,
    ResultType,
    combine_key_usage,
)
from trusted_cert.exceptions import ConfigurationError, ElevationError, ToolError, TrustStoreError
from trusted_cert.executor import add_trusted_cert, execute
from trusted_cert.models import Failure, OneOrMany, Success, TrustOperationRequest

__all__ = [
    "AllowedError",
    "ConfigurationError",
    "ElevationError",
    "Failure",
    "KeyUsageCode",
    "OneOrMany",
    "PolicyConstraint",
    "ResultType",
    "Success",
    "ToolError",
    "TrustOperationRequest",
    "TrustStoreError",
    "add_trusted_cert",
    "build_add_trusted_cert_cmd",
    "combine_key_usage",
    "execute",
]
