"""
Builds the command line options for `security add-trusted-cert`.

The token order is fixed::

    add-trusted-cert [-d] [-r resultType] [-p policy]... [-a appPath]
        [-s policyString] [-e allowedError]... [-u keyUsage] -k keychain
        [-i settingsFileIn] [-o settingsFileOut] certFile

Absent options omit their flags and unknown options are ignored; nothing here
validates paths, strings, types or enum membership, that is left to the
`security` tool.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Any

from trusted_cert.constants import (
    ADMIN_STORE_FLAG,
    ALLOWED_ERROR_FLAG,
    APP_PATH_FLAG,
    DEFAULT_KEYCHAIN,
    KEY_USAGE_FLAG,
    KEYCHAIN_FLAG,
    OPERATION,
    POLICY_CONSTRAINT_FLAG,
    POLICY_STRING_FLAG,
    RESULT_TYPE_FLAG,
    SETTINGS_FILE_IN_FLAG,
    SETTINGS_FILE_OUT_FLAG,
)
from trusted_cert.models import InvocationTokens, OneOrMany, TrustOperationRequest


def _token(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _expand(tokens: InvocationTokens, flag: str, field: OneOrMany | None, scalar_flag: str) -> None:
    """Append one flag/value pair per element, in order."""
    if field is None:
        return
    if field.is_scalar:
        value = field.elements[0]
        if value:
            tokens.extend([scalar_flag, _token(value)])
        return
    for value in field.elements:
        tokens.extend([flag, _token(value)])


def build_add_trusted_cert_cmd(
    request: TrustOperationRequest | Mapping[str, Any],
    cert_file: str | os.PathLike | None = None,
    *,
    default_keychain: str = DEFAULT_KEYCHAIN,
    scalar_allowed_error_flag: str = POLICY_CONSTRAINT_FLAG,
) -> InvocationTokens:
    """
    Build the command options to pass to the `security` command.

    Args:
        request: Trust options, as a TrustOperationRequest or a mapping of its fields
        cert_file: Certificate file to add; falls back to ``request.cert_file``
        default_keychain: Keychain used when the request names none
        scalar_allowed_error_flag: Flag emitted for an allowed error given as a
            single value. Defaults to the policy constraint flag, which is what
            this command has always emitted; pass ``-e`` to use the allowed
            error flag instead.

    Returns:
        Ordered tokens, starting with the operation and ending with the certificate file

    Raises:
        ValueError: If no certificate file is given
    """
    if not isinstance(request, TrustOperationRequest):
        request = TrustOperationRequest.model_validate(dict(request))

    keychain = request.resolved_keychain(default_keychain)
    cert_path = os.fspath(cert_file) if cert_file is not None else request.cert_file
    if not cert_path:
        raise ValueError("A certificate file is required")

    tokens: InvocationTokens = [OPERATION]

    if request.add_to_admin_store:
        tokens.append(ADMIN_STORE_FLAG)

    if request.result_type:
        tokens.extend([RESULT_TYPE_FLAG, _token(request.result_type)])

    _expand(tokens, POLICY_CONSTRAINT_FLAG, request.policy_constraint, POLICY_CONSTRAINT_FLAG)

    if request.app_path:
        tokens.extend([APP_PATH_FLAG, request.app_path])

    if request.policy_string:
        tokens.extend([POLICY_STRING_FLAG, request.policy_string])

    _expand(tokens, ALLOWED_ERROR_FLAG, request.allowed_error, scalar_allowed_error_flag)

    # 0 means no usage was requested, same as unset
    if request.key_usage_code:
        tokens.extend([KEY_USAGE_FLAG, _token(request.key_usage_code)])

    tokens.extend([KEYCHAIN_FLAG, keychain])

    if request.settings_file_in:
        tokens.extend([SETTINGS_FILE_IN_FLAG, request.settings_file_in])

    if request.settings_file_out:
        tokens.extend([SETTINGS_FILE_OUT_FLAG, request.settings_file_out])

    tokens.append(cert_path)

    return tokens
