"""
Request and outcome models for trust store operations.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Compiled positional arguments for `security add-trusted-cert`
InvocationTokens = list[Any]


class OneOrMany(BaseModel):
    """
    A field that was given either as a single value or as an ordered sequence.

    Each element expands to one flag/value pair, in order. ``is_scalar`` records
    which form the caller used.
    """

    model_config = ConfigDict(frozen=True)

    elements: tuple[Any, ...] = ()
    is_scalar: bool = False

    @classmethod
    def coerce(cls, value: Any) -> OneOrMany | None:
        """Normalize a raw scalar or sequence into a OneOrMany."""
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
            return cls(elements=tuple(value), is_scalar=False)
        return cls(elements=(value,), is_scalar=True)


class TrustOperationRequest(BaseModel):
    """
    Options for adding a trusted certificate.

    Field names follow Python conventions; the camelCase names used by
    ``security``-wrapping tools elsewhere are accepted as aliases. Values are
    passed through as given and unknown options are ignored, so building a
    command from loosely typed options never fails.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    add_to_admin_store: Any = Field(
        default=False,
        validation_alias=AliasChoices("add_to_admin_store", "addToAdminStore", "addToAdminCertStore"),
        description="Add to the admin cert store instead of the per-user trust settings",
    )
    result_type: Any = Field(
        default=None, validation_alias=AliasChoices("result_type", "resultType")
    )
    policy_constraint: OneOrMany | None = Field(
        default=None, validation_alias=AliasChoices("policy_constraint", "policyConstraint")
    )
    app_path: Any = Field(
        default=None,
        validation_alias=AliasChoices("app_path", "appPath"),
        description="Application constraint",
    )
    policy_string: Any = Field(
        default=None,
        validation_alias=AliasChoices("policy_string", "policyString"),
        description="Policy-specific string",
    )
    allowed_error: OneOrMany | None = Field(
        default=None, validation_alias=AliasChoices("allowed_error", "allowedError")
    )
    key_usage_code: Any = Field(
        default=None,
        validation_alias=AliasChoices("key_usage_code", "keyUsageCode"),
        description="Key usage bitmask; add KeyUsageCode values together (except ANY)",
    )
    keychain: Any = Field(
        default=None,
        description="Keychain to which the cert is added; defaults to the System keychain",
    )
    settings_file_in: Any = Field(
        default=None,
        validation_alias=AliasChoices("settings_file_in", "settingsFileIn"),
        description="Input trust settings file",
    )
    settings_file_out: Any = Field(
        default=None,
        validation_alias=AliasChoices("settings_file_out", "settingsFileOut"),
        description="Output trust settings file",
    )
    cert_file: Any = Field(
        default=None,
        validation_alias=AliasChoices("cert_file", "certFile"),
        description="Certificate file (DER or PEM) to add",
    )

    @field_validator("policy_constraint", "allowed_error", mode="before")
    @classmethod
    def _normalize_one_or_many(cls, value: Any) -> OneOrMany | None:
        return OneOrMany.coerce(value)

    @field_validator(
        "app_path", "keychain", "settings_file_in", "settings_file_out", "cert_file", mode="before"
    )
    @classmethod
    def _normalize_path(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @field_validator("key_usage_code", mode="before")
    @classmethod
    def _normalize_key_usage(cls, value: Any) -> Any:
        # Numeric strings such as "8" become ints; anything else is kept as given
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return value
        return value

    def resolved_keychain(self, default: str) -> str:
        """Keychain the certificate goes to: the requested one, or ``default``."""
        return self.keychain or default


@dataclass(frozen=True)
class Success:
    """Elevated command completed; ``output`` is its captured stdout."""

    output: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Elevated command failed; ``cause`` is the runner error or the raw stderr text."""

    cause: Exception | str

    @property
    def ok(self) -> bool:
        return False


ExecutionOutcome = Success | Failure
