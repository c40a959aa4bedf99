"""
Constants for the `security add-trusted-cert` command surface.

See `man security` (add-trusted-cert) for what each flag does.
"""

from __future__ import annotations

from enum import Enum, IntEnum

OPERATION = "add-trusted-cert"
DEFAULT_TOOL_NAME = "security"
DEFAULT_KEYCHAIN = "/Library/Keychains/System.keychain"
DEFAULT_ELEVATION_PROMPT = "Keychain access for adding new certificate"

ADMIN_STORE_FLAG = "-d"
RESULT_TYPE_FLAG = "-r"
POLICY_CONSTRAINT_FLAG = "-p"
APP_PATH_FLAG = "-a"
POLICY_STRING_FLAG = "-s"
ALLOWED_ERROR_FLAG = "-e"
KEY_USAGE_FLAG = "-u"
KEYCHAIN_FLAG = "-k"
SETTINGS_FILE_IN_FLAG = "-i"
SETTINGS_FILE_OUT_FLAG = "-o"


class PolicyConstraint(str, Enum):
    """Policies a trust setting can be restricted to."""

    SSL = "ssl"
    SMIME = "smime"
    CODE_SIGN = "codeSign"
    IP_SEC = "ipSec"
    BASIC = "basic"
    SW_UPDATE = "swUpdate"
    PKG_SIGN = "pkgSign"
    EAP = "eap"
    MAC_APP_STORE = "macappstore"
    APPLE_ID = "appleId"
    TIMESTAMPING = "timestamping"


class AllowedError(str, Enum):
    """Validation errors a trust setting can tolerate."""

    CERT_EXPIRED = "certExpired"
    HOSTNAME_MISMATCH = "hostnameMismatch"


class ResultType(str, Enum):
    """Trust disposition assigned to the certificate."""

    # Use for root certificates
    TRUST_ROOT = "trustRoot"
    # Trusts everything signed by the certificate even if it is not a root
    TRUST_AS_ROOT = "trustAsRoot"
    DENY = "deny"
    UNSPECIFIED = "unspecified"


class KeyUsageCode(IntEnum):
    """Key usage flags. Add values together for more than one usage (except ANY)."""

    ANY = -1
    SIGN = 1
    ENCRYPT_DECRYPT_DATA = 2
    ENCRYPT_DECRYPT_KEY = 4
    SIGN_CERTIFICATE = 8
    SIGN_REVOCATION = 16
    KEY_EXCHANGE = 32


def combine_key_usage(*codes: int) -> int:
    """
    Combine key usage flags into a single bitmask.

    Args:
        codes: KeyUsageCode members or raw integer flags

    Returns:
        Combined key usage code

    Raises:
        ValueError: If ANY is combined with other usages
    """
    values = [int(code) for code in codes]
    if KeyUsageCode.ANY in values:
        if len(values) > 1:
            raise ValueError("KeyUsageCode.ANY cannot be combined with other key usages")
        return int(KeyUsageCode.ANY)

    combined = 0
    for value in values:
        # Repeated flags count once
        combined |= value
    return combined
