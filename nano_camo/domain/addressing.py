"""
NanoCamo - Address Checksum & Nano Accounts
=============================================
Checksum address e formato account `nano_`.

Security Level: HIGH
Last Updated: 2026-10-19
Version: 1.0.0

Checksum:
- BLAKE2b con digest da 5 bytes, byte order invertito (convenzione Nano)
- Solo detection di typo/corruzione, non integrità contro manomissioni

Nano Account Format:
- Prefisso: "nano_"
- Payload: base32(public_key (32) || checksum (5)) = 60 caratteri
- Il primo carattere è sempre '1' o '3' (4 bit di padding a zero)

Example Account: nano_3t6k35gi95xu6tergt6p69ck76ogmitsa8mnijtpxm9fkcm736xtoncuohr3
"""

import hmac

from nano_camo.constants import (
    ACCOUNT_LENGTH,
    ACCOUNT_PREFIX,
    CHECKSUM_SIZE,
    POINT_SIZE,
)
from nano_camo.domain.crypto_core import blake2b_checksum
from nano_camo.domain.points import PublicPoint
from nano_camo.errors import (
    ChecksumMismatchError,
    InvalidAddressLengthError,
    InvalidAddressPrefixError,
    NanoCamoException,
)
from nano_camo.logging_setup import get_logger
from nano_camo.utils.base32 import base32_decode, base32_encode


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("addressing")


# ============================================================================
# CHECKSUM
# ============================================================================

def compute_checksum(data: bytes) -> bytes:
    """
    Checksum address da 5 bytes.

    Args:
        data: Payload da proteggere

    Returns:
        bytes: 5 bytes (digest BLAKE2b-40 invertito)

    Examples:
        >>> compute_checksum(b"test").hex()
        'ba21eb28d2'
    """
    return blake2b_checksum(data)[::-1]


def verify_checksum(data: bytes, checksum: bytes) -> bool:
    """Confronto constant-time del checksum"""
    if len(checksum) != CHECKSUM_SIZE:
        return False
    return hmac.compare_digest(compute_checksum(data), checksum)


# ============================================================================
# NANO ACCOUNTS
# ============================================================================

def public_key_to_account(public_key: PublicPoint) -> str:
    """
    Converte public key in account `nano_`.

    Args:
        public_key: Punto ed25519

    Returns:
        str: Account (65 caratteri)
    """
    key = bytes(public_key)
    return ACCOUNT_PREFIX + base32_encode(key + compute_checksum(key))


def account_to_public_key(account: str) -> PublicPoint:
    """
    Decodifica account `nano_` in public key.

    Args:
        account: Account string

    Returns:
        PublicPoint: Public key

    Raises:
        InvalidAddressLengthError: Lunghezza diversa da 65
        InvalidAddressPrefixError: Prefisso diverso da "nano_"
        DecodeError: Base32 invalido
        ChecksumMismatchError: Checksum errato
        InvalidPointError: Key non valida
    """
    if len(account) != ACCOUNT_LENGTH:
        raise InvalidAddressLengthError(
            f"Invalid account length: {len(account)}",
            code="INVALID_ACCOUNT_LENGTH",
            details={"expected": ACCOUNT_LENGTH, "got": len(account)}
        )

    if not account.startswith(ACCOUNT_PREFIX):
        raise InvalidAddressPrefixError(
            f"Account must start with '{ACCOUNT_PREFIX}'",
            code="INVALID_ACCOUNT_PREFIX"
        )

    data = base32_decode(account[len(ACCOUNT_PREFIX):])
    key, checksum = data[:POINT_SIZE], data[POINT_SIZE:]

    if not verify_checksum(key, checksum):
        logger.debug("Account checksum mismatch", extra_data={"account": account[:16]})
        raise ChecksumMismatchError(
            "Invalid account checksum",
            code="CHECKSUM_MISMATCH"
        )

    return PublicPoint.from_bytes(key)


def is_valid_account(account: str) -> bool:
    """True se l'account `nano_` è decodificabile"""
    try:
        account_to_public_key(account)
        return True
    except NanoCamoException:
        return False


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "compute_checksum",
    "verify_checksum",
    "public_key_to_account",
    "account_to_public_key",
    "is_valid_account",
]
