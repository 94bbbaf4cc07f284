"""
NanoCamo - Key Derivation Hashes
==================================
Catena di hash per la derivazione deterministica delle chiavi.

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

Funzioni (composte da BLAKE2b-256 "H" e BLAKE2b-512 "H64"):

    H_category(x, i) = H(i_be32 || x)          separazione per categoria
    H_seed(x, i)     = H(x || i_be32)          separazione per indice
    H_s(x)           = clamp(H64(x)[0:32])     hash -> scalare (ridotto mod l)
    H_si(x, i)       = H_s(H_seed(x, i))       scalare indicizzato

Derivazione wallet (funzione pura del seed):

    s_spend  = H_category(seed, 0)
    s_view   = H_category(seed, 1)
    k_master = H_si(s_spend, 0)
    s        = H64(H_seed(s_view, i))          64 bytes
    k_spend  = k_master + H_s(s[0:32])
    k_view   = H_s(s[32:64])

Tutti i segreti intermedi sono restituiti come SecretBytes/SecretScalar.
"""

from typing import Tuple

from nano_camo.constants import (
    MASTER_SPEND_INDEX,
    MAX_ACCOUNT_INDEX,
    SCALAR_SIZE,
    SEED_SIZE,
    SPEND_CONSTANTS_X_INDEX,
    VIEW_CONSTANTS_X_INDEX,
)
from nano_camo.domain.crypto_core import blake2b_256, blake2b_512
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.errors import InvalidSeedLengthError, format_validation_error


# ============================================================================
# INPUT VALIDATION
# ============================================================================

def validate_seed(seed) -> SecretBytes:
    """
    Verifica che il seed sia di 32 bytes.

    Accetta SecretBytes o bytes-like; i bytes-like vengono incapsulati
    (un `bytearray` viene azzerato dopo la copia).

    Raises:
        InvalidSeedLengthError: Se la lunghezza non è 32
    """
    if len(seed) != SEED_SIZE:
        raise InvalidSeedLengthError(
            f"Seed must be {SEED_SIZE} bytes, got {len(seed)}",
            code="INVALID_SEED_LENGTH",
            details={"expected": SEED_SIZE, "got": len(seed)}
        )
    if isinstance(seed, SecretBytes):
        return seed
    return SecretBytes(seed)


def validate_index(index: int) -> int:
    """Indice account u32"""
    if not isinstance(index, int) or not (0 <= index <= MAX_ACCOUNT_INDEX):
        raise format_validation_error(
            "index", index, f"integer in [0, {MAX_ACCOUNT_INDEX}]",
            code="INVALID_INDEX"
        )
    return index


def _be32(index: int) -> bytes:
    return validate_index(index).to_bytes(4, byteorder="big")


# ============================================================================
# HASH CHAIN
# ============================================================================

def h_category(secret: SecretBytes, index: int) -> SecretBytes:
    """H_category(x, i) = BLAKE2b-256(i_be32 || x)"""
    return SecretBytes(blake2b_256(_be32(index) + secret.expose_secret()))


def h_seed(secret: SecretBytes, index: int) -> SecretBytes:
    """H_seed(x, i) = BLAKE2b-256(x || i_be32)"""
    return SecretBytes(blake2b_256(secret.expose_secret() + _be32(index)))


def blake2b_scalar(data: bytes) -> SecretScalar:
    """
    H_s(x): primi 32 bytes di BLAKE2b-512(x), clamped e ridotti mod l.

    Args:
        data: Input arbitrario (bytes o SecretBytes)

    Returns:
        SecretScalar: Scalare canonico
    """
    if isinstance(data, SecretBytes):
        data = data.expose_secret()
    digest = bytearray(blake2b_512(data))
    try:
        return SecretScalar.from_clamped(digest[:SCALAR_SIZE])
    finally:
        digest[:] = bytes(len(digest))


h_s = blake2b_scalar


def h_si(secret: SecretBytes, index: int) -> SecretScalar:
    """H_si(x, i) = H_s(H_seed(x, i))"""
    with h_seed(secret, index) as seeded:
        return blake2b_scalar(seeded)


# ============================================================================
# NANO ACCOUNT DERIVATION
# ============================================================================

def get_account_seed(seed: SecretBytes, index: int) -> SecretBytes:
    """Seed per-account standard Nano: H_seed(seed, i)"""
    return h_seed(validate_seed(seed), index)


def get_account_scalar(seed: SecretBytes, index: int) -> SecretScalar:
    """Chiave privata per-account standard Nano: H_si(seed, i)"""
    return h_si(validate_seed(seed), index)


# ============================================================================
# CAMO WALLET DERIVATION
# ============================================================================

def get_camo_spend_seed(master_seed: SecretBytes) -> SecretBytes:
    """s_spend = H_category(seed, 0)"""
    return h_category(validate_seed(master_seed), SPEND_CONSTANTS_X_INDEX)


def get_camo_view_seed(master_seed: SecretBytes) -> SecretBytes:
    """s_view = H_category(seed, 1)"""
    return h_category(validate_seed(master_seed), VIEW_CONSTANTS_X_INDEX)


def get_master_spend_scalar(spend_seed: SecretBytes) -> SecretScalar:
    """k_master = H_si(s_spend, 0)"""
    return h_si(validate_seed(spend_seed), MASTER_SPEND_INDEX)


def get_partial_keys(view_seed: SecretBytes, index: int) -> Tuple[SecretScalar, SecretScalar]:
    """
    Scalari parziali per l'indice i.

    s = H64(H_seed(s_view, i)); restituisce (H_s(s[0:32]), H_s(s[32:64])).
    Il primo, sommato a k_master, dà k_spend; il secondo è k_view.

    Args:
        view_seed: s_view (32 bytes)
        index: Indice account u32

    Returns:
        Tuple[SecretScalar, SecretScalar]: (partial_spend, k_view)
    """
    with h_seed(validate_seed(view_seed), index) as account_seed:
        with SecretBytes(blake2b_512(account_seed.expose_secret())) as wide:
            with wide.first_half() as spend_half, wide.second_half() as view_half:
                return blake2b_scalar(spend_half), blake2b_scalar(view_half)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "validate_seed",
    "validate_index",
    "h_category",
    "h_seed",
    "h_s",
    "h_si",
    "blake2b_scalar",
    "get_account_seed",
    "get_account_scalar",
    "get_camo_spend_seed",
    "get_camo_view_seed",
    "get_master_spend_scalar",
    "get_partial_keys",
]
