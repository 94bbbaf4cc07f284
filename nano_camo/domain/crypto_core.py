"""
NanoCamo - Cryptographic Core Layer
=====================================
Layer crittografico di basso livello: hash BLAKE2b e aritmetica ed25519.

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

SECURITY NOTICE:
Questo modulo espone primitive crittografiche critiche.
Ogni modifica deve essere sottoposta a security audit.

Algorithms:
- Hash: BLAKE2b (512, 256, 40 bit)
- Curve: ed25519 (scalari little-endian da 32 bytes, punti compressi da 32 bytes)

Dependencies:
- pynacl (libsodium, aritmetica constant-time su scalari e punti)
- hashlib (stdlib)

Tutte le funzioni curve lavorano su `bytes` e sono pure. I wrapper
con semantica di azzeramento stanno in `nano_camo.domain.secret_scalar`.
"""

import hashlib
import secrets
from typing import Optional

import nacl.bindings
import nacl.exceptions

from nano_camo.constants import (
    CHECKSUM_SIZE,
    ED25519_ORDER,
    POINT_SIZE,
    SCALAR_SIZE,
    WIDE_SCALAR_SIZE,
)
from nano_camo.errors import (
    CryptoError,
    InvalidPointError,
    InvalidScalarError,
)
from nano_camo.logging_setup import get_logger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("crypto")


# ============================================================================
# HASH FUNCTIONS
# ============================================================================

def compute_blake2b(
    data: bytes,
    digest_size: int = 32,
    key: Optional[bytes] = None,
    salt: Optional[bytes] = None
) -> bytes:
    """
    Compute BLAKE2b hash.

    Il digest_size entra nel parameter block di BLAKE2b: un digest da
    5 bytes NON è il troncamento di un digest da 64.

    Args:
        data: Input data
        digest_size: Output size in bytes (1-64, default 32)
        key: Optional key per keyed hashing
        salt: Optional salt per personalizzazione

    Returns:
        bytes: Hash digest

    Examples:
        >>> compute_blake2b(b"test", digest_size=5).hex()
        'd228eb21ba'
    """
    if not isinstance(data, (bytes, bytearray)):
        raise CryptoError(
            f"compute_blake2b requires bytes, got {type(data).__name__}",
            code="INVALID_INPUT_TYPE"
        )

    if not (1 <= digest_size <= 64):
        raise CryptoError(
            f"Invalid digest_size: {digest_size}. Must be 1-64",
            code="INVALID_DIGEST_SIZE"
        )

    return hashlib.blake2b(
        data,
        digest_size=digest_size,
        key=key or b'',
        salt=salt or b''
    ).digest()


def blake2b_512(data: bytes) -> bytes:
    """BLAKE2b con digest da 64 bytes (H64)"""
    return compute_blake2b(data, digest_size=64)


def blake2b_256(data: bytes) -> bytes:
    """BLAKE2b con digest da 32 bytes (H)"""
    return compute_blake2b(data, digest_size=32)


def blake2b_checksum(data: bytes) -> bytes:
    """BLAKE2b con digest da 5 bytes, nell'ordine prodotto dall'hash"""
    return compute_blake2b(data, digest_size=CHECKSUM_SIZE)


# ============================================================================
# SCALAR ARITHMETIC (mod l)
# ============================================================================

def clamp_integer(candidate: bytes) -> bytearray:
    """
    Clamping standard curve25519/ed25519.

    - 3 bit bassi del primo byte azzerati (multiplo del cofattore)
    - bit alto dell'ultimo byte azzerato
    - secondo bit alto dell'ultimo byte impostato

    Args:
        candidate: 32 bytes little-endian

    Returns:
        bytearray: Copia clamped (il chiamante la può azzerare)
    """
    _require_length(candidate, SCALAR_SIZE, "scalar candidate", InvalidScalarError)
    clamped = bytearray(candidate)
    clamped[0] &= 0b11111000
    clamped[31] &= 0b01111111
    clamped[31] |= 0b01000000
    return clamped


def scalar_reduce(data: bytes) -> bytes:
    """
    Riduce 32 o 64 bytes little-endian modulo l.

    Args:
        data: 32 bytes (mod order) o 64 bytes (mod order wide)

    Returns:
        bytes: Scalare canonico da 32 bytes
    """
    if len(data) == SCALAR_SIZE:
        data = bytes(data) + b"\x00" * SCALAR_SIZE
    elif len(data) != WIDE_SCALAR_SIZE:
        raise InvalidScalarError(
            f"Scalar input must be {SCALAR_SIZE} or {WIDE_SCALAR_SIZE} bytes, got {len(data)}",
            code="INVALID_SCALAR_LENGTH"
        )
    return nacl.bindings.crypto_core_ed25519_scalar_reduce(bytes(data))


def scalar_is_canonical(data: bytes) -> bool:
    """True se data codifica un intero < l"""
    return len(data) == SCALAR_SIZE and int.from_bytes(data, "little") < ED25519_ORDER


def scalar_add(a: bytes, b: bytes) -> bytes:
    """(a + b) mod l"""
    return nacl.bindings.crypto_core_ed25519_scalar_add(bytes(a), bytes(b))


def scalar_sub(a: bytes, b: bytes) -> bytes:
    """(a - b) mod l"""
    return nacl.bindings.crypto_core_ed25519_scalar_sub(bytes(a), bytes(b))


def scalar_mul(a: bytes, b: bytes) -> bytes:
    """(a * b) mod l"""
    return nacl.bindings.crypto_core_ed25519_scalar_mul(bytes(a), bytes(b))


# ============================================================================
# POINT ARITHMETIC
# ============================================================================

def is_valid_point(data: bytes) -> bool:
    """
    Verifica encoding punto ed25519.

    Valido = 32 bytes, canonico, sulla curva, nel sottogruppo di ordine primo
    (rifiuta anche i punti di ordine piccolo).
    """
    if not isinstance(data, (bytes, bytearray)) or len(data) != POINT_SIZE:
        return False
    return bool(nacl.bindings.crypto_core_ed25519_is_valid_point(bytes(data)))


def scalar_mult_base(scalar: bytes) -> bytes:
    """
    scalar·G senza clamping.

    Raises:
        CryptoError: Se lo scalare è 0 mod l (punto all'infinito)
    """
    try:
        return nacl.bindings.crypto_scalarmult_ed25519_base_noclamp(bytes(scalar))
    except nacl.exceptions.CryptoError as e:
        raise CryptoError(
            "Scalar multiplication by generator failed",
            code="SCALARMULT_FAILED"
        ) from e


def scalar_mult(scalar: bytes, point: bytes) -> bytes:
    """
    scalar·P senza clamping.

    Raises:
        InvalidPointError: Se P non è un punto valido
        CryptoError: Se il risultato è il punto all'infinito
    """
    if not is_valid_point(point):
        raise InvalidPointError("Invalid ed25519 point", code="INVALID_POINT")
    try:
        return nacl.bindings.crypto_scalarmult_ed25519_noclamp(bytes(scalar), bytes(point))
    except nacl.exceptions.CryptoError as e:
        logger.warning("Scalar multiplication rejected by libsodium", extra_data={"error": str(e)})
        raise CryptoError(
            "Scalar multiplication failed",
            code="SCALARMULT_FAILED"
        ) from e


def point_add(p: bytes, q: bytes) -> bytes:
    """P + Q"""
    try:
        return nacl.bindings.crypto_core_ed25519_add(bytes(p), bytes(q))
    except nacl.exceptions.CryptoError as e:
        raise InvalidPointError("Point addition failed", code="INVALID_POINT") from e


def point_sub(p: bytes, q: bytes) -> bytes:
    """P - Q"""
    try:
        return nacl.bindings.crypto_core_ed25519_sub(bytes(p), bytes(q))
    except nacl.exceptions.CryptoError as e:
        raise InvalidPointError("Point subtraction failed", code="INVALID_POINT") from e


# ============================================================================
# RANDOM GENERATION
# ============================================================================

def generate_random_bytes(length: int) -> bytes:
    """
    Genera bytes casuali crittograficamente sicuri (CSPRNG).

    Args:
        length: Numero di bytes

    Returns:
        bytes: Random bytes
    """
    if length <= 0:
        raise CryptoError(f"Invalid random length: {length}", code="INVALID_LENGTH")
    return secrets.token_bytes(length)


# ============================================================================
# HELPERS
# ============================================================================

def _require_length(data: bytes, expected: int, what: str, error_cls=CryptoError) -> None:
    if len(data) != expected:
        raise error_cls(
            f"Invalid {what} length: expected {expected} bytes, got {len(data)}",
            details={"expected": expected, "got": len(data)}
        )


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "compute_blake2b",
    "blake2b_512",
    "blake2b_256",
    "blake2b_checksum",
    "clamp_integer",
    "scalar_reduce",
    "scalar_is_canonical",
    "scalar_add",
    "scalar_sub",
    "scalar_mul",
    "is_valid_point",
    "scalar_mult_base",
    "scalar_mult",
    "point_add",
    "point_sub",
    "generate_random_bytes",
]
