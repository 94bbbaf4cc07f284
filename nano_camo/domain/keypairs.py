"""
NanoCamo - Nano Keys, Accounts & Signatures
=============================================
Chiavi private (Key), account pubblici (Account) e firme Ed25519/BLAKE2b.

Security Level: HIGH
Last Updated: 2026-10-19
Version: 1.0.0

Firma (variante Nano di Ed25519, hash BLAKE2b-512):

    r = H_s(a || m)
    R = r·G
    h = BLAKE2b-512(R || A || m) mod l
    s = r + h·a

Verifica: s·G == R + h·A
"""

from dataclasses import dataclass
from typing import Union

from nano_camo.constants import POINT_SIZE, SIGNATURE_SIZE
from nano_camo.domain.addressing import (
    account_to_public_key,
    is_valid_account,
    public_key_to_account,
)
from nano_camo.domain.crypto_core import blake2b_512, scalar_is_canonical
from nano_camo.domain.hashes import blake2b_scalar, get_account_scalar
from nano_camo.domain.points import PublicPoint
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.errors import CryptoError, InvalidScalarError
from nano_camo.logging_setup import get_logger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("keys")


# ============================================================================
# ACCOUNT
# ============================================================================

class Account:
    """
    Account Nano pubblico: punto ed25519 + rappresentazione `nano_`.

    Value type immutabile, hashable, confrontabile.

    Examples:
        >>> account = Account.from_string("nano_3t6k35gi95xu6tergt6p69ck76ogmitsa8mnijtpxm9fkcm736xtoncuohr3")
        >>> account == Account.from_point(account.point)
        True
    """

    __slots__ = ("_point", "_account")

    def __init__(self, point: PublicPoint):
        self._point = point
        self._account = public_key_to_account(point)

    @classmethod
    def from_point(cls, point: PublicPoint) -> "Account":
        return cls(point)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Account":
        """Da public key compressa (32 bytes), con validazione"""
        return cls(PublicPoint.from_bytes(data))

    @classmethod
    def from_string(cls, account: str) -> "Account":
        """
        Parse account `nano_`.

        Raises:
            AddressError / DecodeError / InvalidPointError
        """
        return cls(account_to_public_key(account))

    @staticmethod
    def is_valid(account: str) -> bool:
        return is_valid_account(account)

    @property
    def point(self) -> PublicPoint:
        return self._point

    @property
    def public_key(self) -> bytes:
        return bytes(self._point)

    def is_valid_signature(self, message: bytes, signature: "Signature") -> bool:
        """Verifica firma sul messaggio"""
        return signature.is_valid(message, self)

    def __add__(self, other: "Account") -> "Account":
        if not isinstance(other, Account):
            return NotImplemented
        return Account(self._point + other._point)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._account)

    def __str__(self) -> str:
        return self._account

    def __repr__(self) -> str:
        return f"Account({self._account})"


# ============================================================================
# KEY
# ============================================================================

class Key:
    """
    Chiave privata Nano (scalare segreto).

    Possiede il proprio SecretScalar: `wipe()` o l'uscita da un blocco
    `with` lo azzerano.
    """

    __slots__ = ("_private",)

    def __init__(self, private: SecretScalar):
        if not isinstance(private, SecretScalar):
            raise InvalidScalarError(
                f"Key requires SecretScalar, got {type(private).__name__}",
                code="INVALID_KEY_TYPE"
            )
        self._private = private

    @classmethod
    def from_seed(cls, seed: Union[bytes, SecretBytes], index: int) -> "Key":
        """Chiave all'indice `index` del seed (derivazione Nano standard)"""
        return cls(get_account_scalar(seed, index))

    @classmethod
    def from_scalar(cls, scalar: SecretScalar) -> "Key":
        return cls(scalar)

    def as_scalar(self) -> SecretScalar:
        return self._private

    def to_account(self) -> Account:
        return Account(self._private.multiply_base())

    def sign_message(self, message: bytes) -> "Signature":
        """
        Firma deterministica del messaggio.

        Args:
            message: Bytes da firmare (es. hash di un blocco)

        Returns:
            Signature: (R, s)
        """
        with blake2b_scalar(self._private.expose_secret() + bytes(message)) as r:
            return sign_message_with_r(message, self, r)

    def copy(self) -> "Key":
        return Key(self._private.copy())

    def wipe(self) -> None:
        self._private.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __add__(self, other: "Key") -> "Key":
        if not isinstance(other, Key):
            return NotImplemented
        return Key(self._private + other._private)

    def __sub__(self, other: "Key") -> "Key":
        if not isinstance(other, Key):
            return NotImplemented
        return Key(self._private - other._private)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self._private == other._private

    __hash__ = None

    def __repr__(self) -> str:
        return "Key([secret value])"


# ============================================================================
# SIGNATURE
# ============================================================================

@dataclass(frozen=True)
class Signature:
    """
    Firma Ed25519/BLAKE2b.

    Attributes:
        r: Punto R (32 bytes compressi)
        s: Scalare s (32 bytes little-endian, canonico)
    """
    r: PublicPoint
    s: bytes

    def to_bytes(self) -> bytes:
        """R || s (64 bytes)"""
        return bytes(self.r) + self.s

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        """
        Decode 64 bytes.

        Raises:
            CryptoError: Lunghezza errata
            InvalidPointError: R non valido
            InvalidScalarError: s non canonico
        """
        if len(data) != SIGNATURE_SIZE:
            raise CryptoError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(data)}",
                code="INVALID_SIGNATURE_LENGTH"
            )
        r = PublicPoint.from_bytes(data[:POINT_SIZE])
        s = bytes(data[POINT_SIZE:])
        if not scalar_is_canonical(s):
            raise InvalidScalarError("Signature scalar is not canonical", code="NON_CANONICAL_SCALAR")
        return cls(r=r, s=s)

    def hex(self) -> str:
        return self.to_bytes().hex()

    def is_valid(self, message: bytes, account: Account) -> bool:
        """s·G == R + h·A"""
        h = _challenge(self.r, account.point, message)
        try:
            with h:
                lhs = SecretScalar(self.s).multiply_base()
                rhs = self.r + (h * account.point)
        except CryptoError as e:
            logger.debug("Signature rejected", extra_data={"reason": e.code})
            return False
        return lhs == rhs


def sign_message_with_r(message: bytes, key: Key, r: SecretScalar) -> Signature:
    """
    Firma con nonce `r` esplicito.

    ATTENZIONE: riusare `r` su messaggi diversi rivela la chiave privata.
    """
    r_point = r.multiply_base()
    public_point = key.as_scalar().multiply_base()
    with _challenge(r_point, public_point, message) as h:
        with h * key.as_scalar() as ha:
            s = r + ha
    try:
        return Signature(r=r_point, s=s.expose_secret())
    finally:
        s.wipe()


def _challenge(r_point: PublicPoint, public_point: PublicPoint, message: bytes) -> SecretScalar:
    """h = BLAKE2b-512(R || A || m) mod l"""
    digest = blake2b_512(bytes(r_point) + bytes(public_point) + bytes(message))
    return SecretScalar.from_bytes_mod_order_wide(digest)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "Account",
    "Key",
    "Signature",
    "sign_message_with_r",
]
