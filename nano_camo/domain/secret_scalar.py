"""
NanoCamo - Secret Values
==========================
Wrapper per materiale segreto con azzeramento deterministico.

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

Contratto:
- I bytes vivono in un `bytearray` privato, azzerato da `wipe()`,
  all'uscita da un blocco `with` e alla garbage collection.
- `copy()` alloca storage nuovo e indipendente (nessun aliasing).
- `repr()`/`str()` non rivelano mai il valore; pickling vietato.
- L'unico accesso in chiaro è `expose_secret()`, esplicito.

Limite noto: gli oggetti `bytes` immutabili passati a libsodium o
restituiti da `expose_secret()` non sono azzerabili da Python. Per
questo la loro vita è limitata alla singola chiamata.
"""

import hmac
from typing import Union

from nano_camo.constants import SCALAR_SIZE, WIDE_SCALAR_SIZE
from nano_camo.domain.crypto_core import (
    clamp_integer,
    scalar_add,
    scalar_is_canonical,
    scalar_mul,
    scalar_mult,
    scalar_mult_base,
    scalar_reduce,
    scalar_sub,
)
from nano_camo.domain.points import PublicPoint
from nano_camo.errors import InvalidScalarError, SecretReleasedError


BytesLike = Union[bytes, bytearray, memoryview]


# ============================================================================
# SECRET BYTES
# ============================================================================

class SecretBytes:
    """
    Sequenza di bytes segreta a lunghezza fissa.

    Se l'input è un `bytearray` viene azzerato dopo la copia: il wrapper
    ne prende possesso.

    Examples:
        >>> with SecretBytes(bytes(32)) as seed:
        ...     derive(seed)
        # seed azzerato qui
    """

    __slots__ = ("_buffer", "_released", "__weakref__")

    def __init__(self, data: BytesLike, size: int = None):
        if size is not None and len(data) != size:
            raise InvalidScalarError(
                f"Secret must be {size} bytes, got {len(data)}",
                code="INVALID_SECRET_LENGTH",
                details={"expected": size, "got": len(data)}
            )
        self._buffer = bytearray(data)
        self._released = False
        if isinstance(data, bytearray):
            _zero(data)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def expose_secret(self) -> bytes:
        """Copia in chiaro del valore. Usare solo dove serve davvero."""
        self._check_alive()
        return bytes(self._buffer)

    def slice(self, start: int, end: int) -> "SecretBytes":
        """Sotto-sequenza [start:end] in un nuovo SecretBytes"""
        self._check_alive()
        if not (0 <= start <= end <= len(self._buffer)):
            raise ValueError(f"Invalid slice [{start}:{end}] of {len(self._buffer)} bytes")
        return SecretBytes(self._buffer[start:end])

    def first_half(self) -> "SecretBytes":
        """Bytes [0 : n/2]"""
        return self.slice(0, len(self) // 2)

    def second_half(self) -> "SecretBytes":
        """Bytes [n/2 : n]"""
        return self.slice(len(self) // 2, len(self))

    @property
    def released(self) -> bool:
        return self._released

    def __len__(self) -> int:
        return len(self._buffer)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def copy(self):
        """Duplicazione esplicita con storage indipendente"""
        self._check_alive()
        clone = object.__new__(type(self))
        clone._buffer = bytearray(self._buffer)
        clone._released = False
        return clone

    def wipe(self) -> None:
        """Azzera lo storage. Idempotente."""
        buffer = getattr(self, "_buffer", None)
        if buffer is not None:
            _zero(buffer)
        self._released = True

    def __enter__(self):
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __del__(self):
        self.wipe()

    def _check_alive(self) -> None:
        if self._released:
            raise SecretReleasedError(
                f"{type(self).__name__} has been wiped",
                code="SECRET_RELEASED"
            )

    # ------------------------------------------------------------------
    # Comparison / representation
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, SecretBytes):
            return NotImplemented
        self._check_alive()
        other._check_alive()
        return hmac.compare_digest(self._buffer, other._buffer)

    __hash__ = None

    def __repr__(self) -> str:
        state = "wiped" if self._released else "secret value"
        return f"{type(self).__name__}(size={len(self._buffer)}, [{state}])"

    __str__ = __repr__

    def __format__(self, format_spec: str) -> str:
        return repr(self)

    def __reduce__(self):
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()


# ============================================================================
# SECRET SCALAR
# ============================================================================

class SecretScalar(SecretBytes):
    """
    Scalare ed25519 segreto, sempre in forma canonica (ridotta mod l).

    Costruttori:
        - from_bytes_mod_order(32 bytes): riduzione mod l
        - from_bytes_mod_order_wide(64 bytes): riduzione wide mod l
        - from_clamped(32 bytes): clamping + riduzione
        - from_canonical_bytes(32 bytes): deve essere già < l
        - from_secret(SecretBytes): 32 -> clamping, 64 -> wide

    Operazioni (delegate a libsodium):
        - a + b, a - b, a * b (mod l)
        - a.multiply_base() = a·G
        - a * P = a·P
    """

    __slots__ = ()

    def __init__(self, data: BytesLike):
        super().__init__(data, size=SCALAR_SIZE)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes_mod_order(cls, data: BytesLike) -> "SecretScalar":
        _check_size(data, SCALAR_SIZE)
        return cls._from_reduced(scalar_reduce(bytes(data)), data)

    @classmethod
    def from_bytes_mod_order_wide(cls, data: BytesLike) -> "SecretScalar":
        _check_size(data, WIDE_SCALAR_SIZE)
        return cls._from_reduced(scalar_reduce(bytes(data)), data)

    @classmethod
    def from_clamped(cls, data: BytesLike) -> "SecretScalar":
        _check_size(data, SCALAR_SIZE)
        clamped = clamp_integer(bytes(data))
        try:
            return cls._from_reduced(scalar_reduce(bytes(clamped)), data)
        finally:
            _zero(clamped)

    @classmethod
    def from_canonical_bytes(cls, data: BytesLike) -> "SecretScalar":
        _check_size(data, SCALAR_SIZE)
        if not scalar_is_canonical(bytes(data)):
            raise InvalidScalarError("Scalar is not canonical (>= l)", code="NON_CANONICAL_SCALAR")
        return cls(data)

    @classmethod
    def from_secret(cls, secret: SecretBytes) -> "SecretScalar":
        """32 bytes -> clamping + riduzione; 64 bytes -> riduzione wide"""
        raw = bytearray(secret.expose_secret())
        try:
            if len(raw) == SCALAR_SIZE:
                return cls.from_clamped(raw)
            return cls.from_bytes_mod_order_wide(raw)
        finally:
            _zero(raw)

    @classmethod
    def _from_reduced(cls, reduced: bytes, source: BytesLike) -> "SecretScalar":
        if isinstance(source, bytearray):
            _zero(source)
        return cls(reduced)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: "SecretScalar") -> "SecretScalar":
        if not isinstance(other, SecretScalar):
            return NotImplemented
        return SecretScalar(scalar_add(self.expose_secret(), other.expose_secret()))

    def __sub__(self, other: "SecretScalar") -> "SecretScalar":
        if not isinstance(other, SecretScalar):
            return NotImplemented
        return SecretScalar(scalar_sub(self.expose_secret(), other.expose_secret()))

    def __mul__(self, other):
        if isinstance(other, SecretScalar):
            return SecretScalar(scalar_mul(self.expose_secret(), other.expose_secret()))
        if isinstance(other, PublicPoint):
            return PublicPoint(scalar_mult(self.expose_secret(), other.encoded))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, PublicPoint):
            return self.__mul__(other)
        return NotImplemented

    def multiply_base(self) -> PublicPoint:
        """self·G"""
        return PublicPoint(scalar_mult_base(self.expose_secret()))

    def multiply_point(self, point: PublicPoint) -> PublicPoint:
        """self·P"""
        return self * point


# ============================================================================
# HELPERS
# ============================================================================

def _zero(buffer: bytearray) -> None:
    for i in range(len(buffer)):
        buffer[i] = 0


def _check_size(data: BytesLike, expected: int) -> None:
    if len(data) != expected:
        raise InvalidScalarError(
            f"Scalar input must be {expected} bytes, got {len(data)}",
            code="INVALID_SCALAR_LENGTH",
            details={"expected": expected, "got": len(data)}
        )


__all__ = [
    "SecretBytes",
    "SecretScalar",
]
