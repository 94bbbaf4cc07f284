"""
NanoCamo - Public Points
==========================
Punti pubblici ed25519 (public key), in forma compressa da 32 bytes.

Nessun materiale segreto: value type liberamente copiabile.
"""

from dataclasses import dataclass
from typing import Union

from nano_camo.constants import POINT_SIZE
from nano_camo.domain.crypto_core import (
    is_valid_point,
    point_add,
    point_sub,
)
from nano_camo.errors import InvalidPointError


@dataclass(frozen=True)
class PublicPoint:
    """
    Punto ed25519 compresso.

    Costruire con `PublicPoint.from_bytes()` per input non fidati:
    il costruttore diretto è riservato a output di libsodium.

    Attributes:
        encoded: 32 bytes (y little-endian + bit di segno di x)
    """
    encoded: bytes

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray]) -> "PublicPoint":
        """
        Valida e crea PublicPoint.

        Raises:
            InvalidPointError: Se i 32 bytes non codificano un punto valido
        """
        if len(data) != POINT_SIZE or not is_valid_point(bytes(data)):
            raise InvalidPointError(
                "Invalid ed25519 point encoding",
                code="INVALID_POINT",
                details={"length": len(data)}
            )
        return cls(bytes(data))

    @classmethod
    def from_hex(cls, hex_str: str) -> "PublicPoint":
        """Crea da hex (64 caratteri)"""
        try:
            data = bytes.fromhex(hex_str)
        except ValueError as e:
            raise InvalidPointError(f"Invalid hex point: {e}", code="INVALID_POINT") from e
        return cls.from_bytes(data)

    def __add__(self, other: "PublicPoint") -> "PublicPoint":
        if not isinstance(other, PublicPoint):
            return NotImplemented
        return PublicPoint(point_add(self.encoded, other.encoded))

    def __sub__(self, other: "PublicPoint") -> "PublicPoint":
        if not isinstance(other, PublicPoint):
            return NotImplemented
        return PublicPoint(point_sub(self.encoded, other.encoded))

    def __bytes__(self) -> bytes:
        return self.encoded

    def hex(self) -> str:
        return self.encoded.hex()

    def short(self) -> str:
        """Prefisso corto per logging"""
        return self.encoded.hex()[:16]

    def __repr__(self) -> str:
        return f"PublicPoint({self.short()}...)"


# Generatore G (base point ed25519)
BASEPOINT = PublicPoint(
    bytes.fromhex("5866666666666666666666666666666666666666666666666666666666666666")
)


__all__ = [
    "PublicPoint",
    "BASEPOINT",
]
