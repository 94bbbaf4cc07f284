"""
NanoCamo - Camo Protocol Versions
===================================
Set di versioni del protocollo Camo (bit flag a 8 bit).

Security Level: MEDIUM
Last Updated: 2026-10-19
Version: 1.0.0

Wire format:
- Un byte; bit n (0-indexed) impostato = versione n+1 segnalata
- Tutti i 256 valori sono legali; 0x00 non è utilizzabile per un address

Terminologia:
- "signaled": la versione è dichiarata dall'account camo_
- "supported": dichiarata E implementata da questo software
  (ALL_SUPPORTED_CAMO_VERSIONS, oggi solo la v1)

Negoziazione: tra le versioni segnalate dal destinatario e quelle
supportate localmente si sceglie la più alta. Intersezione vuota =
nessuna transazione possibile (NoCompatibleVersionError).

Examples:
    >>> CamoVersions.from_byte(0x52).negotiate(CamoVersions.from_versions(range(1, 7)))
    5
"""

from typing import Iterable, Iterator, List, Optional, Union

from nano_camo.constants import (
    ALL_POSSIBLE_CAMO_VERSIONS,
    ALL_SUPPORTED_CAMO_VERSIONS,
    CamoVersion,
    HIGHEST_POSSIBLE_CAMO_VERSION,
    LOWEST_POSSIBLE_CAMO_VERSION,
)
from nano_camo.errors import InvalidVersionError, NoCompatibleVersionError
from nano_camo.logging_setup import get_logger


logger = get_logger("camo.version")

VersionLike = Union[CamoVersion, int]


# ============================================================================
# VERSION HELPERS
# ============================================================================

def to_camo_version(version: VersionLike) -> CamoVersion:
    """
    Converte un intero 1-8 in CamoVersion.

    Raises:
        InvalidVersionError: Fuori range
    """
    try:
        return CamoVersion(version)
    except ValueError as e:
        raise InvalidVersionError(
            f"Invalid camo version: {version}",
            code="INVALID_CAMO_VERSION",
            details={
                "min": LOWEST_POSSIBLE_CAMO_VERSION,
                "max": HIGHEST_POSSIBLE_CAMO_VERSION,
                "got": version
            }
        ) from e


def is_possible_version(version: int) -> bool:
    return version in ALL_POSSIBLE_CAMO_VERSIONS


def is_supported_version(version: int) -> bool:
    return version in ALL_SUPPORTED_CAMO_VERSIONS


def _bit(version: CamoVersion) -> int:
    return 1 << (int(version) - 1)


# ============================================================================
# VERSION SET
# ============================================================================

class CamoVersions:
    """
    VersionSet: quali versioni Camo sono segnalate.

    Costruttori:
        - from_byte / decode_from_bits: dal byte wire (nessuna validazione)
        - from_versions: lista esplicita, TUTTE impostate (anche non implementate)
        - new: lista esplicita, solo versioni implementate localmente
        - empty: nessuna versione
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0):
        if not (0 <= bits <= 0xFF):
            raise InvalidVersionError(
                f"Version bits must fit in one byte, got {bits}",
                code="INVALID_VERSION_BITS"
            )
        self._bits = bits

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "CamoVersions":
        return cls(0)

    @classmethod
    def from_byte(cls, bits: int) -> "CamoVersions":
        return cls(bits)

    decode_from_bits = from_byte

    @classmethod
    def from_versions(cls, versions: Iterable[VersionLike]) -> "CamoVersions":
        """Tutte le versioni indicate, implementate o no"""
        result = cls.empty()
        for version in versions:
            result.force_enable_version(version)
        return result

    new_signaling = from_versions

    @classmethod
    def new(cls, versions: Iterable[VersionLike]) -> "CamoVersions":
        """Solo le versioni implementate localmente; le altre sono ignorate"""
        result = cls.empty()
        for version in versions:
            result.enable_version(version)
        return result

    @classmethod
    def supported(cls) -> "CamoVersions":
        """Set delle versioni implementate da questo software"""
        return cls.from_versions(ALL_SUPPORTED_CAMO_VERSIONS)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def force_enable_version(self, version: VersionLike) -> None:
        """Abilita anche se non implementata localmente"""
        self._bits |= _bit(to_camo_version(version))

    def enable_version(self, version: VersionLike) -> bool:
        """Abilita solo se implementata. Ritorna True se abilitata."""
        version = to_camo_version(version)
        if not is_supported_version(version):
            logger.debug("Ignoring unimplemented camo version", extra_data={"version": int(version)})
            return False
        self.force_enable_version(version)
        return True

    def disable_version(self, version: VersionLike) -> None:
        self._bits &= ~_bit(to_camo_version(version)) & 0xFF

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def signals_version(self, version: VersionLike) -> bool:
        """Segnalata dall'account (non necessariamente implementata)"""
        if not is_possible_version(version):
            return False
        return bool(self._bits & _bit(CamoVersion(version)))

    def supports_version(self, version: VersionLike) -> bool:
        """Segnalata dall'account E implementata localmente"""
        return is_supported_version(version) and self.signals_version(version)

    def all_signaled_versions(self) -> List[CamoVersion]:
        return [v for v in ALL_POSSIBLE_CAMO_VERSIONS if self.signals_version(v)]

    def all_supported_versions(self) -> List[CamoVersion]:
        return [v for v in ALL_POSSIBLE_CAMO_VERSIONS if self.supports_version(v)]

    def highest_signaled_version(self) -> Optional[CamoVersion]:
        signaled = self.all_signaled_versions()
        return signaled[-1] if signaled else None

    def highest_supported_version(self) -> Optional[CamoVersion]:
        supported = self.all_supported_versions()
        return supported[-1] if supported else None

    def preferred(self) -> Optional[CamoVersion]:
        """
        Versione preferita: bit più alto impostato.

        Examples:
            >>> CamoVersions.from_byte(0x0b).preferred()
            <CamoVersion.FOUR: 4>
        """
        return self.highest_signaled_version()

    def negotiate(self, local: "CamoVersions") -> CamoVersion:
        """
        Versione da usare verso questo account.

        Args:
            local: Versioni supportate localmente

        Returns:
            CamoVersion: Versione più alta comune

        Raises:
            NoCompatibleVersionError: Intersezione vuota
        """
        version = self.try_negotiate(local)
        if version is None:
            logger.warning(
                "No compatible camo version",
                extra_data={"remote": f"{self._bits:#04x}", "local": f"{local.encode_to_bits():#04x}"}
            )
            raise NoCompatibleVersionError(
                "No compatible camo version: transaction cannot be made",
                code="NO_COMPATIBLE_VERSION",
                details={
                    "remote": [int(v) for v in self.all_signaled_versions()],
                    "local": [int(v) for v in local.all_signaled_versions()]
                }
            )
        return version

    def try_negotiate(self, local: "CamoVersions") -> Optional[CamoVersion]:
        """Come negotiate(), ma None se non esiste versione comune"""
        return (self & local).preferred()

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_to_bits(self) -> int:
        return self._bits

    def __bytes__(self) -> bytes:
        return bytes([self._bits])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __and__(self, other: "CamoVersions") -> "CamoVersions":
        if not isinstance(other, CamoVersions):
            return NotImplemented
        return CamoVersions(self._bits & other._bits)

    def __or__(self, other: "CamoVersions") -> "CamoVersions":
        if not isinstance(other, CamoVersions):
            return NotImplemented
        return CamoVersions(self._bits | other._bits)

    def __iter__(self) -> Iterator[CamoVersion]:
        return iter(self.all_signaled_versions())

    def __contains__(self, version) -> bool:
        return self.signals_version(version)

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, CamoVersions):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"CamoVersions({self._bits:#04x}: {[int(v) for v in self]})"


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "CamoVersion",
    "CamoVersions",
    "to_camo_version",
    "is_possible_version",
    "is_supported_version",
]
