"""
NanoCamo - Camo Address
=========================
Serializzazione degli address stealth `camo_`.

Security Level: HIGH
Last Updated: 2026-10-19
Version: 1.0.0

Formato:

    data     = version_byte (1) || K_spend (32) || K_view (32)      65 bytes
    checksum = BLAKE2b-40(data), byte order invertito               5 bytes
    address  = "camo_" + base32(data || checksum)                   117 caratteri

Decode: prefisso -> lunghezza -> base32 -> checksum -> punti.
Il version byte non viene filtrato: un address che segnala solo
versioni non implementate si decodifica, ma la negoziazione fallisce.

Example:
    camo_18wydi3gmaw4aefwhkijrjw4qd87i4tc85wbnij95gz4em3qssickhpoj9i4t6taqk46wdnie7aj8ijrjhtcdgsp3c1oqnahct3otygxx4k7f3o4
"""

from typing import Optional

from nano_camo.camo.version import CamoVersions
from nano_camo.constants import (
    CAMO_ACCOUNT_PREFIX,
    CAMO_ADDRESS_LENGTH,
    CAMO_DATA_SIZE,
    CAMO_PAYLOAD_SIZE,
    CAMO_PREFIX_LEN,
    POINT_SIZE,
)
from nano_camo.domain.addressing import compute_checksum, verify_checksum
from nano_camo.domain.hashes import h_si
from nano_camo.domain.keypairs import Account, Signature
from nano_camo.domain.points import PublicPoint
from nano_camo.domain.secret_scalar import SecretBytes
from nano_camo.errors import (
    ChecksumMismatchError,
    InvalidAddressLengthError,
    InvalidAddressPrefixError,
    InvalidLengthError,
    NanoCamoException,
)
from nano_camo.logging_setup import get_logger
from nano_camo.utils.base32 import base32_decode, base32_encode


logger = get_logger("camo.address")

_SPEND_KEY_OFFSET = 1
_VIEW_KEY_OFFSET = _SPEND_KEY_OFFSET + POINT_SIZE


class CamoAddress:
    """
    Account stealth pubblico: (versioni, K_spend, K_view).

    Value type: confrontabile e hashable sulla forma testuale.

    Examples:
        >>> address = CamoAddress.from_str(text)
        >>> str(address) == text
        True
        >>> address.signer_account()   # account di notifica (K_spend)
    """

    __slots__ = ("_versions", "_spend_key", "_view_key", "_address")

    def __init__(self, versions: CamoVersions, spend_key: PublicPoint, view_key: PublicPoint):
        self._versions = versions
        self._spend_key = spend_key
        self._view_key = view_key
        self._address = self._encode()

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_data(self) -> bytes:
        """version_byte || K_spend || K_view (65 bytes)"""
        return bytes(self._versions) + bytes(self._spend_key) + bytes(self._view_key)

    def _encode(self) -> str:
        data = self.to_data()
        return CAMO_ACCOUNT_PREFIX + base32_encode(data + compute_checksum(data))

    def encode(self) -> str:
        return self._address

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @classmethod
    def from_str(cls, address: str) -> "CamoAddress":
        """
        Parse address `camo_`.

        Args:
            address: Address testuale

        Returns:
            CamoAddress: Address decodificato

        Raises:
            InvalidAddressPrefixError: Non inizia con "camo_"
            InvalidAddressLengthError: Lunghezza testo/payload errata
            DecodeError: Base32 invalido
            ChecksumMismatchError: Checksum errato
            InvalidPointError: K_spend o K_view non validi
        """
        if not isinstance(address, str) or not address.startswith(CAMO_ACCOUNT_PREFIX):
            raise InvalidAddressPrefixError(
                f"Camo address must start with '{CAMO_ACCOUNT_PREFIX}'",
                code="INVALID_ADDRESS_PREFIX"
            )

        if len(address) != CAMO_ADDRESS_LENGTH:
            raise InvalidAddressLengthError(
                f"Invalid camo address length: {len(address)}",
                code="INVALID_ADDRESS_LENGTH",
                details={"expected": CAMO_ADDRESS_LENGTH, "got": len(address)}
            )

        payload = base32_decode(address[CAMO_PREFIX_LEN:])
        return cls.from_payload(payload)

    decode = from_str

    @classmethod
    def from_payload(cls, payload: bytes) -> "CamoAddress":
        """
        Decode dei 70 bytes grezzi (data || checksum).

        Raises:
            InvalidLengthError: Payload diverso da 70 bytes
            ChecksumMismatchError: Checksum errato
            InvalidPointError: Chiavi non valide
        """
        if len(payload) != CAMO_PAYLOAD_SIZE:
            raise InvalidLengthError(
                f"Camo payload must be {CAMO_PAYLOAD_SIZE} bytes, got {len(payload)}",
                code="INVALID_PAYLOAD_LENGTH",
                details={"expected": CAMO_PAYLOAD_SIZE, "got": len(payload)}
            )

        data, checksum = payload[:CAMO_DATA_SIZE], payload[CAMO_DATA_SIZE:]
        if not verify_checksum(data, checksum):
            logger.debug("Camo address checksum mismatch")
            raise ChecksumMismatchError(
                "Invalid camo address checksum",
                code="CHECKSUM_MISMATCH"
            )

        return cls(
            versions=CamoVersions.from_byte(data[0]),
            spend_key=PublicPoint.from_bytes(data[_SPEND_KEY_OFFSET:_VIEW_KEY_OFFSET]),
            view_key=PublicPoint.from_bytes(data[_VIEW_KEY_OFFSET:CAMO_DATA_SIZE]),
        )

    @classmethod
    def is_valid(cls, address: str) -> bool:
        """True se l'address è decodificabile"""
        try:
            cls.from_str(address)
            return True
        except NanoCamoException:
            return False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def versions(self) -> CamoVersions:
        return self._versions

    def camo_versions(self) -> CamoVersions:
        return self._versions

    @property
    def spend_key(self) -> PublicPoint:
        return self._spend_key

    @property
    def view_key(self) -> PublicPoint:
        return self._view_key

    def signer_account(self) -> Account:
        """Account `nano_` di K_spend (destinatario delle notifiche)"""
        return Account(self._spend_key)

    def is_valid_signature(self, message: bytes, signature: Signature) -> bool:
        return self.signer_account().is_valid_signature(message, signature)

    def derive_account(self, shared_secret: SecretBytes, index: int = 0) -> Account:
        """Account mascherato: K_spend + H_si(secret, i)·G"""
        with h_si(shared_secret, index) as k_shared:
            return Account(self._spend_key + k_shared.multiply_base())

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self._address

    def __repr__(self) -> str:
        return f"CamoAddress({self._address[:16]}...)"

    def __eq__(self, other) -> bool:
        if not isinstance(other, CamoAddress):
            return NotImplemented
        return self._address == other._address

    def __hash__(self) -> int:
        return hash(self._address)


def parse_camo_address(address: str) -> Optional[CamoAddress]:
    """Parse tollerante: None se l'address non è valido"""
    try:
        return CamoAddress.from_str(address)
    except NanoCamoException as e:
        logger.debug("Rejected camo address", extra_data={"code": e.code})
        return None


__all__ = [
    "CamoAddress",
    "parse_camo_address",
]
