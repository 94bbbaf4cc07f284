"""
NanoCamo - Custom Exceptions
==============================
Gerarchia di eccezioni per errori di validazione e protocollo.

Security Level: HIGH
Last Updated: 2026-10-19
Version: 1.0.0

Tutti gli errori sono fallimenti di validazione locali e deterministici:
nessuno viene ritentato, tutti vengono propagati al chiamante.
"""

from typing import Optional, Any


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class NanoCamoException(Exception):
    """
    Eccezione base per tutte le eccezioni NanoCamo.

    Attributes:
        message (str): Messaggio errore
        code (str): Codice errore (es. "CHECKSUM_MISMATCH")
        details (dict): Dettagli aggiuntivi
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializza eccezione per CLI/logging"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(NanoCamoException):
    """Errore configurazione"""
    pass


class InvalidConfigError(ConfigError):
    """Configurazione invalida"""
    pass


# ============================================================================
# VALIDATION ERRORS
# ============================================================================

class ValidationError(NanoCamoException):
    """Errore validazione (base)"""
    pass


class InvalidSeedLengthError(ValidationError):
    """Seed non lungo esattamente 32 bytes"""
    pass


class DecodeError(ValidationError):
    """Input base32 malformato"""
    pass


class InvalidCharacterError(DecodeError):
    """Carattere fuori dall'alfabeto base32"""
    pass


class InvalidLengthError(DecodeError):
    """Numero di caratteri non corrispondente a bytes interi"""
    pass


# ============================================================================
# ADDRESS ERRORS
# ============================================================================

class AddressError(ValidationError):
    """Errore address (base)"""
    pass


class InvalidAddressPrefixError(AddressError):
    """Prefisso address errato"""
    pass


class InvalidAddressLengthError(AddressError):
    """Lunghezza address errata"""
    pass


class ChecksumMismatchError(AddressError):
    """Checksum non corrispondente (corruzione o typo)"""
    pass


# ============================================================================
# CRYPTO ERRORS
# ============================================================================

class CryptoError(NanoCamoException):
    """Errore crittografico generico"""
    pass


class InvalidPointError(CryptoError):
    """32 bytes che non codificano un punto ed25519 valido"""
    pass


class InvalidScalarError(CryptoError):
    """Scalare non canonico"""
    pass


class SecretReleasedError(CryptoError):
    """Accesso a un segreto già azzerato"""
    pass


# ============================================================================
# PROTOCOL ERRORS
# ============================================================================

class ProtocolError(NanoCamoException):
    """Errore protocollo Camo"""
    pass


class InvalidVersionError(ProtocolError):
    """Numero di versione fuori da 1-8"""
    pass


class NoCompatibleVersionError(ProtocolError):
    """Nessuna versione comune: la transazione non può essere creata"""
    pass


class InvalidAmountError(ProtocolError):
    """Importo payment invalido"""
    pass


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_validation_error(
    field: str,
    value: Any,
    expected: str,
    code: Optional[str] = None
) -> ValidationError:
    """
    Helper per creare ValidationError formattati.

    Args:
        field: Nome campo invalido
        value: Valore ricevuto
        expected: Valore/tipo atteso
        code: Codice errore custom

    Returns:
        ValidationError: Eccezione formattata

    Example:
        >>> raise format_validation_error("index", -1, "u32")
    """
    return ValidationError(
        message=f"Invalid field '{field}': expected {expected}, got {value}",
        code=code or "VALIDATION_FAILED",
        details={"field": field, "value": value, "expected": expected}
    )


# ============================================================================
# EXPORT ALL
# ============================================================================

__all__ = [
    # Base
    "NanoCamoException",

    # Config
    "ConfigError",
    "InvalidConfigError",

    # Validation
    "ValidationError",
    "InvalidSeedLengthError",
    "DecodeError",
    "InvalidCharacterError",
    "InvalidLengthError",

    # Address
    "AddressError",
    "InvalidAddressPrefixError",
    "InvalidAddressLengthError",
    "ChecksumMismatchError",

    # Crypto
    "CryptoError",
    "InvalidPointError",
    "InvalidScalarError",
    "SecretReleasedError",

    # Protocol
    "ProtocolError",
    "InvalidVersionError",
    "NoCompatibleVersionError",
    "InvalidAmountError",

    # Helpers
    "format_validation_error",
]
