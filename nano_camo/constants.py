"""
NanoCamo - Core Constants
===========================
Costanti immutabili del protocollo Nano / Camo.

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

IMPORTANTE: Modificare questi valori rompe la compatibilità con
gli address già pubblicati.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# IDENTIFICAZIONE PROGETTO
# ============================================================================

PROJECT_NAME: Final[str] = "NanoCamo"
SOFTWARE_VERSION: Final[str] = "1.0.0"


# ============================================================================
# SISTEMA MONETARIO - RAW
# ============================================================================

# Unità base: 1 raw = 10^-30 Nano
ONE_RAW: Final[int] = 1
ONE_NANO_NANO: Final[int] = ONE_RAW * 10**21
ONE_MICRO_NANO: Final[int] = ONE_RAW * 10**24
ONE_MILLI_NANO: Final[int] = ONE_RAW * 10**27
ONE_NANO: Final[int] = ONE_RAW * 10**30


def raw_to_nano(amount_raw: int) -> str:
    """
    Converte raw in Nano (stringa decimale esatta).

    Examples:
        >>> raw_to_nano(ONE_NANO)
        '1'
        >>> raw_to_nano(15 * ONE_MILLI_NANO // 10)
        '0.0015'
    """
    whole, frac = divmod(amount_raw, ONE_NANO)
    if frac == 0:
        return str(whole)
    return f"{whole}.{frac:030d}".rstrip("0")


# ============================================================================
# KEY / HASH SIZES
# ============================================================================

SEED_SIZE: Final[int] = 32
SCALAR_SIZE: Final[int] = 32
WIDE_SCALAR_SIZE: Final[int] = 64
POINT_SIZE: Final[int] = 32
BLOCK_HASH_SIZE: Final[int] = 32
CHECKSUM_SIZE: Final[int] = 5
SIGNATURE_SIZE: Final[int] = 64

# Ordine del sottogruppo primo di ed25519 (l)
ED25519_ORDER: Final[int] = 2**252 + 27742317777372353535851937790883648493


# ============================================================================
# BASE32 (alfabeto Nano, non RFC 4648)
# ============================================================================

BASE32_ALPHABET: Final[str] = "13456789abcdefghijkmnopqrstuwxyz"
BASE32_BITS_PER_CHAR: Final[int] = 5


# ============================================================================
# ADDRESS FORMATS
# ============================================================================

ACCOUNT_PREFIX: Final[str] = "nano_"
# prefix (5) + base32(32 key + 5 checksum) (60)
ACCOUNT_LENGTH: Final[int] = 65

CAMO_ACCOUNT_PREFIX: Final[str] = "camo_"
CAMO_PREFIX_LEN: Final[int] = len(CAMO_ACCOUNT_PREFIX)
# version (1) + spend key (32) + view key (32)
CAMO_DATA_SIZE: Final[int] = 1 + POINT_SIZE + POINT_SIZE
CAMO_PAYLOAD_SIZE: Final[int] = CAMO_DATA_SIZE + CHECKSUM_SIZE
# prefix (5) + base32(70 bytes) (112)
CAMO_ADDRESS_LENGTH: Final[int] = CAMO_PREFIX_LEN + (CAMO_PAYLOAD_SIZE * 8) // BASE32_BITS_PER_CHAR


# ============================================================================
# CAMO PROTOCOL VERSIONS
# ============================================================================

class CamoVersion(IntEnum):
    """
    Versione del protocollo Camo.

    Numerazione 1-indexed: il bit n del version byte segnala la versione n+1.
    Solo la versione 1 è implementata.
    """
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8


LOWEST_POSSIBLE_CAMO_VERSION: Final[int] = 1
HIGHEST_POSSIBLE_CAMO_VERSION: Final[int] = 8
HIGHEST_KNOWN_CAMO_PROTOCOL_VERSION: Final[int] = 1

ALL_POSSIBLE_CAMO_VERSIONS: Final[tuple] = tuple(CamoVersion)
ALL_SUPPORTED_CAMO_VERSIONS: Final[tuple] = (CamoVersion.ONE,)


# ============================================================================
# KEY DERIVATION TAGS
# ============================================================================

# Category tag per H_category(seed, i)
SPEND_CONSTANTS_X_INDEX: Final[int] = 0
VIEW_CONSTANTS_X_INDEX: Final[int] = 1

# Indice usato per derivare k_master da s_spend e k_shared da Q
MASTER_SPEND_INDEX: Final[int] = 0
SHARED_SECRET_INDEX: Final[int] = 0

MAX_ACCOUNT_INDEX: Final[int] = 2**32 - 1


# ============================================================================
# NOTIFICATION
# ============================================================================

# Valore suggerito per la notification transfer
DEFAULT_NOTIFICATION_AMOUNT_RAW: Final[int] = ONE_RAW
