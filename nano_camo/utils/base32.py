"""
NanoCamo - Base32 Encoding
============================
Base32 con l'alfabeto Nano (no 0, 2, l, v per evitare confusione).

Non è RFC 4648: alfabeto diverso, nessun carattere di padding.

Bit order: MSB first. Se la lunghezza in bit non è multipla di 5,
l'encoder aggiunge bit zero IN TESTA; il decoder li verifica e li rimuove.
"""

from nano_camo.constants import BASE32_ALPHABET, BASE32_BITS_PER_CHAR
from nano_camo.errors import InvalidCharacterError, InvalidLengthError
from nano_camo.logging_setup import get_logger

logger = get_logger("utils.base32")


# ============================================================================
# ALPHABET
# ============================================================================

_DECODE_MAP = {char: value for value, char in enumerate(BASE32_ALPHABET)}
_CHAR_MASK = (1 << BASE32_BITS_PER_CHAR) - 1


# ============================================================================
# BASE32 ENCODING
# ============================================================================

def base32_encode(data: bytes) -> str:
    """
    Encode bytes to Nano base32 string.

    Args:
        data: Bytes da encodare (qualsiasi lunghezza)

    Returns:
        str: Base32 string, ceil(8n / 5) caratteri

    Examples:
        >>> base32_encode(bytes([127, 255, 32, 8, 16, 50, 254, 0, 42, 96]))
        'hzzk141i8dz11cm1'
    """
    if not data:
        return ''

    bit_length = len(data) * 8
    char_count = -(-bit_length // BASE32_BITS_PER_CHAR)

    # padding implicito: i bit in eccesso dell'intero stanno in testa
    num = int.from_bytes(data, byteorder='big')

    chars = []
    for _ in range(char_count):
        chars.append(BASE32_ALPHABET[num & _CHAR_MASK])
        num >>= BASE32_BITS_PER_CHAR

    return ''.join(reversed(chars))


# ============================================================================
# BASE32 DECODING
# ============================================================================

def base32_decode(encoded: str) -> bytes:
    """
    Decode Nano base32 string to bytes.

    Args:
        encoded: Base32 string

    Returns:
        bytes: Decoded bytes

    Raises:
        InvalidCharacterError: Carattere fuori alfabeto, o bit di padding non zero
        InvalidLengthError: Numero di caratteri che non codifica bytes interi

    Examples:
        >>> base32_decode('hzzk141i8dz11cm1')
        b'\\x7f\\xff \\x08\\x102\\xfe\\x00*`'
    """
    if not encoded:
        return b''

    num = 0
    for position, char in enumerate(encoded):
        value = _DECODE_MAP.get(char)
        if value is None:
            raise InvalidCharacterError(
                f"Invalid base32 character: {char!r}",
                code="INVALID_BASE32_CHAR",
                details={"position": position}
            )
        num = (num << BASE32_BITS_PER_CHAR) | value

    bit_length = len(encoded) * BASE32_BITS_PER_CHAR
    padding_bits = bit_length % 8

    # il padding deve stare tutto nel primo carattere
    if padding_bits >= BASE32_BITS_PER_CHAR:
        raise InvalidLengthError(
            f"Invalid base32 length: {len(encoded)} characters do not encode whole bytes",
            code="INVALID_BASE32_LENGTH",
            details={"length": len(encoded)}
        )

    byte_length = bit_length // 8
    if num >> (byte_length * 8):
        raise InvalidCharacterError(
            f"Invalid base32 leading character: {encoded[0]!r} sets padding bits",
            code="INVALID_BASE32_PADDING",
            details={"position": 0}
        )

    return num.to_bytes(byte_length, byteorder='big')


def is_base32(encoded: str) -> bool:
    """True se tutti i caratteri appartengono all'alfabeto"""
    return all(char in _DECODE_MAP for char in encoded)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "base32_encode",
    "base32_decode",
    "is_base32",
]
