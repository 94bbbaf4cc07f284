"""
NanoCamo - Base32 Tests
=========================
Unit tests for the Nano base32 codec.
"""

import os

import pytest

from nano_camo.constants import BASE32_ALPHABET
from nano_camo.errors import DecodeError, InvalidCharacterError, InvalidLengthError
from nano_camo.utils.base32 import base32_decode, base32_encode, is_base32


TEST_BYTES = bytes([127, 255, 32, 8, 16, 50, 254, 0, 42, 96])
TEST_STR = "hzzk141i8dz11cm1"


class TestBase32Encoding:
    """Test encoding"""

    def test_known_vector(self):
        """Test encode of the reference vector"""
        assert base32_encode(TEST_BYTES) == TEST_STR

    def test_empty(self):
        """Test empty input"""
        assert base32_encode(b"") == ""

    def test_output_length(self):
        """Test ceil(8n / 5) characters"""
        for n in range(0, 41):
            assert len(base32_encode(bytes(n))) == -(-8 * n // 5)

    def test_only_alphabet_characters(self):
        """Test output uses the Nano alphabet only"""
        encoded = base32_encode(os.urandom(64))
        assert is_base32(encoded)
        assert not set(encoded) & set("02lv")

    def test_leading_padding_is_zero(self):
        """Test 37 bytes (nano_ payload) start with '1' or '3'"""
        for _ in range(20):
            assert base32_encode(os.urandom(37))[0] in "13"


class TestBase32Decoding:
    """Test decoding"""

    def test_known_vector(self):
        """Test decode of the reference vector"""
        assert base32_decode(TEST_STR) == TEST_BYTES

    def test_round_trip(self):
        """Test decode(encode(x)) == x"""
        for n in (0, 1, 2, 5, 32, 37, 70):
            data = os.urandom(n)
            assert base32_decode(base32_encode(data)) == data

    @pytest.mark.parametrize("bad_char", ["0", "2", "l", "v", "A", "_", " "])
    def test_invalid_character(self, bad_char):
        """Test characters outside the alphabet"""
        tampered = TEST_STR[:4] + bad_char + TEST_STR[5:]

        with pytest.raises(InvalidCharacterError) as exc_info:
            base32_decode(tampered)

        assert exc_info.value.details["position"] == 4

    @pytest.mark.parametrize("length", [1, 3, 6, 9])
    def test_invalid_length(self, length):
        """Test lengths that do not encode whole bytes"""
        with pytest.raises(InvalidLengthError):
            base32_decode("1" * length)

    def test_nonzero_padding(self):
        """Test padding bits must be zero"""
        assert base32_decode("11") == b"\x00"

        with pytest.raises(InvalidCharacterError) as exc_info:
            base32_decode("z1")

        assert exc_info.value.code == "INVALID_BASE32_PADDING"

    def test_errors_are_decode_errors(self):
        """Test both failures share DecodeError"""
        assert issubclass(InvalidCharacterError, DecodeError)
        assert issubclass(InvalidLengthError, DecodeError)

    def test_every_character_decodes(self):
        """Test each alphabet character maps to its index"""
        for value, char in enumerate(BASE32_ALPHABET):
            # 8 caratteri = 40 bit = 5 bytes, nessun padding
            assert base32_decode("1111111" + char) == value.to_bytes(5, "big")
