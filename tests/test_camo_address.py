"""
NanoCamo - Camo Address Tests
===============================
Unit tests for camo_ address encoding and decoding.
"""

import pytest

from nano_camo.camo.address import CamoAddress, parse_camo_address
from nano_camo.camo.version import CamoVersions
from nano_camo.constants import BASE32_ALPHABET
from nano_camo.domain.addressing import compute_checksum
from nano_camo.errors import (
    ChecksumMismatchError,
    InvalidAddressLengthError,
    InvalidAddressPrefixError,
    InvalidCharacterError,
    InvalidLengthError,
    InvalidPointError,
)
from nano_camo.utils.base32 import base32_encode


C8_INDEX_5_ADDRESS = (
    "camo_168be68tsxk1o8xferck89gj75kzk8fpbhote77ed1db975htuf11psgpwq9wabcxdjs"
    "sycim6tidgkau48x6tgcqnsnxj341mamjpoy8umaz45c"
)
ZERO_INDEX_0_ADDRESS = (
    "camo_18wydi3gmaw4aefwhkijrjw4qd87i4tc85wbnij95gz4em3qssickhpoj9i4t6taqk46"
    "wdnie7aj8ijrjhtcdgsp3c1oqnahct3otygxx4k7f3o4"
)


def _encode_raw(data: bytes) -> str:
    return "camo_" + base32_encode(data + compute_checksum(data))


class TestCamoAddressDecoding:
    """Test decoding"""

    @pytest.mark.parametrize("text", [C8_INDEX_5_ADDRESS, ZERO_INDEX_0_ADDRESS])
    def test_round_trip(self, text):
        """Test decode/encode"""
        address = CamoAddress.from_str(text)
        assert len(text) == 117
        assert str(address) == text
        assert address.encode() == text
        assert CamoAddress.decode(text) == address
        assert CamoAddress.is_valid(text)

    def test_fields(self):
        """Test version byte and keys"""
        address = CamoAddress.from_str(C8_INDEX_5_ADDRESS)
        assert address.versions == CamoVersions.from_byte(0x01)
        assert address.camo_versions() == address.versions

        data = address.to_data()
        assert len(data) == 65
        assert data[0] == 0x01
        assert data[1:33] == bytes(address.spend_key)
        assert data[33:] == bytes(address.view_key)

    def test_rebuild_from_parts(self):
        """Test constructor gives the same text"""
        decoded = CamoAddress.from_str(ZERO_INDEX_0_ADDRESS)
        rebuilt = CamoAddress(decoded.versions, decoded.spend_key, decoded.view_key)
        assert rebuilt == decoded
        assert hash(rebuilt) == hash(decoded)

    def test_every_character_tamper(self):
        """Test changing any character is detected"""
        for position in range(5, len(ZERO_INDEX_0_ADDRESS)):
            original = ZERO_INDEX_0_ADDRESS[position]
            replacement = BASE32_ALPHABET[(BASE32_ALPHABET.index(original) + 1) % 32]
            tampered = ZERO_INDEX_0_ADDRESS[:position] + replacement + ZERO_INDEX_0_ADDRESS[position + 1:]

            with pytest.raises(ChecksumMismatchError):
                CamoAddress.from_str(tampered)

    def test_invalid_character(self):
        """Test character outside the alphabet"""
        tampered = ZERO_INDEX_0_ADDRESS[:20] + "l" + ZERO_INDEX_0_ADDRESS[21:]
        with pytest.raises(InvalidCharacterError):
            CamoAddress.from_str(tampered)

    @pytest.mark.parametrize("prefix", ["nano_", "Camo_", "camo-", "xrb__"])
    def test_wrong_prefix(self, prefix):
        """Test prefix"""
        with pytest.raises(InvalidAddressPrefixError):
            CamoAddress.from_str(prefix + ZERO_INDEX_0_ADDRESS[5:])

    def test_wrong_length(self):
        """Test truncated and extended text"""
        with pytest.raises(InvalidAddressLengthError):
            CamoAddress.from_str(ZERO_INDEX_0_ADDRESS[:-1])
        with pytest.raises(InvalidAddressLengthError):
            CamoAddress.from_str(ZERO_INDEX_0_ADDRESS + "1")

    def test_wrong_payload_length(self):
        """Test raw payload size"""
        with pytest.raises(InvalidLengthError):
            CamoAddress.from_payload(bytes(69))

    def test_invalid_point(self):
        """Test valid checksum over an invalid spend key"""
        view_key = CamoAddress.from_str(ZERO_INDEX_0_ADDRESS).view_key
        text = _encode_raw(b"\x01" + bytes(32) + bytes(view_key))

        with pytest.raises(InvalidPointError):
            CamoAddress.from_str(text)

    def test_unimplemented_versions_decode(self):
        """Test addresses signaling only unknown versions still decode"""
        decoded = CamoAddress.from_str(ZERO_INDEX_0_ADDRESS)
        text = _encode_raw(b"\x02" + bytes(decoded.spend_key) + bytes(decoded.view_key))

        address = CamoAddress.from_str(text)
        assert address.versions.all_supported_versions() == []

    def test_parse_camo_address(self):
        """Test tolerant parse"""
        assert parse_camo_address(ZERO_INDEX_0_ADDRESS) is not None
        assert parse_camo_address("camo_") is None
        assert not CamoAddress.is_valid(ZERO_INDEX_0_ADDRESS[:-1])

    def test_non_string(self):
        """Test non-string input"""
        with pytest.raises(InvalidAddressPrefixError):
            CamoAddress.from_str(b"camo_")
