"""
NanoCamo - Secret Scalar Tests
================================
Unit tests for zeroizing secret containers.
"""

import copy
import pickle

import pytest

from nano_camo.constants import ED25519_ORDER
from nano_camo.domain.points import BASEPOINT
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.errors import InvalidScalarError, SecretReleasedError


def _scalar(n: int) -> SecretScalar:
    return SecretScalar(n.to_bytes(32, "little"))


class TestSecretBytes:
    """Test SecretBytes container"""

    def test_repr_hides_value(self):
        """Test repr/str/format never show the bytes"""
        secret = SecretBytes(bytes([0xAB] * 32))
        for text in (repr(secret), str(secret), f"{secret}"):
            assert "abab" not in text.lower()
            assert "secret value" in text

    def test_wipe(self):
        """Test wipe zeroes and releases"""
        secret = SecretBytes(bytes([7] * 32))
        secret.wipe()

        assert secret.released
        assert secret._buffer == bytearray(32)
        with pytest.raises(SecretReleasedError):
            secret.expose_secret()

        # idempotente
        secret.wipe()

    def test_takes_ownership_of_bytearray(self):
        """Test bytearray input is zeroed after copy"""
        source = bytearray([9] * 32)
        secret = SecretBytes(source)

        assert source == bytearray(32)
        assert secret.expose_secret() == bytes([9] * 32)

    def test_copy_is_independent(self):
        """Test explicit copy"""
        secret = SecretBytes(bytes([1] * 32))
        clone = secret.copy()
        secret.wipe()

        assert clone.expose_secret() == bytes([1] * 32)
        assert copy.copy(clone) == clone
        assert copy.deepcopy(clone) == clone

    def test_not_picklable(self):
        """Test serialization is refused"""
        with pytest.raises(TypeError):
            pickle.dumps(SecretBytes(bytes(32)))

    def test_not_hashable(self):
        """Test secrets cannot be dict keys"""
        with pytest.raises(TypeError):
            hash(SecretBytes(bytes(32)))

    def test_context_manager(self):
        """Test wipe on exit"""
        with SecretBytes(bytes([3] * 32)) as secret:
            assert len(secret) == 32
        assert secret.released

    def test_halves(self):
        """Test first/second half"""
        secret = SecretBytes(bytes(range(64)))
        assert secret.first_half().expose_secret() == bytes(range(32))
        assert secret.second_half().expose_secret() == bytes(range(32, 64))

    def test_wrong_size(self):
        """Test fixed size check"""
        with pytest.raises(InvalidScalarError):
            SecretBytes(bytes(31), size=32)


class TestSecretScalar:
    """Test SecretScalar arithmetic"""

    def test_one_times_base(self):
        """Test 1·G == G"""
        assert _scalar(1).multiply_base() == BASEPOINT

    def test_distributive(self):
        """Test (a + b)·G == a·G + b·G"""
        a, b = _scalar(123456789), _scalar(987654321)
        assert (a + b).multiply_base() == a.multiply_base() + b.multiply_base()

    def test_sub(self):
        """Test (a - b) + b == a"""
        a, b = _scalar(10), _scalar(3)
        assert (a - b) + b == a

    def test_mul(self):
        """Test a·b scalar and a·P"""
        assert _scalar(6) * _scalar(7) == _scalar(42)
        assert _scalar(6) * _scalar(7).multiply_base() == _scalar(42).multiply_base()
        assert _scalar(7).multiply_point(BASEPOINT) == _scalar(7).multiply_base()

    def test_mod_order(self):
        """Test reduction constructors"""
        assert SecretScalar.from_bytes_mod_order(
            (ED25519_ORDER + 1).to_bytes(32, "little")
        ) == _scalar(1)
        assert SecretScalar.from_bytes_mod_order_wide(
            (ED25519_ORDER * 3 + 2).to_bytes(64, "little")
        ) == _scalar(2)

    def test_from_canonical_bytes(self):
        """Test canonical check"""
        top = SecretScalar.from_canonical_bytes((ED25519_ORDER - 1).to_bytes(32, "little"))
        assert top + _scalar(1) == SecretScalar(bytes(32))

        with pytest.raises(InvalidScalarError):
            SecretScalar.from_canonical_bytes(ED25519_ORDER.to_bytes(32, "little"))

    def test_wrong_size(self):
        """Test size checks"""
        with pytest.raises(InvalidScalarError):
            SecretScalar(bytes(31))
        with pytest.raises(InvalidScalarError):
            SecretScalar.from_bytes_mod_order_wide(bytes(32))

    def test_from_clamped_wipes_source(self):
        """Test bytearray source is zeroed"""
        source = bytearray([0xFF] * 32)
        SecretScalar.from_clamped(source)
        assert source == bytearray(32)

    def test_from_secret(self):
        """Test dispatch on length"""
        wide = SecretBytes((ED25519_ORDER + 9).to_bytes(64, "little"))
        assert SecretScalar.from_secret(wide) == _scalar(9)

        narrow = SecretBytes(bytes(32))
        assert SecretScalar.from_secret(narrow) == SecretScalar.from_clamped(bytes(32))
