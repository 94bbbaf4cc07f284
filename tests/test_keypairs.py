"""
NanoCamo - Keys & Accounts Tests
==================================
Unit tests for nano_ accounts, keys and signatures.
"""

import pytest

from nano_camo.domain.keypairs import Account, Key, Signature
from nano_camo.domain.points import BASEPOINT
from nano_camo.errors import (
    ChecksumMismatchError,
    CryptoError,
    InvalidAddressLengthError,
    InvalidAddressPrefixError,
    InvalidScalarError,
)


ZERO_SEED = bytes(32)
ZERO_INDEX_0_ACCOUNT = "nano_3i1aq1cchnmbn9x5rsbap8b15akfh7wj7pwskuzi7ahz8oq6cobd99d4r3b7"
GENESIS_ACCOUNT = "nano_3t6k35gi95xu6tergt6p69ck76ogmitsa8mnijtpxm9fkcm736xtoncuohr3"


class TestAccount:
    """Test nano_ accounts"""

    def test_key_from_zero_seed(self):
        """Test zero seed index 0 vector"""
        key = Key.from_seed(ZERO_SEED, 0)
        assert str(key.to_account()) == ZERO_INDEX_0_ACCOUNT

    def test_genesis_round_trip(self):
        """Test decode/encode of the genesis account"""
        account = Account.from_string(GENESIS_ACCOUNT)
        assert str(account) == GENESIS_ACCOUNT
        assert Account.from_bytes(account.public_key) == account
        assert Account.is_valid(GENESIS_ACCOUNT)

    def test_account_starts_with_1_or_3(self):
        """Test 4 padding bits are zero"""
        for index in range(10):
            account = str(Key.from_seed(ZERO_SEED, index).to_account())
            assert len(account) == 65
            assert account[5] in "13"

    def test_checksum_tamper(self):
        """Test altered checksum character"""
        tampered = GENESIS_ACCOUNT[:-2] + "r1"

        with pytest.raises(ChecksumMismatchError):
            Account.from_string(tampered)
        assert not Account.is_valid(tampered)

    def test_wrong_prefix(self):
        """Test prefix check"""
        with pytest.raises(InvalidAddressPrefixError):
            Account.from_string("nan0_" + GENESIS_ACCOUNT[5:])

    def test_wrong_length(self):
        """Test length check"""
        with pytest.raises(InvalidAddressLengthError):
            Account.from_string(GENESIS_ACCOUNT[:-1])

    def test_hashable(self):
        """Test accounts as dict keys"""
        first = Account.from_string(GENESIS_ACCOUNT)
        second = Account.from_string(GENESIS_ACCOUNT)
        assert len({first: 1, second: 2}) == 1

    def test_add(self):
        """Test (a + b)·G == a·G + b·G on keys and accounts"""
        a = Key.from_seed(ZERO_SEED, 1)
        b = Key.from_seed(ZERO_SEED, 2)
        assert (a + b).to_account() == a.to_account() + b.to_account()
        assert ((a + b) - b) == a


class TestKey:
    """Test private keys"""

    def test_deterministic(self):
        """Test same seed and index give same key"""
        assert Key.from_seed(ZERO_SEED, 3) == Key.from_seed(ZERO_SEED, 3)
        assert Key.from_seed(ZERO_SEED, 3) != Key.from_seed(ZERO_SEED, 4)

    def test_repr_hides_value(self):
        """Test repr"""
        assert repr(Key.from_seed(ZERO_SEED, 0)) == "Key([secret value])"

    def test_requires_secret_scalar(self):
        """Test constructor type check"""
        with pytest.raises(InvalidScalarError):
            Key(bytes(32))

    def test_copy_survives_wipe(self):
        """Test copy owns its own scalar"""
        key = Key.from_seed(ZERO_SEED, 0)
        clone = key.copy()
        key.wipe()
        assert str(clone.to_account()) == ZERO_INDEX_0_ACCOUNT

    def test_context_manager(self):
        """Test wipe on exit"""
        with Key.from_seed(ZERO_SEED, 0) as key:
            pass
        assert key.as_scalar().released

    def test_not_hashable(self):
        """Test keys cannot be dict keys"""
        with pytest.raises(TypeError):
            hash(Key.from_seed(ZERO_SEED, 0))


class TestSignature:
    """Test Ed25519/BLAKE2b signatures"""

    @pytest.fixture
    def key(self):
        return Key.from_seed(ZERO_SEED, 0)

    def test_sign_and_verify(self, key):
        """Test valid signature"""
        signature = key.sign_message(b"block hash")
        assert key.to_account().is_valid_signature(b"block hash", signature)

    def test_deterministic(self, key):
        """Test same message gives same signature"""
        assert key.sign_message(b"m") == key.sign_message(b"m")

    def test_distinct_nonces(self, key):
        """Test different messages use different R"""
        assert key.sign_message(b"one").r != key.sign_message(b"two").r

    def test_wrong_message(self, key):
        """Test verification with altered message"""
        signature = key.sign_message(b"block hash")
        assert not key.to_account().is_valid_signature(b"block hasH", signature)

    def test_wrong_key(self, key):
        """Test verification with another account"""
        signature = key.sign_message(b"block hash")
        other = Key.from_seed(ZERO_SEED, 1).to_account()
        assert not other.is_valid_signature(b"block hash", signature)

    def test_bytes_round_trip(self, key):
        """Test R || s encoding"""
        signature = key.sign_message(b"block hash")
        encoded = signature.to_bytes()

        assert len(encoded) == 64
        assert Signature.from_bytes(encoded) == signature
        assert bytes.fromhex(signature.hex()) == encoded

    def test_short_bytes(self):
        """Test length check"""
        with pytest.raises(CryptoError):
            Signature.from_bytes(bytes(63))

    def test_non_canonical_s(self):
        """Test s >= l rejected"""
        with pytest.raises(InvalidScalarError):
            Signature.from_bytes(bytes(BASEPOINT) + b"\xff" * 32)

    def test_zero_s_is_invalid(self, key):
        """Test s = 0 is rejected without raising"""
        signature = Signature(r=BASEPOINT, s=bytes(32))
        assert not key.to_account().is_valid_signature(b"m", signature)
