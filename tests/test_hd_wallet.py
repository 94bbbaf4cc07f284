"""
NanoCamo - HD Wallet Tests
============================
Unit tests for camo key derivation from a wallet seed.
"""

import pytest

from nano_camo.camo.version import CamoVersions
from nano_camo.domain.keypairs import Key
from nano_camo.errors import InvalidSeedLengthError, NoCompatibleVersionError, SecretReleasedError
from nano_camo.wallet.hd_wallet import CamoKeys, CamoViewKeys, CamoWallet, WalletMasterKeys


C8_SEED = bytes([200] * 32)
C8_INDEX_5_ADDRESS = (
    "camo_168be68tsxk1o8xferck89gj75kzk8fpbhote77ed1db975htuf11psgpwq9wabcxdjs"
    "sycim6tidgkau48x6tgcqnsnxj341mamjpoy8umaz45c"
)
ZERO_INDEX_0_ADDRESS = (
    "camo_18wydi3gmaw4aefwhkijrjw4qd87i4tc85wbnij95gz4em3qssickhpoj9i4t6taqk46"
    "wdnie7aj8ijrjhtcdgsp3c1oqnahct3otygxx4k7f3o4"
)


class TestAddressVectors:
    """Test known camo_ addresses"""

    def test_c8_seed_index_5(self, versions_v1):
        """Test seed [200] * 32, index 5"""
        keys = CamoKeys.from_seed(C8_SEED, 5, versions_v1)
        assert str(keys.to_camo_address()) == C8_INDEX_5_ADDRESS

    def test_zero_seed_index_0(self, versions_v1):
        """Test zero seed, index 0"""
        keys = CamoKeys.from_seed(bytes(32), 0, versions_v1)
        assert str(keys.to_camo_address()) == ZERO_INDEX_0_ADDRESS

    def test_wallet_default_versions(self, test_config):
        """Test wallet uses default address versions from config"""
        wallet = CamoWallet(C8_SEED, config=test_config)
        assert str(wallet.derive_address(5)) == C8_INDEX_5_ADDRESS


class TestKeyDerivation:
    """Test full and view-only derivation"""

    def test_points_match_scalars(self, zero_wallet):
        """Test K_spend = k_spend·G and K_view = k_view·G"""
        keys = zero_wallet.derive_keys(3)
        assert keys.spend_key == keys.spend_scalar.multiply_base()
        assert keys.view_key == keys.view_scalar.multiply_base()

    def test_view_only_matches_full(self, zero_wallet):
        """Test view-only keys derive the same public keys"""
        view_only = zero_wallet.view_only()

        for index in range(0, 200, 7):
            keys = zero_wallet.derive_keys(index)
            view_keys = view_only.derive(index, keys.versions)

            assert view_keys.spend_key == keys.spend_key
            assert view_keys.view_key == keys.view_key
            assert view_keys.view_scalar == keys.view_scalar
            assert view_keys.to_camo_address() == keys.to_camo_address()
            assert view_keys == keys.to_view_keys()

    def test_distinct_indices(self, zero_wallet):
        """Test different indices give different addresses"""
        addresses = {str(zero_wallet.derive_address(i)) for i in range(10)}
        assert len(addresses) == 10

    def test_signer_account(self, zero_wallet):
        """Test notification account is K_spend"""
        keys = zero_wallet.derive_keys(1)
        view_keys = zero_wallet.derive_view_keys(1)

        assert keys.signer_account() == view_keys.signer_account()
        assert keys.signer_account() == keys.to_camo_address().signer_account()
        assert keys.signer_key().to_account() == keys.signer_account()

    def test_signatures(self, zero_wallet):
        """Test camo keys sign as the notification account"""
        keys = zero_wallet.derive_keys(1)
        signature = keys.sign_message(b"block hash")

        assert zero_wallet.derive_view_keys(1).is_valid_signature(b"block hash", signature)
        assert keys.to_camo_address().is_valid_signature(b"block hash", signature)

    def test_camo_keys_differ_from_nano_keys(self, zero_wallet):
        """Test camo spend key is not the plain nano_ key"""
        keys = zero_wallet.derive_keys(0)
        assert zero_wallet.nano_key(0).to_account() != keys.signer_account()

    def test_master_keys(self):
        """Test K_master = k_master·G"""
        with WalletMasterKeys(C8_SEED) as master:
            assert master.master_spend.multiply_base() == master.master_spend_point
            assert master.spend_seed != master.view_seed


class TestVersions:
    """Test version requirements on derivation"""

    @pytest.mark.parametrize("bits", [0x00, 0x02, 0x80])
    def test_unimplemented_versions(self, bits):
        """Test keys need an implemented version"""
        with pytest.raises(NoCompatibleVersionError):
            CamoKeys.from_seed(C8_SEED, 0, CamoVersions.from_byte(bits))

    def test_view_keys_unimplemented_versions(self, zero_wallet):
        """Test same rule on view-only derivation"""
        with pytest.raises(NoCompatibleVersionError):
            zero_wallet.derive_view_keys(0, CamoVersions.empty())

    def test_extra_versions_signaled(self):
        """Test v1 plus unimplemented versions is accepted and encoded"""
        versions = CamoVersions.from_byte(0x03)
        address = CamoKeys.from_seed(C8_SEED, 5, versions).to_camo_address()

        assert address.versions == versions
        assert str(address) != C8_INDEX_5_ADDRESS


class TestWalletLifecycle:
    """Test wallet cache and wiping"""

    def test_address_cache(self, zero_wallet):
        """Test derive_address returns the cached object"""
        first = zero_wallet.derive_address(4)
        assert zero_wallet.derive_address(4) is first

        zero_wallet.clear_cache()
        second = zero_wallet.derive_address(4)
        assert second is not first
        assert second == first

    def test_cache_keyed_by_versions(self, zero_wallet):
        """Test versions are part of the cache key"""
        first = zero_wallet.derive_address(4)
        other = zero_wallet.derive_address(4, CamoVersions.from_byte(0x03))
        assert first != other

    def test_invalid_seed(self):
        """Test seed length"""
        with pytest.raises(InvalidSeedLengthError):
            CamoWallet(bytes(31))

    def test_create_new(self, test_config):
        """Test random wallets differ"""
        first = CamoWallet.create_new(test_config)
        second = CamoWallet.create_new(test_config)
        assert first.derive_address(0) != second.derive_address(0)

    def test_wipe(self, test_config):
        """Test wallet wipe"""
        with CamoWallet(C8_SEED, config=test_config) as wallet:
            wallet.derive_address(0)

        with pytest.raises(SecretReleasedError):
            wallet.seed.expose_secret()
        with pytest.raises(SecretReleasedError):
            wallet.derive_keys(0)

    def test_keys_wipe(self, versions_v1):
        """Test per-index keys wipe"""
        with CamoKeys.from_seed(C8_SEED, 0, versions_v1) as keys:
            pass
        assert keys.spend_scalar.released
        assert keys.view_scalar.released

    def test_repr_hides_secrets(self, zero_wallet):
        """Test repr"""
        keys = zero_wallet.derive_keys(0)
        assert "secret" in repr(keys)
        assert keys.spend_scalar.expose_secret().hex() not in repr(keys)
        assert isinstance(keys.to_view_keys(), CamoViewKeys)
        assert isinstance(zero_wallet.nano_key(0), Key)
