"""
NanoCamo - Camo HD Wallet
===========================
Gerarchia deterministica delle chiavi Camo a partire dal seed.

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

Gerarchia:

    seed (32 bytes)
     ├── s_spend = H_category(seed, 0)
     │    └── k_master = H_si(s_spend, 0),  K_master = k_master·G
     └── s_view  = H_category(seed, 1)
          └── per indice i: (partial_spend, k_view) = get_partial_keys(s_view, i)
               k_spend = k_master + partial_spend

View-only: (s_view, K_master) basta per K_spend, K_view e k_view
di qualunque indice; k_spend non è derivabile.

IMPORTANTE: il seed arriva da uno storage esterno e NON viene mai
persistito da questo modulo.
"""

from typing import Dict, Optional, Union

from nano_camo.camo.address import CamoAddress
from nano_camo.camo.version import CamoVersion, CamoVersions
from nano_camo.config import CamoSettings, get_settings
from nano_camo.constants import SEED_SIZE
from nano_camo.domain.crypto_core import generate_random_bytes
from nano_camo.domain.hashes import (
    get_camo_spend_seed,
    get_camo_view_seed,
    get_master_spend_scalar,
    get_partial_keys,
    h_si,
    validate_index,
    validate_seed,
)
from nano_camo.domain.keypairs import Account, Key, Signature
from nano_camo.domain.points import PublicPoint
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.errors import NoCompatibleVersionError
from nano_camo.logging_setup import get_logger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("wallet")


SeedLike = Union[bytes, bytearray, SecretBytes]


def _require_v1(versions: CamoVersions) -> CamoVersion:
    """Le chiavi v1 richiedono che la versione implementata più alta sia la v1"""
    highest = versions.highest_supported_version()
    if highest != CamoVersion.ONE:
        raise NoCompatibleVersionError(
            "Versions do not include an implemented camo protocol version",
            code="NO_COMPATIBLE_VERSION",
            details={"versions": [int(v) for v in versions]}
        )
    return highest


# ============================================================================
# MASTER KEYS
# ============================================================================

class WalletMasterKeys:
    """
    Costanti del wallet (s_spend, s_view, k_master, K_master).

    Calcolate una volta per seed, immutabili. `wipe()` azzera i segreti.
    """

    __slots__ = ("_spend_seed", "_view_seed", "_master_spend", "_master_spend_point")

    def __init__(self, seed: SeedLike):
        seed = validate_seed(seed)
        self._spend_seed = get_camo_spend_seed(seed)
        self._view_seed = get_camo_view_seed(seed)
        self._master_spend = get_master_spend_scalar(self._spend_seed)
        self._master_spend_point = self._master_spend.multiply_base()

    @property
    def spend_seed(self) -> SecretBytes:
        return self._spend_seed

    @property
    def view_seed(self) -> SecretBytes:
        return self._view_seed

    @property
    def master_spend(self) -> SecretScalar:
        return self._master_spend

    @property
    def master_spend_point(self) -> PublicPoint:
        return self._master_spend_point

    def view_only(self) -> "ViewOnlyKeys":
        """Sottoinsieme view-only (copia indipendente di s_view)"""
        return ViewOnlyKeys(self._view_seed.copy(), self._master_spend_point)

    def wipe(self) -> None:
        self._spend_seed.wipe()
        self._view_seed.wipe()
        self._master_spend.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __repr__(self) -> str:
        return f"WalletMasterKeys(K_master={self._master_spend_point.short()}...)"


class ViewOnlyKeys:
    """
    (s_view, K_master): derivazione senza chiavi di spesa.

    Examples:
        >>> view_only = WalletMasterKeys(seed).view_only()
        >>> view_keys = view_only.derive(5, CamoVersions.from_byte(0x01))
        >>> str(view_keys.to_camo_address()).startswith("camo_")
        True
    """

    __slots__ = ("_view_seed", "_master_spend_point")

    def __init__(self, view_seed: SecretBytes, master_spend_point: PublicPoint):
        self._view_seed = validate_seed(view_seed)
        self._master_spend_point = master_spend_point

    @property
    def master_spend_point(self) -> PublicPoint:
        return self._master_spend_point

    def derive(self, index: int, versions: CamoVersions) -> "CamoViewKeys":
        return CamoViewKeys.from_seed(self._view_seed, self._master_spend_point, index, versions)

    def wipe(self) -> None:
        self._view_seed.wipe()

    def __repr__(self) -> str:
        return f"ViewOnlyKeys(K_master={self._master_spend_point.short()}...)"


# ============================================================================
# PER-INDEX KEYS
# ============================================================================

class CamoKeys:
    """
    Chiavi Camo complete per un indice: (versioni, k_spend, k_view).

    K_spend = k_spend·G e K_view = k_view·G sono calcolati alla costruzione.

    Attributes:
        index: Indice account
        versions: Versioni segnalate dall'address
    """

    __slots__ = ("index", "versions", "_spend", "_view", "_spend_point", "_view_point")

    def __init__(
        self,
        index: int,
        versions: CamoVersions,
        spend: SecretScalar,
        view: SecretScalar
    ):
        self.index = validate_index(index)
        self.versions = versions
        self._spend = spend
        self._view = view
        self._spend_point = spend.multiply_base()
        self._view_point = view.multiply_base()

    @classmethod
    def from_seed(cls, seed: SeedLike, index: int, versions: CamoVersions) -> "CamoKeys":
        """
        Derivazione completa dal seed del wallet.

        Raises:
            InvalidSeedLengthError: Seed non di 32 bytes
            NoCompatibleVersionError: Nessuna versione implementata in `versions`
        """
        with WalletMasterKeys(seed) as master:
            return cls.from_master(master, index, versions)

    @classmethod
    def from_master(cls, master: WalletMasterKeys, index: int, versions: CamoVersions) -> "CamoKeys":
        _require_v1(versions)
        partial_spend, view = get_partial_keys(master.view_seed, index)
        with partial_spend:
            spend = master.master_spend + partial_spend
        return cls(index, versions, spend, view)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def camo_versions(self) -> CamoVersions:
        return self.versions

    @property
    def spend_scalar(self) -> SecretScalar:
        return self._spend

    @property
    def view_scalar(self) -> SecretScalar:
        return self._view

    @property
    def spend_key(self) -> PublicPoint:
        return self._spend_point

    @property
    def view_key(self) -> PublicPoint:
        return self._view_point

    def to_view_keys(self) -> "CamoViewKeys":
        return CamoViewKeys(self.index, self.versions, self._spend_point, self._view.copy())

    def to_camo_address(self) -> CamoAddress:
        return CamoAddress(self.versions, self._spend_point, self._view_point)

    def signer_key(self) -> Key:
        """Chiave dell'account di notifica (copia di k_spend)"""
        return Key(self._spend.copy())

    def signer_account(self) -> Account:
        return Account(self._spend_point)

    def sign_message(self, message: bytes) -> Signature:
        with self.signer_key() as key:
            return key.sign_message(message)

    def derive_key(self, shared_secret: SecretBytes, index: int = 0) -> Key:
        """Chiave mascherata: k_spend + H_si(secret, i)"""
        with h_si(shared_secret, index) as k_shared:
            return Key(self._spend + k_shared)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def wipe(self) -> None:
        self._spend.wipe()
        self._view.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, CamoKeys):
            return NotImplemented
        return (
            self.versions == other.versions
            and self._spend == other._spend
            and self._view == other._view
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"CamoKeys(index={self.index}, K_spend={self._spend_point.short()}..., [secret keys])"


class CamoViewKeys:
    """
    Chiavi Camo view-only per un indice: (versioni, K_spend, k_view).

    Permette di riconoscere i pagamenti in arrivo e calcolarne gli
    account mascherati, non di spenderli.
    """

    __slots__ = ("index", "versions", "_spend_point", "_view", "_view_point")

    def __init__(
        self,
        index: int,
        versions: CamoVersions,
        spend_point: PublicPoint,
        view: SecretScalar
    ):
        self.index = validate_index(index)
        self.versions = versions
        self._spend_point = spend_point
        self._view = view
        self._view_point = view.multiply_base()

    @classmethod
    def from_seed(
        cls,
        view_seed: SecretBytes,
        master_spend_point: PublicPoint,
        index: int,
        versions: CamoVersions
    ) -> "CamoViewKeys":
        """
        K_spend = K_master + partial_spend·G, senza mai calcolare k_spend.

        Raises:
            NoCompatibleVersionError: Nessuna versione implementata in `versions`
        """
        _require_v1(versions)
        partial_spend, view = get_partial_keys(view_seed, index)
        with partial_spend:
            spend_point = master_spend_point + partial_spend.multiply_base()
        return cls(index, versions, spend_point, view)

    def camo_versions(self) -> CamoVersions:
        return self.versions

    @property
    def view_scalar(self) -> SecretScalar:
        return self._view

    @property
    def spend_key(self) -> PublicPoint:
        return self._spend_point

    @property
    def view_key(self) -> PublicPoint:
        return self._view_point

    def to_camo_address(self) -> CamoAddress:
        return CamoAddress(self.versions, self._spend_point, self._view_point)

    def signer_account(self) -> Account:
        return Account(self._spend_point)

    def is_valid_signature(self, message: bytes, signature: Signature) -> bool:
        return self.signer_account().is_valid_signature(message, signature)

    def derive_account(self, shared_secret: SecretBytes, index: int = 0) -> Account:
        """Account mascherato: K_spend + H_si(secret, i)·G"""
        with h_si(shared_secret, index) as k_shared:
            return Account(self._spend_point + k_shared.multiply_base())

    def wipe(self) -> None:
        self._view.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, CamoViewKeys):
            return NotImplemented
        return (
            self.versions == other.versions
            and self._spend_point == other._spend_point
            and self._view == other._view
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"CamoViewKeys(index={self.index}, K_spend={self._spend_point.short()}..., [view key])"


# ============================================================================
# CAMO WALLET
# ============================================================================

class CamoWallet:
    """
    Wallet Camo deterministico.

    Deriva address `camo_` e chiavi per indice dal seed da 32 bytes.
    Gli address (pubblici) sono messi in cache; le chiavi segrete no.

    Examples:
        >>> wallet = CamoWallet(bytes([200] * 32))
        >>> address = wallet.derive_address(5)
        >>> str(address)[:5]
        'camo_'
    """

    def __init__(self, seed: SeedLike, config: Optional[CamoSettings] = None):
        """
        Args:
            seed: Seed del wallet (32 bytes)
            config: Configurazione (default: get_settings())

        Raises:
            InvalidSeedLengthError: Seed non di 32 bytes
        """
        self.config = config or get_settings()
        self._seed = validate_seed(seed)
        self.master_keys = WalletMasterKeys(self._seed)

        self._address_cache: Dict[tuple, CamoAddress] = {}

        logger.info(
            "Camo wallet initialized",
            extra_data={"master_spend_key": self.master_keys.master_spend_point.short()}
        )

    @classmethod
    def create_new(cls, config: Optional[CamoSettings] = None) -> "CamoWallet":
        """Nuovo wallet da seed casuale (CSPRNG)"""
        return cls(bytearray(generate_random_bytes(SEED_SIZE)), config)

    @property
    def seed(self) -> SecretBytes:
        return self._seed

    def default_versions(self) -> CamoVersions:
        return self.config.address_versions()

    def _versions_or_default(self, versions: Optional[CamoVersions]) -> CamoVersions:
        return self.default_versions() if versions is None else versions

    def derive_keys(self, index: int, versions: Optional[CamoVersions] = None) -> CamoKeys:
        """Chiavi complete per l'indice"""
        return CamoKeys.from_master(self.master_keys, index, self._versions_or_default(versions))

    def derive_view_keys(self, index: int, versions: Optional[CamoVersions] = None) -> CamoViewKeys:
        """Chiavi view-only per l'indice"""
        return CamoViewKeys.from_seed(
            self.master_keys.view_seed,
            self.master_keys.master_spend_point,
            index,
            self._versions_or_default(versions)
        )

    def derive_address(self, index: int, versions: Optional[CamoVersions] = None) -> CamoAddress:
        """
        Address `camo_` per indice (cached).

        Args:
            index: Indice account
            versions: Versioni segnalate (default da config)

        Returns:
            CamoAddress: Address pubblico
        """
        versions = self._versions_or_default(versions)
        cache_key = (index, versions.encode_to_bits())

        if cache_key in self._address_cache:
            return self._address_cache[cache_key]

        with self.derive_view_keys(index, versions) as view_keys:
            address = view_keys.to_camo_address()

        self._address_cache[cache_key] = address

        logger.debug(
            "Camo address derived",
            extra_data={"index": index, "versions": versions.encode_to_bits()}
        )

        return address

    def nano_key(self, index: int) -> Key:
        """Chiave `nano_` standard all'indice (stesso seed)"""
        return Key.from_seed(self._seed, index)

    def view_only(self) -> ViewOnlyKeys:
        return self.master_keys.view_only()

    def clear_cache(self) -> None:
        self._address_cache.clear()

    def wipe(self) -> None:
        self._seed.wipe()
        self.master_keys.wipe()
        self.clear_cache()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __repr__(self) -> str:
        return f"CamoWallet(K_master={self.master_keys.master_spend_point.short()}..., cached={len(self._address_cache)})"


__all__ = [
    "WalletMasterKeys",
    "ViewOnlyKeys",
    "CamoKeys",
    "CamoViewKeys",
    "CamoWallet",
]
