"""
NanoCamo - Pytest Configuration
=================================
Fixtures e configurazione per testing.

Last Updated: 2026-10-19
Version: 1.0.0
"""

import logging

import pytest

# Internal imports
from nano_camo.camo.version import CamoVersions
from nano_camo.config import override_settings, reload_settings
from nano_camo.domain.keypairs import Key
from nano_camo.wallet.hd_wallet import CamoKeys, CamoWallet


ZERO_SEED = bytes(32)


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def fresh_settings():
    """Singleton settings ricaricato per ogni test"""
    reload_settings()
    yield
    reload_settings()
    # handler della CLI legati a stream chiusi dal CliRunner
    camo_logger = logging.getLogger("nanocamo")
    camo_logger.handlers.clear()
    camo_logger.setLevel(logging.NOTSET)


@pytest.fixture
def test_config():
    """Test configuration"""
    return override_settings(scan_max_index=16, log_level="DEBUG")


# ============================================================================
# VERSION FIXTURES
# ============================================================================

@pytest.fixture
def versions_v1():
    """Version set con la sola v1"""
    return CamoVersions.from_byte(0x01)


# ============================================================================
# WALLET FIXTURES
# ============================================================================

@pytest.fixture
def zero_wallet(test_config):
    """Wallet dal seed di 32 zeri"""
    return CamoWallet(ZERO_SEED, config=test_config)


@pytest.fixture
def recipient_keys(versions_v1):
    """Chiavi camo del destinatario (seed 127 * 32, indice 99)"""
    return CamoKeys.from_seed(bytes([127] * 32), 99, versions_v1)


@pytest.fixture
def sender_key():
    """Chiave nano_ del mittente"""
    return Key.from_seed(bytes([127] * 32), 0)


@pytest.fixture
def frontier():
    """Hash frontier del mittente"""
    return bytes([50] * 32)
