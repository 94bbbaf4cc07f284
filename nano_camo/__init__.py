"""
NanoCamo - Camo Stealth Addresses for Nano
============================================
Derivazione chiavi, address camo_ e pagamenti stealth per Nano.

Version: 1.0.0
Author: NanoCamo Team
License: MIT
"""

__version__ = "1.0.0"
__author__ = "NanoCamo Team"
__license__ = "MIT"

# Core imports
from nano_camo.camo.address import CamoAddress
from nano_camo.camo.notification import Notification
from nano_camo.camo.version import CamoVersion, CamoVersions
from nano_camo.config import CamoSettings, get_settings
from nano_camo.domain.keypairs import Account, Key, Signature
from nano_camo.domain.points import PublicPoint
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar

# Wallet
from nano_camo.wallet.hd_wallet import CamoKeys, CamoViewKeys, CamoWallet
from nano_camo.wallet.stealth_address import StealthReceiver, StealthSender

# Constants
from nano_camo.constants import (
    ALL_SUPPORTED_CAMO_VERSIONS,
    raw_to_nano,
)

__all__ = [
    # Version
    "__version__",

    # Core
    "CamoAddress",
    "Notification",
    "CamoVersion",
    "CamoVersions",
    "CamoSettings",
    "get_settings",
    "Account",
    "Key",
    "Signature",
    "PublicPoint",
    "SecretBytes",
    "SecretScalar",

    # Wallet
    "CamoKeys",
    "CamoViewKeys",
    "CamoWallet",
    "StealthReceiver",
    "StealthSender",

    # Constants
    "ALL_SUPPORTED_CAMO_VERSIONS",
    "raw_to_nano",
]
