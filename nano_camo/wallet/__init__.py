"""
NanoCamo - Wallet Package
===========================
Gerarchia chiavi Camo e protocollo di pagamento stealth.
"""

from nano_camo.wallet.hd_wallet import (
    WalletMasterKeys,
    ViewOnlyKeys,
    CamoKeys,
    CamoViewKeys,
    CamoWallet,
)
from nano_camo.wallet.stealth_address import (
    PaymentPlan,
    SenderPayment,
    ReceivedPayment,
    StealthSender,
    StealthReceiver,
)

__all__ = [
    # HD Wallet
    "WalletMasterKeys",
    "ViewOnlyKeys",
    "CamoKeys",
    "CamoViewKeys",
    "CamoWallet",

    # Stealth
    "PaymentPlan",
    "SenderPayment",
    "ReceivedPayment",
    "StealthSender",
    "StealthReceiver",
]
