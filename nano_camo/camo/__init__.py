"""
NanoCamo - Camo Package
=========================
Versioni del protocollo, address camo_ e notifiche.
"""

from nano_camo.camo.version import CamoVersion, CamoVersions
from nano_camo.camo.address import CamoAddress
from nano_camo.camo.notification import Notification

__all__ = [
    "CamoVersion",
    "CamoVersions",
    "CamoAddress",
    "Notification",
]
