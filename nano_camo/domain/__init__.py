"""
NanoCamo - Domain Package
===========================
Primitive crittografiche, derivazione chiavi e account Nano.
"""

from nano_camo.domain.points import PublicPoint, BASEPOINT
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.domain.keypairs import Account, Key, Signature

__all__ = [
    "PublicPoint",
    "BASEPOINT",
    "SecretBytes",
    "SecretScalar",
    "Account",
    "Key",
    "Signature",
]
