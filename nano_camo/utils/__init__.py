"""
NanoCamo - Utilities
======================
"""

from nano_camo.utils.base32 import base32_encode, base32_decode

__all__ = [
    "base32_encode",
    "base32_decode",
]
