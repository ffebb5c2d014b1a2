"""
Common utilities, settings and exceptions for SecureKit.
"""

from .utils import encode_hex, decode_hex, random_bytes, random_string
from .exceptions import CryptoError
from .config import CryptoSettings, settings

__all__ = [
    'encode_hex',
    'decode_hex',
    'random_bytes',
    'random_string',
    'CryptoError',
    'CryptoSettings',
    'settings',
]
