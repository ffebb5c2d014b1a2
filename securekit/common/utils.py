"""
Utility functions for SecureKit.
"""

import secrets
from typing import Optional


def encode_hex(data: Optional[bytes]) -> Optional[str]:
    """
    Encode bytes as lowercase hex, two digits per byte, no separators.
    
    Args:
        data: Bytes to encode (None is passed through)
    
    Returns:
        Hex string, or None when data is None
    """
    if data is None:
        return None
    return bytes(data).hex()


def decode_hex(data: str) -> bytes:
    """
    Decode a hex string (either case) to bytes.
    
    Args:
        data: Hex-encoded string
    
    Returns:
        Decoded bytes
    
    Raises:
        ValueError: If the string is not valid hex
    """
    return bytes.fromhex(data)


def random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.
    
    Args:
        length: Length in bytes
    
    Returns:
        Random bytes
    """
    return secrets.token_bytes(length)


def random_string(alphabet: str, length: int) -> str:
    """
    Build a random string by drawing characters from an alphabet.
    
    Args:
        alphabet: Characters to choose from
        length: Length of the result (values below 1 yield one character)
    
    Returns:
        Random string
    """
    if length < 1:
        length = 1
    return ''.join(secrets.choice(alphabet) for _ in range(length))
