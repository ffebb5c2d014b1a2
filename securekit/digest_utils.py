"""
One-call digest functions.

Each function takes bytes, text (encoded with charset, default utf-8),
a path-like object or a binary stream. None input returns None.
"""

from typing import Optional

from .common.utils import encode_hex
from .crypto.algorithms import DigestAlgorithm
from .crypto.digest import Digester, DigestInput


def _digest(algorithm: DigestAlgorithm, data: DigestInput, charset: Optional[str]) -> Optional[bytes]:
    return Digester(algorithm).digest(data, charset)


def md5(data: DigestInput, charset: Optional[str] = None) -> Optional[bytes]:
    """
    Compute the MD5 digest of data.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        16-byte digest, or None for None input
    """
    return _digest(DigestAlgorithm.MD5, data, charset)


def md5_hex(data: DigestInput, charset: Optional[str] = None) -> Optional[str]:
    """
    Compute the MD5 digest of data as lowercase hex.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        32-character hex string, or None for None input
    """
    return encode_hex(md5(data, charset))


def sha1(data: DigestInput, charset: Optional[str] = None) -> Optional[bytes]:
    """
    Compute the SHA-1 digest of data.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        20-byte digest, or None for None input
    """
    return _digest(DigestAlgorithm.SHA1, data, charset)


def sha1_hex(data: DigestInput, charset: Optional[str] = None) -> Optional[str]:
    """
    Compute the SHA-1 digest of data as lowercase hex.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        40-character hex string, or None for None input
    """
    return encode_hex(sha1(data, charset))


def sha256(data: DigestInput, charset: Optional[str] = None) -> Optional[bytes]:
    """
    Compute the SHA-256 digest of data.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        32-byte digest, or None for None input
    """
    return _digest(DigestAlgorithm.SHA256, data, charset)


def sha256_hex(data: DigestInput, charset: Optional[str] = None) -> Optional[str]:
    """
    Compute the SHA-256 digest of data as lowercase hex.

    Args:
        data: Bytes, text, path-like object or binary stream
        charset: Encoding for text input (default: utf-8)

    Returns:
        64-character hex string, or None for None input
    """
    return encode_hex(sha256(data, charset))
