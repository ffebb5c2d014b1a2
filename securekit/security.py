"""
Security shortcuts

Factory functions for the three families of primitives:
1. Symmetric encryption: aes(), des()
2. Asymmetric keys: generate_key_pair(), generate_private_key(), ...
3. Digests: md5(), sha1(), hmac_md5(), hmac_sha1()

Example:
    >>> md5().digest_hex(b"abc")
    '900150983cd24fb0d6963f7d28e17f72'
    >>> md5(b"abc")
    '900150983cd24fb0d6963f7d28e17f72'
    >>> cryptor = aes()
    >>> cryptor.decrypt(cryptor.encrypt(b"data"))
    b'data'
"""

from typing import Optional, Union

from .common.config import DEFAULT_KEY_SIZE
from .crypto.algorithms import DigestAlgorithm, HmacAlgorithm, SymmetricAlgorithm
from .crypto.digest import Digester, DigestInput
from .crypto.keys import (
    SecretKey, KeyPair, generate_key, generate_des_key, generate_pbe_key,
    generate_private_key, generate_public_key, generate_key_pair,
)
from .crypto.mac import HMac
from .crypto.pki import (
    KeyStore, read_key_store, read_pkcs12_key_store, read_certificate,
    read_x509_certificate, get_certificate, get_private_key,
)
from .crypto.sign import Signature, generate_signature
from .crypto.symmetric import SymmetricCryptor

__all__ = [
    'DEFAULT_KEY_SIZE',
    'aes',
    'des',
    'md5',
    'sha1',
    'hmac_md5',
    'hmac_sha1',
    'generate_key',
    'generate_des_key',
    'generate_pbe_key',
    'generate_private_key',
    'generate_public_key',
    'generate_key_pair',
    'generate_signature',
    'read_key_store',
    'read_pkcs12_key_store',
    'read_certificate',
    'read_x509_certificate',
    'get_certificate',
    'get_private_key',
    'SecretKey',
    'KeyPair',
    'KeyStore',
    'Signature',
]

Key = Optional[Union[bytes, SecretKey]]

_NO_DATA = object()


# ------------------------------------------------------------------ symmetric

def aes(key: Key = None) -> SymmetricCryptor:
    """
    AES cryptor. Without a key a random one is generated: decrypt with the
    same instance or with ``cryptor.key``.
    """
    return SymmetricCryptor(SymmetricAlgorithm.AES, key)


def des(key: Key = None) -> SymmetricCryptor:
    """DES cryptor, random key when key is omitted."""
    return SymmetricCryptor(SymmetricAlgorithm.DES, key)


# ------------------------------------------------------------------ digest

def _digester_or_hex(algorithm: DigestAlgorithm, data):
    digester = Digester(algorithm)
    if data is _NO_DATA:
        return digester
    return digester.digest_hex(data)


def md5(data: DigestInput = _NO_DATA) -> Union[Digester, Optional[str]]:
    """
    MD5 Digester, or the hex MD5 of data when data is given.

    Args:
        data: bytes, text, path or binary stream (optional)
    """
    return _digester_or_hex(DigestAlgorithm.MD5, data)


def sha1(data: DigestInput = _NO_DATA) -> Union[Digester, Optional[str]]:
    """
    SHA-1 Digester, or the hex SHA-1 of data when data is given.

    Args:
        data: bytes, text, path or binary stream (optional)
    """
    return _digester_or_hex(DigestAlgorithm.SHA1, data)


def hmac_md5(key: Key = None) -> HMac:
    """HmacMD5 calculator, random key when key is omitted."""
    return HMac(HmacAlgorithm.HmacMD5, key)


def hmac_sha1(key: Key = None) -> HMac:
    """HmacSHA1 calculator, random key when key is omitted."""
    return HMac(HmacAlgorithm.HmacSHA1, key)
