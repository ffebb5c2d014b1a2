"""
SecureKit

Thin convenience layer over the Python cryptography providers:
- Message digests (MD5, SHA-1, SHA-2) over bytes, text, files and streams
- HMAC with caller-supplied or random keys
- Symmetric encryption (AES, DES, DESede)
- Asymmetric key pairs, PKCS#8 / X.509 keys, PKCS#12 key stores
- Signatures composed as "<DIGEST>with<ASYMMETRIC>"
"""

from .common.exceptions import CryptoError
from .crypto import (
    DigestAlgorithm, HmacAlgorithm, SymmetricAlgorithm, AsymmetricAlgorithm,
    Digester, HMac, SymmetricCryptor, Signature, KeyStore, SecretKey, KeyPair,
)

__version__ = "1.0.0"
__author__ = "SecureKit Contributors"

__all__ = [
    'CryptoError',
    'DigestAlgorithm',
    'HmacAlgorithm',
    'SymmetricAlgorithm',
    'AsymmetricAlgorithm',
    'Digester',
    'HMac',
    'SymmetricCryptor',
    'Signature',
    'KeyStore',
    'SecretKey',
    'KeyPair',
]
