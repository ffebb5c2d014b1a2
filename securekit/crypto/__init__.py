"""
Cryptographic primitives for SecureKit.

This package provides:
- Algorithm enumerations (digest, HMAC, symmetric, asymmetric)
- Digester and HMac over bytes, text, files and streams
- SymmetricCryptor (AES/DES/DESede, ECB with PKCS#5 padding)
- Secret key, key pair and encoded key handling
- Signatures and PKCS#12 / X.509 loading
"""

from .algorithms import DigestAlgorithm, HmacAlgorithm, SymmetricAlgorithm, AsymmetricAlgorithm
from .digest import Digester
from .mac import HMac
from .symmetric import SymmetricCryptor
from .keys import (
    SecretKey, KeyPair, generate_key, generate_des_key, generate_pbe_key,
    derive_key_from_password, generate_private_key, generate_public_key,
    generate_key_pair, encode_private_key, encode_public_key,
)
from .sign import Signature, generate_signature
from .pki import (
    KeyStore, read_key_store, read_pkcs12_key_store, read_certificate,
    read_x509_certificate, get_certificate, get_private_key,
    get_certificate_fingerprint,
)

__all__ = [
    'DigestAlgorithm',
    'HmacAlgorithm',
    'SymmetricAlgorithm',
    'AsymmetricAlgorithm',
    'Digester',
    'HMac',
    'SymmetricCryptor',
    'SecretKey',
    'KeyPair',
    'generate_key',
    'generate_des_key',
    'generate_pbe_key',
    'derive_key_from_password',
    'generate_private_key',
    'generate_public_key',
    'generate_key_pair',
    'encode_private_key',
    'encode_public_key',
    'Signature',
    'generate_signature',
    'KeyStore',
    'read_key_store',
    'read_pkcs12_key_store',
    'read_certificate',
    'read_x509_certificate',
    'get_certificate',
    'get_private_key',
    'get_certificate_fingerprint',
]
