"""
Algorithm identifiers

Closed enumerations mapping each supported algorithm to the name the
provider knows it by. Unrecognized names are rejected here, before any
provider call is made.
"""

from enum import Enum
from typing import Union

from cryptography.hazmat.primitives import hashes

from ..common.exceptions import CryptoError


class _AlgorithmEnum(Enum):

    @classmethod
    def of(cls, value: Union["_AlgorithmEnum", str]):
        """
        Resolve a member from itself, its provider name or its member name.

        Matching is case-insensitive ("SHA-1", "sha1" and "SHA1" all resolve
        to DigestAlgorithm.SHA1).

        Raises:
            CryptoError: If value is blank or names no member
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise CryptoError(f"{cls.__name__}: algorithm is blank!")

        wanted = value.strip().upper()
        for member in cls:
            if wanted in (member.name.upper(), member.value.upper()):
                return member
        raise CryptoError(f"{cls.__name__}: unsupported algorithm '{value}'")


class DigestAlgorithm(_AlgorithmEnum):
    """Message digest algorithms."""
    MD5 = "MD5"
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"

    @property
    def hashlib_name(self) -> str:
        return self.value.replace("-", "").lower()

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Matching ``cryptography`` hash instance (used for signatures)."""
        return _HASHES[self]()


_HASHES = {
    DigestAlgorithm.MD5: hashes.MD5,
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA256: hashes.SHA256,
    DigestAlgorithm.SHA384: hashes.SHA384,
    DigestAlgorithm.SHA512: hashes.SHA512,
}


class HmacAlgorithm(_AlgorithmEnum):
    """Keyed digest algorithms."""
    HmacMD5 = "HmacMD5"
    HmacSHA1 = "HmacSHA1"
    HmacSHA256 = "HmacSHA256"
    HmacSHA384 = "HmacSHA384"
    HmacSHA512 = "HmacSHA512"

    @property
    def digest_algorithm(self) -> DigestAlgorithm:
        return DigestAlgorithm.of(self.value[len("Hmac"):])


class SymmetricAlgorithm(_AlgorithmEnum):
    """Block ciphers, used in ECB mode with PKCS#5 padding."""
    AES = "AES"
    DES = "DES"
    DESede = "DESede"

    @property
    def transformation(self) -> str:
        return f"{self.value}/ECB/PKCS5Padding"


class AsymmetricAlgorithm(_AlgorithmEnum):
    """Public key algorithms."""
    RSA = "RSA"
    DSA = "DSA"
