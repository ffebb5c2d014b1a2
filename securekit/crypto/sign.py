"""
Digital Signatures

Signature pairs a digest algorithm with an asymmetric algorithm under the
provider name "<DIGEST>with<ASYMMETRIC>" (e.g. SHA1withRSA). RSA uses
PKCS#1 v1.5 padding. With no digest ("NONE") the data to sign must
already be a digest.
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import dsa, padding, rsa, utils

from ..common.exceptions import CryptoError
from .algorithms import AsymmetricAlgorithm, DigestAlgorithm

logger = logging.getLogger(__name__)

NO_DIGEST = "NONE"

_PRIVATE_KEYS = {
    AsymmetricAlgorithm.RSA: rsa.RSAPrivateKey,
    AsymmetricAlgorithm.DSA: dsa.DSAPrivateKey,
}
_PUBLIC_KEYS = {
    AsymmetricAlgorithm.RSA: rsa.RSAPublicKey,
    AsymmetricAlgorithm.DSA: dsa.DSAPublicKey,
}


class Signature:
    """
    Signer/verifier for one digest + asymmetric algorithm pair.

    NONEwith<ASYM> takes a precomputed digest and signs it as Prehashed, so
    NONEwithRSA output carries a DigestInfo header. It is not byte-compatible
    with raw NONEwithRSA signatures produced by Java providers.

    Example:
        >>> Signature(AsymmetricAlgorithm.RSA, DigestAlgorithm.SHA256).algorithm
        'SHA256withRSA'
    """

    def __init__(
        self,
        asymmetric: Union[AsymmetricAlgorithm, str],
        digest: Optional[Union[DigestAlgorithm, str]] = None
    ):
        self.asymmetric = AsymmetricAlgorithm.of(asymmetric)
        if digest is None or (isinstance(digest, str) and digest.strip().upper() == NO_DIGEST):
            self.digest = None
        else:
            self.digest = DigestAlgorithm.of(digest)

        digest_part = NO_DIGEST if self.digest is None else self.digest.name
        self.algorithm = f"{digest_part}with{self.asymmetric.value}"

    def __repr__(self) -> str:
        return f"Signature({self.algorithm})"

    def _hash_for(self, data: bytes):
        if self.digest is not None:
            return self.digest.hash_algorithm()

        # Pre-hashed input: the digest length identifies the hash
        for candidate in DigestAlgorithm:
            hash_algorithm = candidate.hash_algorithm()
            if hash_algorithm.digest_size == len(data):
                return utils.Prehashed(hash_algorithm)
        raise CryptoError(
            f"{self.algorithm} expects a precomputed digest, got {len(data)} bytes"
        )

    def _check_key(self, key, key_types: dict):
        if not isinstance(key, key_types[self.asymmetric]):
            raise CryptoError(f"{self.algorithm} cannot use key of type {type(key).__name__}")

    def sign(self, private_key, data: bytes) -> bytes:
        """
        Sign data.

        Args:
            private_key: RSA or DSA private key matching the asymmetric algorithm
            data: Data to sign (or its digest for NONE)

        Returns:
            Raw signature bytes

        Raises:
            CryptoError: If the key does not fit or the provider refuses
        """
        self._check_key(private_key, _PRIVATE_KEYS)
        hash_algorithm = self._hash_for(data)
        try:
            if self.asymmetric is AsymmetricAlgorithm.RSA:
                return private_key.sign(data, padding.PKCS1v15(), hash_algorithm)
            return private_key.sign(data, hash_algorithm)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"{self.algorithm} signing failed: {e}") from e

    def verify(self, public_key, data: bytes, signature: bytes) -> bool:
        """
        Verify a signature.

        Args:
            public_key: RSA or DSA public key matching the asymmetric algorithm
            data: Signed data (or its digest for NONE)
            signature: Raw signature bytes

        Returns:
            True if the signature is valid, False otherwise

        Raises:
            CryptoError: If the key does not fit or the provider refuses
        """
        self._check_key(public_key, _PUBLIC_KEYS)
        hash_algorithm = self._hash_for(data)
        try:
            if self.asymmetric is AsymmetricAlgorithm.RSA:
                public_key.verify(signature, data, padding.PKCS1v15(), hash_algorithm)
            else:
                public_key.verify(signature, data, hash_algorithm)
            return True
        except InvalidSignature:
            logger.debug("%s signature rejected", self.algorithm)
            return False
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"{self.algorithm} verification failed: {e}") from e


def generate_signature(
    asymmetric: Union[AsymmetricAlgorithm, str],
    digest: Optional[Union[DigestAlgorithm, str]] = None
) -> Signature:
    """
    Build a Signature for an asymmetric algorithm and optional digest.

    Raises:
        CryptoError: If either algorithm is unknown
    """
    return Signature(asymmetric, digest)
