"""
Symmetric Encryption/Decryption with PKCS#5/#7 Padding

SymmetricCryptor encrypts with AES, DES or DESede in ECB mode, matching
the "<ALG>/ECB/PKCS5Padding" transformation. A random key is generated
when none is supplied; decrypting requires the same instance or the same
key (see SymmetricCryptor.key).
"""

import logging
from typing import Optional, Union

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..common.config import settings
from ..common.exceptions import CryptoError
from ..common.utils import decode_hex, encode_hex
from .algorithms import SymmetricAlgorithm
from .keys import SecretKey, generate_key

logger = logging.getLogger(__name__)

_CIPHERS = {
    SymmetricAlgorithm.AES: algorithms.AES,
    SymmetricAlgorithm.DES: TripleDES,
    SymmetricAlgorithm.DESede: TripleDES,
}


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """
    Apply PKCS#7 padding to data.

    Args:
        data: Data to pad
        block_size: Block size in bytes (16 for AES, 8 for DES)

    Returns:
        Padded data (always at least one padding byte)
    """
    padding_length = block_size - (len(data) % block_size)
    padding = bytes([padding_length] * padding_length)
    return data + padding


def pkcs7_unpad(data: bytes, block_size: int) -> bytes:
    """
    Remove PKCS#7 padding from data.

    Args:
        data: Padded data
        block_size: Block size in bytes

    Returns:
        Unpadded data

    Raises:
        ValueError: If padding is invalid
    """
    if not data:
        raise ValueError("Cannot unpad empty data")

    padding_length = data[-1]

    if padding_length < 1 or padding_length > block_size:
        raise ValueError(f"Invalid padding length: {padding_length}")

    if data[-padding_length:] != bytes([padding_length] * padding_length):
        raise ValueError("Invalid PKCS#7 padding")

    return data[:-padding_length]


class SymmetricCryptor:
    """
    Block cipher in ECB mode with PKCS#5 padding.

    Example:
        >>> cryptor = SymmetricCryptor(SymmetricAlgorithm.AES)
        >>> cryptor.decrypt_str(cryptor.encrypt("secret"))
        'secret'
    """

    def __init__(
        self,
        algorithm: Union[SymmetricAlgorithm, str],
        key: Optional[Union[bytes, SecretKey]] = None
    ):
        """
        Args:
            algorithm: SymmetricAlgorithm member or its name
            key: Raw key bytes or SecretKey; a random key is generated when omitted

        Raises:
            CryptoError: If the algorithm is unknown or the key is invalid
        """
        self.algorithm = SymmetricAlgorithm.of(algorithm)
        if isinstance(key, SecretKey):
            key = key.encoded
        self.key = generate_key(self.algorithm, key)

        key_bytes = self.key.encoded
        if self.algorithm is SymmetricAlgorithm.DES:
            # K1 = K2 = K3 reduces TripleDES to single DES
            key_bytes = key_bytes * 3

        try:
            self._cipher = Cipher(
                _CIPHERS[self.algorithm](key_bytes),
                modes.ECB(),
            )
        except ValueError as e:
            raise CryptoError(f"Invalid {self.algorithm.value} key: {e}") from e

        self.block_size = self._cipher.algorithm.block_size // 8
        logger.debug("Initialized %s cryptor", self.algorithm.transformation)

    def encrypt(self, data: Union[bytes, str], charset: Optional[str] = None) -> bytes:
        """
        Encrypt data.

        Args:
            data: Plaintext bytes, or text encoded with charset (default: utf-8)
            charset: Encoding for text input

        Returns:
            Ciphertext bytes (a whole number of blocks)
        """
        if isinstance(data, str):
            try:
                data = data.encode(charset or settings.charset)
            except LookupError as e:
                raise CryptoError(f"Unknown charset: {charset}") from e

        encryptor = self._cipher.encryptor()
        padded_data = pkcs7_pad(bytes(data), self.block_size)
        return encryptor.update(padded_data) + encryptor.finalize()

    def decrypt(self, data: bytes) -> bytes:
        """
        Decrypt ciphertext.

        Args:
            data: Ciphertext bytes

        Returns:
            Plaintext bytes

        Raises:
            CryptoError: If the ciphertext is not block aligned or padding is invalid
        """
        try:
            decryptor = self._cipher.decryptor()
            padded_plaintext = decryptor.update(bytes(data)) + decryptor.finalize()
            return pkcs7_unpad(padded_plaintext, self.block_size)
        except ValueError as e:
            raise CryptoError(f"Decryption failed: {e}") from e

    def decrypt_str(self, data: bytes, charset: Optional[str] = None) -> str:
        """Decrypt ciphertext and decode the plaintext with charset (default: utf-8)."""
        plaintext = self.decrypt(data)
        try:
            return plaintext.decode(charset or settings.charset)
        except (LookupError, UnicodeDecodeError) as e:
            raise CryptoError(f"Cannot decode plaintext: {e}") from e

    def encrypt_hex(self, data: Union[bytes, str], charset: Optional[str] = None) -> str:
        return encode_hex(self.encrypt(data, charset))

    def decrypt_hex(self, data: str) -> bytes:
        try:
            ciphertext = decode_hex(data)
        except ValueError as e:
            raise CryptoError(f"Ciphertext is not valid hex: {e}") from e
        return self.decrypt(ciphertext)
