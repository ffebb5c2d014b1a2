"""
HMAC

Keyed variant of Digester with the same input surface (bytes, text,
files, streams and their hex mirrors). Same threading rule: one caller
at a time per instance.
"""

import hmac
from typing import Optional, Union

from ..common.exceptions import CryptoError
from .algorithms import HmacAlgorithm
from .digest import Digester
from .keys import SecretKey, generate_key


class HMac(Digester):
    """
    HMAC calculator for a single algorithm and key.

    Example:
        >>> mac = HMac(HmacAlgorithm.HmacSHA1, b"key")
        >>> mac.digest_hex("The quick brown fox jumps over the lazy dog")
        'de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9'
    """

    def __init__(
        self,
        algorithm: Union[HmacAlgorithm, str],
        key: Optional[Union[bytes, SecretKey]] = None
    ):
        """
        Args:
            algorithm: HmacAlgorithm member or its name ("HmacMD5", ...)
            key: Raw key bytes or SecretKey; a random key is generated when omitted

        Raises:
            CryptoError: If the algorithm is unknown
        """
        self.hmac_algorithm = HmacAlgorithm.of(algorithm)
        if key is None:
            key = generate_key(self.hmac_algorithm)
        elif not isinstance(key, SecretKey):
            key = SecretKey(algorithm=self.hmac_algorithm.value, encoded=bytes(key))
        self.key = key
        super().__init__(self.hmac_algorithm.digest_algorithm)

    def _new_context(self):
        try:
            return hmac.new(self.key.encoded, digestmod=self.algorithm.hashlib_name)
        except ValueError as e:
            raise CryptoError(f"HMAC algorithm {self.hmac_algorithm.value} is not available") from e
