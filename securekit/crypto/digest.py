"""
Message Digests

Digester wraps one hashlib context for one algorithm and digests bytes,
text, files and streams. The context is reset after every computation so
an instance can be reused, but an instance must not be shared between
threads: each call mutates the context in place. Use copy() or separate
instances for concurrent digesting.
"""

import copy
import hashlib
import logging
import os
from typing import BinaryIO, Optional, Union

from ..common.config import settings
from ..common.exceptions import CryptoError
from ..common.utils import encode_hex
from .algorithms import DigestAlgorithm

logger = logging.getLogger(__name__)

DigestInput = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO, None]


class Digester:
    """
    Digest calculator for a single algorithm.

    Example:
        >>> Digester(DigestAlgorithm.MD5).digest_hex("")
        'd41d8cd98f00b204e9800998ecf8427e'
    """

    def __init__(self, algorithm: Union[DigestAlgorithm, str]):
        """
        Args:
            algorithm: DigestAlgorithm member or its name ("MD5", "SHA-1", ...)

        Raises:
            CryptoError: If the algorithm is unknown or unavailable
        """
        self.algorithm = DigestAlgorithm.of(algorithm)
        self._context = self._new_context()
        logger.debug("Initialized %s for %s", type(self).__name__, self.algorithm.value)

    def _new_context(self):
        try:
            return hashlib.new(self.algorithm.hashlib_name)
        except ValueError as e:
            raise CryptoError(f"Digest algorithm {self.algorithm.value} is not available") from e

    @property
    def digest_size(self) -> int:
        return self._context.digest_size

    def reset(self) -> "Digester":
        """Discard any data fed so far."""
        self._context = self._new_context()
        return self

    def copy(self) -> "Digester":
        """Clone this digester, including any data fed so far."""
        clone = copy.copy(self)
        clone._context = self._context.copy()
        return clone

    # ------------------------------------------------------------------ digest

    def digest(
        self,
        data: DigestInput,
        charset: Optional[str] = None,
        buffer_length: Optional[int] = None
    ) -> Optional[bytes]:
        """
        Digest any supported input.

        Dispatch:
            bytes-like  -> digest_bytes
            str         -> digest_str (encoded with charset)
            path-like   -> digest_file
            has read()  -> digest_stream (read buffer_length bytes at a time)
            None        -> None

        Raises:
            CryptoError: On unsupported input, unknown charset or I/O failure
        """
        if data is None:
            return None
        if isinstance(data, (bytes, bytearray, memoryview)):
            return self.digest_bytes(data)
        if isinstance(data, str):
            return self.digest_str(data, charset)
        if isinstance(data, os.PathLike):
            return self.digest_file(data)
        if hasattr(data, "read"):
            return self.digest_stream(data, buffer_length)
        raise CryptoError(f"Cannot digest object of type {type(data).__name__}")

    def digest_bytes(self, data: bytes) -> bytes:
        try:
            self._context.update(data)
            return self._context.digest()
        finally:
            self.reset()

    def digest_str(self, data: Optional[str], charset: Optional[str] = None) -> Optional[bytes]:
        """
        Digest text after encoding it.

        Args:
            data: Text to digest; None returns None
            charset: Encoding name (default: utf-8)
        """
        if data is None:
            return None
        try:
            encoded = data.encode(charset or settings.charset)
        except LookupError as e:
            raise CryptoError(f"Unknown charset: {charset}") from e
        return self.digest_bytes(encoded)

    def digest_file(self, path: Union[str, os.PathLike]) -> bytes:
        """
        Digest the full contents of a file.

        The file is always closed before returning. A failure to close it is
        logged and otherwise ignored.

        Raises:
            CryptoError: If the file cannot be opened or read
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            raise CryptoError(f"Cannot open file {path}: {e}") from e

        try:
            return self.digest_stream(f)
        finally:
            try:
                f.close()
            except OSError as e:
                logger.warning("Failed to close %s: %s", path, e)

    def digest_stream(self, stream: BinaryIO, buffer_length: Optional[int] = None) -> bytes:
        """
        Digest a binary stream until end-of-stream.

        The stream is not closed; it belongs to the caller.

        Args:
            stream: Object with a read(n) method returning bytes
            buffer_length: Chunk size; None or values below 1 use the default (1024)

        Raises:
            CryptoError: If reading fails
        """
        if buffer_length is None or buffer_length < 1:
            buffer_length = settings.buffer_size

        try:
            chunk = stream.read(buffer_length)
            while chunk:
                self._context.update(chunk)
                chunk = stream.read(buffer_length)
            return self._context.digest()
        except (OSError, ValueError) as e:
            raise CryptoError(f"Failed to read stream: {e}") from e
        except TypeError as e:
            raise CryptoError(f"Stream must yield bytes: {e}") from e
        finally:
            self.reset()

    # ------------------------------------------------------------------ hex

    def digest_hex(
        self,
        data: DigestInput,
        charset: Optional[str] = None,
        buffer_length: Optional[int] = None
    ) -> Optional[str]:
        """Same as digest(), returned as lowercase hex."""
        return encode_hex(self.digest(data, charset, buffer_length))

    def digest_bytes_hex(self, data: bytes) -> str:
        return encode_hex(self.digest_bytes(data))

    def digest_str_hex(self, data: Optional[str], charset: Optional[str] = None) -> Optional[str]:
        return encode_hex(self.digest_str(data, charset))

    def digest_file_hex(self, path: Union[str, os.PathLike]) -> str:
        return encode_hex(self.digest_file(path))

    def digest_stream_hex(self, stream: BinaryIO, buffer_length: Optional[int] = None) -> str:
        return encode_hex(self.digest_stream(stream, buffer_length))
