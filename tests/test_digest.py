"""
Unit tests for securekit.crypto.digest.
"""

import hashlib
import io
import logging

import pytest

from securekit.common.exceptions import CryptoError
from securekit.common.utils import encode_hex
from securekit.crypto.algorithms import DigestAlgorithm
from securekit.crypto.digest import Digester


class FailingStream(io.RawIOBase):
    """Stream that yields one chunk, then fails."""

    def __init__(self):
        self.calls = 0

    def readable(self):
        return True

    def read(self, size=-1):
        self.calls += 1
        if self.calls > 1:
            raise OSError("disk on fire")
        return b"partial"


class UnclosableStream(io.BytesIO):
    """Stream whose first close() fails."""

    def __init__(self, data):
        super().__init__(data)
        self.close_attempts = 0

    def close(self):
        self.close_attempts += 1
        if self.close_attempts == 1:
            raise OSError("device busy")
        super().close()


# ==============================
#  KNOWN VALUES
# ==============================
def test_empty_md5():
    assert Digester(DigestAlgorithm.MD5).digest_hex(b"") == "d41d8cd98f00b204e9800998ecf8427e"


def test_empty_sha1():
    assert Digester(DigestAlgorithm.SHA1).digest_hex("") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.mark.parametrize("algorithm, expected", [
    ("MD5", "900150983cd24fb0d6963f7d28e17f72"),
    ("SHA-1", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    ("SHA256", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
])
def test_abc_vectors(algorithm, expected):
    assert Digester(algorithm).digest_hex(b"abc") == expected


def test_hex_is_lowercase_two_digits_per_byte():
    assert encode_hex(b"\x0a\xff\x00") == "0aff00"


# ==============================
#  DETERMINISM AND HEX CONSISTENCY
# ==============================
@pytest.mark.parametrize("algorithm", list(DigestAlgorithm))
def test_digest_is_deterministic(algorithm, payload):
    assert Digester(algorithm).digest(payload) == Digester(algorithm).digest(payload)


@pytest.mark.parametrize("algorithm", list(DigestAlgorithm))
@pytest.mark.parametrize("data", [b"", b"a", b"hello world", bytes(range(256))])
def test_digest_hex_matches_hex_of_digest(algorithm, data):
    digester = Digester(algorithm)
    assert digester.digest_hex(data) == encode_hex(digester.digest(data))


def test_matches_hashlib(payload):
    assert Digester("SHA-512").digest(payload) == hashlib.sha512(payload).digest()


def test_instance_is_reusable(payload):
    digester = Digester(DigestAlgorithm.SHA1)
    first = digester.digest(payload)
    digester.digest(b"something else")
    assert digester.digest(payload) == first


# ==============================
#  STREAMS AND FILES
# ==============================
@pytest.mark.parametrize("buffer_length", [1, 7, 1024])
def test_chunking_does_not_change_result(buffer_length, payload):
    digester = Digester(DigestAlgorithm.MD5)
    expected = digester.digest(payload)
    assert digester.digest_stream(io.BytesIO(payload), buffer_length) == expected


@pytest.mark.parametrize("buffer_length", [0, -1, None])
def test_non_positive_buffer_uses_default(buffer_length, payload):
    digester = Digester(DigestAlgorithm.SHA256)
    assert digester.digest(io.BytesIO(payload), buffer_length=buffer_length) == digester.digest(payload)


def test_stream_is_left_open(payload):
    stream = io.BytesIO(payload)
    Digester(DigestAlgorithm.MD5).digest_stream(stream)
    assert not stream.closed


def test_file_equals_bytes(tmp_path, payload):
    path = tmp_path / "data.bin"
    path.write_bytes(payload)

    digester = Digester(DigestAlgorithm.SHA1)
    assert digester.digest(path) == digester.digest(payload)
    assert digester.digest_file(str(path)) == digester.digest(payload)
    assert digester.digest_file_hex(path) == digester.digest_hex(payload)


def test_missing_file_raises(tmp_path):
    with pytest.raises(CryptoError) as exc_info:
        Digester(DigestAlgorithm.MD5).digest(tmp_path / "missing.bin")
    assert isinstance(exc_info.value.__cause__, OSError)


def test_read_error_is_wrapped_and_state_reset():
    digester = Digester(DigestAlgorithm.MD5)
    with pytest.raises(CryptoError):
        digester.digest_stream(FailingStream())

    assert digester.digest_hex(b"") == "d41d8cd98f00b204e9800998ecf8427e"


def test_closed_stream_is_wrapped():
    stream = io.BytesIO(b"abc")
    stream.close()

    with pytest.raises(CryptoError) as exc_info:
        Digester(DigestAlgorithm.MD5).digest(stream)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_file_is_closed_when_read_fails(monkeypatch, tmp_path):
    handle = FailingStream()
    monkeypatch.setattr("securekit.crypto.digest.open", lambda path, mode: handle, raising=False)

    with pytest.raises(CryptoError):
        Digester(DigestAlgorithm.MD5).digest_file(tmp_path / "data.bin")
    assert handle.closed


def test_close_failure_is_logged_not_raised(monkeypatch, tmp_path, caplog):
    handle = UnclosableStream(b"abc")
    monkeypatch.setattr("securekit.crypto.digest.open", lambda path, mode: handle, raising=False)

    with caplog.at_level(logging.WARNING, logger="securekit.crypto.digest"):
        result = Digester(DigestAlgorithm.MD5).digest_file_hex(tmp_path / "data.bin")

    assert result == "900150983cd24fb0d6963f7d28e17f72"
    assert handle.close_attempts == 1
    assert "Failed to close" in caplog.text
    handle.close()


def test_text_stream_is_rejected():
    with pytest.raises(CryptoError):
        Digester(DigestAlgorithm.MD5).digest_stream(io.StringIO("text"))


# ==============================
#  TEXT INPUT
# ==============================
def test_text_defaults_to_utf8():
    digester = Digester(DigestAlgorithm.MD5)
    assert digester.digest("héllo") == digester.digest("héllo".encode("utf-8"))


def test_text_with_charset():
    digester = Digester(DigestAlgorithm.MD5)
    assert digester.digest_str("héllo", "latin-1") == digester.digest("héllo".encode("latin-1"))
    assert digester.digest_str_hex("héllo", "latin-1") == encode_hex(digester.digest("héllo".encode("latin-1")))


def test_unknown_charset_raises():
    with pytest.raises(CryptoError):
        Digester(DigestAlgorithm.MD5).digest("abc", "no-such-charset")


def test_none_input_returns_none():
    digester = Digester(DigestAlgorithm.SHA1)
    assert digester.digest(None) is None
    assert digester.digest_hex(None) is None
    assert digester.digest_str(None) is None


def test_unsupported_input_type():
    with pytest.raises(CryptoError):
        Digester(DigestAlgorithm.SHA1).digest(12345)


# ==============================
#  CONSTRUCTION, RESET AND COPY
# ==============================
@pytest.mark.parametrize("name", ["", "   ", "MD4", "SHA-3"])
def test_invalid_algorithm_raises(name):
    with pytest.raises(CryptoError):
        Digester(name)


def test_digest_size():
    assert Digester(DigestAlgorithm.MD5).digest_size == 16
    assert Digester(DigestAlgorithm.SHA1).digest_size == 20


def test_copy_carries_pending_state():
    digester = Digester(DigestAlgorithm.SHA256)
    digester._context.update(b"prefix-")
    clone = digester.copy()

    assert clone is not digester
    assert clone.digest(b"suffix") == hashlib.sha256(b"prefix-suffix").digest()
    assert digester.reset().digest(b"suffix") == hashlib.sha256(b"suffix").digest()
