"""
Unit tests for securekit.crypto.sign.
"""

import hashlib

import pytest

from securekit.common.exceptions import CryptoError
from securekit.crypto.algorithms import AsymmetricAlgorithm, DigestAlgorithm
from securekit.crypto.sign import Signature, generate_signature

MESSAGE = b"Hello, SecureKit!"


# ==============================
#  ALGORITHM NAMES
# ==============================
def test_composed_name():
    assert generate_signature(AsymmetricAlgorithm.RSA, DigestAlgorithm.SHA1).algorithm == "SHA1withRSA"
    assert generate_signature("DSA", "SHA-256").algorithm == "SHA256withDSA"


def test_no_digest_is_none():
    assert generate_signature("RSA").algorithm == "NONEwithRSA"
    assert generate_signature("RSA", "NONE").algorithm == "NONEwithRSA"


def test_unknown_algorithms():
    with pytest.raises(CryptoError):
        generate_signature("ECDSA", "SHA256")
    with pytest.raises(CryptoError):
        generate_signature("RSA", "SHA3")


# ==============================
#  SIGN / VERIFY
# ==============================
@pytest.mark.parametrize("digest", [DigestAlgorithm.SHA1, DigestAlgorithm.SHA256, DigestAlgorithm.SHA512])
def test_rsa_sign_verify(rsa_private_key, digest):
    signature = Signature(AsymmetricAlgorithm.RSA, digest)
    signed = signature.sign(rsa_private_key, MESSAGE)

    assert signature.verify(rsa_private_key.public_key(), MESSAGE, signed)
    assert not signature.verify(rsa_private_key.public_key(), b"Hello, SecureKit?", signed)


def test_dsa_sign_verify(dsa_private_key):
    signature = Signature(AsymmetricAlgorithm.DSA, DigestAlgorithm.SHA256)
    signed = signature.sign(dsa_private_key, MESSAGE)

    assert signature.verify(dsa_private_key.public_key(), MESSAGE, signed)
    assert not signature.verify(dsa_private_key.public_key(), MESSAGE, b"\x00" * len(signed))


def test_none_signs_precomputed_digest(rsa_private_key):
    digest = hashlib.sha256(MESSAGE).digest()

    raw = Signature("RSA").sign(rsa_private_key, digest)
    hashed = Signature("RSA", "SHA256").sign(rsa_private_key, MESSAGE)

    # PKCS#1 v1.5 is deterministic, so both paths agree
    assert raw == hashed
    assert Signature("RSA").verify(rsa_private_key.public_key(), digest, raw)


def test_none_rejects_non_digest_input(rsa_private_key):
    with pytest.raises(CryptoError):
        Signature("RSA").sign(rsa_private_key, b"ten bytes!")


def test_key_type_mismatch(rsa_private_key, dsa_private_key):
    with pytest.raises(CryptoError):
        Signature("DSA", "SHA256").sign(rsa_private_key, MESSAGE)
    with pytest.raises(CryptoError):
        Signature("RSA", "SHA256").verify(dsa_private_key.public_key(), MESSAGE, b"sig")
