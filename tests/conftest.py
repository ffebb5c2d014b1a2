"""
Shared fixtures: key pairs, a self-signed certificate and a PKCS#12 bundle.
"""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

KEY_STORE_PASSWORD = "changeit"
KEY_ALIAS = "server"


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def dsa_private_key():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def certificate(rsa_private_key):
    """Self-signed certificate for CN=securekit.test."""
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "SecureKit"),
        x509.NameAttribute(NameOID.COMMON_NAME, "securekit.test"),
    ])
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(rsa_private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=30))
        .sign(rsa_private_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def pkcs12_bytes(rsa_private_key, certificate):
    return pkcs12.serialize_key_and_certificates(
        name=KEY_ALIAS.encode("utf-8"),
        key=rsa_private_key,
        cert=certificate,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(
            KEY_STORE_PASSWORD.encode("utf-8")
        ),
    )


@pytest.fixture
def payload():
    """10 000 bytes of non-repeating-looking data."""
    return bytes((i * 31 + 7) % 256 for i in range(10_000))
