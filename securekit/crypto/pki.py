"""
Key Stores and Certificates (PKI)

Loads PKCS#12 key stores and X.509 certificates from caller-owned streams.
Streams are read to the end but never closed here.
"""

import logging
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

from ..common.exceptions import CryptoError
from .algorithms import DigestAlgorithm
from .digest import Digester

logger = logging.getLogger(__name__)

PKCS12 = "PKCS12"
X509 = "X.509"

_KEY_STORE_TYPES = {"PKCS12": PKCS12, "PKCS#12": PKCS12, "P12": PKCS12, "PFX": PKCS12}
_CERTIFICATE_TYPES = {"X.509": X509, "X509": X509}

Password = Optional[Union[str, bytes, Sequence[str]]]


def _password_bytes(password: Password) -> Optional[bytes]:
    if password is None or isinstance(password, bytes):
        return password
    if not isinstance(password, str):
        password = "".join(password)
    return password.encode("utf-8")


def _read_all(stream: BinaryIO) -> bytes:
    try:
        data = stream.read()
    except OSError as e:
        raise CryptoError(f"Failed to read stream: {e}") from e
    if not isinstance(data, bytes):
        raise CryptoError("Stream must be opened in binary mode")
    return data


def _resolve_type(name: str, known: Dict[str, str], kind: str) -> str:
    if not name or not name.strip():
        raise CryptoError(f"{kind} type is blank!")
    resolved = known.get(name.strip().upper())
    if resolved is None:
        raise CryptoError(f"Unsupported {kind} type: {name}")
    return resolved


class KeyStore:
    """
    Loaded key store: aliases mapped to a private key and/or certificate.

    Aliases are matched case-insensitively. Entries without a friendly name
    are aliased by position ("0" for the key entry, "1", "2", ... for any
    additional certificates).
    """

    def __init__(self, type: str, entries: Dict[str, Tuple[object, Optional[x509.Certificate]]]):
        self.type = type
        self._entries = {alias.lower(): entry for alias, entry in entries.items()}

    def __repr__(self) -> str:
        return f"KeyStore(type={self.type!r}, aliases={self.aliases()!r})"

    def aliases(self) -> List[str]:
        return list(self._entries)

    def contains_alias(self, alias: str) -> bool:
        return alias.lower() in self._entries

    def get_key(self, alias: str, password: Password = None):
        """
        Private key stored under alias, or None.

        PKCS#12 entries are unlocked by the store password when the store is
        read, so password is not consulted.
        """
        entry = self._entries.get(alias.lower())
        return None if entry is None else entry[0]

    def get_certificate(self, alias: str) -> Optional[x509.Certificate]:
        """Certificate stored under alias, or None."""
        entry = self._entries.get(alias.lower())
        return None if entry is None else entry[1]


def _alias(certificate: Optional["pkcs12.PKCS12Certificate"], position: int) -> str:
    if certificate is not None and certificate.friendly_name:
        return certificate.friendly_name.decode("utf-8")
    return str(position)


def read_key_store(type: str, stream: BinaryIO, password: Password) -> KeyStore:
    """
    Read a key store from a stream.

    Args:
        type: Key store type; PKCS12 is supported (JKS has no Python reader)
        stream: Binary stream, left open
        password: Store password

    Returns:
        KeyStore

    Raises:
        CryptoError: If the type is unsupported, the password is wrong or the data is malformed
    """
    store_type = _resolve_type(type, _KEY_STORE_TYPES, "key store")
    data = _read_all(stream)

    try:
        loaded = pkcs12.load_pkcs12(data, _password_bytes(password))
    except (ValueError, TypeError) as e:
        raise CryptoError(f"Cannot load {store_type} key store: {e}") from e

    entries = {}
    if loaded.key is not None or loaded.cert is not None:
        entries[_alias(loaded.cert, 0)] = (
            loaded.key,
            loaded.cert.certificate if loaded.cert is not None else None,
        )
    for position, extra in enumerate(loaded.additional_certs, start=1):
        alias = _alias(extra, position)
        if alias.lower() in (existing.lower() for existing in entries):
            logger.warning("Duplicate key store alias %r, storing it as %r", alias, f"{alias}-{position}")
            alias = f"{alias}-{position}"
        entries[alias] = (None, extra.certificate)

    logger.debug("Loaded %s key store with %d entries", store_type, len(entries))
    return KeyStore(store_type, entries)


def read_pkcs12_key_store(stream: BinaryIO, password: Password) -> KeyStore:
    """Read a PKCS#12 (.p12 / .pfx) key store."""
    return read_key_store(PKCS12, stream, password)


def read_certificate(type: str, stream: BinaryIO, password: Password = None) -> x509.Certificate:
    """
    Read a certificate from a stream.

    Args:
        type: Certificate type; X.509 is supported
        stream: Binary stream holding a PEM or DER certificate, left open
        password: Unused by X.509; kept for symmetry with read_key_store

    Returns:
        Certificate object

    Raises:
        CryptoError: If the type is unsupported or the data is malformed
    """
    _resolve_type(type, _CERTIFICATE_TYPES, "certificate")
    data = _read_all(stream)

    try:
        if data.lstrip().startswith(b"-----BEGIN"):
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise CryptoError(f"Cannot parse X.509 certificate: {e}") from e


def read_x509_certificate(stream: BinaryIO, password: Password = None) -> x509.Certificate:
    """Read an X.509 certificate (.cer / .crt / .pem)."""
    return read_certificate(X509, stream, password)


def get_certificate(key_store: KeyStore, alias: str) -> Optional[x509.Certificate]:
    """
    Look up a certificate in a key store.

    Args:
        key_store: Loaded KeyStore
        alias: Entry alias (case-insensitive)

    Returns:
        Certificate object, or None if the alias is unknown
    """
    return key_store.get_certificate(alias)


def get_private_key(key_store: KeyStore, alias: str, password: Password = None):
    """
    Look up a private key in a key store.

    Args:
        key_store: Loaded KeyStore
        alias: Entry alias (case-insensitive)
        password: Entry password; PKCS#12 entries are already decrypted with the store password

    Returns:
        Private key object, or None if the alias has no key
    """
    return key_store.get_key(alias, password)


def get_certificate_fingerprint(
    cert: x509.Certificate,
    algorithm: Union[DigestAlgorithm, str] = DigestAlgorithm.SHA256
) -> str:
    """
    Compute the fingerprint of a certificate.

    Args:
        cert: Certificate object
        algorithm: Digest algorithm (default: SHA-256)

    Returns:
        Hex-encoded digest of the DER encoding
    """
    cert_bytes = cert.public_bytes(serialization.Encoding.DER)
    return Digester(algorithm).digest_hex(cert_bytes)


def get_common_name(cert: x509.Certificate) -> str:
    """
    Extract Common Name from certificate.

    Args:
        cert: Certificate object

    Returns:
        Common Name (CN) value
    """
    try:
        return cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value
    except IndexError:
        return "UNKNOWN"


def get_certificate_info(cert: x509.Certificate) -> dict:
    """
    Extract certificate information for display.

    Args:
        cert: Certificate object

    Returns:
        Dictionary with certificate details
    """
    return {
        "subject": cert.subject.rfc4514_string(),
        "issuer": cert.issuer.rfc4514_string(),
        "common_name": get_common_name(cert),
        "serial_number": cert.serial_number,
        "not_valid_before": cert.not_valid_before_utc,
        "not_valid_after": cert.not_valid_after_utc,
        "fingerprint": get_certificate_fingerprint(cert),
    }
