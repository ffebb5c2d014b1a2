"""
Key Generation and Loading

Secret keys for symmetric ciphers and HMAC, password-based (PBE) keys,
asymmetric key pairs, and PKCS#8 / X.509 encoded keys.

Key material is returned to the caller and not retained here.
"""

import hashlib
import logging
from typing import NamedTuple, Optional, Sequence, Union

from Crypto.Hash import SHAKE256
from Crypto.PublicKey import DSA as _DSA, RSA as _RSA
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, rsa
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from pydantic import BaseModel, Field

from ..common.config import settings
from ..common.exceptions import CryptoError
from ..common.utils import random_bytes, random_string
from .algorithms import AsymmetricAlgorithm, HmacAlgorithm, SymmetricAlgorithm

logger = logging.getLogger(__name__)

AES_KEY_SIZE = 16
DES_KEY_SIZE = 8
DESEDE_KEY_SIZE = 24
PBE_PASSWORD_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
PBE_PASSWORD_LENGTH = 32
PBKDF2_ITERATIONS = 600_000
RSA_PUBLIC_EXPONENT = 65537

_KEY_TYPES = {
    AsymmetricAlgorithm.RSA: (rsa.RSAPrivateKey, rsa.RSAPublicKey),
    AsymmetricAlgorithm.DSA: (dsa.DSAPrivateKey, dsa.DSAPublicKey),
}


class SecretKey(BaseModel):
    """Raw secret key bytes tagged with the algorithm they belong to."""
    algorithm: str = Field(..., description="Provider algorithm name, e.g. AES or HmacSHA1")
    encoded: bytes = Field(..., description="Raw key bytes")


class KeyPair(NamedTuple):
    private_key: Union[rsa.RSAPrivateKey, dsa.DSAPrivateKey]
    public_key: Union[rsa.RSAPublicKey, dsa.DSAPublicKey]


def _algorithm_name(algorithm) -> str:
    name = getattr(algorithm, "value", algorithm)
    if not isinstance(name, str) or not name.strip():
        raise CryptoError("Algorithm is blank!")
    return name.strip()


# ---------------------------------------------------------------- secret keys

def generate_key(algorithm, key: Optional[bytes] = None) -> SecretKey:
    """
    Generate a SecretKey for the given algorithm.

    PBE* names are routed to generate_pbe_key (key bytes are the UTF-8
    password), DES* names to generate_des_key. AES and Hmac* keys are
    random when key is omitted, otherwise wrap the given bytes.

    Args:
        algorithm: Algorithm name or enum member
        key: Raw key bytes (optional)

    Returns:
        SecretKey

    Raises:
        CryptoError: If the algorithm is blank or has no key generator
    """
    name = _algorithm_name(algorithm)
    upper = name.upper()

    if upper.startswith("PBE"):
        password = None
        if key is not None:
            try:
                password = bytes(key).decode("utf-8")
            except UnicodeDecodeError as e:
                raise CryptoError("PBE key bytes must be a UTF-8 password") from e
        return generate_pbe_key(name, password)
    if upper.startswith("DES"):
        return generate_des_key(name, key)

    if upper == SymmetricAlgorithm.AES.value:
        size = AES_KEY_SIZE
        name = SymmetricAlgorithm.AES.value
    else:
        try:
            hmac_algorithm = HmacAlgorithm.of(name)
        except CryptoError as e:
            raise CryptoError(f"No key generator for algorithm '{name}'") from e
        name = hmac_algorithm.value
        size = hmac_block_size(hmac_algorithm)

    if key is None:
        key = random_bytes(size)
    return SecretKey(algorithm=name, encoded=bytes(key))


def hmac_block_size(algorithm: HmacAlgorithm) -> int:
    """Default random HMAC key length: the block size of the underlying hash."""
    return hashlib.new(algorithm.digest_algorithm.hashlib_name).block_size


def _adjust_des_parity(key: bytes) -> bytes:
    # Each DES key byte carries odd parity in its least significant bit
    adjusted = bytearray()
    for b in key:
        high = b & 0xFE
        adjusted.append(high | (bin(high).count("1") % 2 == 0))
    return bytes(adjusted)


def generate_des_key(algorithm, key: Optional[bytes] = None) -> SecretKey:
    """
    Generate a DES or DESede SecretKey.

    Supplied key bytes must be at least 8 (DES) or 24 (DESede) bytes long;
    only that prefix is used. Parity bits are always adjusted.

    Raises:
        CryptoError: If algorithm is not a DES algorithm or key is too short
    """
    name = _algorithm_name(algorithm)
    if not name.upper().startswith("DES"):
        raise CryptoError("Algorithm is not a DES algorithm!")
    des_algorithm = SymmetricAlgorithm.of(name)

    size = DES_KEY_SIZE if des_algorithm is SymmetricAlgorithm.DES else DESEDE_KEY_SIZE
    if key is None:
        key = random_bytes(size)
    elif len(key) < size:
        raise CryptoError(
            f"Invalid {des_algorithm.value} key: need at least {size} bytes, got {len(key)}"
        )
    return SecretKey(algorithm=des_algorithm.value, encoded=_adjust_des_parity(bytes(key[:size])))


def generate_pbe_key(algorithm, password: Optional[Union[str, Sequence[str]]] = None) -> SecretKey:
    """
    Generate a password-based (PBE) SecretKey.

    The encoded form is the ASCII password. When no password is given a
    random 32-character one is invented and a warning is logged: the
    caller must keep the returned key, nothing else can recover it.

    Args:
        algorithm: Name starting with "PBE", e.g. PBEWithMD5AndDES
        password: Password as a string or a sequence of characters

    Raises:
        CryptoError: If algorithm is not PBE or password is not ASCII
    """
    name = _algorithm_name(algorithm)
    if not name.upper().startswith("PBE"):
        raise CryptoError("Algorithm is not a PBE algorithm!")

    if password is None:
        logger.warning("No password supplied for %s, generating a random one", name)
        password = random_string(PBE_PASSWORD_ALPHABET, PBE_PASSWORD_LENGTH)
    elif not isinstance(password, str):
        password = "".join(password)

    try:
        encoded = password.encode("ascii")
    except UnicodeEncodeError as e:
        raise CryptoError("PBE password must be ASCII") from e
    return SecretKey(algorithm=name, encoded=encoded)


def derive_key_from_password(
    password: Union[str, SecretKey],
    salt: bytes,
    length: int = 32,
    iterations: int = PBKDF2_ITERATIONS
) -> bytes:
    """
    Derive key bytes from a password with PBKDF2-HMAC-SHA256.

    Args:
        password: Plain password or a PBE SecretKey
        salt: Random salt, unique per key
        length: Derived key length in bytes
        iterations: PBKDF2 iteration count

    Returns:
        Derived key bytes
    """
    if isinstance(password, SecretKey):
        password_bytes = password.encoded
    else:
        password_bytes = password.encode("utf-8")

    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            iterations=iterations,
        )
        return kdf.derive(password_bytes)
    except (TypeError, ValueError) as e:
        raise CryptoError(f"PBKDF2 derivation failed: {e}") from e


# ---------------------------------------------------------------- asymmetric

def _check_key_type(algorithm: AsymmetricAlgorithm, key, index: int):
    expected = _KEY_TYPES[algorithm][index]
    if not isinstance(key, expected):
        raise CryptoError(f"Encoded key is not a {algorithm.value} key ({type(key).__name__})")
    return key


def generate_private_key(algorithm, key: bytes):
    """
    Load a private key from PKCS#8 DER bytes.

    Raises:
        CryptoError: If the bytes are malformed or hold another key type
    """
    asymmetric = AsymmetricAlgorithm.of(algorithm)
    try:
        private_key = serialization.load_der_private_key(key, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoError(f"Invalid PKCS#8 {asymmetric.value} private key: {e}") from e
    return _check_key_type(asymmetric, private_key, 0)


def generate_public_key(algorithm, key: bytes):
    """
    Load a public key from X.509 SubjectPublicKeyInfo DER bytes.

    Raises:
        CryptoError: If the bytes are malformed or hold another key type
    """
    asymmetric = AsymmetricAlgorithm.of(algorithm)
    try:
        public_key = serialization.load_der_public_key(key)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoError(f"Invalid X.509 {asymmetric.value} public key: {e}") from e
    return _check_key_type(asymmetric, public_key, 1)


def encode_private_key(private_key) -> bytes:
    """Serialize a private key as unencrypted PKCS#8 DER."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )


def encode_public_key(public_key) -> bytes:
    """Serialize a public key as X.509 SubjectPublicKeyInfo DER."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )


def _generate_seeded(algorithm: AsymmetricAlgorithm, key_size: int, seed: bytes):
    # The same seed always yields the same SHAKE256 stream, hence the same key
    randfunc = SHAKE256.new(data=bytes(seed)).read

    if algorithm is AsymmetricAlgorithm.RSA:
        generated = _RSA.generate(key_size, randfunc=randfunc, e=RSA_PUBLIC_EXPONENT)
        der = generated.export_key(format="DER", pkcs=8)
    else:
        generated = _DSA.generate(key_size, randfunc=randfunc)
        der = generated.export_key(format="DER", pkcs8=True)

    return serialization.load_der_private_key(der, password=None)


def generate_key_pair(algorithm, key_size: Optional[int] = None, seed: Optional[bytes] = None) -> KeyPair:
    """
    Generate a public/private key pair.

    Args:
        algorithm: RSA or DSA
        key_size: Modulus length in bits; None or values below 1 use the default (1024)
        seed: Optional seed; the same seed and size give the same key pair

    Returns:
        KeyPair(private_key, public_key)

    Raises:
        CryptoError: If the algorithm is unknown or the size is unsupported
    """
    asymmetric = AsymmetricAlgorithm.of(algorithm)
    if key_size is None or key_size <= 0:
        key_size = settings.key_size

    try:
        if seed is not None:
            private_key = _generate_seeded(asymmetric, key_size, seed)
        elif asymmetric is AsymmetricAlgorithm.RSA:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=key_size,
            )
        else:
            private_key = dsa.generate_private_key(key_size=key_size)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoError(f"Cannot generate {key_size}-bit {asymmetric.value} key pair: {e}") from e

    logger.debug("Generated %d-bit %s key pair", key_size, asymmetric.value)
    return KeyPair(private_key, private_key.public_key())
