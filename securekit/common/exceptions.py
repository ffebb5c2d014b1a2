"""
Exceptions for SecureKit.
"""


class CryptoError(Exception):
    """
    Any failure raised by the cryptography providers.

    Unknown algorithms, invalid key specs, I/O errors while digesting and
    malformed key stores or certificates all surface as this type. The
    provider exception is kept as ``__cause__``.
    """
    pass
