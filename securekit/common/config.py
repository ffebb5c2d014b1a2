"""
Settings for SecureKit, read from the environment.

Values may be placed in a ``.env`` file:

    SECUREKIT_BUFFER_SIZE=1024
    SECUREKIT_KEY_SIZE=1024
    SECUREKIT_CHARSET=utf-8
"""

import logging
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .exceptions import CryptoError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 1024
DEFAULT_KEY_SIZE = 1024
DEFAULT_CHARSET = "utf-8"


class CryptoSettings(BaseModel):
    """Defaults used when a caller does not pass an explicit value."""
    buffer_size: int = Field(DEFAULT_BUFFER_SIZE, gt=0, description="Read size for stream digesting")
    key_size: int = Field(DEFAULT_KEY_SIZE, gt=0, description="Asymmetric modulus length in bits")
    charset: str = Field(DEFAULT_CHARSET, min_length=1, description="Encoding applied to text input")


def load_settings() -> CryptoSettings:
    """
    Build settings from SECUREKIT_* environment variables.
    
    Returns:
        Validated CryptoSettings

    Raises:
        CryptoError: If a variable is not a number or fails validation
    """
    try:
        return CryptoSettings(
            buffer_size=int(os.getenv('SECUREKIT_BUFFER_SIZE', DEFAULT_BUFFER_SIZE)),
            key_size=int(os.getenv('SECUREKIT_KEY_SIZE', DEFAULT_KEY_SIZE)),
            charset=os.getenv('SECUREKIT_CHARSET', DEFAULT_CHARSET),
        )
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        raise CryptoError(f"Invalid SECUREKIT_* setting: {e}") from e


def load_settings_or_defaults() -> CryptoSettings:
    """Like load_settings(), but falls back to the defaults with a warning."""
    try:
        return load_settings()
    except CryptoError as e:
        logger.warning("%s; using defaults", e)
        return CryptoSettings()


settings = load_settings_or_defaults()
