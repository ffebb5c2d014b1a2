"""
Unit tests for securekit.common.config.
"""

import logging

import pytest

from securekit.common.config import CryptoSettings, load_settings, load_settings_or_defaults
from securekit.common.exceptions import CryptoError


def test_defaults(monkeypatch):
    for name in ("SECUREKIT_BUFFER_SIZE", "SECUREKIT_KEY_SIZE", "SECUREKIT_CHARSET"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings == CryptoSettings(buffer_size=1024, key_size=1024, charset="utf-8")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SECUREKIT_BUFFER_SIZE", "4096")
    monkeypatch.setenv("SECUREKIT_KEY_SIZE", "2048")
    monkeypatch.setenv("SECUREKIT_CHARSET", "latin-1")

    settings = load_settings()

    assert settings.buffer_size == 4096
    assert settings.key_size == 2048
    assert settings.charset == "latin-1"


@pytest.mark.parametrize("name, value", [
    ("SECUREKIT_BUFFER_SIZE", "0"),
    ("SECUREKIT_BUFFER_SIZE", "big"),
    ("SECUREKIT_KEY_SIZE", "-1"),
    ("SECUREKIT_CHARSET", ""),
])
def test_invalid_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(CryptoError):
        load_settings()


def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("SECUREKIT_BUFFER_SIZE", "not-a-number")

    with caplog.at_level(logging.WARNING, logger="securekit.common.config"):
        settings = load_settings_or_defaults()

    assert settings == CryptoSettings()
    assert "using defaults" in caplog.text
