"""Tests for configuration loading."""

from __future__ import annotations

from digiauth.config import Settings


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.totp_issuer == "DigiMarket"
    assert s.log_level == "INFO"
    assert set(Settings.model_fields) == {"totp_issuer", "log_level"}


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("TOTP_ISSUER", "Acme")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    s = Settings(_env_file=None)
    assert s.totp_issuer == "Acme"
    assert s.log_level == "DEBUG"
