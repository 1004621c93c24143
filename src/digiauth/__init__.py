"""DigiAuth — TOTP two-factor authentication core for DigiMarket."""

__version__ = "0.1.0"
