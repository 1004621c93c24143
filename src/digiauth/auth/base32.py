"""Base32 (RFC 4648) codec for TOTP secrets.

Decoding is case-insensitive and ignores ``=`` padding. Trailing bits that
do not fill a whole byte are dropped, which is the standard behavior for
unpadded secrets: a 16-character secret yields 10 bytes, a 13-character
secret yields 8 bytes and 1 leftover bit is discarded.
"""

from __future__ import annotations

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_VALUES: dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}


class InvalidSecret(ValueError):
    """A secret contains characters outside the Base32 alphabet."""


def normalize(secret: str) -> str:
    """Strip whitespace and padding and uppercase a user-pasted secret."""
    return "".join(secret.split()).replace("=", "").upper()


def decode(secret: str) -> bytes:
    """Decode a Base32 string into raw bytes.

    Raises InvalidSecret on any character outside ``A-Z2-7`` once padding is
    removed and case is folded. Whitespace is not stripped here.
    """
    cleaned = secret.replace("=", "").upper()

    buffer = 0
    bits = 0
    out = bytearray()
    for position, ch in enumerate(cleaned):
        value = _VALUES.get(ch)
        if value is None:
            raise InvalidSecret(f"Invalid base32 character at position {position}")
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
    # Leftover bits (< 8) are a partial byte and are discarded.
    return bytes(out)


def encode(data: bytes) -> str:
    """Encode bytes as unpadded Base32.

    Only whole 5-bit groups are emitted, so callers should pass a length that
    is a multiple of 5 bytes (10 bytes -> 16 characters).
    """
    buffer = 0
    bits = 0
    chars: list[str] = []
    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            chars.append(ALPHABET[(buffer >> bits) & 0x1F])
    return "".join(chars)
