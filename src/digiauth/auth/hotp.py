"""HOTP code generation (RFC 4226), applied at TOTP time-step counters (RFC 6238)."""

from __future__ import annotations

import hashlib
import hmac
import struct
from typing import Callable

DIGITS = 6
PERIOD = 30

HmacSha1 = Callable[[bytes, bytes], bytes]


def hmac_sha1(key: bytes, msg: bytes) -> bytes:
    return hmac.new(key, msg, hashlib.sha1).digest()


def counter_at(timestamp: float, period: int = PERIOD) -> int:
    """Number of whole ``period``-second steps since the Unix epoch."""
    return int(timestamp // period)


def generate(secret_bytes: bytes, counter: int, *, digest: HmacSha1 = hmac_sha1) -> str:
    """Compute the 6-digit code for ``secret_bytes`` at ``counter``.

    ``digest`` is the HMAC-SHA1 primitive; it must return a 20-byte signature.
    """
    if counter < 0:
        raise ValueError("counter must be non-negative")

    signature = digest(secret_bytes, struct.pack(">Q", counter))
    offset = signature[19] & 0x0F
    code = struct.unpack(">I", signature[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(code % 10**DIGITS).zfill(DIGITS)
