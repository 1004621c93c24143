"""TOTP (Time-based One-Time Password) management for 2FA.

Issues 16-character Base32 secrets for enrollment and verifies 6-digit
tokens against the wall clock. Only the current 30-second step and the one
before it are accepted, so a code stays usable for 30-60 seconds after it
was displayed and is never accepted early.

The random source, HMAC-SHA1 primitive and clock are injected through
TotpAuthenticator; the module-level functions use a default instance backed
by ``secrets``, ``hmac`` and ``time``.
"""

from __future__ import annotations

import hmac
import logging
import re
import secrets
import time
from typing import Callable

import pyotp

from digiauth.auth import base32, hotp
from digiauth.config import settings
from digiauth.models import CodeSnapshot, Enrollment, VerificationOutcome

logger = logging.getLogger(__name__)

SECRET_BYTES = 10  # 80 bits -> 16 Base32 characters, no padding

# Counter offsets checked on verification, in order. No forward skew.
WINDOW: tuple[int, ...] = (0, -1)

_TOKEN_RE = re.compile(r"[0-9]{6}")


class TotpAuthenticator:
    """Stateless TOTP issuer and verifier with explicit crypto and clock capabilities."""

    def __init__(
        self,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
        hmac_sha1: hotp.HmacSha1 = hotp.hmac_sha1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._random_bytes = random_bytes
        self._hmac_sha1 = hmac_sha1
        self._clock = clock

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def generate_secret(self) -> str:
        """Generate a new TOTP secret (base32-encoded, 16 chars)."""
        return base32.encode(self._random_bytes(SECRET_BYTES))

    def code_at(self, secret: str, now: float | None = None) -> str:
        """Get the code for the time step containing ``now``.

        Raises InvalidSecret if the secret does not decode.
        """
        key = base32.decode(secret)
        return hotp.generate(key, hotp.counter_at(self._now(now)), digest=self._hmac_sha1)

    def current_code(self, secret: str, now: float | None = None) -> CodeSnapshot:
        """Get the current code and how many seconds it has left."""
        ts = self._now(now)
        return CodeSnapshot(code=self.code_at(secret, ts), seconds_remaining=seconds_remaining(ts))

    def check(self, secret: str, token: str, *, now: float | None = None) -> VerificationOutcome:
        """Classify a token against a secret at ``now`` (defaults to the clock)."""
        if not isinstance(token, str) or not _TOKEN_RE.fullmatch(token):
            return VerificationOutcome.MALFORMED_TOKEN

        try:
            key = base32.decode(secret)
        except base32.InvalidSecret as e:
            logger.warning("Stored TOTP secret is not valid base32: %s", e)
            return VerificationOutcome.INVALID_SECRET

        current = hotp.counter_at(self._now(now))
        for offset in WINDOW:
            counter = current + offset
            if counter < 0:
                continue
            expected = hotp.generate(key, counter, digest=self._hmac_sha1)
            if hmac.compare_digest(expected, token):
                logger.debug("TOTP token matched at step offset %d", offset)
                return VerificationOutcome.VALID
        return VerificationOutcome.WRONG_CODE

    def verify(self, secret: str, token: str, *, now: float | None = None) -> bool:
        """Verify a TOTP code against a secret (current or previous step only)."""
        return self.check(secret, token, now=now) is VerificationOutcome.VALID

    def enroll(self, account: str, issuer: str | None = None) -> Enrollment:
        """Issue a new secret together with its otpauth:// URI."""
        secret = self.generate_secret()
        return Enrollment(secret=secret, provisioning_uri=get_provisioning_uri(secret, account, issuer))


def seconds_remaining(now: float | None = None, period: int = hotp.PERIOD) -> int:
    """Seconds until the current code rolls over (1..period)."""
    if now is None:
        now = time.time()
    return period - int(now) % period


def get_provisioning_uri(secret: str, account: str, issuer: str | None = None) -> str:
    """Get the otpauth:// URI for QR code enrollment.

    SHA1, 6 digits and a 30-second period are the defaults, so no
    algorithm/digits/period parameters are emitted. The secret is emitted
    unpadded and uppercase. Raises InvalidSecret if it does not decode.
    """
    base32.decode(secret)
    secret = secret.replace("=", "").upper()
    return pyotp.TOTP(secret).provisioning_uri(name=account, issuer_name=issuer or settings.totp_issuer)


_default = TotpAuthenticator()


def generate_secret() -> str:
    """Generate a new TOTP secret (base32-encoded, 16 chars)."""
    return _default.generate_secret()


def check_token(secret: str, token: str, *, now: float | None = None) -> VerificationOutcome:
    return _default.check(secret, token, now=now)


def verify_token(secret: str, token: str, *, now: float | None = None) -> bool:
    """Verify a 6-digit token; malformed tokens and bad secrets return False."""
    return _default.verify(secret, token, now=now)


def current_code(secret: str, now: float | None = None) -> CodeSnapshot:
    return _default.current_code(secret, now)


def enroll(account: str, issuer: str | None = None) -> Enrollment:
    return _default.enroll(account, issuer)
