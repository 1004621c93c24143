"""Pydantic models and enums for two-factor enrollment and verification."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class VerificationOutcome(StrEnum):
    VALID = "valid"
    MALFORMED_TOKEN = "malformed_token"
    INVALID_SECRET = "invalid_secret"
    WRONG_CODE = "wrong_code"


class TwoFactorState(StrEnum):
    DISABLED = "disabled"
    PENDING_ENROLLMENT = "pending_enrollment"
    ENABLED = "enabled"


class Enrollment(BaseModel):
    """A freshly issued secret, shown to the user once."""
    secret: str = Field(pattern=r"^[A-Z2-7]{16}$")
    provisioning_uri: str

    def __repr__(self) -> str:
        return "Enrollment(secret='***', provisioning_uri='***')"

    __str__ = __repr__


class CodeSnapshot(BaseModel):
    code: str = Field(pattern=r"^\d{6}$")
    seconds_remaining: int = Field(ge=1, le=30)


def next_state(state: TwoFactorState, verified: bool, *, disable: bool = False) -> TwoFactorState:
    """Transition the caller-owned 2FA state after a verification attempt.

    A failed verification never changes state. DISABLED only leaves through
    enrollment, which the caller records as PENDING_ENROLLMENT itself.
    """
    if not verified:
        return state
    if disable:
        return TwoFactorState.DISABLED
    if state == TwoFactorState.PENDING_ENROLLMENT:
        return TwoFactorState.ENABLED
    return TwoFactorState(state)
