"""Tests for Pydantic models and the 2FA state contract."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from digiauth.models import (
    CodeSnapshot,
    Enrollment,
    TwoFactorState,
    VerificationOutcome,
    next_state,
)


def test_verification_outcome_enum():
    assert VerificationOutcome.VALID == "valid"
    assert VerificationOutcome.INVALID_SECRET == "invalid_secret"
    assert len(VerificationOutcome) == 4


def test_enrollment_rejects_bad_secret():
    with pytest.raises(ValidationError):
        Enrollment(secret="short", provisioning_uri="otpauth://totp/x")


def test_code_snapshot_validation():
    assert CodeSnapshot(code="007123", seconds_remaining=30).code == "007123"
    with pytest.raises(ValidationError):
        CodeSnapshot(code="7123", seconds_remaining=10)
    with pytest.raises(ValidationError):
        CodeSnapshot(code="007123", seconds_remaining=0)


def test_pending_enables_on_verify():
    assert next_state(TwoFactorState.PENDING_ENROLLMENT, True) == TwoFactorState.ENABLED


def test_enabled_disables_on_verify_with_intent():
    assert next_state(TwoFactorState.ENABLED, True, disable=True) == TwoFactorState.DISABLED


def test_enabled_stays_enabled_on_login():
    assert next_state(TwoFactorState.ENABLED, True) == TwoFactorState.ENABLED


@pytest.mark.parametrize("state", list(TwoFactorState))
def test_failed_verification_keeps_state(state):
    assert next_state(state, False) == state
    assert next_state(state, False, disable=True) == state


def test_disabled_does_not_enable_without_enrollment():
    assert next_state(TwoFactorState.DISABLED, True) == TwoFactorState.DISABLED


def test_accepts_raw_string_state():
    assert next_state("pending_enrollment", True) == TwoFactorState.ENABLED
