"""
Tests for the completion payload.
"""

import json

import pytest

from onboarding.payload import IncompletePayloadError, build_payload_from_state, hash_password
from onboarding.state import AuthMode, MemoryPreference, OnboardingState


def _finished_state() -> OnboardingState:
    state = OnboardingState(
        user_email="a@b.com",
        user_password="abc123",
        password_confirmation="abc123",
        auth_mode=AuthMode.SIGN_UP,
        memory_preference=MemoryPreference.SEVEN_DAYS,
        has_accepted_privacy_policy=True,
        allows_notifications=True,
        is_complete=True,
        completed_at="2026-01-01T00:00:00+00:00",
    )
    state.assessment.answer(2)
    state.assessment.skip()
    state.assessment.answer(4)
    state.assessment.answer(5)
    state.assessment.skip()
    return state


class TestBuildPayload:

    def test_incomplete_raises(self):
        with pytest.raises(IncompletePayloadError):
            build_payload_from_state(OnboardingState(), rounds=4)

    def test_fields(self):
        payload = build_payload_from_state(_finished_state(), rounds=4)
        assert payload.email == "a@b.com"
        assert payload.auth_mode == "sign_up"
        assert payload.assessment_responses == [2, None, 4, 5, None]
        assert payload.skipped_questions == [1, 4]
        assert payload.memory_preference == "7_days"
        assert payload.retention_days == 7
        assert payload.accepted_privacy_policy is True
        assert payload.allows_notifications is True
        assert payload.completed_at == "2026-01-01T00:00:00+00:00"

    def test_password_is_hashed(self):
        payload = build_payload_from_state(_finished_state(), rounds=4)
        assert payload.password_hash != "abc123"
        assert payload.check_password("abc123")
        assert not payload.check_password("abc124")
        assert "abc123" not in payload.to_json()

    def test_json_serializable(self):
        payload = build_payload_from_state(_finished_state(), rounds=4)
        data = json.loads(payload.to_json())
        assert data["skipped_questions"] == [1, 4]


def test_hash_password_salted():
    assert hash_password("pw", rounds=4) != hash_password("pw", rounds=4)
