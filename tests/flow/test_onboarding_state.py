"""
Tests for onboarding step model and state serialization.
"""

from onboarding.state import (
    STEP_SEQUENCE,
    AuthMode,
    MemoryPreference,
    OnboardingState,
    OnboardingStep,
    get_next_step,
    is_terminal_step,
)


class TestStepOrder:
    """Test the fixed step sequence."""

    def test_sequence(self):
        assert [s.value for s in STEP_SEQUENCE] == [
            "welcome",
            "authentication",
            "emotional_assessment",
            "memory_preference",
            "privacy_consent",
        ]

    def test_next_step_chain(self):
        step = OnboardingStep.WELCOME
        visited = [step]
        while (step := get_next_step(step)) is not None:
            visited.append(step)
        assert visited == list(STEP_SEQUENCE)

    def test_terminal_step(self):
        assert is_terminal_step(OnboardingStep.PRIVACY_CONSENT)
        assert not is_terminal_step(OnboardingStep.MEMORY_PREFERENCE)


class TestMemoryPreference:
    """Test memory preference values."""

    def test_wire_values(self):
        assert MemoryPreference.SESSION_ONLY.value == "session_only"
        assert MemoryPreference.SEVEN_DAYS.value == "7_days"
        assert MemoryPreference.THIRTY_DAYS.value == "30_days"

    def test_retention_days(self):
        assert [p.retention_days for p in MemoryPreference] == [0, 7, 30]

    def test_display(self):
        assert MemoryPreference.SEVEN_DAYS.display_name == "7 Days"
        assert "30 days" in MemoryPreference.THIRTY_DAYS.description


class TestOnboardingState:
    """Test state defaults and serialization."""

    def test_defaults(self):
        state = OnboardingState()
        assert state.current_step == OnboardingStep.WELCOME
        assert state.user_email == ""
        assert state.user_password == ""
        assert state.auth_mode == AuthMode.SIGN_UP
        assert state.memory_preference == MemoryPreference.THIRTY_DAYS
        assert state.has_accepted_privacy_policy is False
        assert state.allows_notifications is False
        assert state.is_complete is False
        assert state.assessment.responses == [None] * 5
        assert state.created_at
        assert state.completed_at is None

    def test_to_dict_hides_passwords(self):
        state = OnboardingState(user_email="a@b.com", user_password="secret", password_confirmation="secret")
        data = state.to_dict()
        assert "user_password" not in data
        assert "password_confirmation" not in data
        assert "secret" not in state.to_json()

    def test_round_trip_with_secrets(self):
        state = OnboardingState(
            current_step=OnboardingStep.MEMORY_PREFERENCE,
            user_email="a@b.com",
            user_password="pw",
            password_confirmation="pw",
            auth_mode=AuthMode.SIGN_IN,
            memory_preference=MemoryPreference.SEVEN_DAYS,
            allows_notifications=True,
        )
        state.assessment.answer(4)
        state.assessment.skip()

        restored = OnboardingState.from_json(state.to_json(include_secrets=True))
        assert restored == state
        assert restored.current_step == OnboardingStep.MEMORY_PREFERENCE
        assert restored.assessment.skipped_questions() == [1]
