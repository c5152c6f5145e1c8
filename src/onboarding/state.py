"""
Onboarding State Management.

Tracks progress through the fixed onboarding steps and accumulates the
user's input for the completion payload. Only the coordinator mutates it;
the presentation layer reads it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import json

from .assessment import AssessmentResponses


class OnboardingStep(Enum):
    """Onboarding steps, in the order they run."""
    WELCOME = "welcome"
    AUTHENTICATION = "authentication"
    EMOTIONAL_ASSESSMENT = "emotional_assessment"
    MEMORY_PREFERENCE = "memory_preference"
    PRIVACY_CONSENT = "privacy_consent"      # Terminal: completing it finishes onboarding


STEP_SEQUENCE: tuple[OnboardingStep, ...] = tuple(OnboardingStep)


class MemoryPreference(Enum):
    """How long conversations and progress are retained."""
    SESSION_ONLY = "session_only"
    SEVEN_DAYS = "7_days"
    THIRTY_DAYS = "30_days"

    @property
    def display_name(self) -> str:
        return _MEMORY_DISPLAY[self][0]

    @property
    def description(self) -> str:
        return _MEMORY_DISPLAY[self][1]

    @property
    def retention_days(self) -> int:
        return _MEMORY_DISPLAY[self][2]


_MEMORY_DISPLAY = {
    MemoryPreference.SESSION_ONLY: ("Session Only", "Data is cleared after each session", 0),
    MemoryPreference.SEVEN_DAYS: ("7 Days", "Data is kept for 7 days", 7),
    MemoryPreference.THIRTY_DAYS: ("30 Days", "Data is kept for 30 days", 30),
}

DEFAULT_MEMORY_PREFERENCE = MemoryPreference.THIRTY_DAYS


class AuthMode(Enum):
    """Authentication form mode. Only sign-up asks for a confirmation."""
    SIGN_UP = "sign_up"
    SIGN_IN = "sign_in"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class OnboardingState:
    """
    One onboarding session.

    Created fresh when onboarding begins, discarded (or handed off as an
    OnboardingPayload) once is_complete is set.
    """
    current_step: OnboardingStep = OnboardingStep.WELCOME

    # Authentication
    user_email: str = ""
    user_password: str = ""
    password_confirmation: str = ""
    auth_mode: AuthMode = AuthMode.SIGN_UP

    # Emotional assessment
    assessment: AssessmentResponses = field(default_factory=AssessmentResponses)

    # Memory preference
    memory_preference: MemoryPreference = DEFAULT_MEMORY_PREFERENCE

    # Privacy consent
    has_accepted_privacy_policy: bool = False
    allows_notifications: bool = False

    is_complete: bool = False

    # Metadata
    created_at: str = ""
    updated_at: str = ""
    completed_at: str | None = None

    def __post_init__(self):
        """Set timestamps if not provided."""
        now = _now()
        if not self.created_at:
            self.created_at = now
        if not self.updated_at:
            self.updated_at = now

    def touch(self) -> None:
        self.updated_at = _now()

    def to_dict(self, include_secrets: bool = False) -> dict:
        """
        Serialize state to a JSON-safe dict.

        Password fields are left out unless include_secrets is set, so the
        default form is safe to return to clients or write to logs.
        """
        data = {
            "current_step": self.current_step.value,
            "user_email": self.user_email,
            "auth_mode": self.auth_mode.value,
            "assessment": self.assessment.to_dict(),
            "memory_preference": self.memory_preference.value,
            "has_accepted_privacy_policy": self.has_accepted_privacy_policy,
            "allows_notifications": self.allows_notifications,
            "is_complete": self.is_complete,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "completed_at": self.completed_at,
        }
        if include_secrets:
            data["user_password"] = self.user_password
            data["password_confirmation"] = self.password_confirmation
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "OnboardingState":
        """Deserialize state from dict."""
        data = dict(data)
        if "current_step" in data:
            data["current_step"] = OnboardingStep(data["current_step"])
        if "auth_mode" in data:
            data["auth_mode"] = AuthMode(data["auth_mode"])
        if "memory_preference" in data:
            data["memory_preference"] = MemoryPreference(data["memory_preference"])
        if "assessment" in data and isinstance(data["assessment"], dict):
            data["assessment"] = AssessmentResponses.from_dict(data["assessment"])
        return cls(**data)

    def to_json(self, include_secrets: bool = False) -> str:
        return json.dumps(self.to_dict(include_secrets=include_secrets))

    @classmethod
    def from_json(cls, json_str: str) -> "OnboardingState":
        return cls.from_dict(json.loads(json_str))


def get_next_step(step: OnboardingStep) -> OnboardingStep | None:
    """Successor of a step in the fixed order, or None for the terminal step."""
    index = STEP_SEQUENCE.index(step)
    if index + 1 < len(STEP_SEQUENCE):
        return STEP_SEQUENCE[index + 1]
    return None


def is_terminal_step(step: OnboardingStep) -> bool:
    return get_next_step(step) is None
