"""
Onboarding Payload Definition.

The OnboardingPayload is the contract between onboarding and whatever
profile/session store takes over afterwards. The plaintext password never
leaves onboarding: only a bcrypt hash is carried.
"""

from dataclasses import dataclass, field, asdict
import json

import bcrypt

from .state import OnboardingState

DEFAULT_BCRYPT_ROUNDS = 12


class IncompletePayloadError(RuntimeError):
    """Payload requested before onboarding finished."""


@dataclass
class OnboardingPayload:
    """
    Complete output from the onboarding flow.

    Ratings are passed through unscored; skipped questions stay None.
    """
    email: str
    auth_mode: str
    password_hash: str

    assessment_responses: list[int | None] = field(default_factory=list)
    skipped_questions: list[int] = field(default_factory=list)

    memory_preference: str = "30_days"
    retention_days: int = 30

    accepted_privacy_policy: bool = False
    allows_notifications: bool = False

    completed_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(password.encode(), self.password_hash.encode())


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def build_payload_from_state(
    state: OnboardingState,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> OnboardingPayload:
    """
    Build the hand-off payload from a finished session.

    Raises:
        IncompletePayloadError: if the session has not completed.
    """
    if not state.is_complete:
        raise IncompletePayloadError(
            f"Onboarding is not complete (current step: {state.current_step.value})"
        )

    return OnboardingPayload(
        email=state.user_email,
        auth_mode=state.auth_mode.value,
        password_hash=hash_password(state.user_password, rounds=rounds),
        assessment_responses=list(state.assessment.responses),
        skipped_questions=state.assessment.skipped_questions(),
        memory_preference=state.memory_preference.value,
        retention_days=state.memory_preference.retention_days,
        accepted_privacy_policy=state.has_accepted_privacy_policy,
        allows_notifications=state.allows_notifications,
        completed_at=state.completed_at or "",
    )
