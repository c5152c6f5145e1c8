"""
Onboarding Flow Coordinator.

Sequences the five fixed steps, checks each step's completion criteria
before moving on, and signals completion to its caller.

Transitions are synchronous and caller-driven: nothing happens until the
presentation layer calls advance(). A blocked advance is a normal result,
not an exception.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from .forms import validate_assessment, validate_credentials, validate_privacy
from .payload import DEFAULT_BCRYPT_ROUNDS, OnboardingPayload, build_payload_from_state
from .state import (
    AuthMode,
    MemoryPreference,
    OnboardingState,
    OnboardingStep,
    get_next_step,
)

logger = logging.getLogger(__name__)


class OnboardingCompleteError(RuntimeError):
    """Input submitted to a session that has already completed."""


class StepMismatchError(RuntimeError):
    """Input submitted for a step other than the active one."""


@dataclass
class AdvanceResult:
    """Outcome of one advance() call. Truthy iff the step moved or completed."""
    success: bool
    step: OnboardingStep
    previous_step: OnboardingStep
    errors: list[str] = field(default_factory=list)
    is_complete: bool = False

    def __bool__(self) -> bool:
        return self.success


class OnboardingCoordinator:
    """
    Owns one OnboardingState and is the only thing that mutates it.

    Args:
        state: existing state to resume, or None for a fresh session
        on_complete: called once with the OnboardingPayload when the
            terminal step completes
        bcrypt_rounds: cost factor for hashing the password in the payload
    """

    def __init__(
        self,
        state: OnboardingState | None = None,
        on_complete: Callable[[OnboardingPayload], None] | None = None,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        self._state = state if state is not None else OnboardingState()
        self._on_complete = on_complete
        self._bcrypt_rounds = bcrypt_rounds

    @property
    def state(self) -> OnboardingState:
        return self._state

    @property
    def current_step(self) -> OnboardingStep:
        return self._state.current_step

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    # =========================================================================
    # Transitions
    # =========================================================================

    def validate_current_step(self) -> tuple[bool, list[str]]:
        """Check the active step's exit criteria without moving."""
        state = self._state
        step = state.current_step

        if step == OnboardingStep.AUTHENTICATION:
            return validate_credentials(
                state.user_email,
                state.user_password,
                state.password_confirmation,
                state.auth_mode,
            )
        if step == OnboardingStep.EMOTIONAL_ASSESSMENT:
            return validate_assessment(state.assessment)
        if step == OnboardingStep.PRIVACY_CONSENT:
            return validate_privacy(state.has_accepted_privacy_policy)

        # Welcome and memory preference have no gate
        return (True, [])

    def advance(self) -> AdvanceResult:
        """
        Move to the next step, or complete onboarding from the terminal step.

        On a failed check the step is left unchanged and the errors say
        what to fix.
        """
        state = self._state
        step = state.current_step

        if state.is_complete:
            return AdvanceResult(
                success=False,
                step=step,
                previous_step=step,
                errors=["Onboarding is already complete"],
                is_complete=True,
            )

        is_valid, errors = self.validate_current_step()
        if not is_valid:
            logger.debug(f"Advance blocked at {step.value}: {errors}")
            return AdvanceResult(success=False, step=step, previous_step=step, errors=errors)

        next_step = get_next_step(step)
        if next_step is None:
            self._complete()
            return AdvanceResult(success=True, step=step, previous_step=step, is_complete=True)

        state.current_step = next_step
        state.touch()
        logger.info(f"Onboarding advanced: {step.value} -> {next_step.value}")
        return AdvanceResult(success=True, step=next_step, previous_step=step)

    def _complete(self) -> None:
        state = self._state
        state.is_complete = True
        state.touch()
        state.completed_at = state.updated_at
        logger.info(
            f"Onboarding complete (memory={state.memory_preference.value}, "
            f"skipped={state.assessment.skipped_questions()})"
        )
        if self._on_complete is not None:
            self._on_complete(self.build_payload())

    def reset(self) -> None:
        """Abort and start over from Welcome with every field at its default."""
        logger.info(f"Onboarding reset from {self._state.current_step.value}")
        self._state = OnboardingState()

    def build_payload(self) -> OnboardingPayload:
        return build_payload_from_state(self._state, rounds=self._bcrypt_rounds)

    # =========================================================================
    # Input
    # =========================================================================

    def _ensure_step(self, step: OnboardingStep) -> None:
        """Input is only accepted for the active step of an open session."""
        if self._state.is_complete:
            raise OnboardingCompleteError("Onboarding is already complete")
        if self._state.current_step != step:
            raise StepMismatchError(
                f"{step.value} input is not accepted at step {self._state.current_step.value}"
            )

    def set_auth_mode(self, mode: AuthMode) -> None:
        self._ensure_step(OnboardingStep.AUTHENTICATION)
        self._state.auth_mode = mode
        self._state.touch()

    def set_credentials(
        self,
        email: str,
        password: str,
        confirmation: str = "",
        mode: AuthMode | None = None,
    ) -> None:
        self._ensure_step(OnboardingStep.AUTHENTICATION)
        state = self._state
        state.user_email = email
        state.user_password = password
        state.password_confirmation = confirmation
        if mode is not None:
            state.auth_mode = mode
        state.touch()

    def set_response(self, question_index: int, rating: int) -> None:
        """Rate one assessment question (1-5). Out-of-range input raises InvalidResponseError."""
        self._ensure_step(OnboardingStep.EMOTIONAL_ASSESSMENT)
        self._state.assessment.set_response(question_index, rating)
        self._state.touch()

    def answer_current_question(self, rating: int) -> None:
        self._ensure_step(OnboardingStep.EMOTIONAL_ASSESSMENT)
        self._state.assessment.answer(rating)
        self._state.touch()

    def skip_question(self, question_index: int | None = None) -> None:
        self._ensure_step(OnboardingStep.EMOTIONAL_ASSESSMENT)
        self._state.assessment.skip(question_index)
        self._state.touch()

    def set_memory_preference(self, preference: MemoryPreference) -> None:
        self._ensure_step(OnboardingStep.MEMORY_PREFERENCE)
        self._state.memory_preference = preference
        self._state.touch()

    def set_privacy_consent(self, accepted: bool) -> None:
        self._ensure_step(OnboardingStep.PRIVACY_CONSENT)
        self._state.has_accepted_privacy_policy = accepted
        self._state.touch()

    def set_notifications(self, allowed: bool) -> None:
        self._ensure_step(OnboardingStep.PRIVACY_CONSENT)
        self._state.allows_notifications = allowed
        self._state.touch()
