"""
Onboarding API Endpoints.

Thin HTTP layer over OnboardingCoordinator. Sessions live in memory and
are keyed by an opaque session id; nothing is persisted. Once a session
completes, its payload is kept until the session expires so the main app
can pick it up.
"""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from mindful.config import Settings, get_settings

from .assessment import InvalidResponseError
from .coordinator import AdvanceResult, OnboardingCoordinator
from .forms import (
    AssessmentAnswer,
    ConsentForm,
    CredentialsForm,
    MemoryPreferenceForm,
    get_form_options,
)
from .payload import IncompletePayloadError, OnboardingPayload
from .state import STEP_SEQUENCE, OnboardingState, OnboardingStep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


# =============================================================================
# Session Store
# =============================================================================

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OnboardingSession:
    coordinator: OnboardingCoordinator
    expires_at: datetime
    payload: OnboardingPayload | None = None
    created_at: datetime = field(default_factory=_utcnow)


# Simple in-memory session store (one process, no persistence)
sessions: dict[str, OnboardingSession] = {}


def create_session(settings: Settings) -> tuple[str, OnboardingSession]:
    """Start a fresh onboarding session and return (session_id, session)."""
    session_id = secrets.token_urlsafe(32)

    def _store_payload(payload: OnboardingPayload) -> None:
        session.payload = payload

    session = OnboardingSession(
        coordinator=OnboardingCoordinator(
            on_complete=_store_payload,
            bcrypt_rounds=settings.bcrypt_rounds,
        ),
        expires_at=_utcnow() + timedelta(hours=settings.session_expire_hours),
    )
    sessions[session_id] = session
    logger.info(f"Onboarding session created ({len(sessions)} active)")
    return session_id, session


def get_session(session_id: str) -> OnboardingSession:
    """Look up a live session or raise 404."""
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Onboarding session not found")
    if session.expires_at <= _utcnow():
        del sessions[session_id]
        raise HTTPException(status_code=404, detail="Onboarding session expired")
    return session


def purge_expired_sessions() -> int:
    """Drop expired sessions. Returns how many were removed."""
    now = _utcnow()
    expired = [sid for sid, s in sessions.items() if s.expires_at <= now]
    for sid in expired:
        del sessions[sid]
    if expired:
        logger.info(f"Purged {len(expired)} expired onboarding session(s)")
    return len(expired)


# =============================================================================
# Request/Response Models
# =============================================================================

class SkipRequest(BaseModel):
    """Skip an assessment question (current one when omitted)."""
    question_index: int | None = None


class StateResponse(BaseModel):
    """Current onboarding state."""
    session_id: str
    current_step: str
    steps_completed: list[str]
    is_complete: bool
    state: dict


class StepResponse(BaseModel):
    """Response after an advance attempt."""
    success: bool
    current_step: str
    previous_step: str
    is_complete: bool
    errors: list[str] = []


def get_completed_steps(state: OnboardingState) -> list[str]:
    """Steps already passed. The terminal step counts once onboarding is complete."""
    current_idx = STEP_SEQUENCE.index(state.current_step)
    completed = [step.value for step in STEP_SEQUENCE[:current_idx]]
    if state.is_complete:
        completed.append(state.current_step.value)
    return completed


def _state_response(session_id: str, session: OnboardingSession) -> StateResponse:
    state = session.coordinator.state
    return StateResponse(
        session_id=session_id,
        current_step=state.current_step.value,
        steps_completed=get_completed_steps(state),
        is_complete=state.is_complete,
        state=state.to_dict(),
    )


def _step_response(result: AdvanceResult) -> StepResponse:
    return StepResponse(
        success=result.success,
        current_step=result.step.value,
        previous_step=result.previous_step.value,
        is_complete=result.is_complete,
        errors=result.errors,
    )


def _ensure_step(session: OnboardingSession, step: OnboardingStep) -> None:
    """Reject input for a finished session or for a step other than the active one."""
    coordinator = session.coordinator
    if coordinator.is_complete:
        raise HTTPException(status_code=409, detail="Onboarding is already complete")
    if coordinator.current_step != step:
        raise HTTPException(
            status_code=409,
            detail=f"Current step is {coordinator.current_step.value}, not {step.value}",
        )


# =============================================================================
# Endpoints: Options & Sessions
# =============================================================================

@router.get("/options")
async def get_onboarding_options():
    """
    Get form options for every step.

    Returns assessment questions, rating labels, memory preference choices
    and design variants for frontend rendering.
    """
    return get_form_options()


@router.post("/sessions", response_model=StateResponse, status_code=201)
async def start_onboarding(settings: Settings = Depends(get_settings)) -> StateResponse:
    """Begin a new onboarding session at the Welcome step."""
    purge_expired_sessions()
    session_id, session = create_session(settings)
    return _state_response(session_id, session)


@router.get("/sessions/{session_id}", response_model=StateResponse)
async def get_onboarding_state(session_id: str) -> StateResponse:
    """Get current onboarding progress."""
    return _state_response(session_id, get_session(session_id))


@router.delete("/sessions/{session_id}", status_code=204)
async def discard_onboarding(session_id: str) -> None:
    """Drop a session (after hand-off, or when the user abandons onboarding)."""
    get_session(session_id)
    del sessions[session_id]


# =============================================================================
# Endpoints: Step Input
# =============================================================================

@router.put("/sessions/{session_id}/credentials", response_model=StateResponse)
async def submit_credentials(session_id: str, form: CredentialsForm) -> StateResponse:
    """Store email/password. Checked when advancing out of Authentication."""
    session = get_session(session_id)
    _ensure_step(session, OnboardingStep.AUTHENTICATION)
    session.coordinator.set_credentials(
        email=form.email,
        password=form.password,
        confirmation=form.password_confirmation,
        mode=form.mode,
    )
    return _state_response(session_id, session)


@router.put("/sessions/{session_id}/assessment/{question_index}", response_model=StateResponse)
async def submit_assessment_answer(
    session_id: str,
    question_index: int,
    answer: AssessmentAnswer,
) -> StateResponse:
    """Rate one assessment question (1-5)."""
    session = get_session(session_id)
    _ensure_step(session, OnboardingStep.EMOTIONAL_ASSESSMENT)
    try:
        session.coordinator.set_response(question_index, answer.rating)
    except InvalidResponseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state_response(session_id, session)


@router.post("/sessions/{session_id}/assessment/skip", response_model=StateResponse)
async def skip_assessment_question(session_id: str, request: SkipRequest) -> StateResponse:
    """Skip an assessment question without rating it."""
    session = get_session(session_id)
    _ensure_step(session, OnboardingStep.EMOTIONAL_ASSESSMENT)
    try:
        session.coordinator.skip_question(request.question_index)
    except InvalidResponseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state_response(session_id, session)


@router.put("/sessions/{session_id}/memory-preference", response_model=StateResponse)
async def submit_memory_preference(session_id: str, form: MemoryPreferenceForm) -> StateResponse:
    session = get_session(session_id)
    _ensure_step(session, OnboardingStep.MEMORY_PREFERENCE)
    session.coordinator.set_memory_preference(form.preference)
    return _state_response(session_id, session)


@router.put("/sessions/{session_id}/consent", response_model=StateResponse)
async def submit_consent(session_id: str, form: ConsentForm) -> StateResponse:
    """Privacy policy acceptance (required) and notification opt-in (optional)."""
    session = get_session(session_id)
    _ensure_step(session, OnboardingStep.PRIVACY_CONSENT)
    session.coordinator.set_privacy_consent(form.accepted_privacy_policy)
    session.coordinator.set_notifications(form.allows_notifications)
    return _state_response(session_id, session)


# =============================================================================
# Endpoints: Transitions
# =============================================================================

@router.post("/sessions/{session_id}/advance", response_model=StepResponse)
async def advance_onboarding(session_id: str) -> StepResponse:
    """
    Try to move to the next step.

    A blocked advance is still a 200: success is false and errors lists
    what the user needs to fix.
    """
    session = get_session(session_id)
    return _step_response(session.coordinator.advance())


@router.post("/sessions/{session_id}/reset", response_model=StateResponse)
async def reset_onboarding(session_id: str) -> StateResponse:
    """Start over from Welcome."""
    session = get_session(session_id)
    session.coordinator.reset()
    session.payload = None
    return _state_response(session_id, session)


@router.get("/sessions/{session_id}/payload")
async def get_onboarding_payload(session_id: str) -> dict:
    """Hand-off payload. Only available once onboarding is complete."""
    session = get_session(session_id)
    if session.payload is None:
        try:
            session.payload = session.coordinator.build_payload()
        except IncompletePayloadError as e:
            raise HTTPException(status_code=409, detail=str(e))
    return session.payload.to_dict()
