"""
Onboarding Forms - step-local validation.

Each gated step has a validator returning (is_valid, error_messages).
A failed check is something the user can fix and resubmit, so nothing
here raises for bad user input.
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from .assessment import ASSESSMENT_QUESTIONS, MAX_RATING, MIN_RATING, AssessmentResponses
from .state import DEFAULT_MEMORY_PREFERENCE, AuthMode, MemoryPreference

logger = logging.getLogger(__name__)


class DesignVariant(Enum):
    """Visual variants of the onboarding screens. Flow logic never reads this."""
    PERFECT_BLEND = "perfect_blend"
    SOFT_SUPPORTIVE = "soft_supportive"
    CLEAN_FOCUSED = "clean_focused"

    @property
    def display_name(self) -> str:
        return {
            DesignVariant.PERFECT_BLEND: "Perfect Blend",
            DesignVariant.SOFT_SUPPORTIVE: "Soft & Supportive",
            DesignVariant.CLEAN_FOCUSED: "Clean & Focused",
        }[self]


# =============================================================================
# Form Models
# =============================================================================

class CredentialsForm(BaseModel):
    """
    Authentication step input.

    Emptiness and confirmation checks happen in validate_credentials, not
    here, so an incomplete form can still be stored and corrected.
    """

    email: str = Field(default="", description="Account email")
    password: str = Field(default="", description="Account password")
    password_confirmation: str = Field(
        default="",
        description="Repeat of the password (sign-up only)"
    )
    mode: AuthMode = Field(default=AuthMode.SIGN_UP)


class AssessmentAnswer(BaseModel):
    """One rating for the emotional assessment."""
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)


class MemoryPreferenceForm(BaseModel):
    preference: MemoryPreference = DEFAULT_MEMORY_PREFERENCE


class ConsentForm(BaseModel):
    accepted_privacy_policy: bool = False
    allows_notifications: bool = False


# =============================================================================
# Validators
# =============================================================================

def validate_credentials(
    email: str,
    password: str,
    confirmation: str = "",
    mode: AuthMode = AuthMode.SIGN_UP,
) -> tuple[bool, list[str]]:
    """
    Validate the authentication form.

    Only emptiness and (in sign-up mode) confirmation equality are checked;
    there is no email format validation.

    Returns:
        (is_valid, error_messages)
    """
    errors = []

    if not email:
        errors.append("Email is required")
    if not password:
        errors.append("Password is required")
    if mode == AuthMode.SIGN_UP and password != confirmation:
        errors.append("Passwords do not match")

    return (len(errors) == 0, errors)


def validate_assessment(responses: AssessmentResponses) -> tuple[bool, list[str]]:
    """Every question must be rated or skipped."""
    pending = responses.unanswered_questions()
    if pending:
        numbers = ", ".join(str(i + 1) for i in pending)
        return (False, [f"Please answer or skip question(s): {numbers}"])
    return (True, [])


def validate_privacy(accepted: bool) -> tuple[bool, list[str]]:
    if accepted is not True:
        return (False, ["You must accept the Terms of Service and Privacy Policy"])
    return (True, [])


# =============================================================================
# API Response Helpers
# =============================================================================

def get_form_options() -> dict:
    """
    Get all form options for frontend rendering.

    Returns dict with:
    - auth_modes: sign-up / sign-in
    - assessment_questions: question text, subtitle and rating labels
    - rating_range: min/max rating
    - memory_preferences: options with display metadata
    - default_memory_preference
    - design_variants: available visual variants
    """
    return {
        "auth_modes": [m.value for m in AuthMode],
        "assessment_questions": [
            {
                "index": i,
                "key": q.key,
                "question": q.question,
                "subtitle": q.subtitle,
                "rating_labels": list(q.rating_labels),
            }
            for i, q in enumerate(ASSESSMENT_QUESTIONS)
        ],
        "rating_range": {"min": MIN_RATING, "max": MAX_RATING},
        "memory_preferences": [
            {
                "id": p.value,
                "label": p.display_name,
                "description": p.description,
                "retention_days": p.retention_days,
            }
            for p in MemoryPreference
        ],
        "default_memory_preference": DEFAULT_MEMORY_PREFERENCE.value,
        "design_variants": [
            {"id": d.value, "label": d.display_name} for d in DesignVariant
        ],
    }
