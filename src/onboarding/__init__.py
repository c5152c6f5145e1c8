"""
Mindful Onboarding.

First-run flow for new users. Collects credentials, a short emotional
assessment, a memory-retention preference and privacy consent, then hands
off a structured payload.

Steps (fixed order):
1. Welcome
2. Authentication - email/password, confirmation in sign-up mode
3. Emotional Assessment - five 1-5 ratings, each skippable
4. Memory Preference - session only / 7 days / 30 days
5. Privacy Consent - required to finish
"""

from .assessment import AssessmentResponses, InvalidResponseError, ASSESSMENT_QUESTIONS
from .state import OnboardingState, OnboardingStep, MemoryPreference, AuthMode
from .coordinator import OnboardingCoordinator, AdvanceResult, OnboardingCompleteError, StepMismatchError
from .payload import OnboardingPayload, IncompletePayloadError

__all__ = [
    "ASSESSMENT_QUESTIONS",
    "AdvanceResult",
    "AssessmentResponses",
    "AuthMode",
    "IncompletePayloadError",
    "InvalidResponseError",
    "MemoryPreference",
    "OnboardingCompleteError",
    "OnboardingCoordinator",
    "OnboardingPayload",
    "OnboardingState",
    "OnboardingStep",
    "StepMismatchError",
]
