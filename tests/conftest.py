"""
Pytest configuration and fixtures for Mindful tests.
"""

import os
import pytest

# Set test environment before importing mindful modules
os.environ["MINDFUL_ENV"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"

from onboarding.coordinator import OnboardingCoordinator
from onboarding.state import AuthMode


TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def coordinator():
    """Fresh coordinator at the Welcome step."""
    return OnboardingCoordinator(bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def completed_payloads():
    """Collects payloads passed to on_complete."""
    return []


@pytest.fixture
def tracked_coordinator(completed_payloads):
    """Coordinator whose on_complete hook records payloads."""
    return OnboardingCoordinator(
        on_complete=completed_payloads.append,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
    )


def _walk_to(coordinator: OnboardingCoordinator, step_name: str) -> None:
    """Drive a coordinator with valid input until it reaches the named step."""
    while coordinator.current_step.value != step_name:
        step = coordinator.current_step.value
        if step == "authentication":
            coordinator.set_credentials("a@b.com", "x", "x", mode=AuthMode.SIGN_UP)
        elif step == "emotional_assessment":
            for i in range(5):
                coordinator.set_response(i, 3)
        elif step == "privacy_consent":
            raise AssertionError(f"Never reached {step_name}")
        assert coordinator.advance(), f"Advance failed at {step}"


@pytest.fixture
def walk_to():
    """Helper that advances a coordinator to a given step with valid input."""
    return _walk_to


@pytest.fixture
def sample_responses():
    """A complete set of assessment ratings."""
    return [2, 4, 3, 1, 5]
