"""
Tests for step-local validation and form options.
"""

import pytest
from pydantic import ValidationError

from onboarding.assessment import AssessmentResponses
from onboarding.forms import (
    AssessmentAnswer,
    CredentialsForm,
    DesignVariant,
    get_form_options,
    validate_assessment,
    validate_credentials,
    validate_privacy,
)
from onboarding.state import AuthMode


class TestValidateCredentials:

    def test_valid_sign_up(self):
        assert validate_credentials("a@b.com", "abc123", "abc123") == (True, [])

    def test_empty_email(self):
        is_valid, errors = validate_credentials("", "abc123", "abc123")
        assert not is_valid
        assert errors == ["Email is required"]

    def test_empty_password(self):
        is_valid, errors = validate_credentials("a@b.com", "", "")
        assert not is_valid
        assert "Password is required" in errors

    def test_mismatched_confirmation(self):
        is_valid, errors = validate_credentials("a@b.com", "abc123", "abc124")
        assert not is_valid
        assert errors == ["Passwords do not match"]

    def test_sign_in_ignores_confirmation(self):
        assert validate_credentials("a@b.com", "abc123", "", AuthMode.SIGN_IN) == (True, [])

    def test_no_email_format_check(self):
        is_valid, _ = validate_credentials("not-an-email", "x", "x")
        assert is_valid

    def test_reports_every_problem(self):
        _, errors = validate_credentials("", "", "y")
        assert len(errors) == 3


class TestValidateAssessment:

    def test_blocks_until_visited(self):
        responses = AssessmentResponses()
        responses.set_response(0, 3)
        is_valid, errors = validate_assessment(responses)
        assert not is_valid
        assert "2, 3, 4, 5" in errors[0]

    def test_all_skipped_passes(self):
        responses = AssessmentResponses()
        for _ in range(5):
            responses.skip()
        assert validate_assessment(responses) == (True, [])


class TestValidatePrivacy:

    def test_requires_true(self):
        assert validate_privacy(False)[0] is False
        assert validate_privacy(True) == (True, [])


class TestFormModels:

    def test_credentials_defaults(self):
        form = CredentialsForm()
        assert form.email == ""
        assert form.mode == AuthMode.SIGN_UP

    def test_credentials_mode_from_string(self):
        form = CredentialsForm(email="a@b.com", password="x", mode="sign_in")
        assert form.mode == AuthMode.SIGN_IN

    @pytest.mark.parametrize("rating", [0, 6])
    def test_answer_range(self, rating):
        with pytest.raises(ValidationError):
            AssessmentAnswer(rating=rating)


class TestFormOptions:

    def test_structure(self):
        options = get_form_options()
        assert len(options["assessment_questions"]) == 5
        assert options["rating_range"] == {"min": 1, "max": 5}
        assert options["default_memory_preference"] == "30_days"
        assert [p["id"] for p in options["memory_preferences"]] == ["session_only", "7_days", "30_days"]
        assert options["auth_modes"] == ["sign_up", "sign_in"]

    def test_design_variants(self):
        labels = [d["label"] for d in get_form_options()["design_variants"]]
        assert labels == ["Perfect Blend", "Soft & Supportive", "Clean & Focused"]
        assert DesignVariant("clean_focused") == DesignVariant.CLEAN_FOCUSED
