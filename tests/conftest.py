"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import Verbosity, settings

from ryandata_form_constraints import ConstraintService, reset_default_service

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


PERSON_CONSTRAINTS: dict[str, Any] = {
    "Person": {
        "firstName": {
            "required": {"message": "First name is required."},
            "size": {"min": 2, "max": 20, "message": "First name must be 2 to 20 characters."},
            "pattern": {"value": "[a-zA-Z]{4,}", "message": "Letters only, at least 4."},
        },
        "lastName": {
            "required": {"message": "Last name is required."},
        },
        "age": {
            "min": {"min": 0, "message": "Age cannot be negative."},
            "max": {"max": 150, "message": "Age is too high."},
        },
        "email": {
            "email": {"message": "Email is invalid."},
        },
        "website": {
            "url": {"message": "Website must be a URL."},
        },
        "nickname": {
            "minLength": {"minLength": 2, "message": "Nickname too short."},
            "maxLength": {"maxLength": 8, "message": "Nickname too long."},
        },
    }
}


@pytest.fixture
def person_constraints() -> dict[str, Any]:
    """A fresh copy of the Person constraint spec."""
    import copy

    return copy.deepcopy(PERSON_CONSTRAINTS)


@pytest.fixture
def service(person_constraints: dict[str, Any]) -> ConstraintService:
    """A ConstraintService loaded with the Person constraints."""
    return ConstraintService(person_constraints)


@pytest.fixture(autouse=True)
def _isolated_default_service(monkeypatch: pytest.MonkeyPatch):
    """Keep the module-level default service from leaking between tests."""
    monkeypatch.delenv("RYANDATA_CONSTRAINTS_FILE", raising=False)
    reset_default_service()
    yield
    reset_default_service()
