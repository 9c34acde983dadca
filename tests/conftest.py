"""
Shared test fixtures for the signup test suite.

Provides deterministic settings (no .env file, no SIGNUP_* leakage from the
environment), a validator bound to them, and the canonical test user.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import structlog

from signup.config import SignupSettings
from signup.domain.models import User
from signup.domain.validators import UserValidator


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip SIGNUP_* variables so each test starts from defaults."""
    for name in list(os.environ):
        if name.startswith("SIGNUP_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def settings() -> SignupSettings:
    """Default sign-up settings, ignoring any .env file."""
    return SignupSettings(_env_file=None)


@pytest.fixture()
def validator(settings: SignupSettings) -> UserValidator:
    return UserValidator(
        minimum_age=settings.minimum_age,
        name_pattern=settings.name_pattern,
    )


@pytest.fixture()
def john() -> User:
    """The canonical valid sign-up."""
    return User(name="john", email="john@doe.com", age=18)
