"""
Sign-up rules — the switch and single-track functions of the railway.

Switch functions take a User and return Result[Fault, User]: either the
user moves on, or a fault derails the chain. capitalize_name is a
single-track function (plain User -> User) lifted with adapters.map.

resolve_home is the one stage that touches the filesystem. It returns a
plain Result when there is nothing to check and an awaitable otherwise;
a missing directory surfaces as a raised FileNotFoundError, which the
pipeline converts with adapters.guard.
"""

from __future__ import annotations

import asyncio
import errno
import re
from dataclasses import replace
from pathlib import Path
from typing import Awaitable

from railway.failure import Fault, FaultCatalog
from railway.result import Failure, Result, Success

from signup.domain.faults import SIGNUP_FAULTS, SignupFaultKind
from signup.domain.models import User


def _real_directory(path: str) -> Path:
    resolved = Path(path).expanduser().resolve(strict=True)
    if not resolved.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
    return resolved


class UserValidator:
    """Sign-up rules bound to a minimum age, a name pattern and a fault catalog."""

    def __init__(
        self,
        minimum_age: int = 18,
        name_pattern: str | None = None,
        catalog: FaultCatalog = SIGNUP_FAULTS,
    ) -> None:
        self._minimum_age = minimum_age
        self._name_pattern = re.compile(name_pattern) if name_pattern else None
        self._catalog = catalog

    def validate_name(self, user: User) -> Result[Fault, User]:
        """Reject empty names and, if a pattern is configured, malformed ones."""
        name = user.name.strip() if user.name else ""
        if not name:
            return Failure(self._catalog.create(SignupFaultKind.NO_USER_NAME))
        if self._name_pattern is not None and not self._name_pattern.fullmatch(name):
            return Failure(self._catalog.create(SignupFaultKind.USER_NO_VALID_NAME, name))
        return Success(user)

    def validate_email(self, user: User) -> Result[Fault, User]:
        if not user.email or not user.email.strip():
            return Failure(self._catalog.create(SignupFaultKind.NO_USER_EMAIL, user.name))
        return Success(user)

    def validate_age(self, user: User) -> Result[Fault, User]:
        if user.age < self._minimum_age:
            return Failure(
                self._catalog.create(
                    SignupFaultKind.USER_TOO_YOUNG, user.age, self._minimum_age
                )
            )
        return Success(user)

    def resolve_home(self, user: User) -> Result[Fault, User] | Awaitable[Result[Fault, User]]:
        """
        Check the user's home directory and store its resolved path.

        No home → Success immediately. Blank home → NO_PATH_GIVEN fault.
        Otherwise returns an awaitable that raises FileNotFoundError for a
        missing path and NotADirectoryError for a regular file.
        """
        if user.home is None:
            return Success(user)
        if not user.home.strip():
            return Failure(self._catalog.create(SignupFaultKind.NO_PATH_GIVEN))
        return self._resolve_home(user)

    async def _resolve_home(self, user: User) -> Result[Fault, User]:
        resolved = await asyncio.to_thread(_real_directory, user.home or "")
        return Success(replace(user, home=str(resolved)))


def capitalize_name(user: User) -> User:
    """Single-track: upper-case the user's name."""
    return replace(user, name=user.name.upper())
