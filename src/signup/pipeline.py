"""
Pipeline — the sign-up railway.

Pure composition: every rule lives in signup.domain.validators, every
fault message in the injected catalog. The chain:

  Success(user)
    → validate_name → validate_email → validate_age      (railway_pipe: flat_map each)
      → capitalize_name                                   (map: single-track)
        → log the outcome                                 (tap: dead-end)
          → resolve_home                                  (flat_map + guard: may raise, may suspend)

The first failing rule derails the chain; later rules never run.
Only resolve_home can suspend, so the built callable returns a plain
Result when no home directory is given and an awaitable otherwise.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import structlog
from railway import adapters
from railway.failure import Fault, FaultCatalog
from railway.pipe import is_suspended, pipe
from railway.result import Result, Success, match

from signup.config import SignupSettings
from signup.domain.faults import SIGNUP_FAULTS, SignupFaultKind
from signup.domain.models import User
from signup.domain.validators import UserValidator, capitalize_name

log = structlog.get_logger()

SignupResult = Result[Fault | Exception, User]


def _log_outcome(result: Result[Fault, User]) -> None:
    match(
        lambda fault: log.info("signup.rejected", kind=fault.code, reason=fault.message),
        lambda user: log.info("signup.validated", name=user.name, email=user.email),
        result,
    )


def build_validation_chain(validator: UserValidator) -> Callable[[User], Result[Fault, User]]:
    """Name, email and age checks, each bound with flat_map."""
    return adapters.railway_pipe(
        Success,
        validator.validate_name,
        validator.validate_email,
        validator.validate_age,
    )


def build_signup_pipeline(
    settings: SignupSettings,
    catalog: FaultCatalog = SIGNUP_FAULTS,
) -> Callable[[User], Any]:
    """
    Build the full sign-up chain for the given settings and fault catalog.

    A missing home directory (ENOENT) is translated into the catalog's
    INVALID_PATH_GIVEN fault; any other filesystem error is forwarded as
    the raw exception inside the Failure.
    """
    validator = UserValidator(
        minimum_age=settings.minimum_age,
        name_pattern=settings.name_pattern,
        catalog=catalog,
    )
    home_faults = {"ENOENT": catalog.create(SignupFaultKind.INVALID_PATH_GIVEN)}
    return pipe(
        build_validation_chain(validator),
        adapters.map(capitalize_name),
        adapters.tap(_log_outcome),
        adapters.flat_map(adapters.guard(validator.resolve_home, home_faults)),
    )


async def register_user(
    user: User,
    settings: SignupSettings,
    catalog: FaultCatalog = SIGNUP_FAULTS,
) -> SignupResult:
    """Run the sign-up chain and always hand back an awaited Result."""
    outcome: SignupResult | Awaitable[SignupResult] = build_signup_pipeline(settings, catalog)(user)
    if is_suspended(outcome):
        return await outcome  # type: ignore[misc]
    return outcome  # type: ignore[return-value]
