"""
Sign-up fault kinds and their message catalog.

SIGNUP_FAULTS is the default catalog; pipelines take a catalog as a
parameter so deployments can swap wording without touching the rules.
"""

from __future__ import annotations

from enum import Enum, unique

from railway.failure import FaultCatalog


@unique
class SignupFaultKind(Enum):
    """Closed set of reasons a sign-up can be rejected."""

    NO_USER_NAME = "NO_USER_NAME"
    NO_USER_EMAIL = "NO_USER_EMAIL"
    USER_TOO_YOUNG = "USER_TOO_YOUNG"
    USER_NO_VALID_NAME = "USER_NO_VALID_NAME"
    NO_PATH_GIVEN = "NO_PATH_GIVEN"
    INVALID_PATH_GIVEN = "INVALID_PATH_GIVEN"


SIGNUP_FAULTS = FaultCatalog(
    {
        SignupFaultKind.NO_USER_NAME: "No user name given",
        SignupFaultKind.NO_USER_EMAIL: "No email given for user {0}",
        SignupFaultKind.USER_TOO_YOUNG: "User too young: {0} (minimum {1})",
        SignupFaultKind.USER_NO_VALID_NAME: "Not a valid name: {0}",
        SignupFaultKind.NO_PATH_GIVEN: "No home directory given",
        SignupFaultKind.INVALID_PATH_GIVEN: "Home directory does not exist",
    }
)
