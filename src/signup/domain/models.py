"""
Domain models — the immutable user record flowing through the sign-up railway.

Stages never mutate a User; they return a new one via dataclasses.replace.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """
    A sign-up request.

    `home` is an optional directory path; when given, the pipeline checks
    that it exists and replaces it with its resolved absolute form.
    """

    name: str
    email: str
    age: int
    home: str | None = None
