"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages:

    from railway import ResultAssertions

    def test_register_user():
        user = ResultAssertions.assert_success(register(john))
        assert user.name == "JOHN"

    def test_too_young():
        ResultAssertions.assert_failure_kind(register(kid), Kind.USER_TOO_YOUNG)
"""

from __future__ import annotations

from typing import Any, TypeVar

from railway.result import Result

E = TypeVar("E")
V = TypeVar("V")

_MISSING = object()


def _describe(result: Result[Any, Any]) -> str:
    return repr(result)


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[E, V], message: str = "") -> V:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert isinstance(result, Result), f"Expected a Result but got {result!r}{context}"
        assert result.is_success(), (
            f"Expected Success but got {_describe(result)}{context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[E, V],
        expected: Any = _MISSING,
        message: str = "",
    ) -> E:
        """
        Assert the Result is a Failure, optionally comparing its payload.

            error = ResultAssertions.assert_failure(result, expected_fault)
        """
        context = f" — {message}" if message else ""
        assert isinstance(result, Result), f"Expected a Result but got {result!r}{context}"
        assert result.is_failure(), (
            f"Expected Failure but got {_describe(result)}{context}"
        )
        error = result.error()
        if expected is not _MISSING:
            assert error == expected, (
                f"Expected failure {expected!r} but got {error!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_kind(result: Result[E, V], kind: Any) -> E:
        """Assert the Result is a Failure whose payload has the given `kind`."""
        error = ResultAssertions.assert_failure(result)
        actual = getattr(error, "kind", None)
        assert actual == kind, (
            f"Expected failure kind {kind!r} but got {actual!r}: {error!r}"
        )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[E, V], substring: str) -> None:
        """Assert that the failure message (or str of the payload) contains the substring."""
        error = ResultAssertions.assert_failure(result)
        text = getattr(error, "message", None) or str(error)
        assert substring.lower() in text.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {text!r}"
        )

    @staticmethod
    def assert_failure_message_equals(result: Result[E, V], expected_message: str) -> None:
        """Assert that the failure message exactly equals the expected message."""
        error = ResultAssertions.assert_failure(result)
        text = getattr(error, "message", None) or str(error)
        assert text == expected_message, (
            f"Expected failure message {expected_message!r} but got {text!r}"
        )

    @staticmethod
    def assert_success_value(result: Result[E, V], expected_value: Any) -> None:
        """Assert the Result is a Success with the specific value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
