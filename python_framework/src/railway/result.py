"""
Result algebra — the two-track core of Railway-Oriented Programming.

A Result[E, V] is either Success(value: V) or Failure(error: E). The error
type is whatever the domain wants to carry: a Fault, an exception, a string.
Transformations short-circuit on Failure, so only the success path is
written and failures travel untouched to the end of the line.

    ┌───────────┐   flat_map    ┌───────────┐    map     ┌──────────┐
    │ validate  │──Success──────│  enrich   │──Success───│  format  │──→ Result[E, V]
    └─────┬─────┘               └─────┬─────┘            └─────┬────┘
          │ Failure                   │ Failure                │ Failure
          └───────────────────────────┴────────────────────────┴──→ Result[E, V]

The methods on Result are the data-first forms (result.flat_map(f)).
The data-last stage constructors used inside pipe() live in
railway.adapters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Optional,
    TypeVar,
    assert_never,
)

E = TypeVar("E")
F = TypeVar("F")
V = TypeVar("V")
W = TypeVar("W")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")


class Result(Generic[E, V]):
    """
    Railway-Oriented Programming Result.

    Exactly two concrete variants exist:
      - Success(value: V) — the happy path
      - Failure(error: E) — the failure track

    Usage:
        >>> Result.success(21).map(lambda x: x * 2)
        Success(42)

        >>> Result.failure("boom").map(lambda x: x * 2).is_failure()
        True
    """

    __slots__ = ()

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Result is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Result is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> V:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer match() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err!r}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """Extract the failure payload. Raises ValueError if called on a Success."""
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(
        self,
        on_success: Callable[[V], R],
        on_failure: Callable[[E], R],
    ) -> R:
        """Apply one of two functions depending on the variant."""
        return match(on_failure, on_success, self)

    def map(self, mapper: Callable[[V], W]) -> Result[E, W]:
        """
        Transform the success value. Short-circuits on failure.

            Result.success(5).map(lambda x: x * 2)   # → Success(10)
            Result.failure(e).map(lambda x: x * 2)   # → Failure(e), mapper not called
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure():
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(self, mapper: Callable[[E], F]) -> Result[F, V]:
        """Transform the failure payload. Passes Success through unchanged."""
        match self:
            case Success():
                return self  # type: ignore[return-value]
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[V], Result[F, W]]) -> Result[E | F, W]:
        """
        Chain a Result-returning (switch) function. Short-circuits on failure.

        Monadic bind: Haskell's >>=, Rust's and_then.

            def positive(x: int) -> Result[str, int]:
                return Result.success(x) if x > 0 else Result.failure("not positive")

            Result.success(5).flat_map(positive)    # → Success(5)
            Result.success(-1).flat_map(positive)   # → Failure('not positive')
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure():
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(self, predicate: Callable[[V], bool], fault: F) -> Result[E | F, V]:
        """
        Keep the success value only if it satisfies the predicate.

            Result.success(age).ensure(lambda a: a >= 18, too_young)
        """
        return self.flat_map(
            lambda v: Success(v) if predicate(v) else Failure(fault)
        )

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[V], Any]) -> Result[E, V]:
        """Run a side effect on the success value; the Result is returned unchanged."""
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[E], Any]) -> Result[E, V]:
        """Run a side effect on the failure payload; the Result is returned unchanged."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], V]) -> Result[E, V]:
        """Turn a failure back into a success value."""
        match self:
            case Success():
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: V) -> V:
        """Extract value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[E], V]) -> V:
        """Extract value or compute a default from the failure."""
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: V) -> Result[Any, V]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def failure(error: E) -> Result[E, Any]:
        """Create a failed Result wrapping the given fault."""
        return Failure(error)

    @staticmethod
    def from_computation(
        computation: Callable[[], V],
        on_error: Callable[[Exception], E],
    ) -> Result[E, V]:
        """
        Create a Result from a computation that may raise.

            Result.from_computation(
                lambda: int(raw_age),
                lambda e: catalog.create(Kind.INVALID_AGE, raw_age, exception=e),
            )
        """
        try:
            return Success(computation())
        except Exception as e:
            return Failure(on_error(e))

    @staticmethod
    def from_optional(value: Optional[V], fault: E) -> Result[E, V]:
        """Success when the value is present, Failure(fault) when it is None."""
        if value is not None:
            return Success(value)
        return Failure(fault)

    @staticmethod
    def combine(
        ra: Result[E, A],
        rb: Result[E, B],
        combiner: Callable[[A, B], R],
    ) -> Result[E, R]:
        """Combine two Results. Both must succeed; the first failure wins."""
        return ra.flat_map(lambda a: rb.map(lambda b: combiner(a, b)))

    @staticmethod
    def combine3(
        ra: Result[E, A],
        rb: Result[E, B],
        rc: Result[E, C],
        combiner: Callable[[A, B, C], R],
    ) -> Result[E, R]:
        """Combine three Results. All must succeed."""
        return ra.flat_map(lambda a: rb.flat_map(lambda b: rc.map(lambda c: combiner(a, b, c))))

    @staticmethod
    def all_of(results: List[Result[E, V]]) -> Result[E, List[V]]:
        """
        Collect a list of Results into a Result of list.
        Returns the first failure encountered, or Success with all values.
        """
        values: list[V] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure():
                    return r  # type: ignore[return-value]
        return Success(values)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Truthy only on Success: `if result: ...`."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Result[Any, V]):
    """The success track — wraps a value of type V."""

    _value: V

    def __init__(self, value: V) -> None:
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


@dataclass(frozen=True, slots=True)
class Failure(Result[E, Any]):
    """The failure track — wraps a fault of type E."""

    _error: E

    def __init__(self, error: E) -> None:
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._error == other._error
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._error))


# Enable structural pattern matching: case Success(value) / case Failure(error)
Success.__match_args__ = ("_value",)
Failure.__match_args__ = ("_error",)


def match(
    on_failure: Callable[[E], R],
    on_success: Callable[[V], R],
    result: Result[E, V],
) -> R:
    """
    Deconstruct a Result: call exactly one of the two callbacks with its payload.

    A third variant, or anything that is not a Result, trips assert_never.
    """
    match result:
        case Success(v):
            return on_success(v)
        case Failure(err):
            return on_failure(err)
        case _:
            assert_never(result)  # type: ignore[arg-type]
