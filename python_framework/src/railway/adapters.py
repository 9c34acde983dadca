"""
Railway adapters — stage constructors that plug functions into a pipe().

Each adapter takes a plain function (and optional configuration) and
returns a new unary stage. Nothing runs at construction time.

  map(f)       single-track f: V -> W        becomes Result -> Result
  flat_map(f)  switch f: V -> Result          becomes Result -> Result
  tap(g)       dead-end g: T -> None          becomes T -> T
  guard(f)     raising switch f: V -> Result  becomes V -> Result, never raises

These are the data-last forms. The data-first forms are the methods on
Result itself (result.map(f), result.flat_map(f)).

    register = pipe(
        Success,
        flat_map(validate_name),
        flat_map(validate_age),
        map(capitalize_name),
        tap(print),
        flat_map(guard(resolve_home, {"ENOENT": invalid_path})),
    )

Adapters keep suspension intact: if the wrapped function returns an
awaitable, the stage returns an awaitable too and pipe() awaits it.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from railway.failure import fault_code
from railway.pipe import Stage, is_suspended, mapped_pipe
from railway.result import Failure, Result, Success

logger = logging.getLogger("railway.adapters")

E = TypeVar("E")
F = TypeVar("F")
T = TypeVar("T")
V = TypeVar("V")
W = TypeVar("W")


def _stage_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _require_result(previous: object, adapter: str, fn: Callable[..., Any]) -> None:
    if not isinstance(previous, Result):
        raise TypeError(
            f"{adapter}({_stage_name(fn)}) expects a Result, "
            f"got {type(previous).__name__}"
        )


async def _success_of(pending: Awaitable[W]) -> Result[Any, W]:
    return Success(await pending)


def map(mapper: Callable[[V], W]) -> Callable[[Result[E, V]], Result[E, W]]:
    """
    Lift a single-track function onto the railway.

    On Success(v) the stage returns Success(mapper(v)); on Failure it returns
    the failure unchanged and mapper is never called.
    """

    def stage(previous: Result[E, V]) -> Result[E, W]:
        _require_result(previous, "map", mapper)
        match previous:
            case Success(v):
                mapped = mapper(v)
                if is_suspended(mapped):
                    return _success_of(mapped)  # type: ignore[return-value]
                return Success(mapped)
            case Failure():
                return previous  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    stage.__qualname__ = f"map({_stage_name(mapper)})"
    return stage


def flat_map(
    switch: Callable[[V], Result[F, W]],
) -> Callable[[Result[E, V]], Result[E | F, W]]:
    """
    Bind a switch function: the KEY connector of the railway.

    On Success(v) the stage delegates entirely to switch(v), failure
    included; on Failure it returns the failure unchanged and switch is
    never called.
    """

    def stage(previous: Result[E, V]) -> Result[E | F, W]:
        _require_result(previous, "flat_map", switch)
        return previous.flat_map(switch)

    stage.__qualname__ = f"flat_map({_stage_name(switch)})"
    return stage


async def _then_return(pending: Awaitable[Any], value: T) -> T:
    await pending
    return value


def tap(side_effect: Callable[[T], Any]) -> Callable[[T], T]:
    """
    Run a dead-end function and pass the input through unchanged.

    The input is handed over as-is: a Result is not unwrapped. Compose
    with Result.peek inside a map stage to observe only success values.
    """

    def stage(previous: T) -> T:
        outcome = side_effect(previous)
        if is_suspended(outcome):
            return _then_return(outcome, previous)  # type: ignore[return-value]
        return previous

    stage.__qualname__ = f"tap({_stage_name(side_effect)})"
    return stage


def _translate(
    exception: Exception,
    fault_map: Mapping[str, Any],
    switch: Callable[..., Any],
) -> Result[Any, Any]:
    code = fault_code(exception)
    mapped = fault_map.get(code)
    logger.warning(
        "Guarded stage %s raised %s (%s); %s",
        _stage_name(switch),
        type(exception).__name__,
        code,
        "translated" if mapped is not None else "forwarding raw fault",
    )
    return Failure(mapped if mapped is not None else exception)


async def _guard_pending(
    pending: Awaitable[Result[E, W]],
    fault_map: Mapping[str, Any],
    switch: Callable[..., Any],
) -> Result[Any, W]:
    try:
        outcome = await pending
        while is_suspended(outcome):
            outcome = await outcome
        return outcome
    except Exception as e:
        return _translate(e, fault_map, switch)


def guard(
    switch: Callable[[V], Result[E, W]],
    fault_map: Optional[Mapping[str, F]] = None,
) -> Callable[[V], Result[E | F | Exception, W]]:
    """
    Convert raised exceptions into failures.

    Calls switch(v). A normal return is passed through unchanged. An
    Exception raised synchronously, or by the awaitable switch returned,
    becomes Failure(fault_map[code]) where code is fault_code(exception);
    codes missing from the map forward the exception itself.

        guard(read_config, {"ENOENT": catalog.create(Kind.NO_CONFIG)})

    BaseExceptions that are not Exceptions (KeyboardInterrupt,
    asyncio.CancelledError) are not intercepted.
    """
    faults: Mapping[str, Any] = dict(fault_map or {})

    def stage(value: V) -> Result[Any, W]:
        try:
            outcome = switch(value)
        except Exception as e:
            return _translate(e, faults, switch)
        if is_suspended(outcome):
            return _guard_pending(outcome, faults, switch)  # type: ignore[return-value]
        return outcome

    stage.__qualname__ = f"guard({_stage_name(switch)})"
    return stage


railway_pipe: Callable[..., Stage] = mapped_pipe(flat_map)
"""pipe() that wraps every stage after the first in flat_map."""
