"""
Composition engine — left-to-right function composition with transparent awaiting.

pipe(f1, f2, ..., fn) builds one callable that threads a single argument
through every stage in order: run(x) = fn(...f2(f1(x))).

A stage may return an awaitable instead of a plain value. The engine
checks every intermediate value structurally (does it expose __await__?)
and, on the first awaitable, hands the rest of the chain to a coroutine
that awaits it and keeps going, awaiting again whenever a later stage
suspends. A chain that never suspends returns its value directly, with
no event loop involved.

    def parse(raw: str) -> int: ...
    async def fetch(user_id: int) -> dict: ...
    def render(user: dict) -> str: ...

    pipe(parse, str)("42")                  # → "42" (synchronous)
    await pipe(parse, fetch, render)("42")  # awaitable from fetch onwards

The engine never looks inside values: it is blind to Result. Skipping
stages on Failure is the job of the railway adapters wrapping them.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar, overload

logger = logging.getLogger("railway.pipe")

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
E = TypeVar("E")
F = TypeVar("F")
G = TypeVar("G")
H = TypeVar("H")

Stage = Callable[[Any], Any]


def is_suspended(value: object) -> bool:
    """
    True if the value is a pending computation that must be awaited.

    Detection is by shape, not by type: native coroutines, asyncio
    futures/tasks, generator-based coroutines and any object exposing
    __await__ all count.
    """
    return inspect.isawaitable(value)


async def _settle(pending: Awaitable[Any]) -> Any:
    value = await pending
    while is_suspended(value):
        value = await value
    return value


async def _resume(pending: Awaitable[Any], remaining: Sequence[Stage]) -> Any:
    current = await _settle(pending)
    for stage in remaining:
        current = stage(current)
        if is_suspended(current):
            current = await _settle(current)
    return current


def _run(stages: Sequence[Stage], value: Any) -> Any:
    current = value
    for index, stage in enumerate(stages):
        current = stage(current)
        if is_suspended(current):
            logger.debug(
                "Stage %d/%d returned an awaitable; continuing asynchronously",
                index + 1,
                len(stages),
            )
            return _resume(current, stages[index + 1:])
    return current


@overload
def pipe(f1: Callable[[A], B], /) -> Callable[[A], B]: ...
@overload
def pipe(f1: Callable[[A], B], f2: Callable[[B], C], /) -> Callable[[A], C]: ...
@overload
def pipe(
    f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D], /
) -> Callable[[A], D]: ...
@overload
def pipe(
    f1: Callable[[A], B],
    f2: Callable[[B], C],
    f3: Callable[[C], D],
    f4: Callable[[D], E],
    /,
) -> Callable[[A], E]: ...
@overload
def pipe(
    f1: Callable[[A], B],
    f2: Callable[[B], C],
    f3: Callable[[C], D],
    f4: Callable[[D], E],
    f5: Callable[[E], F],
    /,
) -> Callable[[A], F]: ...
@overload
def pipe(
    f1: Callable[[A], B],
    f2: Callable[[B], C],
    f3: Callable[[C], D],
    f4: Callable[[D], E],
    f5: Callable[[E], F],
    f6: Callable[[F], G],
    /,
) -> Callable[[A], G]: ...
@overload
def pipe(
    f1: Callable[[A], B],
    f2: Callable[[B], C],
    f3: Callable[[C], D],
    f4: Callable[[D], E],
    f5: Callable[[E], F],
    f6: Callable[[F], G],
    f7: Callable[[G], H],
    /,
) -> Callable[[A], H]: ...
@overload
def pipe(*stages: Stage) -> Stage: ...


def pipe(*stages: Stage) -> Stage:
    """
    Compose unary stages left to right into a single callable.

    Raises ValueError when called with no stages. The returned callable
    yields a plain value if no stage suspended, otherwise an awaitable
    that resolves to the final value.
    """
    if not stages:
        raise ValueError("at least one stage required")
    chain = tuple(stages)

    def run(value: Any) -> Any:
        return _run(chain, value)

    return run


def mapped_pipe(wrapper: Callable[[Stage], Stage]) -> Callable[..., Stage]:
    """
    Build a pipe() variant that wraps every stage after the first.

    The first stage receives the caller's argument untouched; each later
    stage f is replaced by wrapper(f) when the chain is built:

        bound = mapped_pipe(flat_map)
        bound(Success, validate_name, validate_age)
        # same as pipe(Success, flat_map(validate_name), flat_map(validate_age))
    """

    def build(*stages: Stage) -> Stage:
        if not stages:
            raise ValueError("at least one stage required")
        first, *rest = stages
        return pipe(first, *(wrapper(stage) for stage in rest))

    return build


def run_pipe(value: Any, *stages: Stage) -> Any:
    """Value-first form: run_pipe(x, f, g) == pipe(f, g)(x)."""
    return pipe(*stages)(value)
