"""
Tests for the railway adapters: map, flat_map, tap, guard, railway_pipe.

Covers short-circuiting, the bind associativity law, pass-through of
awaitables, and guard's exception translation.
"""

from __future__ import annotations

import asyncio
import errno
import logging
from unittest.mock import MagicMock

import pytest

from railway import Failure, Fault, Result, Success, match, pipe
from railway import adapters as rop


def half(x: int) -> Result[str, int]:
    if x % 2:
        return Failure(f"{x} is odd")
    return Success(x // 2)


def below_ten(x: int) -> Result[str, int]:
    if x >= 10:
        return Failure(f"{x} is too big")
    return Success(x)


class TestMapAdapter:
    def test_lifts_single_track_function(self):
        assert rop.map(lambda x: x + 1)(Success(1)) == Success(2)

    def test_never_invokes_function_on_failure(self):
        mapper = MagicMock(return_value=0)
        failure = Failure("derailed")
        assert rop.map(mapper)(failure) is failure
        mapper.assert_not_called()

    def test_side_effect_happens_once_on_success(self):
        mapper = MagicMock(side_effect=lambda x: x * 3)
        assert rop.map(mapper)(Success(2)) == Success(6)
        mapper.assert_called_once_with(2)

    def test_nothing_runs_at_construction(self):
        mapper = MagicMock()
        rop.map(mapper)
        mapper.assert_not_called()

    def test_rejects_non_result_input(self):
        with pytest.raises(TypeError, match="expects a Result, got int"):
            rop.map(str)(5)

    @pytest.mark.asyncio
    async def test_awaitable_mapper_is_rewrapped(self):
        async def fetch(x: int) -> int:
            await asyncio.sleep(0)
            return x * 10

        assert await rop.map(fetch)(Success(4)) == Success(40)

    def test_stage_is_named_after_mapper(self):
        assert rop.map(str).__qualname__ == "map(str)"


class TestFlatMapAdapter:
    def test_delegates_to_switch_on_success(self):
        assert rop.flat_map(half)(Success(8)) == Success(4)

    def test_switch_failure_is_returned(self):
        assert rop.flat_map(half)(Success(3)) == Failure("3 is odd")

    @pytest.mark.parametrize("switch", [half, below_ten, MagicMock()])
    def test_failure_short_circuits_for_any_switch(self, switch):
        failure = Failure("earlier")
        assert rop.flat_map(switch)(failure) == failure
        if isinstance(switch, MagicMock):
            switch.assert_not_called()

    @pytest.mark.parametrize("start", [4, 8, 12, 40, 3, 0])
    def test_associativity(self, start):
        left = rop.flat_map(below_ten)(rop.flat_map(half)(Success(start)))
        right = rop.flat_map(lambda x: rop.flat_map(below_ten)(half(x)))(Success(start))
        assert left == right

    @pytest.mark.parametrize("start", [4, 8, 12, 3])
    def test_associativity_through_match(self, start):
        f = lambda y: y + 1  # noqa: E731
        left = rop.flat_map(below_ten)(rop.flat_map(lambda y: Success(f(y)))(Success(start)))
        right = rop.flat_map(
            lambda x: match(Failure, lambda y: rop.flat_map(below_ten)(Success(y)), Success(f(x)))
        )(Success(start))
        assert left == right

    def test_left_identity(self):
        assert rop.flat_map(half)(Success(6)) == half(6)

    def test_right_identity(self):
        assert rop.flat_map(Success)(Success(6)) == Success(6)
        assert rop.flat_map(Success)(Failure("e")) == Failure("e")

    def test_rejects_non_result_input(self):
        with pytest.raises(TypeError, match=r"flat_map\(half\) expects a Result"):
            rop.flat_map(half)({"raw": "dict"})


class TestTapAdapter:
    def test_echoes_plain_value(self):
        seen: list[int] = []
        assert rop.tap(seen.append)(7) == 7
        assert seen == [7]

    def test_does_not_unwrap_results(self):
        seen: list[object] = []
        failure = Failure("x")
        assert rop.tap(seen.append)(failure) is failure
        assert seen == [failure]

    def test_callback_result_is_discarded(self):
        assert rop.tap(lambda _: "ignored")(Success(1)) == Success(1)

    def test_called_exactly_once(self):
        callback = MagicMock(return_value=None)
        rop.tap(callback)("input")
        callback.assert_called_once_with("input")

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited_then_input_returned(self):
        seen: list[int] = []

        async def record(x: int) -> str:
            await asyncio.sleep(0)
            seen.append(x)
            return "discarded"

        assert await rop.tap(record)(5) == 5
        assert seen == [5]


class CodedError(Exception):
    code = "E_CODED"


def boom(_: object) -> Result[str, int]:
    raise RuntimeError("boom")


def missing(_: object) -> Result[str, int]:
    raise FileNotFoundError(errno.ENOENT, "No such file or directory", "/nope")


class TestGuardAdapter:
    def test_normal_return_passes_through(self):
        assert rop.guard(half)(8) == Success(4)
        assert rop.guard(half)(3) == Failure("3 is odd")

    def test_raw_fault_when_no_map(self):
        result = rop.guard(boom)(1)
        assert result.is_failure()
        assert isinstance(result.error(), RuntimeError)
        assert str(result.error()) == "boom"

    def test_mapped_fault_by_errno_code(self):
        custom = Fault("INVALID_PATH", "Invalid path given")
        assert rop.guard(missing, {"ENOENT": custom})(1) == Failure(custom)

    def test_mapped_fault_by_code_attribute(self):
        def raises_coded(_):
            raise CodedError()

        assert rop.guard(raises_coded, {"E_CODED": "translated"})(1) == Failure("translated")

    def test_unknown_code_forwards_raw_fault(self):
        result = rop.guard(boom, {"ENOENT": "unused"})(1)
        assert isinstance(result.error(), RuntimeError)

    def test_none_mapping_falls_back_to_raw(self):
        result = rop.guard(missing, {"ENOENT": None})(1)
        assert isinstance(result.error(), FileNotFoundError)

    def test_keyboard_interrupt_is_not_intercepted(self):
        def interrupted(_):
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            rop.guard(interrupted)(1)

    def test_logs_captured_fault(self, caplog):
        with caplog.at_level(logging.WARNING, logger="railway.adapters"):
            rop.guard(boom)(1)
        assert "boom" in caplog.text
        assert "RuntimeError" in caplog.text
        assert "forwarding raw fault" in caplog.text

    @pytest.mark.asyncio
    async def test_async_rejection_becomes_failure(self):
        async def rejects(_: int) -> Result[str, int]:
            await asyncio.sleep(0)
            raise FileNotFoundError(errno.ENOENT, "gone")

        custom = Fault("INVALID_PATH", "Invalid path given")
        assert await rop.guard(rejects, {"ENOENT": custom})(1) == Failure(custom)

    @pytest.mark.asyncio
    async def test_nested_awaitable_rejection_becomes_failure(self):
        """
        GIVEN an async switch that returns a second awaitable
        AND that inner awaitable raises FileNotFoundError(ENOENT)
        WHEN the guarded stage runs inside a pipe
        THEN the chain resolves to Failure(mapped fault) instead of raising.
        """

        async def inner(_: int) -> Result[str, int]:
            raise FileNotFoundError(errno.ENOENT, "gone")

        async def outer(x: int):
            return inner(x)

        chain = pipe(Success, rop.flat_map(rop.guard(outer, {"ENOENT": "mapped"})))
        assert await chain(1) == Failure("mapped")

    @pytest.mark.asyncio
    async def test_nested_awaitable_success_is_settled(self):
        async def inner(x: int) -> Result[str, int]:
            return Success(x * 2)

        async def outer(x: int):
            return inner(x)

        assert await rop.guard(outer)(4) == Success(8)

    @pytest.mark.asyncio
    async def test_async_success_passes_through(self):
        async def fine(x: int) -> Result[str, int]:
            return Success(x)

        assert await rop.guard(fine)(3) == Success(3)

    @pytest.mark.asyncio
    async def test_async_cancellation_propagates(self):
        async def cancelled(_: int) -> Result[str, int]:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await rop.guard(cancelled)(1)

    def test_composes_with_flat_map(self):
        custom = Fault("INVALID_PATH", "Invalid path given")
        chain = pipe(rop.flat_map(half), rop.flat_map(rop.guard(missing, {"ENOENT": custom})))
        assert chain(Success(4)) == Failure(custom)
        assert chain(Success(3)) == Failure("3 is odd")


class TestRailwayPipe:
    def test_wraps_every_stage_after_the_first(self):
        chain = rop.railway_pipe(Success, half, half, below_ten)
        assert chain(16) == Success(4)
        assert chain(6) == Failure("3 is odd")

    def test_first_stage_receives_raw_argument(self):
        first = MagicMock(return_value=Success(1))
        rop.railway_pipe(first, half)(99)
        first.assert_called_once_with(99)

    def test_short_circuit_skips_later_switches(self):
        later = MagicMock(return_value=Success(0))
        assert rop.railway_pipe(Success, half, later)(3) == Failure("3 is odd")
        later.assert_not_called()
