"""
Tests for the debounced check task.
"""

import asyncio
import gc
import logging

import pytest

from motifia_backend.client import DebouncedCheck


class Recorder:
    """Async check that records every value it was called with."""

    def __init__(self, delay: float = 0.0):
        self.calls: list[str] = []
        self.delay = delay

    async def __call__(self, value: str) -> str:
        self.calls.append(value)
        if self.delay:
            await asyncio.sleep(self.delay)
        return value.upper()


class TestDebouncedCheck:
    """Tests for DebouncedCheck."""

    @pytest.mark.asyncio
    async def test_single_submit(self):
        check = Recorder()
        results = []
        debounced = DebouncedCheck(check, delay=0.01, on_result=lambda v, r: results.append((v, r)))
        debounced.submit("cat")
        assert debounced.pending
        await debounced.wait()
        assert not debounced.pending
        assert debounced.latest == ("cat", "CAT")
        assert results == [("cat", "CAT")]

    @pytest.mark.asyncio
    async def test_rapid_input_fires_once(self):
        check = Recorder()
        debounced = DebouncedCheck(check, delay=0.05)
        for value in ("c", "ca", "cat"):
            debounced.submit(value)
            await asyncio.sleep(0.001)
        await debounced.wait()
        assert check.calls == ["cat"]
        assert debounced.latest == ("cat", "CAT")

    @pytest.mark.asyncio
    async def test_in_flight_request_superseded(self):
        check = Recorder(delay=0.05)
        debounced = DebouncedCheck(check, delay=0.0)
        debounced.submit("old")
        await asyncio.sleep(0.01)
        assert check.calls == ["old"]
        debounced.submit("new")
        await debounced.wait()
        assert debounced.latest == ("new", "NEW")

    @pytest.mark.asyncio
    async def test_cancel(self):
        check = Recorder()
        debounced = DebouncedCheck(check, delay=0.05)
        debounced.submit("cat")
        debounced.cancel()
        await debounced.wait()
        await asyncio.sleep(0.06)
        assert check.calls == []
        assert debounced.latest is None

    @pytest.mark.asyncio
    async def test_wait_without_task(self):
        await DebouncedCheck(Recorder()).wait()

    @pytest.mark.asyncio
    async def test_check_error_propagates(self):
        async def failing(value: str) -> str:
            raise RuntimeError("backend down")

        debounced = DebouncedCheck(failing, delay=0.0)
        debounced.submit("cat")
        with pytest.raises(RuntimeError, match="backend down"):
            await debounced.wait()

    @pytest.mark.asyncio
    async def test_replaced_failed_check_is_logged_not_leaked(self, caplog):
        async def failing(value: str) -> str:
            raise RuntimeError("backend down")

        debounced = DebouncedCheck(failing, delay=0.0)
        with caplog.at_level(logging.WARNING):
            debounced.submit("a")
            await asyncio.sleep(0.01)
            debounced.submit("b")
            await asyncio.sleep(0.01)
            debounced.cancel()
            gc.collect()
            await asyncio.sleep(0)
        assert "never retrieved" not in caplog.text
        assert "Discarding failed check" in caplog.text
        assert "backend down" in caplog.text
        assert debounced.latest is None

    @pytest.mark.asyncio
    async def test_failure_after_newer_submit_is_dropped(self, caplog):
        gate = asyncio.Event()

        async def slow_failing(value: str) -> str:
            if value == "old":
                await gate.wait()
                raise RuntimeError("backend down")
            return value.upper()

        debounced = DebouncedCheck(slow_failing, delay=0.0)
        debounced.submit("old")
        await asyncio.sleep(0.01)
        old_task = debounced._task
        # simulate a check that finishes despite being superseded
        debounced._generation += 1
        with caplog.at_level(logging.WARNING):
            gate.set()
            await old_task
        assert "Superseded check for 'old' failed" in caplog.text
        assert debounced.latest is None
