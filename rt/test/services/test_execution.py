"""Tests for rt.services.execution module."""

from __future__ import annotations

import random
import threading
import time

import pytest

from rt.core.result import Err, Ok, Result
from rt.services.execution import Collector, ExecutionError, run_all


class TestCollector:
    def test_concurrent_adds(self) -> None:
        collector: Collector[int] = Collector()

        def add_many(offset: int) -> None:
            for i in range(500):
                collector.add(offset + i)

        threads = [threading.Thread(target=add_many, args=(n * 1000,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        items = collector.snapshot()
        assert len(collector) == 4000
        assert len(set(items)) == 4000


class TestRunAll:
    def test_empty(self) -> None:
        assert run_all([], lambda x: Ok(x), max_workers=4, timeout=1.0) == Ok([])

    def test_every_item_exactly_once_in_input_order(self) -> None:
        items = list(range(30))

        def slow_echo(n: int) -> Result[int, str]:
            time.sleep(random.uniform(0, 0.01))
            return Ok(n)

        result = run_all(items, slow_echo, max_workers=8, timeout=5.0)

        assert result == Ok(items)

    def test_bounded_concurrency(self) -> None:
        running = 0
        peak = 0
        lock = threading.Lock()

        def task(n: int) -> Result[int, str]:
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            time.sleep(0.01)
            with lock:
                running -= 1
            return Ok(n)

        result = run_all(range(12), task, max_workers=3, timeout=5.0)

        assert isinstance(result, Ok)
        assert peak <= 3

    def test_first_error_is_returned(self) -> None:
        def task(n: int) -> Result[int, str]:
            return Err(f"failed {n}") if n in (2, 4) else Ok(n)

        assert run_all(range(6), task, max_workers=1, timeout=5.0) == Err("failed 2")

    def test_timeout(self) -> None:
        release = threading.Event()

        def task(n: int) -> Result[int, str]:
            if n == 1:
                release.wait(5.0)
            return Ok(n)

        try:
            result = run_all([0, 1, 2], task, max_workers=3, timeout=0.1, name=lambda n: f"item{n}")
        finally:
            release.set()

        assert result == Err(ExecutionError("item1", "timed out after 0.1s"))

    def test_exceptions_propagate(self) -> None:
        def task(n: int) -> Result[int, str]:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            run_all([1], task, max_workers=1, timeout=1.0)
