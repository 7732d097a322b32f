"""Bounded fan-out of per-project work.

``run_all`` runs one task per item on a thread pool and waits at most
``timeout`` seconds for each result, in input order. Results come back in
input order too. The first Err or timeout cancels the tasks that have not
started yet and is returned.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass

from rt.core.result import Err, Ok, Result

__all__ = [
    "Collector",
    "ExecutionError",
    "run_all",
]


@dataclass(frozen=True, slots=True)
class ExecutionError:
    """A task did not finish within the per-task timeout.

    Attributes:
        item: Display name of the item whose task timed out.
        message: What went wrong.
    """

    item: str
    message: str

    def __str__(self) -> str:
        return f"{self.item}: {self.message}"


class Collector[T]:
    """Append-only list that worker threads may add to concurrently."""

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def add(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def snapshot(self) -> list[T]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def run_all[I, R, E](
    items: Iterable[I],
    fn: Callable[[I], Result[R, E]],
    *,
    max_workers: int,
    timeout: float,
    name: Callable[[I], str] = str,
) -> Result[list[R], E | ExecutionError]:
    """Apply ``fn`` to every item, at most ``max_workers`` at a time.

    Exceptions raised by ``fn`` propagate to the caller.
    """
    work = list(items)
    if not work:
        return Ok([])

    collector: Collector[tuple[int, R]] = Collector()

    def task(index: int, item: I) -> Result[R, E]:
        result = fn(item)
        if isinstance(result, Ok):
            collector.add((index, result.value))
        return result

    executor = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(work))))
    futures: list[Future[Result[R, E]]] = [executor.submit(task, i, item) for i, item in enumerate(work)]
    try:
        for item, future in zip(work, futures, strict=True):
            try:
                result = future.result(timeout=timeout)
            except FutureTimeoutError:
                return Err(ExecutionError(name(item), f"timed out after {timeout:g}s"))
            if isinstance(result, Err):
                return result
    finally:
        # A timed-out task keeps its thread; don't block on it.
        executor.shutdown(wait=False, cancel_futures=True)

    return Ok([value for _, value in sorted(collector.snapshot(), key=lambda pair: pair[0])])
