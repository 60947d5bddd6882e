"""Timed pipeline: a Pipeline that records how long each combinator took.

All wrappers chained from one ``TimedPipeline.input(...)`` call share a
single TimingTable. Each combinator name keeps only its latest duration.

Usage:
    result, timings = (
        TimedPipeline.input([1, 2, 3])
        .for_each(double())
        .merge(operator.add)
        .run()
    )
    # timings == {"for_each": 1.2e-06, "merge": 4.1e-07}
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar

from .config import EngineSettings
from .pipeline import Pipeline

if TYPE_CHECKING:
    from .step import StepResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")


class TimingTable:
    """Operation name → last elapsed wall time in seconds.

    ``current_operation`` and ``operation_start`` are set only while a timed
    call is in progress. The lock is reentrant so a step may itself drive
    the same lineage.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.current_operation: str | None = None
        self.operation_start: float | None = None
        self._clock = clock
        self._entries: dict[str, float] = {}
        self._lock = threading.RLock()

    @contextmanager
    def measure(self, operation: str) -> Iterator[None]:
        """Time the enclosed block and store it under ``operation``.

        The entry is written even when the block raises. A nested call on
        the same table restores the enclosing operation's slots on exit.
        """
        with self._lock:
            outer = (self.current_operation, self.operation_start)
            start = self._clock()
            self.current_operation = operation
            self.operation_start = start
            try:
                yield
            finally:
                elapsed = self._clock() - start
                self._entries[operation] = elapsed
                self.current_operation, self.operation_start = outer
                self._log(operation, elapsed)

    def _log(self, operation: str, elapsed: float) -> None:
        precision = self.settings.timing_precision
        if self.settings.log_timings:
            logger.info(f"{operation} took {elapsed:.{precision}f}s")
        else:
            logger.debug(f"{operation} took {elapsed:.{precision}f}s")

    def snapshot(self) -> dict[str, float]:
        """Copy of the current entries."""
        with self._lock:
            return dict(self._entries)

    def report(self) -> list[str]:
        """One formatted line per operation, in first-recorded order."""
        precision = self.settings.timing_precision
        return [
            f"{operation}: {elapsed:.{precision}f}s"
            for operation, elapsed in self.snapshot().items()
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, operation: object) -> bool:
        return operation in self._entries


class TimedPipeline(Generic[T, E]):
    """Pipeline wrapper recording elapsed time for every combinator call.

    Timing is recorded for pass-through calls after a failure as well, so
    every call in a lineage leaves an entry.
    """

    def __init__(self, inner: Pipeline[T, E], timings: TimingTable) -> None:
        self._inner = inner
        self._timings = timings

    @classmethod
    def input(cls, value: T, settings: EngineSettings | None = None) -> TimedPipeline[T, E]:
        """Start a timed pipeline with a fresh timing table."""
        return cls(Pipeline.input(value), TimingTable(settings))

    @property
    def table(self) -> TimingTable:
        """The timing table shared by this lineage."""
        return self._timings

    @property
    def timings(self) -> dict[str, float]:
        """Snapshot of the timings recorded so far."""
        return self._timings.snapshot()

    def _timed(self, operation: str, call: Callable[[Pipeline], Pipeline]) -> TimedPipeline:
        with self._timings.measure(operation):
            inner = call(self._inner)
        return TimedPipeline(inner, self._timings)

    def then(self, step: Any) -> TimedPipeline:
        return self._timed("then", lambda p: p.then(step))

    def if_else(self, predicate: Callable[[T], bool], step_true: Any, step_false: Any) -> TimedPipeline:
        return self._timed("if_else", lambda p: p.if_else(predicate, step_true, step_false))

    def for_each(self, step: Any) -> TimedPipeline:
        return self._timed("for_each", lambda p: p.for_each(step))

    def map(self, fn: Callable[[T], Any]) -> TimedPipeline:
        return self._timed("map", lambda p: p.map(fn))

    def and_then(self, fn: Callable[[T], Any]) -> TimedPipeline:
        return self._timed("and_then", lambda p: p.and_then(fn))

    def merge(self, combine: Callable[[Any, Any], Any]) -> TimedPipeline:
        return self._timed("merge", lambda p: p.merge(combine))

    def run(self) -> tuple[StepResult[T, E], dict[str, float]]:
        """Return the final result and a copy of the timing table."""
        return self._inner.run(), self._timings.snapshot()

    def __repr__(self) -> str:
        return f"Timed{self._inner!r}"
