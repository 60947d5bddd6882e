"""Pipeline builder: thread one running result through a chain of combinators.

Each combinator consumes the pipeline it is called on and returns a new one
holding the next result. Once a failure is held, every later combinator
passes that same failure along without calling any user code.

Usage:
    result = (
        Pipeline.input(5)
        .then(add(2))
        .then(square())
        .then(double())
        .then(to_string())
        .run()
    )
    assert result.value == "98"
"""

from typing import Any, Callable, Generic, Iterable, TypeVar
import logging

from ..models.either import Left, Right
from ..models.exceptions import MergeArityError, PipelineConsumedError
from .step import StepResult, as_step

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

_MISSING = object()


class Pipeline(Generic[T, E]):
    """Holds the current result of a chain: a value or a captured failure."""

    def __init__(self, current: StepResult[T, E]) -> None:
        self._current: StepResult[T, E] | None = current
        self._consumed = False

    @classmethod
    def input(cls, value: T) -> "Pipeline[T, E]":
        """Start a pipeline holding the initial value."""
        return cls(StepResult.success(value))

    @property
    def consumed(self) -> bool:
        """True once a combinator or run() has taken the result."""
        return self._consumed

    def _take(self) -> StepResult[T, E]:
        """Move the current result out, leaving this pipeline consumed."""
        if self._consumed:
            raise PipelineConsumedError(
                "Pipeline was already consumed",
                suggestion="chain from the pipeline returned by the previous call",
            )
        current = self._current
        self._current = None
        self._consumed = True
        return current

    @staticmethod
    def _captured(result: StepResult, operation: str) -> "Pipeline":
        if not result.ok:
            logger.debug(f"Pipeline {operation} captured failure: {result.error!r}")
        return Pipeline(result)

    def then(self, step: Any) -> "Pipeline[U, E]":
        """Apply a step to the held value."""
        current = self._take()
        if not current.ok:
            return Pipeline(current)
        step = as_step(step)
        return self._captured(step.act(current.value), "then")

    def if_else(
        self,
        predicate: Callable[[T], bool],
        step_true: Any,
        step_false: Any,
    ) -> "Pipeline[Left | Right, E]":
        """Branch on a predicate of the held value.

        The true branch output is wrapped in Left, the false branch output in
        Right. A failure from the chosen branch is carried unwrapped.
        """
        current = self._take()
        if not current.ok:
            return Pipeline(current)
        step_true = as_step(step_true)
        step_false = as_step(step_false)

        if predicate(current.value):
            result, tag = step_true.act(current.value), Left
        else:
            result, tag = step_false.act(current.value), Right

        if not result.ok:
            return self._captured(result, "if_else")
        return Pipeline(StepResult.success(tag(result.value)))

    def for_each(self, step: Any) -> "Pipeline[list[U], E]":
        """Apply a step to every element of the held collection.

        Stops at the first failing element; later elements are not touched.
        """
        current = self._take()
        if not current.ok:
            return Pipeline(current)
        step = as_step(step)

        outputs: list = []
        for item in current.value:
            result = step.act(item)
            if not result.ok:
                return self._captured(result, "for_each")
            outputs.append(result.value)
        return Pipeline(StepResult.success(outputs))

    def map(self, fn: Callable[[T], U]) -> "Pipeline[U, E]":
        """Apply a function that cannot fail."""
        current = self._take()
        if not current.ok:
            return Pipeline(current)
        return Pipeline(StepResult.success(fn(current.value)))

    def and_then(self, fn: Callable[[T], StepResult[U, E]]) -> "Pipeline[U, E]":
        """Apply a function returning a StepResult."""
        current = self._take()
        if not current.ok:
            return Pipeline(current)
        return self._captured(fn(current.value), "and_then")

    def merge(self, combine: Callable[[Any, Any], U]) -> "Pipeline[U, E]":
        """Combine the first two elements of the held collection.

        Any further elements are ignored.

        Raises:
            MergeArityError: The collection holds fewer than two elements.
        """
        current = self._take()
        if not current.ok:
            return Pipeline(current)

        items: Iterable = iter(current.value)
        first = next(items, _MISSING)
        second = next(items, _MISSING)
        if second is _MISSING:
            raise MergeArityError(0 if first is _MISSING else 1)
        return Pipeline(StepResult.success(combine(first, second)))

    def run(self) -> StepResult[T, E]:
        """Return the final result, consuming the pipeline."""
        return self._take()

    def __repr__(self) -> str:
        if self._consumed:
            return "Pipeline(<consumed>)"
        if self._current.ok:
            return f"Pipeline(holding={self._current.value!r})"
        return f"Pipeline(failed={self._current.error!r})"
