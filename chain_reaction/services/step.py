"""Step protocol for composable fallible operations."""

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Protocol, TypeVar

from ..models.exceptions import StepAbortedError

T = TypeVar('T')
U = TypeVar('U')
V = TypeVar('V')
E = TypeVar('E')


@dataclass
class StepResult(Generic[T, E]):
    """Result from a step: a value, or the error that stopped the chain."""

    value: T | None
    ok: bool = True
    error: E | None = None

    @classmethod
    def success(cls, value: T) -> "StepResult[T, E]":
        """Create a successful result."""
        return cls(value=value, ok=True)

    @classmethod
    def fail(cls, error: E) -> "StepResult[T, E]":
        """Create a failed result."""
        return cls(value=None, ok=False, error=error)


class Step(Protocol[T, U, E]):
    """A single fallible step: T → U, or an error E."""

    def act(self, input: T) -> StepResult[U, E]:
        """Execute this step."""
        ...


class Chainable(ABC, Generic[T, U, E]):
    """Base for steps that can be joined with then() and run directly."""

    @abstractmethod
    def act(self, input: T) -> StepResult[U, E]:
        ...

    def then(self, other: "Step[U, V, E] | Callable[[U], StepResult[V, E]]") -> "JoinedStep[T, U, V, E]":
        """Join this step with the next one."""
        return JoinedStep(self, as_step(other))

    def run(self, input: T) -> U:
        """Return the output value, raising StepAbortedError on failure.

        Only meant for top-level call sites. A failure here cannot be passed
        along a chain, so combinators never call it.
        """
        return run_or_abort(self, input)


class FunctionStep(Chainable[T, U, E]):
    """Step backed by a plain function returning a StepResult."""

    def __init__(self, fn: Callable[[T], StepResult[U, E]]):
        self._fn = fn
        functools.update_wrapper(self, fn)

    def act(self, input: T) -> StepResult[U, E]:
        return self._fn(input)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"FunctionStep({name})"


class JoinedStep(Chainable[T, V, E], Generic[T, U, V, E]):
    """Two steps acting as one: first, then second on its output.

    The second step only runs when the first succeeded; a failure from the
    first is returned as-is.
    """

    def __init__(self, first: Step[T, U, E], second: Step[U, V, E]):
        self.first = first
        self.second = second

    def act(self, input: T) -> StepResult[V, E]:
        result = self.first.act(input)
        if not result.ok:
            return result
        return self.second.act(result.value)

    def __repr__(self) -> str:
        return f"JoinedStep({self.first!r}, {self.second!r})"


def as_step(obj: Any) -> Step:
    """Accept either a step object or a function returning StepResult."""
    if hasattr(obj, "act"):
        return obj
    if callable(obj):
        return FunctionStep(obj)
    raise TypeError(f"Expected a step or a callable, got {type(obj).__name__}")


def step(fn: Callable[[T], StepResult[U, E]]) -> FunctionStep[T, U, E]:
    """Decorator turning a function into a chainable step.

    Example:
        @step
        def parse(text: str) -> StepResult[int, Failure]:
            if not text.isdigit():
                return StepResult.fail(Failure.invalid_input(text))
            return StepResult.success(int(text))

        parse.then(square()).run("7")  # 49
    """
    return FunctionStep(fn)


def then(first: Any, second: Any) -> JoinedStep:
    """Join two steps (or step functions) into one."""
    return JoinedStep(as_step(first), as_step(second))


def run_or_abort(step: Any, input: Any) -> Any:
    """Act with a step and unwrap the value, raising StepAbortedError on failure."""
    result = as_step(step).act(input)
    if not result.ok:
        raise StepAbortedError(result.error)
    return result.value


def run_pipeline(steps: Iterable[Any], initial: T) -> StepResult:
    """Run a list of steps sequentially.

    Args:
        steps: Steps (or step functions) to execute in order
        initial: Initial input value

    Returns:
        Final StepResult (success with last value, or first failure)
    """
    current = initial
    for item in steps:
        result = as_step(item).act(current)
        if not result.ok:
            return result
        current = result.value
    return StepResult.success(current)
