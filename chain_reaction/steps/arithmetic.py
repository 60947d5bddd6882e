"""Integer arithmetic steps.

Each factory returns a FunctionStep, so results can be joined directly:

    add(2).then(square()).run(5)  # 49
"""

from ..models.failure import Failure
from ..services.step import FunctionStep, StepResult, step


def add(y: int) -> FunctionStep[int, int, Failure]:
    """Step: add ``y``."""

    @step
    def _add(x: int) -> StepResult[int, Failure]:
        return StepResult.success(x + y)

    return _add


def square() -> FunctionStep[int, int, Failure]:
    """Step: square a non-negative number."""

    @step
    def _square(x: int) -> StepResult[int, Failure]:
        if x < 0:
            return StepResult.fail(Failure.invalid_input("Negative input for square function"))
        return StepResult.success(x * x)

    return _square


def double() -> FunctionStep[int, int, Failure]:
    """Step: multiply by two."""

    @step
    def _double(x: int) -> StepResult[int, Failure]:
        return StepResult.success(x * 2)

    return _double


def divide(y: int) -> FunctionStep[int, int, Failure]:
    """Step: integer division by ``y``, truncating toward zero."""

    @step
    def _divide(x: int) -> StepResult[int, Failure]:
        if y == 0:
            return StepResult.fail(Failure.arithmetic("Division by zero"))
        quotient = abs(x) // abs(y)
        return StepResult.success(quotient if (x < 0) == (y < 0) else -quotient)

    return _divide


def to_string() -> FunctionStep[int, str, Failure]:
    """Step: render the value as text."""

    @step
    def _to_string(x: int) -> StepResult[str, Failure]:
        return StepResult.success(str(x))

    return _to_string
