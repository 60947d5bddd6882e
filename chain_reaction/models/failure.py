"""Default failure taxonomy carried by the bundled steps.

The engine is generic over the error type; any value can travel in a
StepResult. Failure is simply the carrier the bundled steps use.
"""

from dataclasses import dataclass
from enum import Enum


class FailureKind(Enum):
    """Broad category of a step failure."""

    INVALID_INPUT = "invalid_input"
    ARITHMETIC_ERROR = "arithmetic_error"
    CUSTOM = "custom"


_LABELS = {
    FailureKind.INVALID_INPUT: "Invalid input",
    FailureKind.ARITHMETIC_ERROR: "Arithmetic error",
    FailureKind.CUSTOM: "Custom error",
}


@dataclass(frozen=True)
class Failure:
    """A tagged failure message."""

    kind: FailureKind
    message: str

    @classmethod
    def invalid_input(cls, message: str) -> "Failure":
        return cls(kind=FailureKind.INVALID_INPUT, message=message)

    @classmethod
    def arithmetic(cls, message: str) -> "Failure":
        return cls(kind=FailureKind.ARITHMETIC_ERROR, message=message)

    @classmethod
    def custom(cls, message: str) -> "Failure":
        return cls(kind=FailureKind.CUSTOM, message=message)

    def __str__(self) -> str:
        return f"{_LABELS[self.kind]}: {self.message}"
