"""Branch result produced by Pipeline.if_else.

Exactly one side is populated. The two sides may hold unrelated types, so
there is no helper that folds them back together: callers check the tag and
read ``value`` themselves.

    result = Pipeline.input(4).if_else(is_even, double(), to_string()).run()
    branch = result.value
    if branch.is_left:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

L = TypeVar("L")
R = TypeVar("R")


@dataclass(frozen=True)
class Left(Generic[L]):
    """Output of the branch taken when the predicate held."""

    value: L

    @property
    def is_left(self) -> bool:
        return True

    @property
    def is_right(self) -> bool:
        return False


@dataclass(frozen=True)
class Right(Generic[R]):
    """Output of the branch taken when the predicate did not hold."""

    value: R

    @property
    def is_left(self) -> bool:
        return False

    @property
    def is_right(self) -> bool:
        return True


Either = Union[Left[L], Right[R]]
