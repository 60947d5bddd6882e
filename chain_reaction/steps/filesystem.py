"""Filesystem steps."""

from pathlib import Path

from ..models.failure import Failure
from ..services.step import FunctionStep, StepResult, step


def list_directory() -> FunctionStep[Path | str, list[str], Failure]:
    """Step: sorted entry names of a directory."""

    @step
    def _list_directory(path: Path | str) -> StepResult[list[str], Failure]:
        directory = Path(path)
        if not directory.exists():
            return StepResult.fail(Failure.invalid_input(f"Path does not exist: {directory}"))
        if not directory.is_dir():
            return StepResult.fail(Failure.invalid_input(f"Not a directory: {directory}"))
        return StepResult.success(sorted(entry.name for entry in directory.iterdir()))

    return _list_directory
