"""Command-line demo: run the example arithmetic chain on a number.

    $ chain-reaction 5
    Ok('98')
    $ chain-reaction -3 --timed
    Err(Invalid input: Negative input for square function)
      then: 0.000002s
"""

import argparse
import logging
import sys
from pathlib import Path

from .models.exceptions import ConfigError
from .services.config import ConfigManager, EngineSettings
from .services.pipeline import Pipeline
from .services.step import StepResult
from .services.timed import TimedPipeline
from .steps import add, double, square, to_string

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_result(result: StepResult) -> str:
    """Render a StepResult the way the demo prints it."""
    if result.ok:
        return f"Ok({result.value!r})"
    return f"Err({result.error})"


def run_demo(value: int) -> StepResult:
    """value → add(2) → square → double → to_string."""
    return (
        Pipeline.input(value)
        .then(add(2))
        .then(square())
        .then(double())
        .then(to_string())
        .run()
    )


def run_timed_demo(value: int, settings: EngineSettings | None = None) -> tuple[StepResult, list[str]]:
    """Same chain as run_demo, returning the timing report lines too."""
    timed = TimedPipeline.input(value, settings)
    table = timed.table
    result, _ = (
        timed.then(add(2))
        .then(square())
        .then(double())
        .then(to_string())
        .run()
    )
    return result, table.report()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chain-reaction",
        description="Run value -> add(2) -> square -> double -> to_string.",
    )
    parser.add_argument("value", type=int, nargs="?", default=5, help="input value (default: 5)")
    parser.add_argument("--timed", action="store_true", help="print per-operation timings")
    parser.add_argument("--config-dir", type=Path, default=None, help="directory holding config.json")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the demo chain and print its result."""
    args = build_parser().parse_args(argv)

    try:
        settings = ConfigManager(config_dir=args.config_dir).resolve()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level.numeric, format=LOG_FORMAT)

    if args.timed:
        result, report = run_timed_demo(args.value, settings)
        print(format_result(result))
        for line in report:
            print(f"  {line}")
    else:
        result = run_demo(args.value)
        print(format_result(result))

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
