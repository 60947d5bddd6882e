"""Tests for failures, branch results and exceptions."""

import pytest

from chain_reaction.models.either import Left, Right
from chain_reaction.models.exceptions import (
    ChainError,
    ConfigError,
    ConfigValidationError,
    MergeArityError,
    PipelineConsumedError,
    StepAbortedError,
)
from chain_reaction.models.failure import Failure, FailureKind


class TestFailure:
    """Tests for the failure taxonomy."""

    @pytest.mark.parametrize(
        "failure, text",
        [
            (Failure.invalid_input("bad"), "Invalid input: bad"),
            (Failure.arithmetic("Division by zero"), "Arithmetic error: Division by zero"),
            (Failure.custom("oops"), "Custom error: oops"),
        ],
    )
    def test_str(self, failure, text):
        assert str(failure) == text

    def test_constructors_set_kind(self):
        assert Failure.invalid_input("x").kind == FailureKind.INVALID_INPUT
        assert Failure.arithmetic("x").kind == FailureKind.ARITHMETIC_ERROR
        assert Failure.custom("x").kind == FailureKind.CUSTOM

    def test_equality_by_value(self):
        assert Failure.custom("a") == Failure.custom("a")
        assert Failure.custom("a") != Failure.invalid_input("a")


class TestEither:
    """Tests for Left/Right tagging."""

    def test_left_tags(self):
        branch = Left(1)
        assert branch.is_left is True
        assert branch.is_right is False
        assert branch.value == 1

    def test_right_tags(self):
        branch = Right("1")
        assert branch.is_left is False
        assert branch.is_right is True

    def test_sides_never_equal(self):
        assert Left(1) != Right(1)

    def test_structural_match(self):
        match Right("x"):
            case Left(value):
                taken = ("left", value)
            case Right(value):
                taken = ("right", value)
        assert taken == ("right", "x")


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_type",
        [StepAbortedError, MergeArityError, PipelineConsumedError, ConfigError, ConfigValidationError],
    )
    def test_all_derive_from_chain_error(self, exc_type):
        assert issubclass(exc_type, ChainError)

    def test_suggestion_in_str(self):
        assert str(ChainError("broken", suggestion="fix it")) == "broken (fix it)"
        assert str(ChainError("broken")) == "broken"

    def test_step_aborted_keeps_error(self):
        error = Failure.custom("x")
        exc = StepAbortedError(error)
        assert exc.error is error

    def test_merge_arity_message(self):
        exc = MergeArityError(1)
        assert exc.count == 1
        assert "at least two items" in str(exc)
