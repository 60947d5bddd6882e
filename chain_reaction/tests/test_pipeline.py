"""Tests for the Pipeline builder."""

import operator

import pytest
from unittest.mock import Mock

from chain_reaction.models.either import Left, Right
from chain_reaction.models.exceptions import MergeArityError, PipelineConsumedError
from chain_reaction.models.failure import Failure, FailureKind
from chain_reaction.services.pipeline import Pipeline
from chain_reaction.services.step import StepResult
from chain_reaction.steps import add, double, square, to_string


def fails_on_negative(x):
    if x < 0:
        return StepResult.fail(Failure.invalid_input(f"negative: {x}"))
    return StepResult.success(x * 10)


def is_even(x):
    return x % 2 == 0


class TestPipelineBasics:
    """Tests for construction, run and consumption."""

    def test_input_holds_value(self):
        result = Pipeline.input(3).run()
        assert result.ok is True
        assert result.value == 3

    def test_combinator_consumes_pipeline(self):
        first = Pipeline.input(1)
        second = first.then(add(1))

        assert first.consumed is True
        assert second.consumed is False
        assert second is not first

    def test_run_consumes_pipeline(self):
        pipeline = Pipeline.input(1)
        pipeline.run()

        with pytest.raises(PipelineConsumedError):
            pipeline.run()

    def test_reusing_consumed_pipeline_raises(self):
        pipeline = Pipeline.input(1)
        pipeline.map(str)

        with pytest.raises(PipelineConsumedError, match="already consumed"):
            pipeline.then(add(1))

    def test_repr_shows_state(self):
        assert repr(Pipeline.input(2)) == "Pipeline(holding=2)"
        failed = Pipeline.input(-1).then(square())
        assert repr(failed).startswith("Pipeline(failed=")


class TestThen:
    """Tests for Pipeline.then."""

    def test_applies_step(self):
        assert Pipeline.input(5).then(add(2)).run().value == 7

    def test_accepts_bare_function(self):
        result = Pipeline.input(2).then(lambda x: StepResult.success(x + 40)).run()
        assert result.value == 42

    def test_failure_becomes_state(self):
        result = Pipeline.input(-3).then(square()).run()
        assert result.ok is False
        assert result.error.kind == FailureKind.INVALID_INPUT


class TestIfElse:
    """Tests for Pipeline.if_else."""

    def test_true_branch_wrapped_left(self):
        result = Pipeline.input(4).if_else(is_even, double(), to_string()).run()
        assert result.value == Left(8)
        assert result.value.is_left

    def test_false_branch_wrapped_right(self):
        result = Pipeline.input(5).if_else(is_even, double(), to_string()).run()
        assert result.value == Right("5")
        assert result.value.is_right

    def test_only_chosen_branch_runs(self, identity_step):
        other = Mock(act=Mock(return_value=StepResult.success("unused")))

        Pipeline.input(2).if_else(is_even, identity_step, other).run()

        identity_step.act.assert_called_once_with(2)
        other.act.assert_not_called()

    def test_branch_failure_is_not_wrapped(self):
        result = Pipeline.input(-2).if_else(is_even, square(), to_string()).run()
        assert result.ok is False
        assert result.error == Failure.invalid_input("Negative input for square function")


class TestForEach:
    """Tests for Pipeline.for_each."""

    def test_collects_in_order(self):
        result = Pipeline.input([3, 1, 2]).for_each(double()).run()
        assert result.value == [6, 2, 4]

    def test_accepts_any_iterable(self):
        result = Pipeline.input(range(3)).for_each(add(1)).run()
        assert result.value == [1, 2, 3]

    def test_empty_collection(self):
        assert Pipeline.input([]).for_each(double()).run().value == []

    def test_short_circuits_on_first_failure(self):
        step = Mock(act=Mock(side_effect=fails_on_negative))

        result = Pipeline.input([1, 2, -1, 3]).for_each(step).run()

        assert result.ok is False
        assert result.error == Failure.invalid_input("negative: -1")
        processed = [call.args[0] for call in step.act.call_args_list]
        assert processed == [1, 2, -1]


class TestMapAndThen:
    """Tests for Pipeline.map and Pipeline.and_then."""

    def test_map_applies_function(self):
        assert Pipeline.input(3).map(lambda x: x * 3).run().value == 9

    def test_and_then_success(self):
        result = Pipeline.input(3).and_then(fails_on_negative).run()
        assert result.value == 30

    def test_and_then_failure(self):
        result = Pipeline.input(-3).and_then(fails_on_negative).run()
        assert result.ok is False
        assert result.error.message == "negative: -3"


class TestMerge:
    """Tests for Pipeline.merge."""

    def test_uses_first_two_elements(self):
        result = Pipeline.input([100, 200, 300, 400]).merge(operator.add).run()
        assert result.value == 300

    def test_exactly_two_elements(self):
        result = Pipeline.input(("a", "b")).merge(lambda x, y: y + x).run()
        assert result.value == "ba"

    def test_does_not_drain_generator(self):
        seen = []

        def numbers():
            for n in (1, 2, 3):
                seen.append(n)
                yield n

        Pipeline.input(numbers()).merge(operator.mul).run()
        assert seen == [1, 2]

    @pytest.mark.parametrize("items, count", [([], 0), ([1], 1)])
    def test_fewer_than_two_raises(self, items, count):
        combine = Mock()

        with pytest.raises(MergeArityError) as exc_info:
            Pipeline.input(items).merge(combine)

        assert exc_info.value.count == count
        combine.assert_not_called()


COMBINATORS = {
    "then": lambda p, f: p.then(f),
    "if_else": lambda p, f: p.if_else(f, f, f),
    "for_each": lambda p, f: p.for_each(f),
    "map": lambda p, f: p.map(f),
    "and_then": lambda p, f: p.and_then(f),
    "merge": lambda p, f: p.merge(f),
}


class TestPassThroughOnFailure:
    """Once failed, no combinator calls user code."""

    @pytest.mark.parametrize("name", sorted(COMBINATORS))
    def test_failure_is_carried_untouched(self, name, failing_step, boom):
        user_fn = Mock()
        user_fn.act = Mock()
        failed = Pipeline.input(1).then(failing_step)

        result = COMBINATORS[name](failed, user_fn).run()

        assert result.ok is False
        assert result.error is boom
        user_fn.assert_not_called()
        user_fn.act.assert_not_called()

    @pytest.mark.parametrize("name", ["then", "if_else", "for_each"])
    def test_arguments_not_inspected_after_failure(self, name, failing_step, boom):
        failed = Pipeline.input(1).then(failing_step)

        result = COMBINATORS[name](failed, 42).run()

        assert result.error is boom

    def test_non_step_argument_raises_on_success_path(self):
        with pytest.raises(TypeError, match="Expected a step or a callable"):
            Pipeline.input(1).then(42)

    def test_failure_survives_long_chain(self, failing_step, boom):
        later = Mock(act=Mock(return_value=StepResult.success(0)))

        result = (
            Pipeline.input([1, 2])
            .then(failing_step)
            .for_each(later)
            .map(len)
            .if_else(bool, later, later)
            .merge(operator.add)
            .and_then(later.act)
            .run()
        )

        assert result.error is boom
        later.act.assert_not_called()


class TestEndToEnd:
    """Full example chains."""

    def test_arithmetic_chain(self):
        result = (
            Pipeline.input(5)
            .then(add(2))
            .then(square())
            .then(double())
            .then(to_string())
            .run()
        )
        assert result.ok is True
        assert result.value == "98"

    def test_negative_input_stops_at_square(self):
        after = Mock(act=Mock(side_effect=StepResult.success))

        result = (
            Pipeline.input(-3)
            .then(square())
            .then(after)
            .then(to_string())
            .run()
        )

        assert result.ok is False
        assert result.error == Failure.invalid_input("Negative input for square function")
        after.act.assert_not_called()

    def test_fan_out_then_merge(self):
        result = (
            Pipeline.input([1, 2, 3])
            .for_each(add(1))
            .for_each(square())
            .merge(operator.add)
            .then(to_string())
            .run()
        )
        assert result.value == "13"
