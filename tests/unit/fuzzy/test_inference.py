"""
Tests for the inference context and inference machine.
"""

import math

import pytest

from fuzzrule.errors import ErrorCodes, ProcessingError
from fuzzrule.fuzzy.expressions import Is
from fuzzrule.fuzzy.inference import InferenceContext, InferenceMachine, InferenceOptions
from fuzzrule.fuzzy.membership import TrapezoidalMF, TriangularMF
from fuzzrule.fuzzy.operators import (
    CenterOfMassDefuzzificator,
    MeanOfMaximumDefuzzificator,
    MinMaxSetOperators,
    ZadehOperators,
)
from fuzzrule.fuzzy.rules import Rule, RuleSet
from fuzzrule.fuzzy.sets import FuzzySet, UniversalSet


class TestInferenceContext:
    """Tests for named input storage."""

    def test_inputs_start_unset(self):
        context = InferenceContext(["a", "b"])
        assert context.names == ["a", "b"]
        assert math.isnan(context["a"])
        assert math.isnan(context["b"])

    def test_default_options(self):
        options = InferenceContext(["a"]).options
        assert isinstance(options.set_ops, MinMaxSetOperators)
        assert isinstance(options.logic_ops, ZadehOperators)
        assert isinstance(options.defuzzificator, CenterOfMassDefuzzificator)

    def test_write_and_read(self):
        context = InferenceContext(["a"])
        context["a"] = 3
        assert context["a"] == 3.0
        assert isinstance(context["a"], float)

    def test_unknown_name_is_ignored(self):
        context = InferenceContext(["a"])
        context["z"] = 1.0

        assert "z" not in context
        assert context.names == ["a"]
        assert math.isnan(context["z"])

    def test_snapshot_is_independent(self):
        context = InferenceContext(["a"])
        context["a"] = 1.0

        snapshot = context.snapshot()
        context["a"] = 2.0

        assert snapshot["a"] == 1.0
        assert snapshot.options is context.options

    def test_snapshot_is_read_only(self):
        snapshot = InferenceContext(["a"]).snapshot()
        with pytest.raises(TypeError):
            snapshot["a"] = 1.0

    def test_values_is_a_copy(self):
        context = InferenceContext(["a"])
        values = context.values()
        values["a"] = 5.0
        assert math.isnan(context["a"])


class TestInferenceMachine:
    """Tests for decision recomputation."""

    def test_initial_state(self, fan_machine):
        assert math.isnan(fan_machine.decision)
        assert not fan_machine.has_decision
        assert fan_machine.aggregate.is_empty

    def test_write_triggers_recompute(self, fan_machine):
        fan_machine["temperature"] = 40

        assert fan_machine["temperature"] == 40.0
        assert fan_machine.has_decision
        assert fan_machine.decision == pytest.approx(87.5)
        assert fan_machine.aggregate.values == {75.0: 1.0, 100.0: 1.0}

    @pytest.mark.parametrize(
        "temperature, expected",
        [(0, 12.5), (20, 50.0), (40, 87.5)],
    )
    def test_decisions(self, fan_machine, temperature, expected):
        fan_machine["temperature"] = temperature
        assert fan_machine.decision == pytest.approx(expected)

    def test_no_decision(self, fan_machine):
        fan_machine["temperature"] = 40
        assert fan_machine.has_decision

        # Every strength is below 1 and every consequent degree is 1
        fan_machine["temperature"] = 15

        assert math.isnan(fan_machine.decision)
        assert not fan_machine.has_decision
        assert fan_machine.aggregate.is_empty

    def test_unknown_input_write_still_recomputes(self, fan_machine):
        fan_machine["pressure"] = 3.0

        assert math.isnan(fan_machine["pressure"])
        assert not fan_machine.has_decision

    def test_always_firing_rule(self):
        always = Is("x", FuzzySet("always", {0.0: 1.0}))
        rule_set = RuleSet([Rule("always", always, FuzzySet("ten", {10.0: 1.0}))])
        machine = InferenceMachine(InferenceContext(["x"]), [], rule_set)

        for value in (-5.0, 0.0, 3.25, 1e6):
            machine["x"] = value
            assert machine.decision == 10.0
            assert machine.has_decision

    def test_sequential_machine_matches_parallel(self, fan_parts):
        context_seq, universes, rule_set = fan_parts
        sequential = InferenceMachine(context_seq, universes, rule_set, max_workers=1)
        parallel = InferenceMachine(
            InferenceContext(["temperature"]), universes, rule_set, max_workers=4
        )

        for temperature in range(0, 41):
            sequential["temperature"] = temperature
            parallel["temperature"] = temperature
            if sequential.has_decision:
                assert parallel.decision == pytest.approx(sequential.decision)
            else:
                assert not parallel.has_decision

    def test_mean_of_maximum_options(self, fan_parts):
        _, universes, rule_set = fan_parts
        options = InferenceOptions(defuzzificator=MeanOfMaximumDefuzzificator())
        machine = InferenceMachine(InferenceContext(["temperature"], options), universes, rule_set)

        machine["temperature"] = 0

        assert machine.decision == pytest.approx(12.5)

    def test_universe_lookup(self, fan_machine):
        assert fan_machine.universe("fan_speed").name == "fan_speed"

        with pytest.raises(ProcessingError) as exc_info:
            fan_machine.universe("humidity")
        assert exc_info.value.error_code == ErrorCodes.INFER_UNKNOWN_UNIVERSE


@pytest.fixture
def fan_parts():
    temperature = UniversalSet.from_range("temperature", 0, 40, 1)
    cold = FuzzySet("cold", membership_function=TriangularMF([0, 0, 20]), universe=temperature)
    warm = FuzzySet("warm", membership_function=TriangularMF([10, 20, 30]), universe=temperature)
    hot = FuzzySet("hot", membership_function=TriangularMF([20, 40, 40]), universe=temperature)

    fan_speed = UniversalSet("fan_speed", [0, 25, 50, 75, 100])
    slow = FuzzySet("slow", membership_function=TrapezoidalMF([0, 0, 25, 50]), universe=fan_speed)
    medium = FuzzySet("medium", membership_function=TriangularMF([25, 50, 75]), universe=fan_speed)
    fast = FuzzySet("fast", membership_function=TrapezoidalMF([50, 75, 100, 100]), universe=fan_speed)

    rule_set = RuleSet(
        [
            Rule("cool_down", Is("temperature", hot), fast),
            Rule("keep", Is("temperature", warm), medium),
            Rule("idle", Is("temperature", cold), slow),
        ]
    )
    return InferenceContext(["temperature"]), [temperature, fan_speed], rule_set


@pytest.fixture
def fan_machine(fan_parts):
    context, universes, rule_set = fan_parts
    return InferenceMachine(context, universes, rule_set)
