"""
Tests for rule condition expression trees.
"""

import math

import pytest

from fuzzrule.fuzzy.expressions import And, Is, Not, Or, evaluate_expression
from fuzzrule.fuzzy.inference import InferenceContext, InferenceOptions
from fuzzrule.fuzzy.membership import TriangularMF
from fuzzrule.fuzzy.operators import ProductOperators
from fuzzrule.fuzzy.sets import FuzzySet, UniversalSet


class TestExpressionEvaluation:
    """Tests for the expression dispatch."""

    def test_is(self, context, low, high):
        assert Is("temperature", low).evaluate(context) == pytest.approx(0.6)
        assert Is("temperature", high).evaluate(context) == pytest.approx(0.4)

    def test_and_or(self, context, low, high):
        assert evaluate_expression(
            And(Is("temperature", low), Is("temperature", high)), context
        ) == pytest.approx(0.4)
        assert evaluate_expression(
            Or(Is("temperature", low), Is("temperature", high)), context
        ) == pytest.approx(0.6)

    def test_not(self, context, low):
        assert Not(Is("temperature", low)).evaluate(context) == pytest.approx(0.4)

    def test_double_negation(self, context, low, high):
        for expression in (Is("temperature", low), And(Is("temperature", low), Is("humidity", high))):
            assert Not(Not(expression)).evaluate(context) == pytest.approx(
                expression.evaluate(context)
            )

    def test_nested_tree(self, context, low, high):
        # (low AND NOT high) OR humidity IS high
        expression = Or(
            And(Is("temperature", low), Not(Is("temperature", high))),
            Is("humidity", high),
        )
        assert expression.evaluate(context) == pytest.approx(0.8)

    def test_uses_context_logic_operators(self, low, high):
        context = InferenceContext(
            ["temperature"], InferenceOptions(logic_ops=ProductOperators())
        )
        context["temperature"] = 4

        expression = And(Is("temperature", low), Is("temperature", high))

        assert expression.evaluate(context) == pytest.approx(0.6 * 0.4)

    def test_unset_variable_yields_nan(self, low, high):
        context = InferenceContext(["temperature", "humidity"])
        context["temperature"] = 4

        assert math.isnan(Is("humidity", low).evaluate(context))
        assert math.isnan(And(Is("temperature", low), Is("humidity", high)).evaluate(context))
        assert math.isnan(Or(Is("temperature", low), Is("humidity", high)).evaluate(context))
        assert math.isnan(Not(Is("humidity", high)).evaluate(context))

    def test_unknown_variable_yields_nan(self, context, low):
        assert math.isnan(Is("pressure", low).evaluate(context))

    def test_unknown_node(self, context):
        with pytest.raises(TypeError):
            evaluate_expression("temperature IS low", context)

    def test_nodes_are_immutable(self, low):
        node = Is("temperature", low)
        with pytest.raises(AttributeError):
            node.variable = "humidity"


class TestExpressionText:
    def test_to_text(self, low, high):
        expression = Or(
            And(Is("a", low), Not(Is("b", high))),
            Is("c", high),
        )
        assert expression.to_text() == "((a IS low AND NOT b IS high) OR c IS high)"


@pytest.fixture
def universe():
    return UniversalSet.from_range("temperature", 0, 10, 1)


@pytest.fixture
def low(universe):
    # 1 at 0, 0 at 10: degree 0.6 at 4
    return FuzzySet("low", membership_function=TriangularMF([0, 0, 10]), universe=universe)


@pytest.fixture
def high(universe):
    # 0 at 0, 1 at 10: degree 0.4 at 4, 0.8 at 8
    return FuzzySet("high", membership_function=TriangularMF([0, 10, 10]), universe=universe)


@pytest.fixture
def context():
    context = InferenceContext(["temperature", "humidity"])
    context["temperature"] = 4
    context["humidity"] = 8
    return context
