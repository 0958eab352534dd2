"""
Rule condition expressions.

Conditions are immutable trees built from four node kinds:

- ``And(left, right)``
- ``Or(left, right)``
- ``Not(operand)``
- ``Is(variable, fuzzy_set)``

``evaluate_expression`` folds a tree against an inference context using the
context's logic operators. Trees are shared freely between rules and
evaluated concurrently; evaluation never mutates the tree or the context.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from fuzzrule.fuzzy.sets import FuzzySet

if TYPE_CHECKING:
    from fuzzrule.fuzzy.inference import InferenceContext


@dataclass(frozen=True)
class And:
    left: "Expression"
    right: "Expression"

    def evaluate(self, context: "InferenceContext") -> float:
        return evaluate_expression(self, context)

    def to_text(self) -> str:
        return f"({self.left.to_text()} AND {self.right.to_text()})"


@dataclass(frozen=True)
class Or:
    left: "Expression"
    right: "Expression"

    def evaluate(self, context: "InferenceContext") -> float:
        return evaluate_expression(self, context)

    def to_text(self) -> str:
        return f"({self.left.to_text()} OR {self.right.to_text()})"


@dataclass(frozen=True)
class Not:
    operand: "Expression"

    def evaluate(self, context: "InferenceContext") -> float:
        return evaluate_expression(self, context)

    def to_text(self) -> str:
        return f"NOT {self.operand.to_text()}"


@dataclass(frozen=True)
class Is:
    """Membership of a context variable's current value in a fuzzy set."""

    variable: str
    fuzzy_set: FuzzySet

    def evaluate(self, context: "InferenceContext") -> float:
        return evaluate_expression(self, context)

    def to_text(self) -> str:
        return f"{self.variable} IS {self.fuzzy_set.name}"


Expression = Union[And, Or, Not, Is]


def evaluate_expression(expression: Expression, context: "InferenceContext") -> float:
    """
    Compute the degree to which an expression holds in a context.

    An ``Is`` node whose variable is unknown or unset yields NaN, and NaN
    flows through the logic operators unchanged.

    Args:
        expression: Root of the expression tree
        context: Context providing variable values and logic operators

    Returns:
        Degree in [0, 1], or NaN

    Raises:
        TypeError: If the tree contains a node that is not an expression
    """
    logic = context.options.logic_ops

    if isinstance(expression, And):
        return logic.and_(
            evaluate_expression(expression.left, context),
            evaluate_expression(expression.right, context),
        )

    if isinstance(expression, Or):
        return logic.or_(
            evaluate_expression(expression.left, context),
            evaluate_expression(expression.right, context),
        )

    if isinstance(expression, Not):
        return logic.not_(evaluate_expression(expression.operand, context))

    if isinstance(expression, Is):
        value = context[expression.variable]
        if math.isnan(value):
            return math.nan
        return expression.fuzzy_set[value]

    raise TypeError(
        f"Unsupported expression node: {type(expression).__name__}. "
        "Expected And, Or, Not or Is."
    )
