"""
Interchangeable operator strategies.

Three independent strategy families are injected into an inference context:

- set operators: union / intersect over two fuzzy sets
- logic operators: AND / OR / NOT over two membership degrees
- defuzzificators: fuzzy set -> crisp scalar
"""

from abc import ABC, abstractmethod

import numpy as np

from fuzzrule import get_logger
from fuzzrule.errors import ConfigurationError, ErrorCodes, NoDecisionError
from fuzzrule.fuzzy.sets import FuzzySet

# Set up module-level logger
logger = get_logger(__name__)


# --- Set operators ---


class SetOperators(ABC):
    """Union and intersection of two fuzzy sets."""

    @abstractmethod
    def union(self, left: FuzzySet, right: FuzzySet) -> FuzzySet:
        pass

    @abstractmethod
    def intersect(self, left: FuzzySet, right: FuzzySet) -> FuzzySet:
        pass


class MinMaxSetOperators(SetOperators):
    """
    Zadeh set operators: union takes the maximum, intersection the minimum.

    Degrees of the opposite operand are read through its own lookup, so a
    function-backed operand may fill its cache and a plain operand answers
    with its nearest stored key. The empty set is the identity of union.

    Over a common set of keys union is associative. When operands store
    disjoint keys the nearest-key reads make the result depend on grouping,
    so ``(A | B) | C`` and ``A | (B | C)`` can differ. RuleSet always folds
    left in rule order, which keeps aggregates reproducible.
    """

    def union(self, left: FuzzySet, right: FuzzySet) -> FuzzySet:
        result: dict[float, float] = {}

        for element, membership in left.items():
            result[element] = max(membership, right[element])

        for element, membership in right.items():
            if element in result:
                continue
            result[element] = max(membership, left[element])

        return FuzzySet(f"{left.name} UNION {right.name}", result)

    def intersect(self, left: FuzzySet, right: FuzzySet) -> FuzzySet:
        result: dict[float, float] = {}

        for element, membership in left.items():
            right_membership = right[element]
            if right_membership > 0:
                result[element] = min(membership, right_membership)

        return FuzzySet(f"{left.name} INTERSECT {right.name}", result)


# --- Logic operators ---


class LogicOperators(ABC):
    """AND / OR / NOT over membership degrees. NaN operands yield NaN."""

    @abstractmethod
    def and_(self, left: float, right: float) -> float:
        pass

    @abstractmethod
    def or_(self, left: float, right: float) -> float:
        pass

    @abstractmethod
    def not_(self, operand: float) -> float:
        pass


class ZadehOperators(LogicOperators):
    """AND = min, OR = max, NOT = 1 - x."""

    def and_(self, left: float, right: float) -> float:
        return float(np.minimum(left, right))

    def or_(self, left: float, right: float) -> float:
        return float(np.maximum(left, right))

    def not_(self, operand: float) -> float:
        return 1.0 - operand


class ProductOperators(LogicOperators):
    """Algebraic pair: AND = a * b, OR = a + b - a * b, NOT = 1 - x."""

    def and_(self, left: float, right: float) -> float:
        return left * right

    def or_(self, left: float, right: float) -> float:
        return left + right - left * right

    def not_(self, operand: float) -> float:
        return 1.0 - operand


# --- Defuzzification ---


class Defuzzificator(ABC):
    """Converts an aggregate fuzzy set into one crisp value."""

    @abstractmethod
    def defuzzify(self, fuzzy_set: FuzzySet) -> float:
        """
        Args:
            fuzzy_set: Aggregate set to reduce

        Returns:
            Crisp decision value

        Raises:
            NoDecisionError: If the set carries no membership mass
        """

    def __call__(self, fuzzy_set: FuzzySet) -> float:
        return self.defuzzify(fuzzy_set)


class CenterOfMassDefuzzificator(Defuzzificator):
    """Σ(element · degree) / Σ(degree)."""

    def defuzzify(self, fuzzy_set: FuzzySet) -> float:
        items = fuzzy_set.items()
        elements = np.array([element for element, _ in items], dtype=float)
        degrees = np.array([membership for _, membership in items], dtype=float)

        total = float(degrees.sum())
        if not total > 0:
            logger.debug(f"No membership mass in '{fuzzy_set.name}', no decision")
            raise NoDecisionError(
                details={"set": fuzzy_set.name, "elements": len(items)},
            )

        return float(np.dot(elements, degrees)) / total


class MeanOfMaximumDefuzzificator(Defuzzificator):
    """Mean of the elements that share the highest membership degree."""

    def defuzzify(self, fuzzy_set: FuzzySet) -> float:
        items = fuzzy_set.items()
        if not items:
            raise NoDecisionError(details={"set": fuzzy_set.name, "elements": 0})

        elements = np.array([element for element, _ in items], dtype=float)
        degrees = np.array([membership for _, membership in items], dtype=float)

        peak = float(degrees.max())
        if not peak > 0:
            raise NoDecisionError(
                details={"set": fuzzy_set.name, "elements": len(items)},
            )

        top = np.isclose(degrees, peak, rtol=1e-12, atol=0.0)
        return float(elements[top].mean())


# --- Lookup by name ---

_SET_OPERATORS = {
    "min_max": MinMaxSetOperators,
}

_LOGIC_OPERATORS = {
    "zadeh": ZadehOperators,
    "product": ProductOperators,
}

_DEFUZZIFICATORS = {
    "center_of_mass": CenterOfMassDefuzzificator,
    "mean_of_maximum": MeanOfMaximumDefuzzificator,
}


def _lookup(registry: dict, kind: str, name: str):
    operator_class = registry.get(name.lower())
    if operator_class is None:
        logger.error(f"Unknown {kind}: {name}")
        raise ConfigurationError(
            message=f"Unknown {kind}: {name}",
            error_code=ErrorCodes.OPS_UNKNOWN_OPERATOR,
            details={"kind": kind, "name": name, "supported": sorted(registry)},
            suggestion=f"Use one of: {', '.join(sorted(registry))}",
        )
    return operator_class()


def get_set_operators(name: str) -> SetOperators:
    """Create set operators by name ("min_max")."""
    return _lookup(_SET_OPERATORS, "set operators", name)


def get_logic_operators(name: str) -> LogicOperators:
    """Create logic operators by name ("zadeh", "product")."""
    return _lookup(_LOGIC_OPERATORS, "logic operators", name)


def get_defuzzificator(name: str) -> Defuzzificator:
    """Create a defuzzificator by name ("center_of_mass", "mean_of_maximum")."""
    return _lookup(_DEFUZZIFICATORS, "defuzzificator", name)


def supported_operators() -> dict[str, list[str]]:
    """Names accepted by the lookup functions, per strategy family."""
    return {
        "set": sorted(_SET_OPERATORS),
        "logic": sorted(_LOGIC_OPERATORS),
        "defuzzifier": sorted(_DEFUZZIFICATORS),
    }
