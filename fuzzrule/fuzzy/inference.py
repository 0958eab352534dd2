"""
Inference context and inference machine.

The InferenceContext holds the current value of every named input together
with the operator strategies used to evaluate rules. The InferenceMachine
owns a context, the universal sets and a rule set, and recomputes its
decision synchronously every time an input is written.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from fuzzrule import get_logger
from fuzzrule.errors import ErrorCodes, NoDecisionError, ProcessingError
from fuzzrule.fuzzy.operators import (
    CenterOfMassDefuzzificator,
    Defuzzificator,
    LogicOperators,
    MinMaxSetOperators,
    SetOperators,
    ZadehOperators,
)
from fuzzrule.fuzzy.rules import RuleSet
from fuzzrule.fuzzy.sets import EMPTY_SET, FuzzySet, UniversalSet

# Set up module-level logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class InferenceOptions:
    """Operator strategies used during one inference."""

    set_ops: SetOperators = field(default_factory=MinMaxSetOperators)
    logic_ops: LogicOperators = field(default_factory=ZadehOperators)
    defuzzificator: Defuzzificator = field(default_factory=CenterOfMassDefuzzificator)


class InferenceContext:
    """
    Current input values plus operator configuration.

    Every declared input starts unset (NaN). Writing an undeclared name is
    ignored and reading one returns NaN.
    """

    def __init__(
        self,
        names: Iterable[str],
        options: Optional[InferenceOptions] = None,
        _read_only: bool = False,
    ):
        self._values: dict[str, float] = {name: math.nan for name in names}
        self.options = options or InferenceOptions()
        self._read_only = _read_only

    def __getitem__(self, name: str) -> float:
        return self._values.get(name, math.nan)

    def __setitem__(self, name: str, value: float) -> None:
        if self._read_only:
            raise TypeError("Context snapshots are read-only")

        if name not in self._values:
            logger.debug(f"Ignoring write to unknown input '{name}'")
            return

        self._values[name] = float(value)

    def snapshot(self) -> "InferenceContext":
        """Read-only copy of the current values sharing the same options."""
        frozen = InferenceContext(self._values.keys(), self.options, _read_only=True)
        frozen._values.update(self._values)
        return frozen

    @property
    def names(self) -> list[str]:
        return list(self._values.keys())

    def values(self) -> dict[str, float]:
        return dict(self._values)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"InferenceContext(values={self._values})"


class InferenceMachine:
    """
    Ties a mutable input context to an incrementally recomputed decision.

    Example:
        ```python
        machine = InferenceMachine(context, [temperature, fan_speed], rules)
        machine["temperature"] = 31.5
        if machine.has_decision:
            print(machine.decision)
        ```
    """

    def __init__(
        self,
        context: InferenceContext,
        universal_sets: Iterable[UniversalSet],
        rule_set: RuleSet,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            context: Context owned exclusively by this machine
            universal_sets: Universes the rules are defined over
            rule_set: Rules to evaluate on every input write
            max_workers: Worker limit for rule evaluation; None uses settings
        """
        self.context = context
        self.universal_sets = list(universal_sets)
        self.rule_set = rule_set
        self.max_workers = max_workers
        self._decision = math.nan
        self._has_decision = False
        self._aggregate: FuzzySet = EMPTY_SET

        logger.debug(
            f"Initialized inference machine with {len(self.rule_set)} rules, "
            f"inputs {self.context.names}"
        )

    def __getitem__(self, name: str) -> float:
        return self.context[name]

    def __setitem__(self, name: str, value: float) -> None:
        self.context[name] = value
        self.evaluate()

    def evaluate(self) -> float:
        """
        Recompute the decision from the current context.

        Returns:
            The new decision, NaN when the aggregate is empty
        """
        aggregate = self.rule_set.evaluate(self.context, max_workers=self.max_workers)
        self._aggregate = aggregate

        try:
            decision = self.context.options.defuzzificator(aggregate)
        except NoDecisionError as e:
            logger.debug(f"No decision for inputs {self.context.values()}: {e}")
            self._decision = math.nan
            self._has_decision = False
        else:
            self._decision = decision
            self._has_decision = True

        return self._decision

    @property
    def decision(self) -> float:
        return self._decision

    @property
    def has_decision(self) -> bool:
        return self._has_decision

    @property
    def aggregate(self) -> FuzzySet:
        """Aggregate fuzzy set from the most recent evaluation."""
        return self._aggregate

    def universe(self, name: str) -> UniversalSet:
        """
        Look up one of the machine's universal sets by name.

        Raises:
            ProcessingError: If no universe has that name
        """
        for universal_set in self.universal_sets:
            if universal_set.name == name:
                return universal_set

        raise ProcessingError(
            message=f"Unknown universe: {name}",
            error_code=ErrorCodes.INFER_UNKNOWN_UNIVERSE,
            details={
                "universe": name,
                "available_universes": [u.name for u in self.universal_sets],
            },
        )
