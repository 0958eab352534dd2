"""
Fuzzy rules and rule set evaluation.

A Rule pairs a condition expression with a consequent fuzzy set. A RuleSet
evaluates all of its rules against one context snapshot and reduces the
per-rule results into a single aggregate with the configured set union.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from fuzzrule import get_logger
from fuzzrule.config.settings import get_inference_settings
from fuzzrule.errors import ConfigurationError, ErrorCodes
from fuzzrule.fuzzy.expressions import Expression, evaluate_expression
from fuzzrule.fuzzy.sets import EMPTY_SET, FuzzySet
from fuzzrule.logging import log_performance

if TYPE_CHECKING:
    from fuzzrule.fuzzy.inference import InferenceContext

# Set up module-level logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class Rule:
    """
    IF ``condition`` THEN ``consequent``.

    Evaluating a rule keeps only the consequent entries whose degree does not
    exceed the firing strength of the condition. Entries the rule is not
    strong enough to cover are dropped rather than clipped.
    """

    name: str
    condition: Expression
    consequent: FuzzySet

    def firing_strength(self, context: "InferenceContext") -> float:
        return evaluate_expression(self.condition, context)

    def evaluate(self, context: "InferenceContext") -> FuzzySet:
        strength = self.firing_strength(context)

        # NaN strength compares false against every degree and keeps nothing
        kept = {
            element: membership
            for element, membership in self.consequent.items()
            if membership <= strength
        }

        logger.debug(
            f"Rule '{self.name}' fired at {strength}, kept {len(kept)} of "
            f"{len(self.consequent)} consequent points"
        )
        return FuzzySet(f"{self.name} result set", kept)

    def to_text(self) -> str:
        return f"{self.name}: IF {self.condition.to_text()} THEN {self.consequent.name}"

    def __str__(self) -> str:
        return self.to_text()


class RuleSet:
    """
    Ordered collection of rules evaluated as parallel map + sequential reduce.

    Rules are evaluated on a thread pool against a snapshot of the context;
    the results are then folded left-to-right, in rule order, with the
    context's set union starting from the empty set. Workers never share an
    accumulator, so parallel and sequential runs produce identical
    aggregates.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self.rules: list[Rule] = list(rules) if rules is not None else []

    def add(self, rule: Optional[Rule]) -> None:
        """Append a rule; ``None`` is ignored."""
        if rule is None:
            return
        self.rules.append(rule)

    def _resolve_workers(self, max_workers: Optional[int]) -> int:
        if max_workers is None:
            settings = get_inference_settings()
            if not settings.parallel:
                return 1
            max_workers = settings.max_workers or os.cpu_count() or 1

        if max_workers < 1:
            logger.error(f"Invalid worker count for rule evaluation: {max_workers}")
            raise ConfigurationError(
                message="Rule evaluation needs at least one worker",
                error_code=ErrorCodes.INFER_INVALID_WORKERS,
                details={"max_workers": max_workers},
            )

        return min(max_workers, len(self.rules))

    @log_performance()
    def evaluate(
        self, context: "InferenceContext", max_workers: Optional[int] = None
    ) -> FuzzySet:
        """
        Evaluate every rule and aggregate the results.

        Args:
            context: Inference context; a snapshot is taken before fan-out
            max_workers: Worker thread limit; defaults to the configured
                inference settings. 1 evaluates sequentially.

        Returns:
            Union of all rule results (the empty set when there are no rules)
        """
        snapshot = context.snapshot()
        workers = self._resolve_workers(max_workers)

        if workers <= 1:
            results = [rule.evaluate(snapshot) for rule in self.rules]
        else:
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="fuzzrule-rule"
            ) as executor:
                # map preserves rule order regardless of completion order
                results = list(executor.map(lambda rule: rule.evaluate(snapshot), self.rules))

        set_ops = snapshot.options.set_ops
        aggregate = EMPTY_SET
        for result in results:
            aggregate = set_ops.union(aggregate, result)

        logger.debug(
            f"Evaluated {len(self.rules)} rules with {max(workers, 1)} worker(s), "
            f"aggregate has {len(aggregate)} points"
        )
        return aggregate

    def to_text(self) -> str:
        return "\n".join(rule.to_text() for rule in self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __str__(self) -> str:
        return self.to_text()
