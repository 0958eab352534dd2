"""
Build ready-to-use inference machines from system configurations.
"""

from pathlib import Path
from typing import Optional, Union

from fuzzrule import get_logger
from fuzzrule.config.settings import get_inference_settings
from fuzzrule.fuzzy.config import (
    AndConfig,
    ExpressionConfig,
    FuzzySystemConfig,
    FuzzySystemConfigLoader,
    IsConfig,
    NotConfig,
    OrConfig,
    UniverseConfig,
)
from fuzzrule.fuzzy.expressions import And, Expression, Is, Not, Or
from fuzzrule.fuzzy.inference import InferenceContext, InferenceMachine, InferenceOptions
from fuzzrule.fuzzy.membership import MembershipFunctionFactory
from fuzzrule.fuzzy.operators import (
    get_defuzzificator,
    get_logic_operators,
    get_set_operators,
)
from fuzzrule.fuzzy.rules import Rule, RuleSet
from fuzzrule.fuzzy.sets import FuzzySet, UniversalSet
from fuzzrule.logging import log_entry_exit

# Set up module-level logger
logger = get_logger(__name__)


def build_universe(name: str, config: UniverseConfig) -> UniversalSet:
    if config.is_range:
        tolerance = get_inference_settings().domain_tolerance
        return UniversalSet.from_range(
            name, config.begin, config.end, config.step, tolerance=tolerance
        )
    return UniversalSet(name, config.domain)


def build_expression(
    node: ExpressionConfig,
    inputs: dict[str, str],
    universes: dict[str, UniversalSet],
) -> Expression:
    """
    Convert a validated condition tree into an expression tree.

    ``is`` leaves resolve their set on the universe of the input variable.
    """
    if isinstance(node, IsConfig):
        universe = universes[inputs[node.variable]]
        return Is(node.variable, universe.get_set(node.fuzzy_set))

    if isinstance(node, NotConfig):
        return Not(build_expression(node.operand, inputs, universes))

    if isinstance(node, AndConfig):
        return And(
            build_expression(node.left, inputs, universes),
            build_expression(node.right, inputs, universes),
        )

    if isinstance(node, OrConfig):
        return Or(
            build_expression(node.left, inputs, universes),
            build_expression(node.right, inputs, universes),
        )

    raise TypeError(f"Unsupported condition node: {type(node).__name__}")


@log_entry_exit()
def build_machine(
    config: FuzzySystemConfig, max_workers: Optional[int] = None
) -> InferenceMachine:
    """
    Create an inference machine for a validated system definition.

    Args:
        config: Validated system definition
        max_workers: Worker limit for rule evaluation; None uses settings

    Returns:
        InferenceMachine with every input unset and no decision yet
    """
    universes = {
        name: build_universe(name, universe_config)
        for name, universe_config in config.universes.items()
    }

    for universe_name, set_configs in config.sets.items():
        universe = universes[universe_name]
        for set_name, mf_config in set_configs.items():
            membership_function = MembershipFunctionFactory.create(
                mf_config.type, mf_config.parameters
            )
            FuzzySet(set_name, membership_function=membership_function, universe=universe)

    output = universes[config.output]
    rule_set = RuleSet()
    for rule_config in config.rules:
        rule_set.add(
            Rule(
                name=rule_config.name,
                condition=build_expression(rule_config.condition, config.inputs, universes),
                consequent=output.get_set(rule_config.consequent),
            )
        )

    options = InferenceOptions(
        set_ops=get_set_operators(config.operators.set_operators),
        logic_ops=get_logic_operators(config.operators.logic),
        defuzzificator=get_defuzzificator(config.operators.defuzzifier),
    )
    context = InferenceContext(config.inputs.keys(), options)

    logger.info(
        f"Built fuzzy system with {len(universes)} universes, "
        f"{len(config.inputs)} inputs and {len(rule_set)} rules"
    )
    return InferenceMachine(context, universes.values(), rule_set, max_workers=max_workers)


def load_machine(
    file_path: Union[str, Path], max_workers: Optional[int] = None
) -> InferenceMachine:
    """Load a YAML system definition and build its inference machine."""
    config = FuzzySystemConfigLoader().load_from_yaml(file_path)
    return build_machine(config, max_workers=max_workers)
