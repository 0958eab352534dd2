"""
Fuzzy inference module for fuzzrule.

This module provides membership functions, universal and fuzzy sets,
pluggable operator strategies, rule condition expressions, rule sets and the
inference machine that turns named inputs into a crisp decision.
"""

from fuzzrule.fuzzy.batch import BatchInferenceRunner
from fuzzrule.fuzzy.config import (
    FuzzySystemConfig,
    FuzzySystemConfigLoader,
    MembershipFunctionConfig,
    RuleConfig,
    TrapezoidalMFConfig,
    TriangularMFConfig,
    UniverseConfig,
)
from fuzzrule.fuzzy.expressions import And, Expression, Is, Not, Or, evaluate_expression
from fuzzrule.fuzzy.inference import InferenceContext, InferenceMachine, InferenceOptions
from fuzzrule.fuzzy.membership import (
    MembershipFunction,
    MembershipFunctionFactory,
    TrapezoidalMF,
    TriangularMF,
)
from fuzzrule.fuzzy.operators import (
    CenterOfMassDefuzzificator,
    Defuzzificator,
    LogicOperators,
    MeanOfMaximumDefuzzificator,
    MinMaxSetOperators,
    ProductOperators,
    SetOperators,
    ZadehOperators,
    get_defuzzificator,
    get_logic_operators,
    get_set_operators,
    supported_operators,
)
from fuzzrule.fuzzy.rules import Rule, RuleSet
from fuzzrule.fuzzy.sets import EMPTY_SET, FuzzySet, UniversalSet, Variable
from fuzzrule.fuzzy.system import build_machine, load_machine

__all__ = [
    # Membership functions
    "MembershipFunction",
    "MembershipFunctionFactory",
    "TriangularMF",
    "TrapezoidalMF",
    # Sets
    "UniversalSet",
    "FuzzySet",
    "Variable",
    "EMPTY_SET",
    # Operators
    "SetOperators",
    "MinMaxSetOperators",
    "LogicOperators",
    "ZadehOperators",
    "ProductOperators",
    "Defuzzificator",
    "CenterOfMassDefuzzificator",
    "MeanOfMaximumDefuzzificator",
    "get_set_operators",
    "get_logic_operators",
    "get_defuzzificator",
    "supported_operators",
    # Expressions and rules
    "Expression",
    "And",
    "Or",
    "Not",
    "Is",
    "evaluate_expression",
    "Rule",
    "RuleSet",
    # Inference
    "InferenceOptions",
    "InferenceContext",
    "InferenceMachine",
    "BatchInferenceRunner",
    # Configuration
    "FuzzySystemConfig",
    "FuzzySystemConfigLoader",
    "UniverseConfig",
    "MembershipFunctionConfig",
    "TriangularMFConfig",
    "TrapezoidalMFConfig",
    "RuleConfig",
    "build_machine",
    "load_machine",
]
