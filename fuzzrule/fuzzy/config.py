"""
Configuration models for complete fuzzy inference systems.

This module defines Pydantic models for validating a system definition:
universes, the fuzzy sets defined over them, the input variables, the output
universe, the operator strategies and the rules. Definitions are usually
loaded from YAML:

```yaml
universes:
  temperature: {begin: 0, end: 40, step: 1}
  fan_speed: {domain: [0, 25, 50, 75, 100]}
sets:
  temperature:
    hot: {type: triangular, parameters: [25, 40, 40]}
  fan_speed:
    fast: {type: trapezoidal, parameters: [50, 75, 100, 100]}
inputs: {temperature: temperature}
output: fan_speed
rules:
  - name: cool_down
    if: {op: is, variable: temperature, set: hot}
    then: fast
```
"""

from pathlib import Path
from typing import Annotated, Iterator, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from fuzzrule import get_logger
from fuzzrule.errors import (
    ConfigurationError,
    ConfigurationFileError,
    ErrorCodes,
    InvalidConfigurationError,
)
from fuzzrule.fuzzy.operators import supported_operators

# Set up module-level logger
logger = get_logger(__name__)


# --- Universes ---


class UniverseConfig(BaseModel):
    """
    Domain of one universe.

    Either a range ``{begin, end, step}`` or an explicit ``{domain: [...]}``.
    """

    begin: Optional[float] = None
    end: Optional[float] = None
    step: Optional[float] = Field(default=None, gt=0)
    domain: Optional[list[float]] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_form(self) -> "UniverseConfig":
        range_fields = {"begin": self.begin, "end": self.end, "step": self.step}
        given = [name for name, value in range_fields.items() if value is not None]

        if self.domain is not None and given:
            raise ConfigurationError(
                message="Universe takes either a domain or a begin/end/step range, not both",
                error_code=ErrorCodes.CONFIG_INVALID_DOMAIN,
                details={"range_fields": given},
            )

        if self.domain is None and len(given) != 3:
            missing = [name for name in range_fields if name not in given]
            raise ConfigurationError(
                message="Universe range requires begin, end and step",
                error_code=ErrorCodes.CONFIG_INVALID_DOMAIN,
                details={"missing": missing},
                suggestion="Add the missing fields or give an explicit domain list",
            )

        return self

    @property
    def is_range(self) -> bool:
        return self.domain is None


# --- Membership functions ---


class TriangularMFConfig(BaseModel):
    """
    Configuration for a triangular membership function.

    The parameters [a, b, c] must satisfy: a ≤ b ≤ c
    """

    type: Literal["triangular"] = "triangular"
    parameters: list[float] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Three parameters [a, b, c] defining the triangular membership function",
    )

    @field_validator("parameters")
    @classmethod
    def validate_parameters(cls, parameters: list[float]) -> list[float]:
        a, b, c = parameters
        if not (a <= b <= c):
            raise ConfigurationError(
                message="Triangular membership function parameters must satisfy: a ≤ b ≤ c",
                error_code=ErrorCodes.MF_INVALID_PARAMETER_ORDER,
                details={"parameters": {"a": a, "b": b, "c": c}},
            )
        return parameters


class TrapezoidalMFConfig(BaseModel):
    """
    Configuration for a trapezoidal membership function.

    The parameters [a, b, c, d] must satisfy: a ≤ b ≤ c ≤ d
    """

    type: Literal["trapezoidal"] = "trapezoidal"
    parameters: list[float] = Field(
        ...,
        min_length=4,
        max_length=4,
        description="Four parameters [a, b, c, d] defining the trapezoidal membership function",
    )

    @field_validator("parameters")
    @classmethod
    def validate_parameters(cls, parameters: list[float]) -> list[float]:
        a, b, c, d = parameters
        if not (a <= b <= c <= d):
            raise ConfigurationError(
                message="Trapezoidal membership function parameters must satisfy: a ≤ b ≤ c ≤ d",
                error_code=ErrorCodes.MF_INVALID_PARAMETER_ORDER,
                details={"parameters": {"a": a, "b": b, "c": c, "d": d}},
            )
        return parameters


# Union type for all membership function configurations with discriminator
MembershipFunctionConfig = Annotated[
    Union[TriangularMFConfig, TrapezoidalMFConfig],
    Field(discriminator="type"),
]


# --- Rule conditions ---


class IsConfig(BaseModel):
    """``variable IS set``."""

    op: Literal["is"] = "is"
    variable: str
    fuzzy_set: str = Field(..., alias="set")

    model_config = ConfigDict(populate_by_name=True)


class NotConfig(BaseModel):
    op: Literal["not"] = "not"
    operand: "ExpressionConfig"


class AndConfig(BaseModel):
    op: Literal["and"] = "and"
    left: "ExpressionConfig"
    right: "ExpressionConfig"


class OrConfig(BaseModel):
    op: Literal["or"] = "or"
    left: "ExpressionConfig"
    right: "ExpressionConfig"


ExpressionConfig = Annotated[
    Union[AndConfig, OrConfig, NotConfig, IsConfig],
    Field(discriminator="op"),
]

NotConfig.model_rebuild()
AndConfig.model_rebuild()
OrConfig.model_rebuild()


def iter_conditions(node: ExpressionConfig) -> Iterator[IsConfig]:
    """Yield every ``is`` leaf of a condition tree, left to right."""
    if isinstance(node, IsConfig):
        yield node
    elif isinstance(node, NotConfig):
        yield from iter_conditions(node.operand)
    else:
        yield from iter_conditions(node.left)
        yield from iter_conditions(node.right)


class RuleConfig(BaseModel):
    """One ``IF <condition> THEN <output set>`` rule."""

    name: str
    condition: ExpressionConfig = Field(..., alias="if")
    consequent: str = Field(..., alias="then")

    model_config = ConfigDict(populate_by_name=True)


# --- Operators ---


class OperatorsConfig(BaseModel):
    """Names of the operator strategies used by the inference context."""

    set_operators: str = Field(default="min_max", alias="set")
    logic: str = "zadeh"
    defuzzifier: str = "center_of_mass"

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @model_validator(mode="after")
    def validate_names(self) -> "OperatorsConfig":
        supported = supported_operators()
        chosen = {
            "set": self.set_operators,
            "logic": self.logic,
            "defuzzifier": self.defuzzifier,
        }
        for family, name in chosen.items():
            if name.lower() not in supported[family]:
                raise ConfigurationError(
                    message=f"Unknown {family} operator '{name}'",
                    error_code=ErrorCodes.OPS_UNKNOWN_OPERATOR,
                    context={"section": "operators"},
                    details={"family": family, "name": name, "supported": supported[family]},
                    suggestion=f"Use one of: {', '.join(supported[family])}",
                )
        return self


# --- Whole system ---


class FuzzySystemConfig(BaseModel):
    """
    Complete definition of a fuzzy inference system.

    Cross-references are checked after field validation: every set belongs
    to a declared universe, every input maps to a universe, every rule
    condition names a declared input and one of the sets of its universe, and
    every consequent is a set of the output universe.
    """

    universes: dict[str, UniverseConfig] = Field(..., min_length=1)
    sets: dict[str, dict[str, MembershipFunctionConfig]] = Field(default_factory=dict)
    inputs: dict[str, str] = Field(..., min_length=1)
    output: str
    operators: OperatorsConfig = Field(default_factory=OperatorsConfig)
    rules: list[RuleConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_references(self) -> "FuzzySystemConfig":
        universe_names = list(self.universes)

        for universe_name in self.sets:
            if universe_name not in self.universes:
                raise ConfigurationError.unknown_reference(
                    "universe", universe_name, universe_names, section="sets"
                )

        for input_name, universe_name in self.inputs.items():
            if universe_name not in self.universes:
                raise ConfigurationError.unknown_reference(
                    "universe", universe_name, universe_names, section=f"inputs.{input_name}"
                )

        if self.output not in self.universes:
            raise ConfigurationError.unknown_reference(
                "universe", self.output, universe_names, section="output"
            )

        if not self.rules:
            raise ConfigurationError(
                message="A fuzzy system needs at least one rule",
                error_code=ErrorCodes.CONFIG_EMPTY_RULES,
                context={"section": "rules"},
            )

        output_sets = list(self.sets.get(self.output, {}))
        for rule in self.rules:
            section = f"rules.{rule.name}"
            for leaf in iter_conditions(rule.condition):
                if leaf.variable not in self.inputs:
                    raise ConfigurationError.unknown_reference(
                        "input", leaf.variable, list(self.inputs), section=section
                    )
                input_sets = list(self.sets.get(self.inputs[leaf.variable], {}))
                if leaf.fuzzy_set not in input_sets:
                    raise ConfigurationError.unknown_reference(
                        "set", leaf.fuzzy_set, input_sets, section=section
                    )

            if rule.consequent not in output_sets:
                raise ConfigurationError.unknown_reference(
                    "set", rule.consequent, output_sets, section=section
                )

        logger.debug(
            f"Validated fuzzy system: {len(self.universes)} universes, "
            f"{len(self.inputs)} inputs, {len(self.rules)} rules"
        )
        return self


class FuzzySystemConfigLoader:
    """
    Loads and validates fuzzy system definitions from dictionaries or YAML files.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            config_dir: Directory that relative file paths are resolved
                against. Defaults to the current working directory.
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        logger.debug(
            f"Initialized FuzzySystemConfigLoader with config directory: {self.config_dir}"
        )

    @staticmethod
    def load_from_dict(config_dict: dict) -> FuzzySystemConfig:
        """
        Load and validate a system definition from a dictionary.

        Args:
            config_dict: Dictionary representation of the system

        Returns:
            Validated FuzzySystemConfig object

        Raises:
            ConfigurationError: If a reference cannot be resolved or a value
                is out of range
            InvalidConfigurationError: If the structure fails validation
        """
        logger.debug("Loading fuzzy system configuration from dictionary")
        try:
            return FuzzySystemConfig.model_validate(config_dict)
        except PydanticValidationError as e:
            logger.error(f"Failed to validate fuzzy system configuration: {e}")
            raise InvalidConfigurationError(
                message="Fuzzy system configuration validation failed",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                details={
                    "validation_errors": [
                        {"location": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                        for err in e.errors()
                    ]
                },
            ) from e

    def load_from_yaml(self, file_path: Union[str, Path]) -> FuzzySystemConfig:
        """
        Load and validate a system definition from a YAML file.

        Args:
            file_path: Path to the YAML file; relative paths are resolved
                against the config directory

        Returns:
            Validated FuzzySystemConfig object

        Raises:
            ConfigurationFileError: If the file cannot be found or read
            InvalidConfigurationError: If the YAML is malformed or fails validation
            ConfigurationError: If a reference cannot be resolved
        """
        path = Path(file_path)
        if not path.is_absolute():
            path = self.config_dir / path

        logger.info(f"Loading fuzzy system configuration from file: {path}")

        if not path.exists():
            logger.error(f"Fuzzy system configuration file not found: {path}")
            raise ConfigurationFileError(
                message=f"Fuzzy system configuration file not found: {path}",
                error_code=ErrorCodes.CONFIG_FILE_NOT_FOUND,
                context={"file": str(path)},
                details={"path": str(path)},
            )

        try:
            with open(path) as file:
                config_dict = yaml.safe_load(file)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML format in fuzzy system configuration file: {e}")
            raise InvalidConfigurationError(
                message="Invalid YAML format in fuzzy system configuration file",
                error_code=ErrorCodes.CONFIG_INVALID_YAML,
                context={"file": str(path)},
                details={"yaml_error": str(e)},
            ) from e
        except OSError as e:
            logger.error(f"Error reading fuzzy system configuration file: {e}")
            raise ConfigurationFileError(
                message="Error reading fuzzy system configuration file",
                error_code=ErrorCodes.CONFIG_LOAD_FAILED,
                context={"file": str(path)},
                details={"error": str(e)},
            ) from e

        # Handle empty file case
        if config_dict is None:
            logger.warning(f"Empty fuzzy system configuration file: {path}")
            config_dict = {}

        if not isinstance(config_dict, dict):
            raise InvalidConfigurationError(
                message="Fuzzy system configuration must be a mapping at the top level",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                context={"file": str(path)},
                details={"type": type(config_dict).__name__},
            )

        try:
            system_config = self.load_from_dict(config_dict)
        except ConfigurationError as e:
            e.context.setdefault("file", str(path))
            raise

        logger.info(f"Successfully loaded fuzzy system configuration from {path}")
        return system_config
