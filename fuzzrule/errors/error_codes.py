"""
Central registry of error codes for fuzzrule.

Error codes follow the pattern: CATEGORY-ErrorName

Categories:
- MF: Membership function construction errors
- SET: Universal set and fuzzy set errors
- OPS: Operator strategy lookup errors
- INFER: Inference machine and defuzzification errors
- CONFIG: System configuration loading and validation errors
- VALIDATION: Command line input validation errors

Usage:
    from fuzzrule.errors.error_codes import ErrorCodes

    raise ConfigurationError(
        message="Unknown universe 'speed'",
        error_code=ErrorCodes.CONFIG_UNKNOWN_UNIVERSE,
        ...
    )
"""


class ErrorCodes:
    """Central registry of error codes for consistent error handling."""

    # Membership function errors
    MF_INVALID_PARAMETER_COUNT = "MF-InvalidParameterCount"
    MF_INVALID_PARAMETER_ORDER = "MF-InvalidParameterOrder"
    MF_UNKNOWN_TYPE = "MF-UnknownType"

    # Set errors
    SET_INVALID_DOMAIN = "SET-InvalidDomain"
    SET_INVALID_STEP = "SET-InvalidStep"
    SET_INVALID_DEGREE = "SET-InvalidDegree"
    SET_UNKNOWN_SET = "SET-UnknownSet"

    # Operator errors
    OPS_UNKNOWN_OPERATOR = "OPS-UnknownOperator"

    # Inference errors
    INFER_NO_DECISION = "INFER-NoDecision"
    INFER_UNKNOWN_UNIVERSE = "INFER-UnknownUniverse"
    INFER_INVALID_WORKERS = "INFER-InvalidWorkers"

    # Configuration errors
    CONFIG_LOAD_FAILED = "CONFIG-LoadFailed"
    CONFIG_FILE_NOT_FOUND = "CONFIG-FileNotFound"
    CONFIG_INVALID_YAML = "CONFIG-InvalidYaml"
    CONFIG_VALIDATION_FAILED = "CONFIG-ValidationFailed"
    CONFIG_INVALID_DOMAIN = "CONFIG-InvalidDomain"
    CONFIG_UNKNOWN_UNIVERSE = "CONFIG-UnknownUniverse"
    CONFIG_UNKNOWN_SET = "CONFIG-UnknownSet"
    CONFIG_UNKNOWN_INPUT = "CONFIG-UnknownInput"
    CONFIG_EMPTY_RULES = "CONFIG-EmptyRules"

    # Command line validation errors
    VALIDATION_INVALID_INPUT = "VALIDATION-InvalidInput"
    VALIDATION_FILE_NOT_FOUND = "VALIDATION-FileNotFound"
