"""
Exception hierarchy for fuzzrule.

Construction problems (bad membership parameters, malformed domains, invalid
system definitions) fail fast with a ConfigurationError. Problems that only
show up while evaluating, such as an aggregate with no mass to defuzzify, are
ProcessingErrors.
"""

from typing import Any, Optional

from fuzzrule.errors.error_codes import ErrorCodes


class FuzzruleError(Exception):
    """
    Base exception class for all fuzzrule errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)


# --- Validation Errors ---


class ValidationError(FuzzruleError):
    """
    Exception raised when user supplied input fails validation.

    Use for command line arguments and other direct user input, NOT for
    system definition files (see ConfigurationError).

    Examples:
        >>> raise ValidationError(
        ...     message="Invalid input 'speed', expected NAME=VALUE",
        ...     error_code="VALIDATION-InvalidInput",
        ...     details={"provided": "speed"},
        ... )
    """

    pass


# --- Configuration Errors ---


class ConfigurationError(FuzzruleError):
    """
    Configuration error with location context and a fix suggestion.

    Raised when something is constructed from invalid parameters: membership
    functions with unordered points, universes with a non-positive step, fuzzy
    sets with degrees outside [0, 1], or system definitions that reference
    universes or sets that do not exist.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Dictionary with error location (file, section, field)
        details: Dictionary with structured error data
        suggestion: How to fix the error

    Examples:
        Manual construction:
            >>> raise ConfigurationError(
            ...     message="Triangular membership function parameters must satisfy: a ≤ b ≤ c",
            ...     error_code="MF-InvalidParameterOrder",
            ...     details={"parameters": {"a": 2, "b": 1, "c": 3}},
            ... )

        Using factory method:
            >>> raise ConfigurationError.unknown_reference(
            ...     kind="universe",
            ...     name="speed",
            ...     available=["temperature"],
            ...     section="inputs",
            ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: str = "",
    ) -> None:
        super().__init__(message, error_code, details)
        self.context = context or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize error to dictionary.

        Returns:
            Dictionary with all error information
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "details": self.details,
            "suggestion": self.suggestion,
        }

    def format_user_message(self) -> str:
        """
        Format a user-friendly error message with all context.

        Returns:
            Formatted error message string
        """
        parts = [f"Error: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.context:
            context_parts = []
            if "file" in self.context:
                context_parts.append(f"File: {self.context['file']}")
            if "section" in self.context:
                context_parts.append(f"Section: {self.context['section']}")
            if context_parts:
                parts.append("Location: " + ", ".join(context_parts))

        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")

        return "\n".join(parts)

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    @classmethod
    def unknown_reference(
        cls,
        kind: str,
        name: str,
        available: list[str],
        section: str,
        file_path: Optional[str] = None,
    ) -> "ConfigurationError":
        """
        Factory method for a system definition that names a missing item.

        Args:
            kind: What was referenced ("universe", "set", "input")
            name: The name that could not be resolved
            available: Names that would have been accepted
            section: Section of the definition holding the reference
            file_path: Optional path of the definition file

        Returns:
            ConfigurationError for the unresolved reference
        """
        codes = {
            "universe": ErrorCodes.CONFIG_UNKNOWN_UNIVERSE,
            "set": ErrorCodes.CONFIG_UNKNOWN_SET,
            "input": ErrorCodes.CONFIG_UNKNOWN_INPUT,
        }
        context: dict[str, Any] = {"section": section}
        if file_path:
            context["file"] = file_path

        return cls(
            message=f"Unknown {kind} '{name}' referenced in {section}",
            error_code=codes.get(kind, ErrorCodes.CONFIG_VALIDATION_FAILED),
            context=context,
            details={"kind": kind, "name": name, "available": sorted(available)},
            suggestion=(
                f"Use one of: {', '.join(sorted(available))}"
                if available
                else f"Define a {kind} named '{name}' first"
            ),
        )


class InvalidConfigurationError(ConfigurationError):
    """Exception raised when configuration is invalid."""

    pass


class ConfigurationFileError(ConfigurationError):
    """Exception raised when there are issues with configuration files."""

    pass


# --- Processing Errors ---


class ProcessingError(FuzzruleError):
    """
    Base class for errors raised while evaluating a fuzzy system.

    Lookups of unknown sets or universes on an already built system end up
    here, as do defuzzification failures.
    """

    pass


class NoDecisionError(ProcessingError):
    """
    Raised when an aggregate fuzzy set carries no membership mass.

    Zero is a legitimate crisp decision, so an empty aggregate is reported
    explicitly instead of being collapsed to 0.
    """

    def __init__(
        self,
        message: str = "Aggregate fuzzy set is empty, no decision can be made",
        error_code: Optional[str] = ErrorCodes.INFER_NO_DECISION,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message, error_code, details, suggestion)
