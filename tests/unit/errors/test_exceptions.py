"""
Tests for the fuzzrule exception hierarchy and error codes.
"""

import pytest

from fuzzrule.errors import (
    ConfigurationError,
    ConfigurationFileError,
    ErrorCodes,
    FuzzruleError,
    InvalidConfigurationError,
    NoDecisionError,
    ProcessingError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Tests for base classes and attributes."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            ValidationError,
            ConfigurationError,
            InvalidConfigurationError,
            ConfigurationFileError,
            ProcessingError,
            NoDecisionError,
        ],
    )
    def test_all_errors_derive_from_base(self, exception_class):
        assert issubclass(exception_class, FuzzruleError)

    def test_configuration_subclasses(self):
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(ConfigurationFileError, ConfigurationError)

    def test_base_attributes(self):
        error = FuzzruleError("boom", error_code="X-Boom", details={"a": 1}, suggestion="retry")
        assert error.message == "boom"
        assert error.error_code == "X-Boom"
        assert error.details == {"a": 1}
        assert error.suggestion == "retry"
        assert str(error) == "boom"

    def test_details_default_to_empty_dict(self):
        assert ProcessingError("boom").details == {}


class TestConfigurationError:
    """Tests for configuration error formatting."""

    def test_str_includes_code(self):
        error = ConfigurationError("Bad step", error_code=ErrorCodes.SET_INVALID_STEP)
        assert str(error) == "[SET-InvalidStep] Bad step"
        assert str(ConfigurationError("Bad step")) == "Bad step"

    def test_to_dict(self):
        error = ConfigurationError(
            "Bad step",
            error_code=ErrorCodes.SET_INVALID_STEP,
            context={"section": "universes"},
            details={"step": 0},
            suggestion="Use a positive step",
        )
        assert error.to_dict() == {
            "message": "Bad step",
            "error_code": "SET-InvalidStep",
            "context": {"section": "universes"},
            "details": {"step": 0},
            "suggestion": "Use a positive step",
        }

    def test_format_user_message(self):
        error = ConfigurationError(
            "Bad step",
            error_code=ErrorCodes.SET_INVALID_STEP,
            context={"file": "fan.yaml", "section": "universes"},
            suggestion="Use a positive step",
        )
        message = error.format_user_message()

        assert message.startswith("Error: Bad step")
        assert "Code: SET-InvalidStep" in message
        assert "Location: File: fan.yaml, Section: universes" in message
        assert "Suggestion: Use a positive step" in message

    @pytest.mark.parametrize(
        "kind, code",
        [
            ("universe", ErrorCodes.CONFIG_UNKNOWN_UNIVERSE),
            ("set", ErrorCodes.CONFIG_UNKNOWN_SET),
            ("input", ErrorCodes.CONFIG_UNKNOWN_INPUT),
        ],
    )
    def test_unknown_reference(self, kind, code):
        error = ConfigurationError.unknown_reference(
            kind, "x", ["b", "a"], section="rules.r1", file_path="fan.yaml"
        )
        assert error.error_code == code
        assert error.context == {"section": "rules.r1", "file": "fan.yaml"}
        assert error.details == {"kind": kind, "name": "x", "available": ["a", "b"]}
        assert error.suggestion == "Use one of: a, b"

    def test_unknown_reference_with_nothing_available(self):
        error = ConfigurationError.unknown_reference("set", "fast", [], section="rules.r1")
        assert error.suggestion == "Define a set named 'fast' first"
        assert "file" not in error.context


class TestNoDecisionError:
    def test_defaults(self):
        error = NoDecisionError()
        assert isinstance(error, ProcessingError)
        assert error.error_code == ErrorCodes.INFER_NO_DECISION
        assert "no decision" in error.message


class TestErrorCodes:
    """Tests for the error code registry."""

    @pytest.fixture
    def codes(self):
        return [
            value
            for name, value in vars(ErrorCodes).items()
            if not name.startswith("_") and isinstance(value, str)
        ]

    def test_all_codes_follow_pattern(self, codes):
        for code in codes:
            category, _, name = code.partition("-")
            assert category.isupper()
            assert name

    def test_codes_are_unique(self, codes):
        assert len(codes) == len(set(codes))
