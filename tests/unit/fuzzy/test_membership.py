"""
Tests for fuzzy membership function implementations.
"""

import numpy as np
import pandas as pd
import pytest

from fuzzrule.errors import ConfigurationError, ErrorCodes
from fuzzrule.fuzzy.membership import (
    MembershipFunctionFactory,
    TrapezoidalMF,
    TriangularMF,
)


class TestTriangularMF:
    """Tests for triangular membership function implementation."""

    def test_valid_initialization(self):
        mf = TriangularMF([0, 50, 100])
        assert (mf.a, mf.b, mf.c) == (0.0, 50.0, 100.0)

        # Degenerate shapes are accepted
        TriangularMF([0, 0, 100])
        TriangularMF([0, 100, 100])
        TriangularMF([50, 50, 50])

    def test_invalid_parameter_count(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TriangularMF([0, 50])
        assert "requires exactly 3 parameters" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCodes.MF_INVALID_PARAMETER_COUNT

        with pytest.raises(ConfigurationError):
            TriangularMF([0, 50, 100, 150])

    def test_nan_parameter(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TriangularMF([0, float("nan"), 100])
        assert exc_info.value.error_code == ErrorCodes.MF_INVALID_PARAMETER_ORDER

    def test_invalid_parameter_order(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TriangularMF([50, 0, 100])  # a > b
        assert "parameters must satisfy: a ≤ b ≤ c" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCodes.MF_INVALID_PARAMETER_ORDER

        with pytest.raises(ConfigurationError):
            TriangularMF([0, 100, 50])  # b > c

    def test_basic_shape(self):
        mf = TriangularMF([0, 1, 2])
        assert mf(0.5) == 0.5
        assert mf(1) == 1.0
        assert mf(2) == 0.0
        assert mf(2.5) == 0.0
        assert mf(-1) == 0.0

    def test_scalar_evaluation(self):
        mf = TriangularMF([0, 50, 100])

        assert mf.evaluate(0) == 0.0  # At a
        assert mf.evaluate(25) == 0.5
        assert mf.evaluate(50) == 1.0  # Peak
        assert mf.evaluate(75) == 0.5
        assert mf.evaluate(100) == 0.0  # At c
        assert mf.evaluate(-10) == 0.0
        assert mf.evaluate(110) == 0.0
        assert np.isnan(mf.evaluate(np.nan))

    def test_degenerate_sides(self):
        # a = b: step up at a
        mf = TriangularMF([50, 50, 100])
        assert mf(50) == 1.0
        assert mf(75) == 0.5
        assert mf(49.999) == 0.0

        # b = c: step down after c
        mf = TriangularMF([0, 50, 50])
        assert mf(25) == 0.5
        assert mf(50) == 1.0
        assert mf(50.001) == 0.0

        # a = b = c: singleton
        mf = TriangularMF([50, 50, 50])
        assert mf(49) == 0.0
        assert mf(50) == 1.0
        assert mf(51) == 0.0

    def test_series_evaluation(self):
        mf = TriangularMF([0, 50, 100])
        x = pd.Series([-10, 0, 25, 50, 75, 100, 110, np.nan], name="temperature")

        result = mf.evaluate(x)

        expected = pd.Series(
            [0.0, 0.0, 0.5, 1.0, 0.5, 0.0, 0.0, np.nan], name="temperature"
        )
        pd.testing.assert_series_equal(result, expected)

    def test_array_evaluation_matches_scalar(self):
        mf = TriangularMF([0, 0, 20])
        x = np.linspace(-5, 25, 61)

        result = mf.evaluate(x)

        np.testing.assert_allclose(result, [mf.evaluate(v) for v in x])

    def test_unsupported_input_type(self):
        mf = TriangularMF([0, 1, 2])
        with pytest.raises(TypeError):
            mf.evaluate("1.0")

    def test_repr(self):
        assert repr(TriangularMF([0, 1, 2])) == "TriangularMF(a=0.0, b=1.0, c=2.0)"


class TestTrapezoidalMF:
    """Tests for trapezoidal membership function implementation."""

    def test_invalid_initialization(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TrapezoidalMF([0, 1, 2])
        assert "requires exactly 4 parameters" in str(exc_info.value)

        with pytest.raises(ConfigurationError) as exc_info:
            TrapezoidalMF([0, 2, 1, 3])
        assert "a ≤ b ≤ c ≤ d" in str(exc_info.value)

    def test_basic_shape(self):
        mf = TrapezoidalMF([0, 1, 2, 3])
        assert mf(0.5) == 0.5
        assert mf(1) == 1.0
        assert mf(1.5) == 1.0
        assert mf(2) == 1.0
        assert mf(2.5) == 0.5
        assert mf(3) == 0.0
        assert mf(-0.5) == 0.0
        assert np.isnan(mf(float("nan")))

    def test_shoulders(self):
        left = TrapezoidalMF([0, 0, 25, 50])
        assert left(0) == 1.0
        assert left(25) == 1.0
        assert left(37.5) == 0.5
        assert left(-0.001) == 0.0

        right = TrapezoidalMF([50, 75, 100, 100])
        assert right(100) == 1.0
        assert right(62.5) == 0.5
        assert right(100.001) == 0.0

    def test_array_evaluation(self):
        mf = TrapezoidalMF([0, 1, 2, 3])
        x = np.array([-1.0, 0.5, 1.5, 2.5, 4.0, np.nan])

        result = mf.evaluate(x)

        np.testing.assert_allclose(result, [0.0, 0.5, 1.0, 0.5, 0.0, np.nan])


class TestMembershipFunctionFactory:
    """Tests for name based construction."""

    def test_create_known_types(self):
        assert isinstance(
            MembershipFunctionFactory.create("triangular", [0, 1, 2]), TriangularMF
        )
        assert isinstance(
            MembershipFunctionFactory.create("Trapezoidal", [0, 1, 2, 3]), TrapezoidalMF
        )

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MembershipFunctionFactory.create("gaussian", [0, 1])
        assert exc_info.value.error_code == ErrorCodes.MF_UNKNOWN_TYPE
        assert exc_info.value.details["supported_types"] == ["triangular", "trapezoidal"]

    def test_supported_types(self):
        assert MembershipFunctionFactory.get_supported_types() == [
            "triangular",
            "trapezoidal",
        ]
