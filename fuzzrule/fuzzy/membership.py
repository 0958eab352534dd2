"""
Membership function definitions for fuzzy logic.

This module defines the abstract base class for membership functions and the
two built-in shapes, triangular and trapezoidal, together with a factory for
creating them by name.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Union

import numpy as np
import pandas as pd

from fuzzrule import get_logger
from fuzzrule.errors import ConfigurationError, ErrorCodes

# Set up module-level logger
logger = get_logger(__name__)

MembershipInput = Union[float, pd.Series, np.ndarray]


class MembershipFunction(ABC):
    """
    Abstract base class for fuzzy membership functions.

    A membership function is a pure mapping from a crisp value to a degree in
    [0, 1]. It carries no mutable state, so one instance can back any number
    of fuzzy sets.
    """

    @abstractmethod
    def _evaluate_scalar(self, x: float) -> float:
        """Evaluate the function for a single value."""

    @abstractmethod
    def _evaluate_array(self, x: np.ndarray) -> np.ndarray:
        """Evaluate the function element-wise over a numpy array."""

    def evaluate(self, x: MembershipInput) -> MembershipInput:
        """
        Evaluate the membership function for given input value(s).

        Supports scalar values and vectorized inputs (pandas Series or numpy
        arrays). NaN inputs map to NaN.

        Args:
            x: Input value(s) to evaluate

        Returns:
            Membership degree(s) in the range [0, 1]

        Raises:
            TypeError: If the input type is not supported
        """
        if isinstance(x, (int, float, np.number)):
            return self._evaluate_scalar(float(x))

        elif isinstance(x, pd.Series):
            logger.debug(
                f"Evaluating {type(self).__name__} for pandas Series of length {len(x)}"
            )
            return pd.Series(
                self._evaluate_array(x.to_numpy(dtype=float)),
                index=x.index,
                name=x.name,
            )

        elif isinstance(x, np.ndarray):
            logger.debug(
                f"Evaluating {type(self).__name__} for numpy array of shape {x.shape}"
            )
            return self._evaluate_array(x.astype(float))

        else:
            logger.error(f"Unsupported input type for {type(self).__name__}: {type(x)}")
            raise TypeError(
                f"Unsupported input type: {type(x)}. Expected float, pd.Series, or np.ndarray."
            )

    def __call__(self, x: MembershipInput) -> MembershipInput:
        return self.evaluate(x)

    def _check_parameters(
        self, parameters: Sequence[float], names: tuple[str, ...]
    ) -> tuple[float, ...]:
        """Return the parameters as floats, checking count and ordering."""
        shape = type(self).__name__
        if len(parameters) != len(names):
            logger.error(
                f"Invalid {shape} parameters: expected {len(names)}, got {len(parameters)}"
            )
            raise ConfigurationError(
                message=f"{shape} requires exactly {len(names)} parameters [{', '.join(names)}]",
                error_code=ErrorCodes.MF_INVALID_PARAMETER_COUNT,
                details={"expected": len(names), "actual": len(parameters)},
            )

        values = tuple(float(p) for p in parameters)
        # NaN compares false both ways, so it is rejected explicitly
        ordered = not any(np.isnan(values)) and all(
            low <= high for low, high in zip(values, values[1:])
        )
        if not ordered:
            named = dict(zip(names, values))
            logger.error(f"Invalid {shape} parameter order: {named}")
            raise ConfigurationError(
                message=f"{shape} parameters must satisfy: {' ≤ '.join(names)}",
                error_code=ErrorCodes.MF_INVALID_PARAMETER_ORDER,
                details={"parameters": named},
            )

        logger.debug(f"Initialized {shape} with parameters {dict(zip(names, values))}")
        return values


class TriangularMF(MembershipFunction):
    """
    Triangular membership function implementation.

    A triangular membership function is defined by three parameters [a, b, c]:
    - a: start point (membership degree = 0)
    - b: peak point (membership degree = 1)
    - c: end point (membership degree = 0)

    The membership degree μ(x) is calculated as:
    - μ(x) = 0,                 if x < a or x > c
    - μ(x) = (x - a) / (b - a), if a ≤ x < b
    - μ(x) = 1,                 if x = b
    - μ(x) = (c - x) / (c - b), if b < x ≤ c

    Degenerate sides are instantaneous steps:
    - If a = b, then μ(a) = 1 and the function falls linearly to 0 at c
    - If b = c, then the function rises linearly from a and μ(c) = 1
    - If a = b = c, then μ(x) = 1 only at x = a = b = c, and 0 elsewhere
    """

    def __init__(self, parameters: list[float]):
        """
        Initialize a triangular membership function with parameters [a, b, c].

        Args:
            parameters: List of three parameters [a, b, c]

        Raises:
            ConfigurationError: If parameters are invalid
        """
        self.a, self.b, self.c = self._check_parameters(parameters, ("a", "b", "c"))

    def _evaluate_scalar(self, x: float) -> float:
        if np.isnan(x):
            return np.nan

        if x < self.a or x > self.c:
            return 0.0
        if x == self.b:
            return 1.0
        if x < self.b:
            # a <= x < b, so b - a > 0
            return (x - self.a) / (self.b - self.a)
        # b < x <= c, so c - b > 0
        return (self.c - x) / (self.c - self.b)

    def _evaluate_array(self, x: np.ndarray) -> np.ndarray:
        result = np.zeros_like(x, dtype=float)

        rising = (x >= self.a) & (x < self.b)
        result[rising] = (x[rising] - self.a) / (self.b - self.a)

        falling = (x > self.b) & (x <= self.c)
        result[falling] = (self.c - x[falling]) / (self.c - self.b)

        result[x == self.b] = 1.0
        result[np.isnan(x)] = np.nan
        return result

    def __repr__(self) -> str:
        return f"TriangularMF(a={self.a}, b={self.b}, c={self.c})"


class TrapezoidalMF(MembershipFunction):
    """
    Trapezoidal membership function implementation.

    A trapezoidal membership function is defined by four parameters [a, b, c, d]:
    - a: start point (membership degree = 0)
    - b: start of plateau (membership degree = 1)
    - c: end of plateau (membership degree = 1)
    - d: end point (membership degree = 0)

    The membership degree μ(x) is calculated as:
    - μ(x) = 0,                 if x < a or x > d
    - μ(x) = (x - a) / (b - a), if a ≤ x < b
    - μ(x) = 1,                 if b ≤ x ≤ c
    - μ(x) = (d - x) / (d - c), if c < x ≤ d

    With a = b or c = d the corresponding edge is a step onto the plateau.
    """

    def __init__(self, parameters: list[float]):
        """
        Initialize a trapezoidal membership function with parameters [a, b, c, d].

        Args:
            parameters: List of four parameters [a, b, c, d]

        Raises:
            ConfigurationError: If parameters are invalid
        """
        self.a, self.b, self.c, self.d = self._check_parameters(
            parameters, ("a", "b", "c", "d")
        )

    def _evaluate_scalar(self, x: float) -> float:
        if np.isnan(x):
            return np.nan

        if x < self.a or x > self.d:
            return 0.0
        if self.b <= x <= self.c:
            return 1.0
        if x < self.b:
            return (x - self.a) / (self.b - self.a)
        return (self.d - x) / (self.d - self.c)

    def _evaluate_array(self, x: np.ndarray) -> np.ndarray:
        result = np.zeros_like(x, dtype=float)

        # Region 1: a <= x < b (rising edge)
        rising = (x >= self.a) & (x < self.b)
        result[rising] = (x[rising] - self.a) / (self.b - self.a)

        # Region 2: b <= x <= c (plateau)
        result[(x >= self.b) & (x <= self.c)] = 1.0

        # Region 3: c < x <= d (falling edge)
        falling = (x > self.c) & (x <= self.d)
        result[falling] = (self.d - x[falling]) / (self.d - self.c)

        result[np.isnan(x)] = np.nan
        return result

    def __repr__(self) -> str:
        return f"TrapezoidalMF(a={self.a}, b={self.b}, c={self.c}, d={self.d})"


class MembershipFunctionFactory:
    """
    Factory class for creating membership function instances by type name.
    """

    _TYPES = {
        "triangular": TriangularMF,
        "trapezoidal": TrapezoidalMF,
    }

    @staticmethod
    def create(mf_type: str, parameters: list[float]) -> MembershipFunction:
        """
        Create a membership function instance based on type and parameters.

        Args:
            mf_type: Type of membership function ("triangular", "trapezoidal")
            parameters: Parameters for the membership function

        Returns:
            MembershipFunction instance

        Raises:
            ConfigurationError: If the membership function type is unknown
        """
        mf_class = MembershipFunctionFactory._TYPES.get(mf_type.lower())
        if mf_class is None:
            logger.error(f"Unknown membership function type: {mf_type}")
            raise ConfigurationError(
                message=f"Unknown membership function type: {mf_type}",
                error_code=ErrorCodes.MF_UNKNOWN_TYPE,
                details={
                    "type": mf_type,
                    "supported_types": MembershipFunctionFactory.get_supported_types(),
                },
            )
        return mf_class(parameters)

    @staticmethod
    def get_supported_types() -> list[str]:
        """
        Get list of supported membership function types.

        Returns:
            List of supported membership function type names
        """
        return list(MembershipFunctionFactory._TYPES.keys())
