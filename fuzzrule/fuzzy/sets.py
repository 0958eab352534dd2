"""
Universal sets, fuzzy sets and variables.

A UniversalSet owns a discretized, strictly increasing domain and the
registry of fuzzy sets defined over it. A FuzzySet is a sparse mapping from
domain value to membership degree, optionally backed by a membership function
that fills in values lazily on lookup.
"""

import math
import threading
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence

import numpy as np

from fuzzrule import get_logger
from fuzzrule.config.settings import get_inference_settings
from fuzzrule.errors import ConfigurationError, ErrorCodes, ProcessingError
from fuzzrule.fuzzy.membership import MembershipFunction

# Set up module-level logger
logger = get_logger(__name__)


class UniversalSet:
    """
    Discretized domain of a fuzzy variable plus the sets defined over it.

    Example:
        ```python
        temperature = UniversalSet.from_range("temperature", 0, 40, 0.5)
        hot = FuzzySet("hot", membership_function=TriangularMF([25, 40, 40]),
                       universe=temperature)
        assert temperature.get_set("hot") is hot
        ```
    """

    def __init__(self, name: str, domain: Sequence[float]):
        """
        Create a universal set from an explicit domain.

        Args:
            name: Name of the universe
            domain: Strictly increasing sequence of finite values

        Raises:
            ConfigurationError: If the domain is empty, not one-dimensional,
                not finite or not strictly increasing
        """
        values = np.asarray(domain, dtype=float)

        if values.ndim != 1 or values.size == 0:
            logger.error(f"Invalid domain for universe '{name}': shape {values.shape}")
            raise ConfigurationError(
                message=f"Domain of universe '{name}' must be a non-empty sequence of numbers",
                error_code=ErrorCodes.SET_INVALID_DOMAIN,
                details={"universe": name, "shape": list(values.shape)},
            )

        if not np.all(np.isfinite(values)):
            logger.error(f"Non-finite values in domain of universe '{name}'")
            raise ConfigurationError(
                message=f"Domain of universe '{name}' must contain only finite values",
                error_code=ErrorCodes.SET_INVALID_DOMAIN,
                details={"universe": name},
            )

        if values.size > 1 and not np.all(np.diff(values) > 0):
            logger.error(f"Domain of universe '{name}' is not strictly increasing")
            raise ConfigurationError(
                message=f"Domain of universe '{name}' must be strictly increasing",
                error_code=ErrorCodes.SET_INVALID_DOMAIN,
                details={"universe": name},
                suggestion="Sort the domain values and remove duplicates",
            )

        values.setflags(write=False)
        self.name = name
        self.domain = values
        self.sets: list["FuzzySet"] = []

        logger.debug(
            f"Initialized universe '{name}' with {values.size} points "
            f"[{values[0]}, {values[-1]}]"
        )

    @classmethod
    def from_range(
        cls,
        name: str,
        begin: float,
        end: float,
        step: float,
        tolerance: Optional[float] = None,
    ) -> "UniversalSet":
        """
        Create a universal set from an arithmetic progression.

        The i-th domain value is ``begin + i * step``. The end point is part of
        the domain when ``(end - begin) / step`` lies within ``tolerance``
        (relative) of an integer, in which case the last value is exactly
        ``end``.

        Args:
            name: Name of the universe
            begin: First domain value
            end: Upper bound of the domain
            step: Positive distance between consecutive values
            tolerance: Relative tolerance for snapping to ``end``; defaults to
                the configured inference domain tolerance

        Returns:
            New UniversalSet

        Raises:
            ConfigurationError: If step is not positive or end < begin
        """
        if tolerance is None:
            tolerance = get_inference_settings().domain_tolerance

        if not (math.isfinite(begin) and math.isfinite(end) and math.isfinite(step)):
            logger.error(f"Non-finite range for universe '{name}'")
            raise ConfigurationError(
                message=f"Range of universe '{name}' must be finite",
                error_code=ErrorCodes.SET_INVALID_DOMAIN,
                details={"begin": begin, "end": end, "step": step},
            )

        if step <= 0:
            logger.error(f"Invalid step for universe '{name}': {step}")
            raise ConfigurationError(
                message=f"Step of universe '{name}' must be greater than 0",
                error_code=ErrorCodes.SET_INVALID_STEP,
                details={"universe": name, "step": step},
            )

        if end < begin:
            logger.error(
                f"Range direction mismatch for universe '{name}': begin={begin}, end={end}"
            )
            raise ConfigurationError(
                message=f"Range of universe '{name}' must satisfy begin ≤ end for a positive step",
                error_code=ErrorCodes.SET_INVALID_DOMAIN,
                details={"universe": name, "begin": begin, "end": end, "step": step},
            )

        span = (end - begin) / step
        nearest = round(span)
        snaps_to_end = abs(span - nearest) <= tolerance * max(1.0, abs(span))
        intervals = int(nearest) if snaps_to_end else int(math.floor(span))

        domain = begin + np.arange(intervals + 1, dtype=float) * step
        if snaps_to_end:
            domain[-1] = end

        return cls(name, domain)

    def register(self, fuzzy_set: "FuzzySet") -> None:
        """Add a fuzzy set to this universe's registry."""
        self.sets.append(fuzzy_set)
        logger.debug(f"Registered set '{fuzzy_set.name}' on universe '{self.name}'")

    def get_set(self, name: str) -> "FuzzySet":
        """
        Look up a registered fuzzy set by name.

        Raises:
            ProcessingError: If no set with that name is registered
        """
        for fuzzy_set in self.sets:
            if fuzzy_set.name == name:
                return fuzzy_set

        raise ProcessingError(
            message=f"Unknown fuzzy set '{name}' in universe '{self.name}'",
            error_code=ErrorCodes.SET_UNKNOWN_SET,
            details={"universe": self.name, "available_sets": self.set_names},
        )

    @property
    def set_names(self) -> list[str]:
        return [fuzzy_set.name for fuzzy_set in self.sets]

    def contains(self, value: float, tolerance: Optional[float] = None) -> bool:
        """Check whether a value lies on the domain grid (within tolerance)."""
        if tolerance is None:
            tolerance = get_inference_settings().domain_tolerance
        return bool(np.any(np.isclose(self.domain, value, rtol=tolerance, atol=0.0)))

    def __iter__(self) -> Iterator[float]:
        return iter(self.domain.tolist())

    def __len__(self) -> int:
        return int(self.domain.size)

    def __repr__(self) -> str:
        return f"UniversalSet(name={self.name!r}, points={len(self)}, sets={self.set_names})"


class FuzzySet:
    """
    Sparse fuzzy set: domain value -> membership degree in [0, 1].

    Two ways to build one:

    - bound to a universe with a membership function: the function is
      evaluated eagerly over every domain point, zero degrees are dropped and
      the set registers itself on the universe;
    - from an explicit ``values`` mapping: used for operator and rule
      results, no function and no registration.

    ``fuzzy_set[x]`` returns 0 for an empty set, the stored degree when ``x``
    is stored, a freshly computed (and cached when positive) degree for
    function-backed sets, and otherwise the degree of the nearest stored
    key. Results returned from operators are never mutated afterwards.
    """

    def __init__(
        self,
        name: str,
        values: Optional[Mapping[float, float]] = None,
        membership_function: Optional[MembershipFunction] = None,
        universe: Optional[UniversalSet] = None,
    ):
        """
        Args:
            name: Name of the set
            values: Explicit element -> membership mapping
            membership_function: Function used for eager and lazy evaluation
            universe: Universe to evaluate over and register on

        Raises:
            ConfigurationError: If a universe is given without a membership
                function, or if any degree lies outside [0, 1]
        """
        self.name = name
        self.membership_function = membership_function
        self._values: dict[float, float] = {}
        self._lock = threading.RLock()
        self._sorted_keys: Optional[np.ndarray] = None
        self._sorted_degrees: Optional[np.ndarray] = None

        if values is not None:
            for element, membership in values.items():
                membership = float(membership)
                if not 0.0 <= membership <= 1.0:
                    logger.error(
                        f"Invalid membership {membership} for element {element} in set '{name}'"
                    )
                    raise ConfigurationError(
                        message=f"Membership degrees of set '{name}' must lie in [0, 1]",
                        error_code=ErrorCodes.SET_INVALID_DEGREE,
                        details={"set": name, "element": element, "membership": membership},
                    )
                self._values[float(element)] = membership

        if universe is not None:
            if membership_function is None:
                raise ConfigurationError(
                    message=f"Set '{name}' needs a membership function to be bound to universe '{universe.name}'",
                    error_code=ErrorCodes.SET_INVALID_DOMAIN,
                    details={"set": name, "universe": universe.name},
                )
            degrees = membership_function.evaluate(universe.domain)
            for element, membership in zip(universe.domain.tolist(), degrees.tolist()):
                if membership > 0:
                    self._values[element] = membership
            universe.register(self)

    def __getitem__(self, element: float) -> float:
        element = float(element)
        if math.isnan(element):
            return math.nan

        with self._lock:
            # No stored entries is the empty set, even with a function attached
            if not self._values:
                return 0.0

            membership = self._values.get(element)
            if membership is not None:
                return membership

            if self.membership_function is not None:
                return self._add_element(element)

            return self._nearest(element)

    def _add_element(self, element: float) -> float:
        membership = float(self.membership_function.evaluate(element))
        if membership > 0:
            self._values[element] = membership
        return membership

    def _nearest(self, element: float) -> float:
        # Only reached for sets without a function, whose values never change
        if self._sorted_keys is None:
            keys = sorted(self._values)
            self._sorted_keys = np.asarray(keys, dtype=float)
            self._sorted_degrees = np.asarray(
                [self._values[k] for k in keys], dtype=float
            )

        index = int(np.searchsorted(self._sorted_keys, element))
        if index == 0:
            return float(self._sorted_degrees[0])
        if index == len(self._sorted_keys):
            return float(self._sorted_degrees[-1])

        below = self._sorted_keys[index - 1]
        above = self._sorted_keys[index]
        # Ties go to the lower key
        if element - below <= above - element:
            return float(self._sorted_degrees[index - 1])
        return float(self._sorted_degrees[index])

    @property
    def values(self) -> dict[float, float]:
        """Copy of the stored element -> membership mapping."""
        with self._lock:
            return dict(self._values)

    def items(self) -> list[tuple[float, float]]:
        """Snapshot of the stored (element, membership) pairs."""
        with self._lock:
            return list(self._values.items())

    def keys(self) -> list[float]:
        with self._lock:
            return list(self._values.keys())

    def support(self) -> list[float]:
        """Sorted elements with positive membership."""
        return sorted(element for element, membership in self.items() if membership > 0)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def to_dict(self) -> dict[str, object]:
        """Plain representation used for JSON output."""
        return {
            "name": self.name,
            "values": {str(element): membership for element, membership in sorted(self.items())},
        }

    def __contains__(self, element: float) -> bool:
        with self._lock:
            return float(element) in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FuzzySet(name={self.name!r}, size={len(self)})"


EMPTY_SET = FuzzySet("Empty set")


@dataclass(frozen=True)
class Variable:
    """A named input slot; its live value is held by the inference context."""

    name: str
    universal_set: UniversalSet
