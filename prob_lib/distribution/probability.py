"""
Probability values.

This module provides a light float wrapper that is guaranteed to lie in the
closed interval [0, 1]. It is the probability type carried by every
distribution and returned by point-mass queries.
"""

import functools
from dataclasses import dataclass
from typing import Any, ClassVar, Union

import numpy as np

from prob_lib.distribution.exceptions import InvalidProbability

# Absolute tolerance used for normalization checks and clamping round-off
TOLERANCE = 1e-9

Number = Union[float, int, np.floating, np.integer]


def _as_float(other: Any) -> float:
    """Return the float behind a Probability or a plain number."""
    if isinstance(other, Probability):
        return other.value
    return float(other)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Probability:
    """
    A probability, i.e. a float constrained to [0, 1].

    Values that miss the interval by no more than TOLERANCE are clamped onto
    the nearest bound, which absorbs round-off from summing fractions such as
    thirds. Anything further out (or NaN) raises InvalidProbability.
    """
    value: float

    ZERO: ClassVar['Probability']
    ONE: ClassVar['Probability']

    def __post_init__(self):
        p = float(self.value)
        if np.isnan(p):
            raise InvalidProbability("Probability cannot be NaN")
        if p < 0.0:
            if p < -TOLERANCE:
                raise InvalidProbability(f"Probability {p} is below 0")
            p = 0.0
        elif p > 1.0:
            if p > 1.0 + TOLERANCE:
                raise InvalidProbability(f"Probability {p} is above 1")
            p = 1.0
        object.__setattr__(self, 'value', p)

    def is_close(self, other: Union['Probability', Number], tol: float = TOLERANCE) -> bool:
        """
        Compare with another probability using an absolute tolerance.

        Args:
            other: Probability or plain number to compare with
            tol: Absolute tolerance

        Returns:
            True if the two values differ by at most tol
        """
        return bool(np.isclose(self.value, _as_float(other), rtol=0.0, atol=tol))

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other) -> bool:
        if isinstance(other, (Probability, int, float, np.number)):
            return self.value == _as_float(other)
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, (Probability, int, float, np.number)):
            return self.value < _as_float(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __add__(self, other) -> 'Probability':
        return Probability(self.value + _as_float(other))

    __radd__ = __add__

    def __sub__(self, other) -> 'Probability':
        return Probability(self.value - _as_float(other))

    def __rsub__(self, other) -> 'Probability':
        return Probability(_as_float(other) - self.value)

    def __mul__(self, other) -> 'Probability':
        return Probability(self.value * _as_float(other))

    __rmul__ = __mul__

    def __truediv__(self, other) -> 'Probability':
        return Probability(self.value / _as_float(other))

    def __repr__(self) -> str:
        return f"Probability({self.value})"


Probability.ZERO = Probability(0.0)
Probability.ONE = Probability(1.0)
