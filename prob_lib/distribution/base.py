"""
Base class for finite probability distributions that can be queried.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from prob_lib.distribution.probability import Probability

# Type variable for distribution outcomes
T = TypeVar('T')

class Distribution(ABC, Generic[T]):
    """
    Base class for probability distributions that can be queried.

    This abstract class defines the interface for all probability distributions
    in the library: point-mass lookups and expectations of random variables.
    """

    @abstractmethod
    def pmf(self, outcome: T) -> Probability:
        """
        Return the probability mass of exactly this outcome.

        Args:
            outcome: The outcome to look up

        Returns:
            Probability of the outcome, zero if it cannot occur
        """
        pass

    @abstractmethod
    def expectation(self, f: Optional[Callable[[T], float]] = None) -> float:
        """
        Return the expectation of f(X) where X is the random variable.

        Args:
            f: Function to apply to each outcome; the outcome itself if omitted

        Returns:
            Expected value of f(X)
        """
        pass
