"""
Exceptions raised by the distribution module.

Every failure is raised at the point of the offending call. None of them are
transient, so none are worth retrying.
"""

__all__ = [
    'ProbabilityError',
    'EmptyDistribution',
    'ImpossibleCondition',
    'InvalidProbability',
    'UnnormalizedDistribution'
]


class ProbabilityError(ValueError):
    """Base exception for distribution and probability errors."""
    pass


class EmptyDistribution(ProbabilityError):
    """Raised when a distribution would have no outcomes at all."""
    pass


class ImpossibleCondition(ProbabilityError):
    """Raised when conditioning on an event that has zero probability."""
    pass


class InvalidProbability(ProbabilityError):
    """Raised when a probability falls outside [0, 1]."""
    pass


class UnnormalizedDistribution(ProbabilityError):
    """Raised when explicit outcome probabilities do not sum to one."""
    pass
