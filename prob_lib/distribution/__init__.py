"""
Distribution module for the probability library.

This module provides finite discrete probability distributions together with
the combinators used to compose them: map, and_then and given.
"""

from prob_lib.distribution.base import Distribution
from prob_lib.distribution.probability import Probability, TOLERANCE
from prob_lib.distribution.discrete import (Categorical, Choose, Constant,
                                            always, uniform)
from prob_lib.distribution.exceptions import (ProbabilityError,
                                              EmptyDistribution,
                                              ImpossibleCondition,
                                              InvalidProbability,
                                              UnnormalizedDistribution)

__all__ = [
    'Distribution',
    'Probability',
    'TOLERANCE',
    'Categorical',
    'Choose',
    'Constant',
    'always',
    'uniform',
    'ProbabilityError',
    'EmptyDistribution',
    'ImpossibleCondition',
    'InvalidProbability',
    'UnnormalizedDistribution'
]
