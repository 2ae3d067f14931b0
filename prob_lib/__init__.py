"""
Probability Library.

This library provides finite discrete probability distributions that are
built and queried through composable operations: construct with uniform and
always, transform with map and and_then, condition with given, and query with
pmf and expectation.
"""

__version__ = '0.1.0'

# Import submodules to make them available through the package
from prob_lib import distribution
from prob_lib import logging
from prob_lib.distribution import (Categorical, Distribution, Probability,
                                   always, uniform)

__all__ = [
    'distribution',
    'logging',
    'Categorical',
    'Distribution',
    'Probability',
    'always',
    'uniform'
]
