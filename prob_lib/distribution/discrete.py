"""
Finite discrete probability distributions.

A Categorical distribution is a canonical table of (outcome, probability)
pairs: probabilities sum to one and no two pairs share an equal outcome.
Every combinator builds a fresh table and merges equal outcomes straight
away, so chained binds never carry duplicate entries into the next step.
"""

from typing import (Any, Callable, Dict, Iterable, Iterator, List, Mapping,
                    Optional, Tuple, TypeVar, Union)

import numpy as np

from prob_lib.distribution.base import Distribution
from prob_lib.distribution.exceptions import (EmptyDistribution,
                                              ImpossibleCondition,
                                              UnnormalizedDistribution)
from prob_lib.distribution.probability import TOLERANCE, Probability
from prob_lib.logging import log_combinator

# Type variables for distribution outcomes
T = TypeVar('T')
U = TypeVar('U')

Pairs = Iterable[Tuple[T, Union[Probability, float]]]


def _scan(outcomes: Iterable[Any], outcome: Any) -> Optional[int]:
    """Return the position of the first outcome equal to outcome, if any."""
    return next((j for j, o in enumerate(outcomes) if o == outcome), None)


def _regroup(pairs: Pairs) -> Tuple[List[Tuple[Any, float]], int]:
    """
    Merge pairs with equal outcomes by summing their mass.

    Hashable outcomes are merged through a dict index; unhashable ones fall
    back to a linear scan, so outcomes only need to support ==. Once an
    unhashable outcome has been seen, a hashable one that misses the index is
    scanned for too, since it may still equal it (e.g. a set and a frozenset).
    The order in which outcomes first appear is preserved.

    Args:
        pairs: Iterable of (outcome, probability) pairs

    Returns:
        Tuple of (merged pairs, number of raw pairs consumed)
    """
    outcomes: List[Any] = []
    masses: List[float] = []
    index: Dict[Any, int] = {}
    seen_unhashable = False
    raw = 0

    for outcome, p in pairs:
        raw += 1
        p = float(p)
        try:
            i = index.get(outcome)
            hashable = True
        except TypeError:
            i = None
            hashable = False
            seen_unhashable = True
        if i is None and seen_unhashable:
            i = _scan(outcomes, outcome)

        if i is None:
            if hashable:
                index[outcome] = len(outcomes)
            outcomes.append(outcome)
            masses.append(p)
        else:
            masses[i] += p

    return list(zip(outcomes, masses)), raw


class Categorical(Distribution[T]):
    """
    Distribution over a finite set of outcomes with explicit probabilities.

    Instances are immutable: map, and_then and given return new
    distributions and never touch the receiver.
    """

    def __init__(
        self,
        pairs: Union[Pairs, Mapping[T, Union[Probability, float]]],
        normalize: bool = False
    ):
        """
        Initialize a distribution from outcome probabilities.

        Args:
            pairs: Iterable of (outcome, probability) pairs, or a mapping from
                outcome to probability. Equal outcomes are merged.
            normalize: Rescale the probabilities so that they sum to one,
                instead of requiring that they already do

        Raises:
            EmptyDistribution: If no pairs are given
            UnnormalizedDistribution: If the probabilities do not sum to one
                and normalize is False
            ImpossibleCondition: If normalize is True and the total mass is zero
            InvalidProbability: If a merged probability lies outside [0, 1]
        """
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        merged, _ = _regroup(pairs)

        if not merged:
            raise EmptyDistribution("A distribution needs at least one outcome")

        total = sum(p for _, p in merged)
        if normalize:
            if total <= 0.0:
                raise ImpossibleCondition("Cannot normalize a distribution with zero total mass")
            merged = [(o, p / total) for o, p in merged]
        elif not np.isclose(total, 1.0, rtol=0.0, atol=TOLERANCE):
            raise UnnormalizedDistribution(f"Probabilities sum to {total}, not 1")

        self._set_table(merged)

    @classmethod
    def _combine(cls, pairs: Pairs, combinator: str) -> 'Categorical':
        """Build a canonical distribution from pairs produced by a combinator."""
        merged, raw = _regroup(pairs)
        dist = cls.__new__(cls)
        dist._set_table(merged)
        log_combinator(combinator, raw_pairs=raw, outcomes=len(merged))
        return dist

    def _set_table(self, merged: List[Tuple[Any, float]]) -> None:
        self._pairs: Tuple[Tuple[Any, Probability], ...] = tuple(
            (o, Probability(p)) for o, p in merged
        )
        self._index: Dict[Any, int] = {}
        self._has_unhashable = False
        for i, (o, _) in enumerate(self._pairs):
            try:
                self._index[o] = i
            except TypeError:
                self._has_unhashable = True

    def map(self, f: Callable[[T], U]) -> 'Categorical[U]':
        """
        Apply f to every outcome, merging outcomes that f makes equal.

        Args:
            f: Function from outcomes of this distribution to new outcomes

        Returns:
            Distribution over f(X)
        """
        return Categorical._combine(((f(o), p) for o, p in self._pairs), 'map')

    def and_then(self, f: Callable[[T], 'Categorical[U]']) -> 'Categorical[U]':
        """
        Sequentially compose this distribution with a dependent one.

        Each outcome o with probability p selects the distribution f(o); every
        (o2, q) in it contributes p * q to o2 in the result. Equal outcomes are
        merged before returning.

        Args:
            f: Function from an outcome to the distribution that follows it

        Returns:
            Distribution over the outcomes of the second experiment
        """
        return Categorical._combine(
            ((o2, p.value * q.value) for o, p in self._pairs for o2, q in f(o)),
            'and_then'
        )

    def flatten(self) -> 'Categorical':
        """
        Collapse a distribution over distributions into a single distribution.

        Returns:
            The distribution of the second experiment, the first having
            chosen which one is conducted
        """
        return self.and_then(lambda d: d)

    def given(self, predicate: Callable[[T], bool]) -> 'Categorical[T]':
        """
        Condition this distribution on an event.

        Args:
            predicate: Function returning True for outcomes in the event

        Returns:
            Distribution restricted to the event and rescaled to sum to one

        Raises:
            ImpossibleCondition: If the event has zero probability
        """
        kept = [(o, p.value) for o, p in self._pairs if predicate(o)]
        total = sum(p for _, p in kept)
        if total <= 0.0:
            raise ImpossibleCondition("Cannot condition on an event with zero probability")
        return Categorical._combine(((o, p / total) for o, p in kept), 'given')

    def pmf(self, outcome: T) -> Probability:
        """
        Return the probability mass of exactly this outcome.

        Args:
            outcome: The outcome to look up

        Returns:
            Probability of the outcome, Probability.ZERO if absent
        """
        try:
            i = self._index.get(outcome)
        except TypeError:
            i = None
        if i is None and self._has_unhashable:
            i = _scan((o for o, _ in self._pairs), outcome)
        if i is None:
            return Probability.ZERO
        return self._pairs[i][1]

    def expectation(self, f: Optional[Callable[[T], float]] = None) -> float:
        """
        Return the expectation of f(X), or of X itself when f is omitted.

        Outcomes (or their images under f) must be convertible to float.
        Terms are accumulated left to right in table order.

        Args:
            f: Optional numeric projection of the outcomes

        Returns:
            Sum of value * probability over all outcomes
        """
        total = 0.0
        for o, p in self._pairs:
            x = o if f is None else f(o)
            total += float(x) * p.value
        return total

    def outcomes(self) -> List[T]:
        """Return the outcomes in table order."""
        return [o for o, _ in self._pairs]

    def items(self) -> List[Tuple[T, Probability]]:
        """Return the (outcome, probability) pairs in table order."""
        return list(self._pairs)

    def is_close(self, other: 'Categorical', tol: float = TOLERANCE) -> bool:
        """
        Compare with another distribution using an absolute tolerance.

        Outcomes missing from one side count as zero mass there.

        Args:
            other: Distribution to compare with
            tol: Absolute tolerance per outcome

        Returns:
            True if every outcome has the same probability within tol
        """
        return (all(p.is_close(other.pmf(o), tol) for o, p in self._pairs) and
                all(q.is_close(self.pmf(o), tol) for o, q in other._pairs))

    def __iter__(self) -> Iterator[Tuple[T, Probability]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, outcome) -> bool:
        return self.pmf(outcome) > 0.0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Categorical):
            return NotImplemented
        return (len(self) == len(other) and
                all(other.pmf(o) == p for o, p in self._pairs))

    def __hash__(self) -> int:
        # Raises TypeError for unhashable outcomes, like any container of them
        return hash(frozenset(self._pairs))

    def __repr__(self) -> str:
        """
        Return a string representation of the distribution.

        Returns:
            String representation
        """
        entries = [f"{o!r}: {p.value:g}" for o, p in self._pairs]
        if len(entries) > 5:
            entries = entries[:3] + ["...", entries[-1]]
        return f"Categorical({{{', '.join(entries)}}})"


class Constant(Categorical[T]):
    """
    A distribution with a single outcome that has probability 1.

    This is the point mass used as the identity of and_then: binding it to f
    gives f(value), and binding any distribution to Constant gives it back.
    """

    def __init__(self, value: T):
        """
        Initialize a point-mass distribution.

        Args:
            value: The outcome that always occurs
        """
        self._value = value
        self._set_table([(value, 1.0)])

    @property
    def value(self) -> T:
        """The outcome that always occurs."""
        return self._value

    def __repr__(self) -> str:
        return f"Constant({self._value!r})"


class Choose(Categorical[T]):
    """
    Uniform distribution over a finite sequence of options.

    Each position gets probability 1/n; repeated options are merged, so an
    option listed twice is twice as likely.
    """

    def __init__(self, options: Iterable[T]):
        """
        Initialize a uniform choice distribution.

        Args:
            options: Collection of items to choose from with equal probability

        Raises:
            EmptyDistribution: If there are no options
        """
        options = tuple(options)

        if not options:
            raise EmptyDistribution("Options list cannot be empty")

        p = 1.0 / len(options)
        merged, _ = _regroup((o, p) for o in options)
        self._set_table(merged)

        # Only what repr shows is kept of the unmerged options
        if len(options) <= 5:
            self._options_str = repr(list(options))
        else:
            self._options_str = f"[{', '.join(repr(o) for o in options[:3])}, ..., {options[-1]!r}]"

    def __repr__(self) -> str:
        """
        Return a string representation of the distribution.

        Returns:
            String representation
        """
        return f"Choose({self._options_str})"


def always(value: T) -> Constant[T]:
    """
    Return the distribution where value always occurs.

    Args:
        value: The certain outcome

    Returns:
        Point-mass distribution on value
    """
    return Constant(value)


def uniform(outcomes: Iterable[T]) -> Choose[T]:
    """
    Return the uniform distribution over a finite collection of outcomes.

    Args:
        outcomes: Non-empty collection of outcomes; duplicates are merged

    Returns:
        Distribution giving each listed position probability 1/n

    Raises:
        EmptyDistribution: If outcomes is empty
    """
    return Choose(outcomes)
