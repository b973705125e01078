"""Random objective selection from the n-gram pools."""

import random
from functools import lru_cache
from itertools import accumulate
from typing import Optional, Sequence, Tuple


class ObjectiveGenerator:
    """Picks letter sequences from the bigram, trigram and quadgram pools.

    A pool is chosen with probability proportional to its weight, then an
    entry is drawn uniformly from that pool.
    """

    def __init__(
        self,
        bigrams: Sequence[str],
        trigrams: Sequence[str],
        quadgrams: Sequence[str],
        rng: Optional[random.Random] = None
    ):
        self._pools = (tuple(bigrams), tuple(trigrams), tuple(quadgrams))
        for pool in self._pools:
            if not pool:
                raise ValueError("Objective pools must not be empty")
        self._rng = rng or random.Random()

    @property
    def pools(self) -> Tuple[Tuple[str, ...], ...]:
        return self._pools

    def pick(self, weights: Sequence[int]) -> str:
        """Pick a random objective using the given pool weights."""
        cum_weights = cumulative_weights(tuple(weights))
        pool = self._rng.choices(self._pools, cum_weights=cum_weights)[0]
        return self._rng.choice(pool)


def validate_weights(weights: Sequence[int]) -> None:
    """Raise ValueError unless weights are three non-negative ints, not all zero."""
    if len(weights) != 3:
        raise ValueError(f"Expected 3 weights, got {len(weights)}")
    if any(w < 0 for w in weights):
        raise ValueError("Weights must not be negative")
    if sum(weights) == 0:
        raise ValueError("At least one weight must be positive")


@lru_cache(maxsize=64)
def cumulative_weights(weights: Tuple[int, ...]) -> Tuple[int, ...]:
    """Validated cumulative weights, shared by every session using them."""
    validate_weights(weights)
    return tuple(accumulate(weights))
