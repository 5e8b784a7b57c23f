"""Randomization helpers for feed composition.

All randomness in the engine goes through these two functions with a
request-local random.Random, so the store only has to return a filtered,
deterministic candidate list and tests can pass a seeded generator.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def new_rng() -> random.Random:
    """A fresh, unseeded generator; one per request."""
    return random.Random()


def sample(items: Sequence[T], k: int, rng: random.Random) -> list[T]:
    """Uniformly pick up to k items without replacement, in random order."""
    k = max(0, min(k, len(items)))
    return rng.sample(list(items), k)


def shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a new list holding items in a uniformly random order."""
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled
