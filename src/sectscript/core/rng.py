"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random exposing the draws the dice engine needs."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def roll(self, faces: int, *, minimum: int = 1) -> int:
        """Roll one die with the given face count, never landing below ``minimum``."""
        if faces < minimum:
            raise ValueError(f"Cannot roll a d{faces} with minimum {minimum}.")
        return self._random.randint(minimum, faces)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def index(self, count: int) -> int:
        """Return a uniform index in ``range(count)``."""
        if count <= 0:
            raise ValueError("Cannot pick an index from an empty range.")
        return self._random.randrange(count)
