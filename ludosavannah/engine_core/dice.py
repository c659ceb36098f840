"""
Dice - The single source of randomness in the engine.

Dice are injected into the reducer and the driver, never read from a
global random source, so tests and replays can supply fixed sequences.
"""

from __future__ import annotations
import random
from typing import Iterable, Protocol


DICE_FACES = range(1, 7)


class Dice(Protocol):
    """Anything that can produce a roll in [1, 6]."""

    def roll(self) -> int:
        ...


class RandomDice:
    """Uniform six-sided die with its own RNG."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def roll(self) -> int:
        return self._rng.randint(1, 6)


class ScriptedDice:
    """
    Replays a fixed sequence of values, cycling when exhausted.

    Usage:
        dice = ScriptedDice([6, 3])
        dice.roll()  # 6
        dice.roll()  # 3
        dice.roll()  # 6
    """

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        if not self.values:
            raise ValueError("ScriptedDice needs at least one value")
        bad = [v for v in self.values if v not in DICE_FACES]
        if bad:
            raise ValueError(f"Dice values must be between 1 and 6, got {bad}")
        self._index = 0

    def roll(self) -> int:
        value = self.values[self._index % len(self.values)]
        self._index += 1
        return value
