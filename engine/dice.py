"""Dice rolling utilities for the Labyrinth rules engine."""

import logging
import random
import re
from collections.abc import Sequence
from typing import Protocol, TypeVar

from pydantic import BaseModel

from config import RULES_SEED

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiceSource(Protocol):
    """Anything that can produce an integer in a closed range.

    ``random.Random`` satisfies this, as does any scripted roller in tests.
    """

    def randint(self, a: int, b: int) -> int: ...


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def make_rng(seed: int | str | None = None) -> random.Random:
    """Build a Random instance, seeded from RULES_SEED when no seed is given."""
    if seed is None:
        seed = RULES_SEED
    return random.Random(seed)


def roll(notation: str, rng: DiceSource | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+3', '1d20', '1d4'.

    Args:
        notation: Dice notation string (e.g. "2d6+3").
        rng: Optional dice source for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0

    rolls = [rng.randint(1, die_size) for _ in range(num_dice)]
    total = sum(rolls) + modifier
    logger.debug("Rolled %s: %s (total %d)", notation, rolls, total)

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_die(sides: int, rng: DiceSource | None = None) -> int:
    """Roll a single die with the given number of sides."""
    return roll(f"1d{sides}", rng=rng).total


def roll_d20(rng: DiceSource | None = None) -> int:
    """Roll a single d20."""
    return roll_die(20, rng=rng)


def choose(options: Sequence[T], rng: DiceSource | None = None) -> T:
    """Pick one element uniformly at random.

    Raises:
        ValueError: If there is nothing to choose from.
    """
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    rng = rng or random.Random()
    return options[rng.randint(0, len(options) - 1)]
