"""Stat derivation: base attributes and age to a combat stat block."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import NamedTuple, TypeVar

from pydantic import BaseModel

from models.stats import CharacterStats, DerivedStats, StatModifiers

StatBlock = TypeVar("StatBlock", bound=BaseModel)


class AgeMultiplier(NamedTuple):
    """Scaling applied to each attribute family at a given age."""
    body: float
    mind: float
    heart: float


# (oldest age in band, multipliers); anything older uses ELDER_MULTIPLIER
AGE_BANDS: tuple[tuple[int, AgeMultiplier], ...] = (
    (16, AgeMultiplier(body=1.1, mind=0.8, heart=0.7)),   # Youth
    (25, AgeMultiplier(body=1.0, mind=1.0, heart=1.0)),   # Young adult
    (40, AgeMultiplier(body=0.9, mind=1.2, heart=1.1)),   # Adult
    (60, AgeMultiplier(body=0.8, mind=1.3, heart=1.2)),   # Middle age
)
ELDER_MULTIPLIER = AgeMultiplier(body=0.6, mind=1.4, heart=1.3)


def age_multiplier(age: int) -> AgeMultiplier:
    """Look up the family multipliers for an age in years.

    Youth favours the body family; maturity favours mind and heart.
    """
    for max_age, multiplier in AGE_BANDS:
        if age <= max_age:
            return multiplier
    return ELDER_MULTIPLIER


def calculate_detailed_stats(stats: CharacterStats, age: int) -> DerivedStats:
    """Derive the full combat stat block from base attributes and age.

    Each stat is a linear combination of one or two base attributes plus a
    constant, scaled by the multiplier of its primary attribute's family and
    floored. Pure and deterministic; recompute in full whenever base
    attributes or age change.

    Args:
        stats: The base attributes (health/mana are ignored).
        age: Age in years.

    Returns:
        The derived stat block.
    """
    mult = age_multiplier(age)
    body, mind, heart = stats.body, stats.mind, stats.heart

    return DerivedStats(
        physical_attack=math.floor((body * 1.5 + 5) * mult.body),
        physical_defense=math.floor((body * 1.2 + 3) * mult.body),
        accuracy=math.floor((body * 0.8 + mind * 0.4 + 8) * mult.body),
        speed=math.floor((body * 0.6 + mind * 0.4 + 8) * mult.body),
        mental_attack=math.floor((mind * 1.5 + 5) * mult.mind),
        mental_defense=math.floor((mind * 1.2 + 3) * mult.mind),
        evasion=math.floor((mind * 0.8 + body * 0.2 + 5) * mult.mind),
        perception=math.floor((mind * 1.0 + heart * 0.3 + 6) * mult.mind),
        social_attack=math.floor((heart * 1.5 + 5) * mult.heart),
        social_defense=math.floor((heart * 1.2 + 3) * mult.heart),
        ailment_attack=math.floor((heart * 0.8 + mind * 0.4 + 4) * mult.heart),
        ailment_defense=math.floor((heart * 1.0 + mind * 0.2 + 4) * mult.heart),
    )


def sum_modifiers(modifier_maps: Iterable[StatModifiers]) -> StatModifiers:
    """Fold several sparse modifier maps into one, dropping zero totals."""
    totals: StatModifiers = {}
    for modifiers in modifier_maps:
        for stat, delta in modifiers.items():
            totals[stat] = totals.get(stat, 0) + delta
    return {stat: delta for stat, delta in totals.items() if delta}


def add_modifiers(
    block: StatBlock,
    modifiers: StatModifiers,
    minimum: int | None = None,
) -> StatBlock:
    """Return a copy of a stat block with sparse deltas added.

    Args:
        block: Any model carrying the derived stat fields.
        modifiers: Deltas keyed by stat name.
        minimum: If given, every modified stat is clamped to at least this.

    Returns:
        A new block; the input is left untouched.
    """
    update: dict[str, int] = {}
    for stat, delta in modifiers.items():
        value = getattr(block, stat.value) + delta
        if minimum is not None:
            value = max(minimum, value)
        update[stat.value] = value
    return block.model_copy(update=update)
