"""Character progression: experience, level-ups, stat points, aging, equipment."""

from __future__ import annotations

import logging
import math
from uuid import uuid4

from config import (
    EXPERIENCE_BASE,
    EXPERIENCE_GROWTH,
    HEALTH_PER_BODY_POINT,
    LEVEL_HEALTH_BASE,
    LEVEL_MANA_BASE,
    MANA_PER_MIND_POINT,
    SKILL_POINTS_PER_LEVEL,
    STARTING_AGE,
    STARTING_BODY,
    STARTING_HEALTH,
    STARTING_HEART,
    STARTING_MANA,
    STARTING_MIND,
    STAT_POINTS_PER_LEVEL,
)
from engine.errors import InsufficientStatPointsError, LevelRequirementError
from engine.stats import add_modifiers, calculate_detailed_stats, sum_modifiers
from models.characters import Character, StatAllocation
from models.items import Equipment, Item, ItemType
from models.stats import CharacterStats, CombatantStats

logger = logging.getLogger(__name__)

# Portrait -> (body, mind, heart) bonus applied at creation.
# The last three are locked portraits with stronger bonuses.
PORTRAIT_BONUSES: dict[str, tuple[int, int, int]] = {
    "elf": (0, 1, 1),
    "Drake": (2, 0, 0),
    "Arc-mage": (0, 2, 0),
    "Air-lord": (0, 2, 2),
    "Angel": (1, 1, 3),
    "Arch-demon": (3, 2, 1),
}

SET_PIECE_SUFFIX = "_set_piece"
SET_BONUS_SUFFIX = "_set_bonus"
SET_BONUS_MIN_PIECES = 2


def calculate_experience_required(level: int) -> int:
    """Experience needed to advance from ``level - 1`` to ``level``.

    ``calculate_experience_required(2) == 150``; strictly increasing.
    """
    return math.floor(EXPERIENCE_BASE * EXPERIENCE_GROWTH ** (level - 1))


def _refresh_derived(character: Character, **changes) -> Character:
    """Copy a character with changes, recomputing derived stats from scratch.

    The changed character is re-validated, so field constraints still hold.
    """
    updated = Character.model_validate({**character.model_dump(), **changes})
    detailed = calculate_detailed_stats(updated.stats, updated.age)
    return updated.model_copy(update={"detailed_stats": detailed})


def create_character(
    name: str,
    portrait: str,
    starting_age: int = STARTING_AGE,
) -> Character:
    """Create a level 1 character with the starting baseline and portrait bonus.

    Args:
        name: Display name.
        portrait: Portrait key; unknown portraits grant no bonus.
        starting_age: Age in years at creation.

    Returns:
        A fresh Character.
    """
    bonus_body, bonus_mind, bonus_heart = PORTRAIT_BONUSES.get(portrait, (0, 0, 0))
    health = STARTING_HEALTH + bonus_body * HEALTH_PER_BODY_POINT
    mana = STARTING_MANA + bonus_mind * MANA_PER_MIND_POINT

    stats = CharacterStats(
        body=STARTING_BODY + bonus_body,
        mind=STARTING_MIND + bonus_mind,
        heart=STARTING_HEART + bonus_heart,
        health=health,
        max_health=health,
        mana=mana,
        max_mana=mana,
    )
    return Character(
        id=f"char-{uuid4()}",
        name=name,
        portrait=portrait,
        level=1,
        experience=0,
        experience_to_next=calculate_experience_required(2),
        age=starting_age,
        stats=stats,
        detailed_stats=calculate_detailed_stats(stats, starting_age),
        available_stat_points=0,
        skill_points=0,
    )


def level_up(character: Character) -> Character:
    """Advance a character exactly one level, consuming its threshold.

    Experience carries the remainder forward; a level granted without enough
    experience leaves it at zero.

    Grants stat and skill points, raises max health by 5 + body // 2 and max
    mana by 3 + mind // 2 (current pools rise by the same amount), and
    recomputes derived stats.
    """
    stats = character.stats
    health_gain = LEVEL_HEALTH_BASE + stats.body // 2
    mana_gain = LEVEL_MANA_BASE + stats.mind // 2
    new_level = character.level + 1

    new_stats = stats.model_copy(update={
        "health": stats.health + health_gain,
        "max_health": stats.max_health + health_gain,
        "mana": stats.mana + mana_gain,
        "max_mana": stats.max_mana + mana_gain,
    })

    logger.info("%s reached level %d", character.name, new_level)
    return _refresh_derived(
        character,
        level=new_level,
        experience=max(0, character.experience - character.experience_to_next),
        experience_to_next=calculate_experience_required(new_level + 1),
        available_stat_points=character.available_stat_points + STAT_POINTS_PER_LEVEL,
        skill_points=character.skill_points + SKILL_POINTS_PER_LEVEL,
        stats=new_stats,
    )


def add_experience(character: Character, amount: int) -> Character:
    """Award experience, cascading as many level-ups as it pays for.

    Raises:
        ValueError: If the amount is negative.
    """
    if amount < 0:
        raise ValueError(f"Experience amount must be non-negative, got {amount}")

    updated = character.model_copy(update={"experience": character.experience + amount})
    while updated.experience >= updated.experience_to_next:
        updated = level_up(updated)
    return updated


def allocate_stat_points(character: Character, allocation: StatAllocation) -> Character:
    """Spend available stat points on base attributes.

    Each body point also adds 5 max health and each mind point 3 max mana.

    Raises:
        InsufficientStatPointsError: If the allocation costs more points than
            the character has. The character is left unchanged.
    """
    if allocation.total > character.available_stat_points:
        raise InsufficientStatPointsError(allocation.total, character.available_stat_points)

    stats = character.stats
    health_gain = allocation.body * HEALTH_PER_BODY_POINT
    mana_gain = allocation.mind * MANA_PER_MIND_POINT
    new_stats = stats.model_copy(update={
        "body": stats.body + allocation.body,
        "mind": stats.mind + allocation.mind,
        "heart": stats.heart + allocation.heart,
        "health": stats.health + health_gain,
        "max_health": stats.max_health + health_gain,
        "mana": stats.mana + mana_gain,
        "max_mana": stats.max_mana + mana_gain,
    })

    logger.info(
        "%s allocated %d stat points (body +%d, mind +%d, heart +%d)",
        character.name, allocation.total,
        allocation.body, allocation.mind, allocation.heart,
    )
    return _refresh_derived(
        character,
        stats=new_stats,
        available_stat_points=character.available_stat_points - allocation.total,
    )


def age_character(character: Character, years: int = 1) -> Character:
    """Age a character, re-deriving stats under the new age band.

    Raises:
        ValueError: If years is negative.
    """
    if years < 0:
        raise ValueError(f"Characters cannot grow younger, got {years} years")
    return _refresh_derived(character, age=character.age + years)


def apply_equipment_bonuses(character: Character, equipment: Equipment) -> Character:
    """Recompute derived stats from base attributes plus every equipped bonus."""
    bonuses = sum_modifiers(item.stat_bonuses for item in equipment.items())
    base = calculate_detailed_stats(character.stats, character.age)
    return character.model_copy(update={"detailed_stats": add_modifiers(base, bonuses)})


def equip_item(
    character: Character,
    item: Item,
    equipment: Equipment,
) -> tuple[Character, Equipment]:
    """Equip an item into its slot and apply the resulting bonuses.

    Weapon and armor replace whatever was in the slot; accessories append.

    Raises:
        LevelRequirementError: If the character's level is below the item's
            requirement. Neither the character nor the equipment changes.
    """
    if character.level < item.level_requirement:
        raise LevelRequirementError(item.name, item.level_requirement, character.level)

    if item.type == ItemType.WEAPON:
        new_equipment = equipment.model_copy(update={"weapon": item})
    elif item.type == ItemType.ARMOR:
        new_equipment = equipment.model_copy(update={"armor": item})
    else:
        new_equipment = equipment.model_copy(
            update={"accessories": [*equipment.accessories, item]}
        )

    logger.info("%s equipped %s (%s)", character.name, item.name, item.type.value)
    return apply_equipment_bonuses(character, new_equipment), new_equipment


def unequip_item(
    character: Character,
    item_id: str,
    equipment: Equipment,
) -> tuple[Character, Equipment]:
    """Remove an equipped item, reversing exactly its bonuses.

    Raises:
        KeyError: If no equipped item has this id.
    """
    if equipment.weapon is not None and equipment.weapon.id == item_id:
        new_equipment = equipment.model_copy(update={"weapon": None})
    elif equipment.armor is not None and equipment.armor.id == item_id:
        new_equipment = equipment.model_copy(update={"armor": None})
    else:
        # Only the first matching accessory comes off
        index = next(
            (i for i, acc in enumerate(equipment.accessories) if acc.id == item_id),
            None,
        )
        if index is None:
            raise KeyError(f"Item '{item_id}' is not equipped")
        accessories = list(equipment.accessories)
        del accessories[index]
        new_equipment = equipment.model_copy(update={"accessories": accessories})

    logger.info("%s unequipped item %s", character.name, item_id)
    return apply_equipment_bonuses(character, new_equipment), new_equipment


def calculate_set_bonuses(items: list[Item]) -> list[str]:
    """Name the set bonuses earned by a collection of items.

    Any ``<name>_set_piece`` tag found on at least two items yields
    ``<name>_set_bonus``.
    """
    pieces: dict[str, int] = {}
    for item in items:
        for effect in item.special_effects:
            if effect.endswith(SET_PIECE_SUFFIX):
                set_name = effect[: -len(SET_PIECE_SUFFIX)]
                pieces[set_name] = pieces.get(set_name, 0) + 1

    return [
        f"{set_name}{SET_BONUS_SUFFIX}"
        for set_name, count in pieces.items()
        if count >= SET_BONUS_MIN_PIECES
    ]


def build_combatant(character: Character, equipment: Equipment | None = None) -> CombatantStats:
    """Snapshot a character (and optionally its equipment) for one combat."""
    if equipment is not None:
        character = apply_equipment_bonuses(character, equipment)
    stats = character.stats
    return CombatantStats(
        **character.detailed_stats.model_dump(),
        health=stats.health,
        max_health=stats.max_health,
        mana=stats.mana,
        max_mana=stats.max_mana,
    )
