"""Opponent generation and simple enemy action choice."""

from __future__ import annotations

import random

from pydantic import BaseModel, ConfigDict

from engine.dice import DiceSource, choose
from engine.stats import calculate_detailed_stats
from models.actions import CombatAction, Domain, Verb
from models.stats import CharacterStats, CombatantStats

CREATURE_NAMES = (
    "Abyss Worm", "Arachne", "Banshee", "Basilisk", "Behemoth", "Bone Knight",
    "Cerberus", "Chimera", "Cyclops", "Dark Elf", "Doppelganger", "Drake",
    "Dullahan", "Fenrir", "Fire Giant", "Gargoyle", "Griffon", "Hydra",
    "Lich", "Manticore", "Minotaur", "Sphinx", "Troll", "Valkyrie", "Wyvern",
)

MIN_ATTRIBUTE = 1
MIN_HP = 10
HP_BASE = 20
HP_PER_BODY = 5
CREATURE_MANA = 10


class Creature(BaseModel):
    """A generated opponent."""
    model_config = ConfigDict(frozen=True)

    name: str
    stats: CharacterStats
    preferred_domain: Domain


def generate_creature(base: CharacterStats, rng: DiceSource | None = None) -> Creature:
    """Generate an opponent a little weaker than the given attributes.

    Each attribute is one lower (never below 1) and max HP is
    ``max(10, (body - 1) * 5 + 20)`` against the source body score.
    """
    rng = rng or random.Random()
    max_hp = max(MIN_HP, (base.body - 1) * HP_PER_BODY + HP_BASE)
    stats = CharacterStats(
        body=max(MIN_ATTRIBUTE, base.body - 1),
        mind=max(MIN_ATTRIBUTE, base.mind - 1),
        heart=max(MIN_ATTRIBUTE, base.heart - 1),
        health=max_hp,
        max_health=max_hp,
        mana=CREATURE_MANA,
        max_mana=CREATURE_MANA,
    )
    return Creature(
        name=choose(CREATURE_NAMES, rng=rng),
        stats=stats,
        preferred_domain=choose(list(Domain), rng=rng),
    )


def creature_combatant(creature: Creature, age: int) -> CombatantStats:
    """Combat snapshot for a creature, derived as if it were a character."""
    derived = calculate_detailed_stats(creature.stats, age)
    return CombatantStats(
        **derived.model_dump(),
        health=creature.stats.health,
        max_health=creature.stats.max_health,
        mana=creature.stats.mana,
        max_mana=creature.stats.max_mana,
    )


def choose_enemy_action(creature: Creature, rng: DiceSource | None = None) -> CombatAction:
    """The creature always fights in its preferred domain; the verb is random."""
    return CombatAction(domain=creature.preferred_domain, verb=choose(list(Verb), rng=rng))
