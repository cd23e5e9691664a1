"""Combat rules: advantage triangle, hit and damage rolls, buffs, termination."""

from __future__ import annotations

import logging
import math

from config import AGREEMENT_POINTS_TO_END
from engine.dice import DiceSource, roll_d20, roll_die
from engine.stats import add_modifiers, sum_modifiers
from models.actions import (
    Advantage,
    BuffDebuff,
    CombatAction,
    CombatEnd,
    Domain,
    EffectType,
    Side,
    Verb,
    Victor,
)
from models.stats import CombatantStats, StatName

logger = logging.getLogger(__name__)

# Each domain beats the one it maps to
BEATS: dict[Domain, Domain] = {
    Domain.BODY: Domain.MIND,
    Domain.MIND: Domain.HEART,
    Domain.HEART: Domain.BODY,
}

ATTACK_STATS: dict[Domain, StatName] = {
    Domain.BODY: StatName.PHYSICAL_ATTACK,
    Domain.MIND: StatName.MENTAL_ATTACK,
    Domain.HEART: StatName.SOCIAL_ATTACK,
}

DEFENDED_DIE = 4
DISADVANTAGE_DIE = 4
NEUTRAL_DIE = 6
ADVANTAGE_DIE = 8
SPECIAL_ATTACK_BONUS = 1
MIN_DAMAGE = 1
MIN_BUFFED_STAT = 1
FIXED_FALLACY_DEFENSE = 0.25


def calculate_advantage(attacker: Domain, defender: Domain) -> Advantage:
    """Compare two domains under Body > Mind > Heart > Body."""
    if attacker == defender:
        return Advantage.NEUTRAL
    if BEATS[attacker] == defender:
        return Advantage.ADVANTAGE
    return Advantage.DISADVANTAGE


def attack_stat(stats: CombatantStats, domain: Domain) -> int:
    """The attack stat a domain draws on."""
    return getattr(stats, ATTACK_STATS[domain].value)


def apply_buffs_to_stats(stats: CombatantStats, buffs: list[BuffDebuff]) -> CombatantStats:
    """Effective stats: base plus every active modifier, each at least 1."""
    modifiers = sum_modifiers(buff.stat_modifiers for buff in buffs)
    return add_modifiers(stats, modifiers, minimum=MIN_BUFFED_STAT)


def calculate_hit(accuracy: int, evasion: int, rng: DiceSource | None = None) -> bool:
    """Roll d20 + accuracy against evasion; ties go to the defender."""
    attack_roll = roll_d20(rng=rng)
    hit = attack_roll + accuracy > evasion
    logger.debug(
        "Hit roll %d + %d vs evasion %d: %s",
        attack_roll, accuracy, evasion, "hit" if hit else "miss",
    )
    return hit


def damage_die(advantage: Advantage, opponent_defending: bool) -> int:
    """Sides of the damage die for an attack.

    A defending opponent and a disadvantaged attacker both fall to the d4.
    """
    if opponent_defending:
        return DEFENDED_DIE
    if advantage == Advantage.ADVANTAGE:
        return ADVANTAGE_DIE
    if advantage == Advantage.DISADVANTAGE:
        return DISADVANTAGE_DIE
    return NEUTRAL_DIE


def calculate_damage(
    advantage: Advantage,
    verb: Verb,
    opponent_defending: bool,
    rng: DiceSource | None = None,
) -> int:
    """Roll damage for a landed attack; special attacks add 1, minimum 1."""
    damage = roll_die(damage_die(advantage, opponent_defending), rng=rng)
    if verb == Verb.SPECIAL_ATTACK:
        damage += SPECIAL_ATTACK_BONUS
    return max(MIN_DAMAGE, damage)


def special_attack_effect(domain: Domain) -> BuffDebuff:
    """The effect a landed special attack produces.

    Body and Mind effects are debuffs for the opponent; the Heart effect is
    a buff for the attacker.
    """
    if domain == Domain.BODY:
        return BuffDebuff(
            id="intimidated",
            type=EffectType.DEBUFF,
            name="Intimidated",
            effect="Reduced accuracy from physical intimidation",
            duration=3,
            stat_modifiers={StatName.ACCURACY: -2},
        )
    if domain == Domain.MIND:
        return BuffDebuff(
            id="poison_mind",
            type=EffectType.DEBUFF,
            name="Poisoned Mind",
            effect="Mental confusion reduces mental defense",
            duration=4,
            stat_modifiers={StatName.MENTAL_DEFENSE: -3, StatName.MENTAL_ATTACK: -1},
        )
    return BuffDebuff(
        id="empathic_boost",
        type=EffectType.BUFF,
        name="Empathic Insight",
        effect="Increased social effectiveness",
        duration=2,
        stat_modifiers={StatName.SOCIAL_ATTACK: 3, StatName.SOCIAL_DEFENSE: 1},
    )


def apply_fallacy_defense(incoming_damage: int, fallacy_correct: bool) -> int:
    """Flat defense: a correct identification cuts damage to a quarter."""
    if fallacy_correct:
        return math.floor(incoming_damage * FIXED_FALLACY_DEFENSE)
    return incoming_damage


def reduce_damage(incoming_damage: int, multiplier: float) -> int:
    """Scale incoming damage by a defense multiplier.

    Damage that was dealt at all stays at least 1.
    """
    if incoming_damage <= 0:
        return 0
    return max(MIN_DAMAGE, math.floor(incoming_damage * multiplier))


def process_turn_buffs(buffs: list[BuffDebuff]) -> list[BuffDebuff]:
    """Tick every effect down one turn and drop the expired ones."""
    remaining = []
    for buff in buffs:
        duration = buff.duration - 1
        if duration > 0:
            remaining.append(buff.model_copy(update={"duration": duration}))
        else:
            logger.debug("Effect %s expired", buff.id)
    return remaining


def merge_buffs(active: list[BuffDebuff], incoming: list[BuffDebuff]) -> list[BuffDebuff]:
    """Attach new effects; one with the same id as an active one refreshes it."""
    incoming_ids = {buff.id for buff in incoming}
    return [buff for buff in active if buff.id not in incoming_ids] + list(incoming)


def calculate_turn_order(player: CombatantStats, enemy: CombatantStats) -> Side:
    """Faster side acts first; the player wins ties."""
    return Side.PLAYER if player.speed >= enemy.speed else Side.ENEMY


def check_combat_end(player_health: int, enemy_health: int, agreement_points: int) -> CombatEnd:
    """Decide whether combat is over.

    Agreement is checked first, then the player's defeat, then the enemy's.
    """
    if agreement_points >= AGREEMENT_POINTS_TO_END:
        return CombatEnd(ended=True, victor=Victor.AGREEMENT)
    if player_health <= 0:
        return CombatEnd(ended=True, victor=Victor.ENEMY)
    if enemy_health <= 0:
        return CombatEnd(ended=True, victor=Victor.PLAYER)
    return CombatEnd(ended=False)


def calculate_base_damage(
    stats: CombatantStats,
    action: CombatAction,
    rng: DiceSource | None = None,
) -> int:
    """Neutral damage roll plus a small bonus of attack stat // 10."""
    damage = calculate_damage(Advantage.NEUTRAL, action.verb, False, rng=rng)
    return damage + attack_stat(stats, action.domain) // 10
