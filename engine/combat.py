"""Combat orchestration: simultaneous turn resolution and state transitions."""

from __future__ import annotations

import logging
from collections.abc import Callable

from config import AGREEMENT_POINTS_TO_END, DEFAULT_DIFFICULTY
from engine.dice import DiceSource
from engine.fallacies import (
    calculate_fallacy_defense_reduction,
    check_fallacy_answer,
    create_initial_knowledge,
    get_random_fallacy_challenge,
)
from engine.rules import (
    apply_buffs_to_stats,
    attack_stat,
    calculate_advantage,
    calculate_damage,
    calculate_hit,
    calculate_turn_order,
    check_combat_end,
    merge_buffs,
    process_turn_buffs,
    reduce_damage,
    special_attack_effect,
)
from models.actions import BuffDebuff, CombatAction, CombatResult, Domain, Side, Verb, Victor
from models.fallacies import Difficulty, Fallacy, PlayerKnowledge
from models.game_state import CombatState
from models.stats import CombatantStats

logger = logging.getLogger(__name__)


def _opponent(side: Side) -> Side:
    return Side.ENEMY if side == Side.PLAYER else Side.PLAYER


def calculate_combat(
    player_action: CombatAction,
    enemy_action: CombatAction,
    player: CombatantStats,
    enemy: CombatantStats,
    player_buffs: list[BuffDebuff] | None = None,
    enemy_buffs: list[BuffDebuff] | None = None,
    agreement_points: int = 0,
    rng: DiceSource | None = None,
    knowledge: PlayerKnowledge | None = None,
    difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
) -> CombatResult:
    """Resolve one turn in which both sides have already committed actions.

    Both sides defending adds an agreement point and deals no damage.
    Otherwise each attacking side rolls d20 + accuracy + domain attack
    against the other's evasion, in speed order, and rolls damage on a hit.
    A player Defend attaches a fallacy challenge; the caller collects the
    answer and hands it to apply_turn, which reduces the player's incoming
    damage accordingly.

    Args:
        player_action: The player's committed action.
        enemy_action: The enemy's committed action.
        player: Player's base combat stats.
        enemy: Enemy's base combat stats.
        player_buffs: Effects active on the player.
        enemy_buffs: Effects active on the enemy.
        agreement_points: Agreement points accumulated before this turn.
        rng: Dice source for seeded/testing rolls.
        knowledge: Player's fallacy knowledge, for challenge selection.
        difficulty: Challenge difficulty.

    Returns:
        The turn's CombatResult. ``combat_ended`` is provisional while a
        fallacy challenge is pending: the player's own defeat is decided by
        apply_turn once the answer is known.
    """
    effective = {
        Side.PLAYER: apply_buffs_to_stats(player, player_buffs or []),
        Side.ENEMY: apply_buffs_to_stats(enemy, enemy_buffs or []),
    }
    actions = {Side.PLAYER: player_action, Side.ENEMY: enemy_action}

    if player_action.verb == Verb.DEFEND and enemy_action.verb == Verb.DEFEND:
        points = agreement_points + 1
        ended = points >= AGREEMENT_POINTS_TO_END
        logger.info("Both sides defend; agreement points now %d", points)
        return CombatResult(
            agreement_points=points,
            combat_ended=ended,
            victor=Victor.AGREEMENT if ended else None,
        )

    first = calculate_turn_order(effective[Side.PLAYER], effective[Side.ENEMY])
    damage_taken = {Side.PLAYER: 0, Side.ENEMY: 0}
    new_effects: dict[Side, list[BuffDebuff]] = {Side.PLAYER: [], Side.ENEMY: []}

    for side in (first, _opponent(first)):
        action = actions[side]
        if action.verb == Verb.DEFEND:
            continue

        target = _opponent(side)
        target_action = actions[target]
        attacker_stats = effective[side]
        accuracy = attacker_stats.accuracy + attack_stat(attacker_stats, action.domain)

        if not calculate_hit(accuracy, effective[target].evasion, rng=rng):
            logger.info("%s %s with %s misses", side.value, action.verb.value, action.domain.value)
            continue

        advantage = calculate_advantage(action.domain, target_action.domain)
        damage = calculate_damage(
            advantage, action.verb, target_action.verb == Verb.DEFEND, rng=rng,
        )
        damage_taken[target] = damage
        logger.info(
            "%s %s with %s hits for %d (%s)",
            side.value, action.verb.value, action.domain.value, damage, advantage.value,
        )

        if action.verb == Verb.SPECIAL_ATTACK:
            effect = special_attack_effect(action.domain)
            recipient = side if action.domain == Domain.HEART else target
            new_effects[recipient].append(effect)

    challenge: Fallacy | None = None
    if player_action.verb == Verb.DEFEND:
        challenge = get_random_fallacy_challenge(
            knowledge or create_initial_knowledge(), difficulty, rng=rng,
        )

    # Pending challenge: the player's incoming damage is not final yet
    provisional_player_damage = 0 if challenge is not None else damage_taken[Side.PLAYER]
    end = check_combat_end(
        player.health - provisional_player_damage,
        enemy.health - damage_taken[Side.ENEMY],
        agreement_points,
    )

    return CombatResult(
        player_damage=damage_taken[Side.PLAYER],
        enemy_damage=damage_taken[Side.ENEMY],
        player_buffs=new_effects[Side.PLAYER],
        enemy_buffs=new_effects[Side.ENEMY],
        agreement_points=agreement_points,
        fallacy_challenge=challenge,
        combat_ended=end.ended,
        victor=end.victor,
        first_actor=first,
    )


def start_combat(player: CombatantStats, enemy: CombatantStats) -> CombatState:
    """Begin a combat with no effects and no agreement."""
    return CombatState(player=player, enemy=enemy)


def apply_turn(
    state: CombatState,
    result: CombatResult,
    fallacy_correct: bool | None = None,
    knowledge: PlayerKnowledge | None = None,
) -> CombatState:
    """Apply a resolved turn to the combat state.

    Reduces the player's incoming damage when a fallacy challenge was
    answered, applies damage, ticks down the effects already active, attaches
    the turn's new effects and checks for the end of combat.

    Args:
        state: State before the turn.
        result: The turn's resolution from calculate_combat.
        fallacy_correct: Whether the player identified the challenge. None
            means unanswered, which takes full damage.
        knowledge: Player's fallacy knowledge, for the experience and mastery
            bonus on a correct identification.

    Returns:
        The state after the turn.

    Raises:
        ValueError: If the combat has already ended.
    """
    if state.ended:
        raise ValueError("Combat has already ended")

    player_damage = result.player_damage
    if result.fallacy_challenge is not None and fallacy_correct is not None:
        multiplier = calculate_fallacy_defense_reduction(
            result.fallacy_challenge, fallacy_correct, knowledge or PlayerKnowledge(),
        )
        player_damage = reduce_damage(player_damage, multiplier)
        logger.info(
            "Fallacy defense (%s): %d -> %d",
            "correct" if fallacy_correct else "incorrect",
            result.player_damage, player_damage,
        )

    player = state.player.model_copy(
        update={"health": max(0, state.player.health - player_damage)}
    )
    enemy = state.enemy.model_copy(
        update={"health": max(0, state.enemy.health - result.enemy_damage)}
    )
    end = check_combat_end(player.health, enemy.health, result.agreement_points)

    new_state = state.model_copy(update={
        "player": player,
        "enemy": enemy,
        "player_buffs": merge_buffs(process_turn_buffs(state.player_buffs), result.player_buffs),
        "enemy_buffs": merge_buffs(process_turn_buffs(state.enemy_buffs), result.enemy_buffs),
        "agreement_points": result.agreement_points,
        "turn_count": state.turn_count + 1,
        "ended": end.ended,
        "victor": end.victor,
    })
    if end.ended:
        logger.info("Combat ended after %d turns: %s", new_state.turn_count, end.victor.value)
    return new_state


def resolve_turn(
    state: CombatState,
    player_action: CombatAction,
    enemy_action: CombatAction,
    answer: Callable[[Fallacy], int] | None = None,
    knowledge: PlayerKnowledge | None = None,
    rng: DiceSource | None = None,
    difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
) -> tuple[CombatState, CombatResult]:
    """Resolve and apply one full turn.

    Args:
        state: State before the turn.
        player_action: The player's committed action.
        enemy_action: The enemy's committed action.
        answer: Presents a fallacy challenge and returns the chosen option
            index. Without it a challenge goes unanswered.
        knowledge: Player's fallacy knowledge.
        rng: Dice source for seeded/testing rolls.
        difficulty: Challenge difficulty.

    Returns:
        (updated_state, turn_result) tuple.

    Raises:
        ValueError: If the combat has already ended.
    """
    if state.ended:
        raise ValueError("Combat has already ended")

    result = calculate_combat(
        player_action,
        enemy_action,
        state.player,
        state.enemy,
        state.player_buffs,
        state.enemy_buffs,
        state.agreement_points,
        rng=rng,
        knowledge=knowledge,
        difficulty=difficulty,
    )

    fallacy_correct = None
    if result.fallacy_challenge is not None and answer is not None:
        fallacy_correct = check_fallacy_answer(result.fallacy_challenge, answer(result.fallacy_challenge))

    return apply_turn(state, result, fallacy_correct, knowledge), result
