"""Tests for combat orchestration: turn resolution, defense, termination."""

import random

import pytest
from pydantic import ValidationError

from engine.combat import apply_turn, calculate_combat, resolve_turn, start_combat
from engine.creatures import creature_combatant, generate_creature
from engine.fallacies import create_initial_knowledge
from engine.progression import build_combatant, create_character
from engine.rules import special_attack_effect
from models.actions import (
    BuffDebuff,
    CombatAction,
    CombatResult,
    Domain,
    EffectType,
    Side,
    Verb,
    Victor,
)
from models.game_state import CombatState
from models.stats import StatName
from helpers import ScriptedDice, make_combatant


def _action(domain: Domain, verb: Verb = Verb.ATTACK) -> CombatAction:
    return CombatAction(domain=domain, verb=verb)


def _make_buff(buff_id: str, duration: int) -> BuffDebuff:
    return BuffDebuff(id=buff_id, type=EffectType.BUFF, name=buff_id, duration=duration)


DEFEND = _action(Domain.MIND, Verb.DEFEND)


class TestMutualDefend:
    """Tests for the agreement path."""

    def test_no_damage_and_one_point(self):
        dice = ScriptedDice([])
        result = calculate_combat(
            DEFEND, DEFEND, make_combatant(), make_combatant(), rng=dice,
        )
        assert result.player_damage == 0
        assert result.enemy_damage == 0
        assert result.agreement_points == 1
        assert result.fallacy_challenge is None
        assert not result.combat_ended
        assert dice.calls == []

    def test_third_point_ends_combat(self):
        result = calculate_combat(
            DEFEND, DEFEND, make_combatant(), make_combatant(), agreement_points=2,
        )
        assert result.combat_ended
        assert result.victor == Victor.AGREEMENT

    def test_three_turns_reach_agreement(self):
        state = start_combat(make_combatant(), make_combatant())
        for _ in range(3):
            state, _ = resolve_turn(state, DEFEND, DEFEND, rng=ScriptedDice([]))
        assert state.ended
        assert state.victor == Victor.AGREEMENT
        assert state.agreement_points == 3
        assert state.turn_count == 3
        assert state.player.health == 30
        assert state.enemy.health == 30

    def test_no_turns_after_end(self):
        state = start_combat(make_combatant(), make_combatant())
        for _ in range(3):
            state, _ = resolve_turn(state, DEFEND, DEFEND)
        with pytest.raises(ValueError):
            resolve_turn(state, DEFEND, DEFEND)


class TestExchange:
    """Tests for both sides attacking."""

    def test_advantage_exchange(self):
        """Body attacks Mind: player rolls a d8, enemy a d4."""
        dice = ScriptedDice([5, 7, 5, 3])
        result = calculate_combat(
            _action(Domain.BODY), _action(Domain.MIND),
            make_combatant(), make_combatant(), rng=dice,
        )
        assert result.enemy_damage == 7
        assert result.player_damage == 3
        assert result.first_actor == Side.PLAYER
        assert dice.calls == [(1, 20), (1, 8), (1, 20), (1, 4)]
        assert not result.combat_ended

    def test_faster_enemy_rolls_first(self):
        dice = ScriptedDice([5, 2, 5, 6])
        result = calculate_combat(
            _action(Domain.HEART), _action(Domain.BODY),
            make_combatant(), make_combatant(speed=12), rng=dice,
        )
        assert result.first_actor == Side.ENEMY
        assert dice.calls == [(1, 20), (1, 4), (1, 20), (1, 8)]
        assert result.player_damage == 2
        assert result.enemy_damage == 6

    def test_speed_buff_changes_order(self):
        dice = ScriptedDice([5, 1, 5, 1])
        haste = BuffDebuff(
            id="haste", type=EffectType.BUFF, name="Haste", duration=2,
            stat_modifiers={StatName.SPEED: 1},
        )
        result = calculate_combat(
            _action(Domain.BODY), _action(Domain.BODY),
            make_combatant(), make_combatant(), enemy_buffs=[haste], rng=dice,
        )
        assert result.first_actor == Side.ENEMY

    def test_miss(self):
        """A roll that only ties the defender's evasion misses."""
        dice = ScriptedDice([20, 5, 4])
        result = calculate_combat(
            _action(Domain.BODY), _action(Domain.BODY),
            make_combatant(), make_combatant(evasion=40), rng=dice,
        )
        assert result.enemy_damage == 0
        assert result.player_damage == 4

    def test_enemy_defends(self):
        """A defending enemy cuts the player to a d4 and gets no challenge."""
        dice = ScriptedDice([10, 4])
        result = calculate_combat(
            _action(Domain.BODY), _action(Domain.HEART, Verb.DEFEND),
            make_combatant(), make_combatant(), rng=dice,
        )
        assert dice.calls == [(1, 20), (1, 4)]
        assert result.enemy_damage == 4
        assert result.player_damage == 0
        assert result.fallacy_challenge is None

    def test_debuff_causes_miss(self):
        """Intimidation's accuracy penalty turns a hit into a miss."""
        player = make_combatant(accuracy=5, physical_attack=5)
        enemy_action = _action(Domain.BODY, Verb.DEFEND)

        clean = calculate_combat(
            _action(Domain.BODY), enemy_action, player, make_combatant(),
            rng=ScriptedDice([1, 2]),
        )
        assert clean.enemy_damage == 2

        intimidated = calculate_combat(
            _action(Domain.BODY), enemy_action, player, make_combatant(),
            player_buffs=[special_attack_effect(Domain.BODY)],
            rng=ScriptedDice([1]),
        )
        assert intimidated.enemy_damage == 0

    def test_provisional_end(self):
        dice = ScriptedDice([10, 5, 10, 1])
        result = calculate_combat(
            _action(Domain.BODY), _action(Domain.BODY),
            make_combatant(), make_combatant(health=2), rng=dice,
        )
        assert result.combat_ended
        assert result.victor == Victor.PLAYER


class TestSpecialAttacks:
    """Tests for special attack effects."""

    def test_body_debuffs_opponent(self):
        result = calculate_combat(
            _action(Domain.BODY, Verb.SPECIAL_ATTACK), _action(Domain.BODY, Verb.DEFEND),
            make_combatant(), make_combatant(), rng=ScriptedDice([10, 2]),
        )
        assert result.enemy_damage == 3
        assert [b.id for b in result.enemy_buffs] == ["intimidated"]
        assert result.player_buffs == []

    def test_mind_debuffs_opponent(self):
        result = calculate_combat(
            _action(Domain.MIND, Verb.SPECIAL_ATTACK), _action(Domain.MIND, Verb.DEFEND),
            make_combatant(), make_combatant(), rng=ScriptedDice([10, 2]),
        )
        assert [b.id for b in result.enemy_buffs] == ["poison_mind"]

    def test_heart_buffs_attacker(self):
        result = calculate_combat(
            _action(Domain.HEART, Verb.SPECIAL_ATTACK), _action(Domain.HEART, Verb.DEFEND),
            make_combatant(), make_combatant(), rng=ScriptedDice([10, 2]),
        )
        assert [b.id for b in result.player_buffs] == ["empathic_boost"]
        assert result.enemy_buffs == []

    def test_enemy_heart_special_buffs_enemy(self):
        dice = ScriptedDice([10, 1, 0])
        result = calculate_combat(
            _action(Domain.HEART, Verb.DEFEND), _action(Domain.HEART, Verb.SPECIAL_ATTACK),
            make_combatant(), make_combatant(), rng=dice,
        )
        assert [b.id for b in result.enemy_buffs] == ["empathic_boost"]
        assert result.player_damage == 2

    def test_missed_special_has_no_effect(self):
        result = calculate_combat(
            _action(Domain.BODY, Verb.SPECIAL_ATTACK), _action(Domain.BODY, Verb.DEFEND),
            make_combatant(), make_combatant(evasion=40), rng=ScriptedDice([1]),
        )
        assert result.enemy_buffs == []
        assert result.enemy_damage == 0


class TestFallacyDefense:
    """Tests for the player's defend challenge."""

    def _defend_result(self, **kwargs) -> CombatResult:
        return calculate_combat(
            DEFEND, _action(Domain.BODY),
            make_combatant(), make_combatant(), **kwargs,
        )

    def test_defend_issues_challenge(self):
        dice = ScriptedDice([15, 4, 0])
        result = self._defend_result(rng=dice)
        assert dice.calls == [(1, 20), (1, 4), (0, 8)]
        assert result.player_damage == 4
        assert result.enemy_damage == 0
        assert result.fallacy_challenge.id == "zenos_paradox"
        assert len(result.fallacy_challenge.options) == 4

    def test_difficulty_filters_challenge(self):
        dice = ScriptedDice([15, 4, 0])
        result = self._defend_result(rng=dice, difficulty="easy")
        assert dice.calls[-1] == (0, 4)
        assert result.fallacy_challenge.id == "ad_hominem"

    def test_correct_answer_halves_damage(self):
        state = start_combat(make_combatant(), make_combatant())
        result = self._defend_result(rng=ScriptedDice([15, 4, 0]))
        state = apply_turn(state, result, True, create_initial_knowledge())
        assert state.player.health == 28

    def test_wrong_answer_takes_full_damage(self):
        state = start_combat(make_combatant(), make_combatant())
        result = self._defend_result(rng=ScriptedDice([15, 4, 0]))
        state = apply_turn(state, result, False, create_initial_knowledge())
        assert state.player.health == 26

    def test_unanswered_takes_full_damage(self):
        state = start_combat(make_combatant(), make_combatant())
        result = self._defend_result(rng=ScriptedDice([15, 4, 0]))
        assert apply_turn(state, result).player.health == 26

    def test_resolve_turn_with_answer(self):
        state = start_combat(make_combatant(), make_combatant())
        state, result = resolve_turn(
            state, DEFEND, _action(Domain.BODY),
            answer=lambda fallacy: fallacy.correct_answer,
            knowledge=create_initial_knowledge(),
            rng=ScriptedDice([15, 4, 0]),
        )
        assert result.fallacy_challenge is not None
        assert state.player.health == 28

    def test_resolve_turn_wrong_answer(self):
        state = start_combat(make_combatant(), make_combatant())
        state, _ = resolve_turn(
            state, DEFEND, _action(Domain.BODY),
            answer=lambda fallacy: (fallacy.correct_answer + 1) % 4,
            rng=ScriptedDice([15, 4, 0]),
        )
        assert state.player.health == 26


class TestApplyTurn:
    """Tests for apply_turn()."""

    def test_damage_and_buff_processing(self):
        state = CombatState(
            player=make_combatant(),
            enemy=make_combatant(),
            player_buffs=[_make_buff("old", 1)],
            enemy_buffs=[_make_buff("lingering", 2)],
        )
        result = CombatResult(
            player_damage=5,
            enemy_damage=7,
            enemy_buffs=[special_attack_effect(Domain.BODY)],
        )
        state = apply_turn(state, result)
        assert state.player.health == 25
        assert state.enemy.health == 23
        assert state.player_buffs == []
        assert [(b.id, b.duration) for b in state.enemy_buffs] == [
            ("lingering", 1),
            ("intimidated", 3),
        ]
        assert state.turn_count == 1
        assert not state.ended

    def test_player_defeat(self):
        state = start_combat(make_combatant(health=3), make_combatant())
        state = apply_turn(state, CombatResult(player_damage=4))
        assert state.player.health == 0
        assert state.ended
        assert state.victor == Victor.ENEMY

    def test_enemy_defeat(self):
        state = start_combat(make_combatant(), make_combatant(health=5))
        state = apply_turn(state, CombatResult(enemy_damage=6))
        assert state.victor == Victor.PLAYER

    def test_input_state_untouched(self):
        state = start_combat(make_combatant(), make_combatant())
        apply_turn(state, CombatResult(player_damage=4))
        assert state.player.health == 30
        assert state.turn_count == 0

    def test_ended_state_rejected(self):
        state = start_combat(make_combatant(health=3), make_combatant())
        state = apply_turn(state, CombatResult(player_damage=4))
        with pytest.raises(ValueError):
            apply_turn(state, CombatResult())


class TestActions:
    """Tests for action validation."""

    def test_unknown_domain(self):
        with pytest.raises(ValidationError):
            CombatAction(domain="Spirit", verb="Attack")

    def test_unknown_verb(self):
        with pytest.raises(ValidationError):
            CombatAction(domain="Body", verb="Flee")

    def test_string_values(self):
        action = CombatAction(domain="Heart", verb="SpecialAttack")
        assert action.domain == Domain.HEART
        assert action.verb == Verb.SPECIAL_ATTACK


class TestFullCombat:
    """End-to-end fights between a created character and a generated creature."""

    def _fight(self, seed: int) -> CombatState:
        rng = random.Random(seed)
        hero = create_character("Hero", "Drake")
        creature = generate_creature(hero.stats, rng=rng)
        state = start_combat(build_combatant(hero), creature_combatant(creature, hero.age))
        for _ in range(200):
            if state.ended:
                break
            state, _ = resolve_turn(
                state, _action(Domain.BODY), _action(creature.preferred_domain), rng=rng,
            )
        return state

    def test_fight_ends(self):
        state = self._fight(1)
        assert state.ended
        assert state.victor in (Victor.PLAYER, Victor.ENEMY)

    def test_seeded_replay(self):
        assert self._fight(7) == self._fight(7)
