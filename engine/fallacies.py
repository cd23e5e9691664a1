"""Fallacy/paradox knowledge: learning, mastery, challenges and defense."""

from __future__ import annotations

import logging

from config import COMPLEX_FALLACY_LEVEL, DEFAULT_DIFFICULTY, MASTERY_THRESHOLD
from engine.catalog import FALLACIES
from engine.dice import DiceSource, choose
from engine.errors import UnknownFallacyError
from models.actions import BuffDebuff, Domain, EffectType
from models.fallacies import (
    Difficulty,
    Fallacy,
    FallacyCategory,
    FallacyType,
    PlayerKnowledge,
)

logger = logging.getLogger(__name__)

STARTING_FALLACIES = ("ad_hominem", "straw_man", "zenos_paradox")
COMPLEX_FALLACIES = frozenset({"liar_paradox", "achilles_tortoise"})

# Multiplier on incoming damage after a correct identification
BASE_DEFENSE_MULTIPLIER = 0.5
EXPERIENCE_REDUCTION_PER_POINT = 0.04
MAX_EXPERIENCE_REDUCTION = 0.2
MASTERY_REDUCTION = 0.15
MIN_DEFENSE_MULTIPLIER = 0.1
MAX_DEFENSE_MULTIPLIER = 1.0


def get_fallacy(fallacy_id: str) -> Fallacy:
    """Look up a catalog entry.

    Raises:
        UnknownFallacyError: If the id is not in the catalog.
    """
    try:
        return FALLACIES[fallacy_id]
    except KeyError:
        raise UnknownFallacyError(fallacy_id) from None


def get_starting_fallacies() -> list[str]:
    """Fallacy ids every new character starts out knowing."""
    return list(STARTING_FALLACIES)


def create_initial_knowledge() -> PlayerKnowledge:
    """Knowledge for a new character: starting fallacies, no experience."""
    starting = get_starting_fallacies()
    return PlayerKnowledge(
        known_fallacies=starting,
        mastered_fallacies=[],
        fallacy_experience={fallacy_id: 0 for fallacy_id in starting},
    )


def learn_fallacy(knowledge: PlayerKnowledge, fallacy_id: str) -> PlayerKnowledge:
    """Add a fallacy to the known set with zero experience (no-op if known)."""
    get_fallacy(fallacy_id)
    if knowledge.is_known(fallacy_id):
        return knowledge

    logger.info("Learned fallacy %s", fallacy_id)
    return knowledge.model_copy(update={
        "known_fallacies": [*knowledge.known_fallacies, fallacy_id],
        "fallacy_experience": {**knowledge.fallacy_experience, fallacy_id: 0},
    })


def gain_fallacy_experience(knowledge: PlayerKnowledge, fallacy_id: str) -> PlayerKnowledge:
    """Record one successful identification, mastering the fallacy at 5.

    Identifying a fallacy the character has not learned yet also learns it,
    so mastered fallacies are always known.
    """
    knowledge = learn_fallacy(knowledge, fallacy_id)
    new_exp = knowledge.experience_with(fallacy_id) + 1
    update: dict = {
        "fallacy_experience": {**knowledge.fallacy_experience, fallacy_id: new_exp},
    }

    if new_exp >= MASTERY_THRESHOLD and not knowledge.is_mastered(fallacy_id):
        logger.info("Mastered fallacy %s", fallacy_id)
        update["mastered_fallacies"] = [*knowledge.mastered_fallacies, fallacy_id]

    return knowledge.model_copy(update=update)


def get_random_fallacy_challenge(
    knowledge: PlayerKnowledge,
    difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
    rng: DiceSource | None = None,
) -> Fallacy:
    """Draw a challenge uniformly from the catalog.

    Easy draws only fallacies, hard only paradoxes, medium anything. The
    knowledge argument is accepted for callers that track it but does not
    narrow the draw: any catalog entry can be thrown at the player.

    Raises:
        ValueError: If the difficulty is not one of easy/medium/hard.
    """
    difficulty = Difficulty(difficulty)
    candidates = list(FALLACIES.values())

    if difficulty == Difficulty.EASY:
        candidates = [f for f in candidates if f.type == FallacyType.FALLACY]
    elif difficulty == Difficulty.HARD:
        candidates = [f for f in candidates if f.type == FallacyType.PARADOX]

    return choose(candidates, rng=rng)


def check_fallacy_answer(fallacy: Fallacy, answer_index: int) -> bool:
    """Whether a chosen option identifies the fallacy correctly.

    Raises:
        ValueError: If the index does not name one of the options.
    """
    if not 0 <= answer_index < len(fallacy.options):
        raise ValueError(
            f"Answer index {answer_index} is out of range for {len(fallacy.options)} options"
        )
    return answer_index == fallacy.correct_answer


def calculate_fallacy_defense_reduction(
    fallacy: Fallacy,
    was_correct: bool,
    knowledge: PlayerKnowledge,
) -> float:
    """Multiplier applied to incoming damage after a defend challenge.

    Wrong answers give 1.0. Correct answers start at 0.5, improve with prior
    experience of this fallacy (up to 0.2) and mastery (0.15), and never go
    below 0.1.
    """
    if not was_correct:
        return MAX_DEFENSE_MULTIPLIER

    multiplier = BASE_DEFENSE_MULTIPLIER
    multiplier -= min(
        MAX_EXPERIENCE_REDUCTION,
        knowledge.experience_with(fallacy.id) * EXPERIENCE_REDUCTION_PER_POINT,
    )
    if knowledge.is_mastered(fallacy.id):
        multiplier -= MASTERY_REDUCTION

    return min(MAX_DEFENSE_MULTIPLIER, max(MIN_DEFENSE_MULTIPLIER, multiplier))


def get_fallacy_for_special_attack(
    domain: Domain,
    knowledge: PlayerKnowledge,
    rng: DiceSource | None = None,
) -> Fallacy | None:
    """Pick a known fallacy to wield, biased by the attacking domain.

    Mind prefers paradoxes and logical fallacies, Heart prefers rhetorical
    ones, Body has no preference. Falls back to any known fallacy when the
    preferred subset is empty.

    Returns:
        The chosen fallacy, or None if the character knows none.
    """
    known = [FALLACIES[fid] for fid in knowledge.known_fallacies if fid in FALLACIES]
    if not known:
        return None

    if domain == Domain.MIND:
        preferred = [
            f for f in known
            if f.type == FallacyType.PARADOX or f.category == FallacyCategory.LOGICAL
        ]
    elif domain == Domain.HEART:
        preferred = [f for f in known if f.category == FallacyCategory.RHETORICAL]
    else:
        preferred = known

    return choose(preferred or known, rng=rng)


def can_learn_fallacy(fallacy_id: str, level: int, knowledge: PlayerKnowledge) -> bool:
    """Whether a character may learn a fallacy now."""
    if fallacy_id not in FALLACIES:
        return False
    if knowledge.is_known(fallacy_id):
        return False
    if fallacy_id in COMPLEX_FALLACIES and level < COMPLEX_FALLACY_LEVEL:
        return False
    return True


def fallacy_debuff(fallacy: Fallacy) -> BuffDebuff:
    """Express a fallacy's combat effect as a debuff on its target."""
    effect = fallacy.combat_effect
    return BuffDebuff(
        id=f"fallacy_{fallacy.id}",
        type=EffectType.DEBUFF,
        name=fallacy.name,
        effect=effect.special_effect or fallacy.description,
        duration=effect.duration,
        stat_modifiers=dict(effect.stat_effects),
    )
