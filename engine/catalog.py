"""Static catalog of fallacies and paradoxes.

Built once at import and exposed read-only; safe to share across combats.
"""

from types import MappingProxyType

from models.fallacies import Fallacy, FallacyCategory, FallacyCombatEffect, FallacyType
from models.stats import StatName

_ENTRIES = [
    # Classic paradoxes
    Fallacy(
        id="zenos_paradox",
        name="Zeno's Paradox of Motion",
        type=FallacyType.PARADOX,
        category=FallacyCategory.PHILOSOPHICAL,
        description="The famous paradox questioning the possibility of motion itself.",
        question=(
            "Your opponent argues: 'To reach me, you must first travel half the distance. "
            "But to travel half, you must first travel a quarter, and so on infinitely. "
            "Therefore, you can never reach me.' What resolves this paradox?"
        ),
        options=(
            "Motion requires time, not just space",
            "Infinite divisions can still sum to a finite distance",
            "The paradox ignores quantum mechanics",
            "Mathematics cannot describe reality",
        ),
        correct_answer=1,
        explanation=(
            "While there are infinite subdivisions, they form a convergent series "
            "that sums to the finite distance."
        ),
        combat_effect=FallacyCombatEffect(
            damage=8,
            duration=3,
            stat_effects={StatName.MENTAL_DEFENSE: -4, StatName.EVASION: -2},
            special_effect="temporal_confusion",
        ),
    ),
    Fallacy(
        id="ship_of_theseus",
        name="Ship of Theseus",
        type=FallacyType.PARADOX,
        category=FallacyCategory.PHILOSOPHICAL,
        description=(
            "A paradox of identity: when all parts are replaced, is it still the same entity?"
        ),
        question=(
            "Your opponent challenges: 'If I replace every part of your being through this "
            "battle - every thought, every belief - are you still you?' What is the core issue?"
        ),
        options=(
            "Identity is defined by physical continuity",
            "Identity persists through psychological continuity",
            "The question assumes identity must be binary",
            "Identity is an illusion created by memory",
        ),
        correct_answer=2,
        explanation=(
            "The paradox assumes identity is either/or, but identity may be more "
            "complex and gradual."
        ),
        combat_effect=FallacyCombatEffect(
            damage=6,
            duration=4,
            stat_effects={StatName.SOCIAL_DEFENSE: -3, StatName.AILMENT_DEFENSE: -2},
            special_effect="identity_crisis",
        ),
    ),
    # Logical fallacies
    Fallacy(
        id="ad_hominem",
        name="Ad Hominem Attack",
        type=FallacyType.FALLACY,
        category=FallacyCategory.RHETORICAL,
        description="Attacking the person making the argument rather than the argument itself.",
        question=(
            "Your opponent sneers: 'Your combat strategy is worthless because you're nothing "
            "but a naive child from a backwater village.' What logical error is this?"
        ),
        options=(
            "Attacking the person instead of addressing the argument",
            "Appealing to false authority",
            "Creating a false dichotomy",
            "Using circular reasoning",
        ),
        correct_answer=0,
        explanation=(
            "Ad hominem attacks the character of the person rather than addressing "
            "their actual argument or position."
        ),
        combat_effect=FallacyCombatEffect(
            damage=5,
            duration=2,
            stat_effects={StatName.SOCIAL_ATTACK: -2, StatName.ACCURACY: -1},
        ),
    ),
    Fallacy(
        id="straw_man",
        name="Straw Man Fallacy",
        type=FallacyType.FALLACY,
        category=FallacyCategory.RHETORICAL,
        description="Misrepresenting an opponent's argument to make it easier to attack.",
        question=(
            "When you suggest a defensive strategy, your opponent responds: 'So you want to "
            "just hide and never fight back at all?' What fallacy is this?"
        ),
        options=(
            "False dichotomy - only two options presented",
            "Straw man - misrepresenting your actual position",
            "Slippery slope - assuming extreme consequences",
            "Appeal to emotion instead of logic",
        ),
        correct_answer=1,
        explanation=(
            "The opponent has distorted your defensive strategy into complete pacifism, "
            "making it easier to attack."
        ),
        combat_effect=FallacyCombatEffect(
            damage=4,
            duration=3,
            stat_effects={StatName.MENTAL_ATTACK: -3, StatName.ACCURACY: -2},
        ),
    ),
    Fallacy(
        id="false_dichotomy",
        name="False Dichotomy",
        type=FallacyType.FALLACY,
        category=FallacyCategory.LOGICAL,
        description="Presenting only two options when more exist.",
        question=(
            "Your opponent declares: 'Either you surrender completely and accept defeat, or "
            "you are my mortal enemy who must be destroyed!' What's the logical flaw?"
        ),
        options=(
            "It assumes time is linear and unchanging",
            "It ignores the possibility of compromise or alternative solutions",
            "It relies purely on emotional manipulation",
            "It contradicts the principle of logical consistency",
        ),
        correct_answer=1,
        explanation=(
            "False dichotomy artificially limits choices to two extremes when many "
            "other options likely exist."
        ),
        combat_effect=FallacyCombatEffect(
            damage=6,
            duration=2,
            stat_effects={StatName.MENTAL_DEFENSE: -2, StatName.SOCIAL_DEFENSE: -2},
        ),
    ),
    # Advanced paradoxes
    Fallacy(
        id="liar_paradox",
        name="The Liar's Paradox",
        type=FallacyType.PARADOX,
        category=FallacyCategory.LOGICAL,
        description="The self-referential paradox of a statement that asserts its own falsehood.",
        question=(
            "Your opponent states: 'This very statement I am making right now is false.' "
            "If true, it's false. If false, it's true. How do you resolve this?"
        ),
        options=(
            "The statement is neither true nor false",
            "The statement changes truth values rapidly",
            "Self-referential statements cannot have truth values",
            "The paradox proves language is inadequate",
        ),
        correct_answer=2,
        explanation=(
            "Self-referential statements that assert their own truth values create logical "
            "inconsistencies that may be outside normal truth evaluation."
        ),
        combat_effect=FallacyCombatEffect(
            damage=10,
            duration=5,
            stat_effects={
                StatName.MENTAL_ATTACK: -4,
                StatName.MENTAL_DEFENSE: -4,
                StatName.ACCURACY: -3,
            },
            special_effect="logical_recursion",
        ),
    ),
    Fallacy(
        id="achilles_tortoise",
        name="Achilles and the Tortoise",
        type=FallacyType.PARADOX,
        category=FallacyCategory.PHILOSOPHICAL,
        description="Zeno's paradox about the impossibility of overtaking in a race.",
        question=(
            "Your opponent argues: 'You can never catch me in battle. By the time you reach "
            "where I was, I will have moved further, and this continues infinitely.' "
            "What's the resolution?"
        ),
        options=(
            "Speed differences ensure eventual overtaking",
            "The argument ignores acceleration",
            "Infinite steps can occur in finite time",
            "Space-time is quantized, not infinitely divisible",
        ),
        correct_answer=2,
        explanation=(
            "While there are infinite steps, they take progressively less time and sum "
            "to a finite duration."
        ),
        combat_effect=FallacyCombatEffect(
            damage=7,
            duration=3,
            stat_effects={StatName.SPEED: -3, StatName.EVASION: -2},
            special_effect="pursuit_confusion",
        ),
    ),
    # Heart-based (social/emotional) fallacies
    Fallacy(
        id="appeal_to_emotion",
        name="Appeal to Emotion",
        type=FallacyType.FALLACY,
        category=FallacyCategory.RHETORICAL,
        description="Using emotional manipulation instead of logical reasoning.",
        question=(
            "Your opponent pleads: 'Think of all the innocent people who will suffer if you "
            "defeat me! How can you live with that guilt?' What fallacy is this?"
        ),
        options=(
            "Appeal to consequences - assuming specific outcomes",
            "Appeal to emotion - manipulating feelings over facts",
            "False cause - assuming you're responsible for others' actions",
            "Appeal to pity - seeking sympathy to avoid consequences",
        ),
        correct_answer=1,
        explanation=(
            "While consequences matter, this appeal bypasses logical evaluation by "
            "targeting emotions."
        ),
        combat_effect=FallacyCombatEffect(
            damage=5,
            duration=4,
            stat_effects={StatName.SOCIAL_ATTACK: -2, StatName.AILMENT_DEFENSE: -3},
        ),
    ),
    Fallacy(
        id="bandwagon",
        name="Bandwagon Fallacy",
        type=FallacyType.FALLACY,
        category=FallacyCategory.RHETORICAL,
        description="Arguing something is correct because many people believe it.",
        question=(
            "Your opponent claims: 'Everyone in the empire knows that your fighting style is "
            "inferior. Surely all these people can't be wrong!' What's the logical error?"
        ),
        options=(
            "Popular opinion doesn't determine truth or effectiveness",
            "The claim lacks specific evidence about numbers",
            "It assumes the empire's people are combat experts",
            "It ignores the possibility of mass deception",
        ),
        correct_answer=0,
        explanation=(
            "Truth and effectiveness are not determined by popularity - many people "
            "can share incorrect beliefs."
        ),
        combat_effect=FallacyCombatEffect(
            damage=4,
            duration=2,
            stat_effects={StatName.SOCIAL_DEFENSE: -3, StatName.AILMENT_DEFENSE: -1},
        ),
    ),
]

FALLACIES: MappingProxyType[str, Fallacy] = MappingProxyType(
    {entry.id: entry for entry in _ENTRIES}
)
