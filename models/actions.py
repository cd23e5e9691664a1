"""Combat action and per-turn result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.fallacies import Fallacy
from models.stats import StatModifiers


class Domain(str, Enum):
    """The rock-paper-scissors combat axis."""
    BODY = "Body"
    MIND = "Mind"
    HEART = "Heart"


class Verb(str, Enum):
    """What a side does with its chosen domain this turn."""
    ATTACK = "Attack"
    SPECIAL_ATTACK = "SpecialAttack"
    DEFEND = "Defend"               # Triggers a fallacy challenge


class Advantage(str, Enum):
    ADVANTAGE = "advantage"
    NEUTRAL = "neutral"
    DISADVANTAGE = "disadvantage"


class Side(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


class Victor(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"
    AGREEMENT = "agreement"         # Peaceful end after repeated mutual defends


class EffectType(str, Enum):
    BUFF = "buff"
    DEBUFF = "debuff"


class CombatAction(BaseModel):
    """One side's committed choice for a turn."""
    model_config = ConfigDict(frozen=True)

    domain: Domain
    verb: Verb


class BuffDebuff(BaseModel):
    """A timed stat modifier riding on one side of a combat."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: EffectType
    name: str
    effect: str = ""                # Human-readable description
    duration: int = Field(gt=0)     # Turns remaining
    stat_modifiers: StatModifiers = {}


class CombatResult(BaseModel):
    """Outcome of resolving both sides' actions for one turn.

    Damage values are deltas for the caller to apply; ``player_buffs`` and
    ``enemy_buffs`` are the effects newly attached to each side this turn.
    """
    model_config = ConfigDict(frozen=True)

    player_damage: int = 0              # Damage the player takes
    enemy_damage: int = 0               # Damage the enemy takes
    player_buffs: list[BuffDebuff] = []
    enemy_buffs: list[BuffDebuff] = []
    agreement_points: int = 0
    fallacy_challenge: Fallacy | None = None
    combat_ended: bool = False
    victor: Victor | None = None
    first_actor: Side | None = None     # None on a mutual defend


class CombatEnd(BaseModel):
    """Whether a combat is over and who won."""
    model_config = ConfigDict(frozen=True)

    ended: bool
    victor: Victor | None = None
