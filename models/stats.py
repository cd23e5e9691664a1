"""Base attribute and derived stat models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StatName(str, Enum):
    """Names of the derived, combat-facing stats."""
    PHYSICAL_ATTACK = "physical_attack"
    PHYSICAL_DEFENSE = "physical_defense"
    ACCURACY = "accuracy"
    SPEED = "speed"
    MENTAL_ATTACK = "mental_attack"
    MENTAL_DEFENSE = "mental_defense"
    EVASION = "evasion"
    PERCEPTION = "perception"
    SOCIAL_ATTACK = "social_attack"
    SOCIAL_DEFENSE = "social_defense"
    AILMENT_ATTACK = "ailment_attack"
    AILMENT_DEFENSE = "ailment_defense"


# Sparse signed deltas over derived stats; unknown keys fail validation.
StatModifiers = dict[StatName, int]


class CharacterStats(BaseModel):
    """The three base attributes plus health and mana pools."""
    model_config = ConfigDict(frozen=True)

    body: int = Field(ge=0)
    mind: int = Field(ge=0)
    heart: int = Field(ge=0)
    health: int = Field(ge=0)
    max_health: int = Field(ge=0)
    mana: int = Field(ge=0)
    max_mana: int = Field(ge=0)

    @model_validator(mode="after")
    def _current_within_max(self) -> "CharacterStats":
        if self.health > self.max_health:
            raise ValueError("health cannot exceed max_health")
        if self.mana > self.max_mana:
            raise ValueError("mana cannot exceed max_mana")
        return self


class DerivedStats(BaseModel):
    """Combat stat block derived from base attributes and age."""
    model_config = ConfigDict(frozen=True)

    # Body family
    physical_attack: int
    physical_defense: int
    accuracy: int
    speed: int
    # Mind family
    mental_attack: int
    mental_defense: int
    evasion: int
    perception: int
    # Heart family
    social_attack: int
    social_defense: int
    ailment_attack: int
    ailment_defense: int


class CombatantStats(DerivedStats):
    """Per-side snapshot used for the length of one combat."""
    health: int
    max_health: int
    mana: int
    max_mana: int
