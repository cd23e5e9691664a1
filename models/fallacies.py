"""Fallacy/paradox catalog entries and per-character knowledge."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.stats import StatModifiers

OPTIONS_PER_CHALLENGE = 4


class FallacyType(str, Enum):
    FALLACY = "fallacy"
    PARADOX = "paradox"


class FallacyCategory(str, Enum):
    LOGICAL = "logical"
    RHETORICAL = "rhetorical"
    PHILOSOPHICAL = "philosophical"


class Difficulty(str, Enum):
    """Challenge difficulty: easy draws fallacies, hard draws paradoxes."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class FallacyCombatEffect(BaseModel):
    """What a fallacy does when wielded as a special attack."""
    model_config = ConfigDict(frozen=True)

    damage: int
    duration: int = Field(gt=0)
    stat_effects: StatModifiers = {}
    special_effect: str | None = None   # e.g. "temporal_confusion"


class Fallacy(BaseModel):
    """A static catalog entry with its multiple-choice challenge."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: FallacyType
    category: FallacyCategory
    description: str
    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str
    combat_effect: FallacyCombatEffect

    @model_validator(mode="after")
    def _valid_challenge(self) -> "Fallacy":
        if len(self.options) != OPTIONS_PER_CHALLENGE:
            raise ValueError(
                f"Fallacy '{self.id}' needs exactly {OPTIONS_PER_CHALLENGE} options, "
                f"got {len(self.options)}"
            )
        if not 0 <= self.correct_answer < OPTIONS_PER_CHALLENGE:
            raise ValueError(
                f"Fallacy '{self.id}' correct_answer {self.correct_answer} is out of range"
            )
        return self


class PlayerKnowledge(BaseModel):
    """Which fallacies a character knows, has mastered, and how well."""
    model_config = ConfigDict(frozen=True)

    known_fallacies: list[str] = []
    mastered_fallacies: list[str] = []
    fallacy_experience: dict[str, int] = {}     # id -> successful identifications

    @field_validator("known_fallacies", "mastered_fallacies")
    @classmethod
    def _dedupe(cls, ids: list[str]) -> list[str]:
        return list(dict.fromkeys(ids))

    @model_validator(mode="after")
    def _mastered_are_known(self) -> "PlayerKnowledge":
        unknown = set(self.mastered_fallacies) - set(self.known_fallacies)
        if unknown:
            raise ValueError(f"Mastered fallacies must be known: {sorted(unknown)}")
        return self

    def experience_with(self, fallacy_id: str) -> int:
        return self.fallacy_experience.get(fallacy_id, 0)

    def is_known(self, fallacy_id: str) -> bool:
        return fallacy_id in self.known_fallacies

    def is_mastered(self, fallacy_id: str) -> bool:
        return fallacy_id in self.mastered_fallacies
