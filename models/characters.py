"""Character models for progression."""

from pydantic import BaseModel, ConfigDict, Field

from models.stats import CharacterStats, DerivedStats


class Character(BaseModel):
    """A player character as seen by the progression engine."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    portrait: str = ""
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    experience_to_next: int             # Threshold for reaching level + 1
    age: int = Field(ge=0)
    stats: CharacterStats
    detailed_stats: DerivedStats        # Kept in sync after every change
    available_stat_points: int = Field(default=0, ge=0)
    skill_points: int = Field(default=0, ge=0)


class StatAllocation(BaseModel):
    """Stat points to spend on each base attribute."""
    model_config = ConfigDict(frozen=True)

    body: int = Field(default=0, ge=0)
    mind: int = Field(default=0, ge=0)
    heart: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.body + self.mind + self.heart
