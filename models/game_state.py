"""Combat state carried between turns."""

from pydantic import BaseModel, ConfigDict

from models.actions import BuffDebuff, Victor
from models.stats import CombatantStats


class CombatState(BaseModel):
    """The full state of one combat between the player and an enemy."""
    model_config = ConfigDict(frozen=True)

    player: CombatantStats
    enemy: CombatantStats
    player_buffs: list[BuffDebuff] = []
    enemy_buffs: list[BuffDebuff] = []
    agreement_points: int = 0
    turn_count: int = 0
    ended: bool = False
    victor: Victor | None = None
