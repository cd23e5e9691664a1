"""Item and equipment models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.stats import StatModifiers


class ItemType(str, Enum):
    """Equipment slot an item occupies."""
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class Item(BaseModel):
    """A piece of equipment and the derived-stat bonuses it grants."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ItemType
    rarity: Rarity = Rarity.COMMON
    level_requirement: int = Field(default=1, ge=1)
    stat_bonuses: StatModifiers = {}
    special_effects: list[str] = []     # e.g. ["ember_set_piece"]


class Equipment(BaseModel):
    """What a character currently has equipped."""
    model_config = ConfigDict(frozen=True)

    weapon: Item | None = None
    armor: Item | None = None
    accessories: list[Item] = []

    def items(self) -> list[Item]:
        """Every equipped item, weapon and armor first."""
        slots = [self.weapon, self.armor, *self.accessories]
        return [item for item in slots if item is not None]
