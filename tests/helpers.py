"""Shared test doubles and builders."""

from models.stats import CombatantStats, StatName


class ScriptedDice:
    """Dice source that returns preset values and records the ranges asked for."""

    def __init__(self, values: list[int]):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.values.pop(0)
        assert a <= value <= b
        return value


def make_combatant(**overrides) -> CombatantStats:
    """Every derived stat at 10, 30 health, 10 mana."""
    fields = {stat.value: 10 for stat in StatName}
    fields.update(health=30, max_health=30, mana=10, max_mana=10)
    fields.update(overrides)
    return CombatantStats(**fields)
