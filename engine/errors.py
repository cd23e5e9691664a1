"""Exceptions raised by the rules engine."""


class RulesError(Exception):
    """Base class for rule violations the caller can recover from."""


class InsufficientStatPointsError(RulesError, ValueError):
    """A stat allocation asked for more points than the character has."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stat points: requested {requested}, available {available}"
        )


class LevelRequirementError(RulesError, ValueError):
    """An item requires a higher level than the character has reached."""

    def __init__(self, item_name: str, required: int, level: int):
        self.item_name = item_name
        self.required = required
        self.level = level
        super().__init__(
            f"Level requirement not met: {item_name} needs level {required}, "
            f"character is level {level}"
        )


class UnknownFallacyError(KeyError):
    """A fallacy id is not in the catalog."""

    def __init__(self, fallacy_id: str):
        self.fallacy_id = fallacy_id
        super().__init__(fallacy_id)

    def __str__(self) -> str:
        return f"Unknown fallacy: '{self.fallacy_id}'"
