"""Rules-wide configuration constants for the Labyrinth rules engine."""

import logging
import os

# Experience curve: threshold for level N+1 is BASE * GROWTH ** (N - 1)
EXPERIENCE_BASE = 100
EXPERIENCE_GROWTH = 1.5

STAT_POINTS_PER_LEVEL = 3
SKILL_POINTS_PER_LEVEL = 1
LEVEL_HEALTH_BASE = 5        # Plus body // 2
LEVEL_MANA_BASE = 3          # Plus mind // 2
HEALTH_PER_BODY_POINT = 5
MANA_PER_MIND_POINT = 3

STARTING_AGE = 15
STARTING_BODY = 8
STARTING_MIND = 6
STARTING_HEART = 5
STARTING_HEALTH = 50
STARTING_MANA = 25

AGREEMENT_POINTS_TO_END = 3  # Mutual defends needed for a peaceful end
MASTERY_THRESHOLD = 5        # Successful identifications to master a fallacy
COMPLEX_FALLACY_LEVEL = 5    # Minimum level for the complex paradoxes

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()
RULES_SEED = os.environ.get("RULES_SEED")  # Fixed seed for replayable sessions
DEFAULT_DIFFICULTY = os.environ.get("DEFAULT_DIFFICULTY", "medium")


def configure_logging(level: str | None = None) -> None:
    """Install a basic stderr handler for the engine loggers.

    The engine never calls this itself; the embedding game loop does.
    """
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
