"""Module-level defaults shared by the registry, pipeline and scripts."""

from __future__ import annotations

from pathlib import Path

# Default paths relative to the project root.
_PROJECT_ROOT = Path(__file__).resolve().parents[2]  # src/miscrits_calc -> root
DEFAULT_DB_FILENAME = "miscritsdb.json"
DEFAULT_DB_PATH = _PROJECT_ROOT / "data" / DEFAULT_DB_FILENAME
DEFAULT_CUSTOM_STORE_PATH = _PROJECT_ROOT / "data" / "custom_miscrits.json"

# Key under which the custom miscrit list is persisted.
CUSTOM_STORAGE_KEY = "customMiscrits"

STAT_KEYS: tuple[str, ...] = ("PA", "EA", "PD", "ED", "SPD", "HP")

# Stats used when an entity record carries no stats block.
DEFAULT_STATS: dict[str, int] = {
    "PA": 60,
    "EA": 60,
    "PD": 60,
    "ED": 60,
    "SPD": 60,
    "HP": 153,
}

MAX_CUSTOM_NAME_LENGTH = 25
DEFAULT_CUSTOM_SUFFIX = " (Own)"
DEFAULT_CHAINED_NAME = "Extra Hit"
