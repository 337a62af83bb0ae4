"""Shared fixtures: a small miscrit database in the raw (legacy-aliased) format."""

from __future__ import annotations

from typing import Any

import pytest

from miscrits_calc.ir.database import MiscritDatabase
from miscrits_calc.ir.miscrits import MiscritDefinition


def raw_database() -> dict[str, Any]:
    return {
        "miscrits": [
            {
                "name": "Flue",
                "elements": ["Fire"],
                "stats": {"PA": 72, "EA": 95, "PD": 60, "ED": 83, "SPD": 83, "HP": 153},
                "attacks": [
                    {"name": "Scratch", "element": "Physical", "ap": 20},
                    {"name": "Ember", "element": "Fire", "ap": 30},
                    {"name": "Fire Fang", "element": "Fire", "AP": 18, "hits": 2},
                ],
                "enhancedAttacks": [
                    {"name": "Inferno", "element": "Fire", "ap": 40, "trueDamage": 5},
                ],
            },
            {
                "name": "Sparkion",
                "type": "Lightning",
                "stats": {"PA": 83, "EA": 83, "PD": 72, "ED": 72, "SPD": 107, "HP": 140},
                "attacks": [
                    {"name": "Zap", "element": "Lightning", "ap": 28},
                    {
                        "name": "Static Burst",
                        "element": "Lightning",
                        "ap": 22,
                        "extraDamage": 4,
                        "extra": {"name": "Aftershock", "element": "Physical", "ap": 10},
                    },
                ],
            },
            {
                "name": "Dorux",
                "element": "NatureEarth",
                "stats": {"PA": 95, "EA": 60, "PD": 107, "ED": 95, "SPD": 60, "HP": 170},
                "attacks": [
                    {"name": "Boulder", "element": "Earth", "ap": 32},
                    {"name": "Vine Lash", "element": "Nature", "ap": 12, "hits": 3},
                ],
            },
            {
                "name": "Aria",
                "elements": "Water/Wind",
                "stats": {"PA": 60, "EA": 107, "PD": 83, "ED": 95, "SPD": 95, "HP": 146},
                "attacks": [
                    {"name": "Tidal Wave", "element": "Water", "ap": 34},
                    {
                        "name": "Gale Spray",
                        "element": "Wind",
                        "ap": 20,
                        "chained": {"name": "Mist", "ap": 8},
                    },
                ],
            },
        ]
    }


@pytest.fixture
def raw_db() -> dict[str, Any]:
    return raw_database()


@pytest.fixture
def miscrits() -> list[MiscritDefinition]:
    return MiscritDatabase.from_payload(raw_database()).miscrits
