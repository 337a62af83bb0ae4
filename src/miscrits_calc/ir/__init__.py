"""Pydantic models for miscrit game data.

Raw database records are inconsistent about field names (``AP`` vs ``ap``,
``type`` vs ``elements``, ``extra`` vs ``chained``).  These models resolve
every alias once at validation time so the engine only ever reads the
canonical fields.
"""

from .attacks import DEFAULT_ATTACK_ELEMENT, AttackDefinition, ChainedAttack
from .database import MiscritDatabase
from .miscrits import AttackTab, CustomMiscritRecord, MiscritDefinition
from .stats import StatBlock

__all__ = [
    # attacks
    "AttackDefinition",
    "ChainedAttack",
    "DEFAULT_ATTACK_ELEMENT",
    # database
    "MiscritDatabase",
    # miscrits
    "AttackTab",
    "CustomMiscritRecord",
    "MiscritDefinition",
    # stats
    "StatBlock",
]
