"""Damage-range calculator for the Miscrits monster battler."""

__version__ = "0.1.0"
