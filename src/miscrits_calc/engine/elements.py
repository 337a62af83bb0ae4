"""Element tag normalisation and the six-element advantage cycle.

Source data spells element tags in several ways (a list, ``"Fire/Water"``,
``"FireWater"``, a single free-form word).  :func:`normalize_elements`
folds all of them into an ordered list of lowercase keys and never raises;
:func:`element_multiplier` resolves attack-vs-defender advantage on top of
that list.
"""

from __future__ import annotations

import re
from typing import Any

# Vocabulary scanned (in this order) when a tag has no separators and no
# compound-word casing.
KNOWN_ELEMENTS: tuple[str, ...] = (
    "fire",
    "water",
    "nature",
    "lightning",
    "earth",
    "wind",
    "physical",
    "neutral",
    "light",
)

# Elements with no advantage relations.
NON_ELEMENTAL: frozenset[str] = frozenset({"physical", "neutral"})

# key is strong against value.
STRONG_AGAINST: dict[str, str] = {
    "water": "fire",
    "fire": "nature",
    "nature": "water",
    "lightning": "wind",
    "wind": "earth",
    "earth": "lightning",
}

ADVANTAGE_MULTIPLIER = 2.0
DISADVANTAGE_MULTIPLIER = 0.5
NEUTRAL_MULTIPLIER = 1.0

_SEPARATOR_RE = re.compile(r"[/,\s]+")
_COMPOUND_SEGMENT_RE = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])")


def _to_key(item: Any) -> str:
    if item is None:
        return ""
    return str(item).strip().lower()


def normalize_elements(value: Any) -> list[str]:
    """Return the canonical ordered list of lowercase element keys for *value*.

    Strings go through four tiers: separator split, compound-word split,
    known-vocabulary scan, and finally the whole lowercased string.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        keys = [_to_key(item) for item in value]
        return [k for k in keys if k]

    text = str(value).strip()
    if not text:
        return []

    if any(sep in text for sep in ("/", ",", " ")):
        return [p.lower() for p in _SEPARATOR_RE.split(text) if p]

    segments = _COMPOUND_SEGMENT_RE.findall(text)
    if len(segments) > 1:
        return [s.lower() for s in segments]

    lowered = text.lower()
    found = [k for k in KNOWN_ELEMENTS if k in lowered]
    if found:
        return found
    return [lowered]


def strong_against(element: str) -> str | None:
    """Return the element *element* deals double damage to, or ``None``."""
    return STRONG_AGAINST.get(element)


def weak_against(element: str) -> str | None:
    """Return the element that deals double damage to *element*, or ``None``."""
    for attacker, target in STRONG_AGAINST.items():
        if target == element:
            return attacker
    return None


def element_multiplier(attack_element: Any, defender_elements: Any) -> float:
    """Resolve the elemental damage multiplier for one attack.

    Returns 2.0 on advantage, 0.5 on disadvantage and 1.0 otherwise.  A
    defender that is both favourable and unfavourable to the attack is
    treated as neutral rather than compounding the two.
    """
    atk = _to_key(attack_element)
    if not atk or atk in NON_ELEMENTAL:
        return NEUTRAL_MULTIPLIER

    defs = normalize_elements(defender_elements)
    if not defs:
        return NEUTRAL_MULTIPLIER

    advantage = any(STRONG_AGAINST.get(atk) == d for d in defs)
    disadvantage = any(STRONG_AGAINST.get(d) == atk for d in defs)
    if advantage and not disadvantage:
        return ADVANTAGE_MULTIPLIER
    if disadvantage and not advantage:
        return DISADVANTAGE_MULTIPLIER
    return NEUTRAL_MULTIPLIER
