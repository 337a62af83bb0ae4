"""Legacy field-alias resolution applied once when raw records are ingested."""

from __future__ import annotations

from typing import Any


def resolve_aliases(
    data: Any,
    aliases: dict[str, tuple[str, ...]],
    *,
    skip_falsy: frozenset[str] = frozenset(),
) -> Any:
    """Collapse each group of alias keys in *data* onto its canonical field.

    For every ``field -> names`` entry the first name holding a non-``None``
    value wins (fields listed in *skip_falsy* also skip empty or zero
    values).  All alias keys are removed from the returned copy so later
    reads only ever see the canonical name.  Non-dict input is returned
    unchanged for pydantic to reject or accept.
    """
    if not isinstance(data, dict):
        return data

    resolved = dict(data)
    for field, names in aliases.items():
        value = None
        for name in names:
            candidate = data.get(name)
            if candidate is None:
                continue
            if field in skip_falsy and not candidate:
                continue
            value = candidate
            break
        for name in names:
            resolved.pop(name, None)
        if value is not None:
            resolved[field] = value
    return resolved
