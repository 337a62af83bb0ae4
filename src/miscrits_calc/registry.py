"""Miscrit registry -- loads the base database and manages custom variants.

Base miscrits come from a JSON database file (a bare list or an object with
a ``miscrits`` list).  Custom miscrits are persisted through a
:class:`~miscrits_calc.storage.CustomMiscritStore` as ``{name, baseName,
stats}`` records and rebuilt on top of their base entry at load time.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from miscrits_calc.config import (
    DEFAULT_CUSTOM_SUFFIX,
    DEFAULT_DB_PATH,
    MAX_CUSTOM_NAME_LENGTH,
    STAT_KEYS,
)
from miscrits_calc.engine.damage import coerce_number
from miscrits_calc.ir.database import MiscritDatabase
from miscrits_calc.ir.miscrits import CustomMiscritRecord, MiscritDefinition
from miscrits_calc.ir.stats import StatBlock
from miscrits_calc.storage import CustomMiscritStore, InMemoryCustomStore

logger = logging.getLogger(__name__)


class DatabaseLoadError(RuntimeError):
    """The miscrit database file could not be read or parsed."""


class CustomMiscritError(ValueError):
    """A custom miscrit could not be built from the given inputs."""


def load_database(path: str | Path) -> MiscritDatabase:
    """Load a miscrit database from a JSON file.

    Raises
    ------
    DatabaseLoadError
        If the file is missing, unreadable or not valid JSON.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text())
    except OSError as exc:
        raise DatabaseLoadError(
            f"Could not read {path}. Make sure the database file exists."
        ) from exc
    except json.JSONDecodeError as exc:
        raise DatabaseLoadError(f"Invalid JSON in {path}: {exc}") from exc
    return MiscritDatabase.from_payload(payload)


_STATS_ERROR = "All 6 stats (PA, EA, PD, ED, SPD, HP) must be non-negative numbers."


def _check_stats(stats: StatBlock | Mapping[str, Any]) -> StatBlock:
    """Validate a customizer stat block: all six present and non-negative."""
    values = {k: stats.get(k) for k in STAT_KEYS}
    for value in values.values():
        if value is None or isinstance(value, bool):
            raise CustomMiscritError(_STATS_ERROR)
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                raise CustomMiscritError(_STATS_ERROR) from None
        if coerce_number(value) != value or value < 0:
            raise CustomMiscritError(_STATS_ERROR)
    return StatBlock.model_validate(values)


class MiscritRegistry:
    """Single source of truth for base and custom miscrits during a session.

    Usage::

        registry = MiscritRegistry(JsonFileCustomStore("custom.json"))
        registry.load_default()

        attacker = registry.get("Flue")
        variant = registry.build_custom("Flue", {"PA": 80, ...}, name="Fast Flue")
        registry.save_custom(variant)
    """

    def __init__(self, store: CustomMiscritStore | None = None) -> None:
        self.store: CustomMiscritStore = store if store is not None else InMemoryCustomStore()
        self.base: list[MiscritDefinition] = []
        self.custom: list[MiscritDefinition] = []
        self.load_error: str | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_database(self, database: MiscritDatabase) -> None:
        """Replace the base set and rebuild custom miscrits from the store.

        Custom records whose base miscrit is not in *database* are dropped.
        """
        self.base = list(database.miscrits)
        by_name = {m.name: m for m in self.base}

        self.custom = []
        for record in self.store.load_all():
            base = by_name.get(record.base_name)
            if base is None:
                logger.warning(
                    "Dropping custom miscrit %r: base %r not found",
                    record.name,
                    record.base_name,
                )
                continue
            self.custom.append(base.derive_custom(record.name, record.stats))
        self.load_error = None

    def load_payload(self, payload: Any) -> None:
        """Load from an already-decoded JSON payload."""
        self.load_database(MiscritDatabase.from_payload(payload))

    def load_file(self, path: str | Path) -> bool:
        """Load the database at *path*.

        On failure the error is logged and kept as an advisory message in
        :attr:`load_error` and the registry is left empty.
        """
        try:
            database = load_database(path)
        except DatabaseLoadError as exc:
            logger.error("Error loading miscrit database: %s", exc)
            self.base = []
            self.custom = []
            self.load_error = str(exc)
            return False
        self.load_database(database)
        return True

    def load_default(self, path: str | Path | None = None) -> bool:
        """Load the database from ``data/miscritsdb.json`` or *path*."""
        return self.load_file(DEFAULT_DB_PATH if path is None else path)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def all(self) -> list[MiscritDefinition]:
        """Base miscrits followed by custom miscrits."""
        return [*self.base, *self.custom]

    def get(self, name: str) -> MiscritDefinition | None:
        """Return the miscrit with the given name, or ``None``."""
        for miscrit in self.all:
            if miscrit.name == name:
                return miscrit
        return None

    def get_base(self, name: str) -> MiscritDefinition | None:
        for miscrit in self.base:
            if miscrit.name == name:
                return miscrit
        return None

    def listing(self, custom_only: bool = False) -> list[MiscritDefinition]:
        """All miscrits, or only the custom ones."""
        if custom_only:
            return list(self.custom)
        return self.all

    def search(
        self, query: str, miscrits: list[MiscritDefinition] | None = None
    ) -> list[MiscritDefinition]:
        """Case-insensitive substring match on names.

        Custom miscrits also match on their base miscrit's name.
        """
        items = self.all if miscrits is None else miscrits
        if not query:
            return list(items)
        q = query.lower()
        return [
            m
            for m in items
            if q in m.name.lower()
            or (m.is_custom and m.base_name and q in m.base_name.lower())
        ]

    # ------------------------------------------------------------------
    # Custom miscrits
    # ------------------------------------------------------------------

    def build_custom(
        self,
        base_name: str,
        stats: StatBlock | Mapping[str, Any] | None = None,
        name: str = "",
        editing: str | None = None,
    ) -> MiscritDefinition:
        """Build (but do not save) a custom variant of a base miscrit.

        Parameters
        ----------
        base_name:
            Name of the base miscrit to derive from.
        stats:
            The six stats.  Defaults to the base miscrit's stats.
        name:
            Desired name; trimmed and cut to 25 characters.  Empty means
            ``"<base_name> (Own)"``.
        editing:
            Name of the custom miscrit being edited, which may keep its name.

        Raises
        ------
        CustomMiscritError
            If the base is missing, a stat is missing or negative, or the
            name is already taken.
        """
        if not base_name:
            raise CustomMiscritError("You must select a base Miscrit.")
        base = self.get_base(base_name)
        if base is None:
            raise CustomMiscritError(f"Base Miscrit {base_name!r} not found.")

        checked = _check_stats(base.stats if stats is None else stats)

        final_name = (name or "").strip()[:MAX_CUSTOM_NAME_LENGTH]
        if not final_name:
            final_name = f"{base_name}{DEFAULT_CUSTOM_SUFFIX}"

        taken = any(
            m.name == final_name and (editing is None or m.name != editing)
            for m in self.all
        )
        if taken:
            raise CustomMiscritError(
                f'A Miscrit named "{final_name}" already exists. '
                "Please choose a different custom name."
            )

        return base.derive_custom(final_name, checked)

    def save_custom(
        self, miscrit: MiscritDefinition, previous_name: str | None = None
    ) -> MiscritDefinition:
        """Insert or replace a custom miscrit and persist the custom list.

        With *previous_name* set to a different name, the old entry is
        removed and the renamed one appended.
        """
        renaming = previous_name is not None and previous_name != miscrit.name
        if renaming:
            self.custom = [m for m in self.custom if m.name != previous_name]
            self.custom.append(miscrit)
        elif any(m.name == miscrit.name for m in self.custom):
            self.custom = [miscrit if m.name == miscrit.name else m for m in self.custom]
        else:
            self.custom.append(miscrit)
        self._persist()
        return miscrit

    def delete_custom(self, name: str) -> bool:
        """Remove the custom miscrit called *name*.  Returns whether one was removed."""
        remaining = [m for m in self.custom if m.name != name]
        removed = len(remaining) != len(self.custom)
        self.custom = remaining
        self._persist()
        return removed

    def _persist(self) -> None:
        self.store.save_all([CustomMiscritRecord.from_miscrit(m) for m in self.custom])
