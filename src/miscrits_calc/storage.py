"""Persistence for user-authored custom miscrits.

The registry only depends on the :class:`CustomMiscritStore` load-all /
save-all contract, so tests use :class:`InMemoryCustomStore` and the
script uses :class:`JsonFileCustomStore`.  Stores never raise to their
caller: unreadable data loads as an empty list and failed writes are
logged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from miscrits_calc.config import CUSTOM_STORAGE_KEY
from miscrits_calc.ir.miscrits import CustomMiscritRecord

logger = logging.getLogger(__name__)


class CustomMiscritStore(Protocol):
    """Load-all / save-all repository for custom miscrit records."""

    def load_all(self) -> list[CustomMiscritRecord]: ...

    def save_all(self, records: list[CustomMiscritRecord]) -> None: ...


def parse_records(raw: Any) -> list[CustomMiscritRecord]:
    """Validate a decoded list of custom records.

    Anything other than a list of valid records degrades to an empty list.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.error("Could not load custom miscrits: expected a list, got %s", type(raw).__name__)
        return []
    try:
        return [CustomMiscritRecord.model_validate(r) for r in raw]
    except ValidationError as exc:
        logger.error("Could not load custom miscrits: %s", exc)
        return []


def dump_records(records: list[CustomMiscritRecord]) -> list[dict[str, Any]]:
    return [r.model_dump(by_alias=True) for r in records]


class InMemoryCustomStore:
    """Store that keeps records in a dict keyed like the durable store."""

    def __init__(self, records: list[CustomMiscritRecord] | None = None) -> None:
        self.data: dict[str, str] = {}
        if records:
            self.save_all(records)

    def load_all(self) -> list[CustomMiscritRecord]:
        text = self.data.get(CUSTOM_STORAGE_KEY)
        if not text:
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Could not load custom miscrits: %s", exc)
            return []
        return parse_records(raw)

    def save_all(self, records: list[CustomMiscritRecord]) -> None:
        self.data[CUSTOM_STORAGE_KEY] = json.dumps(dump_records(records))


class JsonFileCustomStore:
    """Store backed by a JSON object file, records under a fixed key."""

    def __init__(self, path: str | Path, key: str = CUSTOM_STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read %s: %s", self.path, exc)
            return {}
        if not isinstance(document, dict):
            logger.error("Could not read %s: top level is not an object", self.path)
            return {}
        return document

    def load_all(self) -> list[CustomMiscritRecord]:
        return parse_records(self._read_document().get(self.key))

    def save_all(self, records: list[CustomMiscritRecord]) -> None:
        document = self._read_document()
        document[self.key] = dump_records(records)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2))
        except OSError as exc:
            logger.error("Could not save custom miscrits to %s: %s", self.path, exc)
