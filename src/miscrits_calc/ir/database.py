"""Top-level container for a loaded miscrit database."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from miscrits_calc.ir.miscrits import MiscritDefinition

logger = logging.getLogger(__name__)


class MiscritDatabase(BaseModel):
    """All base miscrits from one database payload."""

    miscrits: list[MiscritDefinition] = []

    @classmethod
    def from_payload(cls, payload: Any) -> "MiscritDatabase":
        """Build a database from a parsed JSON payload.

        The payload may be the bare list of records or an object wrapping it
        under ``miscrits``.  Any other shape yields an empty database, and
        records that fail validation are skipped.
        """
        if isinstance(payload, dict) and isinstance(payload.get("miscrits"), list):
            raw_list = payload["miscrits"]
        elif isinstance(payload, list):
            raw_list = payload
        else:
            logger.warning("Unrecognised database payload of type %s", type(payload).__name__)
            raw_list = []

        miscrits: list[MiscritDefinition] = []
        for raw in raw_list:
            try:
                miscrit = MiscritDefinition.model_validate(raw)
            except ValidationError as exc:
                logger.warning("Skipping malformed miscrit record: %s", exc.errors()[0]["msg"])
                continue
            miscrits.append(miscrit.model_copy(update={"is_custom": False}))
        return cls(miscrits=miscrits)

    def get(self, name: str) -> MiscritDefinition | None:
        """Return the miscrit with the given name, or ``None``."""
        for miscrit in self.miscrits:
            if miscrit.name == name:
                return miscrit
        return None

    def names(self) -> list[str]:
        return [m.name for m in self.miscrits]
