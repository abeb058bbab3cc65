from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..models.session_state import SessionState

"""Durable key-value slot for the session triple.

The state is stored as one JSON document ``{"rows", "meta", "filters"}`` and
restored verbatim. Integrity beyond that is not checked: a file that cannot be
decoded is treated as "no saved session".
"""

__all__ = [
    "SessionStore",
]

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def save(self, state: SessionState) -> Path | None:
        """Persist the state; an empty record set clears the slot instead."""
        if not state.has_data:
            self.clear()
            return None
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(state.to_dict(), ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)
        return self.path

    def load(self) -> SessionState | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict) or not data.get("rows"):
                return None
            return SessionState.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"could not restore saved session {self.path}: {e}")
            return None

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
