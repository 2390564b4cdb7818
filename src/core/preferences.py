from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from models.schemas import Preferences

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Process-wide UI preferences, loaded once at startup and written back on every change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._current = Preferences()

    @property
    def current(self) -> Preferences:
        return self._current.model_copy()

    def load(self) -> Preferences:
        if not self.path.exists():
            self._current = Preferences()
            return self.current
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._current = Preferences.model_validate(raw)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            self._current = Preferences()
        return self.current

    def update(self, prefs: Preferences) -> Preferences:
        self._current = prefs.model_copy()
        self.save()
        return self.current

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self._current.model_dump_json(indent=2), encoding="utf-8")
