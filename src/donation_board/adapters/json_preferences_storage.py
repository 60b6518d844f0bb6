"""JSON file storage for persisted client preferences."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from donation_board.services.store import PreferencesStorage

logger = logging.getLogger(__name__)

_STORAGE_VERSION = 0


@dataclass
class JsonFilePreferencesStorage(PreferencesStorage):
    """Store preferences in a `{"state": ..., "version": ...}` JSON envelope."""

    path: Path

    def load(self) -> dict[str, object] | None:
        """Return the stored state, or None when nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            envelope = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Could not read preferences from %s", self.path)
            return None
        state = envelope.get("state") if isinstance(envelope, dict) else None
        return state if isinstance(state, dict) else None

    def save(self, state: dict[str, object]) -> None:
        """Write the state atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        envelope = {"state": state, "version": _STORAGE_VERSION}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(envelope), encoding="utf-8")
        tmp_path.replace(self.path)


@dataclass
class InMemoryPreferencesStorage(PreferencesStorage):
    """Process-local preferences storage, used when no file is configured."""

    state: dict[str, object] | None = None

    def load(self) -> dict[str, object] | None:
        """Return the stored state."""
        return dict(self.state) if self.state is not None else None

    def save(self, state: dict[str, object]) -> None:
        """Replace the stored state."""
        self.state = dict(state)
