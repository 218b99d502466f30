"""Pane to session bindings shared by all sessions."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .state import file_lock

logger = logging.getLogger(__name__)


class PaneBindings:
    """Which session is currently considered active in each tmux pane."""

    def __init__(self, state_dir: Path):
        self.path = Path(state_dir) / "panes.json"
        self._lock_path = Path(state_dir) / "panes.lock"

    def bind(self, pane_id: str, session_id: str) -> None:
        """Mark session_id as the active session of pane_id."""
        with file_lock(self._lock_path):
            bindings = self._read()
            bindings[pane_id] = session_id
            self._write(bindings)

    def bound_session(self, pane_id: str) -> Optional[str]:
        with file_lock(self._lock_path):
            return self._read().get(pane_id)

    def unbind(self, pane_id: str, session_id: Optional[str] = None) -> bool:
        """
        Remove the binding for pane_id.

        Args:
            pane_id: tmux pane id
            session_id: If given, only unbind while this session is bound

        Returns:
            True if a binding was removed
        """
        with file_lock(self._lock_path):
            bindings = self._read()
            current = bindings.get(pane_id)
            if current is None:
                return False
            if session_id is not None and current != session_id:
                return False
            del bindings[pane_id]
            self._write(bindings)
            return True

    def all(self) -> Dict[str, str]:
        with file_lock(self._lock_path):
            return self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable pane map {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, bindings: Dict[str, str]) -> None:
        """Write atomically using temp file and rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(".json.tmp")
        temp_path.write_text(json.dumps(bindings, indent=2))
        temp_path.rename(self.path)
