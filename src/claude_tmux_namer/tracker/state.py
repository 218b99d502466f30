"""Per-session state kept on disk.

Each session owns a directory under ``<state_dir>/sessions/<session_id>/``:

* ``first_message`` - contains ``1`` once the first prompt was handled
* ``events.log``    - recent activity, one entry per line
* ``summary.pid``   - pid of the pending background summarization
* ``lock``          - advisory lock guarding the files above

Nothing here is removed when a session ends.
"""

import fcntl
import logging
import os
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from claude_tmux_namer.config import RECENT_EVENTS_LIMIT

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_session_id(session_id: str) -> str:
    """Return session_id if safe to use as a directory name.

    Raises:
        ValueError: If the id is empty or contains path characters
    """
    if not session_id or session_id in {".", ".."} or not SESSION_ID_PATTERN.match(session_id):
        raise ValueError(f"invalid session id: {session_id!r}")
    return session_id


@contextmanager
def file_lock(path: Path) -> Iterator[None]:
    """Hold an exclusive flock on path, blocking until it is available."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o600)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX)
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)
        os.close(fd)


class SessionStore:
    """Keyed on-disk state for one Claude Code session."""

    def __init__(self, state_dir: Path, session_id: str):
        self.session_id = validate_session_id(session_id)
        self.path = Path(state_dir) / "sessions" / session_id
        self._flag_path = self.path / "first_message"
        self._log_path = self.path / "events.log"
        self._pid_path = self.path / "summary.pid"
        self._lock_path = self.path / "lock"

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Exclusive session lock."""
        with file_lock(self._lock_path):
            yield

    # -- first message flag --

    def mark_first_message(self) -> bool:
        """
        Set the first-message flag.

        Returns:
            True if this call set the flag, False if it was already set
        """
        with self.lock():
            if self._flag_is_set():
                return False
            self._flag_path.write_text("1")
            return True

    def first_message_set(self) -> bool:
        with self.lock():
            return self._flag_is_set()

    def _flag_is_set(self) -> bool:
        try:
            return self._flag_path.read_text().strip() == "1"
        except FileNotFoundError:
            return False

    # -- recent events --

    def append_event(self, text: str) -> None:
        """Append one entry to the recent-events log."""
        entry = " ".join(text.split())
        if not entry:
            return
        with self.lock():
            with open(self._log_path, "a") as f:
                f.write(entry + "\n")

    def recent_events(self, limit: Optional[int] = RECENT_EVENTS_LIMIT) -> List[str]:
        """The newest `limit` entries (all if None), oldest first."""
        with self.lock():
            try:
                lines = self._log_path.read_text().splitlines()
            except FileNotFoundError:
                return []
        entries = [line for line in lines if line.strip()]
        if limit is None:
            return entries
        return entries[-limit:] if limit > 0 else []

    def clear_events(self) -> None:
        with self.lock():
            try:
                self._log_path.unlink()
            except FileNotFoundError:
                pass

    # -- pending summarization pid --

    def read_pending_pid(self) -> Optional[int]:
        with self.lock():
            return self._read_pid()

    def write_pending_pid(self, pid: int) -> None:
        with self.lock():
            self._pid_path.write_text(str(pid))

    def swap_pending_pid(self, pid: Optional[int]) -> Optional[int]:
        """Replace the pending pid, returning the previous one."""
        with self.lock():
            previous = self._read_pid()
            if pid is None:
                self._remove_pid()
            else:
                self._pid_path.write_text(str(pid))
            return previous

    def clear_pending_pid(self, expected: Optional[int] = None) -> bool:
        """
        Remove the pending pid record.

        Args:
            expected: Only clear if the recorded pid equals this value

        Returns:
            True if a record was removed
        """
        with self.lock():
            current = self._read_pid()
            if current is None:
                return False
            if expected is not None and current != expected:
                return False
            self._remove_pid()
            return True

    def _read_pid(self) -> Optional[int]:
        try:
            return int(self._pid_path.read_text().strip())
        except FileNotFoundError:
            return None
        except ValueError:
            logger.warning(f"Discarding corrupt pid file {self._pid_path}")
            return None

    def _remove_pid(self) -> None:
        try:
            self._pid_path.unlink()
        except FileNotFoundError:
            pass
