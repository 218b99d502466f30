"""Background summarization processes, at most one per session."""

import logging
import os
import signal
import subprocess
import sys
from typing import Callable, List, Optional

from .state import SessionStore

logger = logging.getLogger(__name__)

WORKER_MODULE = "claude_tmux_namer.namer.worker"

SpawnFunc = Callable[[List[str], str], int]


def spawn_worker(argv: List[str], input_text: str) -> int:
    """
    Start a detached worker process and hand it input_text on stdin.

    Args:
        argv: Worker arguments (after the module name)
        input_text: Summarization request

    Returns:
        PID of the worker (also its process group id)
    """
    proc = subprocess.Popen(
        [sys.executable, "-m", WORKER_MODULE, *argv],
        stdin=subprocess.PIPE,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
    try:
        proc.stdin.write(input_text.encode("utf-8"))
    except BrokenPipeError:
        pass  # Worker died early; nothing to summarize
    finally:
        proc.stdin.close()
    return proc.pid


def is_alive(pid: int) -> bool:
    """Check whether a process exists."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True  # Exists, owned by someone else
    return True


def terminate(pid: int) -> bool:
    """
    Send SIGTERM to a worker's process group.

    Returns:
        True if a signal was delivered
    """
    try:
        os.killpg(pid, signal.SIGTERM)
    except (ProcessLookupError, PermissionError):
        # Workers lead their own group; anything else is a reused pid
        logger.info(f"Not signalling pid {pid}: not a worker process group")
        return False
    return True


class SummaryTasks:
    """Launches and cancels the background summarization of one session."""

    def __init__(self, store: SessionStore, spawn: SpawnFunc = spawn_worker):
        self.store = store
        self._spawn = spawn

    def cancel(self) -> bool:
        """
        Terminate the pending summarization, if any.

        Returns:
            True if a live worker was signalled
        """
        pid = self.store.swap_pending_pid(None)
        return self._terminate_if_alive(pid)

    def launch(self, argv: List[str], input_text: str) -> Optional[int]:
        """
        Start a new summarization, cancelling the previous one first.

        Returns:
            The new worker's PID, or None if it could not be started
        """
        self.cancel()

        try:
            pid = self._spawn(argv, input_text)
        except OSError as e:
            logger.error(f"Failed to spawn summarizer for {self.store.session_id[:8]}...: {e}")
            return None

        # Another handler may have launched in between; newest launch wins
        previous = self.store.swap_pending_pid(pid)
        if previous is not None and previous != pid:
            self._terminate_if_alive(previous)

        logger.info(f"SUMMARY_LAUNCH session={self.store.session_id} pid={pid}")
        return pid

    def _terminate_if_alive(self, pid: Optional[int]) -> bool:
        if pid is None or pid == os.getpid():
            return False
        if not is_alive(pid):
            return False
        if terminate(pid):
            logger.info(f"SUMMARY_CANCEL session={self.store.session_id} pid={pid}")
            return True
        return False
