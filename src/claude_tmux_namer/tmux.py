"""Thin wrappers around tmux commands."""

import logging
import os
import subprocess
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Seconds before a tmux call is abandoned so a hung server never blocks the hook
TMUX_TIMEOUT = 5.0


def run(*args: str) -> str:
    """Run a tmux command and return stdout with trailing newlines removed.

    Returns an empty string if tmux is missing or does not answer in time.
    """
    try:
        result = subprocess.run(
            ["tmux", *args], capture_output=True, text=True, timeout=TMUX_TIMEOUT
        )
    except (FileNotFoundError, subprocess.SubprocessError) as e:
        logger.debug(f"tmux {args[0] if args else ''} failed: {e}")
        return ""
    return result.stdout.rstrip("\n")


def current_pane(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Pane id the hook runs in, or None outside tmux."""
    env = os.environ if env is None else env
    if not env.get("TMUX"):
        return None
    return env.get("TMUX_PANE") or None


def window_id_for_pane(pane_id: str) -> str:
    """Resolve the window id (e.g. '@3') holding a pane, or '' on failure."""
    return run("display-message", "-p", "-t", pane_id, "#{window_id}")


def rename_window(target: str, name: str) -> bool:
    """Rename the window addressed by target (a window or pane id)."""
    try:
        result = subprocess.run(
            ["tmux", "rename-window", "-t", target, name],
            capture_output=True,
            text=True,
            timeout=TMUX_TIMEOUT,
        )
    except (FileNotFoundError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not rename window {target}: {e}")
        return False

    if result.returncode != 0:
        logger.warning(
            f"rename-window {target} failed: {result.stderr.strip() or result.returncode}"
        )
        return False

    logger.info(f"RENAME window={target} name={name!r}")
    return True
