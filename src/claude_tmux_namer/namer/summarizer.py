"""Invoke the external summarization command."""

import logging
import os
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)

# Stripped from the summarizer's environment so its own hooks stay out of tmux
TMUX_ENV_VARS = ["TMUX", "TMUX_PANE"]


def summarize(request: str, command: List[str], timeout: float) -> Optional[str]:
    """
    Run the summarizer with request as its final argument.

    Args:
        request: Summarization prompt
        command: Summarizer argv, e.g. ["claude", "-p", "--model", "haiku"]
        timeout: Seconds before the call is abandoned

    Returns:
        Stripped stdout, or None on timeout, failure or empty output
    """
    if not command:
        logger.error("No summarizer command configured")
        return None

    env = {k: v for k, v in os.environ.items() if k not in TMUX_ENV_VARS}

    try:
        result = subprocess.run(
            [*command, request],
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
            env=env,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Summarizer timed out after {timeout}s")
        return None
    except OSError as e:
        logger.warning(f"Summarizer {command[0]} could not run: {e}")
        return None

    if result.returncode != 0:
        logger.warning(
            f"Summarizer exited {result.returncode}: {result.stderr.strip()[:200]}"
        )
        return None

    output = result.stdout.strip()
    if not output:
        logger.info("Summarizer returned empty output")
        return None
    return output
