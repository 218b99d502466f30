"""Hook entry point - pass the event through, then maybe rename the window."""

import json
import logging
import sys
from typing import Mapping, Optional, TextIO

from claude_tmux_namer.config import NamerConfig, configure_logging
from claude_tmux_namer.namer.session import SessionNamer
from claude_tmux_namer.tmux import current_pane
from claude_tmux_namer.tracker.events import parse_hook_event

logger = logging.getLogger(__name__)


def run_hook(
    stdin_data: str,
    config: Optional[NamerConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Run the hook: echo Claude's data, then update the window name.

    Args:
        stdin_data: Raw JSON from Claude Code
        config: Namer config (default: from environment)
        env: Environment used to find the tmux pane (default: os.environ)
        stdout: Stream the input is echoed to (default: sys.stdout)

    Returns:
        Exit code (always 0 - never break the hook chain)
    """
    stdout = stdout or sys.stdout
    stdout.write(stdin_data)
    stdout.flush()

    try:
        claude_data = json.loads(stdin_data)
    except json.JSONDecodeError:
        logger.warning(f"Received malformed Claude data: {stdin_data[:100]}")
        return 0
    if not isinstance(claude_data, dict):
        logger.warning(f"Expected a JSON object, got {type(claude_data).__name__}")
        return 0

    pane_id = current_pane(env)
    if pane_id is None:
        logger.debug("Not running inside tmux, skipping")
        return 0

    event = parse_hook_event(claude_data)
    logger.debug(f"Received event: {event.event_name} for session {event.session_id}")

    try:
        config = config or NamerConfig.from_env(env)
        SessionNamer(config, pane_id).handle(event)
    except Exception as e:
        logger.error(f"Failed to handle {event.event_name}: {e}")
        logger.debug("Hook traceback", exc_info=True)

    return 0


def main() -> None:
    """Entry point for claude-tmux-namer-hook command."""
    stdin_data = sys.stdin.read()
    config = NamerConfig.from_env()
    configure_logging(config)
    exit_code = run_hook(stdin_data, config)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
