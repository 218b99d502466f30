"""Detached summarization worker.

Started by the hook with ``python -m claude_tmux_namer.namer.worker``; reads
the summarization request on stdin, asks the summarizer for a title and
renames the window if this worker is still the session's pending one.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from claude_tmux_namer.config import NamerConfig, configure_logging
from claude_tmux_namer.namer.labels import label_from_summary
from claude_tmux_namer.namer.summarizer import summarize
from claude_tmux_namer.tmux import rename_window
from claude_tmux_namer.tracker.state import SessionStore

logger = logging.getLogger(__name__)

MODES = ["prompt", "stop"]


def run_worker(
    session_id: str,
    window: str,
    mode: str,
    request: str,
    config: NamerConfig,
) -> int:
    """
    Summarize request and rename window.

    Returns:
        Exit code (always 0)
    """
    try:
        store = SessionStore(config.state_dir, session_id)
    except ValueError as e:
        logger.error(f"Worker started with bad session: {e}")
        return 0

    pid = os.getpid()
    try:
        summary = summarize(request, config.summarizer_command, config.summary_timeout)
        label = label_from_summary(summary)
        if label is None:
            logger.info(f"SUMMARY_EMPTY session={session_id} mode={mode}")
            return 0

        # A newer launch replaced us while the summarizer was running
        if store.read_pending_pid() != pid:
            logger.info(f"SUMMARY_STALE session={session_id} pid={pid}")
            return 0

        if rename_window(window, label) and mode == "stop":
            store.clear_events()
    except Exception as e:
        logger.error(f"Summary worker failed for {session_id[:8]}...: {e}")
        logger.debug("Worker traceback", exc_info=True)
    finally:
        store.clear_pending_pid(expected=pid)

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="claude-tmux-namer summary worker")
    parser.add_argument("--session", required=True, help="Claude session id")
    parser.add_argument("--window", required=True, help="tmux window or pane target")
    parser.add_argument("--mode", choices=MODES, required=True)
    args = parser.parse_args(argv)

    config = NamerConfig.from_env()
    configure_logging(config, "worker")

    request = sys.stdin.read()
    sys.exit(run_worker(args.session, args.window, args.mode, request, config))


if __name__ == "__main__":
    main()
