"""Shared fixtures."""

from unittest.mock import patch

import pytest

from claude_tmux_namer.config import NamerConfig


@pytest.fixture
def config(tmp_path):
    """Config rooted in a temporary state directory."""
    return NamerConfig(
        state_dir=tmp_path / "state",
        summarizer_command=["fake-summarizer"],
        summary_timeout=1.0,
    )


@pytest.fixture
def no_signals():
    """Treat every recorded pid as alive and record terminations."""
    with patch("claude_tmux_namer.tracker.tasks.is_alive", return_value=True), \
            patch("claude_tmux_namer.tracker.tasks.terminate", return_value=True) as term:
        yield term
