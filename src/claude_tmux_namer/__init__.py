"""Name tmux windows after what a Claude Code session is doing."""

__version__ = "0.1.0"
