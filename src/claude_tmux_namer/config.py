"""Configuration loaded from the environment."""

import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = Path.home() / ".claude" / "tmux-namer"
DEFAULT_SUMMARIZER_COMMAND = "claude -p --model haiku"
DEFAULT_SUMMARY_TIMEOUT = 10.0
DEFAULT_WINDOW_NAME = "bash"
DEFAULT_LOG_LEVEL = "INFO"

# Prompts up to this length are labelled directly, longer ones are summarized
SHORT_PROMPT_LIMIT = 250
LABEL_LENGTH = 142
LABEL_PREFIX = "claude: "
RECENT_EVENTS_LIMIT = 20

ENV_PREFIX = "CLAUDE_TMUX_NAMER_"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class NamerConfig:
    """Settings shared by the hook, the worker and the installer."""

    state_dir: Path = DEFAULT_STATE_DIR
    summarizer_command: List[str] = field(
        default_factory=lambda: shlex.split(DEFAULT_SUMMARIZER_COMMAND)
    )
    summary_timeout: float = DEFAULT_SUMMARY_TIMEOUT
    default_window_name: str = DEFAULT_WINDOW_NAME
    log_file: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        self.state_dir = Path(self.state_dir)
        if self.log_file is None:
            self.log_file = self.state_dir / "namer.log"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "NamerConfig":
        """
        Build a config from CLAUDE_TMUX_NAMER_* environment variables.

        Malformed values fall back to the defaults so a bad variable never
        breaks the hook.

        Args:
            env: Environment mapping (default: os.environ)

        Returns:
            The resolved config
        """
        env = os.environ if env is None else env

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        state_dir = Path(get("STATE_DIR") or DEFAULT_STATE_DIR).expanduser()

        command = shlex.split(DEFAULT_SUMMARIZER_COMMAND)
        raw_command = get("SUMMARIZER")
        if raw_command:
            try:
                command = shlex.split(raw_command) or command
            except ValueError as e:
                logger.warning(f"Ignoring malformed {ENV_PREFIX}SUMMARIZER: {e}")

        timeout = DEFAULT_SUMMARY_TIMEOUT
        raw_timeout = get("TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
                if timeout <= 0:
                    raise ValueError("timeout must be positive")
            except ValueError as e:
                logger.warning(f"Ignoring malformed {ENV_PREFIX}TIMEOUT: {e}")
                timeout = DEFAULT_SUMMARY_TIMEOUT

        log_level = (get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            logger.warning(f"Ignoring unknown {ENV_PREFIX}LOG_LEVEL: {log_level}")
            log_level = DEFAULT_LOG_LEVEL

        log_file = get("LOG_FILE")

        return cls(
            state_dir=state_dir,
            summarizer_command=command,
            summary_timeout=timeout,
            default_window_name=get("DEFAULT_NAME") or DEFAULT_WINDOW_NAME,
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=log_level,
        )


def configure_logging(config: NamerConfig, label: str = "") -> bool:
    """
    Log to config.log_file; stdout belongs to Claude Code.

    Args:
        config: Resolved config
        label: Tag placed before each message (e.g. "worker")

    Returns:
        False if the log file could not be opened
    """
    prefix = f"{label}: " if label else ""
    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(config.log_file),
            level=getattr(logging, config.log_level),
            format=f"%(asctime)s [%(levelname)s] {prefix}%(message)s",
        )
    except OSError:
        return False
    return True
