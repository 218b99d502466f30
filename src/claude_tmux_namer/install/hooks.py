"""Claude Code hook configuration management."""

import json
from pathlib import Path
from typing import Any


HOOK_EVENTS = ["UserPromptSubmit", "PreToolUse", "PostToolUse", "Stop", "SessionEnd"]


def get_claude_settings_path() -> Path:
    """~/.claude/settings.json, where Claude Code reads its hooks."""
    return Path.home() / ".claude" / "settings.json"


def read_settings(path: Path) -> dict[str, Any]:
    """Load settings; a missing, unreadable or non-object file reads as {}."""
    try:
        settings = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return {}
    return settings if isinstance(settings, dict) else {}


def write_settings(path: Path, settings: dict[str, Any]) -> None:
    """Replace settings.json via a sibling temp file so Claude never reads half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    staged = path.with_name(path.name + ".tmp")
    staged.write_text(json.dumps(settings, indent=2) + "\n")
    staged.replace(path)


def _is_ours(entry: Any, hook_command: str) -> bool:
    return hook_command in json.dumps(entry)


def _matcher_entry(event: str, hook_command: str) -> dict[str, Any]:
    entry: dict[str, Any] = {"hooks": [{"type": "command", "command": hook_command}]}
    if event in ("PreToolUse", "PostToolUse"):
        entry["matcher"] = "*"
    return entry


def add_hooks(settings: dict[str, Any], hook_command: str) -> dict[str, Any]:
    """Add our hook to settings, preserving existing hooks.

    Args:
        settings: Current settings dict
        hook_command: Command to run for hook (e.g., "claude-tmux-namer-hook")

    Returns:
        Updated settings dict
    """
    settings = settings.copy()
    hooks = dict(settings.get("hooks", {}))

    for event in HOOK_EVENTS:
        event_hooks = list(hooks.get(event, []))

        already_installed = any(_is_ours(h, hook_command) for h in event_hooks)
        if not already_installed:
            event_hooks.append(_matcher_entry(event, hook_command))

        hooks[event] = event_hooks

    settings["hooks"] = hooks
    return settings


def remove_hooks(settings: dict[str, Any], hook_command: str) -> dict[str, Any]:
    """Remove our hook from settings, preserving other hooks.

    Events left without any hook are dropped from the settings.
    """
    settings = settings.copy()
    hooks = dict(settings.get("hooks", {}))

    for event in HOOK_EVENTS:
        if event not in hooks:
            continue
        event_hooks = [h for h in hooks[event] if not _is_ours(h, hook_command)]
        if event_hooks:
            hooks[event] = event_hooks
        else:
            del hooks[event]

    settings["hooks"] = hooks
    return settings


def is_hook_installed(settings: dict[str, Any], hook_command: str) -> bool:
    """True if any lifecycle event already runs hook_command."""
    hooks = settings.get("hooks", {})
    return any(
        _is_ours(entry, hook_command)
        for event in HOOK_EVENTS
        for entry in hooks.get(event, [])
    )
