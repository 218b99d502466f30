"""Hook event parsing and tool-use descriptions."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Longest description kept in the recent-events log
MAX_DESCRIPTION_LENGTH = 200

FILE_TOOLS = {"Read", "Edit", "MultiEdit", "Write", "NotebookEdit"}
SEARCH_TOOLS = {"Grep", "Glob"}


@dataclass
class HookEvent:
    """Parsed hook event from Claude Code."""
    event_name: str
    session_id: str
    cwd: str = ""
    prompt: str = ""
    tool_name: Optional[str] = None
    tool_input: Optional[Dict[str, Any]] = None
    transcript_path: Optional[str] = None


def parse_hook_event(claude_data: Dict[str, Any]) -> HookEvent:
    """
    Parse Claude hook data into a HookEvent.

    Args:
        claude_data: Raw JSON from Claude Code hook

    Returns:
        Parsed HookEvent (null fields become empty strings)
    """
    tool_input = claude_data.get("tool_input")
    return HookEvent(
        event_name=claude_data.get("hook_event_name") or "Unknown",
        session_id=claude_data.get("session_id") or "",
        cwd=claude_data.get("cwd") or "",
        prompt=claude_data.get("prompt") or "",
        tool_name=claude_data.get("tool_name"),
        tool_input=tool_input if isinstance(tool_input, dict) else None,
        transcript_path=claude_data.get("transcript_path"),
    )


def _one_line(text: str) -> str:
    return " ".join(str(text).split())


def describe_tool_use(
    tool_name: Optional[str],
    tool_input: Optional[Dict[str, Any]],
) -> str:
    """
    Build a short description of a tool invocation.

    Examples: "Bash: pytest -x", "Edit: main.py", "Grep: TODO".
    """
    name = tool_name or "Unknown"
    tool_input = tool_input or {}
    detail = ""

    if name == "Bash":
        detail = tool_input.get("command") or ""
    elif name in FILE_TOOLS:
        path = tool_input.get("file_path") or tool_input.get("notebook_path") or ""
        detail = os.path.basename(str(path).rstrip("/"))
    elif name in SEARCH_TOOLS:
        detail = tool_input.get("pattern") or ""

    detail = _one_line(detail)
    description = f"{name}: {detail}" if detail else name
    return description[:MAX_DESCRIPTION_LENGTH]
