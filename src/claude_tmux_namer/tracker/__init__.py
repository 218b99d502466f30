"""Session tracking library."""

from .events import HookEvent, describe_tool_use, parse_hook_event
from .panes import PaneBindings
from .state import SessionStore, validate_session_id
from .tasks import SummaryTasks, spawn_worker

__all__ = [
    "HookEvent",
    "describe_tool_use",
    "parse_hook_event",
    "PaneBindings",
    "SessionStore",
    "validate_session_id",
    "SummaryTasks",
    "spawn_worker",
]
