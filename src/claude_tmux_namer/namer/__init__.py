"""Window naming: labels, summarization and the event handlers."""

from .labels import is_summary_request, label_from_prompt, label_from_summary
from .session import SessionNamer
from .summarizer import summarize

__all__ = [
    "is_summary_request",
    "label_from_prompt",
    "label_from_summary",
    "SessionNamer",
    "summarize",
]
