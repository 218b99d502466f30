"""Window labels and the summarization requests that produce them."""

from typing import List, Optional

from claude_tmux_namer.config import LABEL_LENGTH, LABEL_PREFIX

# Every request we send to the summarizer starts with this tag, so the
# summarizer's own UserPromptSubmit hook can recognise and skip it.
SUMMARY_MARKER = "[tmux-namer]"

PROMPT_REQUEST = (
    SUMMARY_MARKER + " Summarize the following request to a coding assistant "
    "as a short tmux window title (3-6 words, lowercase, no quotes). "
    "Describe the task, not the tools. Output ONLY the title.\n\n"
    "Request:\n{prompt}"
)

ACTIVITY_REQUEST = (
    SUMMARY_MARKER + " Here is the recent activity of a coding assistant "
    "session, oldest first. Summarize what the session is working on as a "
    "short tmux window title (3-6 words, lowercase, no quotes). "
    "Output ONLY the title.\n\n"
    "Activity:\n{events}"
)


def is_summary_request(prompt: str) -> bool:
    """True if prompt is a request this tool sent to the summarizer."""
    return prompt.lstrip().startswith(SUMMARY_MARKER)


def _clean(text: str) -> str:
    return text.replace("\r", " ").replace("\n", " ").replace("\t", " ").strip()


def label_from_prompt(prompt: str) -> str:
    """Label from the first characters of a short prompt, lower-cased."""
    return LABEL_PREFIX + _clean(prompt[:LABEL_LENGTH].lower())


def label_from_summary(text: Optional[str]) -> Optional[str]:
    """
    Label from summarizer output.

    Args:
        text: Raw summarizer stdout

    Returns:
        Prefixed label, or None if the output has no usable line
    """
    if not text:
        return None

    for line in text.splitlines():
        line = line.strip().strip("`\"'").strip()
        if line:
            return LABEL_PREFIX + _clean(line.lower()[:LABEL_LENGTH])
    return None


def build_prompt_request(prompt: str) -> str:
    return PROMPT_REQUEST.format(prompt=prompt)


def build_activity_request(events: List[str]) -> str:
    return ACTIVITY_REQUEST.format(events="\n".join(f"- {e}" for e in events))
