"""Tests for window labels."""

from claude_tmux_namer.namer.labels import (
    SUMMARY_MARKER,
    build_activity_request,
    build_prompt_request,
    is_summary_request,
    label_from_prompt,
    label_from_summary,
)


def test_short_prompt_label():
    assert label_from_prompt("fix the bug") == "claude: fix the bug"


def test_prompt_label_is_lowercased_and_truncated():
    """Labels use the first 142 characters, lower-cased."""
    prompt = "A" * 200
    assert label_from_prompt(prompt) == "claude: " + "a" * 142


def test_prompt_label_is_one_line():
    assert label_from_prompt("Fix\nthe\tbug") == "claude: fix the bug"


def test_summary_label_takes_first_line():
    assert label_from_summary("\n  Refactor Auth Flow \nextra") == "claude: refactor auth flow"


def test_summary_label_strips_quotes():
    assert label_from_summary('"fixing login"') == "claude: fixing login"
    assert label_from_summary("`db migration`") == "claude: db migration"


def test_empty_summary_has_no_label():
    assert label_from_summary(None) is None
    assert label_from_summary("") is None
    assert label_from_summary(" \n\"\"\n ") is None


def test_requests_carry_marker():
    """Our own requests are recognised by the recursion guard."""
    assert is_summary_request(build_prompt_request("do the thing"))
    assert is_summary_request(build_activity_request(["Bash: ls"]))


def test_user_prompt_is_not_summary_request():
    assert not is_summary_request("fix the bug")
    assert not is_summary_request(f"please explain {SUMMARY_MARKER}")


def test_activity_request_lists_events():
    request = build_activity_request(["Prompt: fix it", "Edit: main.py"])
    assert "- Prompt: fix it\n- Edit: main.py" in request
