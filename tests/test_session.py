"""Tests for the session namer event handlers."""

import threading
from unittest.mock import patch

import pytest

from claude_tmux_namer.namer.labels import build_prompt_request, is_summary_request
from claude_tmux_namer.namer.session import SessionNamer
from claude_tmux_namer.tracker.events import HookEvent
from claude_tmux_namer.tracker.panes import PaneBindings
from claude_tmux_namer.tracker.state import SessionStore


class FakeSpawn:
    """Records spawned workers and hands out fake pids."""

    def __init__(self):
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, argv, input_text):
        with self._lock:
            self.calls.append((argv, input_text))
            return 60000 + len(self.calls)


@pytest.fixture
def rename():
    with patch("claude_tmux_namer.namer.session.rename_window", return_value=True) as mock_rename:
        yield mock_rename


@pytest.fixture(autouse=True)
def window_id():
    with patch("claude_tmux_namer.namer.session.window_id_for_pane", return_value="@7"):
        yield


@pytest.fixture
def spawn():
    return FakeSpawn()


@pytest.fixture
def namer(config, spawn):
    return SessionNamer(config, "%1", spawn=spawn)


def store_for(config, session_id="abc"):
    return SessionStore(config.state_dir, session_id)


# -- UserPromptSubmit --

def test_short_first_prompt_renames_immediately(namer, rename, spawn, config):
    namer.on_prompt_submit("abc", "Fix the bug")

    rename.assert_called_once_with("%1", "claude: fix the bug")
    assert spawn.calls == []
    assert store_for(config).first_message_set()


def test_prompt_at_limit_is_short(namer, rename, spawn):
    namer.on_prompt_submit("abc", "x" * 250)
    rename.assert_called_once_with("%1", "claude: " + "x" * 142)
    assert spawn.calls == []


def test_long_first_prompt_launches_worker(namer, rename, spawn, config, no_signals):
    """Prompts over 250 characters never rename synchronously."""
    prompt = "y" * 251
    namer.on_prompt_submit("abc", prompt)

    rename.assert_not_called()
    assert len(spawn.calls) == 1
    argv, request = spawn.calls[0]
    assert argv == ["--session", "abc", "--window", "@7", "--mode", "prompt"]
    assert request == build_prompt_request(prompt)
    assert store_for(config).read_pending_pid() == 60001


def test_later_prompts_only_logged(namer, rename, config):
    namer.on_prompt_submit("abc", "first")
    namer.on_prompt_submit("abc", "second")

    rename.assert_called_once()
    assert store_for(config).recent_events() == ["Prompt: first", "Prompt: second"]


def test_prompt_binds_pane(namer, config):
    namer.on_prompt_submit("abc", "hello")
    assert PaneBindings(config.state_dir).bound_session("%1") == "abc"


def test_own_summary_request_ignored(namer, rename, spawn, config):
    """The summarizer's prompt never touches state."""
    namer.on_prompt_submit("summarizer-session", build_prompt_request("x" * 300))

    rename.assert_not_called()
    assert spawn.calls == []
    assert not store_for(config, "summarizer-session").first_message_set()
    assert PaneBindings(config.state_dir).bound_session("%1") is None


def test_concurrent_first_prompts_rename_once(config, rename, spawn):
    """Only one of N racing first prompts takes the rename path."""
    barrier = threading.Barrier(6)

    def submit():
        namer = SessionNamer(config, "%1", spawn=spawn)
        barrier.wait()
        namer.on_prompt_submit("abc", "race me")

    threads = [threading.Thread(target=submit) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert rename.call_count == 1
    assert len(store_for(config).recent_events()) == 6


# -- PreToolUse / PostToolUse --

def test_pre_tool_use_logs_description(namer, rename, config):
    namer.on_pre_tool_use("abc", "Edit", {"file_path": "/src/app/main.py"})
    namer.on_pre_tool_use("abc", "Bash", {"command": "pytest"})

    assert store_for(config).recent_events() == ["Edit: main.py", "Bash: pytest"]
    rename.assert_not_called()


def test_post_tool_use_is_ignored(namer, rename, config):
    namer.handle(HookEvent(event_name="PostToolUse", session_id="abc", tool_name="Bash"))

    rename.assert_not_called()
    assert not store_for(config).path.exists()


# -- Stop --

def test_stop_before_first_prompt_is_noop(namer, spawn, config):
    store_for(config).append_event("Bash: ls")
    namer.on_stop("abc")
    assert spawn.calls == []


def test_stop_with_empty_log_never_summarizes(namer, rename, spawn, config, no_signals):
    store = store_for(config)
    store.mark_first_message()

    namer.on_stop("abc")

    assert spawn.calls == []
    rename.assert_not_called()


def test_stop_summarizes_recent_events(namer, spawn, config, no_signals):
    store = store_for(config)
    store.mark_first_message()
    for i in range(25):
        store.append_event(f"Bash: step {i}")

    namer.on_stop("abc")

    assert len(spawn.calls) == 1
    argv, request = spawn.calls[0]
    assert argv[-2:] == ["--mode", "stop"]
    assert is_summary_request(request)
    assert "step 5" in request and "step 4\n" not in request
    assert "step 24" in request


def test_stop_cancels_pending_worker(namer, spawn, config, no_signals):
    """A newer Stop replaces the in-flight prompt summarization."""
    namer.on_prompt_submit("abc", "z" * 300)
    first_pid = store_for(config).read_pending_pid()

    namer.on_stop("abc")

    no_signals.assert_any_call(first_pid)
    assert store_for(config).read_pending_pid() == 60002


def test_stop_with_empty_log_still_cancels(namer, config, no_signals):
    store = store_for(config)
    store.mark_first_message()
    store.write_pending_pid(12345)

    namer.on_stop("abc")

    no_signals.assert_called_once_with(12345)
    assert store.read_pending_pid() is None


# -- SessionEnd --

def test_session_end_resets_bound_pane(namer, rename, config):
    namer.on_prompt_submit("abc", "hello")
    rename.reset_mock()

    namer.on_session_end("abc")

    rename.assert_called_once_with("%1", "bash")
    assert PaneBindings(config.state_dir).bound_session("%1") is None


def test_session_end_mismatch_is_noop(namer, rename, config):
    """A different session ending leaves the title alone."""
    namer.on_prompt_submit("abc", "hello")
    rename.reset_mock()

    namer.on_session_end("other")

    rename.assert_not_called()
    assert PaneBindings(config.state_dir).bound_session("%1") == "abc"


def test_session_end_uses_configured_default(config, rename):
    config.default_window_name = "zsh"
    namer = SessionNamer(config, "%1")
    namer.on_prompt_submit("abc", "hello")
    namer.on_session_end("abc")
    rename.assert_called_with("%1", "zsh")


# -- dispatch --

def test_handle_skips_missing_session(namer, rename, config):
    namer.handle(HookEvent(event_name="UserPromptSubmit", session_id="", prompt="hi"))
    rename.assert_not_called()
    assert not (config.state_dir / "sessions").exists()


def test_handle_skips_invalid_session(namer, rename):
    namer.handle(HookEvent(event_name="UserPromptSubmit", session_id="../x", prompt="hi"))
    rename.assert_not_called()


def test_handle_ignores_unknown_events(namer, rename, config):
    namer.handle(HookEvent(event_name="Notification", session_id="abc"))
    rename.assert_not_called()
    assert not store_for(config).path.exists()


def test_handle_dispatches_prompt(namer, rename):
    namer.handle(HookEvent(event_name="UserPromptSubmit", session_id="abc", prompt="go"))
    rename.assert_called_once_with("%1", "claude: go")
