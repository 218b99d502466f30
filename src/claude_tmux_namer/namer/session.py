"""Map lifecycle events to window renames."""

import logging
from typing import Any, Dict, Optional

from claude_tmux_namer.config import (
    NamerConfig,
    RECENT_EVENTS_LIMIT,
    SHORT_PROMPT_LIMIT,
)
from claude_tmux_namer.namer.labels import (
    build_activity_request,
    build_prompt_request,
    is_summary_request,
    label_from_prompt,
)
from claude_tmux_namer.tmux import rename_window, window_id_for_pane
from claude_tmux_namer.tracker.events import HookEvent, describe_tool_use
from claude_tmux_namer.tracker.panes import PaneBindings
from claude_tmux_namer.tracker.state import SessionStore, validate_session_id
from claude_tmux_namer.tracker.tasks import SpawnFunc, SummaryTasks, spawn_worker

logger = logging.getLogger(__name__)


class SessionNamer:
    """Names the tmux window of one pane after its Claude session."""

    def __init__(
        self,
        config: NamerConfig,
        pane_id: str,
        panes: Optional[PaneBindings] = None,
        spawn: SpawnFunc = spawn_worker,
    ):
        self.config = config
        self.pane_id = pane_id
        self.panes = panes or PaneBindings(config.state_dir)
        self._spawn = spawn

    def handle(self, event: HookEvent) -> None:
        """Dispatch one hook event."""
        if not event.session_id:
            logger.debug(f"Skipping {event.event_name}: no session id")
            return
        try:
            validate_session_id(event.session_id)
        except ValueError as e:
            logger.warning(f"Skipping {event.event_name}: {e}")
            return

        name = event.event_name
        if name == "UserPromptSubmit":
            self.on_prompt_submit(event.session_id, event.prompt)
        elif name == "PreToolUse":
            self.on_pre_tool_use(event.session_id, event.tool_name, event.tool_input)
        elif name == "PostToolUse":
            self.on_post_tool_use(event.session_id)
        elif name == "Stop":
            self.on_stop(event.session_id)
        elif name == "SessionEnd":
            self.on_session_end(event.session_id)
        else:
            logger.debug(f"Ignoring event {name}")

    def on_prompt_submit(self, session_id: str, prompt: str) -> None:
        if is_summary_request(prompt):
            logger.debug(f"Skipping our own summary request in {session_id[:8]}...")
            return

        store = self._store(session_id)
        self.panes.bind(self.pane_id, session_id)
        store.append_event(f"Prompt: {prompt}")

        if not store.mark_first_message():
            return

        logger.info(f"FIRST_PROMPT session={session_id} length={len(prompt)}")
        if len(prompt) <= SHORT_PROMPT_LIMIT:
            rename_window(self.pane_id, label_from_prompt(prompt))
            return

        self._launch(store, "prompt", build_prompt_request(prompt))

    def on_pre_tool_use(
        self,
        session_id: str,
        tool_name: Optional[str],
        tool_input: Optional[Dict[str, Any]],
    ) -> None:
        self._store(session_id).append_event(describe_tool_use(tool_name, tool_input))

    def on_post_tool_use(self, session_id: str) -> None:
        """PostToolUse carries nothing we need."""

    def on_stop(self, session_id: str) -> None:
        store = self._store(session_id)
        if not store.first_message_set():
            return

        tasks = SummaryTasks(store, self._spawn)
        tasks.cancel()

        events = store.recent_events(RECENT_EVENTS_LIMIT)
        if not events:
            logger.debug(f"No recent activity for {session_id[:8]}..., keeping title")
            return

        self._launch(store, "stop", build_activity_request(events), tasks)

    def on_session_end(self, session_id: str) -> None:
        if self.panes.bound_session(self.pane_id) != session_id:
            return

        rename_window(self.pane_id, self.config.default_window_name)
        self.panes.unbind(self.pane_id, session_id)
        logger.info(f"SESSION_END session={session_id} pane={self.pane_id}")

    def _store(self, session_id: str) -> SessionStore:
        return SessionStore(self.config.state_dir, session_id)

    def _launch(
        self,
        store: SessionStore,
        mode: str,
        request: str,
        tasks: Optional[SummaryTasks] = None,
    ) -> Optional[int]:
        # Resolve now: the pane may be gone by the time the summary arrives
        window = window_id_for_pane(self.pane_id) or self.pane_id
        tasks = tasks or SummaryTasks(store, self._spawn)
        argv = ["--session", store.session_id, "--window", window, "--mode", mode]
        return tasks.launch(argv, request)
