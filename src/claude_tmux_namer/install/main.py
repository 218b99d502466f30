"""Installation and inspection CLI for claude-tmux-namer."""

import argparse
import sys
from pathlib import Path

from claude_tmux_namer.config import NamerConfig
from claude_tmux_namer.install.hooks import (
    add_hooks,
    get_claude_settings_path,
    is_hook_installed,
    read_settings,
    remove_hooks,
    write_settings,
)
from claude_tmux_namer.tracker.panes import PaneBindings
from claude_tmux_namer.tracker.state import SessionStore
from claude_tmux_namer.tracker.tasks import is_alive

HOOK_NAME = "claude-tmux-namer-hook"


def get_hook_command(mode: str) -> str:
    """Get the hook command based on installation mode.

    Args:
        mode: Either 'development' or 'installed'

    Returns:
        Command string to run the hook
    """
    if mode == "development":
        # Find project root (where pyproject.toml is)
        current = Path(__file__).resolve()
        for parent in current.parents:
            if (parent / "pyproject.toml").exists():
                return f"uv run --project {parent} {HOOK_NAME}"
        return f"uv run {HOOK_NAME}"
    return HOOK_NAME


def install(mode: str) -> int:
    """Register the hook in Claude Code settings."""
    print(f"Installing claude-tmux-namer ({mode} mode)...")

    settings_path = get_claude_settings_path()
    settings = read_settings(settings_path)

    if is_hook_installed(settings, HOOK_NAME):
        print("   Hooks already installed, updating...")
        settings = remove_hooks(settings, HOOK_NAME)

    settings = add_hooks(settings, get_hook_command(mode))
    write_settings(settings_path, settings)
    print(f"   Updated {settings_path}")
    return 0


def uninstall() -> int:
    """Remove the hook from Claude Code settings."""
    print("Uninstalling claude-tmux-namer...")

    settings_path = get_claude_settings_path()
    settings = read_settings(settings_path)
    settings = remove_hooks(settings, HOOK_NAME)
    write_settings(settings_path, settings)
    print(f"   Updated {settings_path}")
    print("   Session state left in place")
    return 0


def status(config: NamerConfig) -> int:
    """Print hook installation and per-session state."""
    settings_path = get_claude_settings_path()
    installed = is_hook_installed(read_settings(settings_path), HOOK_NAME)
    print(f"Hook installed: {'yes' if installed else 'no'} ({settings_path})")
    print(f"State directory: {config.state_dir}")

    bindings = PaneBindings(config.state_dir).all()
    print(f"\nPANE BINDINGS ({len(bindings)}):")
    for pane_id, session_id in sorted(bindings.items()):
        print(f"  {pane_id} -> {session_id}")

    sessions_dir = config.state_dir / "sessions"
    session_ids = []
    if sessions_dir.is_dir():
        session_ids = sorted(p.name for p in sessions_dir.iterdir() if p.is_dir())

    print(f"\nSESSIONS ({len(session_ids)}):")
    for session_id in session_ids:
        try:
            store = SessionStore(config.state_dir, session_id)
        except ValueError:
            continue
        pid = store.read_pending_pid()
        if pid is None:
            pending = "-"
        elif is_alive(pid):
            pending = str(pid)
        else:
            pending = f"{pid} (dead)"
        print(
            f"  {session_id[:8]}... first_message={'yes' if store.first_message_set() else 'no'} "
            f"events={len(store.recent_events(limit=None))} pending={pending}"
        )
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Install, uninstall or inspect claude-tmux-namer"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    install_parser = subparsers.add_parser("install", help="Install the hook")
    install_parser.add_argument(
        "--mode",
        choices=["development", "installed"],
        default="installed",
        help="Installation mode (default: installed)"
    )

    subparsers.add_parser("uninstall", help="Uninstall the hook")
    subparsers.add_parser("status", help="Show hook and session state")

    args = parser.parse_args()

    if args.command == "install":
        return install(args.mode)
    elif args.command == "uninstall":
        return uninstall()
    elif args.command == "status":
        return status(NamerConfig.from_env())
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
