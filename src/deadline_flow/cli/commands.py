# src/deadline_flow/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import cast

from ..config import WIDGET_FAMILIES
from ..core.state import AppState
from ..tasks.remaining_time import format_remaining
from ..tasks.snapshot_decoder import decode_snapshot
from ..tasks.task_models import as_utc
from ..updates.update_models import UpdateError
from ..widget.render import render_entry

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /timeline, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_at(args: list[str]) -> datetime | str:
    """Instant from the first argument (naive = UTC), or now. Returns error text on bad input."""
    if not args:
        return datetime.now(UTC)
    try:
        return as_utc(datetime.fromisoformat(args[0]))
    except (ValueError, OverflowError):
        return f"Invalid instant: {args[0]!r}. Use ISO-8601, e.g. 2025-01-01T09:00:00Z."


def _fmt(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds")


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    keys = state.shared_defaults.keys()
    return (
        "Status:\n"
        f"  Suite: {getattr(settings, 'suite_name', '?')}\n"
        f"  Tasks key: {getattr(settings, 'tasks_key', '?')}\n"
        f"  Stored keys: {', '.join(keys) if keys else '(none)'}\n"
        f"  Refresh horizon: {getattr(settings, 'default_horizon_seconds', '?')}s, "
        f"minimum gap: {getattr(settings, 'minimum_gap_seconds', '?')}s\n"
        f"  Widget family: {state.widget_family}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks  -> decoded snapshot with per-task remaining time
    """
    result = decode_snapshot(state.provider.read_blob())
    if result.error:
        return f"Snapshot rejected (widget shows nothing): {result.error}"
    if not result.tasks:
        return "Snapshot is empty."

    now = datetime.now(UTC)
    lines = [f"Snapshot: {len(result.tasks)} task(s)"]
    for i, task in enumerate(result.tasks, start=1):
        done = " [done]" if task.is_completed else ""
        lines.append(f"{i}. {task.name}{done}  {format_remaining(task, now)}  (id={task.id})")
    return "\n".join(lines)


def cmd_timeline(state: AppState, args: list[str]) -> str:
    """
    /timeline            -> entries + refresh policy for now
    /timeline <instant>  -> same, for an ISO-8601 instant
    """
    at = _parse_at(args)
    if isinstance(at, str):
        return at

    timeline = state.provider.timeline(at)
    lines = ["Timeline:"]
    for entry in timeline.entries:
        names = ", ".join(t.name for t in entry.active_tasks) or "(nothing active)"
        lines.append(f"  {_fmt(entry.effective_instant)}  {names}")
    lines.append(f"Next refresh: {_fmt(timeline.refresh_policy.next_refresh_instant)}")
    return "\n".join(lines)


def cmd_render(state: AppState, args: list[str]) -> str:
    """
    /render [instant]  -> widget text for the first timeline entry
    """
    at = _parse_at(args)
    if isinstance(at, str):
        return at
    entry = state.provider.timeline(at).entries[0]
    return "\n".join(render_entry(entry, family=state.widget_family))


def cmd_family(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Widget family is {state.widget_family}. Use /family {' | '.join(WIDGET_FAMILIES)}."
    family = args[0].lower()
    if family not in WIDGET_FAMILIES:
        return f"Usage: /family {' | '.join(WIDGET_FAMILIES)}."
    state.widget_family = family
    return f"Widget family set to {family}."


def cmd_load(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /load <path>  -> store a JSON snapshot file under the tasks key
    """
    if not args:
        return "Usage: /load <path-to-json>"

    path = Path(" ".join(args)).expanduser()
    try:
        blob = path.read_text("utf-8")
    except OSError as exc:
        return f"Cannot read {path}: {exc}"

    result = decode_snapshot(blob)
    if result.error:
        return f"Not loaded, snapshot would be rejected: {result.error}"

    if emit:
        emit(f"[LOAD] Writing {len(result.tasks)} task(s) from {path}...")
    state.shared_defaults.set_string(getattr(state.settings, "tasks_key", "tasks"), blob)
    logger.info("Snapshot loaded from %s (%d tasks)", path, len(result.tasks))
    return f"Loaded {len(result.tasks)} task(s)."


def cmd_update(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /update           -> ask the vendor SDK whether an update is available
    /update complete  -> install a downloaded flexible update
    """
    bridge = state.update_bridge
    if bridge is None:
        return "No update manager attached to this host."

    sub = args[0].lower() if args else "check"
    if sub == "check":
        method = "checkForUpdate"
    elif sub == "complete":
        method = "completeFlexibleUpdate"
    else:
        return "Usage: /update [check | complete]"

    if emit:
        emit(f"[UPDATE] {method}...")
    try:
        data = asyncio.run(bridge.handle(method))
    except UpdateError as exc:
        return f"Update {sub} failed: {exc.kind.value}: {exc.message}"

    if data is None:
        return f"Update {sub}: done."
    lines = ["Update info:"]
    for key, value in data.items():
        lines.append(f"  {key}: {value}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage and refresh settings.")
registry.register("tasks", cmd_tasks, help_text="Show the decoded task snapshot.")
registry.register(
    "timeline", cmd_timeline, help_text="Timeline entries and next refresh: /timeline [instant]."
)
registry.register("render", cmd_render, help_text="Widget text for now or /render <instant>.")
registry.register("family", cmd_family, help_text="Widget size: /family small | medium | large.")
registry.register("load", cmd_load, help_text="Store a JSON snapshot: /load <path>.")
registry.register("update", cmd_update, help_text="In-app update: /update [check | complete].")
