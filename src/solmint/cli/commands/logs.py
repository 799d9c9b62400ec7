"""Activity log viewer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from solmint.cli.types import CommandResponse, CommandRouter, MenuCommand
from solmint.core.logs import LOG_CATEGORIES

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp

_SEVERITY_ROLES = {"info": "system", "warning": "warning", "error": "error"}
_VIEW_LIMIT = 20


def show_activity(app: ConsoleApp) -> CommandResponse:
    if not len(app.log_buffer):
        return CommandResponse(messages=[("system", "No activity recorded yet.")])

    choices = ", ".join(LOG_CATEGORIES)
    category = app._prompt_text(f"Filter by category ({choices}; blank for all)").strip().lower()
    if category and category not in LOG_CATEGORIES:
        return CommandResponse(messages=[("error", f"Unknown category '{category}'. Choose one of: {choices}.")])

    entries = app.log_buffer.recent(category=category or None, limit=_VIEW_LIMIT)
    if not entries:
        return CommandResponse(messages=[("system", f"No {category} activity recorded yet.")])
    return CommandResponse(messages=[(_SEVERITY_ROLES[entry.severity], entry.render()) for entry in entries])


def register(_app: ConsoleApp, router: CommandRouter) -> None:
    router.register(MenuCommand("4", "logs", show_activity, "View activity log"))


__all__ = ["register", "show_activity"]
