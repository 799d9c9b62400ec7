"""Shared CLI types and routing helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp
else:  # pragma: no cover - runtime only
    ConsoleApp = Any  # type: ignore[assignment]


logger = logging.getLogger(__name__)


@dataclass
class CommandResponse:
    """Represents the outcome of a menu selection.

    ``messages`` holds ``(role, text)`` pairs where role is one of
    ``system``, ``success``, ``warning`` or ``error``.
    """

    messages: list[tuple[str, str]]
    continue_loop: bool = True


class MenuCommand:
    """A numbered main-menu entry."""

    def __init__(
        self,
        key: str,
        name: str,
        handler: Callable[[ConsoleApp], CommandResponse],
        label: str,
    ) -> None:
        self.key = key
        self.name = name
        self.handler = handler
        self.label = label


class CommandRouter:
    """Dispatches menu selections by number or by name."""

    def __init__(self) -> None:
        self._commands: dict[str, MenuCommand] = {}

    def register(self, command: MenuCommand) -> None:
        logger.debug("Registering menu entry %s: %s", command.key, command.name)
        self._commands[command.key] = command

    def available_commands(self) -> Iterable[MenuCommand]:
        return sorted(self._commands.values(), key=lambda cmd: cmd.key)

    def resolve(self, raw: str) -> MenuCommand | None:
        choice = raw.strip().lower()
        if choice in self._commands:
            return self._commands[choice]
        for command in self._commands.values():
            if command.name == choice:
                return command
        return None

    def dispatch(self, app: ConsoleApp, raw_line: str) -> CommandResponse:
        if not raw_line.strip():
            return CommandResponse(messages=[])
        command = self.resolve(raw_line)
        if command is None:
            logger.info("Unknown menu option: %s", raw_line.strip())
            return CommandResponse(messages=[("error", "Invalid option. Please try again.")])
        logger.debug("Dispatching menu entry '%s'", command.name)
        return command.handler(app)


__all__ = ["CommandResponse", "CommandRouter", "MenuCommand"]
