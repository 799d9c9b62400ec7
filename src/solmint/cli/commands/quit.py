"""Exit entry for the SolMint menu."""

from __future__ import annotations

from typing import TYPE_CHECKING

from solmint.cli.types import CommandResponse, CommandRouter, MenuCommand

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp


def register(_app: ConsoleApp, router: CommandRouter) -> None:
    """Register the exit entry."""

    def handle(_app: ConsoleApp) -> CommandResponse:
        return CommandResponse(messages=[("system", "Exiting program. Goodbye!")], continue_loop=False)

    router.register(MenuCommand("5", "exit", handle, "Exit"))


__all__ = ["register"]
