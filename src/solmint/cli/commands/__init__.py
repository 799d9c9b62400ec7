"""Builtin menu registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from solmint.cli.commands import logs, metadata, network, token
from solmint.cli.commands import quit as quit_cmd
from solmint.cli.types import CommandRouter

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp


def register_builtin_commands(app: ConsoleApp, router: CommandRouter) -> None:
    """Attach all builtin menu entries to the router."""

    token.register(app, router)
    metadata.register(app, router)
    network.register(app, router)
    logs.register(app, router)
    quit_cmd.register(app, router)


__all__ = ["register_builtin_commands"]
