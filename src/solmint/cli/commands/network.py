"""Solana network selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from solmint.cli.types import CommandResponse, CommandRouter, MenuCommand
from solmint.solana.token import DEFAULT_NETWORK, NETWORK_PRESETS, apply_network

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp

_CHOICES = {
    "1": "mainnet-beta",
    "2": "devnet",
    "3": "testnet",
}


def select_network(app: ConsoleApp) -> CommandResponse:
    console = app.console
    console.print("\n[solmint.header]Select Solana network:[/]")
    for key, name in _CHOICES.items():
        console.print(f"{key}. {name} ({NETWORK_PRESETS[name].rpc_url})")
    console.print("4. Custom RPC URL")

    choice = app._prompt_text(f"Select network (default: {app.network})").strip()
    if choice in _CHOICES:
        network = _CHOICES[choice]
        rpc_url = NETWORK_PRESETS[network].rpc_url
    elif choice == "4":
        custom = app._prompt_text("Enter custom RPC URL").strip()
        if custom:
            network, rpc_url = "custom", custom
        else:
            network, rpc_url = DEFAULT_NETWORK, NETWORK_PRESETS[DEFAULT_NETWORK].rpc_url
    else:
        network, rpc_url = app.network, app.rpc_url

    console.print(f"Setting Solana network to {escape(network)}...")
    result = apply_network(app.invoker, rpc_url)
    if result.exited_successfully:
        app.network, app.rpc_url = network, rpc_url
        app.log_event("network", f"Network set to {network} ({rpc_url})")
        return CommandResponse(messages=[("success", f"Network set to {network} successfully.")])

    reason = result.error_text if result.tool_found else f"Error executing network command: {result.error_text}"
    app.network = DEFAULT_NETWORK
    app.rpc_url = NETWORK_PRESETS[DEFAULT_NETWORK].rpc_url
    app.log_event("network", f"Failed to set network {network}: {reason}", severity="warning")
    return CommandResponse(
        messages=[
            ("warning", f"Warning: Failed to set network: {reason}"),
            ("warning", f"Using default network: {DEFAULT_NETWORK}"),
        ]
    )


def register(_app: ConsoleApp, router: CommandRouter) -> None:
    router.register(MenuCommand("3", "network", select_network, "Switch network"))


__all__ = ["register", "select_network"]
