"""Create-token workflow: mint, account, supply, authorities, metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from solmint.cli.commands.metadata import edit_metadata_flow, format_attempts
from solmint.cli.types import CommandResponse, CommandRouter, MenuCommand
from solmint.solana.authority import AuthorityReport, revoke_requested
from solmint.solana.errors import AllStrategiesFailed, SolMintError
from solmint.solana.token import (
    configure_keypair,
    create_token,
    create_token_account,
    mint_tokens,
    parse_amount,
    parse_decimals,
)

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp


def _mint_supply(app: ConsoleApp, mint: str) -> str:
    app.console.print("How many tokens would you like to mint?")
    amount = parse_amount(app._prompt_text("Amount"))
    app.console.print(f"Minting {escape(amount)} tokens...")
    mint_tokens(app.invoker, mint, amount)
    return amount


def _log_authorities(app: ConsoleApp, mint: str, report: AuthorityReport) -> None:
    for outcome in report.outcomes.values():
        if outcome.status == "not_requested":
            continue
        severity = "info" if outcome.ok else "error"
        detail = f": {outcome.reason}" if outcome.reason else ""
        app.log_event("authority", f"{outcome.kind.value} authority {outcome.status} for {mint}{detail}", severity=severity)


def create_token_flow(app: ConsoleApp) -> list[tuple[str, str]]:
    """Run the token creation workflow; raises SolMintError on a fatal step."""
    console = app.console
    console.print("\n[solmint.header]=== Create a New Token ===[/]")

    console.print("Setting keypair configuration...")
    configure_keypair(app.invoker, app.keypair_path)
    console.print("Keypair configuration set successfully.")

    default = app.config.default_decimals
    console.print("How many decimals would you like for your token?")
    console.print(f"(Press Enter for default: {default} decimals)")
    decimals, fell_back = parse_decimals(app._prompt_text("Decimals"), default)
    if fell_back:
        console.print(f"Invalid input. Using default: {default} decimals.")

    console.print(f"Creating token with {decimals} decimals...")
    mint = create_token(app.invoker, decimals)
    app.session_state.record_token(mint)
    app.log_event("token", f"Token created: {mint} ({decimals} decimals)")
    console.print(f"[solmint.success]Token created successfully![/] Token mint address: {escape(mint)}")

    console.print("Creating associated token account for the current wallet...")
    account = create_token_account(app.invoker, mint)
    app.session_state.record_token(mint, account)
    app.log_event("token", f"Token account created: {account}")
    console.print(f"[solmint.success]Token account created successfully![/] Token account address: {escape(account)}")

    messages: list[tuple[str, str]] = [("success", f"Token {mint} ready (account {account}).")]

    try:
        amount = _mint_supply(app, mint)
    except SolMintError as exc:
        app.log_event("token", f"Minting failed for {mint}: {exc}", severity="warning")
        messages.append(("warning", f"Warning: Failed to mint tokens: {exc}"))
        messages.append(("system", "You can mint tokens later using the spl-token mint command."))
    else:
        app.log_event("token", f"Minted {amount} tokens of {mint}")
        messages.append(("success", f"Successfully minted {amount} tokens!"))

    report = revoke_requested(
        mint,
        lambda kind: app._confirm(f"Would you like to revoke {kind.value} authority?"),
        app.invoker,
        console=console,
    )
    _log_authorities(app, mint, report)
    if not report.ok:
        messages.append(("warning", f"Warning: Issue with authority management: {report.summary()}"))

    if app._confirm("Would you like to add metadata to your token now?"):
        try:
            messages.extend(edit_metadata_flow(app))
        except SolMintError as exc:
            messages.append(("warning", f"Warning: Failed to add metadata: {exc}"))
            if isinstance(exc, AllStrategiesFailed):
                messages.append(("system", format_attempts(exc.attempts)))
            messages.append(("system", "You can add metadata later using option 2 from the main menu."))
    return messages


def register(_app: ConsoleApp, router: CommandRouter) -> None:
    def handle(app: ConsoleApp) -> CommandResponse:
        try:
            messages = create_token_flow(app)
        except SolMintError as exc:
            app.log_event("token", f"Token creation failed: {exc}", severity="error")
            return CommandResponse(messages=[("error", f"Error in token creation process: {exc}")])
        return CommandResponse(messages=messages)

    router.register(MenuCommand("1", "create", handle, "Create a token"))


__all__ = ["create_token_flow", "register"]
