"""Edit-metadata workflow: choose a mint, write metadata, optionally lock it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from solmint.cli.types import CommandResponse, CommandRouter, MenuCommand
from solmint.solana.authority import revoke_update_authority
from solmint.solana.errors import AllStrategiesFailed, SolMintError, ValidationFailed
from solmint.solana.metadata import DEFAULT_STRATEGIES, MetadataRequest, StrategyAttempt
from solmint.solana.token import configure_keypair, token_exists

if TYPE_CHECKING:  # pragma: no cover
    from solmint.cli.app import ConsoleApp

_STRATEGY_LABELS = {strategy.name: strategy.label for strategy in DEFAULT_STRATEGIES}


def format_attempts(attempts: list[StrategyAttempt]) -> str:
    lines = ["Attempts:"]
    for index, attempt in enumerate(attempts, start=1):
        label = _STRATEGY_LABELS.get(attempt.strategy, attempt.strategy)
        line = f"  {index}. {label}: {attempt.verdict}"
        if attempt.detail:
            line += f" ({attempt.detail})"
        lines.append(line)
    return "\n".join(lines)


def _choose_mint(app: ConsoleApp) -> str:
    handle = app.session_state.current_token()
    if handle is not None and app._confirm(f"Use current token ({handle.mint_address})?"):
        return handle.mint_address
    return app._prompt_text("Enter token mint address").strip()


def edit_metadata_flow(app: ConsoleApp) -> list[tuple[str, str]]:
    """Run the metadata workflow; raises SolMintError on a fatal step."""
    console = app.console
    console.print("\n[solmint.header]=== Edit Token Metadata ===[/]")

    mint = _choose_mint(app)
    if not mint:
        raise ValidationFailed("Invalid token mint address. Operation canceled.")

    console.print(f"Verifying token: {escape(mint)}")
    if not token_exists(app.invoker, mint):
        raise SolMintError("Token does not exist or is not accessible. Operation canceled.")

    request = MetadataRequest.build(
        mint=mint,
        name=app._prompt_text("Enter token name"),
        symbol=app._prompt_text("Enter token symbol"),
        uri=app._prompt_text("Enter metadata URI (e.g., link to JSON file)"),
    )

    configure_keypair(app.invoker, app.keypair_path)
    console.print("Updating token metadata...")
    try:
        result = app.metadata_chain().write(request, app.keypair_path)
    except AllStrategiesFailed as exc:
        app.log_event("metadata", f"Metadata write failed for {mint}: {exc.last_error}", severity="error")
        raise
    label = _STRATEGY_LABELS.get(result.strategy, result.strategy)
    app.log_event("metadata", f"Metadata written for {mint} via {label}")
    messages: list[tuple[str, str]] = [("success", f"Metadata updated successfully! (method: {label})")]

    if app._confirm("Would you like to revoke update authority?"):
        console.print("Revoking update authority...")
        outcome = revoke_update_authority(mint, app.keypair_path, app.invoker, console=console)
        if outcome.ok:
            app.log_event("authority", f"Update authority revoked for {mint}")
            messages.append(("success", "Update authority revoked successfully."))
        else:
            app.log_event("authority", f"Update authority revocation failed for {mint}: {outcome.reason}", severity="error")
            messages.append(("error", f"Failed to revoke update authority: {outcome.reason}"))
    return messages


def register(_app: ConsoleApp, router: CommandRouter) -> None:
    def handle(app: ConsoleApp) -> CommandResponse:
        try:
            messages = edit_metadata_flow(app)
        except AllStrategiesFailed as exc:
            return CommandResponse(
                messages=[
                    ("error", f"Error in metadata process: {exc}"),
                    ("system", format_attempts(exc.attempts)),
                ]
            )
        except SolMintError as exc:
            return CommandResponse(messages=[("error", f"Error in metadata process: {exc}")])
        return CommandResponse(messages=messages)

    router.register(MenuCommand("2", "metadata", handle, "Edit metadata"))


__all__ = ["edit_metadata_flow", "format_attempts", "register"]
