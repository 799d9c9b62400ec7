"""Interactive menu console for SolMint."""

from __future__ import annotations

import logging
from importlib import metadata

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markup import escape

from solmint.cli.branding import ROLE_STYLES, render_banner, themed_console
from solmint.cli.commands import register_builtin_commands
from solmint.cli.commands.network import select_network
from solmint.cli.prompts import prompt_text, prompt_yes_no
from solmint.cli.types import CommandResponse, CommandRouter
from solmint.core import (
    ConfigContext,
    LogBuffer,
    SolMintConfig,
    collect_tool_diagnostics,
    missing_required,
)
from solmint.session import SessionState
from solmint.solana import MetadataWriteChain, ToolInvoker

logger = logging.getLogger(__name__)


def package_version() -> str:
    try:
        return metadata.version("solmint")
    except metadata.PackageNotFoundError:
        return "0.0.0"


class ConsoleApp:
    """Menu loop tying prompts, session state and the Solana workflows together."""

    def __init__(
        self,
        console: Console | None = None,
        config_context: ConfigContext | None = None,
        invoker: ToolInvoker | None = None,
        session_state: SessionState | None = None,
        log_buffer: LogBuffer | None = None,
        prompt_session: PromptSession | None = None,
    ) -> None:
        self.console = console or themed_console()
        self.config_context = config_context or ConfigContext(config=SolMintConfig(), sources=[])
        config = self.config_context.config
        self.invoker = invoker or ToolInvoker(tools=config.tool_names())
        self.session_state = session_state or SessionState()
        self.log_buffer = log_buffer or LogBuffer(redaction_enabled=config.log_redaction)
        self.network = config.network
        self.rpc_url = config.rpc_url
        self._prompt_session = prompt_session
        self.command_router = CommandRouter()
        register_builtin_commands(self, self.command_router)

    @property
    def config(self) -> SolMintConfig:
        return self.config_context.config

    @property
    def keypair_path(self) -> str:
        return self.config.resolved_keypair_path()

    def metadata_chain(self) -> MetadataWriteChain:
        return MetadataWriteChain(
            self.invoker,
            scratch_dir=self.config.resolved_scratch_dir(),
            console=self.console,
        )

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------
    def _prompt_text(self, message: str) -> str:
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        return prompt_text(self._prompt_session, message)

    def _confirm(self, message: str) -> bool:
        return prompt_yes_no(self._prompt_text, self.console, message)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def log_event(self, category: str, message: str, *, severity: str = "info") -> None:
        self.log_buffer.record(category, message, severity=severity)
        logger.debug("[%s] %s", category, message)

    def verify_tools(self) -> bool:
        self.console.print("Verifying CLI tools...")
        diagnostics = collect_tool_diagnostics(self.invoker)
        for item in diagnostics:
            if not item.found:
                if not item.required:
                    self.console.print(f"[solmint.warning]{item.name} not found.[/] {item.remediation}")
                continue
            if item.status == "warn":
                detail = item.details or "no version reported"
                logger.warning("%s version check: %s", item.name, detail)
                self.console.print(f"[solmint.warning]{item.name} version check failed ({escape(detail)}).[/]")
            else:
                self.console.print(f"  {item.name}: {escape(item.version or 'unknown')}")
        missing = missing_required(diagnostics)
        if missing:
            for item in missing:
                self.console.print(f"[solmint.error]{item.name} is not installed or not found in PATH.[/]")
                if item.remediation:
                    self.console.print(f"  {item.remediation}")
            return False
        self.console.print("[solmint.success]CLI tools verification successful![/]")
        return True

    def render_menu(self) -> None:
        self.console.print("\n[solmint.header]Main Menu:[/]")
        for command in self.command_router.available_commands():
            self.console.print(f"[solmint.menu.key]{command.key}.[/] {command.label}")
        handle = self.session_state.current_token()
        if handle is not None:
            self.console.print(f"\nCurrent token mint: {escape(handle.mint_address)}")
            if handle.account_address:
                self.console.print(f"Current token account: {escape(handle.account_address)}")
        last = self.log_buffer.latest()
        if last is not None:
            self.console.print(f"[solmint.text.secondary]Last activity: {escape(last.render())}[/]")

    def render_response(self, response: CommandResponse) -> None:
        for role, text in response.messages:
            style = ROLE_STYLES.get(role, ROLE_STYLES["system"])
            self.console.print(f"[{style}]{escape(text)}[/]")

    def handle_line(self, raw_line: str) -> CommandResponse:
        return self.command_router.dispatch(self, raw_line)

    def run(self) -> None:
        self.console.print(render_banner(package_version()))
        for source in self.config_context.sources:
            logger.info("Loaded config from %s", source)
            self.console.print(f"[solmint.text.secondary]Config: {escape(str(source))}[/]")
        if not self.verify_tools():
            self.console.print("Please ensure you have Solana CLI and SPL Token CLI installed.")
            return
        self.render_response(select_network(self))
        self.console.print(f"Network: {escape(self.network)}")

        while True:
            self.render_menu()
            try:
                choice = self._prompt_text("Select an option")
                response = self.handle_line(choice)
            except KeyboardInterrupt:
                self.console.print("Cancelled.")
                continue
            except EOFError:
                self.console.print("Exiting program. Goodbye!")
                break
            self.render_response(response)
            if not response.continue_loop:
                break


__all__ = ["ConsoleApp", "package_version"]
