"""CLI package for SolMint."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from solmint.core import DEFAULT_CONFIG_DIR, ConfigManager, ConfigurationError
from solmint.core.config import CONFIG_FILENAME
from solmint.solana.token import NETWORK_PRESETS

from .app import ConsoleApp, package_version
from .branding import themed_console

app = typer.Typer(invoke_without_command=True, help="SolMint token manager", no_args_is_help=False)

CLI_CONSOLE = themed_console()


def styled_echo(message: str = "", *, nl: bool = True) -> None:
    """Print using the SolMint themed console."""
    CLI_CONSOLE.print(message, end="" if not nl else "\n")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"", "0", "false", "no"}


def _configure_logging(verbose: bool, log_dir: Path | None) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        root_logger.setLevel(logging.DEBUG)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "solmint.log", encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root_logger.addHandler(handler)


def _build_config_manager(config_file: Path | None) -> ConfigManager:
    config_override_path: Path | None = None
    if config_file is not None:
        config_override_path = config_file.expanduser()
        if not config_override_path.exists():
            styled_echo(f"❌ Config file '{config_override_path}' not found.")
            raise typer.Exit(code=1)
        config_override_path = config_override_path.resolve()

    project_config_path: Path | None = None
    if config_override_path is None:
        candidate = Path.cwd() / ".solmint" / CONFIG_FILENAME
        if candidate.exists():
            project_config_path = candidate

    return ConfigManager(
        config_dir=DEFAULT_CONFIG_DIR,
        project_config_path=project_config_path,
        override_config_path=config_override_path,
    )


def _launch_console(
    verbose: bool,
    config_file: Path | None,
    *,
    keypair: str | None = None,
    network: str | None = None,
) -> None:
    _configure_logging(verbose or _env_flag("SOLMINT_DEBUG"), log_dir=DEFAULT_CONFIG_DIR / "logs")
    manager = _build_config_manager(config_file)
    overrides: dict[str, str | None] = {"keypair_path": keypair, "network": network}
    if network in NETWORK_PRESETS:
        overrides["rpc_url"] = NETWORK_PRESETS[network].rpc_url
    try:
        config_context = manager.load(**overrides)
    except ConfigurationError as exc:
        styled_echo(f"❌ {exc}")
        raise typer.Exit(code=1) from exc
    ConsoleApp(console=CLI_CONSOLE, config_context=config_context).run()


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _launch_console(False, None)


@app.command()
def run(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Use an alternate config file and skip project overrides"),  # noqa: B008
    keypair: str | None = typer.Option(None, "--keypair", help="Keypair file for this run"),  # noqa: B008
    network: str | None = typer.Option(None, "--network", help="Initial network (mainnet-beta, devnet, testnet)"),  # noqa: B008
) -> None:
    """Launch the SolMint interactive menu."""
    _launch_console(verbose, config, keypair=keypair, network=network)


@app.command()
def version() -> None:
    """Show CLI version."""
    styled_echo(f"SolMint CLI version {package_version()}")


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),  # noqa: B008
) -> None:
    """Write a default config file to the SolMint home directory."""
    manager = ConfigManager(config_dir=DEFAULT_CONFIG_DIR)
    try:
        path = manager.write_default(force=force)
    except ConfigurationError as exc:
        styled_echo(f"❌ {exc}")
        raise typer.Exit(code=1) from exc
    styled_echo(f"✅ Config written to {path}")


def main() -> None:
    """Console script entrypoint."""
    app()


__all__ = ["ConsoleApp", "app", "main"]
