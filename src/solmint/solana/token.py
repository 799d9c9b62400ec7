"""Thin wrappers around single `solana` / `spl-token` invocations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from solmint.solana.errors import ValidationFailed
from solmint.solana.extract import ACCOUNT_MARKERS, TOKEN_MARKERS, extract_address
from solmint.solana.invoker import ToolInvocationResult, ToolInvoker

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "mainnet-beta"
DEFAULT_DECIMALS = 9
MAX_DECIMALS = 255


@dataclass(frozen=True, slots=True)
class NetworkPreset:
    name: str
    rpc_url: str


NETWORK_PRESETS: dict[str, NetworkPreset] = {
    "mainnet-beta": NetworkPreset("mainnet-beta", "https://api.mainnet-beta.solana.com"),
    "devnet": NetworkPreset("devnet", "https://api.devnet.solana.com"),
    "testnet": NetworkPreset("testnet", "https://api.testnet.solana.com"),
}


def apply_network(invoker: ToolInvoker, rpc_url: str) -> ToolInvocationResult:
    """Point the Solana CLI at ``rpc_url``."""
    return invoker.invoke("solana", ["config", "set", "--url", rpc_url])


def configure_keypair(invoker: ToolInvoker, keypair_path: str) -> None:
    """Make ``keypair_path`` the Solana CLI's default signer."""
    path = Path(keypair_path).expanduser()
    if not path.exists():
        raise ValidationFailed(f"Keypair file not found at: {path}. Please ensure the file exists.")
    result = invoker.invoke("solana", ["config", "set", "--keypair", str(path)])
    result.raise_for_status("set keypair configuration")


def parse_decimals(raw: str, default: int = DEFAULT_DECIMALS) -> tuple[int, bool]:
    """Return ``(decimals, used_default)``; blank or invalid input falls back."""
    text = raw.strip()
    if not text:
        return default, False
    try:
        value = int(text)
    except ValueError:
        return default, True
    if value < 0 or value > MAX_DECIMALS:
        return default, True
    return value, False


def parse_amount(raw: str) -> str:
    text = raw.strip()
    if not text:
        raise ValidationFailed("Amount cannot be empty")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValidationFailed("Invalid amount format") from None
    if not value.is_finite() or value < 0:
        raise ValidationFailed("Invalid amount format")
    return text


def create_token(invoker: ToolInvoker, decimals: int) -> str:
    result = invoker.invoke("spl_token", ["create-token", "--decimals", str(decimals)])
    result.raise_for_status("create token")
    return extract_address(result.stdout, TOKEN_MARKERS)


def create_token_account(invoker: ToolInvoker, mint: str) -> str:
    result = invoker.invoke("spl_token", ["create-account", mint])
    result.raise_for_status("create token account")
    return extract_address(result.stdout, ACCOUNT_MARKERS)


def mint_tokens(invoker: ToolInvoker, mint: str, amount: str) -> None:
    result = invoker.invoke("spl_token", ["mint", mint, amount])
    result.raise_for_status("mint tokens")


def token_exists(invoker: ToolInvoker, mint: str) -> bool:
    result = invoker.invoke("spl_token", ["supply", mint])
    return result.exited_successfully


__all__ = [
    "DEFAULT_DECIMALS",
    "DEFAULT_NETWORK",
    "NETWORK_PRESETS",
    "NetworkPreset",
    "apply_network",
    "configure_keypair",
    "create_token",
    "create_token_account",
    "mint_tokens",
    "parse_amount",
    "parse_decimals",
    "token_exists",
]
