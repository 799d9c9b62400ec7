"""Prompt helpers for the interactive console."""

from __future__ import annotations

from collections.abc import Callable

from prompt_toolkit import PromptSession
from rich.console import Console

_YES = {"yes", "y"}
_NO = {"no", "n"}


def prompt_text(session: PromptSession, message: str) -> str:
    """Prompt the user for plain text input."""
    return session.prompt(f"{message}: ", is_password=False)


def prompt_yes_no(ask: Callable[[str], str], console: Console, message: str) -> bool:
    """Ask until the answer is yes/y or no/n."""
    while True:
        answer = ask(f"{message} (yes/no)").strip().lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        console.print("Please enter 'yes' or 'no'")


__all__ = ["prompt_text", "prompt_yes_no"]
