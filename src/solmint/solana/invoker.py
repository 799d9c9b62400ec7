"""Blocking execution of external Solana command-line tools."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import Literal

from typing_extensions import TypeAlias

from solmint.solana.errors import ToolNotFound, ToolReportedFailure

logger = logging.getLogger(__name__)

Runner: TypeAlias = Callable[[list[str]], subprocess.CompletedProcess[str]]
Verdict = Literal["success", "failed", "missing"]


@dataclass(frozen=True, slots=True)
class ToolNames:
    """Executables used for each logical tool; overridable from config."""

    solana: str = "solana"
    spl_token: str = "spl-token"
    token_metadata: str = "spl-token-metadata"
    metaboss: str = "metaboss"

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, str] | None) -> ToolNames:
        if not overrides:
            return cls()
        known = {f.name for f in fields(cls)}
        updates = {key: value for key, value in overrides.items() if key in known and value}
        unknown = sorted(set(overrides) - known)
        if unknown:
            logger.warning("Ignoring unknown tool overrides: %s", ", ".join(unknown))
        return replace(cls(), **updates)


@dataclass(frozen=True, slots=True)
class ToolInvocationResult:
    """Outcome of a single external process execution."""

    command: tuple[str, ...]
    exited_successfully: bool
    stdout: str
    stderr: str
    tool_found: bool = True
    returncode: int | None = None

    @property
    def verdict(self) -> Verdict:
        if not self.tool_found:
            return "missing"
        return "success" if self.exited_successfully else "failed"

    @property
    def error_text(self) -> str:
        return self.stderr.strip() or self.stdout.strip() or f"{self.command[0]} exited with {self.returncode}"

    def raise_for_status(self, action: str) -> None:
        """Raise the taxonomy error matching this result, if any."""
        if not self.tool_found:
            raise ToolNotFound(f"Failed to {action}: '{self.command[0]}' is not installed or not on PATH.")
        if not self.exited_successfully:
            raise ToolReportedFailure(f"Failed to {action}: {self.error_text}")


def _default_runner(command: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(command, capture_output=True, text=True, check=False)  # noqa: S603


@dataclass
class ToolInvoker:
    """Runs one tool at a time and classifies the result.

    Spawn failures are reported as ``tool_found=False`` rather than raised.
    There is no timeout: a hung tool blocks the caller until it exits.
    """

    tools: ToolNames = field(default_factory=ToolNames)
    runner: Runner | None = None

    def invoke(self, tool: str, args: Sequence[str]) -> ToolInvocationResult:
        executable = getattr(self.tools, tool, tool)
        command = [executable, *args]
        logger.debug("Invoking %s", " ".join(command))
        run = self.runner or _default_runner
        try:
            completed = run(command)
        except OSError as exc:
            logger.info("Unable to spawn %s: %s", executable, exc)
            return ToolInvocationResult(
                command=tuple(command),
                exited_successfully=False,
                stdout="",
                stderr=str(exc),
                tool_found=False,
            )
        result = ToolInvocationResult(
            command=tuple(command),
            exited_successfully=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
        logger.debug("%s finished with %s (%s)", executable, completed.returncode, result.verdict)
        return result


__all__ = ["Runner", "ToolInvocationResult", "ToolInvoker", "ToolNames", "Verdict"]
