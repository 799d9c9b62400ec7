"""Startup checks for the command-line tools SolMint drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from solmint.solana.invoker import ToolInvoker


@dataclass(frozen=True)
class ToolRequirement:
    name: str
    tool: str
    version_args: list[str]
    remediation: str
    required: bool = True


@dataclass(frozen=True)
class DiagnosticResult:
    name: str
    status: str
    found: bool
    version: str | None
    remediation: str | None
    required: bool = True
    details: str | None = None


TOOL_REQUIREMENTS: tuple[ToolRequirement, ...] = (
    ToolRequirement(
        name="Solana CLI",
        tool="solana",
        version_args=["--version"],
        remediation="Install the Solana CLI: https://docs.solana.com/cli/install-solana-cli",
    ),
    ToolRequirement(
        name="SPL Token CLI",
        tool="spl_token",
        version_args=["--version"],
        remediation="Install with `cargo install spl-token-cli` and ensure `$HOME/.cargo/bin` is on your PATH.",
    ),
    ToolRequirement(
        name="SPL Token Metadata CLI",
        tool="token_metadata",
        version_args=["--version"],
        remediation="Optional: install spl-token-metadata to enable the primary metadata method.",
        required=False,
    ),
    ToolRequirement(
        name="Metaboss",
        tool="metaboss",
        version_args=["--version"],
        remediation="Optional: install metaboss (https://metaboss.rs) to enable the secondary metadata method.",
        required=False,
    ),
)


def collect_tool_diagnostics(
    invoker: ToolInvoker,
    *,
    tools: Iterable[ToolRequirement] = TOOL_REQUIREMENTS,
) -> List[DiagnosticResult]:
    results: List[DiagnosticResult] = []
    for tool in tools:
        completed = invoker.invoke(tool.tool, tool.version_args)
        if not completed.tool_found:
            results.append(
                DiagnosticResult(
                    name=tool.name,
                    status="missing",
                    found=False,
                    version=None,
                    remediation=tool.remediation,
                    required=tool.required,
                    details=completed.stderr or None,
                )
            )
            continue

        output = (completed.stdout or completed.stderr).strip()
        version = output.splitlines()[0].strip() if output else "unknown"
        status = "ok" if completed.exited_successfully and output else "warn"
        details = None
        if not completed.exited_successfully:
            details = f"Non-zero exit code: {completed.returncode}"
        results.append(
            DiagnosticResult(
                name=tool.name,
                status=status,
                found=True,
                version=version,
                remediation=None if status == "ok" else tool.remediation,
                required=tool.required,
                details=details,
            )
        )
    return results


def missing_required(diagnostics: Iterable[DiagnosticResult]) -> list[DiagnosticResult]:
    return [item for item in diagnostics if item.required and not item.found]


__all__ = [
    "DiagnosticResult",
    "TOOL_REQUIREMENTS",
    "ToolRequirement",
    "collect_tool_diagnostics",
    "missing_required",
]
