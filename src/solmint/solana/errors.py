"""Error taxonomy for SolMint tool orchestration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from solmint.solana.metadata import StrategyAttempt


class SolMintError(RuntimeError):
    """Base error for failures surfaced to the operator."""


class ToolNotFound(SolMintError):
    """Raised when a required binary is missing from the execution path."""


class ToolReportedFailure(SolMintError):
    """Raised when a tool exits non-zero; the message carries its stderr."""


class ExtractionFailed(SolMintError):
    """Raised when the expected address pattern is absent from tool output."""


class ValidationFailed(SolMintError):
    """Raised when a required field is empty or malformed."""


class AllStrategiesFailed(SolMintError):
    """Raised when every metadata write strategy has been exhausted."""

    def __init__(self, last_error: str, attempts: list[StrategyAttempt] | None = None) -> None:
        super().__init__(f"All metadata creation methods failed. Last error: {last_error}")
        self.last_error = last_error
        self.attempts = list(attempts or [])


__all__ = [
    "AllStrategiesFailed",
    "ExtractionFailed",
    "SolMintError",
    "ToolNotFound",
    "ToolReportedFailure",
    "ValidationFailed",
]
