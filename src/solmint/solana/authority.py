"""Mint, freeze and metadata update authority revocation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from rich.markup import escape

from solmint.solana.invoker import ToolInvocationResult, ToolInvoker
from solmint.solana.metadata import resolve_metadata_address

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["revoked", "failed", "not_requested"]


class AuthorityKind(str, Enum):
    MINT = "mint"
    FREEZE = "freeze"
    UPDATE = "update"


TOKEN_AUTHORITIES: tuple[AuthorityKind, ...] = (AuthorityKind.MINT, AuthorityKind.FREEZE)


@dataclass(frozen=True, slots=True)
class AuthorityOutcome:
    kind: AuthorityKind
    status: OutcomeStatus
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"


@dataclass(slots=True)
class AuthorityReport:
    """Per-kind outcomes for one revocation pass."""

    outcomes: dict[AuthorityKind, AuthorityOutcome] = field(default_factory=dict)

    def record(self, outcome: AuthorityOutcome) -> None:
        if outcome.kind in self.outcomes:
            raise ValueError(f"{outcome.kind.value} authority already decided in this pass")
        self.outcomes[outcome.kind] = outcome

    def outcome(self, kind: AuthorityKind) -> AuthorityOutcome | None:
        return self.outcomes.get(kind)

    @property
    def failures(self) -> list[AuthorityOutcome]:
        return [outcome for outcome in self.outcomes.values() if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        if self.ok:
            return "Authority management completed."
        kinds = ", ".join(outcome.kind.value for outcome in self.failures)
        return f"Authority revocation failed for: {kinds}"


def revoke_authority(mint: str, kind: AuthorityKind, invoker: ToolInvoker) -> ToolInvocationResult:
    """Disable ``kind`` authority on ``mint`` via ``spl-token authorize``."""
    return invoker.invoke("spl_token", ["authorize", mint, kind.value, "--disable"])


def revoke_requested(
    mint: str,
    confirm: Callable[[AuthorityKind], bool],
    invoker: ToolInvoker,
    *,
    kinds: Sequence[AuthorityKind] = TOKEN_AUTHORITIES,
    console=None,
) -> AuthorityReport:
    """Offer each authority in order and revoke the accepted ones.

    A failure on one kind never prevents the next one from being attempted.
    """
    report = AuthorityReport()
    for kind in kinds:
        if not confirm(kind):
            report.record(AuthorityOutcome(kind, "not_requested"))
            continue
        if console:
            console.print(f"Revoking {kind.value} authority...")
        result = revoke_authority(mint, kind, invoker)
        if result.exited_successfully:
            outcome = AuthorityOutcome(kind, "revoked")
            if console:
                console.print(f"[solmint.success]{kind.value.capitalize()} authority revoked successfully.[/]")
        else:
            outcome = AuthorityOutcome(kind, "failed", result.error_text)
            if console:
                console.print(
                    f"[solmint.error]Failed to revoke {kind.value} authority:[/] {escape(result.error_text)}"
                )
        logger.info("%s authority on %s: %s", kind.value, mint, outcome.status)
        report.record(outcome)
    return report


def revoke_update_authority(mint: str, keypair_path: str, invoker: ToolInvoker, *, console=None) -> AuthorityOutcome:
    """Revoke the metadata update authority, falling back to metaboss."""
    primary = invoker.invoke(
        "token_metadata",
        [
            "update",
            "authority",
            "--keypair",
            keypair_path,
            "--mint",
            mint,
            "--new-update-authority",
            "null",
        ],
    )
    if primary.exited_successfully:
        return AuthorityOutcome(AuthorityKind.UPDATE, "revoked")
    if console:
        if primary.tool_found:
            console.print("First method failed, trying alternative...")
        else:
            console.print("spl-token-metadata command not available, trying alternative...")

    metadata = resolve_metadata_address(mint, invoker, console=console)
    fallback = invoker.invoke(
        "metaboss",
        [
            "update",
            "authority",
            "--keypair",
            keypair_path,
            "--account",
            metadata.address,
            "--new-authority",
            "null",
        ],
    )
    if fallback.exited_successfully:
        return AuthorityOutcome(AuthorityKind.UPDATE, "revoked")
    if not fallback.tool_found:
        reason = f"Error with alternative method: {fallback.error_text}"
    else:
        reason = fallback.error_text
    logger.info("update authority on %s: failed (%s)", mint, reason)
    return AuthorityOutcome(AuthorityKind.UPDATE, "failed", reason)


__all__ = [
    "AuthorityKind",
    "AuthorityOutcome",
    "AuthorityReport",
    "TOKEN_AUTHORITIES",
    "revoke_authority",
    "revoke_requested",
    "revoke_update_authority",
]
