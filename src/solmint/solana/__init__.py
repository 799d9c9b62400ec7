"""Solana tool orchestration for SolMint."""

from .authority import AuthorityKind, AuthorityOutcome, AuthorityReport, revoke_requested, revoke_update_authority
from .errors import (
    AllStrategiesFailed,
    ExtractionFailed,
    SolMintError,
    ToolNotFound,
    ToolReportedFailure,
    ValidationFailed,
)
from .invoker import ToolInvocationResult, ToolInvoker, ToolNames
from .metadata import MetadataRequest, MetadataWriteChain, MetadataWriteResult

__all__ = [
    "AllStrategiesFailed",
    "AuthorityKind",
    "AuthorityOutcome",
    "AuthorityReport",
    "ExtractionFailed",
    "MetadataRequest",
    "MetadataWriteChain",
    "MetadataWriteResult",
    "SolMintError",
    "ToolInvocationResult",
    "ToolInvoker",
    "ToolNames",
    "ToolNotFound",
    "ToolReportedFailure",
    "ValidationFailed",
    "revoke_requested",
    "revoke_update_authority",
]
