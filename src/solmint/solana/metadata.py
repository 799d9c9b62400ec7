"""Token metadata writes through an ordered chain of external tools.

Three independent tools can attach Metaplex metadata to a mint, and any of
them may be missing or version-mismatched on a given machine. The chain tries
them in order and stops at the first success:

- primary: ``spl-token-metadata create`` with the fields passed as flags
- secondary: ``metaboss create metadata`` pointed at a scratch JSON document
- tertiary: ``solana program call`` against the metadata program, using the
  same document as call data

The scratch document is created the first time a strategy asks for it and is
removed when the chain finishes, whichever way it finishes.
"""

from __future__ import annotations

import json
import logging
import re
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from rich.markup import escape

from solmint.solana.errors import AllStrategiesFailed, ExtractionFailed, SolMintError, ValidationFailed
from solmint.solana.extract import METADATA_ADDRESS_MARKERS, extract_address
from solmint.solana.invoker import ToolInvocationResult, ToolInvoker, Verdict

logger = logging.getLogger(__name__)

METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
DOCUMENT_PREFIX = "solana_token_metadata_"
PLACEHOLDER_PREFIX = "metadata_"

_PATH_UNSAFE = re.compile(r"[./\\:\s]")


@dataclass(frozen=True, slots=True)
class MetadataRequest:
    """Name, symbol and URI to attach to a mint."""

    mint: str
    name: str
    symbol: str
    uri: str

    def __post_init__(self) -> None:
        empty = [label for label in ("mint", "name", "symbol", "uri") if not getattr(self, label)]
        if empty:
            raise ValidationFailed(f"{', '.join(empty)} cannot be empty. Operation canceled.")

    @classmethod
    def build(cls, *, mint: str, name: str, symbol: str, uri: str) -> MetadataRequest:
        return cls(mint=mint.strip(), name=name.strip(), symbol=symbol.strip(), uri=uri.strip())

    def document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "seller_fee_basis_points": 0,
            "creators": None,
        }


@dataclass(frozen=True, slots=True)
class MetadataDocument:
    path: Path
    contents: str


@dataclass(frozen=True, slots=True)
class MetadataAddress:
    """Metadata account for a mint.

    ``placeholder`` is set when no lookup tool produced the address; the value
    is then ``metadata_<mint>`` and is not a usable on-chain account.
    """

    address: str
    placeholder: bool = False


@dataclass(frozen=True, slots=True)
class StrategyAttempt:
    strategy: str
    verdict: Verdict
    detail: str = ""


@dataclass(slots=True)
class MetadataWriteResult:
    strategy: str
    attempts: list[StrategyAttempt] = field(default_factory=list)


def metadata_document_name(mint: str) -> str:
    """File name of the scratch document for ``mint``; a pure function of it."""
    return f"{DOCUMENT_PREFIX}{_PATH_UNSAFE.sub('_', mint)}.json"


def metadata_document_path(mint: str, scratch_dir: Path | None = None) -> Path:
    base = scratch_dir if scratch_dir is not None else Path(tempfile.gettempdir())
    return base / metadata_document_name(mint)


@contextmanager
def scratch_document(request: MetadataRequest, scratch_dir: Path | None = None) -> Iterator[MetadataDocument]:
    """Write the metadata document and remove it when the block exits."""
    path = metadata_document_path(request.mint, scratch_dir)
    contents = json.dumps(request.document(), indent=2)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents)
    except OSError as exc:
        raise SolMintError(f"Failed to write metadata file: {exc}") from exc
    logger.debug("Metadata document written to %s", path)
    try:
        yield MetadataDocument(path=path, contents=contents)
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Unable to remove metadata document %s: %s", path, exc)


def resolve_metadata_address(mint: str, invoker: ToolInvoker, *, console=None) -> MetadataAddress:
    """Look up the metadata account for ``mint``; never raises."""
    result = invoker.invoke("token_metadata", ["find", mint])
    if result.exited_successfully:
        try:
            return MetadataAddress(extract_address(result.stdout, METADATA_ADDRESS_MARKERS))
        except ExtractionFailed:
            logger.info("Metadata address marker missing from lookup output for %s", mint)
    logger.warning("Falling back to placeholder metadata address for %s", mint)
    if console:
        console.print(
            "[solmint.warning]Warning: could not determine the metadata address automatically. "
            "Using a placeholder that is not a derived address; the next step will likely fail.[/]"
        )
    return MetadataAddress(f"{PLACEHOLDER_PREFIX}{mint}", placeholder=True)


class StrategyContext:
    """Shared inputs for one pass through the chain."""

    def __init__(
        self,
        request: MetadataRequest,
        keypair_path: str,
        invoker: ToolInvoker,
        stack: ExitStack,
        *,
        scratch_dir: Path | None = None,
        console=None,
    ) -> None:
        self.request = request
        self.keypair_path = keypair_path
        self.invoker = invoker
        self.console = console
        self._stack = stack
        self._scratch_dir = scratch_dir
        self._document: MetadataDocument | None = None

    def document(self) -> MetadataDocument:
        if self._document is None:
            self._document = self._stack.enter_context(scratch_document(self.request, self._scratch_dir))
            self.note(f"Metadata file created at {escape(str(self._document.path))}")
        return self._document

    def note(self, message: str) -> None:
        if self.console:
            self.console.print(message)


class MetadataStrategy(Protocol):
    name: str
    label: str

    def attempt(self, ctx: StrategyContext) -> ToolInvocationResult:
        ...


class TokenMetadataCliStrategy:
    name = "primary"
    label = "spl-token-metadata"

    def attempt(self, ctx: StrategyContext) -> ToolInvocationResult:
        req = ctx.request
        return ctx.invoker.invoke(
            "token_metadata",
            [
                "create",
                "-k",
                ctx.keypair_path,
                "--mint",
                req.mint,
                "--name",
                req.name,
                "--symbol",
                req.symbol,
                "--uri",
                req.uri,
            ],
        )


class MetabossStrategy:
    name = "secondary"
    label = "metaboss"

    def attempt(self, ctx: StrategyContext) -> ToolInvocationResult:
        document = ctx.document()
        return ctx.invoker.invoke(
            "metaboss",
            [
                "create",
                "metadata",
                "--keypair",
                ctx.keypair_path,
                "--mint",
                ctx.request.mint,
                "--data",
                str(document.path),
            ],
        )


class DirectProgramCallStrategy:
    name = "tertiary"
    label = "direct metadata program call"

    def attempt(self, ctx: StrategyContext) -> ToolInvocationResult:
        document = ctx.document()
        metadata = resolve_metadata_address(ctx.request.mint, ctx.invoker, console=ctx.console)
        return ctx.invoker.invoke(
            "solana",
            [
                "program",
                "call",
                "--keypair",
                ctx.keypair_path,
                METADATA_PROGRAM_ID,
                "create_metadata_accounts_v3",
                metadata.address,
                ctx.request.mint,
                "--bytes",
                document.contents,
            ],
        )


DEFAULT_STRATEGIES: tuple[MetadataStrategy, ...] = (
    TokenMetadataCliStrategy(),
    MetabossStrategy(),
    DirectProgramCallStrategy(),
)


class MetadataWriteChain:
    """Runs metadata strategies in order until one succeeds."""

    def __init__(
        self,
        invoker: ToolInvoker,
        *,
        strategies: Sequence[MetadataStrategy] | None = None,
        scratch_dir: Path | None = None,
        console=None,
    ) -> None:
        self.invoker = invoker
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES
        self.scratch_dir = scratch_dir
        self.console = console

    def write(self, request: MetadataRequest, keypair_path: str) -> MetadataWriteResult:
        attempts: list[StrategyAttempt] = []
        last_error = "no metadata strategies configured"
        with ExitStack() as stack:
            ctx = StrategyContext(
                request,
                keypair_path,
                self.invoker,
                stack,
                scratch_dir=self.scratch_dir,
                console=self.console,
            )
            for strategy in self.strategies:
                ctx.note(f"Attempting metadata update using {strategy.label}...")
                result = strategy.attempt(ctx)
                detail = "" if result.exited_successfully else result.error_text
                attempts.append(StrategyAttempt(strategy.name, result.verdict, detail))
                logger.info("Metadata strategy %s for %s: %s", strategy.name, request.mint, result.verdict)
                if result.exited_successfully:
                    ctx.note(f"Metadata created using {strategy.label}")
                    return MetadataWriteResult(strategy=strategy.name, attempts=attempts)
                if result.tool_found:
                    ctx.note(f"{strategy.label} failed: {escape(detail)}")
                else:
                    ctx.note(f"{strategy.label} command not available.")
                last_error = detail
        raise AllStrategiesFailed(last_error, attempts)


__all__ = [
    "DEFAULT_STRATEGIES",
    "METADATA_PROGRAM_ID",
    "DirectProgramCallStrategy",
    "MetabossStrategy",
    "MetadataAddress",
    "MetadataDocument",
    "MetadataRequest",
    "MetadataStrategy",
    "MetadataWriteChain",
    "MetadataWriteResult",
    "StrategyAttempt",
    "StrategyContext",
    "TokenMetadataCliStrategy",
    "metadata_document_name",
    "metadata_document_path",
    "resolve_metadata_address",
    "scratch_document",
]
