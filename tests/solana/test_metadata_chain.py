from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from solmint.solana.errors import AllStrategiesFailed, ValidationFailed
from solmint.solana.invoker import ToolInvoker
from solmint.solana.metadata import (
    METADATA_PROGRAM_ID,
    MetadataRequest,
    MetadataWriteChain,
    metadata_document_name,
    metadata_document_path,
    resolve_metadata_address,
    scratch_document,
)

MINT = "AbC123"


def _request(mint: str = MINT) -> MetadataRequest:
    return MetadataRequest.build(mint=mint, name=" Demo ", symbol="DMO", uri="https://example.com/demo.json")


def test_request_strips_and_rejects_blank_fields() -> None:
    request = _request()
    assert request.name == "Demo"

    with pytest.raises(ValidationFailed, match="name, symbol cannot be empty"):
        MetadataRequest.build(mint=MINT, name="  ", symbol="", uri="https://example.com")


def test_document_contents() -> None:
    assert _request().document() == {
        "name": "Demo",
        "symbol": "DMO",
        "uri": "https://example.com/demo.json",
        "seller_fee_basis_points": 0,
        "creators": None,
    }


def test_document_name_normalizes_separators() -> None:
    assert metadata_document_name("So1/ana.mint:x y") == "solana_token_metadata_So1_ana_mint_x_y.json"
    assert metadata_document_name("AbC123") == metadata_document_name("AbC123")


def test_scratch_document_removed_after_block(tmp_path: Path) -> None:
    with scratch_document(_request(), tmp_path) as document:
        assert document.path.exists()
        assert json.loads(document.path.read_text())["symbol"] == "DMO"
    assert not document.path.exists()


def test_primary_success_never_writes_document(tmp_path: Path, fake_runner, invoker) -> None:
    chain = MetadataWriteChain(invoker, scratch_dir=tmp_path)

    result = chain.write(_request(), "/keys/id.json")

    assert result.strategy == "primary"
    assert [attempt.verdict for attempt in result.attempts] == ["success"]
    assert fake_runner.calls == [
        [
            "spl-token-metadata",
            "create",
            "-k",
            "/keys/id.json",
            "--mint",
            MINT,
            "--name",
            "Demo",
            "--symbol",
            "DMO",
            "--uri",
            "https://example.com/demo.json",
        ]
    ]
    assert list(tmp_path.iterdir()) == []


def test_secondary_used_when_primary_missing(tmp_path: Path) -> None:
    seen: list[list[str]] = []
    document_path = metadata_document_path(MINT, tmp_path)

    def runner(command: list[str]) -> CompletedProcess[str]:
        seen.append(command)
        if command[0] == "spl-token-metadata":
            raise FileNotFoundError(2, "No such file or directory", command[0])
        assert document_path.exists()
        return CompletedProcess(command, 0, "ok", "")

    chain = MetadataWriteChain(ToolInvoker(runner=runner), scratch_dir=tmp_path)
    result = chain.write(_request(), "/keys/id.json")

    assert result.strategy == "secondary"
    assert [attempt.verdict for attempt in result.attempts] == ["missing", "success"]
    assert seen[1] == [
        "metaboss",
        "create",
        "metadata",
        "--keypair",
        "/keys/id.json",
        "--mint",
        MINT,
        "--data",
        str(document_path),
    ]
    assert not document_path.exists()


def test_all_strategies_failing_reports_last_error(tmp_path: Path, fake_runner, invoker) -> None:
    fake_runner.on("spl-token-metadata", missing=True)
    fake_runner.on("metaboss", returncode=1, stderr="metaboss: rpc error")
    fake_runner.on("solana", "program", "call", returncode=1, stderr="unrecognized subcommand 'call'")

    chain = MetadataWriteChain(invoker, scratch_dir=tmp_path)
    with pytest.raises(AllStrategiesFailed) as excinfo:
        chain.write(_request(), "/keys/id.json")

    error = excinfo.value
    assert error.last_error == "unrecognized subcommand 'call'"
    assert str(error) == "All metadata creation methods failed. Last error: unrecognized subcommand 'call'"
    assert [(a.strategy, a.verdict) for a in error.attempts] == [
        ("primary", "missing"),
        ("secondary", "failed"),
        ("tertiary", "failed"),
    ]
    program_call = fake_runner.called("solana", "program", "call")[0]
    assert METADATA_PROGRAM_ID in program_call
    assert f"metadata_{MINT}" in program_call
    assert not metadata_document_path(MINT, tmp_path).exists()


def test_custom_strategy_order(tmp_path: Path, fake_runner, invoker) -> None:
    from solmint.solana.metadata import MetabossStrategy

    chain = MetadataWriteChain(invoker, strategies=[MetabossStrategy()], scratch_dir=tmp_path)
    result = chain.write(_request(), "/keys/id.json")

    assert result.strategy == "secondary"
    assert [call[0] for call in fake_runner.calls] == ["metaboss"]


def test_resolve_metadata_address_from_lookup(fake_runner, invoker) -> None:
    fake_runner.on("spl-token-metadata", "find", stdout="Metadata address: MetaAcct999\n")

    address = resolve_metadata_address(MINT, invoker)

    assert address.address == "MetaAcct999"
    assert not address.placeholder


def test_resolve_metadata_address_placeholder(fake_runner, invoker) -> None:
    fake_runner.on("spl-token-metadata", missing=True)

    address = resolve_metadata_address(MINT, invoker)

    assert address.address == f"metadata_{MINT}"
    assert address.placeholder


def test_document_names_differ_per_mint() -> None:
    assert metadata_document_name("MintOne") != metadata_document_name("MintTwo")


def test_tertiary_reuses_document_after_secondary_fails(tmp_path: Path) -> None:
    document_path = metadata_document_path(MINT, tmp_path)
    present_during: list[tuple[str, bool]] = []

    def runner(command: list[str]) -> CompletedProcess[str]:
        if command[:2] == ["spl-token-metadata", "create"]:
            raise FileNotFoundError(2, "No such file or directory", command[0])
        present_during.append((" ".join(command[:3]), document_path.exists()))
        if command[0] == "metaboss":
            return CompletedProcess(command, 1, "", "metaboss: rpc error")
        if command[:2] == ["spl-token-metadata", "find"]:
            return CompletedProcess(command, 0, "Metadata address: MetaAcct7\n", "")
        return CompletedProcess(command, 0, "Signature: 5abc\n", "")

    chain = MetadataWriteChain(ToolInvoker(runner=runner), scratch_dir=tmp_path)
    result = chain.write(_request(), "/keys/id.json")

    assert result.strategy == "tertiary"
    assert [attempt.verdict for attempt in result.attempts] == ["missing", "failed", "success"]
    assert present_during == [
        ("metaboss create metadata", True),
        ("spl-token-metadata find AbC123", True),
        ("solana program call", True),
    ]
    assert not document_path.exists()


def test_document_removed_when_strategy_raises(tmp_path: Path) -> None:
    document_path = metadata_document_path(MINT, tmp_path)

    def runner(command: list[str]) -> CompletedProcess[str]:
        if command[0] == "spl-token-metadata":
            return CompletedProcess(command, 1, "", "unsupported")
        assert document_path.exists()
        raise RuntimeError("runner crashed")

    chain = MetadataWriteChain(ToolInvoker(runner=runner), scratch_dir=tmp_path)
    with pytest.raises(RuntimeError, match="runner crashed"):
        chain.write(_request(), "/keys/id.json")

    assert not document_path.exists()
