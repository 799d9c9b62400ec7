from __future__ import annotations

from solmint.core.env_diag import collect_tool_diagnostics, missing_required


def test_collect_tool_diagnostics_reports_versions(fake_runner, invoker) -> None:
    fake_runner.on("solana", "--version", stdout="solana-cli 1.18.26 (src:d9f20e95)\n")
    fake_runner.on("spl-token", "--version", stdout="spl-token-cli 4.0.0\n")
    fake_runner.on("spl-token-metadata", missing=True)
    fake_runner.on("metaboss", "--version", returncode=1, stderr="metaboss: bad flag\n")

    results = {item.name: item for item in collect_tool_diagnostics(invoker)}

    assert results["Solana CLI"].status == "ok"
    assert results["Solana CLI"].version == "solana-cli 1.18.26 (src:d9f20e95)"
    assert results["SPL Token CLI"].found
    assert results["SPL Token Metadata CLI"].status == "missing"
    assert not results["SPL Token Metadata CLI"].required
    assert results["Metaboss"].status == "warn"
    assert results["Metaboss"].details == "Non-zero exit code: 1"
    assert missing_required(results.values()) == []


def test_missing_required_lists_core_tools(fake_runner, invoker) -> None:
    fake_runner.on("spl-token", missing=True)
    fake_runner.on("spl-token-metadata", missing=True)

    diagnostics = collect_tool_diagnostics(invoker)

    assert [item.name for item in missing_required(diagnostics)] == ["SPL Token CLI"]
