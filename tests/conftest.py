from __future__ import annotations

import io
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from solmint.cli.app import ConsoleApp
from solmint.cli.branding import themed_console
from solmint.core.config import ConfigContext, SolMintConfig
from solmint.solana.invoker import ToolInvoker


class FakeRunner:
    """Command runner that answers by command prefix and records every call.

    Routes are checked in registration order; the first prefix that matches
    wins. Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._routes: list[tuple[list[str], dict[str, object]]] = []

    def on(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "", missing: bool = False) -> FakeRunner:
        self._routes.append(
            (list(prefix), {"returncode": returncode, "stdout": stdout, "stderr": stderr, "missing": missing})
        )
        return self

    def __call__(self, command: list[str]) -> CompletedProcess[str]:
        self.calls.append(list(command))
        for prefix, outcome in self._routes:
            if command[: len(prefix)] == prefix:
                if outcome["missing"]:
                    raise FileNotFoundError(2, "No such file or directory", command[0])
                return CompletedProcess(
                    args=command,
                    returncode=outcome["returncode"],  # type: ignore[arg-type]
                    stdout=outcome["stdout"],  # type: ignore[arg-type]
                    stderr=outcome["stderr"],  # type: ignore[arg-type]
                )
        return CompletedProcess(args=command, returncode=0, stdout="", stderr="")

    def called(self, *prefix: str) -> list[list[str]]:
        return [call for call in self.calls if call[: len(prefix)] == list(prefix)]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def invoker(fake_runner: FakeRunner) -> ToolInvoker:
    return ToolInvoker(runner=fake_runner)


@pytest.fixture
def keypair_file(tmp_path: Path) -> Path:
    path = tmp_path / "id.json"
    path.write_text("[1, 2, 3]")
    return path


@pytest.fixture
def make_app(tmp_path: Path, invoker: ToolInvoker, keypair_file: Path):
    """Build a ConsoleApp whose prompts are answered from a list."""

    def _make(answers: list[str] | None = None) -> ConsoleApp:
        config = SolMintConfig(keypair_path=str(keypair_file), scratch_dir=str(tmp_path / "scratch"))
        console = themed_console(file=io.StringIO(), force_terminal=False, width=200)
        app = ConsoleApp(
            console=console,
            config_context=ConfigContext(config=config, sources=[]),
            invoker=invoker,
        )
        pending = list(answers or [])
        app.prompts_seen = []  # type: ignore[attr-defined]

        def _answer(message: str) -> str:
            app.prompts_seen.append(message)  # type: ignore[attr-defined]
            if not pending:
                raise EOFError
            return pending.pop(0)

        app._prompt_text = _answer  # type: ignore[assignment]
        return app

    return _make
