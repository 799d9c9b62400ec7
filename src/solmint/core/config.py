"""Configuration management for SolMint."""

from __future__ import annotations

import os
import tempfile
import tomllib
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ValidationError, field_validator

from solmint.solana.invoker import ToolNames
from solmint.solana.token import DEFAULT_DECIMALS, DEFAULT_NETWORK, MAX_DECIMALS, NETWORK_PRESETS

DEFAULT_CONFIG_DIR = Path(os.environ.get("SOLMINT_HOME", Path.home() / ".solmint"))
CONFIG_FILENAME = "config.toml"
DEFAULT_KEYPAIR_PATH = "~/.config/solana/id.json"


class ConfigurationError(RuntimeError):
    """Raised when configuration loading fails."""


class SolMintConfig(BaseModel):
    """Persisted SolMint configuration settings."""

    config_version: int = 1
    network: str = DEFAULT_NETWORK
    rpc_url: str = NETWORK_PRESETS[DEFAULT_NETWORK].rpc_url
    keypair_path: str = DEFAULT_KEYPAIR_PATH
    default_decimals: int = DEFAULT_DECIMALS
    scratch_dir: str | None = None
    tools: dict[str, str] | None = None
    log_redaction: bool = True

    @field_validator("default_decimals")
    @classmethod
    def _decimals_in_range(cls, value: int) -> int:
        if value < 0 or value > MAX_DECIMALS:
            raise ValueError(f"default_decimals must be between 0 and {MAX_DECIMALS}")
        return value

    def resolved_keypair_path(self) -> str:
        return str(Path(self.keypair_path).expanduser())

    def resolved_scratch_dir(self) -> Path:
        if self.scratch_dir:
            return Path(self.scratch_dir).expanduser()
        return Path(tempfile.gettempdir())

    def tool_names(self) -> ToolNames:
        return ToolNames.from_overrides(self.tools)


@dataclass
class ConfigContext:
    """Loaded configuration plus where it came from."""

    config: SolMintConfig
    sources: list[Path]


class ConfigManager:
    """Loads the layered TOML config (global, project, explicit override)."""

    def __init__(
        self,
        config_dir: Path | None = None,
        project_config_path: Path | None = None,
        override_config_path: Path | None = None,
    ) -> None:
        self.config_dir = config_dir or DEFAULT_CONFIG_DIR
        self.config_path = self.config_dir / CONFIG_FILENAME
        self.project_config_path = project_config_path
        self.override_config_path = override_config_path

    def load(self, **overrides: Any) -> ConfigContext:
        """Merge config layers; non-None keyword overrides win over files."""
        data: dict[str, Any] = {}
        sources: list[Path] = []
        for path in (self.config_path, self.project_config_path, self.override_config_path):
            layer = self._read_config_dict(path)
            if layer:
                data = self._merge_dicts(data, layer)
                sources.append(path)  # type: ignore[arg-type]
        data.update({key: value for key, value in overrides.items() if value is not None})
        try:
            config = SolMintConfig(**data)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
        return ConfigContext(config=config, sources=sources)

    def write_default(self, *, force: bool = False) -> Path:
        if self.config_path.exists() and not force:
            raise ConfigurationError(f"Config already exists at {self.config_path}")
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._save_config(SolMintConfig())
        return self.config_path

    def _save_config(self, config: SolMintConfig) -> None:
        self.config_path.write_text(tomli_w.dumps(config.model_dump(exclude_none=True)))

    def _read_config_dict(self, path: Path | None) -> dict[str, Any]:
        if path is None:
            return {}
        if not path.exists():
            return {}
        try:
            return tomllib.loads(path.read_text())
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Failed to load config from {path}: {exc}") from exc

    def _merge_dicts(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_DIR",
    "ConfigContext",
    "ConfigManager",
    "ConfigurationError",
    "SolMintConfig",
]
