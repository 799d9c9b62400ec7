"""Core services for SolMint."""

from .config import (
    DEFAULT_CONFIG_DIR,
    ConfigContext,
    ConfigManager,
    ConfigurationError,
    SolMintConfig,
)
from .env_diag import DiagnosticResult, ToolRequirement, collect_tool_diagnostics, missing_required
from .logs import LogBuffer, LogEntry

__all__ = [
    "ConfigContext",
    "ConfigManager",
    "ConfigurationError",
    "DEFAULT_CONFIG_DIR",
    "DiagnosticResult",
    "LogBuffer",
    "LogEntry",
    "SolMintConfig",
    "ToolRequirement",
    "collect_tool_diagnostics",
    "missing_required",
]
