"""Operator activity log for the SolMint menu.

Entries live only in memory. Addresses are base58 strings, so when redaction
is on anything that looks like a pubkey or signature is shortened before it is
stored.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

LogCategory = Literal["token", "metadata", "authority", "network", "system"]
LogSeverity = Literal["info", "warning", "error"]

LOG_CATEGORIES: tuple[str, ...] = ("token", "metadata", "authority", "network", "system")
LOG_SEVERITIES: tuple[str, ...] = ("info", "warning", "error")

_ADDRESS_LIKE = re.compile(r"\b[1-9A-HJ-NP-Za-km-z]{32,44}\b")


def shorten_addresses(text: str) -> str:
    """Replace base58 addresses with ``head…tail``."""
    return _ADDRESS_LIKE.sub(lambda match: f"{match.group(0)[:4]}…{match.group(0)[-4:]}", text)


def normalize_category(category: str | None) -> str:
    value = (category or "").strip().lower()
    return value if value in LOG_CATEGORIES else "system"


@dataclass(slots=True)
class LogEntry:
    category: LogCategory
    severity: LogSeverity
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def render(self) -> str:
        return f"{self.timestamp:%H:%M:%S} [{self.category}] {self.severity}: {self.message}"


class LogBuffer:
    """Bounded history of token, metadata, authority and network events."""

    def __init__(self, *, max_entries: int = 200, redaction_enabled: bool = True) -> None:
        self.max_entries = max(max_entries, 1)
        self.redaction_enabled = redaction_enabled
        self._entries: deque[LogEntry] = deque(maxlen=self.max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, category: str, message: str, *, severity: str = "info") -> LogEntry:
        level = severity.lower()
        entry = LogEntry(
            category=normalize_category(category),  # type: ignore[arg-type]
            severity=level if level in LOG_SEVERITIES else "info",  # type: ignore[arg-type]
            message=shorten_addresses(message) if self.redaction_enabled else message,
        )
        self._entries.append(entry)
        return entry

    def recent(self, *, category: str | None = None, limit: int = 50) -> list[LogEntry]:
        """Newest ``limit`` entries, oldest first; ``category`` narrows the view."""
        if limit <= 0:
            return []
        entries = list(self._entries)
        if category:
            wanted = normalize_category(category)
            entries = [entry for entry in entries if entry.category == wanted]
        return entries[-limit:]

    def latest(self) -> LogEntry | None:
        return self._entries[-1] if self._entries else None


__all__ = [
    "LOG_CATEGORIES",
    "LOG_SEVERITIES",
    "LogBuffer",
    "LogCategory",
    "LogEntry",
    "LogSeverity",
    "normalize_category",
    "shorten_addresses",
]
