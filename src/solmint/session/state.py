"""In-memory record of the token created during the current session."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)


class TokenHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    mint_address: str
    account_address: str | None = None

    @field_validator("mint_address")
    @classmethod
    def _mint_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("mint address must not be empty")
        return value


class SessionState:
    """Holds the most recent token; only ever replaced, never persisted."""

    def __init__(self) -> None:
        self._token: TokenHandle | None = None

    def record_token(self, mint: str, account: str | None = None) -> TokenHandle:
        handle = TokenHandle(mint_address=mint, account_address=account)
        self._token = handle
        logger.debug("Session token set to %s (account %s)", handle.mint_address, handle.account_address)
        return handle

    def current_token(self) -> TokenHandle | None:
        return self._token


__all__ = ["SessionState", "TokenHandle"]
