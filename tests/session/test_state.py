from __future__ import annotations

import pytest
from pydantic import ValidationError

from solmint.session import SessionState, TokenHandle


def test_new_session_has_no_token() -> None:
    assert SessionState().current_token() is None


def test_record_token_replaces_whole_handle() -> None:
    state = SessionState()
    state.record_token("MintOne", "AcctOne")

    handle = state.record_token("MintTwo")

    assert state.current_token() == handle
    assert handle.mint_address == "MintTwo"
    assert handle.account_address is None


def test_account_added_after_mint() -> None:
    state = SessionState()
    state.record_token("MintOne")
    state.record_token("MintOne", "AcctOne")

    handle = state.current_token()
    assert handle is not None
    assert (handle.mint_address, handle.account_address) == ("MintOne", "AcctOne")


def test_blank_mint_rejected() -> None:
    with pytest.raises(ValidationError):
        TokenHandle(mint_address="   ")


def test_handle_is_frozen() -> None:
    handle = TokenHandle(mint_address="MintOne")
    with pytest.raises(ValidationError):
        handle.mint_address = "Other"  # type: ignore[misc]
