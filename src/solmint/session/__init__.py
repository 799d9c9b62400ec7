"""Session state for SolMint."""

from .state import SessionState, TokenHandle

__all__ = ["SessionState", "TokenHandle"]
