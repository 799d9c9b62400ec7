"""Recover addresses from the human-readable output of Solana tools."""

from __future__ import annotations

from collections.abc import Mapping

from solmint.solana.errors import ExtractionFailed

# Marker phrase -> what the trailing token on that line is.
TOKEN_MARKERS: Mapping[str, str] = {
    "Creating token ": "mint address",
    "Token: ": "mint address",
}
ACCOUNT_MARKERS: Mapping[str, str] = {
    "Creating account ": "token account address",
    "Account: ": "token account address",
}
METADATA_ADDRESS_MARKERS: Mapping[str, str] = {
    "Metadata address:": "metadata account address",
}


def extract_address(text: str, markers: Mapping[str, str]) -> str:
    """Return the last whitespace token of the first line containing a marker.

    Lines are scanned top to bottom and the first match wins, even when a later
    line would be a better fit. Trailing words on the matched line are not
    stripped: ``"Creating token ABC done"`` yields ``"done"``.
    """
    for line in text.splitlines():
        if not any(phrase in line for phrase in markers):
            continue
        parts = line.split()
        if parts:
            return parts[-1]
    wanted = sorted(set(markers.values())) or ["address"]
    raise ExtractionFailed(f"Could not extract {' / '.join(wanted)} from output")


__all__ = ["ACCOUNT_MARKERS", "METADATA_ADDRESS_MARKERS", "TOKEN_MARKERS", "extract_address"]
