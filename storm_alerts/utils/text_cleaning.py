"""Shared helpers for cleaning NWS bulletin text before pattern matching."""

from __future__ import annotations

import re
from typing import Final, Optional

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")
_ZIP_TOKEN: Final[re.Pattern[str]] = re.compile(r"\b\d{5}\b")

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def normalize_bulletin_text(text: Optional[str]) -> str:
    """Collapse the hard line wraps NWS products use into single spaces.

    Bulletins are wrapped at ~70 columns, so a value such as
    ``MAX HAIL SIZE...1.00\\nIN`` would otherwise be split across lines.
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def combine_bulletin_text(*parts: Optional[str]) -> str:
    """Join headline/description fragments into one normalised string."""
    return " ".join(p for p in (normalize_bulletin_text(part) for part in parts) if p)


def find_zip_tokens(text: Optional[str]) -> list[str]:
    """Return every distinct 5-digit token in *text*, in order of appearance."""
    seen: set[str] = set()
    tokens: list[str] = []
    for token in _ZIP_TOKEN.findall(text or ""):
        if token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens

__all__ = ["normalize_bulletin_text", "combine_bulletin_text", "find_zip_tokens"]
