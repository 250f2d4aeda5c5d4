"""Utility functions for the storm alerts project.

Re-exports the text-cleaning helpers and datetime utilities so that imports like
`from ..utils import normalize_bulletin_text` or `from ..utils import get_current_timestamp`
work as expected.
"""

from .text_cleaning import (  # noqa: F401
    normalize_bulletin_text,
    combine_bulletin_text,
    find_zip_tokens,
)
from .datetime_utils import get_current_timestamp, parse_timestamp  # noqa: F401

__all__ = [
    "normalize_bulletin_text",
    "combine_bulletin_text",
    "find_zip_tokens",
    "get_current_timestamp",
    "parse_timestamp",
]
