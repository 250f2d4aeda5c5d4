"""Convenience re-exports for singleton SDK accessors."""

from .nws_client import build_retry, get_nws_session  # noqa: F401
from .resend_client import get_resend_session  # noqa: F401
from .mongodb_client import get_mongo_client, get_database  # noqa: F401

__all__ = [
    "get_nws_session",
    "build_retry",
    "get_resend_session",
    "get_mongo_client",
    "get_database",
]
