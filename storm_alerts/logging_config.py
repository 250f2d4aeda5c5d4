"""Centralised logging configuration.

Importing this module sets the default logging format/level. Other modules
should simply import `logging` and call `logging.getLogger(__name__)`.
"""

import logging

from .config import LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# urllib3 logs every retried connection at DEBUG/WARNING; keep it quiet
logging.getLogger("urllib3").setLevel(logging.WARNING)

__all__ = ["logging"]
