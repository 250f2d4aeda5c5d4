"""Top-level package for the storm-alerts project.

This package simply exposes the public run() helper so callers can do
`python -m storm_alerts` or `from storm_alerts import run; run()`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("storm-alerts")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .workflows.storm_check import run  # convenience re-export

__all__ = ["run", "__version__"]
