"""Run a single storm check cycle: ``python -m storm_alerts``."""

from .workflows.storm_check import run

if __name__ == "__main__":
    run()
