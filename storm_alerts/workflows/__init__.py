"""Orchestration workflows."""

from .storm_check import run, run_check_cycle  # noqa: F401

__all__ = ["run", "run_check_cycle"]
