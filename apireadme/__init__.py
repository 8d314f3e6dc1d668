"""Synchronise README API tables with the exports of a TypeScript package."""

from .orchestrator import Orchestrator, UpdateOutcome

__all__ = ["Orchestrator", "UpdateOutcome"]

__version__ = "0.1.0"
