"""Persistence layer for fragstats."""

from fragstats.db.store import DataStore

__all__ = ["DataStore"]
