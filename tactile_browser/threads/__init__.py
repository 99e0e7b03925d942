"""Thread management for page loading"""
from .commit_data import LoadCommit, LoadOutcome
from .load_thread import LoadThread

__all__ = [
    "LoadCommit",
    "LoadOutcome",
    "LoadThread",
]
