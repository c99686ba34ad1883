"""
PITCHROOM Services
Persistence adapters.
"""

from .run_history import InMemoryRunHistory, RunHistoryStore

__all__ = ["RunHistoryStore", "InMemoryRunHistory"]
