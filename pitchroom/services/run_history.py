"""
Run History Store for PITCHROOM

Persists the final documents of successful runs and accepted revisions.
Gate-rejected runs are never saved.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import RunRecord

logger = logging.getLogger("pitchroom.run_history")


class RunHistoryStore(ABC):
    """Storage interface for run records."""

    @abstractmethod
    def save(self, record: RunRecord) -> str:
        """Store a record and return its id."""
        pass

    @abstractmethod
    def list(self, limit: Optional[int] = None) -> List[RunRecord]:
        """Records, newest first."""
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[RunRecord]:
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        pass


class InMemoryRunHistory(RunHistoryStore):
    """Process-local store. Contents are lost on exit."""

    def __init__(self):
        self._records: Dict[str, RunRecord] = {}

    def save(self, record: RunRecord) -> str:
        self._records[record.id] = record
        logger.info(f"[save] Stored run {record.id} ({record.mode.value}, {len(record.final_document)} chars)")
        return record.id

    def list(self, limit: Optional[int] = None) -> List[RunRecord]:
        records = sorted(self._records.values(), key=lambda r: r.timestamp, reverse=True)
        return records[:limit] if limit is not None else records

    def get(self, record_id: str) -> Optional[RunRecord]:
        return self._records.get(record_id)

    def delete(self, record_id: str) -> bool:
        if record_id not in self._records:
            return False
        del self._records[record_id]
        logger.info(f"[delete] Removed run {record_id}")
        return True

    def __len__(self) -> int:
        return len(self._records)
