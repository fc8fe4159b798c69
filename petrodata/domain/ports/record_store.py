"""
Domain port for report record persistence.
Defines the contract for the record store without coupling to a storage engine.
"""
from abc import ABC, abstractmethod
from typing import Callable, List
from ..entities.report_record import ReportRecord


class RecordStorePort(ABC):
    """Repository interface for report records held as a single collection."""

    @abstractmethod
    async def list_records(self) -> List[ReportRecord]:
        """
        Get all records in storage order.

        Never raises: absent or unreadable storage yields an empty list.
        """
        pass

    @abstractmethod
    async def upsert(self, record: ReportRecord) -> ReportRecord:
        """
        Insert the record, or replace in place the record sharing its
        (field name, well id, date) identity.

        Raises:
            DatabaseException: When the collection cannot be written
        """
        pass

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Delete the record with the given id. Returns False if absent."""
        pass

    @abstractmethod
    async def seed_if_empty(self, factory: Callable[[], List[ReportRecord]]) -> int:
        """
        Persist the records built by factory when the store is empty.

        Returns:
            Number of records written (0 when the store already held data)
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get the total count of records."""
        pass
