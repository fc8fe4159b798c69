"""
Record store base that keeps the whole record collection as one JSON blob.

Subclasses only provide blocking read/write of the blob; this class owns the
entry map, the fail-soft listing and the serialization of mutations.
"""
import asyncio
import json
import logging
import threading
from abc import abstractmethod
from typing import Any, Callable, Dict, Hashable, List, Optional

from pydantic import ValidationError

from ...domain.entities.report_record import ReportRecord
from ...domain.ports.record_store import RecordStorePort
from ...shared.exceptions import DatabaseException

logger = logging.getLogger(__name__)

UNPARSED_ENTRY = "__unparsed__"


class KeyedBlobRecordStore(RecordStorePort):
    """Record store over a single keyed blob holding the JSON array of records."""

    def __init__(self):
        # serializes every read-modify-write of the blob
        self._lock = threading.Lock()

    @abstractmethod
    def _read_blob(self) -> Optional[str]:
        """Return the stored JSON text, or None when the slot is absent."""
        pass

    @abstractmethod
    def _write_blob(self, payload: str) -> None:
        """Replace the stored JSON text. Raises DatabaseException on failure."""
        pass

    async def list_records(self) -> List[ReportRecord]:
        return await asyncio.to_thread(self._list_sync)

    async def upsert(self, record: ReportRecord) -> ReportRecord:
        return await asyncio.to_thread(self._upsert_sync, record)

    async def delete(self, record_id: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, record_id)

    async def seed_if_empty(self, factory: Callable[[], List[ReportRecord]]) -> int:
        return await asyncio.to_thread(self._seed_if_empty_sync, factory)

    async def count(self) -> int:
        return len(await self.list_records())

    def _list_sync(self) -> List[ReportRecord]:
        with self._lock:
            try:
                entries = self._load_entries()
            except DatabaseException as e:
                logger.warning(f"Record storage unreadable, treating as empty: {e.message}")
                return []
        return [entry for entry in entries.values() if isinstance(entry, ReportRecord)]

    def _upsert_sync(self, record: ReportRecord) -> ReportRecord:
        with self._lock:
            entries = self._load_entries()
            key = record.get_identity_key()
            replaced = key in entries
            # assigning an existing key keeps its position
            entries[key] = record
            self._dump(entries)
        logger.info(f"{'Replaced' if replaced else 'Inserted'} report {record.id}")
        return record

    def _delete_sync(self, record_id: str) -> bool:
        with self._lock:
            entries = self._load_entries()
            remaining = {
                k: entry for k, entry in entries.items()
                if not (isinstance(entry, ReportRecord) and entry.id == record_id)
            }
            if len(remaining) == len(entries):
                logger.info(f"Report {record_id} not found, nothing deleted")
                return False
            self._dump(remaining)
        logger.info(f"Deleted report {record_id}")
        return True

    def _seed_if_empty_sync(self, factory: Callable[[], List[ReportRecord]]) -> int:
        with self._lock:
            if self._load_entries():
                return 0
            records: Dict[Hashable, Any] = {}
            for record in factory():
                records[record.get_identity_key()] = record
            self._dump(records)
        logger.info(f"Seeded empty store with {len(records)} sample reports")
        return len(records)

    def _load_entries(self) -> Dict[Hashable, Any]:
        """
        Parse the blob into an ordered map of stored entries.

        Valid records are keyed by identity triple. Entries that fail
        validation are kept verbatim under a positional key so a later write
        puts them back unchanged. A blob that is not a JSON array counts as
        empty; a failed read raises DatabaseException.
        """
        try:
            payload = self._read_blob()
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(
                message=f"Failed to read report records: {str(e)}",
                query="read_slot",
                cause=e
            )

        if not payload:
            return {}

        try:
            raw_entries = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored records are not valid JSON, treating as empty: {str(e)}")
            return {}

        if not isinstance(raw_entries, list):
            logger.warning("Stored records are not a JSON array, treating as empty")
            return {}

        entries: Dict[Hashable, Any] = {}
        for index, raw in enumerate(raw_entries):
            try:
                record = ReportRecord.from_dict(raw)
            except (ValidationError, TypeError) as e:
                logger.warning(f"Keeping invalid stored report at position {index} as is: {str(e)}")
                entries[(UNPARSED_ENTRY, index)] = raw
                continue
            entries[record.get_identity_key()] = record
        return entries

    def _dump(self, entries: Dict[Hashable, Any]) -> None:
        self._write_blob(json.dumps([
            entry.to_dict() if isinstance(entry, ReportRecord) else entry
            for entry in entries.values()
        ]))
