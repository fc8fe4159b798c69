from typing import Optional

from .keyed_blob_record_store import KeyedBlobRecordStore


class InMemoryRecordStore(KeyedBlobRecordStore):
    """Process-local record store; keeps the JSON blob in memory."""

    def __init__(self, initial_payload: Optional[str] = None):
        super().__init__()
        self._payload = initial_payload

    def _read_blob(self) -> Optional[str]:
        return self._payload

    def _write_blob(self, payload: str) -> None:
        self._payload = payload
