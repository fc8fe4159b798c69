import logging
from pathlib import Path
from typing import Optional

import duckdb

from .keyed_blob_record_store import KeyedBlobRecordStore
from ...shared.config.settings import get_settings
from ...shared.exceptions import DatabaseException
from ...shared.utils.sql_loader import load_sql
from ...shared.utils.timing_decorator import timed

logger = logging.getLogger(__name__)


class DuckDBRecordStore(KeyedBlobRecordStore):
    """DuckDB implementation of the record store: one row of a key-value table holds all records."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        slot: Optional[str] = None,
        sql_path: Optional[Path] = None
    ):
        super().__init__()
        settings = get_settings()

        self.db_path = Path(db_path or settings.DATABASE_PATH)
        self.slot = slot or settings.STORAGE_SLOT

        # Load SQL queries from file
        if sql_path is None:
            sql_path = Path(__file__).parent.parent / "operations" / "record_store.sql"
        self.queries = load_sql(str(sql_path))

        self._initialize_database()

    def _initialize_database(self):
        """Create the database file and the key-value table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with duckdb.connect(str(self.db_path)) as conn:
                conn.execute(self.queries["create_table"])
        except (duckdb.Error, OSError) as e:
            raise DatabaseException(
                message=f"Failed to initialize record storage at {self.db_path}: {str(e)}",
                query="create_table",
                cause=e
            )

    @timed
    def _read_blob(self) -> Optional[str]:
        with duckdb.connect(str(self.db_path)) as conn:
            row = conn.execute(self.queries["read_slot"], [self.slot]).fetchone()
        return row[0] if row else None

    @timed
    def _write_blob(self, payload: str) -> None:
        try:
            with duckdb.connect(str(self.db_path)) as conn:
                conn.execute(self.queries["write_slot"], [self.slot, payload])
        except duckdb.Error as e:
            logger.error(f"Failed to write slot {self.slot}: {str(e)}")
            raise DatabaseException(
                message=f"Failed to persist report records: {str(e)}",
                query="write_slot",
                cause=e
            )
