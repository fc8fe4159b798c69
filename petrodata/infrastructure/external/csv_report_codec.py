"""
CSV serialization of report records for spreadsheet / BI export.
"""
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from ...domain.entities.report_record import ReportRecord
from ...shared.exceptions import FileSystemException
from ...shared.utils.timing_decorator import timed

logger = logging.getLogger(__name__)

CSV_HEADERS: List[str] = [
    "Date",
    "Field Name",
    "Well ID",
    "Oil Produced (BBL)",
    "Gas Produced (MCF)",
    "Water Produced (BBL)",
    "Employees Affected by Accidents",
    "Weather Condition",
    "Notes",
]

EXPORT_FILENAME_PREFIX = "petrodata_export_"


def export_filename(on: Optional[date] = None) -> str:
    """File name of an export produced on the given day (today by default)."""
    return f"{EXPORT_FILENAME_PREFIX}{(on or date.today()).isoformat()}.csv"


def _format_number(value) -> str:
    # whole numbers print without a decimal part: 1200, not 1200.0
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _quote(value: str) -> str:
    return f'"{value}"'


def _encode_row(record: ReportRecord) -> str:
    notes = (record.notes or "").replace('"', '""')
    return ",".join([
        record.date.isoformat(),
        _quote(record.field_name),
        _quote(record.well_id),
        _format_number(record.oil_produced_bbl),
        _format_number(record.gas_produced_mcf),
        _format_number(record.water_produced_bbl),
        _format_number(record.employees_affected),
        record.weather_condition.value,
        _quote(notes),
    ])


def encode(records: Sequence[ReportRecord]) -> str:
    """
    Serialize records to CSV text.

    An empty input gives an empty string. Otherwise the fixed header line is
    followed by one line per record, joined by newlines with no trailing
    newline. Field name, well id and notes are always double-quoted, with
    quotes inside notes doubled.
    """
    if not records:
        return ""
    return "\n".join([",".join(CSV_HEADERS)] + [_encode_row(r) for r in records])


class CsvReportExporter:
    """Writes encoded exports into a directory on disk."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    @timed
    def export(self, records: Sequence[ReportRecord], on: Optional[date] = None) -> Path:
        """
        Write the CSV export of records and return the file path.

        Raises:
            FileSystemException: When the file cannot be written
        """
        file_path = self.directory / export_filename(on)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            file_path.write_text(encode(records), encoding="utf-8")
        except OSError as e:
            raise FileSystemException(
                message=f"Failed to write CSV export: {str(e)}",
                file_path=str(file_path),
                cause=e
            )
        logger.info(f"Exported {len(records)} records to {file_path}")
        return file_path
