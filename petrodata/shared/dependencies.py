"""
Dependency injection container for managing service dependencies.
Eliminates tight coupling between layers and enables easy testing.
"""
import logging
from functools import partial
from pathlib import Path
from typing import Optional, Dict, Any
from fastapi import Depends

from ..domain.ports.record_store import RecordStorePort
from ..domain.ports.text_generation_port import TextGenerationPort

# Service imports
from ..application.services.audit_service import AuditService
from ..application.services.report_query_service import ReportQueryService
from ..application.services.report_record_service import ReportRecordService

# Infrastructure imports
from ..infrastructure.repositories.duckdb_record_store import DuckDBRecordStore
from ..infrastructure.repositories.in_memory_record_store import InMemoryRecordStore
from ..infrastructure.adapters.gemini_text_generation_adapter import GeminiTextGenerationAdapter
from ..infrastructure.adapters.mock_text_generation_adapter import MockTextGenerationAdapter
from ..infrastructure.adapters.sample_report_generator import generate_sample_reports
from ..infrastructure.external.csv_report_codec import CsvReportExporter

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container for managing service instances.
    Implements singleton pattern with lazy initialization.
    """

    def __init__(self):
        self._instances: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}

    def configure(self, config: Dict[str, Any]) -> None:
        """
        Configure the container with application settings.

        Args:
            config: Configuration dictionary built from Settings at startup
        """
        self._config = config
        # Clear instances to force recreation with new config
        self._instances.clear()

    def get_record_store(self) -> RecordStorePort:
        """Get the record store instance"""
        if 'record_store' not in self._instances:
            storage_config = self._config.get('storage', {})
            backend = storage_config.get('backend', 'duckdb')
            if backend == 'memory':
                self._instances['record_store'] = InMemoryRecordStore()
            elif backend == 'duckdb':
                data_dir = Path(storage_config.get('data_dir', 'data'))
                self._instances['record_store'] = DuckDBRecordStore(
                    db_path=data_dir / storage_config.get('duckdb_filename', 'petrodata.duckdb'),
                    slot=storage_config.get('slot', 'petrodata_reports')
                )
            else:
                raise ValueError(f"Unknown storage backend: {backend}")
            logger.info(f"Record store backend: {backend}")
        return self._instances['record_store']

    def get_text_generator(self) -> TextGenerationPort:
        """Get the text generation adapter instance"""
        if 'text_generator' not in self._instances:
            ai_config = self._config.get('text_generation', {})
            if ai_config.get('mock_mode', False):
                self._instances['text_generator'] = MockTextGenerationAdapter()
            else:
                self._instances['text_generator'] = GeminiTextGenerationAdapter(
                    api_key=ai_config.get('api_key'),
                    base_url=ai_config.get('base_url', 'https://generativelanguage.googleapis.com/v1beta'),
                    model=ai_config.get('model', 'gemini-2.5-flash'),
                    temperature=ai_config.get('temperature', 0.2),
                    timeout_seconds=ai_config.get('timeout_seconds', 60.0)
                )
        return self._instances['text_generator']

    def get_csv_exporter(self) -> CsvReportExporter:
        """Get the CSV file exporter instance"""
        if 'csv_exporter' not in self._instances:
            self._instances['csv_exporter'] = CsvReportExporter(
                directory=Path(self._config.get('downloads_dir', 'downloads'))
            )
        return self._instances['csv_exporter']

    # --- Service Getters ---
    def get_report_record_service(self) -> ReportRecordService:
        """Get the ReportRecordService instance."""
        if 'report_record_service' not in self._instances:
            seed_config = self._config.get('seeding', {})
            self._instances['report_record_service'] = ReportRecordService(
                store=self.get_record_store(),
                sample_factory=partial(
                    generate_sample_reports,
                    days=seed_config.get('days', 60),
                    wells_per_day=seed_config.get('wells_per_day', 3)
                )
            )
        return self._instances['report_record_service']

    def get_report_query_service(self) -> ReportQueryService:
        """Get the ReportQueryService instance."""
        if 'report_query_service' not in self._instances:
            self._instances['report_query_service'] = ReportQueryService(
                store=self.get_record_store()
            )
        return self._instances['report_query_service']

    def get_audit_service(self) -> AuditService:
        """Get the AuditService instance."""
        if 'audit_service' not in self._instances:
            self._instances['audit_service'] = AuditService(
                text_generator=self.get_text_generator()
            )
        return self._instances['audit_service']

    # --- Override methods for testing ---
    def override_record_store(self, store: RecordStorePort) -> None:
        """
        Override the record store instance (useful for testing).

        Args:
            store: Record store instance to use
        """
        self._instances['record_store'] = store
        # Clear dependent services to force recreation
        self._instances.pop('report_record_service', None)
        self._instances.pop('report_query_service', None)

    def override_text_generator(self, text_generator: TextGenerationPort) -> None:
        """
        Override the text generation adapter (useful for testing).

        Args:
            text_generator: Adapter instance to use
        """
        self._instances['text_generator'] = text_generator
        self._instances.pop('audit_service', None)


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """
    Get the global dependency container instance.

    Returns:
        DependencyContainer instance
    """
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def configure_dependencies(config: Dict[str, Any]) -> None:
    """
    Configure the global dependency container.
    Call this at application startup.

    Args:
        config: Configuration dictionary
    """
    get_container().configure(config)


def build_app_config(settings) -> Dict[str, Any]:
    """Translate Settings into the container configuration dictionary."""
    return {
        "storage": {
            "backend": settings.STORAGE_BACKEND,
            "data_dir": str(settings.DATA_ROOT_DIR),
            "duckdb_filename": settings.DUCKDB_FILENAME,
            "slot": settings.STORAGE_SLOT
        },
        "downloads_dir": str(settings.DOWNLOADS_DIR),
        "seeding": {
            "days": settings.SEED_DAYS,
            "wells_per_day": settings.SEED_WELLS_PER_DAY
        },
        "text_generation": {
            "api_key": settings.GEMINI_API_KEY,
            "base_url": settings.GEMINI_BASE_URL,
            "model": settings.GEMINI_MODEL,
            "temperature": settings.GEMINI_TEMPERATURE,
            "timeout_seconds": settings.GEMINI_TIMEOUT_SECONDS,
            "mock_mode": settings.USE_MOCK_AI
        }
    }


# FastAPI Dependency Providers using the global container

# Service Providers
def _get_report_record_service_from_container() -> ReportRecordService:
    return get_container().get_report_record_service()


def provide_report_record_service(
    service: ReportRecordService = Depends(_get_report_record_service_from_container)
) -> ReportRecordService:
    """FastAPI dependency for ReportRecordService."""
    return service


def _get_report_query_service_from_container() -> ReportQueryService:
    return get_container().get_report_query_service()


def provide_report_query_service(
    service: ReportQueryService = Depends(_get_report_query_service_from_container)
) -> ReportQueryService:
    """FastAPI dependency for ReportQueryService."""
    return service


def _get_audit_service_from_container() -> AuditService:
    return get_container().get_audit_service()


def provide_audit_service(
    service: AuditService = Depends(_get_audit_service_from_container)
) -> AuditService:
    """FastAPI dependency for AuditService."""
    return service
