from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings.

    Uses pydantic BaseSettings to load configuration from environment variables
    prefixed with ``PETRODATA_``.
    """
    # Logging
    LOG_LEVEL: str = "INFO"
    LOGS_DIR_NAME: str = "logs"
    LOG_FILENAME: str = "petrodata.log"

    # Application paths
    APP_DIR: Path = Path(__file__).parent.parent.parent.parent
    DATA_ROOT_DIR: Path = APP_DIR / "data"
    DOWNLOADS_DIR_NAME: str = "downloads"

    # Record storage
    STORAGE_BACKEND: str = "duckdb"  # "duckdb" or "memory"
    DUCKDB_FILENAME: str = "petrodata.duckdb"
    STORAGE_SLOT: str = "petrodata_reports"

    # Sample data
    SEED_ON_STARTUP: bool = True
    SEED_DAYS: int = 60
    SEED_WELLS_PER_DAY: int = 3

    # Text generation (AI audit)
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("PETRODATA_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY")
    )
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.2
    GEMINI_TIMEOUT_SECONDS: float = 60.0
    USE_MOCK_AI: bool = False

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080
    CORS_ALLOWED_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="PETRODATA_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True
    )

    @property
    def DATABASE_PATH(self) -> Path:
        return self.DATA_ROOT_DIR / self.DUCKDB_FILENAME

    @property
    def DOWNLOADS_DIR(self) -> Path:
        return self.DATA_ROOT_DIR / self.DOWNLOADS_DIR_NAME

    def setup_directories(self):
        """Create necessary directories if they don't exist."""
        for path in [self.DATA_ROOT_DIR, self.DOWNLOADS_DIR, Path(self.LOGS_DIR_NAME)]:
            path.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.setup_directories()
    return settings
