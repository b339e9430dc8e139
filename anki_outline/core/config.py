# Path: anki_outline/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    PROJECT_NAME: str = "Anki Outline"
    ANKI_CONNECT_URL: str = "http://localhost:8765"
    ANKI_CONNECT_VERSION: int = 6
    # Timeout (giây) cho mỗi request tới AnkiConnect
    ANKI_CONNECT_TIMEOUT: float = 30.0

    # Paths
    LOG_DIR: Path = Path.home() / ".anki_outline" / "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
