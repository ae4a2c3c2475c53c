import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Settings from GARDEN_DIARY_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="GARDEN_DIARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Backend
    POCKETBASE_URL: str = Field(default="https://api.gardendiary.app", description="PocketBase base URL")
    REQUEST_TIMEOUT: float = Field(default=30, gt=0, description="HTTP timeout in seconds")
    AUTH_COLLECTION: str = Field(default="users")
    CONTAINERS_COLLECTION: str = Field(default="containers")
    SPECIES_COLLECTION: str = Field(default="species")

    # Lokale Session, nur für Einzelplatz-Betrieb (leer = keine Persistenz)
    AUTH_STORE_PATH: str = Field(default="", description="TinyDB file for the auth session")

    # UI
    TOAST_DURATION_MS: int = Field(default=5000, gt=0, description="Default toast lifetime")
    LOG_LEVEL: str = Field(default="INFO")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        # Streamlit führt das Skript bei jedem Rerun neu aus
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
