"""Application settings loaded from environment variables."""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    app_name: str = "Mission Control"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 8000
    service_name: str = "mission-control"
    log_level: str = "INFO"
    # Plain text lines when false
    log_json: bool = True
    log_buffer_size: int = 200
    # Firebase connection; Application Default Credentials when no key file is given
    firebase_credentials_path: str | None = None
    firebase_project_id: str | None = None
    firebase_database_url: str | None = None
    arsenal_collection: str = "arsenal"
    events_collection: str = "events"
    agents_collection: str = "agents"
    chats_path: str = "/chats"
    arsenal_types: tuple[str, ...] = ("camera", "laptop", "printer")
    # "Today" on the event board is evaluated in this zone
    timezone: str = "UTC"
    admin_role: str = "admin"
    viewer_id_header: str = "X-Viewer-Id"
    viewer_role_header: str = "X-Viewer-Role"
    # Local development only: used when the proxy headers are absent
    dev_viewer_id: str | None = None
    dev_viewer_role: str = "admin"
    templates_dir: Path = PACKAGE_ROOT / "templates"
    static_dir: Path = PACKAGE_ROOT / "static"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone '{value}'") from exc
        return value


settings = Settings()

__all__ = ["settings", "Settings"]
