"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Segmind (generation vendor)
    segmind_api_key: Optional[str] = None
    segmind_base_url: str = "https://api.segmind.com/v1"
    vendor_timeout_seconds: float = 600.0
    media_fetch_timeout_seconds: float = 30.0

    # Supabase storage (re-upload of binary artifacts)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    storage_bucket: str = "generated-media"
    max_upload_bytes: int = 100 * 1024 * 1024

    # Server
    port: int = 3000
    log_level: str = "INFO"

    # Task tracking
    task_retention_hours: float = 2
    sweep_interval_minutes: float = 30

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


settings = Settings()
