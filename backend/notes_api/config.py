from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 4000

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    frontend_url: str | None = None

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    @property
    def allowed_origins(self) -> list[str]:
        """Configured origins plus the deployed frontend, without duplicates."""
        origins: list[str] = []
        for origin in [*self.cors_origins, self.frontend_url]:
            if origin and origin not in origins:
                origins.append(origin)
        return origins


settings = Settings()
