from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "MindCare"
    debug: bool = False
    log_level: str = "INFO"

    # Database (SQLite by default; set DATABASE_URL for PostgreSQL)
    database_url: str = "sqlite:///./mindcare.db"

    # Auth: JWT secret (set in .env in production)
    auth_secret_key: str = "mindcare-dev-secret-change-in-production"
    auth_token_max_age_seconds: int = 86400 * 7

    # Comma-separated; "*" allows every origin (dashboards are served from a separate host)
    cors_origins: str = "*"

    # Escalation: auto-scheduled follow-up lands this many days out, at this time
    escalation_lead_days: int = 1
    escalation_time: str = "10:00"

    # Admin analytics window
    analytics_default_range_days: int = 7
    analytics_max_range_days: int = 90

    # Seed for the supportive-reply picker; unset means a fresh random source per process
    response_seed: Optional[int] = None

    class Config:
        env_file = ".env"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in (self.cors_origins or "").split(",") if o.strip()]


settings = Settings()
