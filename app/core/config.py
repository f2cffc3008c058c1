"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Notifications -- empty URL means "write the notifications row directly"
    INTERVIEW_NOTIFICATION_URL: str = ""
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0

    # Scheduler
    SCHEDULER_ENABLED: bool = True
    MISSED_INTERVIEW_SWEEP_INTERVAL_SECONDS: int = 60
    MISSED_INTERVIEW_INITIAL_DELAY_SECONDS: int = 5

    # Calendar export
    CALENDAR_EVENT_DURATION_MINUTES: int = 60

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
