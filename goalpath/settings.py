## Application settings configuration

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    database_url: str = "sqlite:///./goalpath.db"
    redis_url: str | None = None

    session_absolute_days: int = 7
    session_idle_minutes: int = 60

    # Rate limiting (fixed window, per action and user)
    rate_limit_enabled: bool = False
    rate_limit_requests: int = 15
    rate_limit_window_seconds: int = 60

    # Assessments
    assessment_expiry_days: int = 90
    minutes_per_question: int = 2

    auto_create_schema: bool = True
    log_level: str = "INFO"


settings = Settings()
