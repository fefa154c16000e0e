from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "QuickCourt API"
    # Comma-separated origins for CORS. If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    DATABASE_URL: str

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v

    # Court defaults applied when a court has no hours/duration of its own
    DEFAULT_OPEN_TIME: str = "06:00"
    DEFAULT_CLOSE_TIME: str = "22:00"
    DEFAULT_SLOT_MINUTES: int = 60

    # Largest inclusive date range a single generation request may cover
    MAX_GENERATION_DAYS: int = 90
    # Days shown by the owner availability calendar
    AVAILABILITY_HORIZON_DAYS: int = 30


settings = Settings()
