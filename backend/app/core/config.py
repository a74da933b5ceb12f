from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///weightgrid.db"
    # Timezone used to decide which month is "current".
    # Examples: "America/New_York", "Europe/London", or "local" to use system tz.
    timezone: str = "local"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    @field_validator("timezone", mode="before")
    @classmethod
    def _empty_to_local(cls, v):
        if v in ("", None, "null", "None"):
            return "local"
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return str(v or "INFO").upper()

    class Config:
        env_file = ".env"


settings = Settings()
