from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, env_file_encoding="utf-8", extra="ignore")

    log_level: str = "INFO"

    redis_url: str = "redis://localhost:6379/0"

    lark_connect_timeout_seconds: float | None = 10.0
    lark_read_timeout_seconds: float | None = 30.0
    lark_proxy_url: str | None = None
    lark_verify_ssl: bool = True
    lark_fail_on_non_2xx: bool = False
    lark_signing_secret: str | None = None

    secret_env_prefix: str = Field(default="SECRET_", min_length=1)

    cors_allow_origins: list[str] = []

    @model_validator(mode="after")
    def _validate_timeouts(self) -> "Settings":
        for name in ("lark_connect_timeout_seconds", "lark_read_timeout_seconds"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name.upper()} must be greater than 0")

        normalized_level = self.log_level.strip().upper()
        if normalized_level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        self.log_level = normalized_level
        return self


settings = Settings()
