from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str
    debug: bool = False
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440

    cors_allow_origins: List[str] = []
    log_level: str = "INFO"
    services_log_level: str | None = None
    sql_log_level: str = "WARNING"

    dashboard_default_days: int = 60


settings = Settings()
