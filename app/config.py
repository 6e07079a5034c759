#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Community Marketplace API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True
    API_PREFIX: str = "/api"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Storage Settings ("memory" or "sql")
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./marketplace.db"

    # OTP Settings
    OTP_EXPIRY_MINUTES: int = 5
    # Echo issued codes back to the caller; development only
    EXPOSE_OTP_IN_RESPONSE: bool = False
    OTP_PURGE_ON_ISSUE: bool = False

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = "*"
    ALLOWED_METHODS: str = "GET,POST,OPTIONS"
    ALLOWED_HEADERS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # Middleware settings
    GZIP_MIN_SIZE: int = 500  # bytes

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def allowed_methods_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_METHODS)

    @property
    def allowed_headers_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_HEADERS)

    @property
    def uses_sql_storage(self) -> bool:
        return self.STORAGE_BACKEND.strip().lower() == "sql"


@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    # Normalize ALLOWED_ORIGINS if provided as comma-separated string env var CORS_ORIGINS
    cors_env = os.environ.get("CORS_ORIGINS")
    if cors_env:
        s.ALLOWED_ORIGINS = cors_env
    return s
