from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "copa_litoral_dev_secret_change_me"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8089, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    debug_errors: bool = Field(default=False, alias="DEBUG_ERRORS")
    enable_openapi_docs: bool = Field(default=True, alias="ENABLE_OPENAPI_DOCS")
    shutdown_timeout_seconds: int = Field(default=10, alias="SHUTDOWN_TIMEOUT_SECONDS")

    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET, alias="JWT_SECRET")
    jwt_expiration_hours: int = Field(default=24, alias="JWT_EXPIRATION_HOURS")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    cors_allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        alias="CORS_ALLOWED_ORIGINS",
    )
    trusted_proxies: str = Field(default="127.0.0.1/32,::1/128", alias="TRUSTED_PROXIES")
    rate_limit_default: str = Field(default="100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")

    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(default="", alias="DB_PASSWORD")
    db_name: str = Field(default="copa_litoral", alias="DB_NAME")
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")
    db_pool_size: int = Field(default=25, alias="DB_MAX_OPEN_CONNS")
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW")
    db_pool_recycle_minutes: int = Field(default=5, alias="DB_CONN_MAX_LIFETIME")
    db_statement_timeout_seconds: float = Field(default=5.0, alias="DB_STATEMENT_TIMEOUT_SECONDS")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        credentials = self.db_user
        if self.db_password:
            credentials = f"{self.db_user}:{self.db_password}"
        return (
            f"postgresql+asyncpg://{credentials}@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
