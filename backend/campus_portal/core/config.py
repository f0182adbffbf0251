from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "campus-portal"
    env: str = "development"
    log_level: str = "INFO"

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None

    database_url: str = ""
    postgres_host: str = "postgres"
    postgres_db: str = "campus_portal"
    postgres_user: str = "campus_portal"
    postgres_password: str = "campus_portal"
    postgres_port: int = 5432

    redis_url: str = "redis://redis:6379/0"

    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    email_from: str = "Campus Portal <onboarding@resend.dev>"
    email_timeout_seconds: float = 10.0
    public_base_url: str = "http://localhost:5173"

    approval_expiry_days: int = 30
    rate_limit_backend: str = "memory"  # memory | redis
    rate_limit_window_seconds: float = 60.0
    rate_limit_max_requests: int = 10

    storage_root: str = "./storage"
    cors_allowed_origins: list[str] = ["*"]

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_allowed_origins(cls, value):
        if isinstance(value, str):
            if value.strip() == "":
                return []
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("rate_limit_backend")
    @classmethod
    def validate_rate_limit_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in {"memory", "redis"}:
            raise ValueError("RATE_LIMIT_BACKEND must be 'memory' or 'redis'")
        return value

    @model_validator(mode="after")
    def validate_production_security(self):
        if self.env.strip().lower() in {"production", "prod"} and self.jwt_secret_key == "change-me":
            raise ValueError("JWT_SECRET_KEY must be set to a secure value in production")
        return self

    @property
    def database_dsn(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
