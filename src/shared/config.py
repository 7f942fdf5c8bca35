"""Application settings shared by every service.

Values come from environment variables (case-insensitive) and an optional
``.env`` file. Infrastructure wiring (databases, brokers, event store) stays in
each domain's ``domain.toml`` and is selected by ``PROTEAN_ENV``.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # JWT
    jwt_secret_key: str = "OrderManagement-JWT-Secret-Key-2025-Super-Secure-At-Least-256-Bits-Long"
    jwt_issuer: str = "OrderManagementSystem"
    jwt_audience: str = "OrderManagementSystem"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60
    jwt_clock_skew_seconds: int = 300

    password_hash_rounds: int = 12

    # Service-to-service lookups used by the Order service
    customer_service_url: str | None = None
    product_service_url: str | None = None
    service_timeout_seconds: float = 10.0

    cors_allowed_origins: str = "*"
    log_retention_days: int = 30
    log_dir: str | None = "logs"
    app_version: str = "1.0.0"

    def allowed_origins(self) -> list[str]:
        """Parse the comma-separated CORS origins."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
