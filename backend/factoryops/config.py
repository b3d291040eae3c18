from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./factoryops.db", env="DATABASE_URL")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")

    # Auth
    jwt_secret_key: str = Field(default="factoryops-dev-secret-change-me", env="JWT_SECRET_KEY")
    token_expire_seconds: int = Field(default=86400, env="TOKEN_EXPIRE_SECONDS")
    bcrypt_rounds: int = Field(default=12, env="BCRYPT_ROUNDS")
    # When false, callers without a bearer token are let through on gated routes
    require_auth: bool = Field(default=False, env="REQUIRE_AUTH")

    # "atomic" keeps a mutation and its audit row in one transaction,
    # "independent" commits the mutation before writing the audit row
    audit_write_mode: str = Field(default="atomic", env="AUDIT_WRITE_MODE")

    # Status simulator
    simulation_enabled: bool = Field(default=True, env="SIMULATION_ENABLED")
    simulation_interval_seconds: float = Field(default=10.0, env="SIMULATION_INTERVAL_SECONDS")

    # Chat
    chat_history_limit: int = Field(default=50, env="CHAT_HISTORY_LIMIT")

    # Startup
    seed_demo_data: bool = Field(default=True, env="SEED_DEMO_DATA")

    # CORS (HTTP and Socket.IO)
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        env="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def audit_is_atomic(self) -> bool:
        return self.audit_write_mode.lower() != "independent"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
