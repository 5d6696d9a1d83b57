"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Settings read from the environment (or ``.env``)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Beast Games API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Profile store
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/beast_games",
        description="PostgreSQL URL; a plain postgresql:// scheme is accepted",
    )

    # Identity provider
    supabase_url: str = Field(
        default="",
        description="Project URL used to locate the signing keys (JWKS)",
    )
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="HS256 key for locally issued tokens (tests, local runs)",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Event administrators
    admin_emails: str = Field(
        default="tgantasa@gitam.in,physicalfitness_vsp@gitam.in",
        description="Comma-separated allow-list of administrator emails (exact match)",
    )

    # HTTP surface
    rate_limit_enabled: bool = Field(default=True)
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed browser origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def admin_emails_list(self) -> list[str]:
        """Case is preserved; matching is exact."""
        return _split_csv(self.admin_emails)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return _split_csv(self.cors_origins)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_jwks_url(self) -> str:
        """Signing-key endpoint for ES256 session tokens, empty when unset."""
        if not self.supabase_url:
            return ""
        return f"{self.supabase_url.rstrip('/')}/auth/v1/.well-known/jwks.json"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """``database_url`` rewritten to the asyncpg driver scheme."""
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
