"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (defaults are for local dev only)
    - get_settings() is cached (lru_cache) — single instance per process
    - Provider-specific DB names (MYSQLHOST, ...) win over generic ones (DB_HOST, ...)
    - A DATABASE_URL / MYSQL_URL overrides the individual DB parts entirely

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - AliasChoices keeps the Railway variable names and the generic names side by side
    - Basic auth disabled unless BASIC_USER is set
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

MYSQL_DRIVER = "mysql+aiomysql"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False,
        populate_by_name=True, extra="ignore",
    )

    # Database
    db_host: str = Field("localhost", validation_alias=AliasChoices("MYSQLHOST", "DB_HOST"))
    db_user: str = Field("root", validation_alias=AliasChoices("MYSQLUSER", "DB_USER"))
    db_password: str = Field("", validation_alias=AliasChoices("MYSQLPASSWORD", "DB_PASSWORD"))
    db_name: str = Field("railway", validation_alias=AliasChoices("MYSQLDATABASE", "DB_NAME"))
    db_port: int = Field(3306, validation_alias=AliasChoices("MYSQLPORT", "DB_PORT"))
    database_url: str | None = Field(
        None, validation_alias=AliasChoices("DATABASE_URL", "MYSQL_URL"),
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_mysql_url(cls, v: str | None) -> str | None:
        """Railway provides mysql:// but SQLAlchemy async needs mysql+aiomysql://."""
        if isinstance(v, str) and v.startswith("mysql://"):
            return v.replace("mysql://", f"{MYSQL_DRIVER}://", 1)
        return v or None

    db_connection_limit: int = Field(10, validation_alias="DB_CONNECTION_LIMIT")
    db_pool_timeout: int = Field(30, validation_alias="DB_POOL_TIMEOUT")

    # HTTP
    port: int = Field(3000, validation_alias="PORT")
    public_dir: str = Field("public", validation_alias="PUBLIC_DIR")
    cors_origins: list[str] = Field(["*"], validation_alias="CORS_ORIGINS")

    # Optional process-wide basic auth
    basic_user: str | None = Field(None, validation_alias="BASIC_USER")
    basic_pass: str | None = Field(None, validation_alias="BASIC_PASS")

    # Login
    admin_username: str = Field("admin", validation_alias="ADMIN_USERNAME")
    admin_password: str = Field("ian.rdr4", validation_alias="ADMIN_PASSWORD")
    session_secret: str = Field(
        "please-change-this-secret", validation_alias="SESSION_SECRET",
    )
    session_max_age_seconds: int = Field(
        8 * 60 * 60, validation_alias="SESSION_MAX_AGE_SECONDS",
    )
    environment: str = Field(
        "development", validation_alias=AliasChoices("NODE_ENV", "APP_ENV"),
    )

    # Observability
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field("json", validation_alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.basic_user)

    @property
    def session_max_age(self) -> timedelta:
        return timedelta(seconds=self.session_max_age_seconds)

    def store_url(self) -> str:
        """SQLAlchemy URL for the Store Gateway."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            MYSQL_DRIVER,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    def describe_store(self) -> dict:
        """DB config safe for logs (no password)."""
        if self.database_url:
            url = make_url(self.database_url)
            return {
                "host": url.host, "user": url.username, "database": url.database,
                "port": url.port, "password_set": bool(url.password),
                "source": "url",
            }
        return {
            "host": self.db_host, "user": self.db_user, "database": self.db_name,
            "port": self.db_port, "password_set": bool(self.db_password),
            "source": "parts",
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
