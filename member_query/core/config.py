
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Member Query API"
    app_env: str = "development"

    # Database (any async SQLAlchemy URL; SQLite for local dev and tests)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./member_query.db",
        alias="DATABASE_URL",
    )
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")

    # Paging defaults for the search endpoints
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=200, alias="MAX_PAGE_SIZE")
    default_count_mode: str = Field(
        default="optimized", alias="DEFAULT_COUNT_MODE",
    )  # "simple" | "optimized"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

settings = Settings()
