"""Configuration management for Mates Split."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_CATEGORIES = [
    "Groceries",
    "Utilities",
    "Rent",
    "Internet",
    "Household Items",
    "Entertainment",
    "Other",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity of the household owner; all roster and expense data is scoped to it
    user_id: str = "local"

    # Display settings
    currency_symbol: str = "₹"

    # Categories seeded for a new household
    default_categories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )

    # Database path
    database_path: Path = Path.home() / ".mates_split" / "mates_split.db"

    def __init__(self, **kwargs):
        """Initialize settings and create database directory if needed."""
        super().__init__(**kwargs)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check your .env file and environment "
            f"variables (USER_ID, DATABASE_PATH, CURRENCY_SYMBOL).\n"
            f"Error: {e}"
        ) from e
