import sys
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_notes_path() -> Path:
    """Platform-conventional notes directory under the user's home."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return Path("./notes")

    if sys.platform in ("win32", "darwin"):
        return home / "Documents" / "Notes"
    return home / "Notes"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_ignore_empty=True)

    # Storage settings
    notes_path: Path = Field(default_factory=default_notes_path)

    # Logging settings
    debug: bool = Field(default=False, validation_alias="notesapp_debug")
    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Basic auth settings for the JSON API
    auth_username: str | None = None
    auth_password: str | None = None

    @field_validator("debug", mode="before")
    @classmethod
    def _any_value_enables_debug(cls, value: object) -> object:
        # NOTESAPP_DEBUG is a presence flag: any non-empty value turns it on
        if isinstance(value, str):
            return value != ""
        return value

    @property
    def api_auth_configured(self) -> bool:
        return bool(self.auth_username and self.auth_password)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


def configure_logging(settings: "Settings") -> None:
    """Send log records to stderr at the configured level."""
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.effective_log_level}])


settings = Settings()
