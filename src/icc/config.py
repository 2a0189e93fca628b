"""Engine configuration via environment variables with Pydantic validation.

All values are read from ICC_* environment variables (with .env file support).
Invalid values fail loudly when the settings are built.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Compliance engine settings. All values sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ICC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Intents whose value may legitimately differ per device (comma-separated)
    allowed_variable_intents: str = "hostname,description,ntp-server,logging-host"

    # Input cap, enforced before any parsing work
    max_input_bytes: int = 1_048_576

    # Line-range batch size for large inputs
    batch_size: int = 500

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"ICC_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def log_format_known(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError("ICC_LOG_FORMAT must be 'json' or 'console'")
        return fmt

    @field_validator("max_input_bytes", "batch_size")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("value must be a positive integer")
        return v

    @property
    def allowed_variables(self) -> frozenset[str]:
        """Parse the comma-separated intent list into a set of intent tags."""
        return frozenset(
            intent.strip().lower()
            for intent in self.allowed_variable_intents.split(",")
            if intent.strip()
        )


def get_settings() -> Settings:
    """Create and return a validated Settings instance.

    Raises ValidationError with clear messages if an env var is invalid.
    """
    return Settings()
