"""
settings.py

Application configuration for envsubst.

Features:
- Centralized configuration using Pydantic settings
- Strict-mode defaults for the command line tool
- Input size limit for templates read from files or stdin

Usage:
Import appsettings for application configuration values.
"""

from typing import Final
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output on stderr
console: Final[Console] = Console(stderr=True)

DEFAULT_MAX_INPUT_SIZE: Final[int] = 10 * 1024 * 1024


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the
    ENVSUBST_ prefix, e.g. ENVSUBST_NO_UNSET=true.

    Attributes:
        beQuiet: Suppress debug logging output
        no_unset: Fail when a referenced variable is unset
        no_empty: Fail when a referenced variable is empty
        max_input_size: Largest template, in characters, the CLI will read
    """

    beQuiet: bool = True
    no_unset: bool = False
    no_empty: bool = False
    max_input_size: int = DEFAULT_MAX_INPUT_SIZE

    model_config = SettingsConfigDict(
        env_prefix="ENVSUBST_",
        case_sensitive=False,
        extra="ignore",
    )


# Create the application settings instance
appsettings: Final[App] = App()
