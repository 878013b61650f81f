"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

Features:
- A custom `LOG` function for debug logging from the parser, the expansion
  engine and the CLI.
- Dynamic checking of the `beQuiet` flag to suppress logs when necessary.
- Consistent logging format on stderr, so expanded output on stdout is never
  interleaved with log lines.

Example:
    from envsubst.lib.log import LOG
    LOG("Parsing template of 42 characters")

Environment:
- Set `ENVSUBST_BEQUIET=False` to see detailed logging output.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the package
app_logger = logger.bind(app="ENVSUBST")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs the message at debug level unless `appsettings.beQuiet` is set.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from envsubst.config.settings import appsettings  # Ensure up-to-date settings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)
