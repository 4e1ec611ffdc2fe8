"""Configuration module using Pydantic Settings.

Provides typed copy settings with environment variable support, and the
structlog setup for applications that want graphclone's logs.

Usage:
    from graphclone.config import CopySettings, configure_logging

    settings = CopySettings(trust_annotations=False)
    configure_logging(settings, verbose=True)
"""

from graphclone.config.logging import configure_logging, get_logger
from graphclone.config.settings import CopySettings, get_settings

__all__ = [
    "CopySettings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
