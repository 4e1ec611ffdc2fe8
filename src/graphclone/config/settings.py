"""Configuration settings using Pydantic Settings.

Provides typed copy behaviour switches with environment variable support.

Usage:
    from graphclone.config import CopySettings

    # Load from environment variables (GRAPHCLONE_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(callback_handling=CallbackHandling.SHARE)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from graphclone.core.fields import CallbackHandling


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for deep copies.

    Attributes:
        callback_handling: What clones hold where originals hold a callback.
        trust_annotations: Skip fields annotated with a primitive type without
            reading them. Disable when annotations may not match runtime values.
        copy_mapping_keys: Deep-copy dict keys as well as values.
        verbose: Emit graphclone debug logs when logging is configured.
        log_json: Render logs as JSON lines instead of console output.

    Environment Variables:
        GRAPHCLONE_CALLBACK_HANDLING (null, share or error)
        GRAPHCLONE_TRUST_ANNOTATIONS
        GRAPHCLONE_COPY_MAPPING_KEYS
        GRAPHCLONE_VERBOSE
        GRAPHCLONE_LOG_JSON
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    callback_handling: CallbackHandling = CallbackHandling.NULL
    trust_annotations: bool = True
    copy_mapping_keys: bool = True
    verbose: bool = False
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> CopySettings:
    """Load settings from the environment once per process.

    Call get_settings.cache_clear() after changing GRAPHCLONE_* variables.
    """
    return CopySettings()
