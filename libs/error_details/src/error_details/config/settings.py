"""Error Details Configuration Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorDetailsSettings(BaseSettings):
    """Settings controlling which error details a service emits."""

    model_config = SettingsConfigDict(
        env_prefix="ERROR_DETAILS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # DEBUG INFO
    # ============================================================================

    include_debug_info: bool = Field(
        default=False,
        description="Attach DebugInfo (stack entries and detail) to error responses",
    )
    max_stack_entries: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of stack entries kept per DebugInfo (innermost first)",
    )


@lru_cache
def get_settings() -> ErrorDetailsSettings:
    """Get cached error-details settings instance.

    Returns:
        ErrorDetailsSettings: Settings loaded from the environment.
    """
    return ErrorDetailsSettings()
