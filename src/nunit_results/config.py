"""Configuration for nunit_results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ParseOptions:
    """Options for a single parser instance."""

    parse_errors: bool = True
    tracked_files: tuple[str, ...] = ()


class Settings(BaseSettings):
    """Settings loaded from ``NUNIT_RESULTS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NUNIT_RESULTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Parsing
    parse_errors: bool = True

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = True

    def to_parse_options(self, tracked_files: Iterable[str] = ()) -> ParseOptions:
        """Build parser options from these settings."""
        return ParseOptions(parse_errors=self.parse_errors, tracked_files=tuple(tracked_files))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
