"""Runtime settings, read from the environment or a .env file.

Every setting can be given as ``DIRECTORS_PALETTE_<NAME>``; the OpenAI key is
also read from the conventional ``OPENAI_API_KEY``.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DIRECTORS_PALETTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # LLM
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DIRECTORS_PALETTE_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_model: str = "gpt-4o-mini"

    # Transfer
    transfer_dir: Path = Path(".directors_palette") / "session"
    transfer_source: str = "directors-palette"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
