"""Configuration management using pydantic-settings.

Settings are read from environment variables (prefixed with SPELL_) and an
optional .env file in the working directory. Environment variables take
precedence over the .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spell_aligner.aligner import get_cost_model


class Settings(BaseSettings):
    """Spell aligner settings.

    Attributes:
        dictionary_path: Path to the newline-delimited dictionary file
        max_suggestions: Maximum number of suggestions per word
        distance_threshold: Optional inclusive upper bound on suggestion distance
        cost_model: Name of the alignment cost model ("weighted" or "unit")
        max_word_length: Queries longer than this are truncated
        workers: Number of processes used to score the dictionary
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dictionary_path: str = "dictionary.txt"
    max_suggestions: int = Field(default=5, ge=1)
    distance_threshold: int | None = Field(default=None, ge=0)
    cost_model: str = "weighted"
    max_word_length: int = Field(default=100, ge=1)
    workers: int = Field(default=1, ge=1)

    @field_validator("dictionary_path")
    @classmethod
    def validate_dictionary_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "dictionary_path cannot be empty"
            raise ValueError(msg)
        return v

    @field_validator("cost_model")
    @classmethod
    def validate_cost_model(cls, v: str) -> str:
        return get_cost_model(v).name


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance."""
    return Settings()
