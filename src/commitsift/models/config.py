"""Configuration models."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserConfig(BaseModel):
    """Configuration for the git log parser."""

    include_files: bool = Field(
        True,
        description="Keep changed file paths on each commit (stats are always computed)",
    )


class RepositoryConfig(BaseModel):
    """Configuration for a Git repository to read the log from."""

    repo_path: Path = Field(..., description="Path to the Git repository")
    no_merges: bool = Field(False, description="Exclude merge commits")
    path_filter: Optional[str] = Field(None, description="Only include commits touching this path")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "repo_path": "/path/to/repo",
                "no_merges": True,
                "path_filter": "src/",
            }
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with COMMITSIFT_ (e.g., COMMITSIFT_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="COMMITSIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Parsing
    include_files: bool = True
    no_merges: bool = False

    # Output
    output_format: str = "json"

    # Logging
    log_level: str = "WARNING"
