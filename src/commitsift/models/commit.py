"""Data models for parsed commit information."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from commitsift.models.category import Category, Tier


class Commit(BaseModel):
    """Represents a single parsed Git commit.

    Built once per log block. Only ``is_external`` is assigned afterwards, by
    the team-membership check.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "hash": "abc123def456789012345678901234567890abcd",
                "shortHash": "abc123d",
                "author": "John Doe",
                "authorEmail": "john@example.com",
                "date": "2026-01-04",
                "message": "feat(auth): add OAuth2 support",
                "body": "Implements OAuth2 flow with PKCE.\n\nCloses #123",
                "type": "feat",
                "scope": "auth",
                "subject": "add OAuth2 support",
                "breaking": False,
                "issue": 123,
                "pr": 0,
                "filesChanged": 2,
                "insertions": 15,
                "deletions": 5,
                "files": ["src/auth/oauth.go", "src/auth/oauth_test.go"],
                "suggestedCategory": "Added",
                "isExternal": False,
            }
        },
    )

    hash: str = Field(..., description="Full commit SHA hash")
    short_hash: str = Field(..., description="Abbreviated commit hash")
    author: str = Field(..., description="Author name")
    author_email: Optional[str] = Field(None, description="Author email")
    date: str = Field(..., description="Author date as YYYY-MM-DD, or the raw value if unparseable")
    message: str = Field(..., description="Raw subject line")
    body: Optional[str] = Field(None, description="Commit body (lines after the subject)")

    # Conventional commit fields
    type: Optional[str] = Field(None, description="Conventional commit type, lower-cased")
    scope: Optional[str] = Field(None, description="Conventional commit scope")
    subject: str = Field(..., description="Subject with the conventional prefix removed")
    breaking: bool = Field(False, description="Whether the commit is a breaking change")

    # References (0 means none)
    issue: int = Field(0, description="First referenced issue number")
    pr: int = Field(0, description="Pull request number from a trailing (#N)")

    # Numstat
    files_changed: int = Field(0, description="Number of files changed")
    insertions: int = Field(0, description="Number of lines added")
    deletions: int = Field(0, description="Number of lines deleted")
    files: Optional[List[str]] = Field(None, description="Changed file paths, omitted when file listing is off")

    suggested_category: Optional[Category] = Field(None, description="Suggested changelog category")
    is_external: bool = Field(False, description="Author is not a maintainer or known bot")


class ConventionalCommit(BaseModel):
    """Parsed view of a ``type(scope)!: subject`` header."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Commit type, lower-cased")
    scope: Optional[str] = Field(None, description="Scope from the parentheses")
    subject: str = Field(..., description="Text after the colon, trimmed")
    breaking: bool = Field(False, description="Header carries a '!' before the colon")


class CategorySuggestion(BaseModel):
    """A suggested changelog category with confidence and reasoning."""

    model_config = ConfigDict(frozen=True)

    category: Category = Field(..., description="Suggested category")
    tier: Tier = Field(..., description="Priority tier of the suggestion")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score between 0 and 1")
    reasoning: str = Field(..., description="Human-readable justification")

    @property
    def is_low_confidence(self) -> bool:
        """Suggestions below 0.5 should be reviewed manually."""
        return self.confidence < 0.5
