"""Release tag and per-version result models."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from commitsift.models.commit import Commit
from commitsift.models.result import Contributor, ParseResult, Summary, _CamelModel


class Tag(_CamelModel):
    """A semantic version tag with its commit metadata."""

    name: str = Field(..., description="Tag name, e.g. v1.2.0")
    date: datetime = Field(..., description="Author date of the tagged commit")
    date_string: str = Field(..., description="Author date as YYYY-MM-DD")
    commit_hash: str = Field(..., description="Hash of the tagged commit")
    commit_count: int = Field(0, description="Commits since the previous tag")
    is_initial: bool = Field(False, description="True for the oldest tag")


class TagList(_CamelModel):
    """All semantic version tags of a repository, oldest version first."""

    repository: Optional[str] = Field(None, description="Repository identifier")
    tags: List[Tag] = Field(default_factory=list)
    total_tags: int = Field(0, description="Number of tags")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class VersionRange(_CamelModel):
    """Commit range between a version tag and the one before it."""

    version: str = Field(..., description="Version tag")
    since: Optional[str] = Field(None, description="Previous version tag, None for the first")
    until: str = Field(..., description="This version tag")
    date: str = Field(..., description="Release date as YYYY-MM-DD")
    commits: int = Field(0, description="Commit count in the range")


class VersionParseResult(_CamelModel):
    """Parsed commits of one version range."""

    version: str
    date: str
    since: Optional[str] = None
    commit_count: int = 0
    commits: List[Commit] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    contributors: List[Contributor] = Field(default_factory=list)


class VersionsResult(_CamelModel):
    """Parsed commits for every version range of a repository."""

    repository: Optional[str] = Field(None, description="Repository identifier")
    versions: List[VersionParseResult] = Field(default_factory=list)
    total_count: int = Field(0, description="Commits across all versions")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def add_version(self, version_range: VersionRange, result: ParseResult) -> VersionParseResult:
        """Append the parsed commits of one version range.

        Contributors are taken from ``result`` as they are, so mark external
        commits and call ``result.compute_contributors()`` first.

        Args:
            version_range: The version range
            result: Parsed commits of the range

        Returns:
            The appended VersionParseResult
        """
        version = VersionParseResult(
            version=version_range.version,
            date=version_range.date,
            since=version_range.since,
            commit_count=len(result.commits),
            commits=result.commits,
            summary=result.summary,
            contributors=result.contributors,
        )
        self.versions.append(version)
        self.total_count += version.commit_count
        return version
