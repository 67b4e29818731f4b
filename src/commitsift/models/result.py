"""Parse result with summary statistics and contributors."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from commitsift.models.commit import Commit


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommitRange(_CamelModel):
    """The commit range that was parsed."""

    since: Optional[str] = Field(None, description="Lower bound ref (exclusive)")
    until: Optional[str] = Field(None, description="Upper bound ref")
    commit_count: int = Field(0, description="Number of commits parsed")


class Summary(_CamelModel):
    """Aggregate statistics about the parsed commits."""

    by_type: Dict[str, int] = Field(default_factory=dict, description="Commit count per conventional type")
    by_suggested_category: Dict[str, int] = Field(
        default_factory=dict, description="Commit count per suggested category"
    )
    total_files_changed: int = Field(0, description="Sum of files changed")
    total_insertions: int = Field(0, description="Sum of lines added")
    total_deletions: int = Field(0, description="Sum of lines deleted")


class Contributor(_CamelModel):
    """An author with their commit count."""

    name: str = Field(..., description="Author name")
    commit_count: int = Field(..., description="Number of commits by this author")
    is_external: bool = Field(False, description="Author has at least one external commit")


class ParseResult(_CamelModel):
    """Complete output of parsing a git log."""

    repository: Optional[str] = Field(None, description="Repository identifier")
    range: CommitRange = Field(default_factory=CommitRange, description="Requested range")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the result was generated (UTC)",
    )
    commits: List[Commit] = Field(default_factory=list, description="Parsed commits in log order")
    summary: Summary = Field(default_factory=Summary, description="Running summary statistics")
    contributors: List[Contributor] = Field(
        default_factory=list, description="Derived contributor list, see compute_contributors()"
    )

    def add_commit(self, commit: Commit) -> None:
        """Append a commit and update the running summary.

        Args:
            commit: Parsed commit
        """
        self.commits.append(commit)
        self.range.commit_count = len(self.commits)

        if commit.type:
            self.summary.by_type[commit.type] = self.summary.by_type.get(commit.type, 0) + 1

        if commit.suggested_category is not None:
            key = commit.suggested_category.value
            self.summary.by_suggested_category[key] = self.summary.by_suggested_category.get(key, 0) + 1

        self.summary.total_files_changed += commit.files_changed
        self.summary.total_insertions += commit.insertions
        self.summary.total_deletions += commit.deletions

    def compute_contributors(self) -> List[Contributor]:
        """Rebuild the contributor list from the commits.

        Call this after all commits have been added and ``is_external`` has
        been set. Authors are grouped by exact name. Authors with at least one
        external commit come first; each group is ordered by commit count
        descending, ties keeping first-seen order.

        Returns:
            The new contributor list (also stored on the result)
        """
        counts: Dict[str, int] = {}
        external: Dict[str, bool] = {}

        for commit in self.commits:
            if not commit.author:
                continue
            counts[commit.author] = counts.get(commit.author, 0) + 1
            if commit.is_external:
                external[commit.author] = True

        contributors = [
            Contributor(name=name, commit_count=count, is_external=external.get(name, False))
            for name, count in counts.items()
        ]

        # sorted() is stable, so equal counts keep first-seen order
        external_group = sorted((c for c in contributors if c.is_external), key=lambda c: -c.commit_count)
        internal_group = sorted((c for c in contributors if not c.is_external), key=lambda c: -c.commit_count)

        self.contributors = external_group + internal_group
        return self.contributors

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields.

        Returns:
            JSON-compatible dict
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
