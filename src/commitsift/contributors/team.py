"""Team membership checks for external-contributor detection."""

import json
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import BaseModel, Field

from commitsift.models import ParseResult

logger = structlog.get_logger(__name__)

# Well-known bot accounts, always treated as team members
COMMON_BOTS = (
    "dependabot",
    "dependabot[bot]",
    "renovate",
    "renovate[bot]",
    "github-actions",
    "github-actions[bot]",
    "semantic-release-bot",
    "greenkeeper[bot]",
    "snyk-bot",
    "imgbot[bot]",
    "allcontributors[bot]",
)

GITHUB_NOREPLY_SUFFIX = "@users.noreply.github.com"


def normalize_author(author: str) -> str:
    """Normalize an author name, handle or email for comparison."""
    return author.removeprefix("@").lower()


def extract_github_username(email: str) -> Optional[str]:
    """Extract the username from a GitHub noreply email.

    Handles ``user@users.noreply.github.com`` and
    ``12345+user@users.noreply.github.com``.

    Args:
        email: Author email

    Returns:
        Username, or None for other emails
    """
    if len(email) <= len(GITHUB_NOREPLY_SUFFIX) or not email.lower().endswith(GITHUB_NOREPLY_SUFFIX):
        return None

    local = email[: -len(GITHUB_NOREPLY_SUFFIX)]
    _, plus, username = local.partition("+")
    return username if plus else local


class TeamRoster(BaseModel):
    """Maintainers and bots whose commits are not external contributions."""

    maintainers: List[str] = Field(default_factory=list, description="Maintainer names, handles or emails")
    bots: List[str] = Field(default_factory=list, description="Project-specific bot accounts")

    @classmethod
    def from_changelog_file(cls, path: Path) -> "TeamRoster":
        """Load maintainers and bots from a CHANGELOG.json file.

        Args:
            path: Path to the changelog JSON

        Returns:
            TeamRoster

        Raises:
            ValueError: If the file cannot be read or is not valid JSON
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Could not load changelog {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Changelog {path} must contain a JSON object")

        return cls(maintainers=data.get("maintainers") or [], bots=data.get("bots") or [])

    def is_team_member(self, author: str, email: str = "") -> bool:
        """Check whether a commit author belongs to the team.

        Matches the name or email against maintainers, the GitHub noreply
        username against maintainers, and the name against known bots.
        An author with neither name nor email counts as a team member.

        Args:
            author: Author name
            email: Author email

        Returns:
            True if the author is a maintainer or a bot
        """
        if not author and not email:
            return True

        norm_author = normalize_author(author)
        norm_email = normalize_author(email)
        maintainers = {normalize_author(m) for m in self.maintainers}

        if norm_author in maintainers or (norm_email and norm_email in maintainers):
            return True

        username = extract_github_username(email) if email else None
        if username and normalize_author(username) in maintainers:
            return True

        bots = {normalize_author(b) for b in (*self.bots, *COMMON_BOTS)}
        return norm_author in bots


def mark_external_contributors(result: ParseResult, roster: TeamRoster) -> int:
    """Flag commits whose author is not on the team roster.

    Call ParseResult.compute_contributors() afterwards.

    Args:
        result: Parse result to annotate
        roster: Team roster

    Returns:
        Number of commits flagged as external
    """
    flagged = 0
    for commit in result.commits:
        commit.is_external = not roster.is_team_member(commit.author, commit.author_email or "")
        flagged += commit.is_external

    logger.debug("external_contributors_marked", flagged=flagged, total=len(result.commits))
    return flagged
