"""Contributor attribution helpers."""

from commitsift.contributors.team import (
    COMMON_BOTS,
    TeamRoster,
    extract_github_username,
    mark_external_contributors,
    normalize_author,
)

__all__ = [
    "COMMON_BOTS",
    "TeamRoster",
    "extract_github_username",
    "mark_external_contributors",
    "normalize_author",
]
