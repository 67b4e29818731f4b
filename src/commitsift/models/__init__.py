"""Data models for commit parsing and classification."""

from commitsift.models.category import (
    CATEGORY_TIERS,
    TIER_ORDER,
    Category,
    Tier,
    categories_up_to_tier,
)
from commitsift.models.commit import CategorySuggestion, Commit, ConventionalCommit
from commitsift.models.config import ParserConfig, RepositoryConfig, Settings
from commitsift.models.result import CommitRange, Contributor, ParseResult, Summary
from commitsift.models.tags import Tag, TagList, VersionParseResult, VersionRange, VersionsResult

__all__ = [
    "Category",
    "Tier",
    "CATEGORY_TIERS",
    "TIER_ORDER",
    "categories_up_to_tier",
    "Commit",
    "ConventionalCommit",
    "CategorySuggestion",
    "CommitRange",
    "Summary",
    "Contributor",
    "ParseResult",
    "ParserConfig",
    "RepositoryConfig",
    "Settings",
    "Tag",
    "TagList",
    "VersionRange",
    "VersionParseResult",
    "VersionsResult",
]
