"""Changelog categories and their priority tiers."""

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping


class Tier(str, Enum):
    """Priority level of a changelog category, highest first."""

    CORE = "core"
    STANDARD = "standard"
    EXTENDED = "extended"
    OPTIONAL = "optional"

    @property
    def priority(self) -> int:
        """Numeric priority (0 is the highest)."""
        return TIER_ORDER.index(self)

    @property
    def description(self) -> str:
        return TIER_DESCRIPTIONS[self]

    def includes_or_higher(self, max_tier: "Tier") -> bool:
        """Check if this tier is kept when filtering at ``max_tier``.

        Args:
            max_tier: Lowest tier to include

        Returns:
            True if this tier is ``max_tier`` or a higher priority one
        """
        return self.priority <= max_tier.priority


TIER_ORDER = (Tier.CORE, Tier.STANDARD, Tier.EXTENDED, Tier.OPTIONAL)

TIER_DESCRIPTIONS = MappingProxyType(
    {
        Tier.CORE: "Standard types defined by Keep a Changelog",
        Tier.STANDARD: "Commonly used by major providers and popular open source projects",
        Tier.EXTENDED: "Change metadata for documentation, build, and acknowledgments",
        Tier.OPTIONAL: "For deployment teams and internal operational visibility",
    }
)


class Category(str, Enum):
    """The closed set of changelog category names, in canonical order."""

    HIGHLIGHTS = "Highlights"
    BREAKING = "Breaking"
    UPGRADE_GUIDE = "Upgrade Guide"
    SECURITY = "Security"
    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    REMOVED = "Removed"
    FIXED = "Fixed"
    PERFORMANCE = "Performance"
    DEPENDENCIES = "Dependencies"
    DOCUMENTATION = "Documentation"
    BUILD = "Build"
    TESTS = "Tests"
    INFRASTRUCTURE = "Infrastructure"
    OBSERVABILITY = "Observability"
    COMPLIANCE = "Compliance"
    INTERNAL = "Internal"
    KNOWN_ISSUES = "Known Issues"
    CONTRIBUTORS = "Contributors"

    @property
    def tier(self) -> Tier:
        return CATEGORY_TIERS[self]


CATEGORY_TIERS: Mapping[Category, Tier] = MappingProxyType(
    {
        Category.HIGHLIGHTS: Tier.STANDARD,
        Category.BREAKING: Tier.STANDARD,
        Category.UPGRADE_GUIDE: Tier.STANDARD,
        Category.SECURITY: Tier.CORE,
        Category.ADDED: Tier.CORE,
        Category.CHANGED: Tier.CORE,
        Category.DEPRECATED: Tier.CORE,
        Category.REMOVED: Tier.CORE,
        Category.FIXED: Tier.CORE,
        Category.PERFORMANCE: Tier.STANDARD,
        Category.DEPENDENCIES: Tier.STANDARD,
        Category.DOCUMENTATION: Tier.EXTENDED,
        Category.BUILD: Tier.EXTENDED,
        Category.TESTS: Tier.EXTENDED,
        Category.INFRASTRUCTURE: Tier.OPTIONAL,
        Category.OBSERVABILITY: Tier.OPTIONAL,
        Category.COMPLIANCE: Tier.OPTIONAL,
        Category.INTERNAL: Tier.OPTIONAL,
        Category.KNOWN_ISSUES: Tier.EXTENDED,
        Category.CONTRIBUTORS: Tier.EXTENDED,
    }
)


def categories_up_to_tier(max_tier: Tier) -> List[Category]:
    """List categories whose tier is ``max_tier`` or higher.

    Args:
        max_tier: Lowest tier to include

    Returns:
        Categories in canonical order
    """
    return [category for category in Category if category.tier.includes_or_higher(max_tier)]
