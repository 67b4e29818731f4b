"""Changelog category suggestions for commits.

Conventional commits are mapped through a fixed type table. Messages that are
not conventional fall back to ordered keyword rules, where the first matching
rule wins.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from commitsift.extraction.conventional import has_breaking_change_marker, parse_conventional_commit
from commitsift.models import Category, CategorySuggestion, Tier


def _conventional(category: Category, tier: Tier, confidence: float, reasoning: str) -> CategorySuggestion:
    return CategorySuggestion(category=category, tier=tier, confidence=confidence, reasoning=reasoning)


CATEGORY_MAPPING: Mapping[str, CategorySuggestion] = MappingProxyType(
    {
        "feat": _conventional(
            Category.ADDED, Tier.CORE, 0.95,
            "Conventional commit type 'feat' indicates new functionality",
        ),
        "fix": _conventional(
            Category.FIXED, Tier.CORE, 0.95,
            "Conventional commit type 'fix' indicates bug fixes",
        ),
        "docs": _conventional(
            Category.DOCUMENTATION, Tier.EXTENDED, 0.95,
            "Conventional commit type 'docs' indicates documentation changes",
        ),
        "style": _conventional(
            Category.INTERNAL, Tier.OPTIONAL, 0.90,
            "Conventional commit type 'style' indicates formatting with no logic change",
        ),
        "refactor": _conventional(
            Category.CHANGED, Tier.CORE, 0.85,
            "Conventional commit type 'refactor' indicates code restructuring",
        ),
        "perf": _conventional(
            Category.PERFORMANCE, Tier.STANDARD, 0.95,
            "Conventional commit type 'perf' indicates performance improvements",
        ),
        "test": _conventional(
            Category.TESTS, Tier.EXTENDED, 0.95,
            "Conventional commit type 'test' indicates test additions or changes",
        ),
        "build": _conventional(
            Category.BUILD, Tier.EXTENDED, 0.95,
            "Conventional commit type 'build' indicates build system changes",
        ),
        "ci": _conventional(
            Category.INFRASTRUCTURE, Tier.OPTIONAL, 0.90,
            "Conventional commit type 'ci' indicates CI/CD changes",
        ),
        "chore": _conventional(
            Category.INTERNAL, Tier.OPTIONAL, 0.85,
            "Conventional commit type 'chore' indicates maintenance tasks",
        ),
        "revert": _conventional(
            Category.FIXED, Tier.CORE, 0.80,
            "Reverting a commit typically indicates fixing a regression",
        ),
        "security": _conventional(
            Category.SECURITY, Tier.CORE, 0.95,
            "Conventional commit type 'security' indicates security fixes",
        ),
        "deps": _conventional(
            Category.DEPENDENCIES, Tier.STANDARD, 0.95,
            "Conventional commit type 'deps' indicates dependency updates",
        ),
    }
)

BREAKING_HEADER_SUGGESTION = CategorySuggestion(
    category=Category.BREAKING,
    tier=Tier.STANDARD,
    confidence=0.95,
    reasoning="Commit marked with '!' indicates breaking change",
)

BREAKING_BODY_SUGGESTION = CategorySuggestion(
    category=Category.BREAKING,
    tier=Tier.STANDARD,
    confidence=0.95,
    reasoning="Commit body contains BREAKING CHANGE marker",
)

DEFAULT_SUGGESTION = CategorySuggestion(
    category=Category.CHANGED,
    tier=Tier.CORE,
    confidence=0.30,
    reasoning="Unable to determine specific category from message",
)


@dataclass(frozen=True)
class KeywordRule:
    """A keyword group and the suggestion it produces."""

    keywords: Tuple[str, ...]
    suggestion: CategorySuggestion

    def matches(self, lowered_message: str) -> bool:
        return any(keyword in lowered_message for keyword in self.keywords)


# Order matters: security is checked before the generic add/fix groups.
# Trailing spaces keep "add " from matching "address".
KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(
        ("security", "cve", "vulnerability", "exploit"),
        CategorySuggestion(
            category=Category.SECURITY, tier=Tier.CORE, confidence=0.70,
            reasoning="Message contains security-related keywords",
        ),
    ),
    KeywordRule(
        ("add ", "adds ", "added ", "adding ", "new ", "introduce ", "implement "),
        CategorySuggestion(
            category=Category.ADDED, tier=Tier.CORE, confidence=0.60,
            reasoning="Message suggests new functionality",
        ),
    ),
    KeywordRule(
        ("fix ", "fixes ", "fixed ", "fixing ", "bug ", "resolve ", "repair "),
        CategorySuggestion(
            category=Category.FIXED, tier=Tier.CORE, confidence=0.60,
            reasoning="Message suggests bug fix",
        ),
    ),
    KeywordRule(
        ("remove ", "removes ", "removed ", "delete ", "drop "),
        CategorySuggestion(
            category=Category.REMOVED, tier=Tier.CORE, confidence=0.60,
            reasoning="Message suggests removal",
        ),
    ),
    KeywordRule(
        ("deprecate ", "deprecates ", "deprecated "),
        CategorySuggestion(
            category=Category.DEPRECATED, tier=Tier.CORE, confidence=0.70,
            reasoning="Message indicates deprecation",
        ),
    ),
    KeywordRule(
        ("update readme", "update doc", "documentation"),
        CategorySuggestion(
            category=Category.DOCUMENTATION, tier=Tier.EXTENDED, confidence=0.60,
            reasoning="Message suggests documentation changes",
        ),
    ),
    KeywordRule(
        ("upgrade ", "bump ", "update depend", "update go.mod"),
        CategorySuggestion(
            category=Category.DEPENDENCIES, tier=Tier.STANDARD, confidence=0.65,
            reasoning="Message suggests dependency updates",
        ),
    ),
    KeywordRule(
        ("performance", "optimize", "speed up", "faster"),
        CategorySuggestion(
            category=Category.PERFORMANCE, tier=Tier.STANDARD, confidence=0.60,
            reasoning="Message suggests performance improvement",
        ),
    ),
)


def suggest_category(commit_type: str) -> Optional[CategorySuggestion]:
    """Look up the suggestion for a conventional commit type.

    Args:
        commit_type: Conventional commit type (case-insensitive)

    Returns:
        CategorySuggestion, or None for an unknown type
    """
    return CATEGORY_MAPPING.get(commit_type.lower())


def suggest_category_from_message(message: str) -> Optional[CategorySuggestion]:
    """Suggest a category for a full commit message.

    Breaking changes (``!`` in the header or a BREAKING CHANGE body line) win
    over the type table. Non-conventional messages go through the keyword
    rules. A conventional message with an unknown type gets no suggestion.

    Args:
        message: Commit message, header first

    Returns:
        CategorySuggestion, or None for an unknown conventional type
    """
    cc = parse_conventional_commit(message)
    if cc is None:
        return infer_category_from_message(message)

    if cc.breaking:
        return BREAKING_HEADER_SUGGESTION

    parts = message.split("\n", 1)
    if len(parts) > 1 and has_breaking_change_marker(parts[1]):
        return BREAKING_BODY_SUGGESTION

    return suggest_category(cc.type)


def infer_category_from_message(message: str) -> CategorySuggestion:
    """Infer a category from keywords in a non-conventional message.

    Args:
        message: Commit message

    Returns:
        Suggestion of the first matching keyword rule, or ``Changed`` at 0.30
    """
    lowered = message.lower()
    for rule in KEYWORD_RULES:
        if rule.matches(lowered):
            return rule.suggestion
    return DEFAULT_SUGGESTION


def get_category_mapping() -> Dict[str, CategorySuggestion]:
    """Return a copy of the conventional type to category table."""
    return dict(CATEGORY_MAPPING)
