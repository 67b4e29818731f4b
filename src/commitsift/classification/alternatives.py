"""Secondary category suggestions for ambiguous commits."""

from typing import List, Sequence

from commitsift.classification.category import suggest_category_from_message
from commitsift.models import Category, CategorySuggestion, Tier


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


def suggest_alternatives(message: str, primary: Category) -> List[CategorySuggestion]:
    """Suggest other categories a commit might also belong to.

    Only the primary category and the message text are used.

    Args:
        message: Commit message
        primary: Category of the primary suggestion

    Returns:
        Alternative suggestions, possibly empty
    """
    lowered = message.lower()
    alternatives: List[CategorySuggestion] = []

    if primary == Category.SECURITY and _contains_any(lowered, ("breaking", "remove", "deprecat")):
        alternatives.append(
            CategorySuggestion(
                category=Category.BREAKING,
                tier=Tier.STANDARD,
                confidence=0.50,
                reasoning="Security fix may introduce breaking changes",
            )
        )

    if primary == Category.ADDED and _contains_any(
        lowered, ("auth", "security", "permission", "token", "credential")
    ):
        alternatives.append(
            CategorySuggestion(
                category=Category.SECURITY,
                tier=Tier.CORE,
                confidence=0.60,
                reasoning="Feature relates to authentication or security",
            )
        )

    if primary == Category.PERFORMANCE:
        alternatives.append(
            CategorySuggestion(
                category=Category.CHANGED,
                tier=Tier.CORE,
                confidence=0.40,
                reasoning="Performance improvements modify existing behavior",
            )
        )

    if primary == Category.CHANGED and _contains_any(
        lowered, ("refactor", "restructure", "rename", "move")
    ):
        alternatives.append(
            CategorySuggestion(
                category=Category.BREAKING,
                tier=Tier.STANDARD,
                confidence=0.40,
                reasoning="Refactoring may affect public API",
            )
        )

    return alternatives


def suggest_with_alternatives(message: str) -> List[CategorySuggestion]:
    """Return the primary suggestion followed by any alternatives.

    Args:
        message: Commit message

    Returns:
        Suggestions, primary first; empty for an unknown conventional type
    """
    primary = suggest_category_from_message(message)
    if primary is None:
        return []
    return [primary, *suggest_alternatives(message, primary.category)]
