"""Changelog category classification."""

from commitsift.classification.alternatives import suggest_alternatives, suggest_with_alternatives
from commitsift.classification.category import (
    CATEGORY_MAPPING,
    KEYWORD_RULES,
    KeywordRule,
    get_category_mapping,
    infer_category_from_message,
    suggest_category,
    suggest_category_from_message,
)

__all__ = [
    "CATEGORY_MAPPING",
    "KEYWORD_RULES",
    "KeywordRule",
    "get_category_mapping",
    "infer_category_from_message",
    "suggest_category",
    "suggest_category_from_message",
    "suggest_alternatives",
    "suggest_with_alternatives",
]
