"""Unit tests for changelog category classification."""

import pytest

from commitsift.classification import (
    CATEGORY_MAPPING,
    KEYWORD_RULES,
    get_category_mapping,
    infer_category_from_message,
    suggest_alternatives,
    suggest_category,
    suggest_category_from_message,
    suggest_with_alternatives,
)
from commitsift.extraction import KNOWN_CONVENTIONAL_TYPES
from commitsift.models import Category, Tier


class TestSuggestCategory:
    """Tests for the conventional type table."""

    @pytest.mark.parametrize(
        "commit_type,category",
        [
            ("feat", Category.ADDED),
            ("fix", Category.FIXED),
            ("docs", Category.DOCUMENTATION),
            ("style", Category.INTERNAL),
            ("refactor", Category.CHANGED),
            ("perf", Category.PERFORMANCE),
            ("test", Category.TESTS),
            ("build", Category.BUILD),
            ("ci", Category.INFRASTRUCTURE),
            ("chore", Category.INTERNAL),
            ("revert", Category.FIXED),
            ("security", Category.SECURITY),
            ("deps", Category.DEPENDENCIES),
        ],
    )
    def test_type_mapping(self, commit_type, category):
        """Each known type maps to its category."""
        suggestion = suggest_category(commit_type)

        assert suggestion.category == category
        assert 0.80 <= suggestion.confidence <= 0.95
        assert commit_type in suggestion.reasoning or commit_type == "revert"

    def test_table_covers_known_types(self):
        """The table has exactly the known conventional types."""
        assert set(CATEGORY_MAPPING) == set(KNOWN_CONVENTIONAL_TYPES)

    def test_case_insensitive(self):
        """Type lookup ignores case."""
        assert suggest_category("FEAT") == suggest_category("feat")

    def test_unknown_type(self):
        """Unknown types have no suggestion."""
        assert suggest_category("wip") is None

    def test_mapping_copy(self):
        """get_category_mapping() returns a detached copy."""
        mapping = get_category_mapping()
        mapping.pop("feat")

        assert "feat" in CATEGORY_MAPPING
        assert suggest_category("feat") is not None


class TestSuggestCategoryFromMessage:
    """Tests for suggest_category_from_message()."""

    def test_feat(self):
        """feat maps to Added with high confidence."""
        suggestion = suggest_category_from_message("feat: add x")

        assert suggestion.category == Category.ADDED
        assert suggestion.confidence >= 0.90

    def test_fix(self):
        """fix maps to Fixed with high confidence."""
        suggestion = suggest_category_from_message("fix: y")

        assert suggestion.category == Category.FIXED
        assert suggestion.confidence >= 0.90

    def test_breaking_header(self):
        """A '!' header is Breaking regardless of type."""
        suggestion = suggest_category_from_message("feat!: remove old API")

        assert suggestion.category == Category.BREAKING
        assert suggestion.tier == Tier.STANDARD
        assert suggestion.confidence >= 0.90

    def test_breaking_body(self):
        """A BREAKING CHANGE body line is equivalent to '!'."""
        suggestion = suggest_category_from_message(
            "feat: change API\n\nBREAKING CHANGE: old method removed"
        )

        assert suggestion.category == Category.BREAKING
        assert suggestion.confidence >= 0.90

    def test_breaking_marker_in_header_ignored(self):
        """The body marker is only checked after the first line."""
        suggestion = suggest_category_from_message("docs: BREAKING CHANGE: explained")

        assert suggestion.category == Category.DOCUMENTATION

    def test_unknown_conventional_type(self):
        """An unknown conventional type gets no suggestion, not a heuristic one."""
        assert suggest_category_from_message("wip: add new stuff") is None

    def test_deterministic(self):
        """Classifying the same message twice gives the same result."""
        first = suggest_category_from_message("Fix crash on startup")
        second = suggest_category_from_message("Fix crash on startup")

        assert first == second


class TestInferCategory:
    """Tests for the keyword fallback."""

    def test_security_before_fix(self):
        """Security keywords win over generic fix keywords."""
        suggestion = suggest_category_from_message("Fix security vulnerability")

        assert suggestion.category == Category.SECURITY

    @pytest.mark.parametrize(
        "message,category",
        [
            ("Add support for YAML", Category.ADDED),
            ("Fixed crash when saving", Category.FIXED),
            ("Remove legacy exporter", Category.REMOVED),
            ("Deprecate the v1 endpoint", Category.DEPRECATED),
            ("Update README with examples", Category.DOCUMENTATION),
            ("Bump requests to 2.32", Category.DEPENDENCIES),
            ("Optimize query planner", Category.PERFORMANCE),
            ("Patch CVE-2024-1234", Category.SECURITY),
        ],
    )
    def test_keyword_groups(self, message, category):
        """Keyword groups map to their categories."""
        suggestion = infer_category_from_message(message)

        assert suggestion.category == category
        assert 0.30 <= suggestion.confidence <= 0.70

    def test_default_changed(self):
        """Unmatched messages default to Changed at 0.30."""
        suggestion = suggest_category_from_message("Update something")

        assert suggestion.category == Category.CHANGED
        assert suggestion.confidence == pytest.approx(0.30)
        assert suggestion.is_low_confidence

    def test_requirements_update_is_not_a_dependency_keyword(self):
        """Only the listed dependency phrases count, not 'update requirements'."""
        suggestion = infer_category_from_message("Update requirements for the login page")

        assert suggestion.category == Category.CHANGED

    def test_security_rule_is_first(self):
        """The security group is the first rule."""
        assert KEYWORD_RULES[0].suggestion.category == Category.SECURITY

    def test_heuristic_confidence_below_conventional(self):
        """Heuristic suggestions are less confident than the type table."""
        lowest_conventional = min(s.confidence for s in CATEGORY_MAPPING.values())
        assert all(rule.suggestion.confidence < lowest_conventional for rule in KEYWORD_RULES)


class TestAlternatives:
    """Tests for alternative suggestions."""

    def test_security_with_removal(self):
        """Security fixes that remove things may be Breaking."""
        alternatives = suggest_alternatives("security: remove weak ciphers", Category.SECURITY)

        assert [a.category for a in alternatives] == [Category.BREAKING]

    def test_added_with_auth(self):
        """Auth features may be Security."""
        alternatives = suggest_alternatives("feat(auth): add OAuth2 support", Category.ADDED)

        assert [a.category for a in alternatives] == [Category.SECURITY]

    def test_performance(self):
        """Performance changes may be Changed."""
        alternatives = suggest_alternatives("perf: cache lookups", Category.PERFORMANCE)

        assert alternatives[0].category == Category.CHANGED
        assert alternatives[0].confidence == pytest.approx(0.40)

    def test_no_alternatives(self):
        """Plain fixes have no alternatives."""
        assert suggest_alternatives("fix: typo", Category.FIXED) == []

    def test_with_alternatives_primary_first(self):
        """The primary suggestion comes first."""
        suggestions = suggest_with_alternatives("refactor: rename parser module")

        assert suggestions[0].category == Category.CHANGED
        assert suggestions[1].category == Category.BREAKING

    def test_with_alternatives_unknown_type(self):
        """No primary means no suggestions at all."""
        assert suggest_with_alternatives("wip: rename things") == []
