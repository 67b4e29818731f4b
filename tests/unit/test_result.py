"""Unit tests for ParseResult aggregation and contributors."""

import json

import pytest

from commitsift.models import Category, Commit, ParseResult


def make_commit(author, sha="h", external=False, **kwargs):
    """Build a minimal commit."""
    return Commit(
        hash=sha,
        short_hash=sha[:7],
        author=author,
        date="2026-01-01",
        message=kwargs.pop("message", "chore: x"),
        subject=kwargs.pop("subject", "x"),
        is_external=external,
        **kwargs,
    )


@pytest.fixture
def result():
    """Empty parse result."""
    return ParseResult()


class TestAddCommit:
    """Tests for ParseResult.add_commit()."""

    def test_running_counters(self, result):
        """Counters and totals update as commits are added."""
        result.add_commit(
            make_commit("alice", type="feat", suggested_category=Category.ADDED,
                        files_changed=2, insertions=10, deletions=3)
        )
        result.add_commit(
            make_commit("bob", type="feat", suggested_category=Category.ADDED,
                        files_changed=1, insertions=1, deletions=1)
        )
        result.add_commit(make_commit("bob", files_changed=4, insertions=0, deletions=8))

        assert result.range.commit_count == 3
        assert result.summary.by_type == {"feat": 2}
        assert result.summary.by_suggested_category == {"Added": 2}
        assert result.summary.total_files_changed == 7
        assert result.summary.total_insertions == 11
        assert result.summary.total_deletions == 12

    def test_order_preserved(self, result):
        """Commits keep insertion order."""
        for sha in ("a1", "b2", "c3"):
            result.add_commit(make_commit("x", sha=sha))

        assert [c.hash for c in result.commits] == ["a1", "b2", "c3"]


class TestComputeContributors:
    """Tests for ParseResult.compute_contributors()."""

    def test_external_first(self, result):
        """External authors come first regardless of count."""
        result.add_commit(make_commit("bot", external=True))
        for _ in range(3):
            result.add_commit(make_commit("alice"))

        contributors = result.compute_contributors()

        assert [c.name for c in contributors] == ["bot", "alice"]
        assert contributors[0].is_external
        assert contributors[1].commit_count == 3

    def test_sorted_by_count_within_group(self, result):
        """Each group is ordered by commit count, descending."""
        for name, count in (("carol", 1), ("dave", 3), ("erin", 2)):
            for _ in range(count):
                result.add_commit(make_commit(name))

        names = [c.name for c in result.compute_contributors()]

        assert names == ["dave", "erin", "carol"]

    def test_ties_keep_first_seen_order(self, result):
        """Equal counts keep the order authors first appeared."""
        for name in ("zed", "amy", "zed", "amy", "mo"):
            result.add_commit(make_commit(name))

        names = [c.name for c in result.compute_contributors()]

        assert names == ["zed", "amy", "mo"]

    def test_any_external_commit_marks_author(self, result):
        """One external commit makes the author external."""
        result.add_commit(make_commit("frank"))
        result.add_commit(make_commit("frank", external=True))

        contributors = result.compute_contributors()

        assert len(contributors) == 1
        assert contributors[0].is_external
        assert contributors[0].commit_count == 2

    def test_exact_name_grouping(self, result):
        """Names are grouped without normalization."""
        result.add_commit(make_commit("Alice"))
        result.add_commit(make_commit("alice"))

        assert len(result.compute_contributors()) == 2

    def test_empty_author_skipped(self, result):
        """Commits without an author are not contributors."""
        result.add_commit(make_commit(""))

        assert result.compute_contributors() == []

    def test_idempotent(self, result):
        """Recomputing gives the same list."""
        result.add_commit(make_commit("alice"))
        result.add_commit(make_commit("bot", external=True))

        first = result.compute_contributors()
        second = result.compute_contributors()

        assert first == second
        assert result.contributors == second

    def test_recompute_after_external_flag(self, result):
        """Contributors reflect flags set after add_commit()."""
        result.add_commit(make_commit("alice"))
        result.add_commit(make_commit("alice"))
        result.add_commit(make_commit("newcomer"))
        result.compute_contributors()

        result.commits[2].is_external = True
        names = [c.name for c in result.compute_contributors()]

        assert names == ["newcomer", "alice"]


class TestSerialization:
    """Tests for ParseResult.to_json_dict()."""

    def test_camel_case_keys(self, result):
        """Output uses camelCase keys."""
        result.add_commit(
            make_commit("alice", type="fix", suggested_category=Category.FIXED,
                        files_changed=1, insertions=2, deletions=3, files=["a.py"])
        )
        result.compute_contributors()

        data = result.to_json_dict()
        commit = data["commits"][0]

        assert set(data) >= {"range", "generatedAt", "commits", "summary", "contributors"}
        assert commit["shortHash"] == "h"
        assert commit["filesChanged"] == 1
        assert commit["suggestedCategory"] == "Fixed"
        assert commit["isExternal"] is False
        assert data["summary"]["bySuggestedCategory"] == {"Fixed": 1}
        assert data["summary"]["totalInsertions"] == 2
        assert data["contributors"][0] == {"name": "alice", "commitCount": 1, "isExternal": False}
        assert data["range"]["commitCount"] == 1
        json.dumps(data)

    def test_unset_fields_omitted(self, result):
        """None-valued fields such as files are dropped."""
        result.add_commit(make_commit("alice"))

        commit = result.to_json_dict()["commits"][0]

        assert "files" not in commit
        assert "scope" not in commit
        assert "repository" not in result.to_json_dict()
