"""Conventional commit parsing and reference extraction.

Every function here is a pure function of its input string. A message that
does not match returns ``None``, ``0`` or ``False`` rather than raising.
"""

import re
from typing import Optional

from commitsift.models import ConventionalCommit

# type(scope)!: subject, where (scope) and ! are optional
CONVENTIONAL_COMMIT_RE = re.compile(r"^([a-zA-Z]+)(?:\(([^)]+)\))?(!)?\s*:\s*(.+)$", re.ASCII)

# #123, Closes #123, Fixes #456, refs #7
ISSUE_REF_RE = re.compile(
    r"(?:closes?|fixes?|resolves?|refs?)?\s*#(\d+)", re.IGNORECASE | re.ASCII
)

# (#123) at the end of the subject
PR_REF_RE = re.compile(r"\(#(\d+)\)\s*$", re.ASCII)

# BREAKING CHANGE: / BREAKING-CHANGE: at the start of a body line
BREAKING_CHANGE_RE = re.compile(r"^BREAKING[ -]CHANGE\s*:", re.IGNORECASE | re.ASCII)

KNOWN_CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
    "security",
    "deps",
)


def parse_conventional_commit(message: str) -> Optional[ConventionalCommit]:
    """Parse the header of a commit message as a conventional commit.

    Only the first line is considered.

    Args:
        message: Commit message (single header line or full message)

    Returns:
        ConventionalCommit, or None if the header has no ``type: subject`` form
    """
    first_line = message.split("\n", 1)[0]

    match = CONVENTIONAL_COMMIT_RE.match(first_line)
    if match is None:
        return None

    commit_type, scope, bang, subject = match.groups()
    return ConventionalCommit(
        type=commit_type.lower(),
        scope=scope or None,
        breaking=bang == "!",
        subject=subject.strip(),
    )


def is_conventional_commit(message: str) -> bool:
    """Return True if the message header follows the conventional commit format."""
    return parse_conventional_commit(message) is not None


def is_known_type(commit_type: str) -> bool:
    """Return True if the type is one of the standard conventional types."""
    return commit_type.lower() in KNOWN_CONVENTIONAL_TYPES


def extract_issue_number(message: str) -> int:
    """Extract the first issue reference from a commit message.

    Recognizes ``#123`` optionally preceded by closes/fixes/resolves/refs.
    Only the first reference in the text is returned.

    Args:
        message: Full commit message

    Returns:
        Issue number, or 0 if none is found
    """
    match = ISSUE_REF_RE.search(message)
    if match is None:
        return 0
    return int(match.group(1))


def extract_pr_number(subject: str) -> int:
    """Extract a PR number from a trailing ``(#123)`` in the subject.

    Args:
        subject: Subject line

    Returns:
        PR number, or 0 if the subject does not end with ``(#N)``
    """
    match = PR_REF_RE.search(subject)
    if match is None:
        return 0
    return int(match.group(1))


def has_breaking_change_marker(body: str) -> bool:
    """Check whether any body line starts with a BREAKING CHANGE marker.

    Args:
        body: Commit body

    Returns:
        True if a line begins with ``BREAKING CHANGE:`` or ``BREAKING-CHANGE:``
    """
    return any(BREAKING_CHANGE_RE.match(line) for line in body.split("\n"))
