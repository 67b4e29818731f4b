"""Field extraction from commit messages and numstat output."""

from commitsift.extraction.conventional import (
    KNOWN_CONVENTIONAL_TYPES,
    extract_issue_number,
    extract_pr_number,
    has_breaking_change_marker,
    is_conventional_commit,
    is_known_type,
    parse_conventional_commit,
)
from commitsift.extraction.numstat import NumstatTotals, parse_numstat

__all__ = [
    "KNOWN_CONVENTIONAL_TYPES",
    "extract_issue_number",
    "extract_pr_number",
    "has_breaking_change_marker",
    "is_conventional_commit",
    "is_known_type",
    "parse_conventional_commit",
    "NumstatTotals",
    "parse_numstat",
]
