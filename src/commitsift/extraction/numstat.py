"""Parsing of ``git log --numstat`` change-count lines."""

import re
from dataclasses import dataclass, field
from typing import List, Optional

import structlog

logger = structlog.get_logger(__name__)

# "<insertions>\t<deletions>\t<path>", "-" marks a binary file
NUMSTAT_RE = re.compile(r"^(\d+|-)\t(\d+|-)\t(.+)$", re.ASCII)

BINARY_MARKER = "-"


@dataclass
class NumstatTotals:
    """Aggregated numstat counts for one commit."""

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    files: Optional[List[str]] = field(default=None)


def parse_numstat(numstat: str, include_files: bool = True) -> NumstatTotals:
    """Aggregate numstat lines into file and line counts.

    Binary entries count as a changed file with no lines. Lines that are not
    in the three-field tab-separated form are skipped.

    Args:
        numstat: Numstat output, one file per line
        include_files: Also collect the file paths

    Returns:
        NumstatTotals; ``files`` is None when ``include_files`` is False
    """
    totals = NumstatTotals(files=[] if include_files else None)

    # Only \n ends a line, paths may contain other separators
    for line in numstat.split("\n"):
        line = line.removesuffix("\r")
        match = NUMSTAT_RE.match(line)
        if match is None:
            if line.strip():
                logger.debug("numstat_line_skipped", line=line)
            continue

        added, deleted, path = match.groups()
        if added != BINARY_MARKER:
            totals.insertions += int(added)
        if deleted != BINARY_MARKER:
            totals.deletions += int(deleted)

        if totals.files is not None:
            totals.files.append(path)
        totals.files_changed += 1

    return totals
