"""Parsing of git log output into structured commits.

The expected input is produced by::

    git log --format=<GIT_LOG_FORMAT> --numstat

Each commit block starts with COMMIT_DELIMITER, followed by six metadata lines
(hash, short hash, author, email, ISO author date, subject), the body, the
END_BODY_MARKER and optional numstat lines.
"""

import re
from datetime import datetime
from typing import Optional

import structlog

from commitsift.classification.category import suggest_category_from_message
from commitsift.extraction.conventional import (
    extract_issue_number,
    extract_pr_number,
    has_breaking_change_marker,
    parse_conventional_commit,
)
from commitsift.extraction.numstat import parse_numstat
from commitsift.models import Commit, ParseResult, ParserConfig

logger = structlog.get_logger(__name__)

COMMIT_DELIMITER = "---COMMIT_DELIMITER---"
END_BODY_MARKER = "---END_BODY---"

GIT_LOG_FORMAT = COMMIT_DELIMITER + "%n%H%n%h%n%an%n%ae%n%aI%n%s%n%b" + END_BODY_MARKER

# One commit per line: hash|short hash|author|email|date|subject
SIMPLE_LOG_FORMAT = "%H|%h|%an|%ae|%aI|%s"

METADATA_LINES = 6

# RFC 3339: zero-padded fields, optional fraction, Z or +HH:MM offset
RFC3339_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.\d+)?(?:Z|[+-](\d{2}):(\d{2}))", re.ASCII
)


def _is_valid_timestamp(
    day: str, clock: str, offset_hours: Optional[str], offset_minutes: Optional[str]
) -> bool:
    if offset_hours is not None and (int(offset_hours) > 23 or int(offset_minutes) > 59):
        return False
    try:
        datetime.strptime(f"{day}T{clock}", "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    return True


def format_commit_date(value: str) -> str:
    """Reformat an ISO 8601 author date as YYYY-MM-DD.

    Args:
        value: Timestamp such as ``2026-01-04T10:30:00-08:00``

    Returns:
        Calendar date, or the input unchanged if it is not a strict timestamp
    """
    match = RFC3339_RE.fullmatch(value)
    if match is not None and _is_valid_timestamp(*match.groups()):
        return match.group(1)

    logger.debug("commit_date_unparsed", date=value)
    return value


class GitLogParser:
    """Parses delimited git log output into a ParseResult."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults to including file paths)
        """
        self.config = config or ParserConfig()

    def parse(self, text: str) -> ParseResult:
        """Parse a full git log dump.

        Malformed blocks are skipped.

        Args:
            text: Output of ``git log --format=GIT_LOG_FORMAT --numstat``

        Returns:
            ParseResult with commits in log order and a running summary
        """
        result = ParseResult()

        for block in text.split(COMMIT_DELIMITER):
            block = block.strip()
            if not block:
                continue

            commit = self.parse_commit_block(block)
            if commit is not None:
                result.add_commit(commit)

        logger.debug("git_log_parsed", commits=len(result.commits))
        return result

    def parse_commit_block(self, block: str) -> Optional[Commit]:
        """Parse a single commit block.

        Args:
            block: Text between two commit delimiters

        Returns:
            Commit, or None if the block has fewer than six metadata lines
        """
        commit_part, sep, numstat_part = block.partition(END_BODY_MARKER)
        lines = commit_part.strip().split("\n")
        if len(lines) < METADATA_LINES:
            logger.debug("commit_block_skipped", line_count=len(lines))
            return None

        message = lines[5].strip()
        body = "\n".join(lines[METADATA_LINES:]).strip()

        commit_type = None
        scope = None
        subject = message
        breaking = False

        cc = parse_conventional_commit(message)
        if cc is not None:
            commit_type = cc.type
            scope = cc.scope
            subject = cc.subject
            breaking = cc.breaking

        if not breaking and body:
            breaking = has_breaking_change_marker(body)

        full_message = f"{message}\n{body}" if body else message

        files_changed = insertions = deletions = 0
        files = None
        if sep:
            totals = parse_numstat(numstat_part.strip(), include_files=self.config.include_files)
            files_changed = totals.files_changed
            insertions = totals.insertions
            deletions = totals.deletions
            files = totals.files or None

        suggestion = suggest_category_from_message(full_message)

        return Commit(
            hash=lines[0].strip(),
            short_hash=lines[1].strip(),
            author=lines[2].strip(),
            author_email=lines[3].strip() or None,
            date=format_commit_date(lines[4].strip()),
            message=message,
            body=body or None,
            type=commit_type,
            scope=scope,
            subject=subject,
            breaking=breaking,
            issue=extract_issue_number(full_message),
            pr=extract_pr_number(message),
            files_changed=files_changed,
            insertions=insertions,
            deletions=deletions,
            files=files,
            suggested_category=suggestion.category if suggestion else None,
        )


def parse_simple(text: str) -> ParseResult:
    """Parse the one-line-per-commit SIMPLE_LOG_FORMAT output.

    No body or numstat is available in this format. Lines with fewer than six
    fields are skipped; the subject may itself contain ``|``.

    Args:
        text: Output of ``git log --format=SIMPLE_LOG_FORMAT``

    Returns:
        ParseResult
    """
    result = ParseResult()

    for line in text.split("\n"):
        parts = line.removesuffix("\r").split("|", METADATA_LINES - 1)
        if len(parts) < METADATA_LINES:
            continue

        full_hash, short_hash, author, email, date, message = parts

        commit_type = None
        scope = None
        subject = message
        breaking = False
        cc = parse_conventional_commit(message)
        if cc is not None:
            commit_type, scope, subject, breaking = cc.type, cc.scope, cc.subject, cc.breaking

        suggestion = suggest_category_from_message(message)
        result.add_commit(
            Commit(
                hash=full_hash,
                short_hash=short_hash,
                author=author,
                author_email=email or None,
                date=format_commit_date(date),
                message=message,
                type=commit_type,
                scope=scope,
                subject=subject,
                breaking=breaking,
                issue=extract_issue_number(message),
                pr=extract_pr_number(message),
                suggested_category=suggestion.category if suggestion else None,
            )
        )

    return result
