"""Git log parsing into structured commits."""

from commitsift.gitlog.git_extractor import (
    SEMVER_TAG_RE,
    GitExtractor,
    normalize_remote_url,
    semver_key,
)
from commitsift.gitlog.parser import (
    COMMIT_DELIMITER,
    END_BODY_MARKER,
    GIT_LOG_FORMAT,
    SIMPLE_LOG_FORMAT,
    GitLogParser,
    format_commit_date,
    parse_simple,
)

__all__ = [
    "COMMIT_DELIMITER",
    "END_BODY_MARKER",
    "GIT_LOG_FORMAT",
    "SIMPLE_LOG_FORMAT",
    "GitExtractor",
    "GitLogParser",
    "format_commit_date",
    "normalize_remote_url",
    "parse_simple",
    "semver_key",
    "SEMVER_TAG_RE",
]
