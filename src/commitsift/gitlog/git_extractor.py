"""Reading git log output from a repository."""

import re
from typing import List, Optional, Tuple

import git
import structlog
from git import Repo

from commitsift.gitlog.parser import GIT_LOG_FORMAT, GitLogParser
from commitsift.models import ParseResult, ParserConfig, RepositoryConfig, Tag, TagList, VersionRange

logger = structlog.get_logger(__name__)

# v1.2.3, 1.2.3, v1.2.3-rc.1 (only major.minor.patch takes part in ordering)
SEMVER_TAG_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)", re.ASCII)


def semver_key(name: str) -> Tuple[int, int, int]:
    """Sort key for a semver tag name.

    Raises:
        ValueError: If the name is not a semver tag
    """
    match = SEMVER_TAG_RE.match(name)
    if match is None:
        raise ValueError(f"Not a semver tag: {name}")
    major, minor, patch = (int(g) for g in match.groups())
    return major, minor, patch


def normalize_remote_url(url: str) -> str:
    """Normalize a remote URL to ``host/owner/repo``.

    Args:
        url: Remote URL, SSH (``git@host:owner/repo.git``) or HTTPS

    Returns:
        Normalized URL; other forms are returned unchanged
    """
    url = url.strip()
    if url.startswith("git@"):
        url = url[len("git@"):].replace(":", "/", 1)
        return url[: -len(".git")] if url.endswith(".git") else url
    if url.startswith("https://"):
        url = url[len("https://"):]
        return url[: -len(".git")] if url.endswith(".git") else url
    return url


class GitExtractor:
    """Runs ``git log`` on a repository and parses the output.

    Read-only: the repository is never modified.
    """

    def __init__(self, config: RepositoryConfig) -> None:
        """Initialize the GitExtractor.

        Args:
            config: Repository configuration

        Raises:
            ValueError: If repository path is invalid
        """
        self.config = config
        if not config.repo_path.exists():
            raise ValueError(f"Repository path does not exist: {config.repo_path}")

        try:
            self.repo = Repo(config.repo_path)
        except git.exc.InvalidGitRepositoryError as e:
            raise ValueError(f"Invalid Git repository: {config.repo_path}") from e

    def build_log_args(
        self,
        since: Optional[str] = None,
        until: str = "HEAD",
        last: Optional[int] = None,
    ) -> List[str]:
        """Build the ``git log`` arguments for a range.

        ``last`` takes precedence over ``since``. With only ``until`` set,
        all commits reachable from it are included.

        Args:
            since: Exclusive lower bound ref (tag, branch or commit)
            until: Upper bound ref
            last: Only the last N commits

        Returns:
            Arguments for ``git log`` (without the ``log`` command itself)
        """
        args = [f"--format={GIT_LOG_FORMAT}", "--numstat"]

        if self.config.no_merges:
            args.append("--no-merges")

        if last:
            args.append(f"-n{last}")
        elif since:
            args.append(f"{since}..{until}")
        elif until and until != "HEAD":
            args.append(until)

        if self.config.path_filter:
            args.extend(["--", self.config.path_filter])

        return args

    def read_log(
        self,
        since: Optional[str] = None,
        until: str = "HEAD",
        last: Optional[int] = None,
    ) -> str:
        """Run ``git log`` and return its raw output.

        Raises:
            ValueError: If git log fails (e.g., unknown ref)
        """
        args = self.build_log_args(since=since, until=until, last=last)
        try:
            return self.repo.git.log(*args)
        except git.exc.GitCommandError as e:
            raise ValueError(f"git log failed: {e.stderr.strip() if e.stderr else e}") from e

    def get_remote_url(self, remote: str = "origin") -> Optional[str]:
        """Get the normalized URL of a remote.

        Args:
            remote: Remote name

        Returns:
            Normalized URL, or None if the remote does not exist
        """
        try:
            return normalize_remote_url(self.repo.remote(remote).url)
        except ValueError:
            logger.debug("remote_not_found", remote=remote)
            return None

    def extract_commits(
        self,
        since: Optional[str] = None,
        until: str = "HEAD",
        last: Optional[int] = None,
        parser_config: Optional[ParserConfig] = None,
    ) -> ParseResult:
        """Read and parse the commits of a range.

        Args:
            since: Exclusive lower bound ref
            until: Upper bound ref
            last: Only the last N commits
            parser_config: Parser configuration

        Returns:
            ParseResult with repository and range filled in
        """
        output = self.read_log(since=since, until=until, last=last)
        result = GitLogParser(parser_config).parse(output)

        result.repository = self.get_remote_url()
        result.range.since = since
        result.range.until = until

        logger.info(
            "commits_extracted",
            repo_path=str(self.config.repo_path),
            since=since,
            until=until,
            commits=len(result.commits),
        )
        return result

    def count_commits(self, since: Optional[str], until: str) -> int:
        """Count the commits in ``since..until``, or all reachable from ``until``.

        Returns:
            Commit count, 0 if git cannot resolve the range
        """
        rev = f"{since}..{until}" if since else until
        try:
            return int(self.repo.git.rev_list("--count", rev))
        except git.exc.GitCommandError as e:
            logger.debug("commit_count_failed", rev=rev, error=str(e))
            return 0

    def get_tags(self) -> TagList:
        """List the semantic version tags, oldest version first.

        Tags that do not look like ``[v]MAJOR.MINOR.PATCH`` are ignored, as are
        tags that do not point at a commit. Each tag carries the number of
        commits since the previous version tag.

        Returns:
            TagList with the repository identifier filled in
        """
        refs = sorted(
            (ref for ref in self.repo.tags if SEMVER_TAG_RE.match(ref.name)),
            key=lambda ref: semver_key(ref.name),
        )

        tags: List[Tag] = []
        for i, ref in enumerate(refs):
            try:
                commit = ref.commit
            except ValueError:
                logger.debug("tag_skipped", tag=ref.name)
                continue

            previous = refs[i - 1].name if i > 0 else None
            tags.append(
                Tag(
                    name=ref.name,
                    date=commit.authored_datetime,
                    date_string=commit.authored_datetime.strftime("%Y-%m-%d"),
                    commit_hash=commit.hexsha,
                    commit_count=self.count_commits(previous, ref.name),
                    is_initial=i == 0,
                )
            )

        return TagList(repository=self.get_remote_url(), tags=tags, total_tags=len(tags))

    def get_version_ranges(self) -> List[VersionRange]:
        """Get the commit range of every version tag.

        Returns:
            One VersionRange per tag, oldest first; the first has no ``since``
        """
        tags = self.get_tags().tags
        return [
            VersionRange(
                version=tag.name,
                since=tags[i - 1].name if i > 0 else None,
                until=tag.name,
                date=tag.date_string,
                commits=tag.commit_count,
            )
            for i, tag in enumerate(tags)
        ]

    def extract_versions(
        self,
        parser_config: Optional[ParserConfig] = None,
    ) -> List[Tuple[VersionRange, ParseResult]]:
        """Parse the commits of every version range.

        Ranges whose log cannot be read are skipped.

        Args:
            parser_config: Parser configuration

        Returns:
            (range, result) pairs, oldest version first

        Raises:
            ValueError: If the repository has no semver tags
        """
        ranges = self.get_version_ranges()
        if not ranges:
            raise ValueError(f"No semver tags found in repository: {self.config.repo_path}")

        repository = self.get_remote_url()
        parser = GitLogParser(parser_config)

        versions = []
        for version_range in ranges:
            try:
                output = self.read_log(since=version_range.since, until=version_range.until)
            except ValueError as e:
                logger.debug("version_skipped", version=version_range.version, error=str(e))
                continue

            result = parser.parse(output)
            result.repository = repository
            result.range.since = version_range.since
            result.range.until = version_range.until
            versions.append((version_range, result))

        logger.info("versions_extracted", repo_path=str(self.config.repo_path), versions=len(versions))
        return versions
