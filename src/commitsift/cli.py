"""Command-line interface for commitsift."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

from commitsift.classification import suggest_with_alternatives
from commitsift.contributors import TeamRoster, mark_external_contributors
from commitsift.extraction import parse_conventional_commit
from commitsift.gitlog import GitExtractor, GitLogParser
from commitsift.models import (
    Category,
    ParserConfig,
    RepositoryConfig,
    Settings,
    Tier,
    VersionsResult,
    categories_up_to_tier,
)

app = typer.Typer(
    name="commitsift",
    help="Parse git history into structured, categorized commits for changelog generation",
    add_completion=False,
)
# Status and errors go to stderr so stdout stays machine-readable
console = Console(stderr=True)

OUTPUT_FORMATS = ("json", "json-compact")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str) -> None:
    """Set the structlog level filter.

    Args:
        level: Level name such as DEBUG or WARNING

    Raises:
        ValueError: If the level name is unknown
    """
    if level.upper() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level} (expected one of {', '.join(LOG_LEVELS)})")

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def render(data: Any, output_format: str) -> str:
    """Serialize data in the requested output format.

    Args:
        data: JSON-compatible data
        output_format: ``json`` (indented) or ``json-compact``

    Returns:
        Serialized text

    Raises:
        ValueError: If the format is unknown
    """
    if output_format == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    if output_format == "json-compact":
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    raise ValueError(f"Unknown output format: {output_format} (expected one of {', '.join(OUTPUT_FORMATS)})")


def _read_input(input_file: Path) -> str:
    if str(input_file) == "-":
        return sys.stdin.read()
    return input_file.read_text(encoding="utf-8")


def _check_options(input_file: Optional[Path], all_versions: bool, **options: Any) -> None:
    """Reject options that do not apply to the selected source."""
    if input_file is not None:
        given = [name for name in ("last", "path", "no_merges") if options.get(name)]
        if all_versions:
            given.append("all_versions")
        if given:
            flags = ", ".join("--" + name.replace("_", "-") for name in given)
            raise ValueError(f"{flags} cannot be used with --input (they only apply when running git)")
    elif all_versions:
        given = [name for name in ("since", "last") if options.get(name)]
        if given:
            flags = ", ".join("--" + name for name in given)
            raise ValueError(f"{flags} cannot be used with --all-versions")


def _write_output(text: str, output: Optional[Path], summary: str) -> None:
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        console.print(f"[bold green]✓[/bold green] {summary}, saved to {output}")
    else:
        typer.echo(text)


@app.command("parse-commits")
def parse_commits(
    repo_path: Path = typer.Argument(Path("."), help="Path to Git repository"),
    since: Optional[str] = typer.Option(None, "--since", help="Parse commits after this ref"),
    until: str = typer.Option("HEAD", "--until", help="Parse commits up to this ref"),
    last: Optional[int] = typer.Option(None, "--last", "-n", help="Parse the last N commits (not with --input)"),
    path_filter: Optional[str] = typer.Option(
        None, "--path", help="Only include commits touching this path (not with --input)"
    ),
    no_files: bool = typer.Option(False, "--no-files", help="Exclude file lists from output"),
    no_merges: bool = typer.Option(False, "--no-merges", help="Exclude merge commits (not with --input)"),
    all_versions: bool = typer.Option(
        False, "--all-versions", help="Parse every semver tag range (outputs one result per version)"
    ),
    repo_url: Optional[str] = typer.Option(None, "--repo", help="Repository URL to include in output"),
    changelog: Optional[Path] = typer.Option(
        None, "--changelog", help="CHANGELOG.json with maintainers/bots for external contributor detection"
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Parse an existing git log dump instead of running git ('-' for stdin)"
    ),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: json, json-compact"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Parse git commits into structured JSON."""
    try:
        settings = Settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        _check_options(
            input_file, all_versions, since=since, last=last, path=path_filter, no_merges=no_merges
        )

        output_format = output_format or settings.output_format
        parser_config = ParserConfig(include_files=settings.include_files and not no_files)
        roster = TeamRoster.from_changelog_file(changelog) if changelog is not None else None

        if input_file is not None:
            result = GitLogParser(parser_config).parse(_read_input(input_file))
            result.range.since = since
            result.range.until = until
        else:
            config = RepositoryConfig(
                repo_path=repo_path,
                no_merges=no_merges or settings.no_merges,
                path_filter=path_filter,
            )
            extractor = GitExtractor(config)

            if all_versions:
                versions = VersionsResult(repository=repo_url or extractor.get_remote_url())
                for version_range, version_result in extractor.extract_versions(parser_config):
                    if roster is not None:
                        mark_external_contributors(version_result, roster)
                    version_result.compute_contributors()
                    versions.add_version(version_range, version_result)

                text = render(versions.to_json_dict(), output_format)
                _write_output(
                    text, output, f"Parsed {versions.total_count} commits in {len(versions.versions)} versions"
                )
                return

            result = extractor.extract_commits(
                since=since, until=until, last=last, parser_config=parser_config
            )

        if repo_url:
            result.repository = repo_url

        if roster is not None:
            flagged = mark_external_contributors(result, roster)
            if verbose:
                console.print(f"[bold blue]External commits:[/bold blue] {flagged}")

        result.compute_contributors()
        text = render(result.to_json_dict(), output_format)
        _write_output(text, output, f"Parsed {len(result.commits)} commits")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command("list-tags")
def list_tags(
    repo_path: Path = typer.Argument(Path("."), help="Path to Git repository"),
    repo_url: Optional[str] = typer.Option(None, "--repo", help="Repository URL to include in output"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: json, json-compact"),
) -> None:
    """List semver tags with dates and commit counts."""
    try:
        settings = Settings()
        configure_logging(settings.log_level)

        extractor = GitExtractor(RepositoryConfig(repo_path=repo_path))
        tag_list = extractor.get_tags()
        if repo_url:
            tag_list.repository = repo_url

        typer.echo(render(tag_list.to_json_dict(), output_format or settings.output_format))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _suggestion_output(message: str) -> dict:
    cc = parse_conventional_commit(message)
    data = {
        "input": message,
        "suggestions": [s.model_dump(mode="json") for s in suggest_with_alternatives(message)],
    }
    if cc is not None:
        data["conventional_commit"] = cc.model_dump(mode="json", exclude_none=True)
    return data


@app.command("suggest-category")
def suggest_category(
    messages: Optional[List[str]] = typer.Argument(None, help="Commit message"),
    batch: bool = typer.Option(False, "--batch", help="Read messages from stdin (one per line)"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: json, json-compact"),
) -> None:
    """Suggest changelog categories for a commit message."""
    try:
        settings = Settings()
        configure_logging(settings.log_level)
        output_format = output_format or settings.output_format

        if batch:
            lines = (line.strip() for line in sys.stdin.read().splitlines())
            data: Any = [_suggestion_output(line) for line in lines if line]
        else:
            if not messages:
                raise ValueError("requires a commit message argument (or use --batch for stdin)")
            data = _suggestion_output(" ".join(messages))

        typer.echo(render(data, output_format))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def categories(
    max_tier: Optional[Tier] = typer.Option(None, "--max-tier", "-t", help="Lowest tier to list"),
) -> None:
    """List changelog categories and their tiers."""
    selected = categories_up_to_tier(max_tier) if max_tier else list(Category)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("Tier", style="green")
    table.add_column("Description", style="white")

    for category in selected:
        table.add_row(category.value, category.tier.value, category.tier.description)

    Console().print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from commitsift import __version__

    console.print(f"[bold]commitsift[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
