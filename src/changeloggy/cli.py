"""
Command line interface for the changeloggy tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changeloggy`` command. It locates the
repository, gathers options (from flags, the project configuration file
and, when no range or output was given, an interactive prompt flow),
runs the changelog pipeline and prints or writes the result.
"""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from changeloggy import __version__
from changeloggy.config.loader import FORMATS, merge_with_config
from changeloggy.core import generate_changelog, write_changelog
from changeloggy.grouping.commit_types import COMMIT_TYPES, PREVIEW_ORDER
from changeloggy.grouping.group_model import CategoryMap
from changeloggy.vcs.git_client import LAST_TAG, GitClient, GitError
from changeloggy.versioning.stats import format_stats

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_VCS_FAILURE = 4
EXIT_WRITE_FAILURE = 5


RANGE_CHOICES = ("last-tag", "date", "all")
AUTO_VERSION = "auto"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str, show_spinner: bool = True):
        self.message = message
        self.show_spinner = show_spinner
        self.spinner_chars = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        if self.show_spinner:
            click.echo(f"{self.spinner_chars[0]} {self.message}...", nl=False)
        else:
            click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        if exc_type is not None:
            click.echo(f"\r✗ {self.message} failed")
        elif self.show_spinner:
            click.echo(f"\r✓ {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {click.style(message, fg='yellow')}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {click.style(message, fg='red')}", err=True)


def print_summary_box(title: str, items: List[str]):
    """Print a formatted summary box."""
    max_width = max(len(title), max(len(item) for item in items) if items else 0)
    box_width = min(max_width + 4, 60)

    click.echo(f"\n┌{'─' * box_width}┐")
    click.echo(f"│ {title.ljust(box_width - 2)}│")
    click.echo(f"├{'─' * box_width}┤")
    for item in items:
        click.echo(f"│ {item.ljust(box_width - 2)}│")
    click.echo(f"└{'─' * box_width}┘")


def preview_categories(categories: CategoryMap) -> None:
    """Show how many user-facing commits fall into each section."""
    items = []
    total = 0
    for commit_type in PREVIEW_ORDER:
        commits = categories.get(commit_type)
        if not commits:
            continue
        total += len(commits)
        items.append(f"{COMMIT_TYPES[commit_type]['label']}: {len(commits)}")
    items.append(f"Total: {total} changes")
    print_summary_box("Changelog Summary", items)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repo(start_dir: Path) -> Path:
    """Return the root of the Git repository containing ``start_dir``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if ``start_dir`` is not inside a repository.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("Not a git repository.")
        print_info("Run this command from within a git repository.", indent=1)
        raise click.exceptions.Exit(EXIT_NO_REPO)
    logger.debug("Found Git repository at: %s", repo_root)
    return repo_root


def _validate_date(value: str) -> str:
    value = value.strip()
    if not DATE_PATTERN.match(value):
        raise click.BadParameter("Invalid date format, expected YYYY-MM-DD")
    return value


def interactive_mode(client: GitClient) -> Dict[str, Any]:
    """Ask the user for the changelog options.

    Returns
    -------
    Dict[str, Any]
        Option values keyed by :class:`ChangelogOptions` field name.

    Raises
    ------
    click.Abort
        If the user cancels a prompt (Ctrl-C or end of input).
    """
    click.echo("\n" + "=" * 60)
    click.echo("📝 changeloggy".center(60))
    click.echo("=" * 60 + "\n")

    with ProgressIndicator("Checking for latest tag"):
        last_tag = client.get_last_tag()
    if last_tag:
        print_info(f"Latest tag: {click.style(last_tag, fg='cyan', bold=True)}")
    else:
        print_warning("No tags found")

    range_choice = click.prompt(
        "Which commits to include?",
        type=click.Choice(RANGE_CHOICES, case_sensitive=False),
        default="last-tag" if last_tag else "all",
    ).lower()

    since: Optional[str] = None
    if range_choice == "last-tag":
        since = LAST_TAG
    elif range_choice == "date":
        since = click.prompt("Enter start date (YYYY-MM-DD)", value_proc=_validate_date)

    include_internal = click.confirm("Include internal commits (chores, tests, CI)?", default=False)

    fmt = click.prompt(
        "Output format",
        type=click.Choice(FORMATS, case_sensitive=False),
        default="markdown",
    ).lower()

    release: Optional[str] = None
    auto_version = False
    if click.confirm("Set a release version?", default=False):
        hint = f" ('{AUTO_VERSION}' derives it from {last_tag})" if last_tag else ""
        release = click.prompt(
            f"Enter version{hint}",
            default=AUTO_VERSION if last_tag else None,
        ).strip()
        if release == AUTO_VERSION:
            release, auto_version = None, True

    output: Optional[str] = None
    prepend = False
    if click.confirm("Write to file?", default=False):
        output = click.prompt("Output file path", default="CHANGELOG.md")
        if Path(output).exists():
            prepend = click.confirm(
                f"File {output} exists. Prepend new entries instead of overwriting?",
                default=True,
            )

    return {
        "since": since,
        "until": None,
        "output": output,
        "format": fmt,
        "include_internal": include_internal,
        "release": release,
        "auto_version": auto_version,
        "prepend": prepend,
    }


def _explicit_options(
    since: Optional[str],
    until: Optional[str],
    output: Optional[str],
    dry_run: bool,
    fmt: Optional[str],
    include_internal: bool,
    release: Optional[str],
    prepend: bool,
    auto_version: bool,
    scopes: Tuple[str, ...],
) -> Dict[str, Any]:
    """Collect the flags that were actually given on the command line.

    Flags left at their default are passed as ``None`` so the project
    configuration file can supply a value.
    """
    return {
        "since": since,
        "until": until,
        "output": output,
        "dry_run": dry_run or None,
        "format": fmt.lower() if fmt else None,
        "include_internal": include_internal or None,
        "release": release,
        "prepend": prepend or None,
        "auto_version": auto_version or None,
        "scope_filter": list(scopes) or None,
    }


@click.command()
@click.option("-s", "--since", help='Start date (YYYY-MM-DD) or "last-tag".')
@click.option("-u", "--until", help="End date (YYYY-MM-DD).")
@click.option("-o", "--output", help="Output file (default: stdout).")
@click.option("-d", "--dry-run", "dry_run", is_flag=True, help="Show what would be generated without writing.")
@click.option("-f", "--format", "fmt", type=click.Choice(FORMATS, case_sensitive=False), help="Output format (default: markdown).")
@click.option("-i", "--include-internal", "include_internal", is_flag=True, help="Include internal commits (chore, ci, etc.).")
@click.option("-r", "--release", help="Release version number for the changelog.")
@click.option("-p", "--prepend", is_flag=True, help="Prepend to an existing changelog instead of overwriting it.")
@click.option("-a", "--auto-version", "auto_version", is_flag=True, help="Derive the release version from the latest tag.")
@click.option("--scope", "scopes", multiple=True, help="Only include commits with this scope (repeatable).")
@click.option("--interactive/--no-interactive", default=True, help="Prompt for options when no range or output is given.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changeloggy")
def main(
    since: Optional[str],
    until: Optional[str],
    output: Optional[str],
    dry_run: bool,
    fmt: Optional[str],
    include_internal: bool,
    release: Optional[str],
    prepend: bool,
    auto_version: bool,
    scopes: Tuple[str, ...],
    interactive: bool,
    verbose: bool,
) -> None:
    """📝 Generate changelogs from git conventional commits."""
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        repo_root = detect_repo(Path.cwd())
        client = GitClient(repo_root)

        use_interactive = interactive and not since and not output
        explicit = _explicit_options(
            since, until, output, dry_run, fmt, include_internal, release, prepend, auto_version, scopes
        )
        options = merge_with_config(explicit, repo_root)

        if use_interactive:
            try:
                answers = interactive_mode(client)
            except click.Abort:
                print_warning("Cancelled")
                raise click.exceptions.Exit(EXIT_SUCCESS)
            except GitError as exc:
                print_error(f"Failed to read tags: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)
            # Answers are authoritative, including "no value"
            options = dataclasses.replace(options, interactive=True, **answers)
        else:
            options = dataclasses.replace(options, interactive=False)
        logger.debug("Effective options: %s", options)

        progress = (
            ProgressIndicator("Analyzing git history") if use_interactive else contextlib.nullcontext()
        )
        try:
            with progress:
                result = generate_changelog(options, client)
        except GitError as exc:
            print_error(f"Failed to read git history: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        if result is None:
            print_warning("No commits found in the specified range.")
            raise click.exceptions.Exit(EXIT_SUCCESS)

        if use_interactive:
            preview_categories(result.categories)
            print_info(format_stats(result.stats, options.include_internal))
            print_info(f"Suggested bump: {result.bump.type} ({result.bump.reason})")
            if options.auto_version and result.release is None:
                print_warning("Could not derive the next version from the latest tag")

        if options.output and not options.dry_run:
            should_prepend = options.prepend and options.format == "markdown"
            if options.prepend and not should_prepend:
                print_warning("Prepending is only supported for markdown output; overwriting instead")
            try:
                merged = write_changelog(result.content, options.output, prepend=should_prepend)
            except OSError as exc:
                print_error(f"Failed to write {options.output}: {exc}")
                raise click.exceptions.Exit(EXIT_WRITE_FAILURE)
            print_success(f"Changelog {'updated' if merged else 'written'} to {options.output}")
            if use_interactive:
                print_info(f"Next steps: Review {options.output} and commit your changes")
        else:
            click.echo(result.content.rstrip("\n"))
            if options.dry_run and options.output:
                print_info(f"Dry run: {options.output} was not written")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        # Catch any other unhandled errors
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
