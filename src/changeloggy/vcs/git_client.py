"""
Git client implementation for changeloggy.

This module wraps the read-only Git queries the changelog generator
needs: the commit log for a revision range and the most recent tag.
All subprocess calls go through :meth:`GitClient._run` so that unit
tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Record and field separators used in the ``git log`` format string. Bodies
# may contain newlines and pipes, so control bytes are used instead.
RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = "%H%x1f%s%x1f%b%x1f%an%x1f%ad%x1e"

LAST_TAG = "last-tag"


@dataclass(frozen=True)
class RawCommit:
    """A single commit as reported by ``git log``."""

    hash: str
    subject: str
    body: str
    author: str
    date: str


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class CommitSource(Protocol):
    """Anything that can hand the pipeline a list of commits."""

    def get_commits(
        self,
        since: Optional[str] = None,
        until: Optional[str] = None,
        no_merges: bool = True,
    ) -> List[RawCommit]:
        ...

    def get_last_tag(self) -> Optional[str]:
        ...


def parse_log_output(output: str) -> List[RawCommit]:
    """Split ``git log`` output produced with :data:`LOG_FORMAT` into commits.

    Records are separated by ``\\x1e`` and fields by ``\\x1f``. Empty
    records (for example the trailing newline after the last separator)
    are skipped, and missing trailing fields become empty strings.
    """
    commits: List[RawCommit] = []
    for entry in output.split(RECORD_SEPARATOR):
        entry = entry.strip()
        if not entry:
            continue
        parts = [part.strip() for part in entry.split(FIELD_SEPARATOR)]
        # Pad so that truncated records still unpack cleanly
        parts += [""] * (5 - len(parts))
        commits.append(
            RawCommit(
                hash=parts[0],
                subject=parts[1],
                body=parts[2],
                author=parts[3],
                date=parts[4],
            )
        )
    return commits


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command cannot be started, or exits with a non-zero
            status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Unable to run git: %s", e)
            raise GitError(f"Unable to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def get_last_tag(self) -> Optional[str]:
        """Return the most recent tag reachable from HEAD, or None.

        A repository without tags makes ``git describe`` fail; that is
        reported as ``None`` rather than an error.
        """
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        if result.returncode != 0:
            logger.debug("No tags found: %s", result.stderr.strip())
            return None
        tag = result.stdout.strip()
        return tag or None

    def build_log_args(
        self,
        since: Optional[str] = None,
        until: Optional[str] = None,
        no_merges: bool = True,
    ) -> List[str]:
        """Build the ``git log`` arguments for the requested range.

        Parameters
        ----------
        since : str, optional
            A date understood by ``git log --since``, or ``"last-tag"`` to
            start after the most recent tag. Without a tag the whole
            history is used.
        until : str, optional
            A date understood by ``git log --until``.
        no_merges : bool
            Exclude merge commits.
        """
        args = ["log", f"--format={LOG_FORMAT}", "--date=short"]
        if no_merges:
            args.append("--no-merges")

        if since == LAST_TAG:
            tag = self.get_last_tag()
            if tag:
                args.append(f"{tag}..HEAD")
            else:
                logger.info("No tags found; using the full history")
        elif since:
            args.append(f"--since={since}")

        if until:
            args.append(f"--until={until}")
        return args

    def get_commits(
        self,
        since: Optional[str] = None,
        until: Optional[str] = None,
        no_merges: bool = True,
    ) -> List[RawCommit]:
        """Return the commits in the range, newest first.

        Raises
        ------
        GitError
            If the log cannot be read (not a repository, corrupt history).
        """
        result = self._run(self.build_log_args(since, until, no_merges), check=True)
        commits = parse_log_output(result.stdout)
        logger.debug("Read %d commit(s) from git log", len(commits))
        return commits
