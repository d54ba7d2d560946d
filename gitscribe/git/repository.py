"""Git repository adapter.

Contains:
- DiffSource: The read side the generator needs (staged files, diff, ignore checks)
- CommitSink: The write side the confirmation loop needs (commit)
- StagedChangeSet: Staged file paths plus the diff text sent to the model
- GitRepository: Subprocess-backed implementation of both
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from gitscribe.git.exceptions import CommitError, DiffReadError, GitError
from gitscribe.git.runner import get_repo_root, run_git


class DiffSource(Protocol):
    def staged_files(self) -> list[str]: ...

    def staged_diff(self, paths: Optional[list[str]] = None) -> str: ...

    def is_ignored(self, path: str) -> bool: ...


class CommitSink(Protocol):
    def commit(self, message: str) -> None: ...


@dataclass
class StagedChangeSet:
    """The staged changes a message is generated for.

    Attributes:
        files: Staged file paths that survived filtering, in git's order.
        diff: The unified diff text, exactly as git printed it.
    """

    files: list[str] = field(default_factory=list)
    diff: str = ""


class GitRepository:
    """A git working tree driven through the git CLI."""

    def __init__(self, path: Optional[Path] = None, logger: Optional[logging.Logger] = None):
        """Open the repository containing `path`.

        Args:
            path: A directory inside the repository. Defaults to the current
                working directory.
            logger: Logger for git command tracing.

        Raises:
            GitError: If `path` is not inside a git repository.
        """
        self.root = get_repo_root(path)
        self.logger = logger or logging.getLogger(__name__)

    def _git(self, args: list[str]):
        self.logger.debug("Running git %s", " ".join(args))
        return run_git(args, cwd=self.root)

    def staged_files(self) -> list[str]:
        """Get list of staged file paths.

        Returns:
            List of staged file paths; empty if nothing is staged.

        Raises:
            GitError: If git fails.
        """
        # -z keeps paths unquoted; git C-quotes non-ASCII names otherwise
        result = self._git(["diff", "--cached", "--name-only", "-z"])
        if result.returncode != 0:
            raise GitError(f"Failed to list staged files: {result.stderr.strip()}")

        return [p for p in result.stdout.split("\0") if p]

    def staged_diff(self, paths: Optional[list[str]] = None) -> str:
        """Get the staged diff text.

        The output is returned untouched; it goes to the model verbatim.

        Args:
            paths: Limit the diff to these files. Defaults to all staged files.

        Raises:
            DiffReadError: If git fails.
        """
        try:
            args = ["diff", "--cached"]
            if paths:
                args += ["--"] + list(paths)
            result = self._git(args)
        except GitError as e:
            raise DiffReadError(str(e)) from e

        if result.returncode != 0:
            raise DiffReadError(f"Failed to get staged diff: {result.stderr.strip()}")
        return result.stdout

    def is_ignored(self, path: str) -> bool:
        """Check whether git ignores `path`.

        `git check-ignore` exits 0 for ignored paths and 1 for paths that are
        not ignored. Any other exit code is an error.

        Raises:
            GitError: If git reports an error.
        """
        result = self._git(["check-ignore", "--", path])
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise GitError(
            f"Failed to check if {path} is ignored (exit {result.returncode}): {result.stderr.strip()}"
        )

    def commit(self, message: str) -> None:
        """Create a commit from the index with `message`.

        Raises:
            CommitError: If `git commit` exits nonzero.
        """
        try:
            result = self._git(["commit", "-m", message])
        except GitError as e:
            raise CommitError(str(e)) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            raise CommitError(f"Failed to commit: {detail}")
        self.logger.debug("Commit created: %s", result.stdout.strip())
