"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NoStagedChangesError: Raised when there are no staged changes
- AllFilesIgnoredError: Raised when every staged file is ignored
- InvalidIgnorePatternError: Raised when a configured ignore glob is malformed
- DiffReadError: Raised when the staged diff cannot be read
- CommitError: Raised when `git commit` fails
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class AllFilesIgnoredError(GitError):
    """Raised when all staged files are excluded by ignore rules."""

    pass


class InvalidIgnorePatternError(GitError):
    """Raised when an ignore pattern from configuration is malformed."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")


class DiffReadError(GitError):
    """Raised when the staged diff cannot be read."""

    pass


class CommitError(GitError):
    """Raised when creating the commit fails."""

    pass
