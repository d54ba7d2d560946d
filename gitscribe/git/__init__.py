"""Git collaborator module for gitscribe.

This package provides:
- exceptions: GitError, NoStagedChangesError, AllFilesIgnoredError,
              InvalidIgnorePatternError, DiffReadError, CommitError
- runner: run_git, _run_git_command, get_repo_root
- filtering: filter_staged_files, should_exclude_file, validate_ignore_pattern,
             IgnoreRuleSet, DEFAULT_FILE_IGNORE
- repository: DiffSource, CommitSink, StagedChangeSet, GitRepository
"""

# Exceptions
from gitscribe.git.exceptions import (
    AllFilesIgnoredError,
    CommitError,
    DiffReadError,
    GitError,
    InvalidIgnorePatternError,
    NoStagedChangesError,
)

# Runner utilities
from gitscribe.git.runner import (
    _run_git_command,
    get_repo_root,
    run_git,
)

# Filtering
from gitscribe.git.filtering import (
    DEFAULT_FILE_IGNORE,
    IgnoreRuleSet,
    filter_staged_files,
    should_exclude_file,
    validate_ignore_pattern,
)

# Repository adapter
from gitscribe.git.repository import (
    CommitSink,
    DiffSource,
    GitRepository,
    StagedChangeSet,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoStagedChangesError",
    "AllFilesIgnoredError",
    "InvalidIgnorePatternError",
    "DiffReadError",
    "CommitError",
    # Runner
    "run_git",
    "_run_git_command",
    "get_repo_root",
    # Filtering
    "DEFAULT_FILE_IGNORE",
    "IgnoreRuleSet",
    "filter_staged_files",
    "should_exclude_file",
    "validate_ignore_pattern",
    # Repository
    "DiffSource",
    "CommitSink",
    "StagedChangeSet",
    "GitRepository",
]
