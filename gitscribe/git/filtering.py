"""Staged file filtering.

Contains:
- IgnoreRuleSet: The VCS ignore probe plus configured glob patterns
- validate_ignore_pattern: Reject malformed glob patterns
- should_exclude_file: Check if a file matches any ignore pattern
- filter_staged_files: Drop staged files matched by the ignore rules
- DEFAULT_FILE_IGNORE: Default patterns for files to exclude from the diff
"""

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from gitscribe.git.exceptions import InvalidIgnorePatternError


# Lock files are auto-generated and rarely worth describing in a commit message
DEFAULT_FILE_IGNORE = [
    "bun.lockb",
    "Cargo.lock",
    "composer.lock",
    "Gemfile.lock",
    "package-lock.json",
    "pnpm-lock.yaml",
    "poetry.lock",
    "uv.lock",
    "yarn.lock",
    "go.sum",
]


VcsIgnoreProbe = Callable[[str], bool]


@dataclass
class IgnoreRuleSet:
    """Rules deciding which staged files are left out of the diff.

    Attributes:
        vcs_probe: Returns True when git itself ignores the path.
        patterns: Shell-style glob patterns from configuration.
    """

    vcs_probe: VcsIgnoreProbe
    patterns: list[str] = field(default_factory=list)

    def is_ignored(self, filename: str) -> bool:
        return self.vcs_probe(filename) or should_exclude_file(filename, self.patterns)


def validate_ignore_pattern(pattern: str) -> None:
    """Check that a glob pattern is well formed.

    fnmatch quietly treats a broken character class as literal text, which
    would make a typo in the config match nothing. Reject those instead.

    Args:
        pattern: The glob pattern to validate.

    Raises:
        InvalidIgnorePatternError: If the pattern is empty, has an
            unterminated character class, or ends with a lone backslash.
    """
    if not pattern or not pattern.strip():
        raise InvalidIgnorePatternError(pattern, "pattern is empty")

    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "[":
            j = i
            if j < n and pattern[j] == "!":
                j += 1
            # A leading ']' is a literal member of the class
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise InvalidIgnorePatternError(pattern, "unterminated character class")
            i = close + 1

    trailing = len(pattern) - len(pattern.rstrip("\\"))
    if trailing % 2 == 1:
        raise InvalidIgnorePatternError(pattern, "trailing escape character")


def should_exclude_file(filename: str, patterns: list[str]) -> bool:
    """Check if a file should be excluded based on patterns.

    Supports glob patterns like *.lock, build/*, etc. A pattern matches if it
    matches the full path or just the basename.

    Args:
        filename: The file path to check.
        patterns: List of patterns to match against.

    Returns:
        True if the file should be excluded.
    """
    for pattern in patterns:
        if filename == pattern:
            return True
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(Path(filename).name, pattern):
            return True
    return False


def filter_staged_files(
    files: list[str],
    ignore_globs: list[str],
    vcs_ignore_probe: VcsIgnoreProbe,
) -> list[str]:
    """Remove ignored files from the staged file list.

    Patterns are validated up front, so a malformed pattern fails the call
    before git is asked about any file.

    Args:
        files: Staged file paths, in git's order.
        ignore_globs: Glob patterns from configuration.
        vcs_ignore_probe: Callable reporting whether git ignores a path.

    Returns:
        The files that are not ignored, in their original order.

    Raises:
        InvalidIgnorePatternError: If any pattern is malformed.
        GitError: If the VCS probe fails.
    """
    for pattern in ignore_globs:
        validate_ignore_pattern(pattern)

    rules = IgnoreRuleSet(vcs_probe=vcs_ignore_probe, patterns=list(ignore_globs))
    return [f for f in files if not rules.is_ignored(f)]
