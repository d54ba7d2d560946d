"""Commit message generation from staged changes."""

import logging
from typing import Optional

from gitscribe.config import PromptVariant
from gitscribe.git.exceptions import AllFilesIgnoredError, DiffReadError, NoStagedChangesError
from gitscribe.git.filtering import filter_staged_files
from gitscribe.git.repository import DiffSource, StagedChangeSet
from gitscribe.llm.client import CompletionClient
from gitscribe.llm.prompts import build_prompt


class MessageGenerator:
    """Turns the staged changes of a repository into a commit message."""

    def __init__(
        self,
        source: DiffSource,
        client: CompletionClient,
        ignore_patterns: Optional[list[str]] = None,
        variant: PromptVariant = PromptVariant.PLAIN,
        logger: Optional[logging.Logger] = None,
    ):
        self.source = source
        self.client = client
        self.ignore_patterns = list(ignore_patterns or [])
        self.variant = variant
        self.logger = logger or logging.getLogger(__name__)

    def collect_changes(self) -> StagedChangeSet:
        """Gather the staged files and diff to describe.

        Returns:
            The filtered staged files and the staged diff.

        Raises:
            NoStagedChangesError: If nothing is staged.
            InvalidIgnorePatternError: If an ignore pattern is malformed.
            AllFilesIgnoredError: If every staged file is ignored.
            DiffReadError: If the diff cannot be read or is empty.
        """
        files = self.source.staged_files()
        if not files:
            raise NoStagedChangesError(
                "No staged changes found. Stage your changes first with: git add <files>"
            )

        included = filter_staged_files(files, self.ignore_patterns, self.source.is_ignored)
        skipped = len(files) - len(included)
        if skipped:
            self.logger.debug("Ignoring %d of %d staged file(s)", skipped, len(files))
        if not included:
            raise AllFilesIgnoredError(
                "All staged files are ignored. Stage other files or adjust file_ignore in the config."
            )

        diff = self.source.staged_diff(included)
        if not diff.strip():
            raise DiffReadError(
                f"git returned an empty diff for {len(included)} staged file(s): {', '.join(included)}"
            )
        self.logger.debug("Staged diff is %d characters", len(diff))
        return StagedChangeSet(files=included, diff=diff)

    def generate_message(self) -> str:
        """Generate a commit message for the staged changes.

        Returns:
            The model's message with surrounding whitespace removed.

        Raises:
            GitError: For any of the staged change failures.
            LLMError: If the completion fails.
        """
        changes = self.collect_changes()
        messages = build_prompt(changes.diff, self.variant)
        message = self.client.complete(messages)
        return message.strip()
