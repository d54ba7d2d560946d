"""Interactive confirmation loop.

Drives the user from a generated message to a commit:

    GENERATE -> PRESENT -> AWAIT_INPUT -> DONE
        ^                    |    |
        +------ retry -------+    +-- edit -> EDIT -> PRESENT

A generation failure ends the loop with the error. Retrying is only ever a
user decision taken after a message was shown.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

import typer

from gitscribe.editor import Editor
from gitscribe.git.repository import CommitSink


class LoopState(Enum):
    GENERATE = "generate"
    PRESENT = "present"
    AWAIT_INPUT = "await_input"
    EDIT = "edit"
    DONE = "done"


class CommitDecision(Enum):
    """What the user chose to do with the current message."""

    ACCEPT = "accept"
    REJECT = "reject"
    RETRY = "retry"
    EDIT = "edit"
    INVALID = "invalid"


DECISION_TOKENS = {
    "": CommitDecision.ACCEPT,
    "y": CommitDecision.ACCEPT,
    "yes": CommitDecision.ACCEPT,
    "n": CommitDecision.REJECT,
    "no": CommitDecision.REJECT,
    "r": CommitDecision.RETRY,
    "retry": CommitDecision.RETRY,
    "e": CommitDecision.EDIT,
    "edit": CommitDecision.EDIT,
}

DECISION_PROMPT = "Commit with this message? [Y]es / [n]o / [r]etry / [e]dit"


def parse_decision(token: str) -> CommitDecision:
    """Map one line of user input to a decision, ignoring case and padding."""
    return DECISION_TOKENS.get(token.strip().lower(), CommitDecision.INVALID)


class MessageSource(Protocol):
    def generate_message(self) -> str: ...


def read_decision() -> str:
    """Ask the user what to do with the message."""
    return typer.prompt(DECISION_PROMPT, default="", show_default=False)


def present_message(message: str) -> None:
    """Print the candidate message between separators."""
    typer.echo("")
    typer.echo("=" * 60)
    typer.echo(message)
    typer.echo("=" * 60)
    typer.echo("")


@dataclass
class WorkflowResult:
    """Outcome of one confirmation loop run.

    Attributes:
        committed: Whether a commit was created.
        message: The final message (None if the user rejected it).
        generations: Number of completed generation calls.
        edits: Number of editor sessions.
    """

    committed: bool
    message: Optional[str]
    generations: int = 0
    edits: int = 0


class ConfirmationLoop:
    """State machine gating the commit on the user's decision."""

    def __init__(
        self,
        generator: MessageSource,
        sink: CommitSink,
        editor: Editor,
        read_decision: Callable[[], str] = read_decision,
        present: Callable[[str], None] = present_message,
        logger: Optional[logging.Logger] = None,
    ):
        self.generator = generator
        self.sink = sink
        self.editor = editor
        self.read_decision = read_decision
        self.present = present
        self.logger = logger or logging.getLogger(__name__)

    def run(self) -> WorkflowResult:
        """Run the loop until the user commits or cancels.

        Returns:
            The workflow result.

        Raises:
            GitError: If generation or the commit fails.
            LLMError: If generation fails.
        """
        state = LoopState.GENERATE
        message: Optional[str] = None
        committed = False
        generations = 0
        edits = 0

        while state is not LoopState.DONE:
            self.logger.debug("Confirmation loop state: %s", state.value)

            if state is LoopState.GENERATE:
                typer.echo("Generating commit message...", err=True)
                message = self.generator.generate_message()
                generations += 1
                state = LoopState.PRESENT

            elif state is LoopState.PRESENT:
                self.present(message)
                state = LoopState.AWAIT_INPUT

            elif state is LoopState.AWAIT_INPUT:
                decision = parse_decision(self.read_decision())

                if decision is CommitDecision.ACCEPT:
                    self.sink.commit(message)
                    committed = True
                    state = LoopState.DONE
                elif decision is CommitDecision.REJECT:
                    message = None
                    state = LoopState.DONE
                elif decision is CommitDecision.RETRY:
                    message = None
                    state = LoopState.GENERATE
                elif decision is CommitDecision.EDIT:
                    state = LoopState.EDIT
                else:
                    typer.echo("Please answer y, n, r or e.", err=True)

            elif state is LoopState.EDIT:
                edited, confirmed = self.editor.edit(message)
                edits += 1
                edited = edited.strip()
                if confirmed and edited:
                    message = edited
                else:
                    typer.echo("Edit discarded; keeping the previous message.", err=True)
                state = LoopState.PRESENT

        return WorkflowResult(
            committed=committed,
            message=message,
            generations=generations,
            edits=edits,
        )
