"""Text editing capability for the confirmation loop."""

import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

import typer


class Editor(Protocol):
    def edit(self, text: str) -> tuple[str, bool]:
        """Let the user edit `text`.

        Returns:
            The edited text and whether the user confirmed the edit.
        """
        ...


def find_editor() -> list[str]:
    """Find an available text editor.

    Preference order:
    1. $VISUAL environment variable
    2. $EDITOR environment variable
    3. nano as fallback

    Returns:
        List of command parts to run the editor.
    """
    for var in ("VISUAL", "EDITOR"):
        editor = os.environ.get(var)
        if editor and editor.strip():
            return shlex.split(editor)

    if shutil.which("nano"):
        return ["nano"]

    # Last resort: vi
    return ["vi"]


class ExternalEditor:
    """Edits text in the user's editor through a temporary file."""

    def __init__(self, command: list[str] | None = None):
        self.command = command

    def edit(self, text: str) -> tuple[str, bool]:
        """Open `text` in the editor and wait for it to close.

        A nonzero exit status or a missing editor leaves the edit unconfirmed.
        """
        editor_cmd = self.command or find_editor()

        with tempfile.NamedTemporaryFile(
            "w", prefix="gitscribe-", suffix=".txt", delete=False
        ) as f:
            f.write(text)
            file_path = Path(f.name)

        try:
            typer.echo(f"Opening editor: {' '.join(editor_cmd)}", err=True)
            try:
                result = subprocess.run(editor_cmd + [str(file_path)], check=False)
            except FileNotFoundError:
                typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
                return text, False

            if result.returncode != 0:
                typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)
                return text, False

            try:
                return file_path.read_text(), True
            except OSError as e:
                typer.echo(f"Warning: Could not read edited message: {e}", err=True)
                return text, False
        finally:
            file_path.unlink(missing_ok=True)
