"""Git command runner and repository utilities.

Contains:
- run_git: Run a git command and return the completed process
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of a git repository
"""

import subprocess
from pathlib import Path
from typing import Optional

from gitscribe.git.exceptions import GitError


def run_git(args: list[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """Run a git command without checking its exit code.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in (defaults to the current one).

    Returns:
        The completed process, with text stdout and stderr captured.

    Raises:
        GitError: If git is not installed.
    """
    try:
        return subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _run_git_command(args: list[str], cwd: Optional[Path] = None, strip: bool = True) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root(path: Optional[Path] = None) -> Path:
    """Get the root directory of the git repository containing `path`.

    Args:
        path: A directory inside the repository (defaults to the current one).

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    if path is not None and not path.is_dir():
        raise GitError(f"{path} is not a directory.")

    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=path)
        return Path(root)
    except GitError:
        location = path or Path.cwd()
        raise GitError(f"{location} is not a git repository. Run this command from within a git repo or pass --path.")
