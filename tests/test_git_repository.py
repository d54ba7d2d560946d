"""Tests for gitscribe.git runner and repository modules."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gitscribe.git import (
    CommitError,
    DiffReadError,
    GitError,
    GitRepository,
    _run_git_command,
    get_repo_root,
    run_git,
)


def completed(stdout="", stderr="", returncode=0):
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


@pytest.fixture
def repo(mocker, temp_dir):
    """A GitRepository rooted at a temporary directory."""
    mocker.patch("gitscribe.git.repository.get_repo_root", return_value=temp_dir)
    return GitRepository(temp_dir)


class TestRunGitCommand:
    """Tests for _run_git_command and run_git."""

    def test_successful_command(self, mocker):
        """Test successful git command execution."""
        mocker.patch("subprocess.run", return_value=completed("output\n"))

        assert _run_git_command(["status"]) == "output"

    def test_unstripped_output(self, mocker):
        """Test that output can be kept verbatim."""
        mocker.patch("subprocess.run", return_value=completed("output\n"))

        assert _run_git_command(["status"], strip=False) == "output\n"

    def test_failed_command_raises_error(self, mocker):
        """Test that failed command raises GitError."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "git", stderr="error"),
        )

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["invalid"])

        assert "Git command failed" in str(exc_info.value)

    def test_git_not_found_raises_error(self, mocker):
        """Test that missing git raises GitError."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(GitError) as exc_info:
            run_git(["status"])

        assert "not installed" in str(exc_info.value)

    def test_run_git_passes_cwd(self, mocker, temp_dir):
        """Test that commands run inside the given directory."""
        mock_run = mocker.patch("subprocess.run", return_value=completed())

        run_git(["status"], cwd=temp_dir)

        assert mock_run.call_args.kwargs["cwd"] == temp_dir
        assert mock_run.call_args.args[0] == ["git", "status"]


class TestGetRepoRoot:
    """Tests for get_repo_root function."""

    def test_returns_path(self, mocker):
        """Test that repo root path is returned."""
        mocker.patch("subprocess.run", return_value=completed("/path/to/repo\n"))

        assert get_repo_root() == Path("/path/to/repo")

    def test_raises_error_if_not_repo(self, mocker):
        """Test error if not in a git repository."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(128, "git", stderr="not a git repo"),
        )

        with pytest.raises(GitError) as exc_info:
            get_repo_root()

        assert "not a git repository" in str(exc_info.value)

    def test_raises_error_if_path_missing(self, temp_dir):
        """Test error for a path that does not exist."""
        with pytest.raises(GitError) as exc_info:
            get_repo_root(temp_dir / "missing")

        assert "not a directory" in str(exc_info.value)


class TestStagedFiles:
    """Tests for GitRepository.staged_files."""

    def test_lists_files(self, mocker, repo, temp_dir):
        """Test that NUL-delimited output becomes a list."""
        mock_run = mocker.patch("subprocess.run", return_value=completed("a.go\0src/b.go\0"))

        assert repo.staged_files() == ["a.go", "src/b.go"]
        assert mock_run.call_args.args[0] == ["git", "diff", "--cached", "--name-only", "-z"]
        assert mock_run.call_args.kwargs["cwd"] == temp_dir

    def test_empty_output(self, mocker, repo):
        """Test that empty output means no staged files."""
        mocker.patch("subprocess.run", return_value=completed(""))

        assert repo.staged_files() == []

    def test_failure_raises(self, mocker, repo):
        """Test that a git failure raises GitError."""
        mocker.patch("subprocess.run", return_value=completed(stderr="fatal", returncode=128))

        with pytest.raises(GitError):
            repo.staged_files()


class TestStagedDiff:
    """Tests for GitRepository.staged_diff."""

    def test_returns_verbatim_output(self, mocker, repo, sample_diff):
        """Test that the diff is not stripped or reformatted."""
        mocker.patch("subprocess.run", return_value=completed(sample_diff))

        assert repo.staged_diff() == sample_diff

    def test_limits_to_paths(self, mocker, repo):
        """Test that paths are passed after a -- separator."""
        mock_run = mocker.patch("subprocess.run", return_value=completed("diff"))

        repo.staged_diff(["a.go", "b.go"])

        assert mock_run.call_args.args[0] == ["git", "diff", "--cached", "--", "a.go", "b.go"]

    def test_failure_raises_diff_read_error(self, mocker, repo):
        """Test that a git failure raises DiffReadError."""
        mocker.patch("subprocess.run", return_value=completed(stderr="bad", returncode=1))

        with pytest.raises(DiffReadError):
            repo.staged_diff()


class TestIsIgnored:
    """Tests for GitRepository.is_ignored."""

    def test_exit_zero_is_ignored(self, mocker, repo):
        """Test that exit code 0 means ignored."""
        mocker.patch("subprocess.run", return_value=completed("a.log\n", returncode=0))

        assert repo.is_ignored("a.log") is True

    def test_exit_one_is_not_ignored(self, mocker, repo):
        """Test that exit code 1 means not ignored."""
        mocker.patch("subprocess.run", return_value=completed(returncode=1))

        assert repo.is_ignored("a.go") is False

    def test_other_exit_is_error(self, mocker, repo):
        """Test that any other exit code raises GitError."""
        mocker.patch("subprocess.run", return_value=completed(stderr="fatal", returncode=128))

        with pytest.raises(GitError):
            repo.is_ignored("a.go")


class TestCommit:
    """Tests for GitRepository.commit."""

    def test_commits_with_message(self, mocker, repo):
        """Test that git commit -m is run with the message."""
        mock_run = mocker.patch("subprocess.run", return_value=completed("[main abc123] fix"))

        repo.commit("fix: add line")

        assert mock_run.call_args.args[0] == ["git", "commit", "-m", "fix: add line"]

    def test_failure_raises_commit_error(self, mocker, repo):
        """Test that a nonzero exit raises CommitError with stderr."""
        mocker.patch(
            "subprocess.run",
            return_value=completed(stderr="pre-commit hook failed", returncode=1),
        )

        with pytest.raises(CommitError) as exc_info:
            repo.commit("fix: add line")

        assert "pre-commit hook failed" in str(exc_info.value)


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestRealRepository:
    """Tests against a real repository created with git init."""

    @pytest.fixture
    def real_repo(self, temp_dir):
        subprocess.run(["git", "init", "-q"], cwd=temp_dir, check=True)
        return temp_dir

    def stage(self, root, name, content):
        (root / name).write_text(content, encoding="utf-8")
        subprocess.run(["git", "add", "--", name], cwd=root, check=True)

    def test_non_ascii_path_is_unquoted(self, real_repo):
        """Test that non-ASCII names come back as real paths, not C-quoted."""
        self.stage(real_repo, "café.txt", "bonjour\n")
        self.stage(real_repo, "notes with space.md", "hello\n")

        repo = GitRepository(real_repo)
        files = repo.staged_files()

        assert sorted(files) == ["café.txt", "notes with space.md"]

    def test_diff_for_non_ascii_path(self, real_repo):
        """Test that the listed paths select their changes in the diff."""
        self.stage(real_repo, "café.txt", "bonjour\n")

        repo = GitRepository(real_repo)
        diff = repo.staged_diff(repo.staged_files())

        assert "+bonjour" in diff

    def test_check_ignore_with_non_ascii_path(self, real_repo):
        """Test that check-ignore understands the unquoted path."""
        (real_repo / ".gitignore").write_text("*.tmp\n", encoding="utf-8")

        repo = GitRepository(real_repo)

        assert repo.is_ignored("résumé.tmp") is True
        assert repo.is_ignored("café.txt") is False
