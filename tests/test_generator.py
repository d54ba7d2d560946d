"""Tests for gitscribe.generator module."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from fakes import FakeRepository, RecordingTransport, chat_response
from gitscribe.config import PromptVariant
from gitscribe.generator import MessageGenerator
from gitscribe.git import (
    AllFilesIgnoredError,
    DiffReadError,
    InvalidIgnorePatternError,
    NoStagedChangesError,
)
from gitscribe.llm import CompletionClient, RetriesExhaustedError
from gitscribe.llm.prompts import SYSTEM_PROMPT_PLAIN, SYSTEM_PROMPT_RICH


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.complete.return_value = "fix: add line"
    return client


class TestCollectChanges:
    """Tests for MessageGenerator.collect_changes."""

    def test_no_staged_files(self, mock_client):
        """Test that an empty index fails before any model call."""
        generator = MessageGenerator(FakeRepository(files=[]), mock_client)

        with pytest.raises(NoStagedChangesError):
            generator.generate_message()

        mock_client.complete.assert_not_called()

    def test_all_files_ignored_by_pattern(self, mock_client):
        """Test that filtering every file out is an error."""
        repo = FakeRepository(files=["poetry.lock"], diff="+x")
        generator = MessageGenerator(repo, mock_client, ignore_patterns=["*.lock"])

        with pytest.raises(AllFilesIgnoredError):
            generator.generate_message()

        mock_client.complete.assert_not_called()
        assert repo.diff_requests == []

    def test_all_files_ignored_by_git(self, mock_client):
        """Test that git-ignored files count as ignored."""
        repo = FakeRepository(files=["build.out"], vcs_ignored={"build.out"})
        generator = MessageGenerator(repo, mock_client)

        with pytest.raises(AllFilesIgnoredError):
            generator.collect_changes()

    def test_invalid_pattern(self, mock_client):
        """Test that a malformed pattern fails the run."""
        repo = FakeRepository(files=["a.go"], diff="+x")
        generator = MessageGenerator(repo, mock_client, ignore_patterns=["[a-"])

        with pytest.raises(InvalidIgnorePatternError):
            generator.generate_message()

        assert repo.ignore_checks == []
        mock_client.complete.assert_not_called()

    def test_diff_limited_to_included_files(self, mock_client):
        """Test that the diff is requested only for kept files."""
        repo = FakeRepository(files=["a.go", "go.sum", "b.go"], diff="+x")
        generator = MessageGenerator(repo, mock_client, ignore_patterns=["go.sum"])

        changes = generator.collect_changes()

        assert changes.files == ["a.go", "b.go"]
        assert changes.diff == "+x"
        assert repo.diff_requests == [["a.go", "b.go"]]

    def test_empty_diff(self, mock_client):
        """Test that an empty diff for staged files fails before the model call."""
        repo = FakeRepository(files=["café.txt"], diff="\n")
        generator = MessageGenerator(repo, mock_client)

        with pytest.raises(DiffReadError) as exc_info:
            generator.generate_message()

        assert "café.txt" in str(exc_info.value)
        mock_client.complete.assert_not_called()


class TestGenerateMessage:
    """Tests for MessageGenerator.generate_message."""

    def test_passes_prompt_to_client(self, mock_client):
        """Test that the client receives the system and user messages."""
        repo = FakeRepository(files=["a.go"], diff="+1 line")
        generator = MessageGenerator(repo, mock_client)

        generator.generate_message()

        messages = mock_client.complete.call_args.args[0]
        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == SYSTEM_PROMPT_PLAIN
        assert messages[1].content == "{{ placeholder }}\n\n+1 line"

    def test_rich_variant(self, mock_client):
        """Test that the rich variant uses the rich system prompt."""
        repo = FakeRepository(files=["a.go"], diff="+1 line")
        generator = MessageGenerator(repo, mock_client, variant=PromptVariant.RICH)

        generator.generate_message()

        messages = mock_client.complete.call_args.args[0]
        assert messages[0].content == SYSTEM_PROMPT_RICH

    def test_strips_whitespace(self, mock_client):
        """Test that surrounding whitespace is removed from the message."""
        mock_client.complete.return_value = "\n  feat: add thing  \n\n"
        generator = MessageGenerator(FakeRepository(files=["a.go"], diff="+x"), mock_client)

        assert generator.generate_message() == "feat: add thing"

    def test_end_to_end_with_http(self, client_config):
        """Test one staged file through to the model's message."""
        transport = RecordingTransport(httpx.Response(200, json=chat_response("fix: add line")))
        client = CompletionClient(client_config, sleep=lambda s: None, transport=transport)
        repo = FakeRepository(files=["a.go"], diff="+1 line")

        message = MessageGenerator(repo, client).generate_message()

        assert message == "fix: add line"
        body = json.loads(transport.requests[0].content)
        assert body["messages"][1]["content"] == "{{ placeholder }}\n\n+1 line"

    def test_client_error_propagates(self, client_config):
        """Test that exhausted retries reach the caller."""
        transport = RecordingTransport(httpx.Response(500))
        client = CompletionClient(client_config, sleep=lambda s: None, transport=transport)
        repo = FakeRepository(files=["a.go"], diff="+1 line")

        with pytest.raises(RetriesExhaustedError):
            MessageGenerator(repo, client).generate_message()

        assert len(transport.requests) == 3
        assert repo.commits == []
