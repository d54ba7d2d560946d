"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from gitscribe.config import ClientConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def client_config():
    """Client settings pointing at a fake endpoint."""
    return ClientConfig(
        api_key="sk-test",
        api_base="https://llm.example.com/v1",
        model="gpt-4o-mini",
        retries=2,
        retry_delay=1.0,
    )


@pytest.fixture
def sample_diff():
    """Sample staged diff."""
    return """diff --git a/a.go b/a.go
index 1234567..abcdefg 100644
--- a/a.go
+++ b/a.go
@@ -1,3 +1,4 @@
 package main
+// +1 line
"""
