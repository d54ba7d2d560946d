"""Chat completion module for gitscribe.

This package provides the completion client, its request models and
exceptions, and the commit message prompts.
"""

from gitscribe.llm.client import CompletionClient
from gitscribe.llm.exceptions import (
    CompletionRequestError,
    EmptyCompletionError,
    LLMError,
    MissingAPIKeyError,
    RetriesExhaustedError,
)
from gitscribe.llm.models import ChatMessage, CompletionRequest
from gitscribe.llm.prompts import build_prompt


# Export commonly used items
__all__ = [
    "CompletionClient",
    "ChatMessage",
    "CompletionRequest",
    "LLMError",
    "MissingAPIKeyError",
    "CompletionRequestError",
    "EmptyCompletionError",
    "RetriesExhaustedError",
    "build_prompt",
]
