"""LLM prompt templates for commit message generation.

This package contains the prompt templates and the builder:
- plain: Summary line with an optional free-form body
- rich: Conventional Commits header with a bulleted body
- builder: build_prompt, turning a diff into system + user messages
"""

from gitscribe.llm.prompts.plain import SYSTEM_PROMPT_PLAIN
from gitscribe.llm.prompts.rich import SYSTEM_PROMPT_RICH
from gitscribe.llm.prompts.builder import (
    DIFF_PLACEHOLDER,
    SYSTEM_PROMPTS,
    build_prompt,
    build_user_prompt,
)


__all__ = [
    "SYSTEM_PROMPT_PLAIN",
    "SYSTEM_PROMPT_RICH",
    "SYSTEM_PROMPTS",
    "DIFF_PLACEHOLDER",
    "build_prompt",
    "build_user_prompt",
]
