"""Prompt construction for commit message generation."""

from gitscribe.config import PromptVariant
from gitscribe.llm.models import ChatMessage
from gitscribe.llm.prompts.plain import SYSTEM_PROMPT_PLAIN
from gitscribe.llm.prompts.rich import SYSTEM_PROMPT_RICH


# Marker the diff is appended after in the user message
DIFF_PLACEHOLDER = "{{ placeholder }}"

SYSTEM_PROMPTS = {
    PromptVariant.PLAIN: SYSTEM_PROMPT_PLAIN,
    PromptVariant.RICH: SYSTEM_PROMPT_RICH,
}


def build_user_prompt(diff: str) -> str:
    """Embed the diff verbatim after the placeholder marker."""
    return f"{DIFF_PLACEHOLDER}\n\n{diff}"


def build_prompt(diff: str, variant: PromptVariant = PromptVariant.PLAIN) -> tuple[ChatMessage, ChatMessage]:
    """Build the system and user messages for a diff.

    Pure: the same diff and variant always produce identical messages.

    Args:
        diff: The staged unified diff.
        variant: Which system prompt to use.

    Returns:
        A (system message, user message) pair.
    """
    system = ChatMessage(role="system", content=SYSTEM_PROMPTS[variant])
    user = ChatMessage(role="user", content=build_user_prompt(diff))
    return system, user
