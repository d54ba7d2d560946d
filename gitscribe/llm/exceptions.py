"""LLM-related exception classes.

Contains all exception classes for completion requests:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when API key is not set
- CompletionRequestError: A transport or HTTP failure (retried)
- EmptyCompletionError: The model returned no choices (never retried)
- RetriesExhaustedError: Every attempt failed with a retryable error
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class CompletionRequestError(LLMError):
    """Raised when a request fails in transport or with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EmptyCompletionError(LLMError):
    """Raised when the completion response contains no choices."""

    pass


class RetriesExhaustedError(LLMError):
    """Raised when every attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Completion request failed after {attempts} attempts: {last_error}")
