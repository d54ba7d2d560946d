"""Chat completion client with bounded retries.

Talks to any OpenAI-compatible `/chat/completions` endpoint through the
openai SDK. The SDK's own retries are disabled; this client retries
transport and HTTP failures itself with linear backoff, and never retries a
response that came back without choices.
"""

import logging
import time
from typing import Callable, Optional, Sequence

import httpx
from openai import APIConnectionError, APIError, APIStatusError, OpenAI
from openai.types.chat import ChatCompletion

from gitscribe.config import ClientConfig
from gitscribe.llm.exceptions import (
    CompletionRequestError,
    EmptyCompletionError,
    RetriesExhaustedError,
)
from gitscribe.llm.models import ChatMessage, CompletionRequest


REDACTED = "<redacted>"


def redact_headers(headers) -> dict[str, str]:
    """Copy headers for logging with the Authorization value hidden."""
    return {
        name: (REDACTED if name.lower() == "authorization" else value)
        for name, value in headers.items()
    }


class CompletionClient:
    """Sends chat completion requests for one workflow run."""

    def __init__(
        self,
        config: ClientConfig,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            config: Endpoint, credentials and retry settings.
            logger: Logger for debug tracing.
            sleep: Called with the backoff delay between attempts.
            transport: Optional httpx transport, used instead of the network.
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.sleep = sleep
        self.transport = transport

    @property
    def max_attempts(self) -> int:
        return self.config.retries + 1

    def _log_request(self, request: httpx.Request) -> None:
        self.logger.debug("Request: %s %s", request.method, request.url)
        self.logger.debug("Request headers: %s", redact_headers(request.headers))

    def _log_response(self, response: httpx.Response) -> None:
        response.read()
        self.logger.debug("Response status: %d", response.status_code)
        self.logger.debug("Response body: %s", response.text)

    def _build_http_client(self) -> httpx.Client:
        """Build a fresh HTTP client for one attempt."""
        kwargs = {"timeout": self.config.timeout}
        if self.config.proxy:
            kwargs["proxy"] = self.config.proxy
        if self.transport is not None:
            kwargs["transport"] = self.transport
        if self.config.debug:
            kwargs["event_hooks"] = {
                "request": [self._log_request],
                "response": [self._log_response],
            }
        return httpx.Client(**kwargs)

    def build_request(self, messages: Sequence[ChatMessage]) -> CompletionRequest:
        return CompletionRequest(
            model=self.config.model,
            messages=list(messages),
            temperature=self.config.temperature,
        )

    def _send(self, request: CompletionRequest):
        """Make a single attempt.

        Returns:
            The parsed completion response.

        Raises:
            CompletionRequestError: On transport errors and non-2xx statuses,
                or a body that is not a chat completion.
        """
        payload = request.to_payload()
        api_base = self.config.resolved_api_base()

        try:
            with OpenAI(
                api_key=self.config.api_key,
                base_url=api_base,
                timeout=self.config.timeout,
                max_retries=0,
                default_headers=self.config.extra_headers or None,
                http_client=self._build_http_client(),
            ) as client:
                response = client.chat.completions.create(**payload)
        except APIStatusError as e:
            raise CompletionRequestError(
                f"request failed with status {e.status_code}: {e.message}",
                status_code=e.status_code,
            )
        except APIConnectionError as e:
            raise CompletionRequestError(f"request to {api_base} failed: {e}")
        except APIError as e:
            raise CompletionRequestError(f"invalid response from {api_base}: {e}")

        # A 2xx body that is not JSON (e.g. a proxy login page) parses to a str
        if not isinstance(response, ChatCompletion):
            raise CompletionRequestError(
                f"invalid response from {api_base}: expected a chat completion, got {type(response).__name__}"
            )
        return response

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        """Get a completion for `messages`.

        Makes up to `retries + 1` attempts. Between failed attempts it sleeps
        `(attempt + 1) * retry_delay` seconds.

        Args:
            messages: The ordered chat messages.

        Returns:
            The content of the first choice.

        Raises:
            EmptyCompletionError: If the response has no choices.
            RetriesExhaustedError: If every attempt failed.
        """
        request = self.build_request(messages)
        last_error: Optional[CompletionRequestError] = None

        for attempt in range(self.max_attempts):
            if self.config.debug:
                self.logger.debug(
                    "Sending request to provider `%s` (attempt %d/%d)",
                    self.config.provider.value,
                    attempt + 1,
                    self.max_attempts,
                )

            try:
                response = self._send(request)
            except CompletionRequestError as e:
                last_error = e
                self.logger.warning("Attempt %d/%d failed: %s", attempt + 1, self.max_attempts, e)
                if attempt + 1 < self.max_attempts:
                    self.sleep((attempt + 1) * self.config.retry_delay)
                continue

            choices = getattr(response, "choices", None)
            if not choices:
                raise EmptyCompletionError("No response from model: completion contained no choices")

            return choices[0].message.content or ""

        raise RetriesExhaustedError(self.max_attempts, last_error) from last_error
