"""Chat-completions client with retry and error classification."""
from typing import Any, Dict, List, Optional
import asyncio
import json

import httpx

from sentiment_fix.config import LLM_MODELS
import logging
logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when required configuration (e.g. the API key) is missing."""


class CompletionAPIError(Exception):
    """Non-retryable error response from the completions endpoint."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenAI API error: {status_code} - {body}")


class CompletionClient:
    """Submits chat messages to an OpenAI-compatible completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        client: Optional[httpx.AsyncClient] = None,
        model_config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize client.

        Args:
            api_key: Bearer credential for the endpoint
            client: Optional pre-built httpx client (tests inject a mock transport)
            model_config: Overrides for LLM_MODELS['sentiment']

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")

        self.api_key = api_key
        self.model_config = {**LLM_MODELS['sentiment'], **(model_config or {})}
        self.base_url = self.model_config['base_url']
        self.model = self.model_config['model']
        self.max_completion_tokens = self.model_config['max_completion_tokens']
        self.max_retries = self.model_config['max_retries']
        self.retry_delay = self.model_config['retry_delay']
        self.retryable_status_codes = set(self.model_config['retryable_status_codes'])

        self._owns_client = client is None
        if client is None:
            timeout_config = httpx.Timeout(
                connect=10.0,
                read=self.model_config['timeout'],
                write=10.0,
                pool=5.0
            )
            client = httpx.AsyncClient(timeout=timeout_config)
        self.client = client

    def _backoff(self, retry_count: int) -> float:
        return self.retry_delay * (2 ** retry_count)

    async def submit(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        retry_count: int = 0
    ) -> str:
        """
        Send messages and return the first completion's text.

        Args:
            messages: Role-tagged chat messages
            max_tokens: Completion budget (defaults to configured max_completion_tokens)
            retry_count: Current retry attempt

        Returns:
            Stripped content of the first choice, or empty string if absent

        Raises:
            CompletionAPIError: On a non-retryable status or retryable status with no retries left
            httpx.TransportError: When network failures exhaust the retry budget
        """
        try:
            logger.debug(f"API call with {self.model} (attempt {retry_count + 1}/{self.max_retries + 1})")
            response = await self.client.post(
                self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json={
                    "model": self.model,
                    "messages": messages,
                    "max_completion_tokens": max_tokens or self.max_completion_tokens,
                }
            )
            if response.is_success:
                return _extract_content(response.json())

        except (httpx.TransportError, json.JSONDecodeError) as e:
            if retry_count >= self.max_retries:
                logger.error(f"API failed after {self.max_retries + 1} attempts: {type(e).__name__}: {e}")
                raise
            wait_time = self._backoff(retry_count)
            logger.warning(f"Request failed ({type(e).__name__}: {e}), retrying in {wait_time}s...")
            await asyncio.sleep(wait_time)
            return await self.submit(messages, max_tokens, retry_count + 1)

        if response.status_code in self.retryable_status_codes and retry_count < self.max_retries:
            wait_time = self._backoff(retry_count)
            logger.warning(f"Rate limited ({response.status_code}), retrying in {wait_time}s...")
            await asyncio.sleep(wait_time)
            return await self.submit(messages, max_tokens, retry_count + 1)

        raise CompletionAPIError(response.status_code, response.text)

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


def _extract_content(data: Any) -> str:
    """Return the first choice's message content, or empty string if absent or malformed."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if not isinstance(content, str):
        return ""
    return content.strip()
