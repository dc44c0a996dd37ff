"""
HTTP embedding provider client.

Thin async client for the embedding service:
- GET {endpoint}?word={token} -> {"data": [float, ...]}
- POST {endpoint}list with a JSON array of tokens -> {"data": [[float, ...], ...]}
"""

import logging
from typing import Any, List, Optional, Sequence

import httpx

from ..core.exceptions import DeserializationError, ProviderError
from ..core.types import DEFAULT_ENDPOINT
from .base import EmbeddingProvider


logger = logging.getLogger(__name__)


class HttpEmbeddingProvider(EmbeddingProvider):
    """
    Embedding provider reached over HTTP with httpx.

    No timeout is applied unless one is configured; cancellation is left to
    the caller (e.g. asyncio.wait_for around the store operation).

    Example:
        >>> provider = HttpEmbeddingProvider("http://localhost:8000/")
        >>> vector = await provider.embed_word("car")
        >>> vectors = await provider.embed_batch(["car", "bus"])
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            endpoint: Base URL of the embedding service
            timeout_seconds: Request timeout; None disables timeouts
            transport: Optional httpx transport (used by tests to mock the service)
        """
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def batch_url(self) -> str:
        return f"{self.endpoint}list"

    async def embed_word(self, word: str) -> List[float]:
        """
        Fetch the embedding for one token.

        Args:
            word: Token to embed

        Returns:
            Embedding vector

        Raises:
            ProviderError: If the request fails
            DeserializationError: If the body is not {"data": [numbers]}
        """
        logger.debug(f"Requesting embedding for {word!r}", extra={"endpoint": self.endpoint})

        payload = await self._request(
            "GET",
            self.endpoint,
            params={"word": word},
            headers={"Accept": "application/json"},
        )
        return self._parse_vector(payload.get("data"), self.endpoint)

    async def embed_batch(self, words: Sequence[str]) -> List[List[float]]:
        """
        Fetch embeddings for a batch of tokens with a single POST.

        Args:
            words: Tokens to embed

        Returns:
            List of embedding vectors in response order

        Raises:
            ProviderError: If the request fails
            DeserializationError: If the body is not {"data": [[numbers], ...]}
        """
        if not words:
            return []

        url = self.batch_url
        logger.debug(
            f"Requesting batch embeddings for {len(words)} words",
            extra={"endpoint": url, "word_count": len(words)},
        )

        payload = await self._request(
            "POST",
            url,
            json=list(words),
            headers={"Accept": "application/json"},
        )

        data = payload.get("data")
        if not isinstance(data, list):
            raise DeserializationError(
                f"Expected 'data' to be a list of vectors, got {type(data).__name__}",
                endpoint=url,
            )
        return [self._parse_vector(item, url) for item in data]

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict:
        """
        Make an HTTP request and decode the JSON object body.

        Raises:
            ProviderError: On transport failure or non-2xx status
            DeserializationError: If the body is not a JSON object
        """
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                f"HTTP error from embedding provider: {status_code} - {e.response.text[:200]}",
                extra={"endpoint": url},
            )
            raise ProviderError(
                f"Embedding provider error: {status_code} - {e.response.text[:200]}",
                endpoint=url,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach embedding provider: {e}", extra={"endpoint": url})
            raise ProviderError(
                f"Failed to reach embedding provider at {url}: {e}",
                endpoint=url,
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from embedding provider: {e}", extra={"endpoint": url})
            raise DeserializationError(
                f"Invalid JSON response from embedding provider: {e}",
                endpoint=url,
            ) from e

        if not isinstance(payload, dict):
            raise DeserializationError(
                f"Expected a JSON object, got {type(payload).__name__}",
                endpoint=url,
            )
        return payload

    @staticmethod
    def _parse_vector(item: Any, url: str) -> List[float]:
        """Validate that item is a list of numbers and convert it to floats."""
        if not isinstance(item, list):
            raise DeserializationError(
                f"Expected a list of numbers, got {type(item).__name__}",
                endpoint=url,
            )
        for value in item:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DeserializationError(
                    f"Expected numeric vector components, got {value!r}",
                    endpoint=url,
                )
        try:
            return [float(value) for value in item]
        except OverflowError as e:
            raise DeserializationError(
                f"Vector component out of float range: {e}",
                endpoint=url,
            ) from e
