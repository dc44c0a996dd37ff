"""
Vector Store - Word-level embedding index.

Owns a KdTree and the label table that maps its handles back to tokens.
Embeddings are fetched from an EmbeddingProvider; the handle assigned to
a token is its position in the label table, so after every operation
len(labels) == len(index).

Mutating operations hold a single asyncio lock across the whole
fetch -> validate -> commit unit. The commit itself has no await, so a
reader never sees a label without its vector.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from .core.exceptions import DeserializationError
from .core.types import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DIMENSION,
    DEFAULT_ENDPOINT,
    SearchHit,
    StoreConfig,
)
from .index.kdtree import KdTree
from .providers.base import EmbeddingProvider
from .providers.http_provider import HttpEmbeddingProvider


logger = logging.getLogger(__name__)


def split_tokens(text: str) -> List[str]:
    """
    Split text into tokens, one per line.

    Lines are split on '\\n' with a trailing '\\r' removed. Empty and
    whitespace-only lines are dropped; other lines are kept verbatim.

    Args:
        text: Newline-separated tokens

    Returns:
        List of tokens in input order
    """
    tokens = []
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line.strip():
            tokens.append(line)
    return tokens


class VectorStore:
    """
    In-memory index of token embeddings answering similarity queries.

    Example:
        >>> store = VectorStore.create("http://localhost:8000/", dimension=384)
        >>> await store.insert_text("car\\nred\\nbus\\nfrog")
        >>> await store.similar_words("color", 2)
        ['red', 'car']
    """

    def __init__(
        self,
        provider_endpoint: Optional[str] = None,
        dimension: Optional[int] = None,
        provider: Optional[EmbeddingProvider] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize an empty store.

        Args:
            provider_endpoint: Embedding service URL (default: public service)
            dimension: Embedding length (default: 384)
            provider: Explicit provider; overrides provider_endpoint
            batch_size: Tokens per batched request in insert_text
            timeout_seconds: HTTP timeout for the default provider; None disables it

        Raises:
            ValueError: If dimension or batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._endpoint = provider_endpoint or DEFAULT_ENDPOINT
        self._index = KdTree(dimension if dimension is not None else DEFAULT_DIMENSION)
        self._labels: List[str] = []
        self._provider = provider or HttpEmbeddingProvider(
            self._endpoint, timeout_seconds=timeout_seconds
        )
        self.batch_size = batch_size
        self._write_lock = asyncio.Lock()

    @classmethod
    def create(
        cls,
        provider_endpoint: Optional[str] = None,
        dimension: Optional[int] = None,
        provider: Optional[EmbeddingProvider] = None,
    ) -> "VectorStore":
        """Create an empty store; see __init__ for defaults."""
        return cls(provider_endpoint, dimension, provider=provider)

    @classmethod
    def from_config(
        cls,
        config: StoreConfig,
        provider: Optional[EmbeddingProvider] = None,
    ) -> "VectorStore":
        """Create an empty store from a StoreConfig."""
        return cls(
            config.endpoint,
            config.dimension,
            provider=provider,
            batch_size=config.batch_size,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def dimension(self) -> int:
        return self._index.dimension

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def __len__(self) -> int:
        return len(self._labels)

    def list_words(self) -> List[str]:
        """Return stored tokens in insertion order (handle order)."""
        return list(self._labels)

    # =========================================================================
    # Insertion
    # =========================================================================

    def add(self, word: str, vector: Sequence[float]) -> int:
        """
        Insert a pre-computed embedding.

        Args:
            word: Token label
            vector: Embedding of exactly `dimension` finite floats

        Returns:
            Handle assigned to the token

        Raises:
            DimensionMismatchError: If the vector has the wrong length
            NonFiniteCoordinateError: If the vector has NaN/inf components
        """
        handle = len(self._labels)
        self._index.insert(vector, handle)
        self._labels.append(word)
        return handle

    async def insert_word(self, word: str) -> None:
        """
        Fetch the embedding for a token and insert it.

        Nothing is stored if the fetch fails or the vector is rejected.

        Raises:
            ProviderError: If the provider request fails
            DeserializationError: If the response is malformed
            DimensionMismatchError: If the provider returns the wrong length
        """
        async with self._write_lock:
            vector = await self._provider.embed_word(word)
            handle = self.add(word, vector)

        logger.debug(f"Inserted {word!r}", extra={"handle": handle})

    async def insert_text(self, text: str) -> None:
        """
        Insert every non-empty line of text as a token.

        Tokens are sent to the provider in batches of `batch_size`, one
        request at a time. Each batch is committed as a whole once its
        response is validated. If a batch fails, the error is raised and
        later batches are not attempted; batches committed before the
        failure stay in the store.

        Raises:
            ProviderError: If a batch request fails
            DeserializationError: If a batch response is malformed or has
                a different number of vectors than tokens
            DimensionMismatchError: If a returned vector has the wrong length
        """
        tokens = split_tokens(text)
        batch_count = (len(tokens) + self.batch_size - 1) // self.batch_size

        async with self._write_lock:
            for batch_index in range(batch_count):
                start = batch_index * self.batch_size
                batch = tokens[start:start + self.batch_size]
                vectors = await self._provider.embed_batch(batch)
                self._commit_batch(batch, vectors)

                logger.debug(
                    f"Committed batch {batch_index + 1}/{batch_count}",
                    extra={"batch_index": batch_index, "batch_size": len(batch)},
                )

    def _commit_batch(self, words: Sequence[str], vectors: Sequence[Sequence[float]]) -> None:
        """Validate a whole batch, then insert it."""
        if len(vectors) != len(words):
            raise DeserializationError(
                f"Provider returned {len(vectors)} vectors for {len(words)} words",
                endpoint=self._endpoint,
            )

        for vector in vectors:
            self._index.validate(vector)

        for word, vector in zip(words, vectors):
            self.add(word, vector)

    # =========================================================================
    # Queries
    # =========================================================================

    def search(self, vector: Sequence[float], top_k: int) -> List[SearchHit]:
        """
        Find the stored tokens nearest to a vector.

        Args:
            vector: Query embedding
            top_k: Maximum number of hits

        Returns:
            Hits ordered by ascending squared distance, ties by insertion order

        Raises:
            DimensionMismatchError: If the vector has the wrong length
            ValueError: If top_k is negative
        """
        return [
            SearchHit(rank=rank, handle=handle, label=self._labels[handle], distance=distance)
            for rank, (distance, handle) in enumerate(self._index.query(vector, top_k), start=1)
        ]

    def find_similar(self, vector: Sequence[float], top_k: int) -> List[str]:
        """Labels of the top_k nearest tokens to a vector, nearest first."""
        return [hit.label for hit in self.search(vector, top_k)]

    async def similar_words(self, word: str, top_k: int) -> List[str]:
        """
        Find the stored tokens most similar to a word.

        An empty store or top_k == 0 returns an empty list without calling
        the provider.

        Raises:
            ProviderError: If the provider request fails
            DeserializationError: If the response is malformed
            DimensionMismatchError: If the provider returns the wrong length
            ValueError: If top_k is negative
        """
        if top_k < 0:
            raise ValueError(f"top_k must be non-negative, got {top_k}")
        if top_k == 0 or not self._labels:
            return []

        vector = await self._provider.embed_word(word)
        return self.find_similar(vector, top_k)
