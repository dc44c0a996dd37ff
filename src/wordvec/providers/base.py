"""
Embedding provider interface.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class EmbeddingProvider(ABC):
    """
    Source of embedding vectors for tokens.

    Implementations return one vector per token. They do not know the
    store's dimension; length checks happen when vectors enter the index.
    """

    @abstractmethod
    async def embed_word(self, word: str) -> List[float]:
        """
        Fetch the embedding for a single token.

        Raises:
            ProviderError: If the provider cannot be reached or answers with an error
            DeserializationError: If the response has an unexpected shape
        """

    @abstractmethod
    async def embed_batch(self, words: Sequence[str]) -> List[List[float]]:
        """
        Fetch embeddings for several tokens in one request.

        Returns:
            One vector per returned entry, in request order. Callers must
            check the length against the request.

        Raises:
            ProviderError: If the provider cannot be reached or answers with an error
            DeserializationError: If the response has an unexpected shape
        """
