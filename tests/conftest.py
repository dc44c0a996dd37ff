"""
Shared test fixtures and configuration for pytest.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wordvec.core.exceptions import ProviderError
from wordvec.providers.base import EmbeddingProvider


logger = logging.getLogger(__name__)


# ============================================================================
# Test doubles
# ============================================================================

class FakeEmbeddingProvider(EmbeddingProvider):
    """
    In-memory embedding provider.

    Words listed in `vectors` get those vectors; other words get a
    deterministic vector derived from their characters. Every call is
    recorded so tests can inspect batching.
    """

    def __init__(
        self,
        vectors: Optional[Dict[str, Sequence[float]]] = None,
        dimension: int = 3,
        fail_on_batch: Optional[int] = None,
        fail_words: Sequence[str] = (),
    ):
        self.vectors = {word: list(vector) for word, vector in (vectors or {}).items()}
        self.dimension = dimension
        self.fail_on_batch = fail_on_batch
        self.fail_words = set(fail_words)
        self.word_calls: List[str] = []
        self.batch_calls: List[List[str]] = []

    def vector_for(self, word: str) -> List[float]:
        if word in self.vectors:
            return list(self.vectors[word])
        seed = sum(ord(c) * (i + 1) for i, c in enumerate(word))
        return [float((seed * (axis + 3)) % 101) for axis in range(self.dimension)]

    async def embed_word(self, word: str) -> List[float]:
        self.word_calls.append(word)
        if word in self.fail_words:
            raise ProviderError(f"embedding failed for {word!r}", endpoint="fake://")
        return self.vector_for(word)

    async def embed_batch(self, words: Sequence[str]) -> List[List[float]]:
        self.batch_calls.append(list(words))
        if self.fail_on_batch is not None and len(self.batch_calls) - 1 == self.fail_on_batch:
            raise ProviderError("batch request failed", endpoint="fake://list", status_code=503)
        return [self.vector_for(word) for word in words]


# ============================================================================
# Pytest hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Tests that take a long time to run")


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake_provider_cls():
    """Fixture exposing the fake provider class for custom construction."""
    return FakeEmbeddingProvider


@pytest.fixture
def color_vectors() -> Dict[str, List[float]]:
    """Embeddings placing 'red' then 'car' nearest to 'color'."""
    return {
        "car": [1.0, 1.0, 0.0],
        "red": [1.0, 0.2, 0.0],
        "bus": [5.0, 5.0, 5.0],
        "frog": [-5.0, 3.0, 9.0],
        "color": [1.0, 0.0, 0.0],
    }


@pytest.fixture
def color_provider(color_vectors) -> FakeEmbeddingProvider:
    """Fake provider seeded with the color vectors."""
    return FakeEmbeddingProvider(vectors=color_vectors, dimension=3)
