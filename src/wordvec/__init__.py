"""
wordvec - In-memory word embedding index

Maps tokens to embedding vectors fetched from an external embedding service
and answers "k most similar tokens" queries.

Key components:
- index/: Insert-only k-d tree under squared Euclidean distance
- providers/: Embedding provider interface and HTTP client
- store.py: VectorStore tying the index to its label table and provider
- core/: Types, exceptions, and logging utilities
- config/: Configuration loading (YAML, .env, environment)
"""

from .core.exceptions import (
    WordVecError,
    DimensionMismatchError,
    NonFiniteCoordinateError,
    ProviderError,
    DeserializationError,
    ConfigError,
)
from .core.logging import configure_logging
from .core.types import SearchHit, StoreConfig
from .config import load_config
from .index.kdtree import KdTree
from .providers import EmbeddingProvider, HttpEmbeddingProvider
from .store import VectorStore, split_tokens

__version__ = "0.1.0"

__all__ = [
    "VectorStore",
    "split_tokens",
    "KdTree",
    "EmbeddingProvider",
    "HttpEmbeddingProvider",
    "SearchHit",
    "StoreConfig",
    "load_config",
    "configure_logging",
    "WordVecError",
    "DimensionMismatchError",
    "NonFiniteCoordinateError",
    "ProviderError",
    "DeserializationError",
    "ConfigError",
]
