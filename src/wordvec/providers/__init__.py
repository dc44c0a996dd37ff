"""
Embedding provider clients.
"""

from .base import EmbeddingProvider
from .http_provider import HttpEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "HttpEmbeddingProvider",
]
