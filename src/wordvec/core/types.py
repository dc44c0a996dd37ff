"""
Core data types for the wordvec package.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional


DEFAULT_ENDPOINT = "https://embidded-serever.onrender.com/"
DEFAULT_DIMENSION = 384
DEFAULT_BATCH_SIZE = 20


@dataclass
class StoreConfig:
    """
    Configuration for a vector store and its embedding provider.

    Attributes:
        endpoint: Base URL of the embedding provider (batch requests go to
            '{endpoint}list', so it normally ends with a slash)
        dimension: Length of every embedding vector
        batch_size: Number of tokens per batched embedding request
        timeout_seconds: HTTP timeout; None disables timeouts
        log_level: Level applied by configure_logging
    """
    endpoint: str = DEFAULT_ENDPOINT
    dimension: int = DEFAULT_DIMENSION
    batch_size: int = DEFAULT_BATCH_SIZE
    timeout_seconds: Optional[float] = None
    log_level: int = logging.INFO

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "endpoint": self.endpoint,
            "dimension": self.dimension,
            "batch_size": self.batch_size,
            "timeout_seconds": self.timeout_seconds,
            "log_level": logging.getLevelName(self.log_level),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        """Create from dictionary."""
        log_level = data.get("log_level", logging.INFO)
        if isinstance(log_level, str):
            log_level = logging.getLevelName(log_level.upper())
        return cls(
            endpoint=data.get("endpoint", DEFAULT_ENDPOINT),
            dimension=data.get("dimension", DEFAULT_DIMENSION),
            batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
            timeout_seconds=data.get("timeout_seconds"),
            log_level=log_level,
        )


@dataclass
class SearchHit:
    """
    A single nearest-neighbor result with its label resolved.

    Attributes:
        rank: 1-based position in the result list
        handle: Index handle of the stored vector
        label: Token stored under the handle
        distance: Squared Euclidean distance to the query vector
    """
    rank: int
    handle: int
    label: str
    distance: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rank": self.rank,
            "handle": self.handle,
            "label": self.label,
            "distance": self.distance,
        }
