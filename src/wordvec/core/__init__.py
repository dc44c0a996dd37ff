"""
Core subpackage for wordvec.

Contains types, exceptions, and logging utilities.
"""

from .types import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DIMENSION,
    DEFAULT_ENDPOINT,
    SearchHit,
    StoreConfig,
)
from .exceptions import (
    WordVecError,
    DimensionMismatchError,
    NonFiniteCoordinateError,
    ProviderError,
    DeserializationError,
    ConfigError,
)

__all__ = [
    # Types
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_DIMENSION",
    "DEFAULT_ENDPOINT",
    "SearchHit",
    "StoreConfig",
    # Exceptions
    "WordVecError",
    "DimensionMismatchError",
    "NonFiniteCoordinateError",
    "ProviderError",
    "DeserializationError",
    "ConfigError",
]
