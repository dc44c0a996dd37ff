"""
Custom exceptions for the wordvec package.
"""

from typing import Optional


class WordVecError(Exception):
    """Base exception for all wordvec errors."""
    pass


class DimensionMismatchError(WordVecError, ValueError):
    """
    Vector length does not match the index dimension.

    Raised when:
    - A vector with the wrong number of components is inserted
    - A query vector has the wrong number of components
    - The embedding provider returns a vector of the wrong length
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vector dimension mismatch: expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class NonFiniteCoordinateError(WordVecError, ValueError):
    """
    Vector contains a NaN or infinite component.
    """

    def __init__(self, index: int, value: float):
        super().__init__(f"Non-finite coordinate at position {index}: {value!r}")
        self.index = index
        self.value = value


class ProviderError(WordVecError):
    """
    Error communicating with the embedding provider.

    Raised when:
    - Provider is unreachable
    - Transport fails mid-request
    - Provider returns a non-2xx response
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class DeserializationError(WordVecError):
    """
    Provider response does not have the expected shape.

    Raised when:
    - Response body is not valid JSON
    - The 'data' field is missing or not a list of numbers
    - A batch response holds a different number of vectors than requested
    """

    def __init__(self, message: str, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class ConfigError(WordVecError):
    """
    Error in store configuration.

    Raised when configuration values are missing, unparseable or out of range.
    """
    pass
