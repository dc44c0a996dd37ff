"""
Spatial index for nearest-neighbor search over embedding vectors.
"""

from .kdtree import KdTree, squared_euclidean

__all__ = [
    "KdTree",
    "squared_euclidean",
]
