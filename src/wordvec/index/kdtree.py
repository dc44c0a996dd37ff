"""
KdTree - Insert-only k-d tree for nearest-neighbor search.

Implements:
- Insertion of (vector, handle) pairs with axis cycling by depth
- Top-K nearest neighbors under squared Euclidean distance
- Radius search
- Deterministic ordering with tie-breaks on handle

The tree is never rebalanced. Well-distributed data gives sub-linear queries;
sorted or collinear insertion orders degrade towards a linear scan.
"""

import heapq
import math
from typing import List, Optional, Sequence, Tuple

from ..core.exceptions import DimensionMismatchError, NonFiniteCoordinateError


def squared_euclidean(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Compute the squared Euclidean distance between two vectors.

    Args:
        vec_a: First vector
        vec_b: Second vector

    Returns:
        Sum of squared component differences

    Raises:
        DimensionMismatchError: If vectors have different lengths
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatchError(len(vec_a), len(vec_b))

    return sum((a - b) * (a - b) for a, b in zip(vec_a, vec_b))


class _Node:
    __slots__ = ("point", "handle", "axis", "left", "right")

    def __init__(self, point: Tuple[float, ...], handle: int, axis: int):
        self.point = point
        self.handle = handle
        self.axis = axis
        self.left: Optional["_Node"] = None
        self.right: Optional["_Node"] = None


class KdTree:
    """
    Spatial index over fixed-dimension float vectors.

    Each vector is stored with an integer handle chosen by the caller. The
    tree never looks at what a handle means; duplicate vectors and duplicate
    handles are stored as separate entries.

    Example:
        >>> tree = KdTree(dimension=2)
        >>> tree.insert([0.0, 0.0], 0)
        >>> tree.insert([3.0, 4.0], 1)
        >>> tree.query([1.0, 1.0], k=1)
        [(2.0, 0)]
    """

    def __init__(self, dimension: int):
        """
        Initialize an empty tree.

        Args:
            dimension: Number of components in every stored vector

        Raises:
            ValueError: If dimension is not a positive integer
        """
        if isinstance(dimension, bool) or not isinstance(dimension, int) or dimension <= 0:
            raise ValueError(f"dimension must be a positive integer, got {dimension!r}")

        self._dimension = dimension
        self._root: Optional[_Node] = None
        self._size = 0

    @property
    def dimension(self) -> int:
        """Number of components per vector."""
        return self._dimension

    def size(self) -> int:
        """Number of stored entries."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def insert(self, vector: Sequence[float], handle: int) -> None:
        """
        Insert a vector under the given handle.

        The vector is validated before the tree is touched, so a rejected
        vector leaves the tree unchanged.

        Args:
            vector: Vector of exactly `dimension` finite floats
            handle: Integer handle returned by queries for this entry

        Raises:
            DimensionMismatchError: If len(vector) != dimension
            NonFiniteCoordinateError: If any component is NaN or infinite
        """
        point = self.validate(vector)

        if self._root is None:
            self._root = _Node(point, handle, 0)
            self._size = 1
            return

        node = self._root
        while True:
            if point[node.axis] < node.point[node.axis]:
                if node.left is None:
                    node.left = _Node(point, handle, (node.axis + 1) % self._dimension)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(point, handle, (node.axis + 1) % self._dimension)
                    break
                node = node.right

        self._size += 1

    def query(self, vector: Sequence[float], k: int) -> List[Tuple[float, int]]:
        """
        Find the k nearest stored entries.

        Args:
            vector: Query vector of exactly `dimension` floats
            k: Maximum number of results

        Returns:
            Up to min(k, size) (squared_distance, handle) pairs, nearest
            first, equal distances ordered by lower handle. An empty tree
            returns an empty list.

        Raises:
            DimensionMismatchError: If len(vector) != dimension
            NonFiniteCoordinateError: If any component is NaN or infinite
            ValueError: If k is negative
        """
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")

        target = self.validate(vector)

        if k == 0 or self._root is None:
            return []

        # Max-heap of the k best as (-distance, -handle); heap[0] is the worst kept.
        best: List[Tuple[float, int]] = []
        stack: List[Tuple[_Node, float]] = [(self._root, 0.0)]

        while stack:
            node, bound = stack.pop()
            if len(best) == k and bound > -best[0][0]:
                continue

            distance = squared_euclidean(target, node.point)
            candidate = (-distance, -node.handle)
            if len(best) < k:
                heapq.heappush(best, candidate)
            elif (distance, node.handle) < (-best[0][0], -best[0][1]):
                heapq.heapreplace(best, candidate)

            diff = target[node.axis] - node.point[node.axis]
            if diff < 0:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left

            if far is not None:
                stack.append((far, max(bound, diff * diff)))
            if near is not None:
                stack.append((near, bound))

        return sorted((-neg_distance, -neg_handle) for neg_distance, neg_handle in best)

    def within(self, vector: Sequence[float], radius: float) -> List[Tuple[float, int]]:
        """
        Find every stored entry within a squared distance of the query.

        Args:
            vector: Query vector of exactly `dimension` floats
            radius: Maximum squared Euclidean distance (inclusive)

        Returns:
            (squared_distance, handle) pairs, nearest first, ties by handle

        Raises:
            DimensionMismatchError: If len(vector) != dimension
            ValueError: If radius is negative
        """
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        target = self.validate(vector)
        found: List[Tuple[float, int]] = []

        stack: List[_Node] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()

            distance = squared_euclidean(target, node.point)
            if distance <= radius:
                found.append((distance, node.handle))

            diff = target[node.axis] - node.point[node.axis]
            if diff < 0:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left

            if near is not None:
                stack.append(near)
            if far is not None and diff * diff <= radius:
                stack.append(far)

        found.sort()
        return found

    def validate(self, vector: Sequence[float]) -> Tuple[float, ...]:
        """
        Check a vector against this tree without inserting it.

        Returns:
            The vector as a tuple of floats

        Raises:
            DimensionMismatchError: If len(vector) != dimension
            NonFiniteCoordinateError: If any component is NaN or infinite
        """
        if len(vector) != self._dimension:
            raise DimensionMismatchError(self._dimension, len(vector))

        point = tuple(float(component) for component in vector)
        for position, component in enumerate(point):
            if not math.isfinite(component):
                raise NonFiniteCoordinateError(position, component)

        return point
