"""
Shortest Path GA - Core Module
Contains the fundamental data structures for representing the fixed-endpoint path problem.
"""

import numpy as np
from typing import Iterable, List, Sequence


class InvalidConfigurationError(ValueError):
    """Raised when a run cannot start because its inputs are degenerate."""


def validate_endpoints(city_count: int, start_node: int, end_node: int):
    """
    Check that start/end form a usable pair for a graph of `city_count` nodes.

    Raises:
        InvalidConfigurationError: if fewer than two cities exist, an endpoint
            is not an integer in range, or both endpoints are the same node.
    """
    if city_count < 2:
        raise InvalidConfigurationError(
            f"At least 2 cities are required, got {city_count}"
        )

    for label, node in (("start_node", start_node), ("end_node", end_node)):
        if isinstance(node, bool) or not isinstance(node, (int, np.integer)):
            raise InvalidConfigurationError(f"{label} must be an integer, got {node!r}")
        if not 0 <= node < city_count:
            raise InvalidConfigurationError(
                f"{label}={node} is outside 0..{city_count - 1}"
            )

    if start_node == end_node:
        raise InvalidConfigurationError(
            f"start_node and end_node must differ (both are {start_node})"
        )


class DistanceMatrix:
    """Read-only square matrix of edge weights; [i, j] is the cost of i -> j."""

    def __init__(self, matrix):
        data = np.array(matrix, dtype=float)

        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise InvalidConfigurationError(
                f"Distance matrix must be square, got shape {data.shape}"
            )
        if data.shape[0] == 0:
            raise InvalidConfigurationError("Distance matrix is empty")
        if not np.all(np.isfinite(data)):
            raise InvalidConfigurationError("Distance matrix contains non-finite values")

        data.flags.writeable = False
        self.matrix = data
        self.n = data.shape[0]

    @property
    def city_count(self) -> int:
        return self.n

    def get_distance_by_index(self, i: int, j: int) -> float:
        """Get the weight of the directed edge i -> j."""
        return float(self.matrix[i, j])

    def path_length(self, nodes: Sequence[int]) -> float:
        """Sum of edge weights along consecutive pairs of `nodes`."""
        if len(nodes) < 2:
            return 0.0
        idx = np.asarray(nodes, dtype=int)
        return float(self.matrix[idx[:-1], idx[1:]].sum())

    def __len__(self):
        return self.n

    def __repr__(self):
        return f"DistanceMatrix(cities={self.n})"


class Path:
    """Represents a candidate path (individual) as an ordered sequence of node indices."""

    def __init__(self, nodes: Iterable[int], distance_matrix: DistanceMatrix):
        self.nodes: List[int] = [int(n) for n in nodes]
        self.distance_matrix = distance_matrix
        self._distance = None

    def get_total_distance(self) -> float:
        """Calculate the total length of the path (its fitness, lower is better)."""
        if self._distance is not None:
            return self._distance

        self._distance = self.distance_matrix.path_length(self.nodes)
        return self._distance

    def clone(self) -> 'Path':
        """Create an independent copy of the path."""
        return Path(self.nodes.copy(), self.distance_matrix)

    def invalidate_cache(self):
        """Invalidate the cached length."""
        self._distance = None

    def swap(self, i: int, j: int):
        self.nodes[i], self.nodes[j] = self.nodes[j], self.nodes[i]
        self.invalidate_cache()

    def is_valid(self, start_node: int, end_node: int) -> bool:
        """True if this is a permutation of all nodes from start_node to end_node."""
        n = self.distance_matrix.city_count
        return (
            len(self.nodes) == n
            and self.nodes[0] == start_node
            and self.nodes[-1] == end_node
            and sorted(self.nodes) == list(range(n))
        )

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self.nodes == other.nodes

    def __repr__(self):
        return f"Path({self.nodes}, distance={self.get_total_distance():.2f})"

    def __str__(self):
        return " -> ".join(str(n) for n in self.nodes)

    def __getitem__(self, index):
        return self.nodes[index]

    def __setitem__(self, index, value):
        self.nodes[index] = value
        self.invalidate_cache()
