"""
Exact solver used as a reference for small instances.
Enumerates every ordering of the intermediate nodes.
"""

import itertools
from typing import Tuple

from path_core import DistanceMatrix, InvalidConfigurationError, Path, validate_endpoints

MAX_BRUTE_FORCE_CITIES = 10


def brute_force_shortest_path(distance_matrix, start_node: int, end_node: int) -> Tuple[Path, float]:
    """
    Find the optimal fixed-endpoint path by exhaustive search.

    Args:
        distance_matrix: DistanceMatrix or square array of weights
        start_node: First node of the path
        end_node: Last node of the path

    Returns:
        (best_path, best_length)
    """
    if not isinstance(distance_matrix, DistanceMatrix):
        distance_matrix = DistanceMatrix(distance_matrix)

    n = distance_matrix.city_count
    validate_endpoints(n, start_node, end_node)
    if n > MAX_BRUTE_FORCE_CITIES:
        raise InvalidConfigurationError(
            f"Brute force is limited to {MAX_BRUTE_FORCE_CITIES} cities, got {n}"
        )

    intermediates = [c for c in range(n) if c != start_node and c != end_node]

    best_nodes = None
    best_length = float("inf")
    for order in itertools.permutations(intermediates):
        nodes = [start_node, *order, end_node]
        length = distance_matrix.path_length(nodes)
        if length < best_length:
            best_length = length
            best_nodes = nodes

    return Path(best_nodes, distance_matrix), best_length
