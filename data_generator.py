import json
import logging
import os
import re

import numpy as np

from path_core import DistanceMatrix

logger = logging.getLogger(__name__)

# Asymmetric 4-node example; the best 0 -> 3 path is 0, 2, 1, 3 (length 10)
EXAMPLE_DISTANCE_MATRIX = [
    [0, 2, 1, 14],
    [7, 0, 7, 8],
    [5, 1, 0, 2],
    [1, 3, 5, 0],
]


def load_distance_matrix(path):
    """
    Load a square distance matrix from disk.

    Supports:
        - .json: a list of rows, or an object with a "distance_matrix" key
        - .csv: comma-separated rows
        - anything else: whitespace-separated rows ('#' comments allowed)
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Distance matrix file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    try:
        if ext == ".json":
            with open(path, "r") as f:
                data = json.load(f)
            if isinstance(data, dict):
                if "distance_matrix" not in data:
                    raise ValueError("missing 'distance_matrix' key")
                data = data["distance_matrix"]
            rows = data
        elif ext == ".csv":
            rows = np.loadtxt(path, delimiter=",", ndmin=2)
        else:
            rows = np.loadtxt(path, comments="#", ndmin=2)
    except (ValueError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not parse distance matrix in {path}: {e}") from e

    matrix = DistanceMatrix(rows)
    logger.info("Loaded %d x %d distance matrix from %s", matrix.n, matrix.n, path)
    return matrix


def load_tsp_file(path):
    """
    TSPLIB coordinate loader.
    Reads the NODE_COORD_SECTION and returns a list of (x, y) tuples.
    """

    if not os.path.exists(path):
        raise FileNotFoundError(f"TSP file not found: {path}")

    with open(path, "r") as f:
        raw_lines = [l.strip() for l in f if l.strip()]

    start_index = None
    for i, line in enumerate(raw_lines):
        if "NODE_COORD_SECTION" in line.upper():
            start_index = i + 1
            break

    if start_index is None:
        raise ValueError(f"Could not find coordinate section in: {path}")

    coords = []
    for line in raw_lines[start_index:]:
        if line.upper().startswith("EOF"):
            break

        parts = re.split(r"\s+", line)
        if len(parts) < 3 or not re.match(r"^\d+$", parts[0]):
            continue

        try:
            coords.append((float(parts[1]), float(parts[2])))
        except ValueError:
            logger.warning("Skipping malformed line in %s: %s", path, line)

    if len(coords) == 0:
        raise ValueError(f"No coordinates parsed in: {path}")

    return coords


def matrix_from_coordinates(coords) -> DistanceMatrix:
    """Build a symmetric Euclidean distance matrix from (x, y) points."""
    points = np.asarray(coords, dtype=float)
    diff = points[:, None, :] - points[None, :, :]
    return DistanceMatrix(np.sqrt((diff ** 2).sum(axis=-1)))


def generate_random_matrix(n, low=1.0, high=100.0, symmetric=False, seed=None) -> DistanceMatrix:
    """
    Generate a random complete graph with a zero diagonal.

    Args:
        n: Number of cities
        low: Smallest edge weight
        high: Largest edge weight
        symmetric: Mirror the upper triangle so [i, j] == [j, i]
        seed: Seed for numpy's generator
    """
    rng = np.random.default_rng(seed)
    matrix = rng.uniform(low, high, size=(n, n))
    if symmetric:
        matrix = np.triu(matrix, 1)
        matrix = matrix + matrix.T
    np.fill_diagonal(matrix, 0.0)
    return DistanceMatrix(matrix)
