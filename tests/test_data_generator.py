#!/usr/bin/env python3
"""
Unit tests for matrix loading and generation
"""

import json
import os
import sys
import tempfile
import unittest

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from data_generator import (
    EXAMPLE_DISTANCE_MATRIX,
    generate_random_matrix,
    load_distance_matrix,
    load_tsp_file,
    matrix_from_coordinates,
)
from path_core import DistanceMatrix, InvalidConfigurationError


class TestLoadDistanceMatrix(unittest.TestCase):
    """Test reading matrices from disk"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w") as f:
            f.write(content)
        return path

    def test_json_list(self):
        path = self.write("m.json", json.dumps(EXAMPLE_DISTANCE_MATRIX))
        matrix = load_distance_matrix(path)
        self.assertIsInstance(matrix, DistanceMatrix)
        np.testing.assert_array_equal(matrix.matrix, np.array(EXAMPLE_DISTANCE_MATRIX, dtype=float))

    def test_json_object(self):
        path = self.write("m.json", json.dumps({"distance_matrix": EXAMPLE_DISTANCE_MATRIX}))
        self.assertEqual(load_distance_matrix(path).city_count, 4)

    def test_json_object_missing_key(self):
        path = self.write("m.json", json.dumps({"rows": EXAMPLE_DISTANCE_MATRIX}))
        with self.assertRaises(ValueError):
            load_distance_matrix(path)

    def test_invalid_json(self):
        path = self.write("m.json", "[[0, 1], [1,")
        with self.assertRaises(ValueError):
            load_distance_matrix(path)

    def test_csv(self):
        path = self.write("m.csv", "0,2.5,1\n3,0,4\n1,1,0\n")
        matrix = load_distance_matrix(path)
        self.assertEqual(matrix.get_distance_by_index(0, 1), 2.5)
        self.assertEqual(matrix.get_distance_by_index(1, 2), 4.0)

    def test_whitespace_text(self):
        path = self.write("m.txt", "# example\n0 2 1 14\n7 0 7 8\n5 1 0 2\n1 3 5 0\n")
        matrix = load_distance_matrix(path)
        self.assertEqual(matrix.path_length([0, 2, 1, 3]), 10.0)

    def test_non_square_file(self):
        path = self.write("m.txt", "0 1 2\n1 0 3\n")
        with self.assertRaises(InvalidConfigurationError):
            load_distance_matrix(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_distance_matrix(os.path.join(self.tmpdir.name, "nope.csv"))


class TestTSPLoader(unittest.TestCase):
    """Test TSPLIB coordinates"""

    def test_load_and_convert(self):
        content = "\n".join([
            "NAME : tiny",
            "TYPE : TSP",
            "DIMENSION : 3",
            "EDGE_WEIGHT_TYPE : EUC_2D",
            "NODE_COORD_SECTION",
            "1 0 0",
            "2 3 4",
            "3 0 4",
            "EOF",
        ])
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "tiny.tsp")
            with open(path, "w") as f:
                f.write(content)
            coords = load_tsp_file(path)

        self.assertEqual(coords, [(0.0, 0.0), (3.0, 4.0), (0.0, 4.0)])
        matrix = matrix_from_coordinates(coords)
        self.assertAlmostEqual(matrix.get_distance_by_index(0, 1), 5.0)
        self.assertAlmostEqual(matrix.get_distance_by_index(1, 2), 3.0)
        self.assertAlmostEqual(matrix.get_distance_by_index(2, 2), 0.0)

    def test_missing_section(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.tsp")
            with open(path, "w") as f:
                f.write("NAME : bad\nEOF\n")
            with self.assertRaises(ValueError):
                load_tsp_file(path)


class TestGenerateRandomMatrix(unittest.TestCase):
    """Test random graph generation"""

    def test_shape_and_diagonal(self):
        matrix = generate_random_matrix(6, seed=0)
        self.assertEqual(matrix.city_count, 6)
        np.testing.assert_array_equal(np.diag(matrix.matrix), np.zeros(6))

    def test_weights_in_range(self):
        matrix = generate_random_matrix(6, low=5, high=10, seed=1)
        off_diagonal = matrix.matrix[~np.eye(6, dtype=bool)]
        self.assertTrue(np.all(off_diagonal >= 5))
        self.assertTrue(np.all(off_diagonal <= 10))

    def test_symmetric(self):
        matrix = generate_random_matrix(7, symmetric=True, seed=2)
        np.testing.assert_array_equal(matrix.matrix, matrix.matrix.T)

    def test_seed_is_reproducible(self):
        a = generate_random_matrix(5, seed=3)
        b = generate_random_matrix(5, seed=3)
        np.testing.assert_array_equal(a.matrix, b.matrix)


if __name__ == '__main__':
    unittest.main()
