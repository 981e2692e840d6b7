"""
Tests for the n-tuple network: symmetries, pattern sampling and the value function.
"""

from unittest import TestCase, main

import numpy as np

from reinforce.network.network import PATTERNS, RANK_BASE, NTupleNetwork, Pattern
from reinforce.network.symmetry import dihedral_orderings, dihedral_step, reflect, rotate, transpose
from reinforce.network.weights import TABLE_SIZE, WeightStore
from twentyfortyeight.core.gameboard import Board

IDENTITY = np.arange(16).reshape(4, 4)


def random_board(rng: np.random.Generator) -> Board:
    """Board with random ranks in [0, 15)."""
    return Board(rng.integers(0, RANK_BASE, size=16))


class TestSymmetry(TestCase):
    """Test the dihedral group generation."""

    def test_primitives(self):
        """Reflection swaps columns, transpose swaps rows and columns, rotation turns clockwise."""
        np.testing.assert_array_equal(reflect(IDENTITY)[0], [3, 2, 1, 0])
        np.testing.assert_array_equal(transpose(IDENTITY)[0], [0, 4, 8, 12])
        np.testing.assert_array_equal(rotate(IDENTITY)[0], [12, 8, 4, 0])

    def test_closure(self):
        """Eight steps of the generation sequence return to the identity, not fewer."""
        grid = IDENTITY
        for step in range(8):
            grid = dihedral_step(grid, step)
            if step < 7:
                self.assertFalse(np.array_equal(grid, IDENTITY))
        np.testing.assert_array_equal(grid, IDENTITY)

    def test_orderings_are_distinct(self):
        """The eight orderings are distinct permutations, identity first."""
        orderings = dihedral_orderings(IDENTITY)
        self.assertEqual(len(orderings), 8)
        np.testing.assert_array_equal(orderings[0], IDENTITY)
        self.assertEqual(len({tuple(ordering.ravel()) for ordering in orderings}), 8)
        for ordering in orderings:
            self.assertEqual(sorted(ordering.ravel().tolist()), list(range(16)))


class TestPattern(TestCase):
    """Test pattern sampling."""

    def test_identity_positions(self):
        """The identity ordering samples the labeled cells in label order."""
        self.assertEqual(Pattern(PATTERNS[0]).positions[0].tolist(), [0, 1, 2, 3, 4, 5])
        self.assertEqual(Pattern(PATTERNS[3]).positions[0].tolist(), [4, 5, 6, 8, 9, 10])

    def test_orderings_distinct(self):
        """Each six-cell pattern has eight distinct orderings."""
        for labels in PATTERNS:
            pattern = Pattern(labels)
            self.assertEqual(pattern.positions.shape, (8, 6))
            self.assertEqual(len({tuple(row) for row in pattern.positions.tolist()}), 8)

    def test_code_most_significant_first(self):
        """Label 1 gives the most significant base-15 digit."""
        board = Board([1, 2, 3, 4, 5, 6] + [0] * 10)
        code = Pattern(PATTERNS[0]).codes(board.cells.ravel())[0]
        self.assertEqual(code, ((((1 * 15 + 2) * 15 + 3) * 15 + 4) * 15 + 5) * 15 + 6)

    def test_invalid_labels(self):
        """Labels must be 1..n without gaps or repeats."""
        with self.assertRaises(ValueError):
            Pattern([[1, 3, 0, 0], [0] * 4, [0] * 4, [0] * 4])


class TestNTupleNetwork(TestCase):
    """Test the value function."""

    def setUp(self):
        self.network = NTupleNetwork(WeightStore.init(len(PATTERNS)))
        self.rng = np.random.default_rng(42)

    def test_feature_index_bound(self):
        """Every code lies in [0, 15**6) for ranks below 15."""
        for _ in range(50):
            codes = self.network.feature_codes(random_board(self.rng))
            self.assertEqual(codes.shape, (4, 8))
            self.assertTrue(np.all(codes >= 0))
            self.assertTrue(np.all(codes < TABLE_SIZE))

    def test_rank_out_of_range(self):
        """A rank of 15 cannot be encoded."""
        board = Board([15] + [0] * 15)
        with self.assertRaises(ValueError):
            self.network.value(board)

    def test_zero_weights(self):
        """Zero tables give a zero value."""
        self.assertEqual(self.network.value(random_board(self.rng)), 0.0)

    def test_value_is_sum_of_lookups(self):
        """The value is the sum of the 32 addressed weights."""
        board = random_board(self.rng)
        codes = self.network.feature_codes(board)
        tables = self.network.weights.tables
        for index in range(4):
            tables[index, codes[index]] = self.rng.standard_normal(8).astype(np.float32)

        expected = sum(float(tables[index, code]) for index in range(4) for code in codes[index])
        self.assertAlmostEqual(self.network.value(board), expected, places=5)

    def test_single_weight_perturbation(self):
        """Moving one addressed weight by delta moves the value by exactly delta."""
        board = random_board(self.rng)
        codes = self.network.feature_codes(board)
        before = self.network.value(board)

        # ##>: Pick an ordering whose code is not shared with another ordering.
        ordering = next(s for s in range(8) if np.count_nonzero(codes[2] == codes[2, s]) == 1)
        self.network.weights.tables[2, codes[2, ordering]] += 0.5

        self.assertEqual(self.network.value(board) - before, 0.5)

    def test_orderings_are_separate_lookups(self):
        """Orderings are not collapsed: a weight counts once per ordering addressing it."""
        board = Board([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 1, 2])
        codes = self.network.feature_codes(board)
        self.network.weights.tables[0, codes[0, 0]] = 1.0
        self.assertEqual(self.network.value(board), 1.0)

    def test_update_addresses_each_cell_once(self):
        """Update writes delta once to every distinct addressed cell."""
        board = Board()
        self.network.update(board, 0.25)
        codes = self.network.feature_codes(board)

        # ##>: An empty board addresses code 0 in every ordering of every pattern.
        self.assertTrue(np.all(codes == 0))
        np.testing.assert_array_equal(self.network.weights.tables[:, 0], np.full(4, 0.25, dtype=np.float32))
        self.assertEqual(self.network.value(board), 32 * 0.25)

    def test_table_count_mismatch(self):
        """The store must hold one table per pattern."""
        with self.assertRaises(ValueError):
            NTupleNetwork(WeightStore.init(2, table_size=16))


if __name__ == '__main__':
    main()
