import unittest

from streaming_nqueens.board import Board, BoardInvariantError
from streaming_nqueens.generator import expand, initial_frontier, seed_boards


class ExpandTests(unittest.TestCase):
    def test_next_positions_for_corner_start(self):
        self.assertEqual(
            expand(Board(((1, 1),)), 4),
            [Board(((1, 1), (2, 3))), Board(((1, 1), (2, 4)))],
        )

    def test_each_candidate_appends_one_pruned_placement(self):
        size = 8
        board = Board.from_columns([2, 5, 7])
        last_column = board.columns[-1]
        candidates = expand(board, size)
        self.assertTrue(candidates)
        for candidate in candidates:
            self.assertEqual(len(candidate), len(board) + 1)
            self.assertEqual(candidate.placements[:-1], board.placements)
            row, column = candidate.last
            self.assertEqual(row, 4)
            self.assertNotIn(column, (last_column - 1, last_column, last_column + 1))
        self.assertEqual(
            sorted(c.last[1] for c in candidates),
            [c for c in range(1, size + 1) if abs(c - last_column) > 1],
        )

    def test_prune_does_not_guarantee_safety(self):
        # Column 1 is two columns away from row 2 but shares a column with row 1.
        candidates = expand(Board.from_columns([1, 3]), 5)
        self.assertIn(Board.from_columns([1, 3, 1]), candidates)

    def test_input_is_not_mutated(self):
        board = Board.from_columns([3])
        expand(board, 6)
        self.assertEqual(board, Board.from_columns([3]))

    def test_empty_result_for_non_positive_size(self):
        self.assertEqual(expand(Board.from_columns([1]), 0), [])
        self.assertEqual(expand(Board(), -3), [])

    def test_empty_board_yields_every_column(self):
        self.assertEqual([b.columns for b in expand(Board(), 3)], [[1], [2], [3]])

    def test_complete_board_cannot_be_expanded(self):
        with self.assertRaises(BoardInvariantError):
            expand(Board.from_columns([2, 4, 1, 3]), 4)


class FrontierTests(unittest.TestCase):
    def test_initial_frontier_for_four(self):
        expected = {
            Board(((1, 1), (2, 3))),
            Board(((1, 1), (2, 4))),
            Board(((1, 2), (2, 4))),
            Board(((1, 3), (2, 1))),
            Board(((1, 4), (2, 1))),
            Board(((1, 4), (2, 2))),
        }
        frontier = initial_frontier(4)
        self.assertEqual(len(frontier), 6)
        self.assertEqual(set(frontier), expected)

    def test_initial_frontier_for_tiny_boards(self):
        self.assertEqual(initial_frontier(0), [])
        self.assertEqual(initial_frontier(1), [])
        self.assertEqual(initial_frontier(2), [])

    def test_seed_boards(self):
        self.assertEqual(seed_boards(0), [Board()])
        self.assertEqual(seed_boards(1), [Board(((1, 1),))])
        self.assertEqual(seed_boards(5), initial_frontier(5))


if __name__ == "__main__":
    unittest.main()
