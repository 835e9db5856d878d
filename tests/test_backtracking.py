import unittest

from streaming_nqueens.backtracking import bt_all_solutions, bt_count_solutions
from streaming_nqueens.board import Board
from streaming_nqueens.solutions import KNOWN_SOLUTION_COUNTS
from streaming_nqueens.utils import is_valid_solution


class BacktrackingTests(unittest.TestCase):
    def test_counts_match_known_table(self):
        for size in range(0, 9):
            self.assertEqual(bt_count_solutions(size), KNOWN_SOLUTION_COUNTS[size], size)

    def test_four_queens_in_lexicographic_order(self):
        solutions, nodes, elapsed = bt_all_solutions(4)
        self.assertEqual([b.columns for b in solutions], [[2, 4, 1, 3], [3, 1, 4, 2]])
        self.assertGreater(nodes, 0)
        self.assertGreaterEqual(elapsed, 0.0)

    def test_solutions_are_valid_and_unique(self):
        solutions, _, _ = bt_all_solutions(7)
        self.assertTrue(all(is_valid_solution(b, 7) for b in solutions))
        self.assertEqual(len(set(solutions)), len(solutions))

    def test_zero_size_has_the_empty_solution(self):
        solutions, nodes, _ = bt_all_solutions(0)
        self.assertEqual(solutions, [Board()])
        self.assertEqual(nodes, 0)

    def test_time_limit(self):
        solutions, _, _ = bt_all_solutions(12, time_limit=0.0)
        self.assertIsNone(solutions)


if __name__ == "__main__":
    unittest.main()
