import threading
import time
import unittest

from streaming_nqueens.solutions import (
    KNOWN_SOLUTION_COUNTS,
    UnsupportedBoardSize,
    expected_solutions,
)
from streaming_nqueens.termination import MonitorState, RemainingCounter, TerminationMonitor


class RemainingCounterTests(unittest.TestCase):
    def test_decrement_returns_previous_value(self):
        counter = RemainingCounter(2)
        self.assertEqual(counter.decrement(), 2)
        self.assertEqual(counter.decrement(), 1)
        self.assertEqual(counter.value, 0)

    def test_negative_initial_value_is_rejected(self):
        with self.assertRaises(ValueError):
            RemainingCounter(-1)

    def test_concurrent_decrements_reach_zero_exactly(self):
        counter = RemainingCounter(8 * 500)
        seen = []
        lock = threading.Lock()

        def worker():
            values = [counter.decrement() for _ in range(500)]
            with lock:
                seen.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(counter.value, 0)
        self.assertEqual(sorted(seen), list(range(1, 8 * 500 + 1)))

    def test_wait_for_zero_times_out(self):
        counter = RemainingCounter(1)
        self.assertFalse(counter.wait_for_zero(timeout=0.01))


class TerminationMonitorTests(unittest.TestCase):
    def test_zero_count_is_done_immediately(self):
        monitor = TerminationMonitor(RemainingCounter(0), poll_interval=5.0)
        start = time.perf_counter()
        self.assertTrue(monitor.wait())
        self.assertLess(time.perf_counter() - start, 1.0)
        self.assertIs(monitor.state, MonitorState.DONE)

    def test_wakes_on_last_decrement(self):
        counter = RemainingCounter(3)
        monitor = TerminationMonitor(counter, poll_interval=5.0)

        def consume():
            for _ in range(3):
                time.sleep(0.01)
                counter.decrement()

        thread = threading.Thread(target=consume)
        thread.start()
        start = time.perf_counter()
        self.assertTrue(monitor.wait())
        self.assertLess(time.perf_counter() - start, 2.0)
        thread.join()
        self.assertTrue(monitor.done)

    def test_abort_releases_waiter(self):
        counter = RemainingCounter(1)
        monitor = TerminationMonitor(counter, poll_interval=5.0)
        abort = threading.Event()

        def trigger():
            time.sleep(0.02)
            abort.set()
            counter.wake()

        thread = threading.Thread(target=trigger)
        thread.start()
        self.assertFalse(monitor.wait(abort=abort))
        thread.join()
        self.assertIs(monitor.state, MonitorState.WAITING)

    def test_timeout(self):
        monitor = TerminationMonitor(RemainingCounter(1), poll_interval=0.01)
        self.assertFalse(monitor.wait(timeout=0.05))
        self.assertFalse(monitor.done)

    def test_done_is_terminal_and_callbacks_fire_once(self):
        counter = RemainingCounter(1)
        monitor = TerminationMonitor(counter, poll_interval=0.01)
        calls = []
        monitor.on_done(lambda: calls.append("early"))
        counter.decrement()
        self.assertTrue(monitor.wait())
        self.assertTrue(monitor.wait())
        monitor.on_done(lambda: calls.append("late"))
        self.assertEqual(calls, ["early", "late"])

    def test_poll_interval_must_be_positive(self):
        with self.assertRaises(ValueError):
            TerminationMonitor(RemainingCounter(1), poll_interval=0)


class KnownCountsTests(unittest.TestCase):
    def test_table_covers_zero_to_fifteen(self):
        self.assertEqual(sorted(KNOWN_SOLUTION_COUNTS), list(range(16)))
        self.assertEqual(expected_solutions(4), 2)
        self.assertEqual(expected_solutions(8), 92)
        self.assertEqual(expected_solutions(15), 2279184)

    def test_unsupported_sizes(self):
        for size in (-1, 16, 100):
            with self.assertRaises(UnsupportedBoardSize):
                expected_solutions(size)
        with self.assertRaises(UnsupportedBoardSize):
            expected_solutions("8")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            expected_solutions(True)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
