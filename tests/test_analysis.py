"""Tests for the benchmark harness, reporting and CLI wiring."""

import csv
import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config_manager import ConfigManager
from streaming_nqueens.analysis import cli, settings
from streaming_nqueens.analysis.experiments import run_benchmark, run_bt_baseline, run_single_pipeline_experiment
from streaming_nqueens.analysis.reporting import results_to_frame, save_raw_data_to_csv, save_results_to_csv
from streaming_nqueens.analysis.stats import (
    ProgressPrinter,
    attach_speedups,
    compute_detailed_statistics,
    summarize_runs,
)

_SETTING_NAMES = [
    "BOARD_SIZE", "NUM_WORKERS", "NUM_REPORTERS", "POLL_INTERVAL", "N_VALUES",
    "WORKER_COUNTS", "RUNS_PER_CONFIG", "RUN_TIMEOUT", "OUT_DIR", "DATE_IN_FILENAMES", "RUN_TAG",
]


def _record(n, workers, time, success=True, timeout=False):
    return {
        "n": n, "workers": workers, "reporters": workers, "solutions": 2, "expected": 2,
        "expanded": 10, "discarded": 4, "time": time, "success": success, "timeout": timeout,
    }


class _SettingsSandbox(unittest.TestCase):
    def setUp(self):
        self._saved = {name: getattr(settings, name) for name in _SETTING_NAMES}

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)


class StatsTests(unittest.TestCase):
    def test_detailed_statistics(self):
        stats = compute_detailed_statistics([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(stats["count"], 4)
        self.assertEqual(stats["mean"], 2.5)
        self.assertEqual(stats["median"], 2.5)
        self.assertEqual(stats["min"], 1.0)
        self.assertEqual(stats["max"], 4.0)
        self.assertEqual(stats["range"], 3.0)
        self.assertEqual(stats["q25"], 2.0)
        self.assertEqual(stats["q75"], 4.0)

    def test_empty_statistics(self):
        stats = compute_detailed_statistics([])
        self.assertEqual(stats["count"], 0)
        self.assertIsNone(stats["mean"])

    def test_summarize_and_speedup(self):
        per_workers = {
            1: summarize_runs([_record(6, 1, 0.4), _record(6, 1, 0.6)]),
            2: summarize_runs([_record(6, 2, 0.25), _record(6, 2, 0.25, success=False, timeout=True)]),
        }
        attach_speedups(per_workers)
        self.assertEqual(per_workers[1]["success_rate"], 1.0)
        self.assertEqual(per_workers[2]["timeouts"], 1)
        self.assertEqual(per_workers[2]["timeout_rate"], 0.5)
        self.assertAlmostEqual(per_workers[1]["speedup"], 1.0)
        self.assertAlmostEqual(per_workers[2]["speedup"], 2.0)

    def test_progress_printer(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            ProgressPrinter(4, "Bench").update(1, "N=4")
        self.assertEqual(buffer.getvalue(), "[Bench] 1/4 (25%) - N=4\n")


class ExperimentTests(_SettingsSandbox):
    def test_single_experiment_record(self):
        record = run_single_pipeline_experiment((4, 2, 2, 0.05, 30.0, True))
        self.assertTrue(record["success"])
        self.assertFalse(record["timeout"])
        self.assertEqual(record["solutions"], 2)
        self.assertEqual(record["expected"], 2)
        self.assertGreater(record["expanded"], 0)

    def test_baseline_cross_checks_expected_count(self):
        entry = run_bt_baseline(6, expected=4)
        self.assertEqual(entry["solutions"], 4)
        with self.assertRaises(AssertionError):
            run_bt_baseline(6, expected=5)

    def test_benchmark_and_reports(self):
        settings.POLL_INTERVAL = 0.05
        settings.DATE_IN_FILENAMES = False
        settings.RUN_TAG = "test"
        with redirect_stdout(io.StringIO()):
            results = run_benchmark([4, 5], [1, 2], runs=2, validate=True)
        self.assertEqual(sorted(results), [4, 5])
        self.assertEqual(results[5]["BT"]["solutions"], 10)
        self.assertEqual(results[4]["pipeline"][2]["total_runs"], 2)

        frame = results_to_frame(results)
        self.assertEqual(len(frame), 8)
        self.assertTrue(frame["success"].all())

        with tempfile.TemporaryDirectory() as tmpdir, redirect_stdout(io.StringIO()):
            aggregate = save_results_to_csv(results, tmpdir)
            raw = save_raw_data_to_csv(results, tmpdir)
            self.assertEqual(os.path.basename(aggregate), "results_pipeline_test.csv")
            with open(aggregate, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 4)
            self.assertEqual({row["n"] for row in rows}, {"4", "5"})
            self.assertTrue(Path(raw).stat().st_size > 0)


class PlotTests(_SettingsSandbox):
    def test_plot_all_writes_charts(self):
        from streaming_nqueens.analysis.plots import plot_all

        settings.DATE_IN_FILENAMES = False
        settings.RUN_TAG = None
        results = {}
        for n, base in ((4, 0.01), (6, 0.05), (8, 0.4)):
            per_workers = {
                1: summarize_runs([_record(n, 1, base), _record(n, 1, base * 1.1)]),
                2: summarize_runs([_record(n, 2, base / 1.8), _record(n, 2, base / 1.6)]),
            }
            attach_speedups(per_workers)
            results[n] = {"pipeline": per_workers, "BT": {"solutions": 2, "nodes": 100 * n, "time": base / 2}}

        with tempfile.TemporaryDirectory() as tmpdir, redirect_stdout(io.StringIO()):
            files = plot_all(results, tmpdir)
            self.assertEqual(len(files), 4)
            for fname in files:
                self.assertTrue(Path(fname).exists(), fname)
            self.assertEqual(os.path.basename(files[0]), "01_time_vs_N_log_scale.png")


class ConfigTests(_SettingsSandbox):
    def _write_config(self, tmpdir, payload):
        path = Path(tmpdir) / "config.json"
        path.write_text(json.dumps(payload))
        return str(path)

    def test_config_manager_round_trip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_config(tmpdir, {"pipeline_settings": {"board_size": 6}})
            mgr = ConfigManager(path)
            self.assertEqual(mgr.get_board_size(), 6)
            self.assertEqual(mgr.get_experiment_settings(), {})
            with redirect_stdout(io.StringIO()):
                mgr.update_setting("experiment_settings", "runs_per_config", 3)
            self.assertEqual(ConfigManager(path).get_experiment_settings(), {"runs_per_config": 3})

    def test_missing_config_file(self):
        with self.assertRaises(FileNotFoundError):
            ConfigManager("/nonexistent/config.json")

    def test_apply_configuration(self):
        payload = {
            "pipeline_settings": {"board_size": 6, "workers": 3, "reporters": 2, "poll_interval": 0.1},
            "experiment_settings": {"N_values": [4, 6], "worker_counts": [1, 3], "runs_per_config": 2,
                                    "run_timeout": None, "output_dir": "out"},
        }
        with tempfile.TemporaryDirectory() as tmpdir, redirect_stdout(io.StringIO()):
            cli.apply_configuration(self._write_config(tmpdir, payload))
        self.assertEqual(settings.BOARD_SIZE, 6)
        self.assertEqual(settings.NUM_WORKERS, 3)
        self.assertEqual(settings.effective_reporters(), 2)
        self.assertEqual(settings.POLL_INTERVAL, 0.1)
        self.assertEqual(settings.N_VALUES, [4, 6])
        self.assertEqual(settings.WORKER_COUNTS, [1, 3])
        self.assertIsNone(settings.RUN_TIMEOUT)
        self.assertEqual(settings.OUT_DIR, "out")


class CliTests(_SettingsSandbox):
    def test_parse_int_list(self):
        self.assertEqual(cli.parse_int_list(["4,6", "5", "6"]), [4, 5, 6])
        self.assertIsNone(cli.parse_int_list(None))
        with self.assertRaises(ValueError):
            cli.parse_int_list(["4,x"])

    def test_solve_command(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            cli.main(["solve", "--size", "4", "--workers", "2", "--poll-interval", "0.05", "--validate"])
        output = buffer.getvalue()
        self.assertEqual(output.count("Solution:\n"), 2)
        self.assertIn("Reported 2/2 solutions", output)
        self.assertIn("Validation passed", output)

    def test_unsupported_size_exits_with_error(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer), self.assertRaises(SystemExit) as ctx:
            cli.main(["solve", "--size", "42", "--quiet"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Configuration error", buffer.getvalue())

    def test_missing_explicit_config_exits(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.main(["--config", "/nonexistent/config.json"])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
