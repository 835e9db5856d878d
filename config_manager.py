"""Configuration management for the streaming N-Queens pipeline.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize pipeline settings and benchmark grids.

File format (high-level)
------------------------
- pipeline_settings: board size, expansion workers, reporters, poll interval.
- experiment_settings: benchmark N values, worker counts, runs per
  configuration, per-run timeout and output directory.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
import os
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_pipeline_settings(self):
        """Return pipeline settings (board size, workers, reporters, poll interval)."""
        return self.config.get("pipeline_settings", {})

    def get_experiment_settings(self):
        """Return benchmark settings (sizes, worker counts, runs, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_board_size(self, default=8):
        """Return the configured board size, or ``default`` when absent."""
        return int(self.get_pipeline_settings().get("board_size", default))

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
        print(f"Setting {section}.{key} = {value!r} saved to {self.config_path}")


def default_config_path():
    """Config path from ``STREAMING_NQUEENS_CONFIG`` or ``config.json``."""
    return os.environ.get("STREAMING_NQUEENS_CONFIG", "config.json")
