"""Tests for config loading and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from kiloview.runtime import config


class ViewerConfigTests(unittest.TestCase):
    def _load_with(self, payload: str | None) -> config.ViewerConfig:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if payload is not None:
                config_path.write_text(payload, encoding="utf-8")
            with mock.patch("kiloview.runtime.config.CONFIG_PATH", config_path):
                return config.load_viewer_config()

    def test_missing_file_yields_defaults(self) -> None:
        loaded = self._load_with(None)

        self.assertEqual(loaded, config.ViewerConfig())
        self.assertEqual(loaded.read_timeout_tenths, 1)
        self.assertEqual(loaded.read_timeout_ms, 100)
        self.assertEqual(loaded.quit_key, "q")
        self.assertEqual(loaded.log_level, "WARNING")

    def test_malformed_json_yields_defaults(self) -> None:
        self.assertEqual(self._load_with("{not json"), config.ViewerConfig())

    def test_non_object_json_yields_defaults(self) -> None:
        self.assertEqual(self._load_with("[1, 2, 3]"), config.ViewerConfig())

    def test_valid_values_are_used(self) -> None:
        loaded = self._load_with(json.dumps({"read_timeout_tenths": 3, "quit_key": "X", "log_level": "debug"}))

        self.assertEqual(loaded, config.ViewerConfig(read_timeout_tenths=3, quit_key="x", log_level="DEBUG"))
        self.assertEqual(loaded.read_timeout_ms, 300)

    def test_invalid_values_fall_back_individually(self) -> None:
        cases = [
            {"read_timeout_tenths": True},
            {"read_timeout_tenths": 0},
            {"read_timeout_tenths": 256},
            {"read_timeout_tenths": 1.5},
            {"quit_key": "qq"},
            {"quit_key": "1"},
            {"quit_key": 17},
            {"log_level": "LOUD"},
            {"log_level": 10},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                self.assertEqual(self._load_with(json.dumps(payload)), config.ViewerConfig())

    def test_coerce_log_level_normalizes_case(self) -> None:
        self.assertEqual(config.coerce_log_level(" info "), "INFO")
        self.assertEqual(config.coerce_log_level(None), "WARNING")


if __name__ == "__main__":
    unittest.main()
