import unittest
from unittest.mock import patch

from animal_derby import config


class GetConfigTests(unittest.TestCase):
    def test_reads_nested_keys(self):
        fake = {"race": {"total_race_time": 20}, "modes": {"time_options": [5, 10]}}
        with patch.object(config, "BALANCE_CONFIG", fake):
            self.assertEqual(config.get_config("race.total_race_time"), 20)
            self.assertEqual(config.get_config("modes.time_options"), [5, 10])

    def test_missing_key_returns_default(self):
        with patch.object(config, "BALANCE_CONFIG", {"race": {}}), patch("builtins.print") as mock_print:
            self.assertEqual(config.get_config("race.unknown", 7), 7)
        mock_print.assert_called_once()

    def test_no_config_returns_default(self):
        with patch.object(config, "BALANCE_CONFIG", None):
            self.assertEqual(config.get_config("scoring.correct_points", 10), 10)


class LoadConfigTests(unittest.TestCase):
    def test_shipped_balance_file_loads(self):
        loaded = config.load_config(str(config.DEFAULT_CONFIG_PATH))
        self.assertEqual(loaded["race"]["total_race_time"], 20)
        self.assertEqual(loaded["display"]["max_visual_distance"], 3300)

    def test_missing_file_returns_none(self):
        with patch("builtins.print"):
            self.assertIsNone(config.load_config("/nonexistent/game_balance.json"))

    def test_malformed_file_returns_none(self):
        import tempfile
        import os

        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as handle:
            handle.write("{not json")
            path = handle.name
        try:
            with patch("builtins.print") as mock_print:
                self.assertIsNone(config.load_config(path))
            self.assertIn("FATAL ERROR", mock_print.call_args[0][0])
        finally:
            os.unlink(path)


if __name__ == "__main__":
    unittest.main()
