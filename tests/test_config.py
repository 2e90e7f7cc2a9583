"""Unit tests for configuration loading."""

import json
import logging
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from zin.config import Config, Keybindings, Theme, configure_logging, default_config_path, load_config
from zin.highlighter import Category


class TestLoadConfig(unittest.TestCase):
    """Test reading the JSON configuration file."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = Path(self.temp_dir) / "config.json"

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def write(self, data):
        with open(self.config_file, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def test_missing_file_gives_defaults(self):
        config = load_config(self.config_file)
        self.assertEqual(config, Config())

    def test_defaults(self):
        keys = Keybindings()
        self.assertEqual(keys.insert_mode, 105)
        self.assertEqual(keys.visual_mode, 118)
        self.assertEqual(keys.normal_mode, 27)
        self.assertEqual(keys.yank, 121)
        self.assertEqual(keys.paste, 112)
        theme = Theme()
        self.assertEqual(theme.background, (24, 24, 24))
        self.assertEqual(theme.green, (115, 201, 54))

    def test_key_overrides(self):
        self.write({"keys": {"insert_mode": 97, "yank": "c"}})
        config = load_config(self.config_file)
        self.assertEqual(config.keys.insert_mode, 97)
        self.assertEqual(config.keys.yank, ord('c'))
        self.assertEqual(config.keys.paste, 112)

    def test_color_overrides(self):
        self.write({"colors": {"yellow": [1, 2, 3]}})
        config = load_config(self.config_file)
        self.assertEqual(config.theme.yellow, (1, 2, 3))
        self.assertEqual(config.theme.category_colors()[Category.KEYWORD], ((1, 2, 3), (24, 24, 24)))

    def test_invalid_values_fall_back(self):
        self.write({
            "keys": {"insert_mode": "too long", "visual_mode": True, "paste": -1},
            "colors": {"green": [1, 2], "orange": [0, 0, 256], "quartz": "red"},
        })
        with self.assertLogs('zin.config', level='WARNING') as logs:
            config = load_config(self.config_file)
        self.assertEqual(config, Config())
        self.assertEqual(len(logs.records), 6)

    def test_unknown_entries_are_ignored(self):
        self.write({"keys": {"quit": 113}, "plugins": {}})
        with self.assertLogs('zin.config', level='WARNING') as logs:
            config = load_config(self.config_file)
        self.assertEqual(config, Config())
        self.assertTrue(any("quit" in message for message in logs.output))
        self.assertTrue(any("plugins" in message for message in logs.output))

    def test_invalid_json(self):
        self.write("{not json")
        with self.assertLogs('zin.config', level='WARNING'):
            config = load_config(self.config_file)
        self.assertEqual(config, Config())

    def test_top_level_not_object(self):
        self.write([1, 2, 3])
        with self.assertLogs('zin.config', level='WARNING'):
            config = load_config(self.config_file)
        self.assertEqual(config, Config())

    def test_section_not_object(self):
        self.write({"keys": [105]})
        with self.assertLogs('zin.config', level='WARNING'):
            config = load_config(self.config_file)
        self.assertEqual(config.keys, Keybindings())

    def test_default_path_uses_platformdirs(self):
        with patch('zin.config.platformdirs.user_config_dir', return_value=self.temp_dir):
            self.assertEqual(default_config_path(), Path(self.temp_dir) / "config.json")

    def test_load_without_path_reads_default_location(self):
        self.write({"keys": {"paste": "P"}})
        with patch('zin.config.platformdirs.user_config_dir', return_value=self.temp_dir):
            config = load_config()
        self.assertEqual(config.keys.paste, ord('P'))


class TestThemeColors(unittest.TestCase):

    def test_every_category_has_colors(self):
        colors = Theme().category_colors()
        self.assertEqual(set(colors), set(Category))

    def test_mode_label_colors(self):
        theme = Theme()
        self.assertEqual(theme.mode_label_colors(True), (theme.background, theme.green))
        self.assertEqual(theme.mode_label_colors(False), (theme.background, theme.orange))


class TestConfigureLogging(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.logger = logging.getLogger('zin')
        self.saved_handlers = list(self.logger.handlers)
        self.saved_level = self.logger.level

    def tearDown(self):
        for handler in self.logger.handlers:
            if handler not in self.saved_handlers:
                handler.close()
        self.logger.handlers = self.saved_handlers
        self.logger.setLevel(self.saved_level)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_disabled_without_environment_variable(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(configure_logging())
        self.assertTrue(any(isinstance(h, logging.NullHandler) for h in self.logger.handlers))

    def test_logs_to_file_when_enabled(self):
        with patch.dict(os.environ, {"ZIN_LOG_LEVEL": "debug"}), \
                patch('zin.config.platformdirs.user_log_dir', return_value=self.temp_dir):
            log_path = configure_logging()
        self.assertEqual(log_path, Path(self.temp_dir) / "zin.log")
        self.assertEqual(self.logger.level, logging.DEBUG)

        logging.getLogger('zin.buffer').info("hello log")
        for handler in self.logger.handlers:
            handler.flush()
        self.assertIn("hello log", log_path.read_text(encoding='utf-8'))

    def test_unknown_level_defaults_to_info(self):
        with patch.dict(os.environ, {"ZIN_LOG_LEVEL": "chatty"}), \
                patch('zin.config.platformdirs.user_log_dir', return_value=self.temp_dir):
            configure_logging()
        self.assertEqual(self.logger.level, logging.INFO)


if __name__ == '__main__':
    unittest.main()
