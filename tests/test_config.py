import json
import os
import tempfile
import unittest
from unittest.mock import patch

from icon_converter.config import Config
from icon_converter.models.errors import InvalidSizeSet
from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize


class TestConfig(unittest.TestCase):

    def setUp(self):
        Config.reset()
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self._tmp.name, "icon_converter.json")

    def tearDown(self):
        Config.reset()
        self._tmp.cleanup()

    def write_config(self, settings):
        with open(self.config_path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh)

    def test_singleton(self):
        self.assertIs(Config(self.config_path), Config())

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults_without_file(self):
        config = Config(self.config_path)
        self.assertEqual(config.get_default_sizes(), DEFAULT_SIZES)
        self.assertEqual(config.get_max_image_dimension(), 4096)
        self.assertIsNone(config.get_log_dir())
        self.assertEqual(config.get("missing", "fallback"), "fallback")

    @patch.dict(os.environ, {}, clear=True)
    def test_json_settings(self):
        self.write_config({"default_sizes": [48, 16], "max_image_dimension": 1024, "log_dir": "logs"})

        config = Config(self.config_path)

        self.assertEqual(config.get_default_sizes(), (IconSize.SIZE_16, IconSize.SIZE_48))
        self.assertEqual(config.get_max_image_dimension(), 1024)
        self.assertEqual(config.get_log_dir(), "logs")

    @patch.dict(os.environ, {"DEFAULT_SIZES": "256,32", "MAX_IMAGE_DIMENSION": "2048"}, clear=True)
    def test_environment_variables(self):
        config = Config(self.config_path)
        self.assertEqual(config.get_default_sizes(), (IconSize.SIZE_32, IconSize.SIZE_256))
        self.assertEqual(config.get_max_image_dimension(), 2048)

    @patch.dict(os.environ, {"MAX_IMAGE_DIMENSION": "2048"}, clear=True)
    def test_json_wins_over_environment(self):
        self.write_config({"max_image_dimension": 512})
        self.assertEqual(Config(self.config_path).get_max_image_dimension(), 512)

    @patch.dict(os.environ, {}, clear=True)
    def test_invalid_default_sizes(self):
        self.write_config({"default_sizes": [16, 20]})
        with self.assertRaises(InvalidSizeSet):
            Config(self.config_path).get_default_sizes()

    @patch.dict(os.environ, {}, clear=True)
    def test_malformed_file_is_not_cached(self):
        with open(self.config_path, "w", encoding="utf-8") as fh:
            fh.write("{not json")

        with self.assertRaises(ValueError):
            Config(self.config_path)
        with self.assertRaises(ValueError):
            Config(self.config_path)

        self.write_config({"max_image_dimension": 256})
        self.assertEqual(Config(self.config_path).get_max_image_dimension(), 256)

    @patch.dict(os.environ, {}, clear=True)
    def test_non_object_json(self):
        self.write_config([16, 32])
        with self.assertRaises(ValueError):
            Config(self.config_path)

    @patch.dict(os.environ, {}, clear=True)
    def test_config_path_from_environment(self):
        self.write_config({"log_dir": "from-env-path"})
        with patch.dict(os.environ, {"ICON_CONVERTER_CONFIG": self.config_path}):
            self.assertEqual(Config().get_log_dir(), "from-env-path")


if __name__ == '__main__':
    unittest.main()
