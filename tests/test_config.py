"""Tests for the configuration loader and bootstrap."""

import json
import os
import tempfile
import unittest

from treefs.core import configure_logging, create_filesystem
from treefs.core.config_loader import Config, ConfigLoader, DEFAULT_CAPACITY_LIMIT, get_config
from treefs.exceptions import ConfigLoadError, ConfigValidationError
from treefs.logger import Logger, get_logger


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.loader = ConfigLoader()
        self.loader.reset()
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.addCleanup(self.loader.reset)

    def write_config(self, data) -> str:
        path = os.path.join(self._tmpdir.name, 'treefs.json')
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path


class TestConfig(ConfigTestCase):
    """Test the configuration system."""

    def test_default_config(self):
        config = Config()
        self.assertEqual(config.filesystem.capacity_limit, DEFAULT_CAPACITY_LIMIT)
        self.assertEqual(config.logging.level, "INFO")
        self.assertIsNone(config.logging.log_file)

    def test_loader_is_singleton(self):
        self.assertIs(ConfigLoader(), self.loader)

    def test_load_partial_file(self):
        path = self.write_config({'filesystem': {'capacity_limit': 2048}})
        config = self.loader.load(path)

        self.assertEqual(config.filesystem.capacity_limit, 2048)
        self.assertEqual(config.logging.level, "INFO")
        self.assertIs(get_config(), config)

    def test_load_missing_file(self):
        with self.assertRaises(ConfigLoadError) as ctx:
            self.loader.load(os.path.join(self._tmpdir.name, 'missing.json'))
        self.assertIn('config_path', ctx.exception.context)

    def test_load_invalid_json(self):
        path = self.write_config('{not json')
        with self.assertRaises(ConfigLoadError):
            self.loader.load(path)

    def test_load_invalid_values(self):
        path = self.write_config({'filesystem': {'capacity_limit': -1}})
        with self.assertRaises(ConfigValidationError):
            self.loader.load(path)
        self.assertEqual(get_config().filesystem.capacity_limit, DEFAULT_CAPACITY_LIMIT)

        path = self.write_config({'logging': {'level': 'LOUD'}})
        with self.assertRaises(ConfigValidationError) as ctx:
            self.loader.load(path)
        self.assertEqual(ctx.exception.key, 'logging.level')

    def test_get_and_set(self):
        self.assertEqual(self.loader.get('filesystem.capacity_limit'), DEFAULT_CAPACITY_LIMIT)
        self.assertEqual(self.loader.get('filesystem.nope', 'fallback'), 'fallback')

        self.loader.set('filesystem.capacity_limit', 10)
        self.assertEqual(get_config().filesystem.capacity_limit, 10)

    def test_set_rejects_bad_key_and_value(self):
        with self.assertRaises(ConfigValidationError):
            self.loader.set('filesystem.nope', 1)
        with self.assertRaises(ConfigValidationError):
            self.loader.set('nope.capacity_limit', 1)
        with self.assertRaises(ConfigValidationError):
            self.loader.set('filesystem.capacity_limit', 'big')
        self.assertEqual(get_config().filesystem.capacity_limit, DEFAULT_CAPACITY_LIMIT)

    def test_to_dict(self):
        self.assertEqual(
            self.loader.to_dict(),
            {
                'filesystem': {'capacity_limit': DEFAULT_CAPACITY_LIMIT},
                'logging': {'level': 'INFO', 'log_file': None, 'console_output': True},
            }
        )


class TestCreateFilesystem(ConfigTestCase):
    """Test building a namespace from configuration."""

    def test_uses_configured_capacity(self):
        path = self.write_config({
            'filesystem': {'capacity_limit': 3},
            'logging': {'console_output': False},
        })
        vfs = create_filesystem(path, init_logging=False)

        vfs.make_file('a')
        vfs.write_file('a', 'abc')
        self.assertEqual(vfs.get_available_space(), 0)

    def test_missing_file_falls_back_to_defaults(self):
        vfs = create_filesystem(
            os.path.join(self._tmpdir.name, 'missing.json'),
            init_logging=False
        )
        self.assertEqual(vfs.capacity_limit, DEFAULT_CAPACITY_LIMIT)

    def test_configure_logging_enables_buffer(self):
        self.loader.set('logging.console_output', False)
        configure_logging(get_config(), use_colors=False)

        get_logger('bootstrap').warning("configured", context={'step': 1})

        logs = Logger.get_recent_logs(subsystem='bootstrap')
        self.assertEqual(logs[-1]['message'], 'configured')
        self.assertEqual(logs[-1]['context'], {'step': 1})

    def test_invalid_file_still_raises(self):
        path = self.write_config('[')
        with self.assertRaises(ConfigLoadError):
            create_filesystem(path, init_logging=False)


if __name__ == '__main__':
    unittest.main()
