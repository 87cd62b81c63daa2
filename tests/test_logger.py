"""Test the logging system."""

import logging
import unittest

from treefs.core.config_loader import ConfigLoader
from treefs.exceptions import OutOfMemoryError
from treefs.filesystem import VirtualFileSystem
from treefs.logger import LogBufferHandler, LogFormatter, LogLevel, Logger, get_logger


class TestLogger(unittest.TestCase):

    def setUp(self):
        ConfigLoader().reset()
        self.handler = LogBufferHandler()
        self.handler.setLevel(LogLevel.DEBUG)
        self.root = logging.getLogger('treefs')
        self.previous_level = self.root.level
        self.root.setLevel(LogLevel.DEBUG)
        self.root.addHandler(self.handler)

    def tearDown(self):
        self.root.removeHandler(self.handler)
        self.root.setLevel(self.previous_level)

    def test_logger_is_per_subsystem_singleton(self):
        self.assertIs(Logger('test1'), Logger('test1'))
        self.assertIs(get_logger('test1'), Logger('test1'))
        self.assertIsNot(Logger('test1'), Logger('test2'))

    def test_log_levels(self):
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertTrue(LogLevel.DEBUG < LogLevel.WARNING)

    def test_context_is_recorded(self):
        get_logger('unit').info("hello", context={'path': '/a'})

        logs = self.handler.get_logs(subsystem='unit')
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['message'], 'hello')
        self.assertEqual(logs[0]['level'], 'INFO')
        self.assertEqual(logs[0]['context'], {'path': '/a'})

    def test_filtering_and_clear(self):
        log = get_logger('unit')
        log.debug("one")
        log.warning("two")

        self.assertEqual([l['message'] for l in self.handler.get_logs(level='WARNING')], ['two'])
        self.assertEqual(len(self.handler.get_logs(limit=1)), 1)
        self.handler.clear()
        self.assertEqual(self.handler.get_logs(), [])

    def test_vfs_logs_mutations_and_refusals(self):
        vfs = VirtualFileSystem(capacity_limit=1)
        vfs.make_directory('/d')
        vfs.make_file('/d/f')
        with self.assertRaises(OutOfMemoryError):
            vfs.write_file('/d/f', 'too big')

        debug = self.handler.get_logs(level='DEBUG', subsystem='vfs')
        self.assertIn({'path': '/d'}, [l['context'] for l in debug])

        warnings = self.handler.get_logs(level='WARNING', subsystem='vfs')
        self.assertEqual(len(warnings), 1)
        self.assertEqual(warnings[0]['context']['requested'], 7)

    def test_formatter(self):
        record = logging.LogRecord('treefs.vfs', logging.INFO, __file__, 1, 'Created', None, None)
        record.subsystem = 'vfs'
        record.context = {'path': '/a'}

        line = LogFormatter(use_colors=False).format(record)

        self.assertIn('INFO', line)
        self.assertIn('[vfs] Created {path=/a}', line)


if __name__ == '__main__':
    unittest.main()
