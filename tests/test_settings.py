"""Tests for ReportSettings."""
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from savereport.settings import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    SETTING_REPORT_API,
    SETTING_REPORT_OVERALL,
    ReportSettings,
    find_config_path,
)


class ReportSettingsTest(unittest.TestCase):
    """Tests for ReportSettings and find_config_path()."""

    def test_missing_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = ReportSettings(Path(tmpdir) / CONFIG_FILE_NAME)

            self.assertIsNone(settings.get(SETTING_REPORT_API))
            self.assertTrue(settings.get(SETTING_REPORT_OVERALL, True))

    def test_nested_keys(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text('[report]\napi = true\noverall = false\n\n[logging]\npath = "run.log"\n')
            settings = ReportSettings(path)

            self.assertTrue(settings.get(SETTING_REPORT_API))
            self.assertFalse(settings.get(SETTING_REPORT_OVERALL, True))
            self.assertEqual('run.log', settings.get('logging.path'))
            self.assertEqual('fallback', settings.get('report.api.nested', 'fallback'))
            self.assertEqual(path, settings.path)

    def test_find_config_path(self):
        self.assertEqual(Path('explicit.toml'), find_config_path('explicit.toml'))

        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: '/etc/savereport.toml'}):
            self.assertEqual(Path('/etc/savereport.toml'), find_config_path())

        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(Path.cwd() / CONFIG_FILE_NAME, find_config_path())


if __name__ == '__main__':
    unittest.main()
