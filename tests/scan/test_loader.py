"""Tests for reading run descriptions."""
import datetime
import json
import tempfile
import unittest
from pathlib import Path

from savereport import Decision, Os, ScanChange
from savereport.scan.loader import load_run, parse_run


RUN = {
    'games': [
        {
            'name': 'foo',
            'decision': 'Ignored',
            'restoring': True,
            'enabled': False,
            'files': [
                {'path': '/backup/a', 'size': 3, 'hash': 'x', 'change': 'New', 'originalPath': '/a',
                 'failed': True},
                {'path': '/backup/b', 'ignored': True},
            ],
            'registry': [
                {'path': 'HKEY_CURRENT_USER/Key', 'change': 'Same', 'failed': True,
                 'values': {'Value': {'change': 'Different', 'ignored': True}}},
            ],
        },
    ],
    'backups': {
        'foo': [{'name': 'b1', 'when': '2024-01-02T03:04:05Z', 'os': 'mac', 'comment': 'c', 'locked': True}],
    },
    'foundTitles': ['X'],
    'unknownGames': ['missing'],
    'cloudConflict': True,
    'cloudSyncFailed': True,
    'cloud': [{'path': '/a', 'change': 'Different'}],
}


class LoaderTest(unittest.TestCase):
    """Tests for parse_run() and load_run()."""

    def test_empty_run(self):
        run = parse_run({})

        self.assertEqual([], run.games)
        self.assertEqual({}, run.backups)
        self.assertFalse(run.cloud_conflict)

    def test_full_run(self):
        run = parse_run(RUN)

        self.assertEqual(1, len(run.games))
        game = run.games[0]
        self.assertEqual('foo', game.scan_info.game_name)
        self.assertEqual(Decision.IGNORED, game.decision)
        self.assertFalse(game.enabled)
        self.assertTrue(game.scan_info.restoring)
        self.assertEqual({'/backup/a'}, game.backup_info.failed_files)
        self.assertEqual({'HKEY_CURRENT_USER/Key'}, game.backup_info.failed_registry)

        files = {f.path: f for f in game.scan_info.found_files}
        self.assertEqual(ScanChange.NEW, files['/backup/a'].change)
        self.assertEqual('/a', files['/backup/a'].original_path)
        self.assertEqual(3, files['/backup/a'].size)
        self.assertTrue(files['/backup/b'].ignored)
        self.assertEqual(ScanChange.UNKNOWN, files['/backup/b'].change)

        (key,) = game.scan_info.found_registry_keys
        self.assertEqual(ScanChange.SAME, key.change)
        self.assertEqual(ScanChange.DIFFERENT, key.values['Value'].change)
        self.assertTrue(key.values['Value'].ignored)

        (backup,) = run.backups['foo']
        self.assertEqual(datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc), backup.when)
        self.assertEqual(Os.MAC, backup.os)
        self.assertTrue(backup.locked)

        self.assertEqual(['X'], run.found_titles)
        self.assertEqual(['missing'], run.unknown_games)
        self.assertTrue(run.cloud_conflict)
        self.assertTrue(run.cloud_sync_failed)
        self.assertEqual(ScanChange.DIFFERENT, run.cloud_changes[0].change)

    def test_invalid_change(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'files': [{'path': '/a', 'change': 'Gone'}]}]})

        self.assertIn('games[0].files[0].change', str(cm.exception))

    def test_missing_name(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{}]})

        self.assertIn('games[0].name', str(cm.exception))

    def test_invalid_size(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'files': [{'path': '/a', 'size': 'big'}]}]})

        self.assertIn('games[0].files[0].size', str(cm.exception))

    def test_non_string_original_path(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'restoring': True,
                                  'files': [{'path': '/b/1', 'originalPath': 5}]}]})

        self.assertIn('games[0].files[0].originalPath', str(cm.exception))

    def test_non_string_redirected(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'files': [{'path': '/a', 'redirected': ['x']}]}]})

        self.assertIn('games[0].files[0].redirected', str(cm.exception))

    def test_string_flags_are_rejected(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'files': [{'path': '/a', 'ignored': 'false'}]}]})
        self.assertIn('games[0].files[0].ignored', str(cm.exception))

        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'files': [{'path': '/a', 'failed': 'false'}]}]})
        self.assertIn('games[0].files[0].failed', str(cm.exception))

        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'enabled': 0}]})
        self.assertIn('games[0].enabled', str(cm.exception))

        with self.assertRaises(ValueError) as cm:
            parse_run({'games': [{'name': 'foo', 'registry': [{'path': 'HKEY', 'values': {'v': {'ignored': 1}}}]}]})
        self.assertIn('games[0].registry[0].values.v.ignored', str(cm.exception))

        with self.assertRaises(ValueError) as cm:
            parse_run({'cloudConflict': 'yes'})
        self.assertIn('cloudConflict', str(cm.exception))

    def test_non_string_comment(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'backups': {'foo': [{'name': 'b', 'when': '2024-01-02T03:04:05Z', 'comment': 5}]}})

        self.assertIn('backups.foo[0].comment', str(cm.exception))

    def test_non_bool_locked(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'backups': {'foo': [{'name': 'b', 'when': '2024-01-02T03:04:05Z', 'locked': 'no'}]}})

        self.assertIn('backups.foo[0].locked', str(cm.exception))

    def test_non_string_title(self):
        with self.assertRaises(ValueError) as cm:
            parse_run({'foundTitles': ['X', 3]})

        self.assertIn('foundTitles[1]', str(cm.exception))

    def test_invalid_timestamp(self):
        with self.assertRaises(ValueError):
            parse_run({'backups': {'foo': [{'name': 'b', 'when': 'yesterday'}]}})

    def test_load_run(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'run.json'
            path.write_text(json.dumps(RUN), encoding='utf-8')

            run = load_run(path)

        self.assertEqual('foo', run.games[0].scan_info.game_name)

    def test_load_run_with_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'run.json'
            path.write_text('{', encoding='utf-8')

            with self.assertRaises(ValueError):
                load_run(path)


if __name__ == '__main__':
    unittest.main()
