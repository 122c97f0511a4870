"""Tests for the structured per-game shapes."""
import datetime
import unittest

from savereport import Decision, ErrorConcerns, Os, ScanChange
from savereport.report.entries import (
    ApiBackup,
    ApiFile,
    ApiRegistry,
    ApiRegistryValue,
    FoundGame,
    OperativeGame,
    ReportDocument,
    StoredGame,
)


class EntriesTest(unittest.TestCase):
    """Tests for the to_dict() conversions of report entries."""

    def test_file_defaults_are_omitted(self):
        self.assertEqual({'change': 'Unknown', 'bytes': 0}, ApiFile().to_dict())

    def test_file_with_all_fields(self):
        api_file = ApiFile(change=ScanChange.NEW, bytes=5, failed=True, ignored=True,
                           redirected_path='/fake', duplicated_by={'b', 'a'})

        self.assertEqual(
            {'failed': True, 'ignored': True, 'change': 'New', 'bytes': 5, 'redirectedPath': '/fake',
             'duplicatedBy': ['a', 'b']},
            api_file.to_dict())
        self.assertEqual(['failed', 'ignored', 'change', 'bytes', 'redirectedPath', 'duplicatedBy'],
                         list(api_file.to_dict()))

    def test_registry_values_are_sorted_and_omitted_when_empty(self):
        self.assertEqual({'change': 'Unknown'}, ApiRegistry().to_dict())

        registry = ApiRegistry(values={'b': ApiRegistryValue(), 'a': ApiRegistryValue(ignored=True)})
        self.assertEqual(['a', 'b'], list(registry.to_dict()['values']))
        self.assertEqual({'ignored': True, 'change': 'Unknown'}, registry.to_dict()['values']['a'])

    def test_backup_timestamp_is_utc(self):
        tz = datetime.timezone(datetime.timedelta(hours=2))
        backup = ApiBackup('b', datetime.datetime(2024, 1, 2, 5, 4, 5, tzinfo=tz), os=Os.LINUX)

        self.assertEqual({'name': 'b', 'when': '2024-01-02T03:04:05Z', 'os': 'linux', 'locked': False},
                         backup.to_dict())

    def test_game_shapes(self):
        self.assertEqual({}, FoundGame().to_dict())
        self.assertEqual({'backups': []}, StoredGame().to_dict())
        self.assertEqual(
            {'decision': 'Processed', 'change': 'Same', 'files': {}, 'registry': {}},
            OperativeGame(Decision.PROCESSED, ScanChange.SAME).to_dict())

    def test_document(self):
        document = ReportDocument()
        document.games['b'] = FoundGame()
        document.games['a'] = StoredGame()

        self.assertEqual(['overall', 'games'], list(document.to_dict()))
        self.assertEqual(['a', 'b'], list(document.to_dict()['games']))

        document.errors = ErrorConcerns()
        document.overall = None
        self.assertEqual(['errors', 'games'], list(document.to_dict()))


if __name__ == '__main__':
    unittest.main()
