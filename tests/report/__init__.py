"""Tests for report module.

Test Files and Coverage:
========================

| Test File                  | Test Classes                 | Tested Constructs                          | Tested Functionalities                   |
|----------------------------|------------------------------|--------------------------------------------|------------------------------------------|
| test_standard_reporter.py  | StandardReporterTest         | StandardReporter                           | Console lines, summary, warnings         |
| test_json_reporter.py      | JsonReporterTest             | JsonReporter, ReportDocument               | JSON schema, omission, concerns          |
| test_status.py             | OperationStatusTest          | OperationStatus                            | Totals, change buckets                   |
|                            | ErrorConcernsTest            | ErrorConcerns                              | Messages, JSON errors object             |
| test_entries.py            | EntriesTest                  | ApiFile, ApiRegistry, ApiBackup, games     | Default omission, sorting, timestamps    |
| test_cloud_changes.py      | CloudChangesTest             | report_cloud_changes()                     | JSON to stderr, sorted console lines     |
"""
