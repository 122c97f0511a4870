"""Tests for scan module.

Test Files and Coverage:
========================

| Test File                  | Test Classes                 | Tested Constructs                          | Tested Functionalities                   |
|----------------------------|------------------------------|--------------------------------------------|------------------------------------------|
| test_scan_info.py          | ScanInfoTest                 | ScanInfo, ScannedFile                      | Byte sums, overall change, redirects     |
| test_duplicates.py         | DuplicateDetectorTest        | DuplicateDetector, fingerprint()           | Namespaces, resolution, removal          |
| test_loader.py             | LoaderTest                   | parse_run(), load_run()                    | Run files, malformed input               |
"""
