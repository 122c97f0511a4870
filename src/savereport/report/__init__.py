"""Report module for rendering backup and restore results.

This package contains:
- concerns: ErrorConcerns, the run-wide warning and error flags
- status: OperationStatus, the running totals shown in the overall summary
- entries: Per-game shapes of the structured (JSON) report
- reporter: Reporter with its console and JSON implementations, plus cloud change output
"""
