from .lang import Translator, TRANSLATOR
from .scan import (
    Backup,
    BackupInfo,
    CloudChange,
    Decision,
    Os,
    ScanChange,
    ScanInfo,
    ScannedFile,
    ScannedRegistry,
    ScannedRegistryValue,
)
from .scan.duplicates import DuplicateDetector, Duplication
from .report.concerns import ErrorConcerns
from .report.status import OperationStatus
from .report.reporter import Reporter, StandardReporter, JsonReporter, report_cloud_changes
from .settings import ReportSettings
