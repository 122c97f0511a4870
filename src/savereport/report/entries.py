"""Per-game shapes of the structured (JSON) report.

A game appears in the report in exactly one of three shapes:
- OperativeGame: the game was scanned and backed up or restored in this run
- StoredGame: the backups that exist for the game
- FoundGame: the game was found, nothing else to say

Every to_dict() leaves out fields that hold their default value (false flags, empty
collections, missing optional values), so consumers treat a missing field as false/empty.
Mapping keys and duplicatedBy lists are sorted so identical input renders identically.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any

from ..scan import Decision, Os, ScanChange
from .concerns import ErrorConcerns
from .status import OperationStatus


def _sorted_map(entries: dict[str, Any]) -> dict[str, Any]:
    return {key: entries[key].to_dict() for key in sorted(entries)}


def _rfc3339(when: datetime.datetime) -> str:
    text = when.astimezone(datetime.timezone.utc).isoformat()
    if text.endswith('+00:00'):
        text = text[:-len('+00:00')] + 'Z'
    return text


@dataclass
class ApiFile:
    change: ScanChange = ScanChange.UNKNOWN
    bytes: int = 0
    failed: bool = False
    ignored: bool = False
    original_path: str | None = None
    redirected_path: str | None = None
    duplicated_by: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.failed:
            out['failed'] = True
        if self.ignored:
            out['ignored'] = True
        out['change'] = str(self.change)
        out['bytes'] = self.bytes
        if self.original_path is not None:
            out['originalPath'] = self.original_path
        if self.redirected_path is not None:
            out['redirectedPath'] = self.redirected_path
        if self.duplicated_by:
            out['duplicatedBy'] = sorted(self.duplicated_by)
        return out


@dataclass
class ApiRegistryValue:
    change: ScanChange = ScanChange.UNKNOWN
    ignored: bool = False
    duplicated_by: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.ignored:
            out['ignored'] = True
        out['change'] = str(self.change)
        if self.duplicated_by:
            out['duplicatedBy'] = sorted(self.duplicated_by)
        return out


@dataclass
class ApiRegistry:
    change: ScanChange = ScanChange.UNKNOWN
    failed: bool = False
    ignored: bool = False
    duplicated_by: set[str] = field(default_factory=set)
    values: dict[str, ApiRegistryValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.failed:
            out['failed'] = True
        if self.ignored:
            out['ignored'] = True
        out['change'] = str(self.change)
        if self.duplicated_by:
            out['duplicatedBy'] = sorted(self.duplicated_by)
        if self.values:
            out['values'] = _sorted_map(self.values)
        return out


@dataclass
class ApiBackup:
    name: str
    when: datetime.datetime
    os: Os | None = None
    comment: str | None = None
    locked: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {'name': self.name, 'when': _rfc3339(self.when)}
        if self.os is not None:
            out['os'] = str(self.os)
        if self.comment is not None:
            out['comment'] = self.comment
        out['locked'] = self.locked
        return out


@dataclass
class OperativeGame:
    decision: Decision
    change: ScanChange
    files: dict[str, ApiFile] = field(default_factory=dict)
    registry: dict[str, ApiRegistry] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            'decision': str(self.decision),
            'change': str(self.change),
            'files': _sorted_map(self.files),
            'registry': _sorted_map(self.registry),
        }


@dataclass
class StoredGame:
    backups: list[ApiBackup] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {'backups': [backup.to_dict() for backup in self.backups]}


@dataclass
class FoundGame:
    def to_dict(self) -> dict[str, Any]:
        return {}


ApiGame = OperativeGame | StoredGame | FoundGame


@dataclass
class ReportDocument:
    """Root of the JSON report."""
    errors: ErrorConcerns | None = None
    overall: OperationStatus | None = field(default_factory=OperationStatus)
    games: dict[str, ApiGame] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.errors is not None:
            out['errors'] = self.errors.to_dict()
        if self.overall is not None:
            out['overall'] = self.overall.to_dict()
        out['games'] = _sorted_map(self.games)
        return out
