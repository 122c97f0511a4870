"""Scan and backup result types consumed by the reporter.

These are the shapes the scanning/backup pipeline hands over once a game has
been processed. The reporter only reads them.
"""

import datetime
from dataclasses import dataclass, field
from enum import StrEnum


class ScanChange(StrEnum):
    """State of an entry relative to the previous backup."""
    NEW = 'New'
    DIFFERENT = 'Different'
    SAME = 'Same'
    UNKNOWN = 'Unknown'

    def symbol(self) -> str:
        return _CHANGE_SYMBOLS[self]

    def rank(self) -> int:
        """Position in the New < Different < Same < Unknown ordering."""
        return _CHANGE_ORDER.index(self)

    def is_change(self) -> bool:
        """True for New and Different, the kinds that get a badge in text mode."""
        return self in (ScanChange.NEW, ScanChange.DIFFERENT)


_CHANGE_ORDER = [ScanChange.NEW, ScanChange.DIFFERENT, ScanChange.SAME, ScanChange.UNKNOWN]

_CHANGE_SYMBOLS = {
    ScanChange.NEW: '+',
    ScanChange.DIFFERENT: 'Δ',
    ScanChange.SAME: '=',
    ScanChange.UNKNOWN: '?',
}


class Decision(StrEnum):
    """What the driver did with a game during this run."""
    PROCESSED = 'Processed'
    CANCELLED = 'Cancelled'
    IGNORED = 'Ignored'
    PREVIEW_ONLY = 'PreviewOnly'


class Os(StrEnum):
    WINDOWS = 'windows'
    LINUX = 'linux'
    MAC = 'mac'
    OTHER = 'other'

    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class ScannedFile:
    """A save file found for a game.

    Attributes:
        path: Location the scanner found. When backing up this is the real save location;
              when restoring it is the file inside the backup.
        size: Size in bytes
        hash: Content hash computed by the scanner
        original_path: Restore only: where the file was originally backed up from
        redirected: Other side of a configured redirect (backup: location inside the backup,
                    restore: location the file will actually be written to)
        ignored: Whether the user excluded this file
        change: Change relative to the previous backup
    """
    path: str
    size: int = 0
    hash: str = ''
    original_path: str | None = None
    redirected: str | None = None
    ignored: bool = False
    change: ScanChange = ScanChange.UNKNOWN

    def readable(self, restoring: bool) -> str:
        """Path shown to the user for this file."""
        if restoring:
            if self.redirected is not None:
                return self.redirected
            if self.original_path is not None:
                return self.original_path
        return self.path

    def alt_readable(self, restoring: bool) -> str | None:
        """Other side of a redirect, if this file has one."""
        if restoring:
            if self.redirected is not None:
                return self.original_path
            return None
        return self.redirected


@dataclass(frozen=True)
class ScannedRegistryValue:
    ignored: bool = False
    change: ScanChange = ScanChange.UNKNOWN


@dataclass(frozen=True, eq=False)
class ScannedRegistry:
    """A registry key found for a game, with the values found under it."""
    path: str
    ignored: bool = False
    change: ScanChange = ScanChange.UNKNOWN
    values: dict[str, ScannedRegistryValue] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScannedRegistry):
            return NotImplemented
        return (self.path, self.ignored, self.change, self.values) == \
            (other.path, other.ignored, other.change, other.values)

    def __hash__(self) -> int:
        return hash((self.path, self.ignored, self.change))


@dataclass
class BackupInfo:
    """Outcome of the backup/restore step: which entries could not be handled."""
    failed_files: set[str] = field(default_factory=set)
    failed_registry: set[str] = field(default_factory=set)


@dataclass
class ScanInfo:
    """Everything the scanner found for one game."""
    game_name: str = ''
    found_files: set[ScannedFile] = field(default_factory=set)
    found_registry_keys: set[ScannedRegistry] = field(default_factory=set)
    restoring: bool = False

    def found_anything(self) -> bool:
        return bool(self.found_files) or bool(self.found_registry_keys)

    def can_report_game(self) -> bool:
        """Whether this game has anything worth showing in a report."""
        return self.found_anything()

    def total_possible_bytes(self) -> int:
        return sum(f.size for f in self.found_files)

    def sum_bytes(self, backup_info: BackupInfo | None = None) -> int:
        """Bytes of the files that were (or would be) handled.

        Ignored files never count. With a backup result, files that failed are left out too.
        """
        failed = backup_info.failed_files if backup_info is not None else set()
        return sum(f.size for f in self.found_files if not f.ignored and f.path not in failed)

    def overall_change(self) -> ScanChange:
        """Classify the whole game from its non-ignored entries.

        New when every reported change is New, Different when anything is New or Different,
        Same otherwise, and Unknown when every entry is ignored.
        """
        new = different = same = 0
        unknown = False

        def count(change: ScanChange):
            nonlocal new, different, same, unknown
            if change == ScanChange.NEW:
                new += 1
            elif change == ScanChange.DIFFERENT:
                different += 1
            elif change == ScanChange.SAME:
                same += 1
            else:
                unknown = True

        for entry in self.found_files:
            if not entry.ignored:
                count(entry.change)
        for key in self.found_registry_keys:
            if not key.ignored:
                count(key.change)
            for value in key.values.values():
                if not value.ignored:
                    count(value.change)

        if new > 0 and different == 0 and same == 0:
            return ScanChange.NEW
        if new > 0 or different > 0:
            return ScanChange.DIFFERENT
        if same > 0 or unknown:
            return ScanChange.SAME
        return ScanChange.UNKNOWN


@dataclass(frozen=True)
class Backup:
    """A stored backup of a game, as listed by the backup layout."""
    name: str
    when: datetime.datetime
    os: Os | None = None
    comment: str | None = None
    locked: bool = False

    def when_utc(self) -> datetime.datetime:
        if self.when.tzinfo is None:
            return self.when.replace(tzinfo=datetime.timezone.utc)
        return self.when.astimezone(datetime.timezone.utc)

    def when_local(self) -> datetime.datetime:
        return self.when_utc().astimezone()


@dataclass(frozen=True)
class CloudChange:
    path: str
    change: ScanChange = ScanChange.UNKNOWN
