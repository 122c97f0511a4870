"""Accumulate per-game results during a run and render them once at the end.

A run creates one Reporter, feeds it every game (or backup listing, or found title) in
processing order, and prints it exactly once. Two implementations share the interface:
- StandardReporter buffers console lines and appends an overall summary
- JsonReporter builds a ReportDocument and prints it as pretty JSON
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable

from ..lang import TRANSLATOR, Translator
from ..scan import Backup, BackupInfo, CloudChange, Decision, ScanInfo
from ..scan.duplicates import DuplicateDetector
from .concerns import ErrorConcerns
from .entries import (
    ApiBackup,
    ApiFile,
    ApiRegistry,
    ApiRegistryValue,
    FoundGame,
    OperativeGame,
    ReportDocument,
    StoredGame,
)
from .status import OperationStatus

logger = logging.getLogger(__name__)


def _duplicated_by(claimants: dict[str, bool], owner: str) -> set[str]:
    return {name for name in claimants if name != owner}


def _dump_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class Reporter(ABC):
    """Write-once accumulator for the results of one backup or restore run.

    Concerns are tripped by the driver whenever they occur; failed games trip
    someGamesFailed automatically from add_game().
    """

    def __init__(self, translator: Translator | None = None) -> None:
        self._translator: Translator = translator or TRANSLATOR

    @staticmethod
    def standard(translator: Translator | None = None) -> "StandardReporter":
        return StandardReporter(translator)

    @staticmethod
    def json(translator: Translator | None = None) -> "JsonReporter":
        return JsonReporter(translator)

    @abstractmethod
    def _concerns(self) -> ErrorConcerns:
        """Concerns of this run, created on first use where the output format needs that."""

    def _trip_some_games_failed(self) -> None:
        self._concerns().some_games_failed = True

    def trip_unknown_games(self, games: Iterable[str]) -> None:
        games = list(games)
        if not games:
            return
        logger.info(f"Unknown games requested: {', '.join(games)}")
        self._concerns().unknown_games = games

    def trip_cloud_conflict(self) -> None:
        logger.info("Cloud conflict detected")
        self._concerns().cloud_conflict = True

    def trip_cloud_sync_failed(self) -> None:
        logger.info("Cloud synchronization failed")
        self._concerns().cloud_sync_failed = True

    @abstractmethod
    def suppress_overall(self) -> None:
        """Leave the overall summary out of the rendered report."""

    def add_game(self, name: str, scan_info: ScanInfo, backup_info: BackupInfo, decision: Decision,
                 duplicate_detector: DuplicateDetector) -> bool:
        """Add the outcome for one game.

        Args:
            name: Game name the entry is reported under
            scan_info: What the scanner found for the game
            backup_info: Which entries failed to back up or restore
            decision: What the driver did with the game
            duplicate_detector: Index of entries claimed by several games

        Returns:
            False if any file or registry key failed, True otherwise (including when the
            game has nothing to report and is skipped)
        """
        if not scan_info.can_report_game():
            logger.debug(f"Nothing to report for: {name}")
            return True

        successful = self._add_game(name, scan_info, backup_info, decision, duplicate_detector)
        logger.debug(f"Reported {name} (decision={decision}, successful={successful})")

        if not successful:
            self._trip_some_games_failed()
        return successful

    @abstractmethod
    def _add_game(self, name: str, scan_info: ScanInfo, backup_info: BackupInfo, decision: Decision,
                  duplicate_detector: DuplicateDetector) -> bool:
        """Record a reportable game and return whether all of its entries succeeded."""

    @abstractmethod
    def add_backups(self, name: str, available_backups: list[Backup]) -> None:
        """List the backups stored for a game. Does nothing for an empty list."""

    @abstractmethod
    def add_found_titles(self, names: Iterable[str]) -> None:
        """List game titles, in sorted order."""

    @abstractmethod
    def render(self, path: str) -> str:
        """Render the accumulated report.

        Args:
            path: Backup or restore location shown in the console summary
        """

    def print(self, path: str) -> None:
        print(self.render(path))

    def print_failure(self) -> None:
        """Print the report when the run is aborted.

        Only the JSON reporter prints here, so API consumers always get a document. The
        console reporter leaves failure output to the caller.
        """


class StandardReporter(Reporter):
    """Console report: one block of lines per game, then an overall summary."""

    def __init__(self, translator: Translator | None = None) -> None:
        super().__init__(translator)
        self.parts: list[str] = []
        self.status: OperationStatus | None = OperationStatus()
        self.errors: ErrorConcerns = ErrorConcerns()

    def _concerns(self) -> ErrorConcerns:
        return self.errors

    def suppress_overall(self) -> None:
        self.status = None

    def _add_game(self, name, scan_info, backup_info, decision, duplicate_detector):
        t = self._translator
        successful = True
        restoring = scan_info.restoring

        self.parts.append(t.cli_game_header(
            name,
            scan_info.sum_bytes(backup_info),
            decision,
            not duplicate_detector.is_game_duplicated(scan_info.game_name).resolved(),
            scan_info.overall_change(),
        ))

        for entry in sorted(scan_info.found_files, key=lambda x: x.readable(restoring)):
            readable = entry.readable(restoring)
            entry_successful = entry.path not in backup_info.failed_files
            if not entry_successful:
                successful = False
            self.parts.append(t.cli_game_line_item(
                readable,
                entry_successful,
                entry.ignored,
                not duplicate_detector.is_file_duplicated(readable).resolved(),
                entry.change,
                False,
            ))

            alt = entry.alt_readable(restoring)
            if alt is not None:
                if restoring:
                    self.parts.append(t.cli_game_line_item_redirected(alt))
                else:
                    self.parts.append(t.cli_game_line_item_redirecting(alt))

        for entry in sorted(scan_info.found_registry_keys, key=lambda x: x.path):
            entry_successful = entry.path not in backup_info.failed_registry
            if not entry_successful:
                successful = False
            self.parts.append(t.cli_game_line_item(
                entry.path,
                entry_successful,
                entry.ignored,
                not duplicate_detector.is_registry_duplicated(entry.path).resolved(),
                entry.change,
                False,
            ))
            for value_name in sorted(entry.values):
                value = entry.values[value_name]
                self.parts.append(t.cli_game_line_item(
                    value_name,
                    True,
                    value.ignored,
                    not duplicate_detector.is_registry_value_duplicated(entry.path, value_name).resolved(),
                    value.change,
                    True,
                ))

        # Blank line between games.
        self.parts.append("")

        if self.status is not None:
            self.status.add_game(scan_info, backup_info, decision == Decision.PROCESSED)

        return successful

    def add_backups(self, name, available_backups):
        if not available_backups:
            return

        self.parts.append(f"{name}:")
        for backup in available_backups:
            self.parts.append(self._translator.cli_backup_line(backup))

        # Blank line between games.
        self.parts.append("")

    def add_found_titles(self, names):
        for name in sorted(names):
            self.parts.append(name)

    def render(self, path):
        if self.status is None:
            return "\n".join(self.parts)

        out = "\n".join(self.parts) + "\n" + self._translator.cli_summary(self.status, path)
        for message in self.errors.messages(self._translator):
            out += f"\n\n{message}"
        return out


class JsonReporter(Reporter):
    """Structured report for API consumers."""

    def __init__(self, translator: Translator | None = None) -> None:
        super().__init__(translator)
        self.output: ReportDocument = ReportDocument()

    def _concerns(self) -> ErrorConcerns:
        if self.output.errors is None:
            self.output.errors = ErrorConcerns()
        return self.output.errors

    def suppress_overall(self) -> None:
        self.output.overall = None

    def _add_game(self, name, scan_info, backup_info, decision, duplicate_detector):
        successful = True
        restoring = scan_info.restoring
        files: dict[str, ApiFile] = {}
        registry: dict[str, ApiRegistry] = {}

        for entry in sorted(scan_info.found_files, key=lambda x: x.readable(restoring)):
            readable = entry.readable(restoring)
            api_file = ApiFile(
                change=entry.change,
                bytes=entry.size,
                failed=entry.path in backup_info.failed_files,
                ignored=entry.ignored,
            )
            if not duplicate_detector.is_file_duplicated(readable).resolved():
                api_file.duplicated_by = _duplicated_by(duplicate_detector.file(readable), scan_info.game_name)

            alt = entry.alt_readable(restoring)
            if alt is not None:
                if restoring:
                    api_file.original_path = alt
                else:
                    api_file.redirected_path = alt

            if api_file.failed:
                successful = False
            files[readable] = api_file

        for entry in sorted(scan_info.found_registry_keys, key=lambda x: x.path):
            api_registry = ApiRegistry(
                change=entry.change,
                failed=entry.path in backup_info.failed_registry,
                ignored=entry.ignored,
            )
            if not duplicate_detector.is_registry_duplicated(entry.path).resolved():
                api_registry.duplicated_by = _duplicated_by(
                    duplicate_detector.registry(entry.path), scan_info.game_name)

            for value_name in sorted(entry.values):
                value = entry.values[value_name]
                api_value = ApiRegistryValue(change=value.change, ignored=value.ignored)
                if not duplicate_detector.is_registry_value_duplicated(entry.path, value_name).resolved():
                    api_value.duplicated_by = _duplicated_by(
                        duplicate_detector.registry_value(entry.path, value_name), scan_info.game_name)
                api_registry.values[value_name] = api_value

            if api_registry.failed:
                successful = False
            registry[entry.path] = api_registry

        if self.output.overall is not None:
            self.output.overall.add_game(scan_info, backup_info, decision == Decision.PROCESSED)

        self.output.games[name] = OperativeGame(
            decision=decision,
            change=scan_info.overall_change(),
            files=files,
            registry=registry,
        )
        return successful

    def add_backups(self, name, available_backups):
        if not available_backups:
            return

        backups = [
            ApiBackup(
                name=backup.name,
                when=backup.when_utc(),
                os=backup.os,
                comment=backup.comment,
                locked=backup.locked,
            )
            for backup in available_backups
        ]
        self.output.games[name] = StoredGame(backups)

    def add_found_titles(self, names):
        for name in sorted(names):
            self.output.games[name] = FoundGame()

    def render(self, path):
        return _dump_json(self.output.to_dict())

    def print_failure(self) -> None:
        self.print("")


def report_cloud_changes(changes: list[CloudChange], api: bool, translator: Translator | None = None) -> None:
    """Show what a cloud synchronization would change.

    Args:
        changes: Paths with their change kind
        api: Emit a JSON object on stderr instead of console lines
        translator: Text for the empty case; defaults to the shared translator
    """
    translator = translator or TRANSLATOR

    if api:
        latest = {change.path: change.change for change in changes}
        output = {'cloud': {path: {'change': str(latest[path])} for path in sorted(latest)}}
        print(_dump_json(output), file=sys.stderr)
        return

    if not changes:
        print(translator.no_cloud_changes(), file=sys.stderr)
        return

    for change in sorted(changes, key=lambda x: (x.change.rank(), x.path)):
        print(f"[{change.change.symbol()}] {change.path}")
