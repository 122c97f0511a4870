"""Running totals for the overall summary of a report."""

from dataclasses import dataclass, field
from typing import Any

from ..scan import BackupInfo, ScanChange, ScanInfo


@dataclass
class ChangedGames:
    new: int = 0
    different: int = 0
    same: int = 0

    def to_dict(self) -> dict[str, int]:
        return {'new': self.new, 'different': self.different, 'same': self.same}


@dataclass
class OperationStatus:
    """Totals over every game added to a report.

    Attributes:
        total_games: Count of games added
        total_bytes: Sum of all found file sizes
        processed_games: Count of games whose decision was Processed
        processed_bytes: Sum of the handled file sizes of processed games
                        (ignored and failed files excluded)
        changed_games: How many games were new, different, or unchanged overall.
                      Games whose overall change is Unknown are not counted here.
    """
    total_games: int = 0
    total_bytes: int = 0
    processed_games: int = 0
    processed_bytes: int = 0
    changed_games: ChangedGames = field(default_factory=ChangedGames)

    def add_game(self, scan_info: ScanInfo, backup_info: BackupInfo | None, processed: bool) -> None:
        self.total_games += 1
        self.total_bytes += scan_info.total_possible_bytes()
        if processed:
            self.processed_games += 1
            self.processed_bytes += scan_info.sum_bytes(backup_info)

        change = scan_info.overall_change()
        if change == ScanChange.NEW:
            self.changed_games.new += 1
        elif change == ScanChange.DIFFERENT:
            self.changed_games.different += 1
        elif change == ScanChange.SAME:
            self.changed_games.same += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            'totalGames': self.total_games,
            'totalBytes': self.total_bytes,
            'processedGames': self.processed_games,
            'processedBytes': self.processed_bytes,
            'changedGames': self.changed_games.to_dict(),
        }
