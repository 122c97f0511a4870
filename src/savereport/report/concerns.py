"""Run-wide concerns raised while building a report."""

from typing import Any

from ..lang import Translator


class ErrorConcerns:
    """Flags for problems that affect the run as a whole rather than a single entry.

    Each concern is either absent (None) or present. Tripping a concern again only
    keeps it present.

    Attributes:
        some_games_failed: At least one file or registry key could not be handled
        unknown_games: Names the driver was asked for but could not find
        cloud_conflict: Local and cloud backups disagree
        cloud_sync_failed: Synchronizing with the cloud did not succeed
    """

    def __init__(self) -> None:
        self.some_games_failed: bool | None = None
        self.unknown_games: list[str] | None = None
        self.cloud_conflict: bool | None = None
        self.cloud_sync_failed: bool | None = None

    def messages(self, translator: Translator) -> list[str]:
        """Warnings shown after the console summary.

        Failed games and unknown games are not repeated here; they already show up as
        line markers and in the exit status.
        """
        out = []
        if self.cloud_conflict is not None:
            out.append(translator.prefix_warning(translator.cloud_synchronize_conflict()))
        if self.cloud_sync_failed is not None:
            out.append(translator.prefix_warning(translator.unable_to_synchronize_with_cloud()))
        return out

    def to_dict(self) -> dict[str, Any]:
        """Convert to the "errors" object of the JSON report, leaving out absent concerns."""
        out: dict[str, Any] = {}
        if self.some_games_failed is not None:
            out['someGamesFailed'] = self.some_games_failed
        if self.unknown_games is not None:
            out['unknownGames'] = list(self.unknown_games)
        if self.cloud_conflict is not None:
            out['cloudConflict'] = {}
        if self.cloud_sync_failed is not None:
            out['cloudSyncFailed'] = {}
        return out
