"""User-facing text for console reports.

Reporters receive a Translator instead of building strings themselves, so wording and
number formatting can be swapped without touching the accumulation logic.
"""

from .scan import Backup, Decision, ScanChange

_BINARY_UNITS = ['KiB', 'MiB', 'GiB', 'TiB', 'PiB', 'EiB']


class Translator:
    """English strings and formatting for the console reporter."""

    def adjusted_size(self, size_bytes: int) -> str:
        """Format byte size with binary units.

        Args:
            size_bytes: Size in bytes

        Returns:
            Plain byte count below 1 KiB (e.g. "4 B"), otherwise two decimals with the
            largest fitting unit (e.g. "100.00 KiB")
        """
        if size_bytes < 1024:
            return f"{size_bytes} B"
        size = float(size_bytes)
        unit = _BINARY_UNITS[0]
        for unit in _BINARY_UNITS:
            size /= 1024.0
            if size < 1024.0:
                break
        return f"{size:.2f} {unit}"

    def badge_failed(self) -> str:
        return "FAILED"

    def badge_ignored(self) -> str:
        return "IGNORED"

    def badge_duplicated(self) -> str:
        return "DUPLICATED"

    def badge_duplicates(self) -> str:
        return "DUPLICATES"

    def prefix_warning(self, message: str) -> str:
        return f"WARNING: {message}"

    def cloud_synchronize_conflict(self) -> str:
        return "Your local and cloud backups are in conflict. Open the GUI and perform a restore or a new " \
               "backup to resolve this."

    def unable_to_synchronize_with_cloud(self) -> str:
        return "Unable to synchronize with cloud."

    def no_cloud_changes(self) -> str:
        return "No cloud changes"

    def cli_game_header(self, name: str, bytes_: int, decision: Decision, duplicated: bool,
                        change: ScanChange) -> str:
        labels = []
        if decision == Decision.IGNORED:
            labels.append(f"[{self.badge_ignored()}]")
        if duplicated:
            labels.append(f"[{self.badge_duplicates()}]")
        if change.is_change():
            labels.append(f"[{change.symbol()}]")

        if labels:
            return f"{name} [{self.adjusted_size(bytes_)}] {' '.join(labels)}:"
        return f"{name} [{self.adjusted_size(bytes_)}]:"

    def cli_game_line_item(self, item: str, successful: bool, ignored: bool, duplicated: bool,
                           change: ScanChange, nested: bool) -> str:
        parts = []
        if not successful:
            parts.append(f"[{self.badge_failed()}]")
        if ignored:
            parts.append(f"[{self.badge_ignored()}]")
        if duplicated:
            parts.append(f"[{self.badge_duplicated()}]")
        if change.is_change():
            parts.append(f"[{change.symbol()}]")
        parts.append(item)

        indent = "    " if nested else "  "
        return f"{indent}- {' '.join(parts)}"

    def cli_game_line_item_redirected(self, item: str) -> str:
        return f"    - Redirected from: {item}"

    def cli_game_line_item_redirecting(self, item: str) -> str:
        return f"    - Redirecting to: {item}"

    def cli_backup_line(self, backup: Backup) -> str:
        line = f"  - \"{backup.name}\" ({backup.when_local().strftime('%Y-%m-%dT%H:%M:%S')})"
        if backup.os is not None:
            line += f" [{backup.os.display_name()}]"
        if backup.locked:
            line += " [🔒]"
        if backup.comment is not None:
            line += f" - {backup.comment}"
        return line

    def cli_summary(self, status, location: str) -> str:
        """Overall block appended after all games.

        Counts and sizes are shown as "processed / total" only when they differ.
        """
        if status.processed_games == status.total_games:
            games = f"{status.processed_games}"
        else:
            games = f"{status.processed_games} / {status.total_games}"
        if status.changed_games.new > 0:
            games += f" [{ScanChange.NEW.symbol()}{status.changed_games.new}]"
        if status.changed_games.different > 0:
            games += f" [{ScanChange.DIFFERENT.symbol()}{status.changed_games.different}]"

        if status.processed_bytes == status.total_bytes:
            size = self.adjusted_size(status.processed_bytes)
        else:
            size = f"{self.adjusted_size(status.processed_bytes)} / {self.adjusted_size(status.total_bytes)}"

        return f"Overall:\n  Games: {games}\n  Size: {size}\n  Location: {location}"


TRANSLATOR = Translator()
