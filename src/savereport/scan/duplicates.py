"""Cross-game duplicate detection for save files and registry entries.

Games can claim the same save location (shared engine folders, launchers writing to a
common registry key, ...). The detector records which games claim each location so the
reporter can flag the overlap and name the other claimants.

Each granularity lives in its own namespace, keyed by a 128-bit MurmurHash3 fingerprint
of the normalized location:
- files: the file's rendered path
- registry keys: the key path
- registry values: the key path plus the value name
"""

import logging
from enum import StrEnum

import mmh3

from . import ScanInfo

logger = logging.getLogger(__name__)


class Duplication(StrEnum):
    UNIQUE = 'unique'
    RESOLVED = 'resolved'
    DUPLICATE = 'duplicate'

    def resolved(self) -> bool:
        """True unless more than one game actively claims the entry."""
        return self != Duplication.DUPLICATE


def fingerprint(*parts: str) -> bytes:
    """Compute the 128-bit Murmur3 fingerprint for a location.

    Args:
        parts: Location components (e.g. registry key path and value name)

    Returns:
        16 bytes representing the 128-bit hash value
    """
    joined = '\0'.join(parts)
    hash_value = mmh3.hash128(joined.encode('utf-8'), signed=False)
    return hash_value.to_bytes(16, byteorder='big')


def _normalize(path: str) -> str:
    return path.replace('\\', '/')


class DuplicateDetector:
    """Index of which games claim each file, registry key, and registry value.

    Each claim records whether the claimant has the entry active: the game is enabled and
    the entry is not ignored. An entry with several claimants is only a real duplicate when
    more than one of them is active.
    """

    def __init__(self) -> None:
        self._files: dict[bytes, dict[str, bool]] = {}
        self._registry: dict[bytes, dict[str, bool]] = {}
        self._registry_values: dict[bytes, dict[str, bool]] = {}
        self._game_files: dict[str, set[bytes]] = {}
        self._game_registry: dict[str, set[bytes]] = {}
        self._game_registry_values: dict[str, set[bytes]] = {}

    def add_game(self, scan_info: ScanInfo, enabled: bool) -> None:
        """Record every entry the game claims, replacing any earlier claims by the same game."""
        name = scan_info.game_name
        self.remove_game(name)

        files = self._game_files.setdefault(name, set())
        for entry in scan_info.found_files:
            key = fingerprint(_normalize(entry.readable(scan_info.restoring)))
            self._files.setdefault(key, {})[name] = enabled and not entry.ignored
            files.add(key)

        registry = self._game_registry.setdefault(name, set())
        registry_values = self._game_registry_values.setdefault(name, set())
        for entry in scan_info.found_registry_keys:
            key = fingerprint(_normalize(entry.path))
            self._registry.setdefault(key, {})[name] = enabled and not entry.ignored
            registry.add(key)

            for value_name, value in entry.values.items():
                value_key = fingerprint(_normalize(entry.path), value_name)
                self._registry_values.setdefault(value_key, {})[name] = \
                    enabled and not entry.ignored and not value.ignored
                registry_values.add(value_key)

        logger.debug(f"Recorded {len(files)} files and {len(registry)} registry keys for: {name}")

    def remove_game(self, name: str) -> None:
        for claims, owned in ((self._files, self._game_files),
                              (self._registry, self._game_registry),
                              (self._registry_values, self._game_registry_values)):
            for key in owned.pop(name, set()):
                games = claims.get(key)
                if games is None:
                    continue
                games.pop(name, None)
                if not games:
                    del claims[key]

    def file(self, path: str) -> dict[str, bool]:
        """Games claiming a file, mapped to whether the claim is active."""
        return dict(self._files.get(fingerprint(_normalize(path)), {}))

    def registry(self, path: str) -> dict[str, bool]:
        return dict(self._registry.get(fingerprint(_normalize(path)), {}))

    def registry_value(self, path: str, value: str) -> dict[str, bool]:
        return dict(self._registry_values.get(fingerprint(_normalize(path), value), {}))

    def is_file_duplicated(self, path: str) -> Duplication:
        return self._evaluate(self._files.get(fingerprint(_normalize(path))))

    def is_registry_duplicated(self, path: str) -> Duplication:
        return self._evaluate(self._registry.get(fingerprint(_normalize(path))))

    def is_registry_value_duplicated(self, path: str, value: str) -> Duplication:
        return self._evaluate(self._registry_values.get(fingerprint(_normalize(path), value)))

    def is_game_duplicated(self, name: str) -> Duplication:
        """Worst duplication status among all entries the game claims."""
        result = Duplication.UNIQUE
        for claims, owned in ((self._files, self._game_files),
                              (self._registry, self._game_registry),
                              (self._registry_values, self._game_registry_values)):
            for key in owned.get(name, set()):
                status = self._evaluate(claims.get(key))
                if status == Duplication.DUPLICATE:
                    return status
                if status == Duplication.RESOLVED:
                    result = status
        return result

    @staticmethod
    def _evaluate(games: dict[str, bool] | None) -> Duplication:
        if games is None or len(games) <= 1:
            return Duplication.UNIQUE
        active = sum(1 for enabled in games.values() if enabled)
        if active <= 1:
            return Duplication.RESOLVED
        return Duplication.DUPLICATE
