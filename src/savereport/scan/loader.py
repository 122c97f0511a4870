"""Read run descriptions written by the scanning pipeline.

A run file is a JSON object:

    {
      "games": [
        {
          "name": "Game", "decision": "Processed", "restoring": false, "enabled": true,
          "files": [{"path": "...", "size": 1, "hash": "...", "change": "New",
                     "originalPath": "...", "redirected": "...", "ignored": false, "failed": false}],
          "registry": [{"path": "...", "change": "Same", "ignored": false, "failed": false,
                        "values": {"Name": {"change": "Same", "ignored": false}}}]
        }
      ],
      "backups": {"Game": [{"name": "...", "when": "2024-01-02T03:04:05Z", "os": "windows",
                            "comment": "...", "locked": false}]},
      "foundTitles": ["..."],
      "unknownGames": ["..."],
      "cloudConflict": false,
      "cloudSyncFailed": false,
      "cloud": [{"path": "...", "change": "New"}]
    }

Every key is optional. Malformed values raise ValueError naming the offending key.
"""

import datetime
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import (
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


@dataclass
class GameRun:
    """One game as processed by the pipeline."""
    scan_info: ScanInfo
    backup_info: BackupInfo
    decision: Decision = Decision.PROCESSED
    enabled: bool = True


@dataclass
class RunDescription:
    games: list[GameRun] = field(default_factory=list)
    backups: dict[str, list[Backup]] = field(default_factory=dict)
    found_titles: list[str] = field(default_factory=list)
    unknown_games: list[str] = field(default_factory=list)
    cloud_conflict: bool = False
    cloud_sync_failed: bool = False
    cloud_changes: list[CloudChange] = field(default_factory=list)


def _enum(cls, value: Any, key: str, default):
    if value is None:
        return default
    try:
        return cls(value)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {value!r}") from None


def _expect(value: Any, kind: type, key: str):
    if not isinstance(value, kind):
        raise ValueError(f"Expected {kind.__name__} for {key}, got {type(value).__name__}")
    return value


def _optional_str(value: Any, key: str) -> str | None:
    if value is None:
        return None
    return _expect(value, str, key)


def _flag(data: dict, name: str, key: str, default: bool = False) -> bool:
    return _expect(data.get(name, default), bool, f"{key}.{name}" if key else name)


def _names(data: dict, key: str) -> list[str]:
    return [_expect(x, str, f"{key}[{i}]") for i, x in enumerate(_expect(data.get(key, []), list, key))]


def _parse_when(value: Any, key: str) -> datetime.datetime:
    _expect(value, str, key)
    try:
        when = datetime.datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValueError(f"Invalid timestamp for {key}: {value!r}") from None
    if when.tzinfo is None:
        when = when.replace(tzinfo=datetime.timezone.utc)
    return when


def _parse_game(data: Any, index: int) -> GameRun:
    where = f"games[{index}]"
    _expect(data, dict, where)
    name = _expect(data.get('name'), str, f"{where}.name")
    restoring = _flag(data, 'restoring', where)

    found_files = set()
    failed_files = set()
    for i, item in enumerate(_expect(data.get('files', []), list, f"{where}.files")):
        item_key = f"{where}.files[{i}]"
        _expect(item, dict, item_key)
        scanned = ScannedFile(
            path=_expect(item.get('path'), str, f"{item_key}.path"),
            size=_expect(item.get('size', 0), int, f"{item_key}.size"),
            hash=_expect(item.get('hash', ''), str, f"{item_key}.hash"),
            original_path=_optional_str(item.get('originalPath'), f"{item_key}.originalPath"),
            redirected=_optional_str(item.get('redirected'), f"{item_key}.redirected"),
            ignored=_flag(item, 'ignored', item_key),
            change=_enum(ScanChange, item.get('change'), f"{item_key}.change", ScanChange.UNKNOWN),
        )
        found_files.add(scanned)
        if _flag(item, 'failed', item_key):
            failed_files.add(scanned.path)

    found_registry = set()
    failed_registry = set()
    for i, item in enumerate(_expect(data.get('registry', []), list, f"{where}.registry")):
        item_key = f"{where}.registry[{i}]"
        _expect(item, dict, item_key)
        values = {}
        for value_name, value in _expect(item.get('values', {}), dict, f"{item_key}.values").items():
            value_key = f"{item_key}.values.{value_name}"
            _expect(value, dict, value_key)
            values[value_name] = ScannedRegistryValue(
                ignored=_flag(value, 'ignored', value_key),
                change=_enum(ScanChange, value.get('change'), f"{value_key}.change", ScanChange.UNKNOWN),
            )
        scanned = ScannedRegistry(
            path=_expect(item.get('path'), str, f"{item_key}.path"),
            ignored=_flag(item, 'ignored', item_key),
            change=_enum(ScanChange, item.get('change'), f"{item_key}.change", ScanChange.UNKNOWN),
            values=values,
        )
        found_registry.add(scanned)
        if _flag(item, 'failed', item_key):
            failed_registry.add(scanned.path)

    return GameRun(
        scan_info=ScanInfo(
            game_name=name,
            found_files=found_files,
            found_registry_keys=found_registry,
            restoring=restoring,
        ),
        backup_info=BackupInfo(failed_files=failed_files, failed_registry=failed_registry),
        decision=_enum(Decision, data.get('decision'), f"{where}.decision", Decision.PROCESSED),
        enabled=_flag(data, 'enabled', where, default=True),
    )


def _parse_backup(data: Any, key: str) -> Backup:
    _expect(data, dict, key)
    return Backup(
        name=_expect(data.get('name'), str, f"{key}.name"),
        when=_parse_when(data.get('when'), f"{key}.when"),
        os=_enum(Os, data.get('os'), f"{key}.os", None),
        comment=_optional_str(data.get('comment'), f"{key}.comment"),
        locked=_flag(data, 'locked', key),
    )


def parse_cloud_changes(data: Any, key: str = 'cloud') -> list[CloudChange]:
    changes = []
    for i, item in enumerate(_expect(data, list, key)):
        item_key = f"{key}[{i}]"
        _expect(item, dict, item_key)
        changes.append(CloudChange(
            path=_expect(item.get('path'), str, f"{item_key}.path"),
            change=_enum(ScanChange, item.get('change'), f"{item_key}.change", ScanChange.UNKNOWN),
        ))
    return changes


def parse_run(data: Any) -> RunDescription:
    """Convert decoded run JSON into a RunDescription."""
    _expect(data, dict, 'run')
    run = RunDescription()

    for index, game in enumerate(_expect(data.get('games', []), list, 'games')):
        run.games.append(_parse_game(game, index))

    for name, backups in _expect(data.get('backups', {}), dict, 'backups').items():
        _expect(backups, list, f"backups.{name}")
        run.backups[name] = [_parse_backup(b, f"backups.{name}[{i}]") for i, b in enumerate(backups)]

    run.found_titles = _names(data, 'foundTitles')
    run.unknown_games = _names(data, 'unknownGames')
    run.cloud_conflict = _flag(data, 'cloudConflict', '')
    run.cloud_sync_failed = _flag(data, 'cloudSyncFailed', '')
    run.cloud_changes = parse_cloud_changes(data.get('cloud', []))
    return run


def load_run(path: Path) -> RunDescription:
    """Load a run description from a JSON file.

    Raises:
        FileNotFoundError: The file does not exist
        ValueError: The file is not valid JSON or does not describe a run
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return parse_run(data)
