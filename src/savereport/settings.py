import os
import tomllib
from pathlib import Path

CONFIG_FILE_NAME = 'savereport.toml'
CONFIG_ENV_VAR = 'SAVEREPORT_CONFIG'

# Settings key constants
SETTING_LOGGING_PATH = 'logging.path'
SETTING_REPORT_API = 'report.api'
SETTING_REPORT_OVERALL = 'report.overall'
SETTING_REPORT_LOCATION = 'report.location'


def find_config_path(explicit: str | os.PathLike | None = None) -> Path:
    """Pick the configuration file to load.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        The explicit path, else the SAVEREPORT_CONFIG environment variable, else
        savereport.toml in the current directory. The file does not have to exist.
    """
    if explicit is not None:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / CONFIG_FILE_NAME


class ReportSettings:
    """Settings manager for report configuration.

    Provides a read-only key-value interface to access settings from a TOML file.
    Missing files are not an error: every get() call then returns its default.

    Example:
        settings = ReportSettings(find_config_path())
        api = settings.get(SETTING_REPORT_API, False)
        log_path = settings.get('logging.path')
    """

    def __init__(self, config_path: Path):
        self._config_path = config_path
        self._settings = {}

        if config_path.exists():
            with open(config_path, 'rb') as f:
                self._settings = tomllib.load(f)

    @property
    def path(self) -> Path:
        return self._config_path

    def get(self, key: str, default=None):
        """Get a setting value by key with optional default.

        Supports both simple keys and dot notation for nested keys (e.g. 'report.api'
        accesses settings['report']['api']). Returns the default value if the key path
        does not exist or if any intermediate value is not a dictionary.

        Args:
            key: Setting key path using dot notation for nested keys
            default: Default value to return if key not found

        Returns:
            Setting value at the specified key path, or default if not found

        Examples:
            >>> settings.get(SETTING_REPORT_OVERALL, True)
            False
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        keys = key.split('.')
        value = self._settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
