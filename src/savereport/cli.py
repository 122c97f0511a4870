import argparse
import logging
import sys
import textwrap
from functools import wraps
from pathlib import Path

from . import DuplicateDetector, Reporter, ReportSettings, report_cloud_changes
from .scan.loader import load_run
from .settings import (
    SETTING_LOGGING_PATH,
    SETTING_REPORT_API,
    SETTING_REPORT_LOCATION,
    SETTING_REPORT_OVERALL,
    find_config_path,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def needs_settings(func):
    """Decorator for commands that read the configuration file.

    The decorated function will receive (settings, args) and returns the process exit status.
    """
    @wraps(func)
    def wrapper(args):
        settings = ReportSettings(find_config_path(args.config))
        configure_logging(args, settings)
        logger.debug(f"Using settings from {settings.path}")
        return func(settings, args)
    return wrapper


def configure_logging(args, settings: ReportSettings) -> bool:
    """Configure logging from CLI arguments, falling back to the logging.path setting.

    Returns:
        True if logging was configured, False otherwise
    """
    log_file = args.log_file or settings.get(SETTING_LOGGING_PATH)
    if not log_file:
        return False

    # Determine log level: use --log-level if provided, otherwise default to INFO
    log_level = args.log_level or 'INFO'

    # Reset logging configuration
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, log_level),
        format=LOG_FORMAT
    )
    return True


def savereport_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog='savereport',
        description='Render the results of a game save backup or restore run as a console report or as JSON.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              savereport show run.json
              savereport show --api run.json
              savereport cloud run.json
            ''').strip()
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to the configuration file. If not provided, uses SAVEREPORT_CONFIG environment variable or '
             'savereport.toml in the current directory.')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file. If not provided, uses logging.path from the configuration or no logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when logging is enabled.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        description='Available commands',
        help='Use "savereport COMMAND --help" for command-specific help',
        required=True
    )

    parser_show = subparsers.add_parser(
        'show',
        help='Report the games, backups, and titles of a run',
        description='Loads a run description and prints one report for it. Exits with status 1 when any game '
                    'failed or unknown games were requested.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              savereport show run.json
              savereport show --api --no-overall run.json
              savereport show --location /backups run.json
            ''').strip())
    parser_show.add_argument(
        'run',
        metavar='RUN',
        help='JSON file describing the run')
    parser_show.add_argument(
        '--api',
        action='store_true',
        default=None,
        help='Print a JSON document instead of the console report (default: report.api setting)')
    parser_show.add_argument(
        '--no-overall',
        action='store_true',
        help='Leave out the overall summary')
    parser_show.add_argument(
        '--location',
        metavar='PATH',
        help='Backup or restore location shown in the summary (default: report.location setting)')
    parser_show.set_defaults(method=_show)

    parser_cloud = subparsers.add_parser(
        'cloud',
        help='List the cloud changes of a run',
        description='Prints the "cloud" entries of a run description. JSON output goes to stderr.')
    parser_cloud.add_argument(
        'run',
        metavar='RUN',
        help='JSON file describing the run')
    parser_cloud.add_argument(
        '--api',
        action='store_true',
        default=None,
        help='Print a JSON document instead of console lines (default: report.api setting)')
    parser_cloud.set_defaults(method=_cloud)

    args = parser.parse_args(argv)
    return args.method(args)


def _use_api(settings: ReportSettings, args) -> bool:
    if args.api is not None:
        return args.api
    return bool(settings.get(SETTING_REPORT_API, False))


@needs_settings
def _show(settings: ReportSettings, args) -> int:
    reporter = Reporter.json() if _use_api(settings, args) else Reporter.standard()
    if args.no_overall or not settings.get(SETTING_REPORT_OVERALL, True):
        reporter.suppress_overall()

    try:
        run = load_run(Path(args.run))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(f"Unable to load run {args.run}: {e}")
        reporter.print_failure()
        return 1

    duplicate_detector = DuplicateDetector()
    for game in run.games:
        duplicate_detector.add_game(game.scan_info, game.enabled)

    failed = False
    for game in run.games:
        if not reporter.add_game(game.scan_info.game_name, game.scan_info, game.backup_info, game.decision,
                                 duplicate_detector):
            failed = True
    for name, backups in run.backups.items():
        reporter.add_backups(name, backups)
    if run.found_titles:
        reporter.add_found_titles(run.found_titles)

    if run.unknown_games:
        reporter.trip_unknown_games(run.unknown_games)
        failed = True
    if run.cloud_conflict:
        reporter.trip_cloud_conflict()
    if run.cloud_sync_failed:
        reporter.trip_cloud_sync_failed()

    location = args.location or settings.get(SETTING_REPORT_LOCATION, '')
    reporter.print(str(location))
    logger.info(f"Reported {len(run.games)} games from {args.run} (failed={failed})")
    return 1 if failed else 0


@needs_settings
def _cloud(settings: ReportSettings, args) -> int:
    try:
        run = load_run(Path(args.run))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(f"Unable to load run {args.run}: {e}")
        return 1

    report_cloud_changes(run.cloud_changes, _use_api(settings, args))
    return 0


def main():
    sys.exit(savereport_main())


if __name__ == '__main__':
    main()
