import argparse
import logging
import sys
import textwrap
from functools import wraps
from pathlib import Path

from . import ArchiveOpenError, Classpath, ConfigurationError, DistinctnessPolicy, Processor, ScanSettings
from .classpath import MINIMUM_ARCHIVES
from .report.render import render_lines, render_summary
from .report.store import ReportFile, ReportFormatError
from .settings import SETTING_CHECK, SETTING_EXCLUDE, SETTING_JOBS, SETTING_LOG_LEVEL, SETTING_LOG_PATH
from .utils.profiling import profile_main

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Exit statuses
EXIT_OK = 0
EXIT_ARCHIVE_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2


def reports_errors(func):
    """Decorator turning the expected failures of a command into an exit status and a message on stderr.

    The decorated function receives (settings, output, args) and returns an exit status.
    """
    @wraps(func)
    def wrapper(settings, output, args):
        try:
            return func(settings, output, args)
        except ConfigurationError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_CONFIGURATION_ERROR
        except (ArchiveOpenError, ReportFormatError) as e:
            logger.error(str(e))
            print(f"error: {e}", file=sys.stderr)
            return EXIT_ARCHIVE_ERROR
    return wrapper


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jarconflict',
        description='Detect classes that are defined by more than one archive on a classpath.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              jarconflict scan --jars "lib/a.jar;lib/b.jar"
              jarconflict scan lib/*.jar --check crc --exclude org/slf4j/impl/
              jarconflict describe conflicts.report
            ''').strip()
    )
    parser.add_argument(
        '--settings',
        metavar='PATH',
        help='Path to a TOML settings file. If not provided, uses the JARCONFLICT_SETTINGS environment variable '
             'or built-in defaults.')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log progress to stderr')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file. If not provided, uses logging.path from the settings file or no log file.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        required=True,
        help='Use "jarconflict COMMAND --help" for command-specific help'
    )

    parser_scan = subparsers.add_parser(
        'scan',
        help='Scan archives for duplicate class entries',
        description='Scans every archive of the classpath and reports each class entry that is found in more than '
                    'one of them. With --check size or crc, entries are additionally grouped by content.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              jarconflict scan --jars "a.jar;b.jar"
              jarconflict scan a.jar b.jar c.jar --check none
              jarconflict scan a.jar b.jar -e com/example/shaded/ -e module-info --save out.report

            Archives given with --jars come first, followed by positional paths.
            ''').strip())
    parser_scan.add_argument(
        'paths',
        nargs='*',
        metavar='PATH',
        help='Archive files in classpath order')
    parser_scan.add_argument(
        '-j', '--jars',
        metavar='LIST',
        help='Archive files joined by semicolons')
    parser_scan.add_argument(
        '-c', '--check',
        choices=[p.value for p in DistinctnessPolicy],
        help='How same-named entries are told apart: size (uncompressed size, default), crc (CRC-32), '
             'or none (report every duplicate name regardless of content)')
    parser_scan.add_argument(
        '-e', '--exclude',
        action='append',
        default=[],
        metavar='PREFIX',
        help='Ignore entries whose name starts with PREFIX; may be given multiple times')
    parser_scan.add_argument(
        '--jobs',
        type=int,
        metavar='N',
        help='Number of worker processes used to read archives (default: 1, read in-process)')
    parser_scan.add_argument(
        '--save',
        metavar='FILE',
        help='Also write the report to FILE for later use with "jarconflict describe"')
    parser_scan.add_argument(
        '--summary',
        action='store_true',
        help='Print a summary line after the report')
    parser_scan.set_defaults(method=_scan)

    parser_describe = subparsers.add_parser(
        'describe',
        help='Show a report saved with "scan --save"',
        description='Prints the run parameters and the conflicts stored in a saved report.')
    parser_describe.add_argument(
        'report',
        metavar='FILE',
        help='Saved report file')
    parser_describe.set_defaults(method=_describe)

    return parser


def configure_logging(args, settings: ScanSettings):
    """Configure the root logger from CLI arguments, falling back to the settings file."""
    log_file = args.log_file or settings.get_str(SETTING_LOG_PATH)
    log_level = args.log_level or settings.get_str(SETTING_LOG_LEVEL) or 'INFO'

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {log_level!r}")

    if log_file:
        logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT, force=True)
    elif args.verbose:
        logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT, force=True)


@profile_main
def jarconflict_main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ScanSettings.load(args.settings)
        configure_logging(args, settings)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    return args.method(settings, sys.stdout, args)


def main():
    sys.exit(jarconflict_main())


def _archive_paths(args) -> list[str]:
    paths = []
    if args.jars:
        paths.extend(p for p in args.jars.split(';') if p)
    paths.extend(args.paths)
    return paths


@reports_errors
def _scan(settings: ScanSettings, output, args) -> int:
    paths = _archive_paths(args)
    if len(paths) < MINIMUM_ARCHIVES:
        print(f"Only have {len(paths)} jar file(s). No conflict class detected.", file=output)
        return EXIT_OK

    policy = DistinctnessPolicy.parse(args.check or settings.get_str(SETTING_CHECK, DistinctnessPolicy.SIZE.value))
    exclusions = settings.get_str_list(SETTING_EXCLUDE) + args.exclude
    jobs = args.jobs if args.jobs is not None else settings.get_int(SETTING_JOBS, 1)
    if jobs < 1:
        raise ConfigurationError(f"Number of jobs must be at least 1, got {jobs}")

    classpath = Classpath(paths, policy=policy, exclusions=exclusions)
    if jobs > 1:
        with Processor(jobs) as processor:
            classpath.processor = processor
            records = classpath.conflicts()
    else:
        records = classpath.conflicts()

    for line in render_lines(records, policy):
        print(line, file=output)

    if args.summary:
        print(render_summary(records, len(paths)), file=output)

    if args.save:
        classpath.save(args.save, records)

    return EXIT_OK


@reports_errors
def _describe(settings: ScanSettings, output, args) -> int:
    manifest, records = ReportFile.read(Path(args.report))
    policy = DistinctnessPolicy.parse(manifest.policy)

    print(f"Report:     {args.report}", file=output)
    print(f"Timestamp:  {manifest.timestamp}", file=output)
    print(f"Check:      {policy.value}", file=output)
    print(f"Archives:   {', '.join(manifest.archives)}", file=output)
    if manifest.exclusions:
        print(f"Exclusions: {', '.join(manifest.exclusions)}", file=output)
    print(file=output)

    for line in render_lines(records, policy):
        print(line, file=output)
    print(render_summary(records, len(manifest.archives)), file=output)

    return EXIT_OK


if __name__ == '__main__':
    main()
