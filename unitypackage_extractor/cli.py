"""
Command Line Interface for the UnityPackage extractor.

Usage: unitypackage-extractor <file.unitypackage> [output_path]
"""

import argparse
import sys
from typing import List, Optional

from ._version import __version__
from .cli_helpers import exit_with_error, map_exception_to_exit_code
from .common.config import ExtractorSettings
from .common.constants import ExitCodes
from .common.logging_config import configure_logging, get_logger
from .core.extractor import extract_package
from .core.report import ExtractionReport

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='unitypackage-extractor',
        description='UnityPackage Extractor: unpack a .unitypackage into its project folder layout.',
    )
    parser.add_argument('package', metavar='file.unitypackage',
                        help='Path to the file you want to extract.')
    parser.add_argument('output', metavar='output_path', nargs='?', default=None,
                        help='(Optional) Folder where to extract files. Defaults to the current directory.')
    parser.add_argument('--temp-dir', dest='temp_dir', default=None,
                        help='Directory in which the temporary staging folder is created '
                             '(default: system temp directory)')
    parser.add_argument('--log-level', dest='log_level', type=str.upper, choices=_LOG_LEVELS,
                        default=None, help='Logging verbosity (default: INFO)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _print_result(report: ExtractionReport) -> None:
    print(f"Extracted {report.summary()} into '{report.output_root}'")
    print(f"--- Finished in {report.elapsed:.4f} seconds ---")


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help(sys.stderr)
        print(file=sys.stderr)
        exit_with_error("You must specify at least the .unitypackage file.", ExitCodes.USAGE)

    parsed_args = parser.parse_args(args)
    settings = ExtractorSettings.from_env().with_overrides(
        staging_parent=parsed_args.temp_dir,
        log_level=parsed_args.log_level,
    )
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    try:
        report = extract_package(parsed_args.package, parsed_args.output, settings)
    except KeyboardInterrupt:
        exit_with_error("Operation cancelled by user.", ExitCodes.INTERRUPTED)
    except Exception as exc:
        exit_code = map_exception_to_exit_code(exc)
        if exit_code is None:
            logger.debug("Unexpected failure", exc_info=True)
            exit_with_error(f"Extraction failed: {exc}", ExitCodes.FAILURE)
        exit_with_error(str(exc), exit_code)

    _print_result(report)
    if report.suspicious:
        for rejected in report.rejected:
            logger.error("Rejected '%s': %s", rejected.entry, rejected.reason)
        exit_with_error(
            f"{len(report.rejected)} entries were rejected because their paths escape "
            f"the output directory; the archive may be malicious.",
            ExitCodes.PATH_TRAVERSAL,
        )


if __name__ == '__main__':
    main()
