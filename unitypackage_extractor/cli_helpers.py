"""Shared CLI helpers for unitypackage-extractor."""

import sys
from typing import Optional

from unitypackage_extractor.common.constants import ExitCodes
from unitypackage_extractor.common.errors import (
    ArchiveError,
    ExtractionIOError,
    InputError,
    PathTraversalError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to exit codes."""
    if isinstance(exc, InputError):
        return ExitCodes.INPUT_ERROR
    if isinstance(exc, ArchiveError):
        return ExitCodes.ARCHIVE_ERROR
    if isinstance(exc, ExtractionIOError):
        return ExitCodes.IO_ERROR
    if isinstance(exc, PathTraversalError):
        return ExitCodes.PATH_TRAVERSAL
    return None
