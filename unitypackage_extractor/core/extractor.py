"""
Extraction pipeline for a single .unitypackage.

Runs Idle -> Decompressing -> Reconstructing -> CleaningUp -> Done, moving to
Failed from any state on error. The staging area is owned by a context
manager, so CleaningUp happens on every exit path.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Optional, Union

from unitypackage_extractor.common.config import ExtractorSettings
from unitypackage_extractor.common.errors import ExtractionIOError, InputError, UnityPackageError
from unitypackage_extractor.common.logging_config import get_logger

from .archive import staging_area, unpack_archive
from .reconstructor import reconstruct_tree
from .report import ExtractionReport, ExtractionState

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def _transition(report: ExtractionReport, state: ExtractionState) -> None:
    logger.debug("State %s -> %s", report.state.value, state.value)
    report.state = state


def validate_package_path(package_path: PathLike) -> Path:
    """Check that the archive exists and can be read."""
    path = Path(package_path)
    if not path.exists():
        raise InputError(f"The file '{path}' does not exist.")
    if not path.is_file():
        raise InputError(f"'{path}' is not a file.")
    if not os.access(path, os.R_OK):
        raise InputError(f"The file '{path}' is not readable.")
    return path


def _ensure_output_root(output_root: Path) -> None:
    try:
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExtractionIOError(
            f"Could not create output directory ({exc.strerror or exc})", str(output_root)
        ) from exc


def extract_package(
    package_path: PathLike,
    output_root: Optional[PathLike] = None,
    settings: Optional[ExtractorSettings] = None,
) -> ExtractionReport:
    """
    Extract a .unitypackage into `output_root`.

    Args:
        package_path: The archive to extract
        output_root: Destination directory; the current directory when None.
            Created if missing.
        settings: Staging location and other options

    Returns:
        An ExtractionReport. `report.suspicious` is True when entries were
        rejected for escaping the output root.

    Raises:
        InputError: the archive is missing or unreadable
        ArchiveError: the archive is not valid gzip/tar
        ExtractionIOError: a directory or file could not be written

    Raised UnityPackageErrors carry the failed run's report (state FAILED)
    as `exc.report`.
    """
    settings = settings or ExtractorSettings()
    output = Path(output_root) if output_root is not None else Path.cwd()
    report = ExtractionReport(package_path=Path(package_path), output_root=output)
    started = time.perf_counter()

    try:
        package = validate_package_path(package_path)
        _ensure_output_root(output)

        with staging_area(settings.staging_parent) as staging_root:
            try:
                _transition(report, ExtractionState.DECOMPRESSING)
                logger.info("Unpacking file temporarily...")
                report.staged_files = unpack_archive(package, staging_root)

                _transition(report, ExtractionState.RECONSTRUCTING)
                reconstruct_tree(staging_root, output, report)
            finally:
                # the staging directory is removed as the with block exits
                _transition(report, ExtractionState.CLEANING_UP)
    except BaseException as exc:
        _transition(report, ExtractionState.FAILED)
        if isinstance(exc, UnityPackageError):
            exc.report = report
        raise
    finally:
        report.elapsed = time.perf_counter() - started

    _transition(report, ExtractionState.DONE)
    logger.debug("Extraction of %s finished: %s", package, report.summary())
    return report


__all__ = ["extract_package", "validate_package_path"]
