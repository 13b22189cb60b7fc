"""
Tree reconstructor: place every staged asset at its project-relative path.

Per hashed entry:
* read and sanitize the `pathname` member
* resolve and validate the destination (no writes before this passes)
* create parent directories and move the `asset` member into place

Entry-level anomalies are skipped with a warning. Filesystem failures while
placing a file abort the whole run.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import Dict, Optional

from unitypackage_extractor.common.errors import ExtractionIOError, PathTraversalError
from unitypackage_extractor.common.logging_config import get_logger

from .archive import HashedEntry, iter_hashed_entries
from .paths import ResolvedPath, read_pathname, resolve_destination
from .report import ExtractedAsset, ExtractionReport, RejectedEntry, SkippedEntry

logger = get_logger(__name__)


def _move_file(source: Path, destination: Path) -> None:
    """Rename `source` over `destination`, copying across devices."""
    try:
        os.replace(source, destination)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.copyfile(source, destination)
        os.unlink(source)


def place_asset(source: Path, resolved: ResolvedPath) -> None:
    """
    Materialize an asset at its validated destination, overwriting any file.

    Args:
        source: The staged `asset` member
        resolved: The validated destination

    Raises:
        ExtractionIOError: directory creation or the move failed
    """
    try:
        resolved.destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExtractionIOError(
            f"Could not create directories ({exc.strerror or exc}) for", resolved.display
        ) from exc

    try:
        _move_file(source, resolved.destination)
    except OSError as exc:
        raise ExtractionIOError(
            f"Could not write file ({exc.strerror or exc})", resolved.display
        ) from exc


def _skip(report: ExtractionReport, entry: HashedEntry, reason: str) -> None:
    logger.warning("Skipping '%s': %s", entry.name, reason)
    report.skipped.append(SkippedEntry(entry=entry.name, reason=reason))


def reconstruct_tree(
    staging_root: Path,
    output_root: Path,
    report: Optional[ExtractionReport] = None,
) -> ExtractionReport:
    """
    Walk the staging area and rebuild the project tree under `output_root`.

    Entries whose pathname escapes `output_root` are rejected and recorded;
    the remaining entries are still extracted. When two entries map to the
    same destination the later one (in hash order) wins.

    Returns:
        The report, updated with extracted, skipped and rejected entries

    Raises:
        ExtractionIOError: a file could not be placed
    """
    if report is None:
        report = ExtractionReport(output_root=output_root)
    placed: Dict[Path, str] = {}

    for entry in iter_hashed_entries(staging_root):
        raw = read_pathname(entry)
        if raw is None:
            _skip(report, entry, "missing, empty or unreadable pathname")
            continue

        try:
            resolved = resolve_destination(raw, output_root)
        except PathTraversalError as exc:
            logger.warning(
                "SECURITY: Rejecting '%s' as it is outside the destination path '%s': %s",
                entry.name, output_root, exc,
            )
            report.rejected.append(RejectedEntry(entry=entry.name, pathname=raw, reason=str(exc)))
            continue

        if not entry.asset_file.is_file():
            _skip(report, entry, f"no asset payload for '{raw}'")
            continue

        previous = placed.get(resolved.destination)
        if previous is not None:
            logger.warning(
                "Entry '%s' overwrites '%s' already extracted from '%s'",
                entry.name, resolved.display, previous,
            )
            report.overwritten.append(resolved.display)

        logger.info("Extracting '%s' as '%s'", entry.name, resolved.display)
        place_asset(entry.asset_file, resolved)
        placed[resolved.destination] = entry.name
        report.extracted.append(
            ExtractedAsset(
                entry=entry.name,
                relative_path=resolved.display,
                destination=resolved.destination,
            )
        )

    return report


__all__ = ["place_asset", "reconstruct_tree"]
