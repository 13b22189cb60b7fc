"""Archive reader: stage a .unitypackage (gzip + tar) verbatim on disk.

No entry semantics are interpreted here. The staged tree mirrors the tar
layout (`<hash>/<member>`) so malformed containers fail before anything is
written under the output directory.
"""

from __future__ import annotations

import gzip
import shutil
import tarfile
import tempfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from unitypackage_extractor.common.constants import (
    ASSET_MEMBER,
    COPY_CHUNK_SIZE,
    PATHNAME_MEMBER,
    STAGING_PREFIX,
)
from unitypackage_extractor.common.errors import ArchiveError, ExtractionIOError
from unitypackage_extractor.common.logging_config import get_logger

logger = get_logger(__name__)

_STREAM_ERRORS = (tarfile.TarError, gzip.BadGzipFile, EOFError, zlib.error)


@dataclass(frozen=True)
class HashedEntry:
    """One top-level staging directory, named by an opaque hash."""

    name: str
    directory: Path

    @property
    def pathname_file(self) -> Path:
        return self.directory / PATHNAME_MEMBER

    @property
    def asset_file(self) -> Path:
        return self.directory / ASSET_MEMBER


@contextmanager
def staging_area(parent: Optional[Path] = None) -> Iterator[Path]:
    """Create a unique temporary directory and remove it on every exit path."""
    try:
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        tmp_dir = tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, dir=parent)
    except OSError as exc:
        raise ExtractionIOError(
            f"Could not create staging area ({exc.strerror or exc}) in",
            str(parent or tempfile.gettempdir()),
        ) from exc

    logger.debug("Created staging area %s", tmp_dir.name)
    try:
        yield Path(tmp_dir.name)
    finally:
        tmp_dir.cleanup()
        logger.debug("Removed staging area %s", tmp_dir.name)


def _staging_target(root: Path, member: tarfile.TarInfo) -> Path:
    target = (root / member.name).resolve()
    if target != root and root not in target.parents:
        raise ArchiveError("Unsafe tar member path detected", member.name)
    return target


def unpack_archive(archive_path: Path, staging_root: Path) -> int:
    """Decompress `archive_path` into `staging_root` byte for byte.

    Directories and regular files are staged at their original relative
    paths. Links and special files are never materialized. Returns the number
    of staged files.

    Raises:
        ArchiveError: the stream is not valid gzip/tar, a member name escapes
            the staging root, or writing a staged member fails.
    """
    root = staging_root.resolve()
    staged = 0
    current: Optional[str] = None

    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            for member in tar:
                current = member.name
                target = _staging_target(root, member)
                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                elif member.isfile():
                    target.parent.mkdir(parents=True, exist_ok=True)
                    source = tar.extractfile(member)
                    with source, open(target, "wb") as out_file:
                        shutil.copyfileobj(source, out_file, COPY_CHUNK_SIZE)
                    staged += 1
                else:
                    logger.warning("Skipping non-regular archive member %r", member.name)
                current = None
    except ArchiveError:
        raise
    except _STREAM_ERRORS as exc:
        raise ArchiveError(f"Malformed archive '{archive_path}': {exc}", current) from exc
    except OSError as exc:
        raise ArchiveError(f"Could not stage archive contents: {exc}", current) from exc

    logger.debug("Staged %d files from %s", staged, archive_path)
    return staged


def iter_hashed_entries(staging_root: Path) -> Iterator[HashedEntry]:
    """Yield every immediate subdirectory of the staging area in name order."""
    for child in sorted(staging_root.iterdir()):
        if child.is_dir():
            yield HashedEntry(name=child.name, directory=child)
        else:
            logger.debug("Ignoring top-level archive file %s", child.name)


__all__ = ["HashedEntry", "staging_area", "unpack_archive", "iter_hashed_entries"]
