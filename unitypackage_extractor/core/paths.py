"""Pathname decoding, sanitization and containment checks.

Everything here is read-only: a destination is resolved and validated before
the reconstructor is allowed to touch the output tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from unitypackage_extractor.common.constants import (
    REPLACEMENT_CHAR,
    WINDOWS_DRIVE_PREFIX,
    WINDOWS_INVALID_CHARS,
    WINDOWS_RESERVED_NAMES,
)
from unitypackage_extractor.common.errors import PathTraversalError
from unitypackage_extractor.common.logging_config import get_logger

from .archive import HashedEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedPath:
    """A validated destination inside the output root."""

    raw: str
    relative: Path
    destination: Path

    @property
    def display(self) -> str:
        return self.relative.as_posix()


def read_pathname(entry: HashedEntry) -> Optional[str]:
    """Return the raw relative path stored in an entry's `pathname` member.

    Only the first line is used; Unity may append extra lines after the path.
    Returns None when the member is missing, empty, unreadable or not UTF-8.
    """
    try:
        with open(entry.pathname_file, 'rb') as f:
            first_line = f.readline().decode('utf-8')
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read pathname of entry '%s': %s", entry.name, exc)
        return None

    return first_line.rstrip() or None


def _sanitize_component(part: str) -> str:
    part = WINDOWS_INVALID_CHARS.sub(REPLACEMENT_CHAR, part)
    # Windows silently drops trailing dots and spaces
    part = part.rstrip('. ')
    if not part:
        return REPLACEMENT_CHAR
    if part.split('.')[0].rstrip(' ').upper() in WINDOWS_RESERVED_NAMES:
        part = REPLACEMENT_CHAR + part
    return part


def sanitize_pathname(raw: str) -> Path:
    """Turn a raw archive pathname into a portable relative path.

    Windows-illegal characters and device names are rewritten on every host so
    an archive extracts the same way everywhere.

    Raises:
        PathTraversalError: the pathname is absolute, contains a `..`
            component or names nothing at all.
    """
    normalized = raw.replace('\\', '/')
    if normalized.startswith('/') or WINDOWS_DRIVE_PREFIX.match(normalized):
        raise PathTraversalError("Absolute pathnames are not allowed", raw)

    parts = []
    for part in normalized.split('/'):
        if part in ('', '.'):
            continue
        if part == '..':
            raise PathTraversalError("Parent directory references are not allowed", raw)
        parts.append(_sanitize_component(part))

    if not parts:
        raise PathTraversalError("Pathname does not name a file", raw)

    sanitized = Path(*parts)
    if sanitized.as_posix() != normalized:
        logger.debug("Sanitized pathname %r -> %r", raw, sanitized.as_posix())
    return sanitized


def resolve_destination(raw: str, output_root: Path) -> ResolvedPath:
    """Resolve `raw` under `output_root` without modifying the filesystem.

    The canonical destination (symlinks already present under the output root
    included) must lie strictly inside the canonical output root.

    Raises:
        PathTraversalError: the pathname is unsafe or escapes the output root.
    """
    relative = sanitize_pathname(raw)
    root = Path(output_root).resolve()
    destination = root / relative

    canonical = destination.resolve()
    if canonical == root or root not in canonical.parents:
        raise PathTraversalError(f"Pathname resolves outside of '{root}'", raw)

    return ResolvedPath(raw=raw, relative=relative, destination=destination)


__all__ = ["ResolvedPath", "read_pathname", "sanitize_pathname", "resolve_destination"]
