"""
Custom exception classes for the UnityPackage extractor.
"""

from typing import Optional


class UnityPackageError(Exception):
    """Base exception class for extractor errors.

    `report` holds the ExtractionReport of the failed run when raised from
    `extract_package`.
    """

    report = None


class InputError(UnityPackageError):
    """Raised when the archive path is missing, not a file or unreadable."""
    pass


class ArchiveError(UnityPackageError):
    """Raised when the gzip/tar stream is malformed or cannot be staged."""

    def __init__(self, message: str, member: Optional[str] = None):
        if member:
            message = f"{message} (member {member!r})"
        super().__init__(message)
        self.member = member


class PathTraversalError(UnityPackageError):
    """Raised when a pathname would resolve outside the output root."""

    def __init__(self, message: str, pathname: str):
        super().__init__(f"{message}: {pathname!r}")
        self.pathname = pathname


class ExtractionIOError(UnityPackageError):
    """Raised when creating directories or placing a file fails."""

    def __init__(self, message: str, relative_path: Optional[str] = None):
        if relative_path:
            message = f"{message} '{relative_path}'"
        super().__init__(message)
        self.relative_path = relative_path
