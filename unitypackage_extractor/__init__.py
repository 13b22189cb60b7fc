"""UnityPackage Extractor - unpack .unitypackage archives into a project tree.

Python implementation providing:
* Verbatim staging of the gzip/tar container
* Pathname sanitization with path traversal (Zip Slip) protection
* Reconstruction of the original project-relative file tree
* Thin CLI wrapper (`unitypackage-extractor`)

Public helpers exported here are considered part of the semi-stable API. The
CLI remains the primary user interface.
"""

from ._version import __version__
from .common.config import ExtractorSettings  # noqa: F401
from .common.errors import (  # noqa: F401
    ArchiveError,
    ExtractionIOError,
    InputError,
    PathTraversalError,
    UnityPackageError,
)
from .common.logging_config import configure_logging  # noqa: F401
from .core.extractor import extract_package  # noqa: F401
from .core.paths import resolve_destination, sanitize_pathname  # noqa: F401
from .core.report import ExtractionReport, ExtractionState  # noqa: F401

__all__ = [
    "__version__",
    "configure_logging",
    "extract_package",
    "resolve_destination",
    "sanitize_pathname",
    "ExtractorSettings",
    "ExtractionReport",
    "ExtractionState",
    "UnityPackageError",
    "InputError",
    "ArchiveError",
    "PathTraversalError",
    "ExtractionIOError",
]
