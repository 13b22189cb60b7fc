"""Settings for the UnityPackage extractor.

There is no configuration file. Settings come from the environment
(`UNITYPACKAGE_TEMP_DIR`, `UNITYPACKAGE_LOG_LEVEL`) and may be overridden by
CLI flags. Core code receives an `ExtractorSettings` explicitly and never reads
the environment itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .constants import LOG_LEVEL_ENV, TEMP_DIR_ENV


@dataclass(frozen=True)
class ExtractorSettings:
    """Typed extractor settings."""

    staging_parent: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExtractorSettings":
        environ = os.environ if environ is None else environ
        temp_dir = (environ.get(TEMP_DIR_ENV) or "").strip()
        level = (environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
        return cls(
            staging_parent=Path(temp_dir) if temp_dir else None,
            log_level=level or "INFO",
        )

    def with_overrides(
        self,
        staging_parent: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "ExtractorSettings":
        """Return a copy with any non-empty override applied."""
        changes = {}
        if staging_parent:
            changes["staging_parent"] = Path(staging_parent)
        if log_level:
            changes["log_level"] = log_level.upper()
        return replace(self, **changes)
