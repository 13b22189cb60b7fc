"""Run state and outcome records for a single extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ExtractionState(Enum):
    """States of one extraction run."""

    IDLE = "idle"
    DECOMPRESSING = "decompressing"
    RECONSTRUCTING = "reconstructing"
    CLEANING_UP = "cleaning-up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ExtractedAsset:
    entry: str
    relative_path: str
    destination: Path


@dataclass
class SkippedEntry:
    entry: str
    reason: str


@dataclass
class RejectedEntry:
    entry: str
    pathname: str
    reason: str


@dataclass
class ExtractionReport:
    """What happened to every hashed entry of one archive."""

    package_path: Optional[Path] = None
    output_root: Optional[Path] = None
    state: ExtractionState = ExtractionState.IDLE
    staged_files: int = 0
    extracted: List[ExtractedAsset] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)
    rejected: List[RejectedEntry] = field(default_factory=list)
    overwritten: List[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def suspicious(self) -> bool:
        """True when at least one entry tried to escape the output root."""
        return bool(self.rejected)

    def summary(self) -> str:
        return (
            f"{len(self.extracted)} extracted, {len(self.skipped)} skipped, "
            f"{len(self.rejected)} rejected"
        )
