"""Shared fixtures: a stable temp directory on WSL and a .unitypackage builder."""

from __future__ import annotations

import io
import os
import platform
import tarfile
import tempfile
from pathlib import Path
from typing import Dict, Mapping

import pytest


def _is_wsl() -> bool:
    release = platform.release().lower()
    version = platform.version().lower()
    return "microsoft" in release or "microsoft" in version


if _is_wsl() and os.path.isdir("/tmp"):
    os.environ["TMPDIR"] = "/tmp"
    os.environ["TEMP"] = "/tmp"
    os.environ["TMP"] = "/tmp"
    tempfile.tempdir = "/tmp"


def build_unitypackage(path: Path, entries: Mapping[str, Mapping[str, bytes]]) -> Path:
    """Write a gzip'd tar laid out as `<hash>/<member>` like Unity does."""
    with tarfile.open(path, "w:gz") as tar:
        for hash_name, members in entries.items():
            dir_info = tarfile.TarInfo(hash_name)
            dir_info.type = tarfile.DIRTYPE
            dir_info.mode = 0o755
            tar.addfile(dir_info)
            for member_name, data in members.items():
                info = tarfile.TarInfo(f"{hash_name}/{member_name}")
                info.size = len(data)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
    return path


def asset_entry(pathname: str, data: bytes = b"data") -> Dict[str, bytes]:
    return {"pathname": pathname.encode("utf-8"), "asset": data}


@pytest.fixture
def make_package(tmp_path):
    """Factory building a .unitypackage under tmp_path."""

    def _make(entries: Mapping[str, Mapping[str, bytes]], name: str = "test.unitypackage") -> Path:
        return build_unitypackage(tmp_path / name, entries)

    return _make


@pytest.fixture
def staging_parent(tmp_path):
    """A dedicated parent for staging areas so leftovers are easy to spot."""
    parent = tmp_path / "staging"
    parent.mkdir()
    return parent
