from __future__ import annotations

import logging
import os

import pytest

from conftest import asset_entry
from unitypackage_extractor.common.config import ExtractorSettings
from unitypackage_extractor.common.errors import ArchiveError, ExtractionIOError, InputError
from unitypackage_extractor.core import extractor
from unitypackage_extractor.core.extractor import extract_package
from unitypackage_extractor.core.report import ExtractionState


def _tree(root):
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def test_end_to_end_single_material(make_package, tmp_path, staging_parent):
    package = make_package({"9f2c": asset_entry("Assets/Materials/Red.mat", bytes([0x01, 0x02, 0x03]))})
    out = tmp_path / "out"

    report = extract_package(package, out, ExtractorSettings(staging_parent=staging_parent))

    assert (out / "Assets" / "Materials" / "Red.mat").read_bytes() == b"\x01\x02\x03"
    assert report.state is ExtractionState.DONE
    assert report.staged_files == 2
    assert report.elapsed >= 0
    assert list(staging_parent.iterdir()) == []


def test_extracts_exactly_n_files(make_package, tmp_path):
    entries = {f"hash{i:02d}": asset_entry(f"Assets/Item{i}.asset", f"item {i}".encode()) for i in range(12)}
    package = make_package(entries)
    out = tmp_path / "out"

    report = extract_package(package, out)

    assert len(report.extracted) == 12
    assert _tree(out) == {f"Assets/Item{i}.asset": f"item {i}".encode() for i in range(12)}


def test_extraction_is_idempotent(make_package, tmp_path):
    package = make_package({
        "a": asset_entry("Assets/A.txt", b"a"),
        "b": asset_entry("Assets/Sub/B.txt", b"b"),
        "c": {"pathname": b"Assets/NoAsset"},
    })
    out = tmp_path / "out"

    extract_package(package, out)
    first = _tree(out)
    extract_package(package, out)

    assert _tree(out) == first == {"Assets/A.txt": b"a", "Assets/Sub/B.txt": b"b"}


def test_output_root_defaults_to_cwd_and_is_created(make_package, tmp_path, monkeypatch):
    package = make_package({"a": asset_entry("Assets/A.txt", b"a")})
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    report = extract_package(package)
    assert (workdir / "Assets/A.txt").read_bytes() == b"a"
    assert report.output_root.resolve() == workdir.resolve()

    nested = tmp_path / "does" / "not" / "exist"
    extract_package(package, nested)
    assert (nested / "Assets/A.txt").exists()


def test_suspicious_archive_extracts_safe_entries(make_package, tmp_path, staging_parent):
    package = make_package({
        "a": asset_entry("../../etc/passwd", b"evil"),
        "b": asset_entry("Assets/Fine.txt", b"fine"),
    })
    out = tmp_path / "out"

    report = extract_package(package, out, ExtractorSettings(staging_parent=staging_parent))

    assert report.suspicious
    assert report.state is ExtractionState.DONE
    assert _tree(out) == {"Assets/Fine.txt": b"fine"}
    assert not (tmp_path / "etc").exists()
    assert list(staging_parent.iterdir()) == []


def test_missing_package_raises_input_error(tmp_path, staging_parent):
    with pytest.raises(InputError, match="does not exist"):
        extract_package(tmp_path / "missing.unitypackage", tmp_path / "out",
                        ExtractorSettings(staging_parent=staging_parent))
    assert not (tmp_path / "out").exists()
    assert list(staging_parent.iterdir()) == []


def test_directory_package_raises_input_error(tmp_path):
    with pytest.raises(InputError, match="is not a file"):
        extract_package(tmp_path, tmp_path / "out")


def test_malformed_archive_cleans_up(tmp_path, staging_parent):
    bogus = tmp_path / "bogus.unitypackage"
    bogus.write_bytes(b"\x1f\x8b garbage")

    with pytest.raises(ArchiveError):
        extract_package(bogus, tmp_path / "out", ExtractorSettings(staging_parent=staging_parent))
    assert list(staging_parent.iterdir()) == []


def test_placement_failure_cleans_up(make_package, tmp_path, staging_parent):
    package = make_package({"a": asset_entry("Assets/Blocked", b"x")})
    out = tmp_path / "out"
    (out / "Assets" / "Blocked").mkdir(parents=True)

    with pytest.raises(ExtractionIOError):
        extract_package(package, out, ExtractorSettings(staging_parent=staging_parent))
    assert list(staging_parent.iterdir()) == []


def test_output_root_that_is_a_file_raises(make_package, tmp_path):
    package = make_package({"a": asset_entry("Assets/A.txt")})
    blocker = tmp_path / "out"
    blocker.write_bytes(b"")

    with pytest.raises(ExtractionIOError, match="output directory"):
        extract_package(package, blocker)


def test_keyboard_interrupt_still_removes_staging(make_package, tmp_path, staging_parent, monkeypatch):
    package = make_package({"a": asset_entry("Assets/A.txt")})

    def interrupted(*_args, **_kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(extractor, "reconstruct_tree", interrupted)

    with pytest.raises(KeyboardInterrupt):
        extract_package(package, tmp_path / "out", ExtractorSettings(staging_parent=staging_parent))
    assert list(staging_parent.iterdir()) == []


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="root and Windows ignore file modes")
def test_unreadable_package_raises_input_error(make_package, tmp_path):
    package = make_package({"a": asset_entry("Assets/A.txt")})
    package.chmod(0)
    try:
        with pytest.raises(InputError, match="not readable"):
            extract_package(package, tmp_path / "out")
    finally:
        package.chmod(0o644)


def test_failure_carries_failed_report(tmp_path, staging_parent):
    bogus = tmp_path / "bogus.unitypackage"
    bogus.write_bytes(b"not an archive")

    with pytest.raises(ArchiveError) as excinfo:
        extract_package(bogus, tmp_path / "out", ExtractorSettings(staging_parent=staging_parent))

    report = excinfo.value.report
    assert report is not None
    assert report.state is ExtractionState.FAILED
    assert report.package_path == bogus


def test_state_transitions_bracket_staging_removal(make_package, tmp_path, caplog):
    package = make_package({"a": asset_entry("Assets/A.txt")})
    caplog.set_level(logging.DEBUG)

    extract_package(package, tmp_path / "out")

    messages = caplog.messages
    cleaning = messages.index("State reconstructing -> cleaning-up")
    removed = next(i for i, m in enumerate(messages) if m.startswith("Removed staging area"))
    done = messages.index("State cleaning-up -> done")
    assert cleaning < removed < done
