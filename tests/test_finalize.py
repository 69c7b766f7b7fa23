"""
Tests for the filesystem finalizer: symlinks, exec bits, dead-link sweep.
"""

import os
import stat
from pathlib import Path

import pytest

from idt.core.services.tool_install.domain.errors import FinalizeError
from idt.core.services.tool_install.execution.finalize import (
    link_files_in_dir,
    make_executable,
    rm_dead_symlinks,
    symlink,
)


def _is_exec(path: Path) -> bool:
    return bool(path.stat().st_mode & stat.S_IXUSR)


# ── symlink ──────────────────────────────────────────────────────────


class TestSymlink:
    def test_creates_link(self, tmp_path: Path):
        target = tmp_path / "real"
        target.write_text("x")
        dest = tmp_path / "bin" / "tool"

        symlink(target, dest)
        assert dest.is_symlink()
        assert Path(os.readlink(dest)) == target

    def test_idempotent(self, tmp_path: Path):
        target = tmp_path / "real"
        target.write_text("x")
        dest = tmp_path / "tool"

        symlink(target, dest)
        symlink(target, dest)
        assert dest.is_symlink()
        assert Path(os.readlink(dest)) == target
        assert sorted(p.name for p in tmp_path.iterdir()) == ["real", "tool"]

    def test_replaces_other_target(self, tmp_path: Path):
        old, new = tmp_path / "old", tmp_path / "new"
        old.write_text("1")
        new.write_text("2")
        dest = tmp_path / "tool"

        symlink(old, dest)
        symlink(new, dest)
        assert dest.read_text() == "2"

    def test_replaces_regular_file(self, tmp_path: Path):
        target = tmp_path / "real"
        target.write_text("x")
        dest = tmp_path / "tool"
        dest.write_text("stale copy")

        symlink(target, dest)
        assert dest.is_symlink()

    def test_replaces_dangling_link(self, tmp_path: Path):
        dest = tmp_path / "tool"
        os.symlink(tmp_path / "gone", dest)
        target = tmp_path / "real"
        target.write_text("x")

        symlink(target, dest)
        assert dest.read_text() == "x"

    def test_refuses_directory(self, tmp_path: Path):
        dest = tmp_path / "tool"
        dest.mkdir()
        with pytest.raises(FinalizeError, match="destination is a directory"):
            symlink(tmp_path / "real", dest)


# ── make_executable ──────────────────────────────────────────────────


class TestMakeExecutable:
    def test_file(self, tmp_path: Path):
        f = tmp_path / "tool"
        f.write_text("x")
        f.chmod(0o600)

        assert make_executable(f) == [f]
        assert stat.S_IMODE(f.stat().st_mode) == 0o755

    def test_directory_regular_files_only(self, tmp_path: Path):
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "c").write_text("c")

        changed = make_executable(tmp_path)
        assert sorted(p.name for p in changed) == ["a", "b"]
        assert _is_exec(tmp_path / "a")
        assert not _is_exec(tmp_path / "sub" / "c")

    def test_missing(self, tmp_path: Path):
        with pytest.raises(FinalizeError):
            make_executable(tmp_path / "nope")


# ── link_files_in_dir / rm_dead_symlinks ─────────────────────────────


class TestLinkFilesInDir:
    def test_links_every_file(self, tmp_path: Path):
        src = tmp_path / "node_modules" / ".bin"
        src.mkdir(parents=True)
        for name in ("vscode-css-language-server", "vscode-html-language-server"):
            (src / name).write_text("#!/bin/sh")
        dest = tmp_path / "bin"

        linked = link_files_in_dir(src, dest)
        assert sorted(p.name for p in linked) == [
            "vscode-css-language-server", "vscode-html-language-server",
        ]
        assert all(p.is_symlink() for p in linked)

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(FinalizeError):
            link_files_in_dir(tmp_path / "nope", tmp_path / "bin")


class TestRmDeadSymlinks:
    def test_removes_only_dangling(self, tmp_path: Path):
        live = tmp_path / "real"
        live.write_text("x")
        os.symlink(live, tmp_path / "ok")
        os.symlink(tmp_path / "gone", tmp_path / "dead")

        removed = rm_dead_symlinks(tmp_path)
        assert [p.name for p in removed] == ["dead"]
        assert (tmp_path / "ok").is_symlink()
        assert live.exists()

    def test_missing_directory(self, tmp_path: Path):
        assert rm_dead_symlinks(tmp_path / "nope") == []
