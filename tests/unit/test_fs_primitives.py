#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the blocking and awaitable filesystem primitives."""

from __future__ import annotations

import os
from pathlib import Path
import stat

from provide.testkit.mocking import patch
import pytest

from appharness.errors import FixtureIOError
from appharness.fs import AsyncFileSystem, FileSystem


class TestFileSystem:
    """Test cases for FileSystem."""

    def test_create_folder_creates_intermediate_folders(self, fs: FileSystem, tmp_path: Path) -> None:
        folder = tmp_path / "a" / "b" / "c"

        result = fs.create_folder(folder)

        assert result == folder
        assert folder.is_dir()

    def test_create_folder_idempotent(self, fs: FileSystem, tmp_path: Path) -> None:
        """Test that creating a folder twice leaves the same state as once."""
        folder = tmp_path / "twice"
        fs.create_folder(folder)
        (folder / "keep.txt").write_text("kept")

        fs.create_folder(folder)

        assert folder.is_dir()
        assert sorted(p.name for p in folder.iterdir()) == ["keep.txt"]

    def test_delete_folder_recursive(self, fs: FileSystem, tmp_path: Path) -> None:
        folder = tmp_path / "tree"
        (folder / "nested").mkdir(parents=True)
        (folder / "nested" / "file.js").write_text("x")

        fs.delete_folder(folder)

        assert not folder.exists()

    def test_delete_folder_absent_is_not_an_error(self, fs: FileSystem, tmp_path: Path) -> None:
        fs.delete_folder(tmp_path / "never-created")
        fs.delete_folder(tmp_path / "never-created")

    def test_delete_folder_on_file_removes_it(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")

        fs.delete_folder(target)

        assert not target.exists()

    def test_write_then_read_round_trip(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        contents = "line one\nünïcode line two\n"

        fs.write_file(target, contents)

        assert fs.read_file(target) == contents

    def test_write_file_creates_parent_folders(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "deep" / "er" / "file.txt"

        fs.write_file(target, "content")

        assert target.read_text() == "content"

    def test_write_file_overwrites(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        fs.write_file(target, "first")

        fs.write_file(target, "second")

        assert fs.read_file(target) == "second"

    def test_write_file_accepts_bytes(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "blob.bin"

        fs.write_file(target, b"\x00\x01")

        assert target.read_bytes() == b"\x00\x01"

    def test_read_missing_file_raises_fixture_io_error(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "missing.txt"

        with pytest.raises(FixtureIOError) as exc_info:
            fs.read_file(target)

        assert exc_info.value.operation == "read-file"
        assert exc_info.value.path == target
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert isinstance(exc_info.value, OSError)
        assert str(target) in str(exc_info.value)

    def test_delete_file(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")

        fs.delete_file(target)

        assert not fs.file_exists(target)

    def test_delete_file_absent_is_not_an_error(self, fs: FileSystem, tmp_path: Path) -> None:
        fs.delete_file(tmp_path / "missing.txt")

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    @pytest.mark.parametrize("mode", [0o600, "600"])
    def test_chmod_file(self, fs: FileSystem, tmp_path: Path, mode: int | str) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")

        fs.chmod_file(target, mode)

        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    def test_chmod_missing_file_raises(self, fs: FileSystem, tmp_path: Path) -> None:
        with pytest.raises(FixtureIOError, match="chmod-file failed"):
            fs.chmod_file(tmp_path / "missing.txt", 0o644)

    def test_file_exists(self, fs: FileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        assert fs.file_exists(target) is False

        target.write_text("x")

        assert fs.file_exists(target) is True

    def test_list_folder(self, fs: FileSystem, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "a.txt").write_text("x")

        assert fs.list_folder(tmp_path) == ["a.txt", "b"]
        assert fs.list_folder(tmp_path / "missing") == []

    def test_create_folder_failure_is_wrapped(self, fs: FileSystem, tmp_path: Path) -> None:
        """Test that OS failures other than 'already present' propagate as FixtureIOError."""
        with patch.object(Path, "mkdir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FixtureIOError) as exc_info:
                fs.create_folder(tmp_path / "denied")

        assert exc_info.value.operation == "create-folder"
        assert exc_info.value.errno == 13


class TestAsyncFileSystem:
    """Test cases for AsyncFileSystem."""

    @pytest.mark.asyncio
    async def test_round_trip(self, afs: AsyncFileSystem, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.txt"

        await afs.write_file(target, "async contents")

        assert await afs.file_exists(target) is True
        assert await afs.read_file(target) == "async contents"

    @pytest.mark.asyncio
    async def test_folder_operations(self, afs: AsyncFileSystem, tmp_path: Path) -> None:
        folder = tmp_path / "x" / "y"

        await afs.create_folder(folder)
        await afs.create_folder(folder)
        assert folder.is_dir()
        assert await afs.list_folder(tmp_path / "x") == ["y"]

        await afs.delete_folder(tmp_path / "x")
        await afs.delete_folder(tmp_path / "x")
        assert not (tmp_path / "x").exists()

    @pytest.mark.asyncio
    async def test_errors_propagate(self, afs: AsyncFileSystem, tmp_path: Path) -> None:
        with pytest.raises(FixtureIOError):
            await afs.read_file(tmp_path / "missing.txt")

    @pytest.mark.asyncio
    async def test_delete_file_and_chmod(self, afs: AsyncFileSystem, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        await afs.write_file(target, "x")

        await afs.chmod_file(target, "644")
        await afs.delete_file(target)
        await afs.delete_file(target)

        assert not target.exists()

    def test_wraps_given_sync_filesystem(self, fs: FileSystem) -> None:
        assert AsyncFileSystem(fs).sync is fs
        assert isinstance(AsyncFileSystem().sync, FileSystem)


# 🔼⚙️🔚
