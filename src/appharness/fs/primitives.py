#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Filesystem primitives used to build fixture trees.

``FileSystem`` performs blocking operations. ``AsyncFileSystem`` exposes the same
operations as coroutines which run the blocking call in a worker thread. Every
write creates missing parent folders first. Creating a folder that exists and
deleting a folder or file that is already absent are not errors."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
import os
from pathlib import Path
import shutil

from provide.foundation.logger import get_logger

from appharness.errors import FixtureIOError

log = get_logger(__name__)

PathLike = str | os.PathLike[str]


@contextmanager
def _translate_os_errors(operation: str, path: Path) -> Iterator[None]:
    try:
        yield
    except FixtureIOError:
        raise
    except OSError as e:
        log.error("Filesystem operation failed", operation=operation, path=str(path), error=str(e))
        raise FixtureIOError(operation, path, e) from e


def _parse_mode(mode: int | str) -> int:
    if isinstance(mode, str):
        return int(mode, 8)
    return mode


class FileSystem:
    """Blocking filesystem operations over text files and folders."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def create_folder(self, folder: PathLike) -> Path:
        """Create a folder and its intermediate folders."""
        path = Path(folder)
        with _translate_os_errors("create-folder", path):
            path.mkdir(parents=True, exist_ok=True)
        log.debug("Folder created", path=str(path))
        return path

    def delete_folder(self, folder: PathLike) -> None:
        """Delete a folder and everything below it."""
        path = Path(folder)
        with _translate_os_errors("delete-folder", path):
            if path.is_symlink() or path.is_file():
                path.unlink(missing_ok=True)
            else:
                try:
                    shutil.rmtree(path)
                except FileNotFoundError:
                    return
        log.debug("Folder deleted", path=str(path))

    def write_file(self, file_path: PathLike, contents: str | bytes) -> Path:
        path = Path(file_path)
        self.create_folder(path.parent)
        with _translate_os_errors("write-file", path):
            if isinstance(contents, bytes):
                path.write_bytes(contents)
            else:
                path.write_text(contents, encoding=self.encoding)
        log.debug("File written", path=str(path))
        return path

    def read_file(self, file_path: PathLike) -> str:
        path = Path(file_path)
        with _translate_os_errors("read-file", path):
            return path.read_text(encoding=self.encoding)

    def delete_file(self, file_path: PathLike) -> None:
        path = Path(file_path)
        with _translate_os_errors("delete-file", path):
            path.unlink(missing_ok=True)
        log.debug("File deleted", path=str(path))

    def chmod_file(self, file_path: PathLike, mode: int | str) -> None:
        """Change file permissions. ``mode`` may be an int or an octal string such as ``"755"``."""
        path = Path(file_path)
        with _translate_os_errors("chmod-file", path):
            path.chmod(_parse_mode(mode))

    def file_exists(self, file_path: PathLike) -> bool:
        return Path(file_path).exists()

    def list_folder(self, folder: PathLike) -> list[str]:
        """Names of the immediate children of a folder, empty if it does not exist."""
        path = Path(folder)
        with _translate_os_errors("list-folder", path):
            try:
                return sorted(entry.name for entry in path.iterdir())
            except FileNotFoundError:
                return []


class AsyncFileSystem:
    """Awaitable variant of :class:`FileSystem`."""

    def __init__(self, sync: FileSystem | None = None) -> None:
        self.sync = sync or FileSystem()

    async def create_folder(self, folder: PathLike) -> Path:
        return await asyncio.to_thread(self.sync.create_folder, folder)

    async def delete_folder(self, folder: PathLike) -> None:
        await asyncio.to_thread(self.sync.delete_folder, folder)

    async def write_file(self, file_path: PathLike, contents: str | bytes) -> Path:
        return await asyncio.to_thread(self.sync.write_file, file_path, contents)

    async def read_file(self, file_path: PathLike) -> str:
        return await asyncio.to_thread(self.sync.read_file, file_path)

    async def delete_file(self, file_path: PathLike) -> None:
        await asyncio.to_thread(self.sync.delete_file, file_path)

    async def chmod_file(self, file_path: PathLike, mode: int | str) -> None:
        await asyncio.to_thread(self.sync.chmod_file, file_path, mode)

    async def file_exists(self, file_path: PathLike) -> bool:
        return await asyncio.to_thread(self.sync.file_exists, file_path)

    async def list_folder(self, folder: PathLike) -> list[str]:
        return await asyncio.to_thread(self.sync.list_folder, folder)


# 🔼⚙️🔚
