#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Sequential creation of generated source modules inside a fixture root.

Module specs are either a list of bare names, which receive generated content
embedding a label, or a mapping of name to content. Entries are written strictly
one at a time. Two names that share an ancestor folder (``a/x`` and ``a/y``) would
otherwise race to create that folder."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
import json
from pathlib import Path, PurePosixPath

from provide.foundation.logger import get_logger

from appharness.errors import ModulePathError
from appharness.fs import AsyncFileSystem, FileSystem

log = get_logger(__name__)

DEFAULT_EXTENSION = ".js"

ModuleSpecs = Mapping[str, str] | Sequence[str]


def default_module_content(label: str) -> str:
    """Single CommonJS assignment exporting ``label``."""
    return f"module.exports={json.dumps(label)};"


def normalize_module_specs(modules: ModuleSpecs | None, default_content: str) -> list[tuple[str, str]]:
    """Expand module specs into ordered ``(name, content)`` pairs."""
    if modules is None:
        return []
    if isinstance(modules, Mapping):
        return [(str(name), content) for name, content in modules.items()]
    if isinstance(modules, str | bytes):
        raise TypeError("Module specs must be a sequence of names or a mapping, not a string")
    content = default_module_content(default_content)
    return [(str(name), content) for name in modules]


def resolve_module_path(root: Path, name: str) -> Path:
    """Path of the file for module ``name`` below ``root``.

    The default extension is appended only when the final name component has none.
    """
    if not name or PurePosixPath(name).is_absolute() or Path(name).is_absolute():
        raise ModulePathError(name, root)
    file_name = name if PurePosixPath(name).suffix else f"{name}{DEFAULT_EXTENSION}"
    file_path = root / file_name
    resolved_root = root.resolve()
    resolved = file_path.resolve()
    if resolved == resolved_root or not resolved.is_relative_to(resolved_root):
        raise ModulePathError(name, root)
    return file_path


def plan_modules(root: Path, modules: ModuleSpecs | None, default_content: str) -> list[tuple[Path, str]]:
    """Validate every entry before anything is written."""
    return [
        (resolve_module_path(root, name), content)
        for name, content in normalize_module_specs(modules, default_content)
    ]


def materialize_modules(
    fs: FileSystem,
    target_folder: Path,
    modules: ModuleSpecs | None,
    default_content: str,
) -> list[Path]:
    """Blocking variant of :meth:`ModuleMaterializer.create_modules`."""
    created: list[Path] = []
    for file_path, content in plan_modules(Path(target_folder), modules, default_content):
        fs.create_folder(file_path.parent)
        fs.write_file(file_path, content)
        created.append(file_path)
    log.debug("Modules materialized", target=str(target_folder), count=len(created))
    return created


class ModuleMaterializer:
    """Writes module specs into a target folder one entry at a time.

    Concurrent calls on the same materializer are serialized as well, so folder
    creation has a total order across batches.
    """

    def __init__(self, fs: AsyncFileSystem | None = None) -> None:
        self.fs = fs or AsyncFileSystem()
        self._lock = asyncio.Lock()

    async def create_modules(
        self,
        target_folder: Path,
        modules: ModuleSpecs | None,
        default_content: str,
    ) -> list[Path]:
        """Create each module file below ``target_folder``.

        Args:
            target_folder: Fixture root receiving the modules
            modules: Bare names or a name to content mapping
            default_content: Label embedded in generated content for bare names

        Returns:
            Paths of the created files, in processing order
        """
        plan = plan_modules(Path(target_folder), modules, default_content)
        created = await self.write_plan(plan)
        log.debug("Modules materialized", target=str(target_folder), count=len(created))
        return created

    async def write_plan(self, plan: list[tuple[Path, str]]) -> list[Path]:
        """Write entries produced by :func:`plan_modules`, one at a time."""
        created: list[Path] = []
        async with self._lock:
            for file_path, content in plan:
                await self.fs.create_folder(file_path.parent)
                await self.fs.write_file(file_path, content)
                created.append(file_path)
        return created


# 🔼⚙️🔚
