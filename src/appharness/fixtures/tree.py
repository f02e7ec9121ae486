#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Builder for the application, public and plugin fixture trees."""

from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
from typing import Any

from provide.foundation.logger import get_logger

from appharness.config import HarnessConfig
from appharness.errors import PluginNameError
from appharness.fixtures.materializer import ModuleMaterializer, ModuleSpecs, plan_modules
from appharness.fs import AsyncFileSystem

log = get_logger(__name__)

PLUGIN_MARKER_SUFFIX = "_TESTPLUGIN"
PLUGIN_VERSION = "0.0.1"
PLUGIN_ENTRY_MODULE = "index.js"
PLUGIN_ENTRY_CONTENT = "module.exports = {}"
APP_MODULE_LABEL = "app"

# Recursive directory walkers that cannot finish on empty folders need a file to find.
MARKER_FILE_NAME = "README"
MARKER_FILE_CONTENT = "The presence of this file ensures that recursive directory walkers work"


def is_test_plugin_name(name: str) -> bool:
    return name.endswith(PLUGIN_MARKER_SUFFIX)


def validate_plugin_name(name: str) -> None:
    """Raise :class:`PluginNameError` unless ``name`` is a disposable plugin name."""
    if not is_test_plugin_name(name):
        raise PluginNameError(name)
    if Path(name).name != name or name in (".", ".."):
        raise PluginNameError(name, "Test plugin name must be a single folder name")


class FixtureTree:
    """Creates and removes fixture roots and plugin packages on disk."""

    def __init__(
        self,
        config: HarnessConfig,
        fs: AsyncFileSystem | None = None,
        materializer: ModuleMaterializer | None = None,
    ) -> None:
        self.config = config
        self.fs = fs or AsyncFileSystem()
        self.materializer = materializer or ModuleMaterializer(self.fs)
        self._log = log.bind(data_folder=str(config.data_folder))

    @property
    def app_folder(self) -> Path:
        return self.config.app_folder

    @property
    def public_folder(self) -> Path:
        return self.config.public_folder

    @property
    def plugins_folder(self) -> Path:
        return self.config.plugins_folder

    def plugin_folder(self, name: str) -> Path:
        return self.plugins_folder / name

    async def _write_marker(self, folder: Path) -> None:
        await self.fs.write_file(folder / MARKER_FILE_NAME, MARKER_FILE_CONTENT)

    async def create_test_folders(self) -> None:
        """Create the application and public roots, each holding a marker file."""
        for folder in (self.app_folder, self.public_folder):
            await self.fs.create_folder(folder)
            await self._write_marker(folder)
        self._log.debug("Test folders created", app=str(self.app_folder), public=str(self.public_folder))

    async def delete_test_folders(self) -> list[Path]:
        """Delete the public and application roots, then sweep test plugins.

        Returns:
            Plugin folders removed by the sweep
        """
        await self.fs.delete_folder(self.public_folder)
        await self.fs.delete_folder(self.app_folder)
        removed = await self.sweep_plugins()
        self._log.debug("Test folders deleted", plugins_removed=len(removed))
        return removed

    async def find_plugins(self) -> list[Path]:
        """Plugin folders whose names carry the test marker suffix."""
        names = await self.fs.list_folder(self.plugins_folder)
        return [self.plugin_folder(name) for name in names if is_test_plugin_name(name)]

    async def sweep_plugins(self) -> list[Path]:
        plugins = await self.find_plugins()
        for plugin in plugins:
            await self.fs.delete_folder(plugin)
            self._log.debug("Test plugin removed", plugin=plugin.name)
        return plugins

    async def write_package_json(self, contents: str | Mapping[str, Any]) -> Path:
        if not isinstance(contents, str):
            contents = json.dumps(contents, indent=2)
        return await self.fs.write_file(self.config.package_json_path, contents)

    async def delete_package_json(self) -> None:
        await self.fs.delete_file(self.config.package_json_path)

    async def create_plugin_modules(self, name: str, modules: ModuleSpecs | None = None) -> Path:
        """Create a test plugin package and modules within its ``src`` folder.

        The content of each generated module is a string containing the plugin name.

        Args:
            name: Plugin name, must end with ``_TESTPLUGIN``
            modules: Module names, or a mapping of module name to content

        Returns:
            The plugin folder
        """
        validate_plugin_name(name)

        plugin_folder = self.plugin_folder(name)
        src_folder = plugin_folder / "src"
        plan = plan_modules(src_folder, modules, name)

        await self.fs.create_folder(plugin_folder)
        await self.fs.write_file(
            plugin_folder / "package.json",
            json.dumps({"name": name, "version": PLUGIN_VERSION}),
        )
        await self.fs.write_file(plugin_folder / PLUGIN_ENTRY_MODULE, PLUGIN_ENTRY_CONTENT)
        await self.fs.create_folder(plugin_folder / "public")
        await self.fs.create_folder(src_folder)
        await self._write_marker(src_folder)

        await self.materializer.write_plan(plan)
        self._log.debug("Test plugin created", plugin=name)
        return plugin_folder

    async def create_app_modules(self, modules: ModuleSpecs | None = None) -> list[Path]:
        return await self.materializer.create_modules(self.app_folder, modules, APP_MODULE_LABEL)


# 🔼⚙️🔚
