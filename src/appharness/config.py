#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Harness configuration model and default application start configuration."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
import copy
import os
from pathlib import Path
from typing import Any

from attrs import define, field, validators

DEFAULT_PORT = 33211
DEFAULT_LOG_LEVEL = "warning"
TEST_DATABASE_NAME = "test.db"

ENV_DATA_FOLDER = "APPHARNESS_DATA_FOLDER"
ENV_PLUGINS_FOLDER = "APPHARNESS_PLUGINS_FOLDER"
ENV_APP_FOLDER = "APPHARNESS_APP_FOLDER"


def _default_data_folder() -> Path:
    return Path.cwd() / "tests" / "data"


def _default_plugins_folder() -> Path:
    return Path.cwd() / "node_modules"


def _validate_folder_name(instance: Any, attribute: Any, value: str) -> None:
    if not value or "/" in value or "\\" in value or value in (".", ".."):
        raise ValueError(f"{attribute.name} must be a single folder name, got '{value}'")


@define
class HarnessConfig:
    """Locations of the fixture roots and start configuration overrides."""

    data_folder: Path = field(converter=Path, factory=_default_data_folder)
    plugins_folder: Path = field(converter=Path, factory=_default_plugins_folder)
    app_folder_name: str = field(default="app", validator=validators.in_(("app", "src")))
    public_folder_name: str = field(default="public", validator=_validate_folder_name)
    start_config: dict[str, Any] = field(factory=dict)

    @property
    def app_folder(self) -> Path:
        return self.data_folder / self.app_folder_name

    @property
    def public_folder(self) -> Path:
        return self.data_folder / self.public_folder_name

    @property
    def package_json_path(self) -> Path:
        """Package descriptor one level above the application root."""
        return self.app_folder.parent / "package.json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> HarnessConfig:
        """Build a config from ``APPHARNESS_*`` environment variables.

        Keyword overrides take precedence over the environment.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if environ.get(ENV_DATA_FOLDER):
            values["data_folder"] = environ[ENV_DATA_FOLDER]
        if environ.get(ENV_PLUGINS_FOLDER):
            values["plugins_folder"] = environ[ENV_PLUGINS_FOLDER]
        if environ.get(ENV_APP_FOLDER):
            values["app_folder_name"] = environ[ENV_APP_FOLDER]
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def default_start_config(data_folder: Path, port: int = DEFAULT_PORT) -> dict[str, Any]:
    """Default configuration applied to the application before it starts."""
    return {
        "port": port,
        "base_url": f"http://localhost:{port}",
        "logging": {"level": DEFAULT_LOG_LEVEL},
        "db": {
            "engine": "sqlite",
            "database": str(Path(data_folder) / TEST_DATABASE_NAME),
        },
    }


def merge_config(target: MutableMapping[str, Any], source: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Recursively merge ``source`` into ``target`` in place and return ``target``."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, MutableMapping) and isinstance(value, Mapping):
            merge_config(existing, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def build_start_config(
    data_folder: Path,
    *layers: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge override layers over the default start configuration.

    A layer that changes ``port`` without setting ``base_url`` gets a base URL
    rebuilt from the new port.
    """
    config = default_start_config(data_folder)
    for layer in layers:
        if not layer:
            continue
        merge_config(config, layer)
        if "port" in layer and "base_url" not in layer:
            config["base_url"] = f"http://localhost:{config['port']}"
    return config


# 🔼⚙️🔚
