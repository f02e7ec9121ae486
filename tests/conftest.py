#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from appharness.config import HarnessConfig
from appharness.fixtures import FixtureTree
from appharness.fs import AsyncFileSystem, FileSystem
from tests.helpers.fake_apps import FakeApplication


@pytest.fixture
def harness_config(tmp_path: Path) -> HarnessConfig:
    """Harness configuration with every fixture root inside a temporary folder."""
    return HarnessConfig(
        data_folder=tmp_path / "data",
        plugins_folder=tmp_path / "node_modules",
    )


@pytest.fixture
def app_factory():
    return FakeApplication


@pytest.fixture
def fs() -> FileSystem:
    return FileSystem()


@pytest.fixture
def afs(fs: FileSystem) -> AsyncFileSystem:
    return AsyncFileSystem(fs)


@pytest.fixture
def tree(harness_config: HarnessConfig, afs: AsyncFileSystem) -> FixtureTree:
    return FixtureTree(harness_config, afs)


# 🔼⚙️🔚
