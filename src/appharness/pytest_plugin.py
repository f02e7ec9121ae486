#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pytest integration, registered through the ``pytest11`` entry point.

Override ``harness_config``, ``app_factory``, ``app_reset_hook`` or ``harness_extras`` in a ``conftest.py``
to point the harness at a project's fixture folders and application."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from appharness.config import HarnessConfig
from appharness.harness import Harness, HarnessContext
from appharness.lifecycle import AppFactory, ResetHook


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini("appharness_data_folder", "Folder holding the app and public fixture roots", default=None)
    parser.addini("appharness_plugins_folder", "Shared folder receiving test plugin packages", default=None)


def _ini_path(config: pytest.Config, name: str) -> Path | None:
    value = config.getini(name)
    if not value:
        return None
    return Path(config.rootpath) / value


@pytest.fixture
def harness_config(request: pytest.FixtureRequest) -> HarnessConfig:
    """Harness configuration from ini options, falling back to ``APPHARNESS_*`` variables."""
    return HarnessConfig.from_env(
        data_folder=_ini_path(request.config, "appharness_data_folder"),
        plugins_folder=_ini_path(request.config, "appharness_plugins_folder"),
    )


@pytest.fixture
def app_factory() -> AppFactory | None:
    return None


@pytest.fixture
def app_reset_hook() -> ResetHook | None:
    """Callable run before every ``init_app`` to clear state the application keeps between tests."""
    return None


@pytest.fixture
def harness_extras() -> dict[str, Any]:
    return {}


@pytest.fixture
def harness(
    request: pytest.FixtureRequest,
    harness_config: HarnessConfig,
    app_factory: AppFactory | None,
    app_reset_hook: ResetHook | None,
    harness_extras: dict[str, Any],
) -> Harness:
    return Harness(
        request.node.nodeid.split("::")[0],
        config=harness_config,
        app_factory=app_factory,
        reset_hook=app_reset_hook,
        extras=harness_extras,
    )


@pytest_asyncio.fixture
async def harness_context(harness: Harness) -> AsyncIterator[HarnessContext]:
    """Fresh per-test context, torn down whatever the test outcome."""
    context = harness.before_each()
    try:
        yield context
    finally:
        await harness.after_each(context)


# 🔼⚙️🔚
