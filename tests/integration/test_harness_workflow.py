#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""End-to-end harness workflows against a real aiohttp application."""

from __future__ import annotations

import pytest

from appharness.errors import FixtureIOError, PluginNameError
from appharness.harness import Harness, HarnessContext
from appharness.lifecycle import AppState
from tests.helpers.fake_apps import WebApplication

pytestmark = pytest.mark.integration


@pytest.fixture
def app_factory():
    return WebApplication


@pytest.mark.asyncio
class TestHarnessWorkflow:
    """Exercise fixture construction, lifecycle and requests together."""

    async def test_start_request_shutdown(self, harness_context: HarnessContext) -> None:
        lifecycle = harness_context.lifecycle
        await harness_context.fixtures.create_test_folders()
        await lifecycle.init_app()
        await lifecycle.start_app({"port": 0})

        assert lifecycle.state is AppState.RUNNING
        response = await lifecycle.request("")

        assert response.status == 200
        assert response.json() == {
            "app_folder": str(harness_context.config.app_folder),
            "method": "GET",
        }

        echoed = await lifecycle.request("echo", method="POST", data="ping")
        assert echoed.text == "ping"

        missing = await lifecycle.request("/missing")
        assert missing.status == 404

        await lifecycle.shutdown_app()
        assert lifecycle.state is AppState.STOPPED

    async def test_application_left_running_is_stopped(self, harness: Harness) -> None:
        context = harness.before_each()
        app = await context.lifecycle.init_app()
        await context.lifecycle.start_app({"port": 0})

        await harness.after_each(context)

        assert context.lifecycle.state is AppState.STOPPED
        assert context.lifecycle.app is None
        assert app.shutdown_calls == 1
        assert app.started is False

    async def test_fixture_sequence_through_bridge(self, harness_context: HarnessContext) -> None:
        fixtures = harness_context.fixtures

        def build_fixtures():
            yield fixtures.create_test_folders()
            plugin = yield fixtures.create_plugin_modules("bridge_TESTPLUGIN", {"a/x": "1", "a/y": "2"})
            modules = yield fixtures.create_app_modules(["foo"])
            return plugin, modules

        plugin, modules = await harness_context.await_async(build_fixtures)

        assert harness_context.fs.read_file(plugin / "src" / "a" / "x.js") == "1"
        assert harness_context.fs.read_file(plugin / "src" / "a" / "y.js") == "2"
        assert modules == [harness_context.config.app_folder / "foo.js"]

        await fixtures.delete_test_folders()

        assert not plugin.exists()
        assert not harness_context.config.app_folder.exists()

    async def test_negative_paths_with_must_throw(self, harness_context: HarnessContext) -> None:
        fixtures = harness_context.fixtures

        await harness_context.must_throw(
            fixtures.create_plugin_modules, "Test plugin name has incorrect suffix: 'nope'", "nope"
        )
        assert not fixtures.plugin_folder("nope").exists()

        error = await harness_context.must_throw(
            harness_context.afs.read_file,
            f"read-file failed for '{fixtures.app_folder / 'absent.js'}': No such file or directory",
            fixtures.app_folder / "absent.js",
        )
        assert isinstance(error, FixtureIOError)

    async def test_mocker_patches_are_scoped(self, harness_context: HarnessContext) -> None:
        harness_context.mocker.patch_object(
            harness_context.fixtures, "create_plugin_modules", side_effect=PluginNameError("patched")
        )

        with pytest.raises(PluginNameError):
            await harness_context.fixtures.create_plugin_modules("x_TESTPLUGIN")


# 🔼⚙️🔚
