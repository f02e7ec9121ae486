#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Per-test harness: before/after hooks and the context handed to test bodies."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from attrs import define, field
from provide.foundation.logger import get_logger

from appharness.bridge import as_coroutine_function, await_async, must_throw
from appharness.config import HarnessConfig
from appharness.fixtures import FixtureTree
from appharness.fs import AsyncFileSystem, FileSystem
from appharness.lifecycle import AppFactory, AppLifecycle, AppState, ResetHook
from appharness.sandbox import MockSandbox

log = get_logger(__name__)


@define
class HarnessContext:
    """Tools available to a single test."""

    config: HarnessConfig
    fs: FileSystem
    afs: AsyncFileSystem
    fixtures: FixtureTree
    mocker: MockSandbox
    lifecycle: AppLifecycle | None = None
    extras: Mapping[str, Any] = field(factory=lambda: MappingProxyType({}))

    await_async: Callable[..., Any] = field(default=await_async, init=False)
    must_throw: Callable[..., Any] = field(default=must_throw, init=False)

    def extra(self, name: str) -> Any:
        try:
            return self.extras[name]
        except KeyError:
            raise KeyError(f"No extra capability named '{name}' is registered") from None


class Harness:
    """Builds a fresh :class:`HarnessContext` for each test and tears it down afterwards."""

    def __init__(
        self,
        suite_name: str,
        config: HarnessConfig | None = None,
        app_factory: AppFactory | None = None,
        reset_hook: ResetHook | None = None,
        extras: Mapping[str, Any] | None = None,
    ) -> None:
        self.suite_name = suite_name
        self.config = config or HarnessConfig.from_env()
        self.app_factory = app_factory
        self.reset_hook = reset_hook
        self.extras = MappingProxyType(
            {
                name: as_coroutine_function(value) if callable(value) else value
                for name, value in (extras or {}).items()
            }
        )
        self._log = log.bind(suite=suite_name)

    def before_each(self) -> HarnessContext:
        fs = FileSystem()
        afs = AsyncFileSystem(fs)
        lifecycle = None
        if self.app_factory is not None:
            lifecycle = AppLifecycle(self.app_factory, self.config, reset_hook=self.reset_hook)
        context = HarnessContext(
            config=self.config,
            fs=fs,
            afs=afs,
            fixtures=FixtureTree(self.config, afs),
            mocker=MockSandbox(),
            lifecycle=lifecycle,
            extras=self.extras,
        )
        self._log.debug("Harness context created")
        return context

    async def after_each(self, context: HarnessContext) -> None:
        """Restore the mock sandbox, then stop an application left running."""
        try:
            context.mocker.restore()
        finally:
            lifecycle = context.lifecycle
            if lifecycle is not None and lifecycle.state is AppState.RUNNING:
                self._log.warning("Application still running after test, shutting it down")
                await lifecycle.shutdown_app()


# 🔼⚙️🔚
