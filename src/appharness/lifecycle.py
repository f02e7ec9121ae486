#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Lifecycle control for the application under test.

Each test owns one disposable application instance built by an application factory.
``init_app`` discards any previous instance and runs the optional reset hook before
constructing a fresh one, so no application state survives from an earlier test.
Out-of-order calls are not guarded: ``start_app`` before ``init_app`` fails with
whatever error the missing handle produces."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from enum import Enum, auto
import json
from typing import Any, Protocol, runtime_checkable

import aiohttp
from attrs import define, field
from provide.foundation.logger import get_logger

from appharness.bridge import await_async
from appharness.config import HarnessConfig, build_start_config, merge_config
from appharness.errors import LifecycleError

log = get_logger(__name__)

PostConfig = Callable[[MutableMapping[str, Any]], None]


@runtime_checkable
class Application(Protocol):
    """Interface of the application under test."""

    config: MutableMapping[str, Any]

    def start(self, post_config: PostConfig) -> Any:
        """Apply ``post_config`` to the application's configuration, then start it.

        May return an awaitable or a suspend/resume generator.
        """
        ...

    def shutdown(self) -> Any: ...


AppFactory = Callable[..., Application]
ResetHook = Callable[[], Any]


class AppState(Enum):
    UNINITIALIZED = auto()
    INITIALIZED = auto()
    RUNNING = auto()
    STOPPED = auto()


@define(frozen=True)
class AppResponse:
    """Response captured from a request against the running application."""

    status: int
    headers: dict[str, str] = field(factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


class AppLifecycle:
    """Resets, initializes, starts and shuts down the application under test."""

    def __init__(
        self,
        app_factory: AppFactory,
        config: HarnessConfig,
        reset_hook: ResetHook | None = None,
    ) -> None:
        self.app_factory = app_factory
        self.harness_config = config
        self.reset_hook = reset_hook
        self.state = AppState.UNINITIALIZED
        self._app: Application | None = None
        self._log = log.bind(app_folder=str(config.app_folder))

    @property
    def app(self) -> Application | None:
        return self._app

    @property
    def config(self) -> MutableMapping[str, Any]:
        """Running configuration of the application."""
        return self._app.config  # type: ignore[union-attr]

    async def _reset(self) -> None:
        previous, self._app = self._app, None
        if previous is not None and self.state is AppState.RUNNING:
            self._log.warning("Shutting down application left running by a previous test")
            await await_async(previous.shutdown)
        if self.reset_hook is not None:
            await await_async(self.reset_hook)

    async def init_app(self, **options: Any) -> Application:
        """Reset leftover state and build a fresh application rooted at the app fixture folder."""
        await self._reset()
        init_options = {"app_folder": self.harness_config.app_folder, **options}
        self._app = self.app_factory(**init_options)
        self.state = AppState.INITIALIZED
        self._log.info("Application initialized", options=sorted(options))
        return self._app

    async def start_app(self, config: Mapping[str, Any] | None = None) -> MutableMapping[str, Any]:
        """Start the application with the default test configuration merged with ``config``.

        Returns:
            The running configuration
        """
        merged = build_start_config(
            self.harness_config.data_folder,
            self.harness_config.start_config,
            config,
        )

        def post_config(app_config: MutableMapping[str, Any]) -> None:
            merge_config(app_config, merged)

        await await_async(self._app.start, post_config)  # type: ignore[union-attr]
        self.state = AppState.RUNNING
        self._log.info("Application started", port=self.config.get("port"))
        return self.config

    async def shutdown_app(self) -> None:
        """Stop the application. Does nothing when there is no application handle."""
        if self._app is None:
            return
        app, self._app = self._app, None
        await await_async(app.shutdown)
        self.state = AppState.STOPPED
        self._log.info("Application stopped")

    def url(self, path: str) -> str:
        """Absolute URL of ``path`` on the running application."""
        if self._app is None or "base_url" not in self._app.config:
            raise LifecycleError("Application has no running configuration, call start_app() first")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{str(self._app.config['base_url']).rstrip('/')}{path}"

    async def request(self, path: str, method: str = "GET", **options: Any) -> AppResponse:
        """Issue a request against the running application.

        ``options`` are passed to :meth:`aiohttp.ClientSession.request`.
        """
        url = self.url(path)
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, **options) as response:
                body = await response.read()
                self._log.debug("Application request", method=method, url=url, status=response.status)
                return AppResponse(status=response.status, headers=dict(response.headers), body=body)


# 🔼⚙️🔚
