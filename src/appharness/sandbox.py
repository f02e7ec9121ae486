#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Per-test mocking sandbox."""

from __future__ import annotations

from typing import Any

from provide.foundation.logger import get_logger
from provide.testkit.mocking import Mock, patch

log = get_logger(__name__)


class MockSandbox:
    """Collects patches started during a test so they can be undone together."""

    def __init__(self) -> None:
        self._patchers: list[Any] = []

    @property
    def active(self) -> int:
        return len(self._patchers)

    def _start(self, patcher: Any) -> Any:
        mocked = patcher.start()
        self._patchers.append(patcher)
        return mocked

    def patch(self, target: str, *args: Any, **kwargs: Any) -> Any:
        return self._start(patch(target, *args, **kwargs))

    def patch_object(self, target: Any, attribute: str, *args: Any, **kwargs: Any) -> Any:
        return self._start(patch.object(target, attribute, *args, **kwargs))

    def mock(self, **kwargs: Any) -> Mock:
        return Mock(**kwargs)

    def restore(self) -> None:
        """Stop all patches in reverse start order. Safe to call more than once."""
        while self._patchers:
            self._patchers.pop().stop()
        log.debug("Mock sandbox restored")


# 🔼⚙️🔚
