#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test-support harness: fixture trees, application lifecycle and a coroutine bridge."""

from provide.foundation.utils.versioning import get_version

__version__ = get_version("appharness", caller_file=__file__)

from appharness.bridge import Outcome, await_async, must_throw, settle  # noqa: E402
from appharness.config import HarnessConfig  # noqa: E402
from appharness.fixtures import FixtureTree, ModuleMaterializer  # noqa: E402
from appharness.harness import Harness, HarnessContext  # noqa: E402
from appharness.lifecycle import AppLifecycle, AppState  # noqa: E402

__all__ = [
    "AppLifecycle",
    "AppState",
    "FixtureTree",
    "Harness",
    "HarnessConfig",
    "HarnessContext",
    "ModuleMaterializer",
    "Outcome",
    "__version__",
    "await_async",
    "must_throw",
    "settle",
]

# 🔼⚙️🔚
