#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Exception hierarchy for the test harness.

Precondition failures are raised before any filesystem mutation. I/O failures keep
the original OS error as ``__cause__``. ``MustThrowError`` is an ``AssertionError`` so
that test runners report it as a failed assertion rather than an error."""

from __future__ import annotations

from pathlib import Path


class HarnessError(Exception):
    """Base exception for harness errors."""


class PluginNameError(HarnessError, ValueError):
    """Raised when a plugin fixture name is not a valid disposable plugin name."""

    def __init__(self, name: str, reason: str = "Test plugin name has incorrect suffix"):
        self.name = name
        super().__init__(f"{reason}: '{name}'")


class ModulePathError(HarnessError, ValueError):
    """Raised when a module name resolves outside of its fixture root."""

    def __init__(self, name: str, root: Path):
        self.name = name
        self.root = root
        super().__init__(f"Module '{name}' resolves outside of fixture root '{root}'")


class FixtureIOError(HarnessError, OSError):
    """Raised when an underlying filesystem operation fails."""

    def __init__(self, operation: str, path: Path | str, cause: OSError):
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{operation} failed for '{path}': {cause.strerror or cause}")
        self.errno = cause.errno


class MustThrowError(HarnessError, AssertionError):
    """Raised when an expected failure did not happen, or happened with the wrong message."""

    def __init__(self, expected: str, actual: str | None):
        self.expected = expected
        self.actual = actual
        if actual is None:
            message = f"Expected error '{expected}' but no error was raised"
        else:
            message = f"Expected error '{expected}' but got '{actual}'"
        super().__init__(message)


class LifecycleError(HarnessError, RuntimeError):
    """Raised when an application request is issued without a running configuration."""


# 🔼⚙️🔚
