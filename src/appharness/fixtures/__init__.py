#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Fixture tree construction and module materialization."""

from appharness.fixtures.materializer import (
    DEFAULT_EXTENSION,
    ModuleMaterializer,
    default_module_content,
    materialize_modules,
)
from appharness.fixtures.tree import (
    APP_MODULE_LABEL,
    PLUGIN_MARKER_SUFFIX,
    FixtureTree,
    is_test_plugin_name,
)

__all__ = [
    "APP_MODULE_LABEL",
    "DEFAULT_EXTENSION",
    "PLUGIN_MARKER_SUFFIX",
    "FixtureTree",
    "ModuleMaterializer",
    "default_module_content",
    "is_test_plugin_name",
    "materialize_modules",
]

# 🔼⚙️🔚
