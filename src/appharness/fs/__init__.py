#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Filesystem primitives in blocking and awaitable variants."""

from appharness.fs.primitives import AsyncFileSystem, FileSystem

__all__ = ["AsyncFileSystem", "FileSystem"]

# 🔼⚙️🔚
