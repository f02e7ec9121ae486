#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test helper modules for appharness testing.

This package contains stand-in applications used to exercise the lifecycle
controller and the request helper."""

from __future__ import annotations

# 🔼⚙️🔚
