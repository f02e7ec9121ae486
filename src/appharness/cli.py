#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command-line tools for managing fixture folders outside of a test run."""

from __future__ import annotations

import asyncio
from pathlib import Path
import sys

import click
from provide.foundation.cli.decorators import logging_options
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from appharness import __version__
from appharness.config import ENV_DATA_FOLDER, ENV_PLUGINS_FOLDER, HarnessConfig
from appharness.errors import FixtureIOError
from appharness.fixtures import FixtureTree

log: StructLogger = get_logger(__name__)

_folder_type = click.Path(file_okay=False, dir_okay=True, path_type=Path)

data_folder_option = click.option(
    "-d",
    "--data-folder",
    type=_folder_type,
    envvar=ENV_DATA_FOLDER,
    show_envvar=True,
    default=None,
    help="Folder holding the app and public fixture roots.",
)
plugins_folder_option = click.option(
    "-p",
    "--plugins-folder",
    type=_folder_type,
    envvar=ENV_PLUGINS_FOLDER,
    show_envvar=True,
    default=None,
    help="Shared folder receiving test plugin packages.",
)


def _tree(data_folder: Path | None = None, plugins_folder: Path | None = None) -> FixtureTree:
    config = HarnessConfig.from_env(data_folder=data_folder, plugins_folder=plugins_folder)
    return FixtureTree(config)


@click.group(name="appharness")
@click.version_option(__version__, prog_name="appharness")
def cli():
    """Manage disposable test fixture folders."""


@cli.command(name="scaffold")
@data_folder_option
@logging_options
def scaffold(data_folder: Path | None, **kwargs):
    """Create the app and public fixture roots."""
    tree = _tree(data_folder=data_folder)
    try:
        asyncio.run(tree.create_test_folders())
    except FixtureIOError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"✅ Created {tree.app_folder}")
    click.echo(f"✅ Created {tree.public_folder}")


@cli.command(name="clean")
@data_folder_option
@plugins_folder_option
@logging_options
def clean(data_folder: Path | None, plugins_folder: Path | None, **kwargs):
    """Delete the fixture roots and sweep test plugins."""
    tree = _tree(data_folder=data_folder, plugins_folder=plugins_folder)
    try:
        removed = asyncio.run(tree.delete_test_folders())
    except FixtureIOError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"🧹 Deleted {tree.app_folder} and {tree.public_folder}")
    for plugin in removed:
        click.echo(f"   removed plugin {plugin.name}")


@cli.command(name="plugins")
@plugins_folder_option
@logging_options
def list_plugins(plugins_folder: Path | None, **kwargs):
    """List test plugin fixtures present in the plugins folder."""
    tree = _tree(plugins_folder=plugins_folder)
    plugins = asyncio.run(tree.find_plugins())
    if not plugins:
        click.echo(f"No test plugins in {tree.plugins_folder}")
        return
    for plugin in plugins:
        click.echo(plugin.name)


@cli.command(name="sweep")
@plugins_folder_option
@click.option("--dry-run", is_flag=True, help="Only list the plugins that would be removed.")
@logging_options
def sweep(plugins_folder: Path | None, dry_run: bool, **kwargs):
    """Remove test plugin fixtures left behind by earlier runs."""
    tree = _tree(plugins_folder=plugins_folder)
    try:
        if dry_run:
            plugins = asyncio.run(tree.find_plugins())
        else:
            plugins = asyncio.run(tree.sweep_plugins())
    except FixtureIOError as e:
        log.exception("Plugin sweep failed", plugins_folder=str(tree.plugins_folder))
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    verb = "Would remove" if dry_run else "Removed"
    for plugin in plugins:
        click.echo(f"{verb} {plugin.name}")
    click.echo(f"{verb} {len(plugins)} test plugin(s)")


if __name__ == "__main__":
    cli()

# 🔼⚙️🔚
