"""zoektd bootstrap/install/uninstall commands."""

from __future__ import annotations

import click

from zoektd.cli import ZoektdContext, pass_context


@click.command("bootstrap")
@pass_context
def bootstrap(ctx: ZoektdContext) -> None:
    """Create the index, log and state directories.

    Safe to run repeatedly; existing directories are left alone.
    """
    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import print_info, print_success
    from zoektd.services.bootstrap import ensure_directories

    try:
        created = ensure_directories(ctx.config)
    except ZoektdError as e:
        fail(e, ctx.debug)

    if not created:
        print_info("All directories already exist")
        return
    for directory in created:
        print_success(f"Created {directory}")


@click.command("install")
@click.option("--no-load", is_flag=True, help="Write files without activating the services")
@pass_context
def install(ctx: ZoektdContext, no_load: bool) -> None:
    """Install and start the webserver and periodic indexer.

    Directories are created first; unit files are only written once that
    succeeded.

    \b
    Examples:
        zoektd install
        zoektd install --no-load
    """
    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import print_info, print_success
    from zoektd.services.lifecycle import ServiceLifecycle

    try:
        lifecycle = ServiceLifecycle(ctx.config)
        result = lifecycle.install(load=not no_load)
    except ZoektdError as e:
        fail(e, ctx.debug)

    if not result.installed:
        print_info("Nothing to install: daemon disabled or no repositories configured")
        for path in result.removed:
            print_info(f"  removed {path}")
        if result.removed:
            print_success("Previously installed services removed")
        return

    for path in result.written:
        print_info(f"  {path}")
    if result.activated:
        print_success(f"Services installed and started ({result.platform})")
    else:
        print_success(f"Services written, not activated ({result.platform})")


@click.command("uninstall")
@click.option("--no-unload", is_flag=True, help="Remove files without stopping the services")
@pass_context
def uninstall(ctx: ZoektdContext, no_unload: bool) -> None:
    """Stop the services and remove their unit files and wrapper.

    Index shards and logs are kept.
    """
    from zoektd.commands.utils import fail
    from zoektd.errors import ZoektdError
    from zoektd.logging import print_info, print_success
    from zoektd.services.lifecycle import ServiceLifecycle

    try:
        removed = ServiceLifecycle(ctx.config).uninstall(unload=not no_unload)
    except ZoektdError as e:
        fail(e, ctx.debug)

    if not removed:
        print_info("Services not installed")
        return
    for path in removed:
        print_info(f"  removed {path}")
    print_success("Services uninstalled")


__all__ = ["bootstrap", "install", "uninstall"]
