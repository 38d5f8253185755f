"""zoektd init command - Write a default zoektd.toml."""

from __future__ import annotations

import sys
from pathlib import Path

import click


@click.command()
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: ./zoektd.toml)",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def init(config_path: Path | None, force: bool) -> None:
    """Write a zoektd.toml with the default settings.

    \b
    Examples:
        zoektd init
        zoektd init --path ~/.config/zoektd/zoektd.toml
    """
    from zoektd.config import get_default_config_toml
    from zoektd.errors import ExitCode
    from zoektd.logging import print_error, print_info, print_success, print_warning
    from zoektd.paths import CONFIG_FILE

    config_path = config_path or Path.cwd() / CONFIG_FILE

    if config_path.exists() and not force:
        print_warning(f"Configuration file already exists: {config_path}")
        print_info("Use --force to overwrite")
        sys.exit(ExitCode.CONFIG_ERROR)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config_toml())
    except OSError as e:
        print_error(f"Failed to write {config_path}: {e}")
        sys.exit(ExitCode.CONFIG_ERROR)

    print_success(f"Created {config_path}")
    print_info("\nNext steps:")
    print_info("  1. Set daemon.enabled = true and list your repositories")
    print_info("  2. Run 'zoektd check' to validate")
    print_info("  3. Run 'zoektd install' to start the services")


__all__ = ["init"]
