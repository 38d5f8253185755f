"""zoektd CLI - Zoekt code search services for launchd and systemd."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from dotenv import load_dotenv

# Load .env file before any other imports that might use env vars
load_dotenv()

import click  # noqa: E402

from zoektd import __version__  # noqa: E402
from zoektd.commands.lazy import LazyGroup  # noqa: E402

if TYPE_CHECKING:
    from zoektd.config import ZoektdConfig
    from zoektd.errors import ConfigError

VerbosityLevel = Literal["quiet", "normal", "verbose"]


class ZoektdContext:
    """Shared context for CLI commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.verbosity: VerbosityLevel = "normal"
        self.debug: bool = False
        self._config: ZoektdConfig | None = None
        self._config_error: ConfigError | None = None

    def load_config(self) -> None:
        """Load configuration, keeping any error for commands that need it."""
        from zoektd.config import ZoektdConfig
        from zoektd.errors import ConfigError

        try:
            self._config = ZoektdConfig.load(self.config_path)
        except ConfigError as e:
            self._config_error = e

    @property
    def config(self) -> ZoektdConfig:
        """The validated configuration.

        Raises:
            ConfigError: If loading failed; nothing may be generated then
        """
        if self._config_error is not None:
            raise self._config_error
        if self._config is None:
            self.load_config()
            return self.config
        return self._config


pass_context = click.make_pass_decorator(ZoektdContext, ensure=True)


# Define lazy subcommands: name -> (module_path, attribute_name)
LAZY_COMMANDS: dict[str, tuple[str, str]] = {
    "init": ("zoektd.commands.init_cmd", "init"),
    "check": ("zoektd.commands.check", "check"),
    "args": ("zoektd.commands.generate", "args"),
    "generate": ("zoektd.commands.generate", "generate"),
    "bootstrap": ("zoektd.commands.install", "bootstrap"),
    "install": ("zoektd.commands.install", "install"),
    "uninstall": ("zoektd.commands.install", "uninstall"),
    "status": ("zoektd.commands.status", "status"),
    "mcp-entry": ("zoektd.commands.mcp", "mcp_entry"),
}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output")
@click.option("--debug", is_flag=True, help="Show full tracebacks on errors")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(version=__version__, prog_name="zoektd")
@pass_context
def cli(
    ctx: ZoektdContext,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """zoektd - Zoekt code search as user services.

    Runs zoekt-webserver as a persistent service and zoekt-git-index on
    an interval, using launchd on macOS and systemd --user on Linux.

    \b
    Setup:
      init         Write a default zoektd.toml
      check        Validate configuration
      bootstrap    Create index and log directories

    \b
    Generate:
      args         Show the webserver and indexer command lines
      generate     Render unit files and the indexer wrapper

    \b
    Services:
      install      Install and start the services
      uninstall    Stop and remove the services
      status       Show service status

    \b
    MCP:
      mcp-entry    Print the zoekt-mcp server entry

    Use 'zoektd <command> --help' for details.
    """
    from zoektd.logging import setup_logging

    ctx.debug = debug
    ctx.config_path = config

    if quiet:
        ctx.verbosity = "quiet"
    elif verbose:
        ctx.verbosity = "verbose"
    else:
        ctx.verbosity = "normal"

    setup_logging(ctx.verbosity)
    ctx.load_config()


def main() -> None:
    """Entry point for the CLI."""
    import sys

    debug_mode = "--debug" in sys.argv

    try:
        cli()
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        from zoektd.errors import ExitCode
        from zoektd.logging import print_error, print_info

        print_error(f"Error: {e}")
        if debug_mode:
            import traceback

            print_info("")
            print_info("Full traceback (--debug mode):")
            traceback.print_exc()
        else:
            print_info("Run with --debug for full traceback.")
        sys.exit(ExitCode.FATAL_ERROR)


if __name__ == "__main__":
    main()
