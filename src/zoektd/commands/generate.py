"""zoektd args/generate commands - Show command lines and render unit files."""

from __future__ import annotations

import json
import shlex
from pathlib import Path

import click

from zoektd.cli import ZoektdContext, pass_context


@click.command("args")
@click.option("--json", "as_json", is_flag=True, help="Output argument vectors as JSON")
@pass_context
def args(ctx: ZoektdContext, as_json: bool) -> None:
    """Show the zoekt-webserver and zoekt-git-index command lines.

    \b
    Examples:
        zoektd args
        zoektd args --json
    """
    from zoektd.commands.utils import fail
    from zoektd.daemon.args import synthesize
    from zoektd.errors import ZoektdError
    from zoektd.paths import INDEXER_EXECUTABLE, WEBSERVER_NAME, bin_dir

    try:
        config = ctx.config
    except ZoektdError as e:
        fail(e, ctx.debug)

    synthesized = synthesize(config.daemon)
    webserver = [str(bin_dir(config.daemon.package) / WEBSERVER_NAME), *synthesized.webserver_args]
    indexer = [INDEXER_EXECUTABLE, *synthesized.indexer_args]

    if as_json:
        click.echo(json.dumps({"webserver": webserver, "indexer": indexer}, indent=2))
        return

    click.echo(shlex.join(webserver))
    click.echo(shlex.join(indexer))


@click.command("generate")
@click.option(
    "--platform",
    type=click.Choice(["darwin", "linux"]),
    default=None,
    help="Target platform (default: configured or running host)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write files to this directory instead of printing them",
)
@pass_context
def generate(ctx: ZoektdContext, platform: str | None, output: Path | None) -> None:
    """Render unit files and the indexer wrapper script.

    Nothing is rendered when the daemon is disabled or has no repositories.

    \b
    Examples:
        zoektd generate
        zoektd generate --platform linux -o ./units
    """
    from zoektd.commands.utils import fail
    from zoektd.config import ZoektdConfig
    from zoektd.daemon.args import synthesize
    from zoektd.daemon.wrapper import build_indexer_script
    from zoektd.errors import BootstrapError, ZoektdError
    from zoektd.logging import print_info, print_success
    from zoektd.paths import INDEXER_NAME
    from zoektd.services.emitter import build_plan, render_plan

    try:
        config = ctx.config
        if platform is not None:
            # Platform-dependent defaults (log directory) are resolved on load
            config = ZoektdConfig.load(ctx.config_path, platform=platform)
    except ZoektdError as e:
        fail(e, ctx.debug)

    synthesized = synthesize(config.daemon)
    plan = build_plan(config, args=synthesized)
    if plan.is_empty:
        print_info("Nothing to generate: daemon disabled or no repositories configured")
        return

    files = [(r.filename, r.content) for r in render_plan(plan)]
    files.append((INDEXER_NAME, build_indexer_script(config, synthesized.indexer_args)))

    if output is None:
        for filename, content in files:
            click.echo(f"# ---- {filename} ----")
            click.echo(content)
        return

    try:
        output.mkdir(parents=True, exist_ok=True)
        for filename, content in files:
            (output / filename).write_text(content)
    except OSError as e:
        fail(BootstrapError(str(output), str(e), action="write to"), ctx.debug)
    print_success(f"Wrote {len(files)} files to {output}")


__all__ = ["args", "generate"]
