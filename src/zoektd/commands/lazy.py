"""Lazy-loading Click group for fast CLI startup."""

from __future__ import annotations

import importlib
from typing import Any

import click


class LazyGroup(click.Group):
    """A Click group that imports subcommand modules on first use.

    Commands are listed in declaration order, which follows the usual
    workflow (init, check, generate, install) rather than the alphabet.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, tuple[str, str]] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize lazy group.

        Args:
            lazy_subcommands: Dict mapping command name to (module_path, attr_name)
                Example: {'generate': ('zoektd.commands.generate', 'generate')}
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands: dict[str, tuple[str, str]] = lazy_subcommands or {}
        self._loaded_commands: dict[str, click.Command] = {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List lazy commands in declaration order, then eagerly registered ones."""
        names = list(self._lazy_subcommands)
        names.extend(n for n in super().list_commands(ctx) if n not in self._lazy_subcommands)
        return names

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get command, importing its module if needed."""
        if cmd_name in self._loaded_commands:
            return self._loaded_commands[cmd_name]

        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd

        if cmd_name not in self._lazy_subcommands:
            return None

        module_path, attr_name = self._lazy_subcommands[cmd_name]
        try:
            module = importlib.import_module(module_path)
            loaded_cmd: click.Command = getattr(module, attr_name)
        except (ImportError, AttributeError) as e:
            raise click.ClickException(f"Failed to load command '{cmd_name}': {e}") from None
        self._loaded_commands[cmd_name] = loaded_cmd
        return loaded_cmd


__all__ = ["LazyGroup"]
