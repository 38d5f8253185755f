"""Shared helpers for zoektd commands."""

from __future__ import annotations

import sys
from typing import NoReturn

from zoektd.errors import ConfigError, ZoektdError
from zoektd.logging import print_error, print_info


def fail(error: ZoektdError, debug: bool = False) -> NoReturn:
    """Report a zoektd error and exit with its exit code."""
    print_error(error.message)
    if isinstance(error, ConfigError):
        for detail in error.errors:
            print_info(f"  {detail}")
    if debug:
        import traceback

        traceback.print_exception(error)
    sys.exit(error.exit_code)


__all__ = ["fail"]
