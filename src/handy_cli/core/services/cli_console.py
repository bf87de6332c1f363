"""Console output functions switched by a command's debug and quiet flags.

debug output is only emitted when the debug flag is on; info output is
dropped when the quiet flag is on; warn and error always go through. The
flags are read once, when the console is built.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

import click
from rich.console import Console
from rich.text import Text

OutputFunc = Callable[[str], None]


def _no_op(message: str) -> None:
    pass


def _styled(console: Console, style: Optional[str]) -> OutputFunc:
    def emit(message: str) -> None:
        if not isinstance(message, str):
            return
        console.print(Text(message, style=style or ""), soft_wrap=True)

    return emit


class CliConsole:
    """Encapsulation of debug/info/warn/error output functions."""

    def __init__(
        self,
        debug: OutputFunc,
        info: OutputFunc,
        warn: OutputFunc,
        error: OutputFunc,
        is_debug: bool = False,
        is_quiet: bool = False,
    ) -> None:
        self.is_debug = is_debug is True
        self.is_quiet = is_quiet is True
        self.debug: OutputFunc = debug if self.is_debug else _no_op
        self.info: OutputFunc = _no_op if self.is_quiet else info
        self.warn: OutputFunc = warn
        self.error: OutputFunc = error

    @classmethod
    def default(
        cls,
        flags: Mapping[str, Any],
        debug_flag_name: str = "debug",
        quiet_flag_name: str = "quiet",
    ) -> "CliConsole":
        """Plain console: debug and info on stdout, warn and error on stderr."""
        return cls(
            click.echo,
            click.echo,
            lambda message: click.echo(message, err=True),
            lambda message: click.echo(message, err=True),
            bool(flags.get(debug_flag_name)),
            bool(flags.get(quiet_flag_name)),
        )

    @classmethod
    def with_colour(
        cls,
        flags: Mapping[str, Any],
        debug_style: Optional[str] = "grey50",
        info_style: Optional[str] = None,
        warn_style: Optional[str] = "yellow",
        error_style: Optional[str] = "red",
        debug_flag_name: str = "debug",
        quiet_flag_name: str = "quiet",
        stdout: Optional[Console] = None,
        stderr: Optional[Console] = None,
        no_color: bool = False,
    ) -> "CliConsole":
        """Console that colours each level with a rich style; None disables colouring for that level.

        ``no_color`` turns colour off for the consoles built here; consoles
        passed in are used as they are.
        """
        stdout = stdout or Console(highlight=False, no_color=no_color)
        stderr = stderr or Console(stderr=True, highlight=False, no_color=no_color)
        return cls(
            _styled(stdout, debug_style),
            _styled(stdout, info_style),
            _styled(stderr, warn_style),
            _styled(stderr, error_style),
            bool(flags.get(debug_flag_name)),
            bool(flags.get(quiet_flag_name)),
        )


cli_console = CliConsole.default
cli_console_with_colour = CliConsole.with_colour
