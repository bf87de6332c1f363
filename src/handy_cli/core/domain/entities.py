import platform
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import click
from click.core import ParameterSource

FlagValue = Union[bool, str, int, Tuple[str, ...]]


class FlagState(str, Enum):
    """Shape of the raw argv as seen by the enhanced-flag dispatcher."""

    NORMAL = "normal"
    HELP = "help"
    VERSION = "version"
    UPDATE_DOCS = "update_docs"


@dataclass(frozen=True)
class CommandContext:
    """Read-only facts about the invoking program."""

    bin: str
    user_agent: str

    @classmethod
    def for_program(cls, bin: str, version: Optional[str] = None) -> "CommandContext":
        """Build a context whose user agent looks like ``bin/1.2.3 linux-x86_64 python-3.12.1``."""
        user_agent = "{}/{} {}-{} python-{}".format(
            bin,
            version or "0.0.0",
            sys.platform,
            platform.machine() or "unknown",
            platform.python_version(),
        )
        return cls(bin=bin, user_agent=user_agent)


def _flag_key(option: click.Option) -> str:
    for opt in option.opts:
        if opt.startswith("--"):
            return opt[2:]
    # short-only options keep their letter: -n is stored as "n"
    return option.opts[0].lstrip("-") if option.opts else option.name or ""


@dataclass(frozen=True)
class ParsedOptions:
    """Result of matching raw argv against a command schema.

    Attributes:
        argv: Positional tokens in the order they were given.
        args: Argument name to parsed value, in declaration order.
        flags: Flag name (long form without ``--``, or the letter of a
            short-only option) to parsed value, in declaration order.
            Flags that were neither supplied nor defaulted are absent.
    """

    argv: List[str] = field(default_factory=list)
    args: Dict[str, Any] = field(default_factory=dict)
    flags: Dict[str, FlagValue] = field(default_factory=dict)

    @classmethod
    def from_click_context(cls, ctx: click.Context) -> "ParsedOptions":
        argv: List[str] = []
        args: Dict[str, Any] = {}
        flags: Dict[str, FlagValue] = {}

        for param in ctx.command.params:
            if not param.expose_value or param.name not in ctx.params:
                continue
            value = ctx.params[param.name]
            if isinstance(param, click.Argument):
                if value is None:
                    continue
                args[param.name] = value
                if ctx.get_parameter_source(param.name) is ParameterSource.COMMANDLINE:
                    if isinstance(value, (list, tuple)):
                        argv.extend(str(item) for item in value)
                    else:
                        argv.append(str(value))
            elif isinstance(param, click.Option):
                if value is None:
                    continue
                if isinstance(value, (list, tuple)):
                    if not value:
                        continue
                    value = tuple(value)
                flags[_flag_key(param)] = value

        argv.extend(ctx.args)
        return cls(argv=argv, args=args, flags=flags)


@dataclass(frozen=True)
class CommandInvocation:
    """One run of a command: its schema, the raw argv and the program context."""

    command: click.Command
    argv: Sequence[str]
    context: CommandContext
    readme_path: Optional[Path] = None


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of enhanced-flag dispatch.

    ``exit_code`` is None when the caller should continue, otherwise the
    process is expected to terminate with that code.
    """

    state: FlagState
    parsed: Optional[Any] = None
    error: Optional[BaseException] = None
    exit_code: Optional[int] = None

    @property
    def should_terminate(self) -> bool:
        return self.exit_code is not None


@dataclass(frozen=True)
class HelpOptions:
    max_width: int = 80
    strip_ansi: bool = True

    @classmethod
    def merged(cls, base: "HelpOptions", overrides: Optional[Mapping[str, Any]]) -> "HelpOptions":
        if not overrides:
            return base
        return cls(
            max_width=int(overrides.get("max_width", base.max_width)),
            strip_ansi=bool(overrides.get("strip_ansi", base.strip_ansi)),
        )


@dataclass
class HelpContent:
    """Rendered sections of a single-command help page."""

    usage: Optional[str] = None
    args: Optional[str] = None
    flags: Optional[str] = None
    description: Optional[str] = None
    examples: Optional[str] = None
