"""Single-command help pages built on click's HelpFormatter.

click only renders help for a command through a live context and a command
registry. The helpers here snapshot one command's schema into a
``CommandConfig`` and lay the sections out with ``click.HelpFormatter``, so a
help page (or a README excerpt) can be produced for a single command
without parsing anything.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

import click

from handy_cli.core.domain.entities import CommandInvocation, HelpContent, HelpOptions

BIN_PLACEHOLDER = "^"
BIN_TEMPLATE = "<%= config.bin %>"

HelpOptionsLike = Union[HelpOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class CommandConfig:
    """Snapshot of a command schema with the program name filled in."""

    id: str
    bin: str
    usage_pieces: Tuple[str, ...] = ()
    arguments: Tuple[Tuple[str, str], ...] = ()
    flags: Tuple[Tuple[str, str], ...] = ()
    description: Optional[str] = None
    examples: Tuple[str, ...] = field(default_factory=tuple)


def resolve_help_options(options: HelpOptionsLike) -> HelpOptions:
    if isinstance(options, HelpOptions):
        return options
    return HelpOptions.merged(HelpOptions(), options)


def substitute_bin(examples: Sequence[str], bin: str) -> List[str]:
    """Put the program name in place of a leading ``^`` or any ``<%= config.bin %>``."""
    prefix = BIN_PLACEHOLDER + " "
    substituted = []
    for example in examples:
        if example.startswith(prefix):
            example = bin + example[len(BIN_PLACEHOLDER):]
        substituted.append(example.replace(BIN_TEMPLATE, bin))
    return substituted


def prepend_cli_to_examples(command: click.Command, bin: str) -> None:
    """Rewrite ``command.examples`` in place so examples start with the real program name."""
    examples = getattr(command, "examples", None)
    if isinstance(examples, (list, tuple)):
        command.examples = substitute_bin(examples, bin)


def _description(command: click.Command) -> Optional[str]:
    if not command.help:
        return None
    # click hides everything after a form feed from help output
    text = inspect.cleandoc(command.help).partition("\f")[0].strip()
    return text or None


def get_command_config(command: click.Command, bin: str) -> CommandConfig:
    ctx = click.Context(command, info_name=bin)

    arguments: List[Tuple[str, str]] = []
    flags: List[Tuple[str, str]] = []
    for param in command.get_params(ctx):
        if isinstance(param, click.Argument):
            arguments.append((param.human_readable_name, getattr(param, "help", None) or ""))
        else:
            record = param.get_help_record(ctx)
            if record is not None:
                flags.append(record)

    return CommandConfig(
        id=command.name or "",
        bin=bin,
        usage_pieces=tuple(command.collect_usage_pieces(ctx)),
        arguments=tuple(arguments),
        flags=tuple(flags),
        description=_description(command),
        examples=tuple(substitute_bin(getattr(command, "examples", None) or (), bin)),
    )


def _render(options: HelpOptions, write: Callable[[click.HelpFormatter], None]) -> str:
    formatter = click.HelpFormatter(width=options.max_width, max_width=options.max_width)
    write(formatter)
    text = formatter.getvalue().rstrip()
    return click.unstyle(text) if options.strip_ansi else text


def _write_usage(config: CommandConfig, formatter: click.HelpFormatter) -> None:
    with formatter.section("USAGE"):
        formatter.write_usage(
            config.bin,
            " ".join(config.usage_pieces),
            prefix=" " * formatter.current_indent + "$ ",
        )


def _write_examples(config: CommandConfig, formatter: click.HelpFormatter) -> None:
    with formatter.section("EXAMPLES"):
        for index, example in enumerate(config.examples):
            if index:
                formatter.write_paragraph()
            for line in inspect.cleandoc(example).splitlines():
                formatter.write(f"{'':>{formatter.current_indent}}{line}\n")


def generate_help_content(invocation: CommandInvocation, options: HelpOptionsLike = None) -> HelpContent:
    resolved = resolve_help_options(options)
    config = get_command_config(invocation.command, invocation.context.bin)

    content = HelpContent(usage=_render(resolved, lambda f: _write_usage(config, f)))
    if config.arguments:
        content.args = _render(resolved, lambda f: _section_dl(f, "ARGUMENTS", config.arguments))
    if config.flags:
        content.flags = _render(resolved, lambda f: _section_dl(f, "FLAGS", config.flags))
    if config.description:
        content.description = _render(resolved, lambda f: _section_text(f, "DESCRIPTION", config.description))
    if config.examples:
        content.examples = _render(resolved, lambda f: _write_examples(config, f))
    return content


def _section_dl(formatter: click.HelpFormatter, name: str, rows: Sequence[Tuple[str, str]]) -> None:
    with formatter.section(name):
        formatter.write_dl(rows)


def _section_text(formatter: click.HelpFormatter, name: str, text: str) -> None:
    with formatter.section(name):
        formatter.write_text(text)


def generate_help_text(invocation: CommandInvocation, options: HelpOptionsLike = None) -> str:
    """Formatted help for one command: USAGE, ARGUMENTS, FLAGS, DESCRIPTION, EXAMPLES."""
    content = generate_help_content(invocation, options)
    sections = [content.usage, content.args, content.flags, content.description, content.examples]
    return "\n\n".join(section for section in sections if section)
