from __future__ import annotations

from typing import List, Optional

from handy_cli.core.domain.entities import CommandContext, CommandInvocation, ParsedOptions
from handy_cli.core.services.error_codes import ErrorCode, HandyCliError
from handy_cli.core.services.observability import log_debug
from handy_cli.core.services.quoting import quote_if_needed


def parse_command_line(invocation: CommandInvocation) -> ParsedOptions:
    """Parse the invocation argv against its command schema without running the command.

    click's ``UsageError`` (missing or malformed arguments) propagates unchanged.
    """
    command = invocation.command
    make_context = getattr(command, "parse_context", command.make_context)
    with make_context(invocation.context.bin, list(invocation.argv)) as ctx:
        parsed = ParsedOptions.from_click_context(ctx)
    log_debug(
        operation="debug.command_line_parsed",
        details={"argv": list(invocation.argv), "flags": sorted(parsed.flags)},
    )
    return parsed


def flag_token(flag_name: str) -> str:
    return f"-{flag_name}" if len(flag_name) == 1 else f"--{flag_name}"


def reconstruct_command_line(context: CommandContext, options: ParsedOptions) -> str:
    """Rebuild an invocation string equivalent to already parsed options.

    Positional tokens come first, then flags in the mapping's order. A flag
    whose value is False is left out; True yields a bare ``--name``; a
    sequence yields ``--name v1 v2 ...`` without repeating the flag.
    Single-letter names are short options and are written as ``-n``.
    """
    if not context.bin:
        raise HandyCliError(
            code=ErrorCode.INVALID_CONTEXT,
            message="Cannot reconstruct a command line without a program name",
            details={"user_agent": context.user_agent},
        )

    tokens: List[str] = [context.bin]
    tokens.extend(quote_if_needed(token) for token in options.argv)
    for flag_name, flag_value in options.flags.items():
        if flag_value is False:
            continue
        tokens.append(flag_token(flag_name))
        if isinstance(flag_value, bool):
            continue
        if isinstance(flag_value, (list, tuple)):
            tokens.extend(quote_if_needed(value) for value in flag_value)
        else:
            tokens.append(quote_if_needed(flag_value))
    return " ".join(tokens)


def reconstruct_command_line_for(
    invocation: CommandInvocation, options: Optional[ParsedOptions] = None
) -> str:
    """Reconstruct from an invocation, parsing its argv first when no options are given."""
    if options is None:
        options = parse_command_line(invocation)
    return reconstruct_command_line(invocation.context, options)
