"""click integration for enhanced flags, single-command help and examples."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, NoReturn, Optional, Sequence, Set

import click
from rich.console import Console

from handy_cli.core.domain.entities import CommandContext, CommandInvocation, ParsedOptions
from handy_cli.core.services.error_codes import HandyCliError
from handy_cli.core.services.exit_codes import exit_code_for_error
from handy_cli.core.services.help_text import generate_help_text, prepend_cli_to_examples
from handy_cli.core.services.repo_config import project_help_options
from handy_cli.core.use_cases.dispatch_enhanced_flags import with_enhanced_flags


def _exit(code: int) -> NoReturn:
    raise click.exceptions.Exit(code)


class HelpfulArgument(click.Argument):
    """Positional argument that carries a help string for the ARGUMENTS section."""

    def __init__(self, param_decls: Sequence[str], required: Optional[bool] = None, help: Optional[str] = None, **attrs: Any):
        super().__init__(param_decls, required=required, **attrs)
        self.help = help


class MultiValueOption(click.Option):
    """Repeatable option that also takes several adjacent values after one flag.

    ``--include a b`` is read as ``--include a --include b``: values are
    consumed up to the next option the command declares, so ``-b`` is a
    value unless ``-b`` is one of its options. Positional arguments have to
    come before such an option.
    """

    def __init__(self, param_decls: Sequence[str], **attrs: Any):
        attrs["multiple"] = True
        super().__init__(param_decls, **attrs)


def _names_declared_option(token: str, declared: Set[str]) -> bool:
    if token in declared:
        return True
    if token.startswith("--"):
        return token.partition("=")[0] in declared
    # -p9000 or a cluster such as -qd
    return token.startswith("-") and len(token) > 2 and token[:2] in declared


def expand_multi_value_flags(params: Sequence[click.Parameter], args: Sequence[str]) -> List[str]:
    """Repeat the flag of every MultiValueOption in front of each adjacent value."""
    options = [param for param in params if isinstance(param, click.Option)]
    greedy = {opt for param in options if isinstance(param, MultiValueOption) for opt in param.opts}
    declared = {opt for param in options for opt in (*param.opts, *param.secondary_opts)}
    expanded: List[str] = []
    current: Optional[str] = None
    remaining = list(args)
    while remaining:
        token = remaining.pop(0)
        if token == "--":
            expanded.append(token)
            expanded.extend(remaining)
            break
        if current is not None and not _names_declared_option(token, declared):
            expanded.extend((current, token))
        elif token.startswith("-"):
            current = token if token in greedy else None
            expanded.append(token)
            if current is not None and remaining:
                expanded.append(remaining.pop(0))
        else:
            expanded.append(token)
    return expanded


class EnhancedCommand(click.Command):
    """click command whose parse step is wrapped by the enhanced-flag dispatcher.

    click's eager ``--help`` is disabled: help, version and README updates
    are driven by ``enhanced_flags()`` and only fire when the flag is the
    sole argument. Examples starting with ``^ `` or containing
    ``<%= config.bin %>`` get the program name substituted.
    """

    def __init__(
        self,
        *args: Any,
        examples: Optional[Sequence[str]] = None,
        version: Optional[str] = None,
        readme_path: Optional[Path] = None,
        help_options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("add_help_option", False)
        super().__init__(*args, **kwargs)
        self.examples = list(examples or [])
        self.version = version
        self.readme_path = readme_path
        self.help_options = help_options

    def command_context(self, info_name: Optional[str]) -> CommandContext:
        return CommandContext.for_program(info_name or self.name or "", self.version)

    def invocation(self, info_name: Optional[str], args: Sequence[str]) -> CommandInvocation:
        return CommandInvocation(
            command=self,
            argv=tuple(args),
            context=self.command_context(info_name),
            readme_path=self.readme_path,
        )

    def parse_context(
        self,
        info_name: Optional[str],
        args: list,
        parent: Optional[click.Context] = None,
        **extra: Any,
    ) -> click.Context:
        """Plain click parsing, without enhanced-flag handling."""
        return super().make_context(info_name, expand_multi_value_flags(self.params, args), parent=parent, **extra)

    def make_context(
        self,
        info_name: Optional[str],
        args: list,
        parent: Optional[click.Context] = None,
        **extra: Any,
    ) -> click.Context:
        invocation = self.invocation(info_name, args)
        prepend_cli_to_examples(self, invocation.context.bin)
        return with_enhanced_flags(
            invocation,
            lambda: self.parse_context(info_name, list(args), parent=parent, **extra),
            self.help_options,
            terminate=_exit,
        )

    def get_help(self, ctx: click.Context) -> str:
        return generate_help_text(self.invocation(ctx.info_name, ()), project_help_options(self.help_options))

    def main(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().main(*args, **kwargs)
        except HandyCliError as e:
            Console(stderr=True).print(f"[bold red][ERROR {e.code.value}] {e.message}[/bold red]")
            raise SystemExit(exit_code_for_error(e.code))


def get_parsed_options(ctx: Optional[click.Context] = None) -> ParsedOptions:
    """ParsedOptions of the running (or given) click context."""
    ctx = ctx or click.get_current_context()
    return ParsedOptions.from_click_context(ctx)


def get_command_context(ctx: Optional[click.Context] = None) -> CommandContext:
    ctx = ctx or click.get_current_context()
    command = ctx.command
    if isinstance(command, EnhancedCommand):
        return command.command_context(ctx.info_name)
    return CommandContext.for_program(ctx.info_name or command.name or "")
