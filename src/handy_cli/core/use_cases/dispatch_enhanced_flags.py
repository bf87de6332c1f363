"""Enhanced-flag handling around a command's parse step.

``--help``/``-h``, ``--version``/``-v`` and the hidden ``--update-readme.md``
short-circuit a command only when they are the sole argument. The decision
depends on the shape of the raw argv alone, so ``--help`` still works when
the command is missing required arguments.
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, NoReturn, Optional, Sequence, TypeVar

import click

from handy_cli.core.domain.entities import (
    CommandInvocation,
    DispatchOutcome,
    FlagState,
)
from handy_cli.core.services.exit_codes import EX_SUCCESS
from handy_cli.core.services.help_text import HelpOptionsLike, generate_help_text
from handy_cli.core.services.observability import log_debug
from handy_cli.core.services.repo_config import project_help_options
from handy_cli.core.use_cases.update_readme import inject_help_text_into_readme

HELP_TOKENS = frozenset({"--help", "-h"})
VERSION_TOKENS = frozenset({"--version", "-v"})
UPDATE_DOCS_TOKEN = "--update-readme.md"

T = TypeVar("T")

Sink = Callable[[str], None]
AdditionalHandler = Callable[[CommandInvocation, Optional[Any]], None]


def classify(argv: Sequence[str]) -> FlagState:
    if len(argv) != 1:
        return FlagState.NORMAL
    token = argv[0]
    if token in HELP_TOKENS:
        return FlagState.HELP
    if token in VERSION_TOKENS:
        return FlagState.VERSION
    if token == UPDATE_DOCS_TOKEN:
        return FlagState.UPDATE_DOCS
    return FlagState.NORMAL


def _raise_exit(code: int) -> NoReturn:
    raise SystemExit(code)


def _perform(
    state: FlagState,
    invocation: CommandInvocation,
    help_options: HelpOptionsLike,
    sink: Sink,
) -> Optional[int]:
    if state is FlagState.HELP:
        sink(generate_help_text(invocation, project_help_options(help_options)))
    elif state is FlagState.VERSION:
        sink(invocation.context.user_agent)
    elif state is FlagState.UPDATE_DOCS:
        inject_help_text_into_readme(invocation, help_options)
    else:
        return None
    return EX_SUCCESS


def _settle(
    invocation: CommandInvocation,
    state: FlagState,
    parsed: Optional[Any],
    error: Optional[click.ClickException],
    help_options: HelpOptionsLike,
    sink: Sink,
    started: float,
) -> DispatchOutcome:
    exit_code = _perform(state, invocation, help_options, sink)
    log_debug(
        operation="debug.flag_dispatch",
        duration_ms=(time.monotonic() - started) * 1000,
        details={
            "state": state.value,
            "parse_failed": error is not None,
            "terminate": exit_code is not None,
        },
    )
    return DispatchOutcome(state=state, parsed=parsed, error=error, exit_code=exit_code)


def dispatch(
    invocation: CommandInvocation,
    parse: Callable[[], T],
    help_options: HelpOptionsLike = None,
    sink: Sink = click.echo,
) -> DispatchOutcome:
    """Run ``parse`` and the action selected by the argv shape.

    The parse error, if any, is captured in the outcome rather than raised.
    """
    started = time.monotonic()
    state = classify(invocation.argv)
    parsed: Optional[T] = None
    error: Optional[click.ClickException] = None
    try:
        parsed = parse()
    except click.ClickException as exc:
        error = exc
    return _settle(invocation, state, parsed, error, help_options, sink, started)


def _finish(
    invocation: CommandInvocation,
    outcome: DispatchOutcome,
    additional_handler: Optional[AdditionalHandler],
    terminate: Callable[[int], None],
) -> T:
    if outcome.exit_code is not None:
        terminate(outcome.exit_code)
    if additional_handler is not None:
        additional_handler(invocation, outcome.parsed)
    if outcome.error is not None:
        raise outcome.error
    return outcome.parsed


def with_enhanced_flags(
    invocation: CommandInvocation,
    parse: Callable[[], T],
    help_options: HelpOptionsLike = None,
    additional_handler: Optional[AdditionalHandler] = None,
    *,
    sink: Sink = click.echo,
    terminate: Callable[[int], None] = _raise_exit,
) -> T:
    """Parse with enhanced flags handled.

    Special states print or update docs and then call ``terminate(0)``, which
    by default raises ``SystemExit``. Otherwise the parsed options are
    returned, or the original click parse error is re-raised unchanged.
    ``additional_handler`` runs before returning, with None when parsing
    failed.
    """
    outcome = dispatch(invocation, parse, help_options, sink)
    return _finish(invocation, outcome, additional_handler, terminate)


async def with_enhanced_flags_async(
    invocation: CommandInvocation,
    parse: Callable[[], Awaitable[T]],
    help_options: HelpOptionsLike = None,
    additional_handler: Optional[AdditionalHandler] = None,
    *,
    sink: Sink = click.echo,
    terminate: Callable[[int], None] = _raise_exit,
) -> T:
    """Same as ``with_enhanced_flags`` for a parse step that must be awaited."""
    started = time.monotonic()
    state = classify(invocation.argv)
    parsed: Optional[T] = None
    error: Optional[click.ClickException] = None
    try:
        parsed = await parse()
    except click.ClickException as exc:
        error = exc
    outcome = _settle(invocation, state, parsed, error, help_options, sink, started)
    return _finish(invocation, outcome, additional_handler, terminate)
