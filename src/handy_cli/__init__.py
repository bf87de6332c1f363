"""Enhanced flags, single-command help and command-line reconstruction for click commands."""

__version__ = "1.0.0"

from handy_cli.cli.enhanced_command import (
    EnhancedCommand,
    HelpfulArgument,
    MultiValueOption,
    expand_multi_value_flags,
    get_command_context,
    get_parsed_options,
)
from handy_cli.cli.shared_flags import console_flags, enhanced_flags
from handy_cli.core.domain.entities import (
    CommandContext,
    CommandInvocation,
    DispatchOutcome,
    FlagState,
    HelpContent,
    HelpOptions,
    ParsedOptions,
)
from handy_cli.core.services.cli_console import CliConsole, cli_console, cli_console_with_colour
from handy_cli.core.services.help_text import (
    generate_help_content,
    generate_help_text,
    get_command_config,
    prepend_cli_to_examples,
)
from handy_cli.core.services.quoting import quote_if_needed
from handy_cli.core.use_cases.dispatch_enhanced_flags import (
    classify,
    dispatch,
    with_enhanced_flags,
    with_enhanced_flags_async,
)
from handy_cli.core.use_cases.reconstruct_command_line import (
    parse_command_line,
    reconstruct_command_line,
    reconstruct_command_line_for,
)
from handy_cli.core.use_cases.update_readme import inject_help_text_into_readme

__all__ = [
    "__version__",
    "CliConsole",
    "CommandContext",
    "CommandInvocation",
    "DispatchOutcome",
    "EnhancedCommand",
    "FlagState",
    "HelpContent",
    "HelpOptions",
    "HelpfulArgument",
    "MultiValueOption",
    "ParsedOptions",
    "classify",
    "cli_console",
    "cli_console_with_colour",
    "console_flags",
    "dispatch",
    "enhanced_flags",
    "expand_multi_value_flags",
    "generate_help_content",
    "generate_help_text",
    "get_command_config",
    "get_command_context",
    "get_parsed_options",
    "inject_help_text_into_readme",
    "parse_command_line",
    "prepend_cli_to_examples",
    "quote_if_needed",
    "reconstruct_command_line",
    "reconstruct_command_line_for",
    "with_enhanced_flags",
    "with_enhanced_flags_async",
]
