"""Shared Click option decorators for enhanced commands.

The enhanced flags (-h/--help, -v/--version and the hidden
--update-readme.md) are declared here only so that they show up in help
output and parse cleanly. Their behaviour comes from the enhanced-flag
dispatcher, which acts on them when they are the sole argument.
"""

import functools
import os

import click


def help_option():
    """Add -h/--help."""

    def decorator(f):
        return click.option(
            "-h",
            "--help",
            "help_",
            is_flag=True,
            expose_value=False,
            help="Show CLI help.",
        )(f)

    return decorator


def version_option():
    """Add -v/--version."""

    def decorator(f):
        return click.option(
            "-v",
            "--version",
            "version_",
            is_flag=True,
            expose_value=False,
            help="Show CLI version.",
        )(f)

    return decorator


def update_readme_option():
    """Add the hidden --update-readme.md developer flag."""

    def decorator(f):
        return click.option(
            "--update-readme.md",
            "update_readme_md",
            is_flag=True,
            expose_value=False,
            hidden=True,
            help="For developers only, don't use.",
        )(f)

    return decorator


def enhanced_flags():
    """Composite decorator applying -h/--help, -v/--version and --update-readme.md.

    Usage::

        @click.command(cls=EnhancedCommand)
        @enhanced_flags()
        def my_command(...):
            ...
    """

    def decorator(f):
        f = update_readme_option()(f)
        f = version_option()(f)
        f = help_option()(f)
        return f

    return decorator


def with_log_silence():
    """Silence structured log events while a --quiet command runs, unless HANDY_CLI_DEBUG=1."""

    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            previous = os.environ.get("HANDY_CLI_LOG_SILENT")
            silence_logs = bool(kwargs.get("quiet")) and os.environ.get("HANDY_CLI_DEBUG") != "1"
            changed = False
            if silence_logs and previous != "1":
                os.environ["HANDY_CLI_LOG_SILENT"] = "1"
                changed = True
            try:
                return f(*args, **kwargs)
            finally:
                if changed:
                    if previous is None:
                        os.environ.pop("HANDY_CLI_LOG_SILENT", None)
                    else:
                        os.environ["HANDY_CLI_LOG_SILENT"] = previous

        return wrapper

    return decorator


def console_flags():
    """Composite decorator applying -d/--debug and -q/--quiet for CliConsole."""

    def decorator(f):
        f = with_log_silence()(f)
        f = click.option("-q", "--quiet", is_flag=True, default=False, help="No console output.")(f)
        f = click.option("-d", "--debug", is_flag=True, default=False, help="Output debug messages.")(f)
        return f

    return decorator
