import click

from handy_cli import __version__
from handy_cli.cli.enhanced_command import (
    EnhancedCommand,
    HelpfulArgument,
    get_command_context,
    get_parsed_options,
)
from handy_cli.cli.shared_flags import console_flags, enhanced_flags
from handy_cli.core.services.cli_console import CliConsole
from handy_cli.core.use_cases.reconstruct_command_line import reconstruct_command_line


@click.command(
    cls=EnhancedCommand,
    version=__version__,
    examples=[
        """^ friend --from oclif
        Hello to friend from oclif!""",
        "^ friend --from oclif --gen",
    ],
)
@enhanced_flags()
@click.option("-g", "--gen", is_flag=True, default=False, help="Print the equivalent command line instead.")
@click.option("-f", "--from", "from_", required=True, help="Who is saying hello.")
@console_flags()
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI colors in console output.")
@click.argument("person", cls=HelpfulArgument, help="Person to say hello to.")
def hello(person: str, from_: str, gen: bool, debug: bool, quiet: bool, no_color: bool):
    """Say hello.

    Demonstrates the enhanced flags: -h/--help and -v/--version work only as
    the sole argument, and --gen prints the command line rebuilt from the
    parsed options.
    """
    options = get_parsed_options()
    console = CliConsole.with_colour(options.flags, no_color=no_color)
    console.debug(f"Parsed options: {options}")

    if gen:
        click.echo(reconstruct_command_line(get_command_context(), options))
        return

    console.info(f"Hello to {person} from {from_}!")


if __name__ == "__main__":
    hello()
