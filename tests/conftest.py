"""Shared pytest fixtures."""

import click
import pytest

import handy_cli.core.services.observability as obs
from handy_cli.cli.enhanced_command import EnhancedCommand, HelpfulArgument, MultiValueOption
from handy_cli.cli.shared_flags import enhanced_flags
from handy_cli.core.domain.entities import CommandContext, CommandInvocation


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    """Keep structured logs off stderr unless a test opts back in."""
    monkeypatch.setenv("HANDY_CLI_LOG_SILENT", "1")
    monkeypatch.delenv("HANDY_CLI_DEBUG", raising=False)
    monkeypatch.delenv("HANDY_CLI_LOG_FORMAT", raising=False)
    monkeypatch.setattr(obs, "_current_run_id", None)
    yield


def build_dataflow_command() -> click.Command:
    @click.command(
        cls=EnhancedCommand,
        version="3.0.1",
        examples=[
            "^ -r ap-southeast-2 -s",
            """^ -r ap-southeast-2 -s -i '*boi*' -i '*datahub*' \\
              -x '*jameshu*' -c""",
        ],
    )
    @enhanced_flags()
    @click.option("-r", "--region", help="AWS region.")
    @click.option("-i", "--include", cls=MultiValueOption, default=["*"], help="Wildcard patterns to include.")
    @click.option("-x", "--exclude", cls=MultiValueOption, help="Wildcard patterns to exclude.")
    @click.option("-c", "--cloud-formation", is_flag=True, default=False, help="Survey CloudFormation stacks.")
    @click.option("-s", "--server", is_flag=True, default=False, help="Start a local http server.")
    @click.option("-p", "--port", type=int, default=8002, help="Port number of the local http server.")
    @click.option("-l", "--parallelism", type=int, default=2, help="Concurrent AWS API calls.")
    @click.option("-q", "--quiet", is_flag=True, default=False, help="No console output.")
    @click.option("-d", "--debug", is_flag=True, default=False, help="Output debug messages.")
    @click.argument("path", cls=HelpfulArgument, default="dataflow", required=False, help="Where to put generated files.")
    @click.argument("depth", cls=HelpfulArgument, default="5", required=False, help="A sample argument.")
    def dataflow(**kwargs):
        """Visualisation of AWS serverless dataflow.

        Generates website files locally and can optionally launch a local
        server for preview.
        """

    return dataflow


@pytest.fixture
def dataflow_command():
    return build_dataflow_command()


@pytest.fixture
def mocha_context():
    return CommandContext(bin="mocha", user_agent="mocha/3.0.1 linux-x86_64 python-3.12.0")


@pytest.fixture
def make_invocation(dataflow_command, mocha_context):
    def _make(argv, command=None, context=None, readme_path=None):
        return CommandInvocation(
            command=command or dataflow_command,
            argv=tuple(argv),
            context=context or mocha_context,
            readme_path=readme_path,
        )

    return _make
