from io import StringIO

from rich.console import Console

from handy_cli.core.services.cli_console import CliConsole, cli_console


def capture_console():
    return Console(file=StringIO(), force_terminal=False, highlight=False)


def test_default_console_routes_levels(capsys):
    console = cli_console({"debug": True, "quiet": False})

    console.debug("dbg")
    console.info("inf")
    console.warn("wrn")
    console.error("err")

    captured = capsys.readouterr()
    assert captured.out == "dbg\ninf\n"
    assert captured.err == "wrn\nerr\n"


def test_debug_is_off_unless_flag_set(capsys):
    console = CliConsole.default({})

    console.debug("hidden")
    console.info("shown")

    assert capsys.readouterr().out == "shown\n"
    assert not console.is_debug


def test_quiet_drops_info_but_not_warnings(capsys):
    console = CliConsole.default({"quiet": True})

    console.info("hidden")
    console.warn("careful")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "careful\n"
    assert console.is_quiet


def test_custom_flag_names(capsys):
    console = CliConsole.default({"verbose": True, "silent": True}, "verbose", "silent")

    console.debug("dbg")
    console.info("inf")

    assert capsys.readouterr().out == "dbg\n"


def test_coloured_console_writes_to_given_consoles():
    stdout = capture_console()
    stderr = capture_console()
    console = CliConsole.with_colour({"debug": True}, stdout=stdout, stderr=stderr)

    console.debug("dbg")
    console.info("inf")
    console.warn("wrn")
    console.error("err")

    assert stdout.file.getvalue() == "dbg\ninf\n"
    assert stderr.file.getvalue() == "wrn\nerr\n"


def test_coloured_console_emits_styles_on_terminals():
    stdout = Console(file=StringIO(), force_terminal=True, color_system="standard")
    console = CliConsole.with_colour({}, info_style="green", stdout=stdout)

    console.info("ok")

    assert "\x1b[" in stdout.file.getvalue()


def test_coloured_console_ignores_non_strings():
    stdout = capture_console()
    console = CliConsole.with_colour({}, stdout=stdout)

    console.info(None)

    assert stdout.file.getvalue() == ""
