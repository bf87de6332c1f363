import pytest

from handy_cli.core.domain.entities import HelpOptions
from handy_cli.core.services.error_codes import ErrorCode, HandyCliError
from handy_cli.core.use_cases.update_readme import UpdateReadmeUseCase, inject_help_text_into_readme

README = """# dataflow

## Usage

<!-- help start -->
stale help
<!-- help end -->

## License
"""


@pytest.fixture
def readme(tmp_path):
    path = tmp_path / "README.md"
    path.write_text(README, encoding="utf-8")
    return path


def test_help_is_injected_between_markers(tmp_path, readme, make_invocation):
    result = UpdateReadmeUseCase(tmp_path).execute(make_invocation(["--update-readme.md"]))

    content = readme.read_text(encoding="utf-8")
    assert result.updated
    assert result.markers_found
    assert result.readme_path == readme.resolve()
    assert "stale help" not in content
    assert "<!-- help start -->\n```\nUSAGE" in content
    assert "```\n\n<!-- help end -->" in content
    assert content.startswith("# dataflow\n")
    assert content.endswith("## License\n")


def test_second_run_leaves_file_untouched(tmp_path, readme, make_invocation):
    inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    result = inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    assert result.markers_found
    assert not result.updated


def test_missing_markers_leave_readme_unchanged(tmp_path, make_invocation):
    readme = tmp_path / "README.md"
    readme.write_text("# dataflow\n", encoding="utf-8")

    result = inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    assert not result.markers_found
    assert not result.updated
    assert readme.read_text(encoding="utf-8") == "# dataflow\n"


def test_missing_readme_is_reported(tmp_path, make_invocation):
    with pytest.raises(HandyCliError) as exc_info:
        inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    assert exc_info.value.code == ErrorCode.README_NOT_FOUND


def test_config_selects_readme_and_markers(tmp_path, make_invocation):
    (tmp_path / ".handy-cli.yaml").write_text(
        "readme_path: docs/CLI.md\n"
        "help_start_marker: '<!-- usage -->'\n"
        "help_end_marker: '<!-- usagestop -->'\n",
        encoding="utf-8",
    )
    docs = tmp_path / "docs"
    docs.mkdir()
    target = docs / "CLI.md"
    target.write_text("<!-- usage -->\n<!-- usagestop -->\n", encoding="utf-8")

    result = inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    assert result.updated
    assert "$ mocha" in target.read_text(encoding="utf-8")


def test_invocation_readme_path_wins_over_config(tmp_path, make_invocation):
    target = tmp_path / "MANUAL.md"
    target.write_text("<!-- help start -->\n<!-- help end -->\n", encoding="utf-8")

    result = inject_help_text_into_readme(make_invocation([], readme_path="MANUAL.md"), root_dir=tmp_path)

    assert result.readme_path == tmp_path.resolve() / "MANUAL.md"
    assert result.updated


def test_help_options_are_applied(tmp_path, readme, make_invocation):
    inject_help_text_into_readme(make_invocation([]), HelpOptions(max_width=50), root_dir=tmp_path)

    inside = readme.read_text(encoding="utf-8").split("```")[1]
    assert all(len(line) <= 50 for line in inside.splitlines() if not line.lstrip().startswith("mocha"))


def test_symlinked_readme_is_refused(tmp_path, make_invocation):
    real = tmp_path / "real.md"
    real.write_text("<!-- help start -->\n<!-- help end -->\n", encoding="utf-8")
    (tmp_path / "README.md").symlink_to(real)

    with pytest.raises(HandyCliError) as exc_info:
        inject_help_text_into_readme(make_invocation([]), root_dir=tmp_path)

    assert exc_info.value.code == ErrorCode.PATH_ESCAPE
    assert real.read_text(encoding="utf-8") == "<!-- help start -->\n<!-- help end -->\n"
