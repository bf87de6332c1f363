import pytest

from handy_cli.core.services.quoting import is_bare_token, quote_if_needed


@pytest.mark.parametrize("value", ["x1", "api-doc", "8002", "a+b,c", "ABC-def", "-"])
def test_bare_tokens_are_not_quoted(value):
    assert quote_if_needed(value) == value


@pytest.mark.parametrize(
    "value",
    ["*xyz*", "abc and d", "8 and eight", "a/b", "key=value", "under_score", "dot.md", ""],
)
def test_other_strings_are_wrapped_once(value):
    assert quote_if_needed(value) == f"'{value}'"


def test_non_strings_render_bare():
    assert quote_if_needed(8002) == "8002"
    assert quote_if_needed(True) == "True"


def test_embedded_single_quote_is_not_escaped():
    assert quote_if_needed("it's") == "'it's'"


def test_is_bare_token_requires_full_match():
    assert is_bare_token("abc")
    assert not is_bare_token("abc def")
    assert not is_bare_token("abc\n")
