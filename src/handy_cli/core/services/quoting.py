"""Quoting policy for reconstructed command lines.

Only the argument shapes click itself produces are covered: strings,
booleans, integers and sequences of strings. This is not shlex: a value
containing a single quote is wrapped as-is and will not survive a shell
round trip.
"""

import re

_BARE_TOKEN = re.compile(r"[0-9A-Za-z+,-]+")


def is_bare_token(text: str) -> bool:
    """True when ``text`` can be emitted without quotes."""
    return _BARE_TOKEN.fullmatch(text) is not None


def quote_if_needed(value: object) -> str:
    if not isinstance(value, str) or is_bare_token(value):
        return f"{value}"
    return f"'{value}'"
