import re
from typing import Tuple

from handy_cli.core.services.repo_config import DEFAULT_HELP_END, DEFAULT_HELP_START


def fence_code_block(text: str) -> str:
    """Wrap text in a plain fenced code block terminated by a newline."""
    return "```\n" + text + "\n```\n"


def replace_between_markers(
    content: str,
    replacement: str,
    start_marker: str = DEFAULT_HELP_START,
    end_marker: str = DEFAULT_HELP_END,
) -> Tuple[str, bool]:
    """
    Replace everything from the first start marker to the last end marker.

    The markers are kept and the replacement sits on its own lines between
    them. Returns the new content and whether the markers were found; when
    they are not, the content is returned unchanged.
    """
    pattern = re.compile(re.escape(start_marker) + r".*" + re.escape(end_marker), re.DOTALL)
    block = f"{start_marker}\n{replacement}\n{end_marker}"
    new_content, count = pattern.subn(lambda _: block, content, count=1)
    return new_content, count > 0
