"""Exit code mapping for handy-cli commands."""

from __future__ import annotations

import os

from handy_cli.core.services.error_codes import ErrorCode

EX_SUCCESS = 0
EX_CLICK_USAGE = 2
EX_USAGE = getattr(os, "EX_USAGE", 64)
EX_NOINPUT = getattr(os, "EX_NOINPUT", 66)
EX_SOFTWARE = getattr(os, "EX_SOFTWARE", 70)
EX_NOPERM = getattr(os, "EX_NOPERM", 77)
EX_CONFIG = getattr(os, "EX_CONFIG", 78)


def exit_code_for_error(error_code: ErrorCode) -> int:
    """Map ErrorCode to a sysexits-style exit code."""
    mapping = {
        ErrorCode.INVALID_CONTEXT: EX_USAGE,
        ErrorCode.README_NOT_FOUND: EX_NOINPUT,
        ErrorCode.PATH_ESCAPE: EX_NOPERM,
        ErrorCode.CONFIG_INVALID: EX_CONFIG,
        ErrorCode.UNKNOWN_ERROR: EX_SOFTWARE,
    }
    return mapping.get(error_code, EX_SOFTWARE)
