from __future__ import annotations

from pathlib import Path
from typing import Union

from handy_cli.core.services.error_codes import ErrorCode, HandyCliError


def _path_escape(message: str, **details: str) -> HandyCliError:
    return HandyCliError(code=ErrorCode.PATH_ESCAPE, message=message, details=details)


def ensure_safe_write_path(*, root_dir: Union[str, Path], target_path: Union[str, Path]) -> Path:
    """Check that a README write stays inside the project root and return the target.

    Relative targets are taken from ``root_dir``. The write is refused with
    PATH_ESCAPE when the target resolves outside the root or when any
    component below the root is a symlink, even one pointing back inside.
    """
    root = Path(root_dir).resolve()
    target = Path(target_path)
    if not target.is_absolute():
        target = root / target

    try:
        target.resolve().relative_to(root)
        rel = target.relative_to(root)
    except ValueError:
        raise _path_escape(
            f"Path '{target}' escapes project root '{root}'",
            target_path=str(target),
            root_dir=str(root),
        ) from None

    current = root
    for part in rel.parts:
        current = current / part
        if current.is_symlink():
            raise _path_escape(
                f"Path '{target}' contains symlink component '{current}'",
                target_path=str(target),
                symlink_component=str(current),
                root_dir=str(root),
            )
    return target
