from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from handy_cli.core.domain.entities import HelpOptions
from handy_cli.core.services.error_codes import ErrorCode, HandyCliError
from handy_cli.core.services.observability import log_debug

CONFIG_FILENAME = ".handy-cli.yaml"
DEFAULT_README_PATH = "README.md"
DEFAULT_HELP_START = "<!-- help start -->"
DEFAULT_HELP_END = "<!-- help end -->"
DEFAULT_MAX_WIDTH = 80


def _safe_repo_relative_path(root_dir: Path, raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    raw = raw.strip()
    if not raw:
        return None
    p = Path(raw)
    if p.is_absolute():
        return None
    try:
        resolved = (root_dir / p).resolve()
        resolved.relative_to(root_dir.resolve())
    except Exception:
        return None
    return p.as_posix()


def _invalid(config_path: Path, message: str, **details: Any) -> HandyCliError:
    return HandyCliError(
        code=ErrorCode.CONFIG_INVALID,
        message=f"{config_path.name}: {message}",
        details={"config_path": str(config_path), **details},
    )


@dataclass(frozen=True)
class ProjectConfig:
    """Documentation-related settings for a CLI project."""

    root_dir: Path
    readme_path: str = DEFAULT_README_PATH
    help_start_marker: str = DEFAULT_HELP_START
    help_end_marker: str = DEFAULT_HELP_END
    max_width: int = DEFAULT_MAX_WIDTH
    strip_ansi: bool = True

    @property
    def readme_file(self) -> Path:
        return self.root_dir / self.readme_path

    def help_options(self) -> Dict[str, Any]:
        return {"max_width": self.max_width, "strip_ansi": self.strip_ansi}

    def resolve_help_options(self, overrides: Union[HelpOptions, Mapping[str, Any], None] = None) -> HelpOptions:
        """Configured help options with ``overrides`` on top; a HelpOptions instance replaces them."""
        if isinstance(overrides, HelpOptions):
            return overrides
        return HelpOptions.merged(HelpOptions(**self.help_options()), overrides)


def _read_marker(config_path: Path, data: Mapping[str, Any], key: str, default: str) -> str:
    raw = data.get(key, default)
    if not isinstance(raw, str) or not raw.strip():
        raise _invalid(config_path, f"'{key}' must be a non-empty string", key=key)
    return raw.strip()


def load_project_config(root_dir: str | Path) -> ProjectConfig:
    root = Path(root_dir).resolve()
    config_path = root / CONFIG_FILENAME

    data: Dict[str, Any] = {}
    if config_path.is_file():
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise _invalid(config_path, f"invalid YAML ({exc})") from exc
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, Mapping):
            raise _invalid(config_path, "expected a mapping at the top level")
        data = dict(loaded)
    log_debug(
        operation="debug.config_loaded",
        details={"config_path": str(config_path), "exists": config_path.is_file()},
    )

    readme_path = DEFAULT_README_PATH
    if "readme_path" in data:
        readme_path = _safe_repo_relative_path(root, data["readme_path"]) or ""
        if not readme_path:
            raise _invalid(
                config_path,
                "'readme_path' must be a relative path inside the project",
                readme_path=data["readme_path"],
            )

    max_width = data.get("max_width", DEFAULT_MAX_WIDTH)
    if isinstance(max_width, bool) or not isinstance(max_width, int) or max_width <= 0:
        raise _invalid(config_path, "'max_width' must be a positive integer", max_width=max_width)

    strip_ansi = data.get("strip_ansi", True)
    if not isinstance(strip_ansi, bool):
        raise _invalid(config_path, "'strip_ansi' must be a boolean", strip_ansi=strip_ansi)

    return ProjectConfig(
        root_dir=root,
        readme_path=readme_path,
        help_start_marker=_read_marker(config_path, data, "help_start_marker", DEFAULT_HELP_START),
        help_end_marker=_read_marker(config_path, data, "help_end_marker", DEFAULT_HELP_END),
        max_width=max_width,
        strip_ansi=strip_ansi,
    )


def project_help_options(
    overrides: Union[HelpOptions, Mapping[str, Any], None] = None,
    root_dir: Union[str, Path] = ".",
) -> HelpOptions:
    """Help options for rendering in ``root_dir``, so ``--help`` and the README agree."""
    return load_project_config(root_dir).resolve_help_options(overrides)
