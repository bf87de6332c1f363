from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from handy_cli.core.domain.entities import CommandInvocation
from handy_cli.core.services.error_codes import ErrorCode, HandyCliError
from handy_cli.core.services.help_text import HelpOptionsLike, generate_help_text
from handy_cli.core.services.markdown_utils import fence_code_block, replace_between_markers
from handy_cli.core.services.observability import log_operation
from handy_cli.core.services.repo_config import load_project_config
from handy_cli.core.services.safe_fs import ensure_safe_write_path


@dataclass(frozen=True)
class ReadmeUpdateResult:
    readme_path: Path
    updated: bool
    markers_found: bool


class UpdateReadmeUseCase:
    """Inject a command's help page between the help markers of its README."""

    def __init__(self, root_dir: Union[str, Path] = "."):
        self._config = load_project_config(root_dir)
        self._root_dir = self._config.root_dir

    def execute(
        self,
        invocation: CommandInvocation,
        options: HelpOptionsLike = None,
    ) -> ReadmeUpdateResult:
        readme_path = self._readme_path(invocation)
        help_options = self._config.resolve_help_options(options)

        with log_operation("readme_update", path=str(readme_path)) as event:
            if not readme_path.is_file():
                raise HandyCliError(
                    code=ErrorCode.README_NOT_FOUND,
                    message=f"README not found: {readme_path}",
                    details={"path": str(readme_path)},
                )
            ensure_safe_write_path(root_dir=self._root_dir, target_path=readme_path)

            help_text = generate_help_text(invocation, help_options)
            content = readme_path.read_text(encoding="utf-8")
            new_content, markers_found = replace_between_markers(
                content,
                fence_code_block(help_text),
                self._config.help_start_marker,
                self._config.help_end_marker,
            )
            event.details["markers_found"] = markers_found
            updated = new_content != content
            if updated:
                readme_path.write_text(new_content, encoding="utf-8")
            event.details["updated"] = updated

        return ReadmeUpdateResult(readme_path=readme_path, updated=updated, markers_found=markers_found)

    def _readme_path(self, invocation: CommandInvocation) -> Path:
        path: Optional[Path] = invocation.readme_path
        if path is None:
            return self._config.readme_file
        path = Path(path)
        return path if path.is_absolute() else self._root_dir / path


def inject_help_text_into_readme(
    invocation: CommandInvocation,
    options: HelpOptionsLike = None,
    root_dir: Union[str, Path] = ".",
) -> ReadmeUpdateResult:
    return UpdateReadmeUseCase(root_dir).execute(invocation, options)
