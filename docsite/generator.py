"""Invocation of the external documentation generator."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List

from .config import DocsiteConfig
from .errors import SiteIOError, UpstreamFailure
from .logging import get_logger
from .rendering import render

_CACHE_DIR = ".docsite"


class DocGenerator:
    """Runs ``cargo rustdoc`` (or a configured command) in the project root."""

    def __init__(self, runner: Callable[..., int] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("generator")

    def command_for(self, config: DocsiteConfig) -> List[str]:
        if config.generator.command:
            return list(config.generator.command)

        command = ["cargo", "rustdoc", "--"]
        if config.theme is not None:
            command.extend(["--theme", str(config.theme)])
        header = self._header_for(config)
        if header is not None:
            command.extend(["--html-in-header", str(header)])
        command.extend(["--enable-index-page", "-Z", "unstable-options"])
        return command

    def generate(self, config: DocsiteConfig) -> Path:
        """Run the generator and return the directory it wrote."""
        command = self.command_for(config)
        self.logger.info("Generating documentation: %s", " ".join(command))
        try:
            returncode = self._runner(command, cwd=config.root)
        except OSError as exc:
            raise SiteIOError(
                f"Could not run `{command[0]}`: {exc}",
                stage="generate",
                target=command[0],
            ) from exc
        if returncode != 0:
            raise UpstreamFailure(command, returncode)

        doc_dir = config.doc_dir
        if not doc_dir.is_dir():
            raise SiteIOError(
                f"Generator finished but {doc_dir} does not exist",
                stage="generate",
                target=doc_dir,
            )
        return doc_dir

    def _header_for(self, config: DocsiteConfig) -> Path | None:
        if config.header is not None:
            return config.header
        if not config.site.robots_meta:
            return None
        header = config.root / _CACHE_DIR / "robots.html"
        try:
            header.parent.mkdir(parents=True, exist_ok=True)
            header.write_text(
                render("robots.html.j2", robots_meta=config.site.robots_meta),
                encoding="utf-8",
            )
        except OSError as exc:
            raise SiteIOError(
                f"Failed to write {header}: {exc}", stage="generate", target=header
            ) from exc
        return header

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> int:
        completed = subprocess.run(list(args), cwd=str(cwd), check=False)
        return completed.returncode


__all__ = ["DocGenerator"]
