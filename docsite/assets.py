"""Assembles the deployable site around the highlighted pages."""

from __future__ import annotations

import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, List
from urllib.parse import quote

from .config import DocsiteConfig
from .errors import SiteIOError
from .logging import get_logger
from .rendering import render
from .tree_walker import walk_files


class SiteAssembler:
    """Copies the generated tree and writes theme, robots, CNAME and sitemap."""

    def __init__(self) -> None:
        self.logger = get_logger("assets")

    def assemble(self, config: DocsiteConfig, source: Path) -> List[Path]:
        """Populate ``config.output_root`` and return the metadata files written."""
        output = config.output_root
        written: List[Path] = []

        if source.resolve() in output.resolve().parents:
            raise SiteIOError(
                f"Output root {output} must not live inside {source}",
                stage="assets",
                target=output,
            )
        if source.resolve() != output.resolve():
            self.logger.info("Copying %s to %s", source, output)
            self._guard(
                lambda: shutil.copytree(source, output, symlinks=True, dirs_exist_ok=True),
                output,
            )
        else:
            self._guard(lambda: output.mkdir(parents=True, exist_ok=True), output)

        if config.theme is not None:
            written.append(self._copy(config.theme, output / config.theme.name))

        sitemap_url = None
        if config.site.base_url:
            sitemap_url = _join_url(config.site.base_url, "sitemap.xml")

        if config.site.robots is not None:
            written.append(self._copy(config.site.robots, output / "robots.txt"))
        else:
            robots = render("robots.txt.j2", sitemap_url=sitemap_url)
            written.append(self._write(output / "robots.txt", robots))

        if config.site.cname is not None:
            written.append(self._copy(config.site.cname, output / "CNAME"))
        elif config.site.domain:
            written.append(self._write(output / "CNAME", f"{config.site.domain.strip()}\n"))

        if config.site.base_url:
            pages = self._sitemap_entries(output, config.site.base_url, config.highlight.suffix)
            sitemap = render("sitemap.xml.j2", pages=pages)
            written.append(self._write(output / "sitemap.xml", sitemap))
            self.logger.debug("Sitemap lists %d pages", len(pages))

        return written

    def _sitemap_entries(self, output: Path, base_url: str, suffix: str) -> List[Dict[str, str]]:
        try:
            paths = list(walk_files(output, suffix))
            entries = []
            for path in paths:
                relative = path.relative_to(output.resolve()).as_posix()
                modified = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
                entries.append(
                    {
                        "loc": _join_url(base_url, quote(relative)),
                        "lastmod": modified.date().isoformat(),
                    }
                )
        except OSError as exc:
            raise SiteIOError(
                f"Failed to list pages under {output}: {exc}", stage="assets", target=output
            ) from exc
        return entries

    def _copy(self, source: Path, destination: Path) -> Path:
        self._guard(lambda: shutil.copyfile(source, destination), source)
        self.logger.debug("Copied %s to %s", source, destination)
        return destination

    def _write(self, destination: Path, content: str) -> Path:
        self._guard(lambda: destination.write_text(content, encoding="utf-8"), destination)
        self.logger.debug("Wrote %s", destination)
        return destination

    @staticmethod
    def _guard(action, target: Path) -> None:
        try:
            action()
        except OSError as exc:
            raise SiteIOError(
                f"Failed to prepare {target}: {exc}", stage="assets", target=target
            ) from exc


def _join_url(base_url: str, relative: str) -> str:
    return f"{base_url.rstrip('/')}/{relative.lstrip('/')}"


__all__ = ["SiteAssembler"]
