"""Applies the ordered rewrite passes to HTML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence

from ..errors import SiteIOError
from ..logging import get_logger
from .passes import RewritePass
from .segments import unwrap_spans


@dataclass
class HighlightReport:
    """Files seen by one engine run and the subset that was rewritten."""

    visited: List[Path] = field(default_factory=list)
    changed: List[Path] = field(default_factory=list)

    @property
    def unchanged(self) -> List[Path]:
        changed = set(self.changed)
        return [path for path in self.visited if path not in changed]


class PassEngine:
    """Runs passes in declaration order over whole-file text.

    Spans carrying one of the passes' own classes are unwrapped before the
    passes run, so a page that was already highlighted comes out exactly as
    it did the first time and ``apply`` on its own output is a no-op.
    """

    def __init__(self, passes: Sequence[RewritePass]) -> None:
        self.passes = tuple(passes)
        self.classes = tuple(
            dict.fromkeys(rewrite.css_class for rewrite in self.passes if rewrite.css_class)
        )
        self.logger = get_logger("highlight")

    def apply(self, text: str) -> str:
        text = unwrap_spans(text, self.classes)
        for rewrite in self.passes:
            text = rewrite.apply(text)
        return text

    def process_file(self, path: Path) -> bool:
        """Rewrite ``path`` in place. Returns True when the file was written."""
        try:
            original = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SiteIOError(
                f"Failed to read {path}: {exc}", stage="highlight", target=path
            ) from exc

        updated = self.apply(original)
        if updated == original:
            return False

        try:
            path.write_bytes(updated.encode("utf-8"))
        except OSError as exc:
            raise SiteIOError(
                f"Failed to write {path}: {exc}", stage="highlight", target=path
            ) from exc
        return True

    def run(self, paths: Iterable[Path]) -> HighlightReport:
        report = HighlightReport()
        for path in paths:
            report.visited.append(path)
            if self.process_file(path):
                report.changed.append(path)
                self.logger.debug("Highlighted %s", path)
        self.logger.info(
            "Highlight passes rewrote %d of %d files",
            len(report.changed),
            len(report.visited),
        )
        return report


__all__ = ["HighlightReport", "PassEngine"]
