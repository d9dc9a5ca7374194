"""Pipeline orchestration for build and highlight flows."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List

from .assets import SiteAssembler
from .config import DocsiteConfig, HighlightConfig, load_config
from .errors import SiteIOError
from .generator import DocGenerator
from .highlight.engine import HighlightReport, PassEngine
from .highlight.passes import passes_from_config
from .logging import get_logger
from .opener import resolve_index
from .tree_walker import walk_files


@dataclass
class BuildOutcome:
    """Result of a full documentation build."""

    output_root: Path
    index_page: Path | None
    report: HighlightReport
    assets: List[Path] = field(default_factory=list)


class Pipeline:
    """Sequences generation, highlighting and site assembly.

    Stages run strictly one after another and any failure ends the run; a
    site with some pages left unprocessed is never produced silently.
    """

    def __init__(
        self,
        generator: DocGenerator | None = None,
        assembler: SiteAssembler | None = None,
    ) -> None:
        self.generator = generator or DocGenerator()
        self.assembler = assembler or SiteAssembler()
        self.logger = get_logger("pipeline")

    def run_build(
        self,
        path: str | Path = ".",
        *,
        config: DocsiteConfig | None = None,
        output: str | Path | None = None,
        skip_generate: bool = False,
    ) -> BuildOutcome:
        """Generate, highlight and assemble the site described by ``path``."""
        config = config or load_config(Path(path))
        if output is not None:
            config = replace(config, output=Path(output).expanduser().resolve())
        self.logger.info("Starting build for %s", config.root)

        # Compile before touching anything so a bad pattern never half-runs.
        engine = self._build_engine(config.highlight)

        if skip_generate:
            self.logger.info("Skipping generation; using existing %s", config.doc_dir)
        else:
            self.generator.generate(config)

        report = self._highlight(engine, config.highlight_root, config.highlight.suffix)
        assets = self.assembler.assemble(config, config.doc_dir)

        output_root = config.output_root
        index_page = self._index_page(output_root, config.crate)
        self.logger.info("Site ready at %s", output_root)
        return BuildOutcome(
            output_root=output_root,
            index_page=index_page,
            report=report,
            assets=assets,
        )

    def run_highlight(
        self,
        root: str | Path,
        *,
        highlight: HighlightConfig | None = None,
    ) -> HighlightReport:
        """Run only the highlight passes over an existing tree."""
        highlight = highlight or HighlightConfig()
        engine = self._build_engine(highlight)
        return self._highlight(engine, Path(root), highlight.suffix)

    @staticmethod
    def _build_engine(highlight: HighlightConfig) -> PassEngine:
        return PassEngine(passes_from_config(highlight))

    def _highlight(self, engine: PassEngine, root: Path, suffix: str) -> HighlightReport:
        self.logger.info("Highlighting %s files under %s", suffix, root)
        try:
            return engine.run(walk_files(root, suffix))
        except OSError as exc:
            raise SiteIOError(
                f"Failed to walk {root}: {exc}",
                stage="walk",
                target=getattr(exc, "filename", None) or root,
            ) from exc

    @staticmethod
    def _index_page(output_root: Path, crate: str | None) -> Path | None:
        try:
            return resolve_index(output_root, crate)
        except FileNotFoundError:
            return None


__all__ = ["BuildOutcome", "Pipeline"]
