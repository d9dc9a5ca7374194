"""Configuration loading for docsite (.docsite.yml)."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .highlight.constants import (
    DEFAULT_KEYWORDS,
    DEFAULT_SUFFIX,
    KEYWORD_CLASS,
    OPERATOR_CLASS,
)

CONFIG_FILENAME = ".docsite.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration or a rewrite pattern is invalid."""


@dataclass
class GeneratorConfig:
    """How the external documentation generator is invoked."""

    command: List[str] = field(default_factory=list)
    doc_dir: Path = Path("target/doc")


@dataclass
class HighlightConfig:
    """Vocabulary and span classes for the highlight passes."""

    suffix: str = DEFAULT_SUFFIX
    keywords: List[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    keyword_class: str = KEYWORD_CLASS
    operator_class: str = OPERATOR_CLASS


@dataclass
class SiteConfig:
    """Deployment metadata written next to the generated pages."""

    base_url: Optional[str] = None
    domain: Optional[str] = None
    robots: Optional[Path] = None
    cname: Optional[Path] = None
    robots_meta: Optional[str] = None


@dataclass
class DocsiteConfig:
    """Represents the settings defined in .docsite.yml."""

    root: Path
    crate: Optional[str] = None
    output: Optional[Path] = None
    theme: Optional[Path] = None
    header: Optional[Path] = None
    opener: Optional[str] = None
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    site: SiteConfig = field(default_factory=SiteConfig)

    @property
    def doc_dir(self) -> Path:
        return self._resolve(self.generator.doc_dir)

    @property
    def output_root(self) -> Path:
        if self.output is None:
            return self.doc_dir
        return self._resolve(self.output)

    @property
    def highlight_root(self) -> Path:
        """Directory the highlight passes walk: the crate's folder when known."""
        if self.crate:
            return self.doc_dir / self.crate
        return self.doc_dir

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path


def load_config(config_path: Path) -> DocsiteConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocsiteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    generator = GeneratorConfig()
    generator_data = _as_dict(data.get("generator"))
    if generator_data:
        generator.command = _as_command(generator_data.get("command"))
        doc_dir = _as_str(generator_data.get("doc_dir"))
        if doc_dir:
            generator.doc_dir = Path(doc_dir)

    highlight = HighlightConfig()
    highlight_data = _as_dict(data.get("highlight"))
    if highlight_data:
        suffix = _as_str(highlight_data.get("suffix"))
        if suffix:
            highlight.suffix = suffix if suffix.startswith(".") else f".{suffix}"
        keywords = _as_str_list(highlight_data.get("keywords"))
        if keywords:
            highlight.keywords = keywords
        highlight.keyword_class = _as_str(highlight_data.get("keyword_class")) or highlight.keyword_class
        highlight.operator_class = (
            _as_str(highlight_data.get("operator_class")) or highlight.operator_class
        )

    site = SiteConfig()
    site_data = _as_dict(data.get("site"))
    if site_data:
        site.base_url = _as_str(site_data.get("base_url"))
        site.domain = _as_str(site_data.get("domain"))
        site.robots = _as_path(root, site_data.get("robots"))
        site.cname = _as_path(root, site_data.get("cname"))
        site.robots_meta = _as_str(site_data.get("robots_meta"))

    output = _as_str(data.get("output"))

    return DocsiteConfig(
        root=root,
        crate=_as_str(data.get("crate")),
        output=Path(output) if output else None,
        theme=_as_path(root, data.get("theme")),
        header=_as_path(root, data.get("header")),
        opener=_as_str(data.get("opener")),
        generator=generator,
        highlight=highlight,
        site=site,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _as_command(value: Any) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    return _as_str_list(value)


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocsiteConfig",
    "GeneratorConfig",
    "HighlightConfig",
    "SiteConfig",
    "load_config",
]
