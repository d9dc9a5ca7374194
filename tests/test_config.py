"""Tests for docsite.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.config import ConfigError, DocsiteConfig, load_config
from docsite.highlight.constants import DEFAULT_KEYWORDS


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocsiteConfig)
    assert config.root == tmp_path.resolve()
    assert config.crate is None
    assert config.generator.command == []
    assert config.doc_dir == tmp_path.resolve() / "target" / "doc"
    assert config.output_root == config.doc_dir
    assert config.highlight_root == config.doc_dir
    assert config.highlight.keywords == list(DEFAULT_KEYWORDS)
    assert config.highlight.keyword_class == "extra-kw"
    assert config.highlight.operator_class == "extra-op"
    assert config.highlight.suffix == ".html"
    assert config.site.base_url is None
    assert config.theme is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docsite.yml"
    config_file.write_text(
        """
crate: standard_collections
output: site
theme: doc/kali-dark.css
header: doc/robots.html
opener: firefox --new-window
generator:
  command: "cargo +nightly rustdoc --"
  doc_dir: build/doc
highlight:
  suffix: htm
  keywords: [pub, fn, where]
  keyword_class: kw
  operator_class: op
site:
  base_url: "https://collections.example.org"
  domain: collections.example.org
  robots: doc/robots.txt
  cname: doc/CNAME
  robots_meta: "index, follow"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.crate == "standard_collections"
    assert config.output_root == root / "site"
    assert config.theme == root / "doc" / "kali-dark.css"
    assert config.header == root / "doc" / "robots.html"
    assert config.opener == "firefox --new-window"
    assert config.generator.command == ["cargo", "+nightly", "rustdoc", "--"]
    assert config.doc_dir == root / "build" / "doc"
    assert config.highlight_root == root / "build" / "doc" / "standard_collections"
    assert config.highlight.suffix == ".htm"
    assert config.highlight.keywords == ["pub", "fn", "where"]
    assert config.highlight.keyword_class == "kw"
    assert config.highlight.operator_class == "op"
    assert config.site.base_url == "https://collections.example.org"
    assert config.site.domain == "collections.example.org"
    assert config.site.robots == root / "doc" / "robots.txt"
    assert config.site.cname == root / "doc" / "CNAME"
    assert config.site.robots_meta == "index, follow"


def test_load_config_accepts_command_list(tmp_path: Path) -> None:
    (tmp_path / ".docsite.yml").write_text(
        "generator:\n  command:\n    - make\n    - docs\n",
        encoding="utf-8",
    )
    assert load_config(tmp_path).generator.command == ["make", "docs"]


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".docsite.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".docsite.yml").write_text("crate: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docsite.yml").write_text("\n", encoding="utf-8")
    config = load_config(tmp_path / ".docsite.yml")
    assert config.root == tmp_path.resolve()
    assert config.crate is None
