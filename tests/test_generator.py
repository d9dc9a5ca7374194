"""Tests for the documentation generator step."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.config import DocsiteConfig, load_config
from docsite.errors import SiteIOError, UpstreamFailure
from docsite.generator import DocGenerator
from tests._fixtures.doc_tree import DocTreeBuilder


def test_default_command_mirrors_rustdoc_invocation(doc_tree: DocTreeBuilder) -> None:
    doc_tree.write_config(
        """
        theme: doc/kali-dark.css
        header: doc/robots.html
        """
    )
    config = load_config(doc_tree.root)

    command = DocGenerator().command_for(config)

    assert command == [
        "cargo",
        "rustdoc",
        "--",
        "--theme",
        str(config.root / "doc" / "kali-dark.css"),
        "--html-in-header",
        str(config.root / "doc" / "robots.html"),
        "--enable-index-page",
        "-Z",
        "unstable-options",
    ]


def test_robots_meta_renders_header_fragment(doc_tree: DocTreeBuilder) -> None:
    doc_tree.write_config(
        """
        site:
          robots_meta: "noindex, nofollow"
        """
    )
    config = load_config(doc_tree.root)

    command = DocGenerator().command_for(config)

    header = config.root / ".docsite" / "robots.html"
    assert command[command.index("--html-in-header") + 1] == str(header)
    assert header.read_text(encoding="utf-8") == (
        '<meta name="robots" content="noindex, nofollow">\n'
    )


def test_configured_command_is_used_verbatim(tmp_path: Path) -> None:
    config = DocsiteConfig(root=tmp_path)
    config.generator.command = ["make", "docs"]
    assert DocGenerator().command_for(config) == ["make", "docs"]


def test_generate_runs_in_project_root(doc_tree: DocTreeBuilder) -> None:
    calls = []

    def runner(args, cwd):
        calls.append((list(args), Path(cwd)))
        doc_tree.write_docs()
        return 0

    config = load_config(doc_tree.root)
    result = DocGenerator(runner=runner).generate(config)

    assert result == config.doc_dir
    assert calls[0][0][:2] == ["cargo", "rustdoc"]
    assert calls[0][1] == config.root


def test_generate_raises_upstream_failure_on_non_zero_exit(doc_tree: DocTreeBuilder) -> None:
    config = load_config(doc_tree.root)

    with pytest.raises(UpstreamFailure) as excinfo:
        DocGenerator(runner=lambda args, cwd: 101).generate(config)

    assert excinfo.value.returncode == 101
    assert excinfo.value.stage == "generate"
    assert excinfo.value.command[:2] == ["cargo", "rustdoc"]


def test_generate_reports_missing_executable(doc_tree: DocTreeBuilder) -> None:
    def runner(args, cwd):
        raise FileNotFoundError(2, "No such file or directory", "cargo")

    config = load_config(doc_tree.root)
    with pytest.raises(SiteIOError) as excinfo:
        DocGenerator(runner=runner).generate(config)
    assert excinfo.value.stage == "generate"
    assert excinfo.value.target == "cargo"


def test_generate_requires_output_directory(doc_tree: DocTreeBuilder) -> None:
    config = load_config(doc_tree.root)
    with pytest.raises(SiteIOError) as excinfo:
        DocGenerator(runner=lambda args, cwd: 0).generate(config)
    assert excinfo.value.target == config.doc_dir
