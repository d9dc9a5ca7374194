"""Helpers for writing throwaway rustdoc-like output trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

SIGNATURE_PAGE = (
    "<!DOCTYPE html>\n"
    '<html lang="en"><head><meta charset="utf-8">'
    '<link rel="stylesheet" href="../static.files/rustdoc.css"></head>\n'
    '<body class="rustdoc struct"><main>\n'
    '<pre class="rust item-decl"><code>pub struct <a class="struct" href="#">Vector</a>'
    "&lt;T&gt; { /* private fields */ }</code></pre>\n"
    '<h3 class="code-header">impl&lt;T&gt; <a class="trait" href="#">Default</a> for '
    '<a class="struct" href="#">Vector</a>&lt;T&gt;</h3>\n'
    '<h4 class="code-header">pub fn <a href="#method.push" class="fn">push</a>'
    "(&amp;mut self, value: T)</h4>\n"
    '<h4 class="code-header">pub fn <a href="#method.as_ptr" class="fn">as_ptr</a>'
    "(&amp;self) -&gt; *const T</h4>\n"
    '<div class="where">where T: <a class="trait" href="#">Clone</a></div>\n'
    "<p>The constant value is mutable.</p>\n"
    "</main></body></html>\n"
)

PLAIN_PAGE = "<!DOCTYPE html>\n<html><body><p>Plain text.</p></body></html>\n"


class DocTreeBuilder:
    """Writes a project with a generated doc tree below ``tmp_path``."""

    def __init__(self, tmp_path: Path, crate: str = "standard_collections") -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self.crate = crate

    @property
    def doc_dir(self) -> Path:
        return self.root / "target" / "doc"

    @property
    def crate_dir(self) -> Path:
        return self.doc_dir / self.crate

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the project root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    def write_docs(self, files: Mapping[str, str] | None = None) -> None:
        """Populate the generator output as rustdoc would."""
        files = files or {
            "index.html": SIGNATURE_PAGE,
            "collections/struct.Vector.html": SIGNATURE_PAGE,
            "all.html": PLAIN_PAGE,
        }
        for relative, content in files.items():
            path = self.crate_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        static = self.doc_dir / "static.files" / "rustdoc.css"
        static.parent.mkdir(parents=True, exist_ok=True)
        static.write_text("body { color: #ddd; }\n", encoding="utf-8")

    def write_config(self, content: str) -> Path:
        path = self.root / ".docsite.yml"
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path


__all__ = ["DocTreeBuilder", "PLAIN_PAGE", "SIGNATURE_PAGE"]
