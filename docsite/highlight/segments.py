"""Splits an HTML page into the pieces the highlight passes may rewrite.

A page is treated as a flat sequence of tags and text runs. Comments and the
bodies of raw-text elements (``<script>``, ``<style>``, ``<textarea>``,
``<title>``) are carried through untouched, and tags are never handed to a
transform, so attribute values cannot be rewritten.
"""

from __future__ import annotations

import re
from typing import Callable, Collection, Iterable

from .constants import RAW_TEXT_ELEMENTS

Transform = Callable[[str], str]

_RAW = re.compile(
    r"<!--.*?(?:-->|\Z)"
    rf"|<({'|'.join(RAW_TEXT_ELEMENTS)})\b[^>]*>.*?(?:</\1\s*>|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_TOKEN = re.compile(r"(?P<tag><[^>]*>?)|(?P<text>[^<]+)")


def map_markup(html: str, transform: Transform) -> str:
    """Apply ``transform`` to everything outside comments and raw-text elements."""
    pieces = []
    position = 0
    for match in _RAW.finditer(html):
        pieces.append(transform(html[position : match.start()]))
        pieces.append(match.group(0))
        position = match.end()
    pieces.append(transform(html[position:]))
    return "".join(pieces)


def map_text_runs(
    html: str, transform: Transform, protected: Collection[str] = ()
) -> str:
    """Apply ``transform`` to every text run between two tags.

    A run that directly follows one of the ``protected`` opening tags is left
    as it is; that is how wrapped tokens stay out of later passes.
    """

    def rewrite(chunk: str) -> str:
        pieces = []
        inside_protected = False
        for match in _TOKEN.finditer(chunk):
            tag = match.group("tag")
            if tag is not None:
                pieces.append(tag)
                inside_protected = tag in protected
                continue
            text = match.group("text")
            pieces.append(text if inside_protected else transform(text))
        return "".join(pieces)

    return map_markup(html, rewrite)


def span_open(css_class: str) -> str:
    return f'<span class="{css_class}">'


def unwrap_spans(html: str, classes: Iterable[str]) -> str:
    """Remove highlight spans of the given classes, keeping their text."""
    names = sorted({name for name in classes if name})
    if not names:
        return html
    pattern = re.compile(
        r'<span class="(?:%s)">([^<]*)</span>' % "|".join(re.escape(name) for name in names)
    )
    return map_markup(html, lambda chunk: pattern.sub(r"\1", chunk))


__all__ = ["map_markup", "map_text_runs", "span_open", "unwrap_spans"]
