"""Vocabulary and class names shared by the highlight passes."""

from __future__ import annotations

from typing import Tuple

DEFAULT_KEYWORDS: Tuple[str, ...] = (
    "pub",
    "const",
    "fn",
    "self",
    "Self",
    "struct",
    "enum",
    "type",
    "impl",
    "for",
    "unsafe",
    "as",
    "mut",
)

MODIFIER_KEYWORDS: Tuple[str, ...] = ("mut", "const")

OPERATORS: Tuple[str, ...] = ("&amp;", "-&gt;", "::", "*")

KEYWORD_CLASS = "extra-kw"
OPERATOR_CLASS = "extra-op"

CLAUSE_CONTAINER = '<div class="where">'
CLAUSE_KEYWORD = "where"

# Character-class bodies. A token is anchored when it opens a text run (after
# optional whitespace) or directly follows one of the LEAD characters. A
# keyword run must end the text run or be followed by a TRAIL character.
KEYWORD_LEAD = r";\[("
MODIFIER_LEAD = r";\[(*"
OPERATOR_LEAD = r"\s;\[(\w"
KEYWORD_TRAIL = r"& \n:,)"

# Elements whose content is raw text rather than markup.
RAW_TEXT_ELEMENTS: Tuple[str, ...] = ("script", "style", "textarea", "title")

DEFAULT_SUFFIX = ".html"
