"""Ordered regex rewrite passes that add highlight spans to rustdoc HTML.

The keyword, modifier and operator passes only ever see text runs, the text
between two tags (see ``segments``), and they rewrite every qualifying token
of a run in one application. A token is anchored when it opens its run or
follows a punctuation lead, so keywords used as ordinary words in the middle
of a sentence are left alone. Runs inside a highlight span are skipped, so
wrapped text is never wrapped again.

Order matters: the keyword pass consumes most ``mut``/``const`` tokens before
the modifier pass sees them, and the operator pass runs last so that its
spans do not split keyword runs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from ..config import ConfigError, HighlightConfig
from .constants import (
    CLAUSE_CONTAINER,
    CLAUSE_KEYWORD,
    DEFAULT_KEYWORDS,
    KEYWORD_CLASS,
    KEYWORD_LEAD,
    KEYWORD_TRAIL,
    MODIFIER_KEYWORDS,
    MODIFIER_LEAD,
    OPERATOR_CLASS,
    OPERATOR_LEAD,
    OPERATORS,
)
from .segments import map_markup, map_text_runs, span_open

KEYWORD = "keyword"
MODIFIER = "modifier"
OPERATOR = "operator"
CLAUSE = "clause"

PASS_KINDS = (KEYWORD, MODIFIER, OPERATOR, CLAUSE)

# Where a pass's pattern is matched: each text run on its own, or the markup
# around raw-text elements as a whole.
TEXT_RUNS = "text-runs"
MARKUP = "markup"

_CLASS_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_GROUP_REFERENCE = re.compile(r"\\g<([^>]*)>|\\(\d+)")


@dataclass(frozen=True)
class RewritePass:
    """A single pattern/replacement pair, compiled when constructed."""

    name: str
    kind: str
    pattern: str
    replacement: str
    rationale: str = ""
    css_class: str = ""
    scope: str = TEXT_RUNS
    protected: Tuple[str, ...] = ()
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in PASS_KINDS:
            raise ConfigError(f"Pass {self.name!r} has unknown kind {self.kind!r}")
        if self.scope not in (TEXT_RUNS, MARKUP):
            raise ConfigError(f"Pass {self.name!r} has unknown scope {self.scope!r}")
        try:
            compiled = re.compile(self.pattern)
        except re.error as exc:
            raise ConfigError(f"Pass {self.name!r} has an invalid pattern: {exc}") from exc
        _check_replacement(self.name, compiled, self.replacement)
        object.__setattr__(self, "regex", compiled)

    def apply(self, html: str) -> str:
        def substitute(text: str) -> str:
            return self.regex.sub(self.replacement, text)

        if self.scope == MARKUP:
            return map_markup(html, substitute)
        return map_text_runs(html, substitute, self.protected)

    def count(self, html: str) -> int:
        """Return how many replacements a single application would make."""
        found = 0

        def tally(text: str) -> str:
            nonlocal found
            found += sum(1 for _ in self.regex.finditer(text))
            return text

        if self.scope == MARKUP:
            map_markup(html, tally)
        else:
            map_text_runs(html, tally, self.protected)
        return found


def _check_replacement(name: str, compiled: re.Pattern[str], replacement: str) -> None:
    for match in _GROUP_REFERENCE.finditer(replacement):
        group_name, group_number = match.groups()
        reference = group_name if group_name is not None else group_number
        if reference.isdigit():
            if int(reference) > compiled.groups:
                raise ConfigError(f"Pass {name!r} refers to missing group {reference}")
        elif reference not in compiled.groupindex:
            raise ConfigError(f"Pass {name!r} refers to missing group {reference!r}")


def _check_class(name: str) -> str:
    if not _CLASS_NAME.match(name):
        raise ConfigError(f"Invalid highlight class name: {name!r}")
    return name


def _alternation(tokens: Iterable[str]) -> str:
    # Longest first so a token never loses to one of its own prefixes.
    unique = sorted(set(tokens), key=lambda token: (-len(token), token))
    if not unique:
        raise ConfigError("Highlight vocabulary must not be empty")
    return "|".join(re.escape(token) for token in unique)


def _wrap(group: str, css_class: str) -> str:
    return rf"\g<lead>{span_open(css_class)}\g<{group}></span>"


def keyword_pass(
    keywords: Sequence[str], css_class: str, protected: Sequence[str] = ()
) -> RewritePass:
    words = _alternation(keywords)
    return RewritePass(
        name="keywords",
        kind=KEYWORD,
        pattern=(
            rf"(?P<lead>^\s*|(?<=[{KEYWORD_LEAD}]))"
            rf"(?P<run>(?:{words})(?: (?:{words}))*)"
            rf"(?=[{KEYWORD_TRAIL}]|\Z)"
        ),
        replacement=_wrap("run", css_class),
        rationale=(
            "Keyword runs must open a text run or follow ; [ ( and must end the "
            "run or precede a closing character, so prose words such as "
            "'constant', or 'for' in the middle of a sentence, stay untouched."
        ),
        css_class=css_class,
        protected=tuple(protected),
    )


def modifier_pass(css_class: str, protected: Sequence[str] = ()) -> RewritePass:
    return RewritePass(
        name="modifiers",
        kind=MODIFIER,
        pattern=(
            rf"(?P<lead>^\s*|(?<=[{MODIFIER_LEAD}])|'[A-Za-z_]\w* )"
            rf"(?P<token>{_alternation(MODIFIER_KEYWORDS)})(?= )"
        ),
        replacement=_wrap("token", css_class),
        rationale=(
            "Catches mut/const after * in raw pointer types and after a "
            "lifetime in references, which the keyword pass cannot anchor on. "
            "Must run after the keyword pass."
        ),
        css_class=css_class,
        protected=tuple(protected),
    )


def operator_pass(css_class: str, protected: Sequence[str] = ()) -> RewritePass:
    return RewritePass(
        name="operators",
        kind=OPERATOR,
        pattern=(
            rf"(?P<lead>^|(?<=[{OPERATOR_LEAD}]))"
            rf"(?P<op>{_alternation(OPERATORS)})(?!/)"
        ),
        replacement=_wrap("op", css_class),
        rationale=(
            "References, return arrows, path separators and pointers. A "
            "following slash means a comment marker or a URL, never an operator."
        ),
        css_class=css_class,
        protected=tuple(protected),
    )


def clause_pass(css_class: str) -> RewritePass:
    return RewritePass(
        name="where-clause",
        kind=CLAUSE,
        pattern=(
            rf"(?P<lead>{re.escape(CLAUSE_CONTAINER)})(?P<token>{CLAUSE_KEYWORD})"
            r"(?![\w-])"
        ),
        replacement=_wrap("token", css_class),
        rationale=(
            "Scoped by the containing block instead of boundary characters; "
            "matches the clause word wherever the container opens with it."
        ),
        css_class=css_class,
        scope=MARKUP,
    )


def build_default_passes(
    keywords: Sequence[str] = DEFAULT_KEYWORDS,
    *,
    keyword_class: str = KEYWORD_CLASS,
    operator_class: str = OPERATOR_CLASS,
) -> List[RewritePass]:
    """Return the canonical pass table in execution order."""
    keyword_class = _check_class(keyword_class)
    operator_class = _check_class(operator_class)
    protected = (span_open(keyword_class), span_open(operator_class))
    return [
        keyword_pass(keywords, keyword_class, protected),
        modifier_pass(keyword_class, protected),
        operator_pass(operator_class, protected),
        clause_pass(keyword_class),
    ]


def passes_from_config(config: HighlightConfig) -> List[RewritePass]:
    return build_default_passes(
        config.keywords,
        keyword_class=config.keyword_class,
        operator_class=config.operator_class,
    )


__all__ = [
    "CLAUSE",
    "KEYWORD",
    "MARKUP",
    "MODIFIER",
    "OPERATOR",
    "PASS_KINDS",
    "RewritePass",
    "TEXT_RUNS",
    "build_default_passes",
    "clause_pass",
    "keyword_pass",
    "modifier_pass",
    "operator_pass",
    "passes_from_config",
]
