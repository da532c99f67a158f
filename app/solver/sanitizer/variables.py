"""Per-line normalization that turns split variable names into single tokens."""

from __future__ import annotations

import re

from app.solver.sanitizer.vocabulary import (
    GREEK_LETTERS,
    QUALIFIER_PHRASE_RE,
    SUBSCRIPT_WORD_PATTERN,
)

_LETTER_DIGITS_RE = re.compile(r"\b([a-zA-Z])[ \t]+(\d+)\b")
_LETTER_SUBSCRIPT_RE = re.compile(
    r"\b([a-zA-Z])[ \t]+(" + SUBSCRIPT_WORD_PATTERN + r")\b", re.IGNORECASE
)
_GREEK_DIGITS_RE = re.compile("([" + GREEK_LETTERS + r"])[ \t]+(\d+)\b")
_GREEK_SUBSCRIPT_RE = re.compile(
    "([" + GREEK_LETTERS + r"])[ \t]+(" + SUBSCRIPT_WORD_PATTERN + r")\b", re.IGNORECASE
)
# "F net =" -> "Fnet =": a letter and a lowercase word right before an operator or EOL.
_SPLIT_NAME_RE = re.compile(r"\b([A-Za-z])[ \t]+([a-z]+)\b(?=[ \t]*[=+\-*/()]|[ \t]*$)")

_TRAILING_SEPARATOR_RE = re.compile(r"[ \t]*[;,:•*\-]+[ \t]*$")
_LEADING_BULLET_RE = re.compile(r"^[•*\-][ \t]+")
# Left behind when a sentence prefix was removed, e.g. ". a = 3".
_ORPHAN_PUNCTUATION_RE = re.compile(r"^[.,;:!?]+(?=[ \t])")
_QUOTES_RE = re.compile("^[\"'“”‘’]+|[\"'“”‘’]+$")
_DECORATION_RE = re.compile(r"[`~]")
_WHITESPACE_RE = re.compile(r"[ \t]+")


def collapse_qualifier_phrases(line: str) -> str:
    return QUALIFIER_PHRASE_RE.sub("", line)


def join_indexed_variables(line: str) -> str:
    """`v 0` -> `v0`, `θ 1` -> `θ1`."""
    line = _LETTER_DIGITS_RE.sub(r"\1\2", line)
    return _GREEK_DIGITS_RE.sub(r"\1\2", line)


def join_subscript_words(line: str) -> str:
    """`v initial` -> `vinitial`, `ω f` -> `ωf`."""
    line = _LETTER_SUBSCRIPT_RE.sub(r"\1\2", line)
    return _GREEK_SUBSCRIPT_RE.sub(r"\1\2", line)


def join_split_names(line: str) -> str:
    return _SPLIT_NAME_RE.sub(r"\1\2", line)


def _strip_decorations_once(line: str) -> str:
    line = _DECORATION_RE.sub("", line).strip()
    line = _QUOTES_RE.sub("", line)
    line = _TRAILING_SEPARATOR_RE.sub("", line)
    line = _LEADING_BULLET_RE.sub("", line)
    line = _ORPHAN_PUNCTUATION_RE.sub("", line)
    return line.strip()


def strip_decorations(line: str) -> str:
    """Strip quotes, backticks, separators and bullets until the line stops changing.

    Removing one decoration can expose another, e.g. the `;` inside `` `x = 5;` ``.
    """
    while True:
        stripped = _strip_decorations_once(line)
        if stripped == line:
            return line
        line = stripped


def collapse_whitespace(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line).strip()


LINE_NORMALIZERS = (
    collapse_qualifier_phrases,
    # Before the joins, so a name freed from trailing punctuation can join at end of line.
    strip_decorations,
    join_indexed_variables,
    join_subscript_words,
    join_split_names,
    collapse_whitespace,
)
