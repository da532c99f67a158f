"""Whole-text passes that run before the response is split into lines.

Each pass is a small `str -> str` function. Order matters: later passes assume
line endings are normalized and markup has already been stripped.
"""

from __future__ import annotations

import re

from app.solver.sanitizer.vocabulary import (
    ANSWER_BOOLEAN_RE,
    ANSWER_CHOICE_RE,
    ASIDE_KEYWORDS,
    DISCOURSE_LABEL_RE,
    DISCOURSE_WORD_RE,
    FILLER_PHRASE_RE,
    MATH_SYMBOL_RE,
    QUALIFIER_PHRASE_RE,
    STANDALONE_VARIABLE_RE,
)

_NEWLINE_RE = re.compile(r"\r\n?")
_CODE_MARK_RE = re.compile(r"[`~]")
_LINE_QUOTES_RE = re.compile("^[ \t]*[\"'“”‘’]+|[\"'“”‘’]+[ \t]*$", re.MULTILINE)
_LATEX_DELIMITER_RE = re.compile(r"\\[\[\]()]|\$\$?")
_LATEX_TEXT_RE = re.compile(r"\\text\{[^{}]*\}")
# Only the macro name goes; the two operand groups stay as "{a}{b}".
_LATEX_FRACTION_RE = re.compile(r"\\[dt]?frac(?=\{[^{}]*\}\{[^{}]*\})")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_HASH_COMMENT_RE = re.compile(r"#.*$", re.MULTILINE)
_STEP_NUMBER_RE = re.compile(r"^[ \t]*\d+\.(?:[ \t]+|$)", re.MULTILINE)
_STEP_LABEL_RE = re.compile(r"\bStep[ \t]+\d+[ \t]*:?", re.IGNORECASE)
_ASIDE_RE = re.compile(
    r"\([^()]*(?:" + "|".join(ASIDE_KEYWORDS) + r")[^()]*\)",
    re.IGNORECASE,
)
_TRAILING_PUNCTUATION_RE = re.compile(r"[;:]+(?=[ \t]*$)", re.MULTILINE)
_BULLET_RE = re.compile(r"^[ \t]*[•*\-][ \t]+", re.MULTILINE)
_TRAILING_BULLET_RE = re.compile(r"[ \t]*[•*\-][ \t]*$", re.MULTILINE)
_HORIZONTAL_WHITESPACE_RE = re.compile(r"[^\S\n]+")
_LINE_RE = re.compile(r"[^\n]+")


def is_answer_token(line: str) -> bool:
    """True/False or a single multiple-choice letter A-E."""
    return bool(ANSWER_BOOLEAN_RE.match(line) or ANSWER_CHOICE_RE.match(line))


def has_math_signal(line: str) -> bool:
    return bool(MATH_SYMBOL_RE.search(line) or STANDALONE_VARIABLE_RE.search(line))


def normalize_newlines(text: str) -> str:
    return _NEWLINE_RE.sub("\n", text)


def strip_code_marks(text: str) -> str:
    """Backticks, tildes and quotes wrapping a whole line (inline code, quoted formulas)."""
    text = _CODE_MARK_RE.sub("", text)
    return _LINE_QUOTES_RE.sub("", text)


def strip_latex_delimiters(text: str) -> str:
    return _LATEX_DELIMITER_RE.sub("", text)


def strip_latex_text(text: str) -> str:
    return _LATEX_TEXT_RE.sub("", text)


def strip_latex_fractions(text: str) -> str:
    # Lossy: the division between the operands is not reconstructed.
    return _LATEX_FRACTION_RE.sub("", text)


def strip_comments(text: str) -> str:
    text = _LINE_COMMENT_RE.sub("", text)
    text = _BLOCK_COMMENT_RE.sub("", text)
    return _HASH_COMMENT_RE.sub("", text)


def strip_step_labels(text: str) -> str:
    text = _STEP_NUMBER_RE.sub("", text)
    return _STEP_LABEL_RE.sub("", text)


def strip_discourse(text: str) -> str:
    """Remove filler phrases, then labels like "Answer:", then single discourse words."""
    text = FILLER_PHRASE_RE.sub("", text)
    text = DISCOURSE_LABEL_RE.sub("", text)
    return DISCOURSE_WORD_RE.sub("", text)


def _blank_if_prose(match: re.Match[str]) -> str:
    line = match.group(0)
    if is_answer_token(line.strip()) or has_math_signal(line):
        return line
    return ""


def blank_prose_lines(text: str) -> str:
    """Blank every line that carries nothing from the math-symbol allow-list."""
    return _LINE_RE.sub(_blank_if_prose, text)


def strip_parenthetical_asides(text: str) -> str:
    return _ASIDE_RE.sub("", text)


def strip_qualifier_phrases(text: str) -> str:
    return QUALIFIER_PHRASE_RE.sub("", text)


def tidy_punctuation(text: str) -> str:
    text = _TRAILING_PUNCTUATION_RE.sub("", text)
    text = _BULLET_RE.sub("", text)
    text = _TRAILING_BULLET_RE.sub("", text)
    return _HORIZONTAL_WHITESPACE_RE.sub(" ", text)


STRUCTURAL_PASSES = (
    normalize_newlines,
    strip_code_marks,
    strip_latex_delimiters,
    strip_latex_text,
    strip_latex_fractions,
    strip_comments,
    strip_parenthetical_asides,
    strip_step_labels,
    strip_discourse,
    blank_prose_lines,
    strip_qualifier_phrases,
    tidy_punctuation,
)
