"""Line-level keep/drop rules.

A rule returns True (keep), False (drop) or None (no opinion). The pipeline
asks each rule in order and the first verdict wins; a line nobody claims is
dropped.
"""

from __future__ import annotations

from app.solver.sanitizer.structural import has_math_signal
from app.solver.sanitizer.vocabulary import (
    ANSWER_BOOLEAN_RE,
    ANSWER_CHOICE_RE,
    ASSIGNMENT_RE,
    BASIC_ARITHMETIC_RE,
    EQUIPMENT_RE,
    MATH_SYMBOL_RE,
    METHOD_RE,
    PROSE_MARKER_RE,
    PROSE_WORD_RE,
    STANDALONE_VARIABLE_RE,
)


def count_math_signals(line: str) -> int:
    return len(MATH_SYMBOL_RE.findall(line)) + len(STANDALONE_VARIABLE_RE.findall(line))


def count_prose_words(line: str) -> int:
    return sum(1 for token in line.split() if PROSE_WORD_RE.match(token))


def reject_empty(line: str) -> bool | None:
    return False if not line else None


def keep_boolean_answer(line: str) -> bool | None:
    return True if ANSWER_BOOLEAN_RE.match(line) else None


def keep_choice_answer(line: str) -> bool | None:
    return True if ANSWER_CHOICE_RE.match(line) else None


def reject_narrative(line: str) -> bool | None:
    """Drop lines that read like a sentence and carry no math at all."""
    if PROSE_MARKER_RE.search(line) and not has_math_signal(line):
        return False
    return None


def keep_equipment_with_math(line: str) -> bool | None:
    if EQUIPMENT_RE.search(line) and BASIC_ARITHMETIC_RE.search(line):
        return True
    return None


def keep_method_with_math(line: str) -> bool | None:
    if METHOD_RE.search(line) and BASIC_ARITHMETIC_RE.search(line):
        return True
    return None


def reject_prose_heavy(line: str) -> bool | None:
    """
    Drop lines where words outweigh math.

    A stray digit inside a sentence ("gets 3 apples") is not enough to keep it.
    Three or more math signals always survive this rule.
    """

    signals = count_math_signals(line)
    if signals < 3 and count_prose_words(line) >= signals * 2:
        return False
    return None


def keep_math_symbols(line: str) -> bool | None:
    return True if has_math_signal(line) else None


def keep_assignment(line: str) -> bool | None:
    return True if ASSIGNMENT_RE.search(line) else None


LINE_RULES = (
    reject_empty,
    keep_boolean_answer,
    keep_choice_answer,
    reject_narrative,
    keep_equipment_with_math,
    keep_method_with_math,
    reject_prose_heavy,
    keep_math_symbols,
    keep_assignment,
)
