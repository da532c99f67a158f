"""Behavioural tests for the full sanitizer pipeline.

Each test feeds a raw model response through `sanitize_output` and asserts on
the cleaned text only; per-stage behaviour lives in test_sanitizer_stages.py.
"""

from __future__ import annotations

import itertools

import pytest

from app.solver.sanitizer import sanitize_output


def test_prose_prefix_is_removed_and_formula_lines_kept() -> None:
    raw = "Step 1: Calculate total apples. a = 18/6\na = 3"
    assert sanitize_output(raw) == "a = 18/6\na = 3"


def test_split_variables_are_joined() -> None:
    assert sanitize_output("v 0 = 5\nF net = 10") == "v0 = 5\nFnet = 10"


def test_latex_display_delimiters_are_stripped() -> None:
    result = sanitize_output("\\[E = mc^2\\]")
    assert "E = mc^2" in result
    assert "\\[" not in result
    assert "\\]" not in result


def test_dollar_delimiters_are_stripped_keeping_content() -> None:
    assert sanitize_output("$$x^2 + y^2 = r^2$$") == "x^2 + y^2 = r^2"


def test_latex_text_annotation_is_removed() -> None:
    assert sanitize_output("v = 5 \\text{m/s}") == "v = 5"


def test_latex_fraction_keeps_operand_groups_without_division() -> None:
    # Known lossy behaviour: the division sign is not reconstructed.
    assert sanitize_output("x = \\frac{18}{6}") == "x = {18}{6}"


@pytest.mark.parametrize(
    "raw",
    [
        "The total number of apples is calculated by adding them.",
        "Each person can have three apples.",
        "Use the quadratic formula.",
    ],
)
def test_pure_prose_sanitizes_to_empty(raw: str) -> None:
    assert sanitize_output(raw) == ""


def test_sentence_with_a_stray_digit_is_dropped() -> None:
    assert sanitize_output("Each person gets 3 apples.\nx = 3") == "x = 3"


def test_equipment_name_alone_is_dropped() -> None:
    assert sanitize_output("spectrophotometer") == ""


def test_equipment_name_with_math_is_kept() -> None:
    assert sanitize_output("spectrophotometer: A = 0.45") == "spectrophotometer: A = 0.45"


def test_method_name_with_math_is_kept() -> None:
    raw = "quadratic formula: x = (-b ± √(b^2 - 4ac))/(2a)"
    assert sanitize_output(raw) == raw


@pytest.mark.parametrize("raw", ["C", "a", "True", "false"])
def test_answer_tokens_pass_through(raw: str) -> None:
    assert sanitize_output(raw) == raw


def test_answer_sentence_is_reduced_to_the_letter() -> None:
    assert sanitize_output("The answer is B") == "B"


def test_discourse_words_and_labels_are_removed() -> None:
    assert sanitize_output("Therefore x = 5\nAnswer: 42") == "x = 5\n42"


def test_comments_are_removed() -> None:
    raw = "x = 5 // from the table\ny = 2 # given\n/* derived */z = 3"
    assert sanitize_output(raw) == "x = 5\ny = 2\nz = 3"


def test_parenthetical_asides_are_removed() -> None:
    assert sanitize_output("F = ma (note: mass in kg)") == "F = ma"


def test_step_numbers_and_bullets_are_removed() -> None:
    raw = "1. x = 2\n2. y = x + 1\n- z = 3"
    assert sanitize_output(raw) == "x = 2\ny = x + 1\nz = 3"


def test_leading_decimal_is_not_mistaken_for_a_step_number() -> None:
    assert sanitize_output("3.14 = π") == "3.14 = π"


def test_greek_prefixed_variables_are_joined() -> None:
    assert sanitize_output("θ 0 = 30°\nω f = 2π") == "θ0 = 30°\nωf = 2π"


def test_subscript_words_are_joined() -> None:
    assert sanitize_output("v final = v initial + a t") == "vfinal = vinitial + at"


def test_quotes_backticks_and_trailing_separators_are_stripped() -> None:
    assert sanitize_output('`x = 5`\n"y = 2",\nz = 1;') == "x = 5\ny = 2\nz = 1"


def test_blank_lines_between_problems_collapse() -> None:
    assert sanitize_output("x = 2\n\n\ny = 3\r\n") == "x = 2\ny = 3"


def test_line_order_is_preserved() -> None:
    raw = "c = 3\nSome words here.\na = 1\nb = 2"
    assert sanitize_output(raw) == "c = 3\na = 1\nb = 2"


@pytest.mark.parametrize("raw", [None, "", "   ", "\n\n\t  \n"])
def test_empty_input_returns_empty_string(raw: str | None) -> None:
    assert sanitize_output(raw) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "\ud800",
        "\x00\x01\x02",
        "((((((",
        "$$$$",
        "\\frac{",
        "#" * 500,
        "Step",
        "1.",
        "/* unterminated",
        "é" * 1000,
        "x = 1\u2028y = 2",
    ],
)
def test_sanitizer_is_total(raw: str) -> None:
    assert isinstance(sanitize_output(raw), str)


@pytest.mark.parametrize(
    "raw",
    [
        "Step 1: Calculate total apples. a = 18/6\na = 3",
        "v 0 = 5\nF net = 10",
        "\\[E = mc^2\\]",
        "spectrophotometer: A = 0.45",
        "a = n/m",
        "C",
        "θ 0 = 30°",
        "`x = 5;`",
        "\"F = ma;\"",
        "x = 5:,",
        "a,'",
        "0:,",
        "- `F net` -",
        ", 1. x = 2",
    ],
)
def test_sanitizer_is_idempotent(raw: str) -> None:
    once = sanitize_output(raw)
    assert sanitize_output(once) == once


def test_canonical_formula_is_unchanged() -> None:
    assert sanitize_output("a = n/m") == "a = n/m"


def test_sanitizer_is_deterministic() -> None:
    raw = "Therefore, the velocity is v 0 = 5 m/s\nF net = m a\nThe answer is C"
    results = {sanitize_output(raw) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("`x = 5;`", "x = 5"),
        ('"F = ma;"', "F = ma"),
        ("x = 5:,", "x = 5"),
        ("a,'", "a"),
        ("v = 3 m/s -", "v = 3 m/s"),
    ],
)
def test_wrapped_trailing_separators_are_removed_in_one_call(raw: str, expected: str) -> None:
    assert sanitize_output(raw) == expected


_PREFIXES = ("", "Therefore, ", "Step 2: ", "1. ", "- ", "• ", "`", '"', "Note: ")
_BODIES = ("x = 5", "F net = m a", "v 0", "a", "E = mc^2", "C", "The speed is high", "0")
_SUFFIXES = ("", ";", ":,", "`", '";', "'", " -", ",'", " (note: units)")


def test_sanitizer_is_idempotent_over_mixed_fragments() -> None:
    failures = []
    for prefix, body, suffix in itertools.product(_PREFIXES, _BODIES, _SUFFIXES):
        for raw in (prefix + body + suffix, f"{prefix}{body}{suffix}\n{body}{suffix}"):
            once = sanitize_output(raw)
            if sanitize_output(once) != once:
                failures.append((raw, once))
    assert failures == []
