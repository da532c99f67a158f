"""Immutable pattern vocabularies used by the sanitizer stages.

Everything here is module-level constant data: frozensets, tuples and
precompiled regexes. Stages only read from it.
"""

from __future__ import annotations

import re

GREEK_LETTERS = "αβγδεθλμρσφχψωΔ∇∂"

# Characters that mark a line as mathematical on their own.
MATH_SYMBOLS = "0-9+\\-*/=()^<>√π∑∫" + GREEK_LETTERS + "≤≥≠≈±×÷°²³"

# Latin letters that count as variables only when they stand alone.
VARIABLE_LETTERS = "xyzabcXYZABC"

MATH_SYMBOL_RE = re.compile(f"[{MATH_SYMBOLS}]")
STANDALONE_VARIABLE_RE = re.compile(f"(?<![A-Za-z])[{VARIABLE_LETTERS}](?![A-Za-z])")

# Symbols that must accompany an equipment or method name for the line to survive.
BASIC_ARITHMETIC_RE = re.compile(r"[0-9+\-*/=()]")

ANSWER_BOOLEAN_RE = re.compile(r"^(?:true|false)$", re.IGNORECASE)
ANSWER_CHOICE_RE = re.compile(r"^[A-E]$", re.IGNORECASE)

ASSIGNMENT_RE = re.compile(
    f"[a-zA-Z{GREEK_LETTERS}]\\s*[=<>≤≥≠≈]\\s*[a-zA-Z0-9{GREEK_LETTERS}+\\-*/()^√π∑∫²³]"
)

QUALIFIER_WORDS: tuple[str, ...] = (
    "Total",
    "Per",
    "Each",
    "Initial",
    "Final",
    "Net",
    "Average",
    "Sum",
    "Difference",
)

# Qualifier followed by a noun on the same line, e.g. "Total apples".
QUALIFIER_PHRASE_RE = re.compile(
    r"\b(?:" + "|".join(QUALIFIER_WORDS) + r")[ \t]+[a-zA-Z]+\b",
    re.IGNORECASE,
)

FILLER_PHRASES: tuple[str, ...] = (
    "The answer is",
    "The result is",
    "The solution is",
    "Apply the formula",
    "Each person can have",
    "Each person can",
    "Each person",
    "Calculate the",
    "Total apples",
    "Total people",
    "We have",
    "We get",
    "We find",
    "Note that",
    "can have",
)

DISCOURSE_LABELS: tuple[str, ...] = ("Answer", "Solution", "Result", "Note")

# Single letters are left out on purpose: "I" is current, "a" is a variable.
DISCOURSE_WORDS: frozenset[str] = frozenset(
    {
        "therefore",
        "thus",
        "hence",
        "so",
        "calculate",
        "apply",
        "the",
        "this",
        "that",
        "we",
        "you",
    }
)


def _alternation(words) -> str:
    # Longest first so "Each person can" wins over "Each person".
    ordered = sorted(words, key=lambda w: (-len(w), w))
    return "|".join(r"[ \t]+".join(re.escape(part) for part in w.split()) for w in ordered)


FILLER_PHRASE_RE = re.compile(r"\b(?:" + _alternation(FILLER_PHRASES) + r")\b", re.IGNORECASE)
DISCOURSE_LABEL_RE = re.compile(
    r"\b(?:" + _alternation(DISCOURSE_LABELS) + r")[ \t]*:", re.IGNORECASE
)
DISCOURSE_WORD_RE = re.compile(r"\b(?:" + _alternation(DISCOURSE_WORDS) + r")\b", re.IGNORECASE)

# Words that mark a line as narrative when no math symbol is present.
PROSE_MARKER_WORDS: frozenset[str] = frozenset(
    {
        "total",
        "each",
        "per",
        "apply",
        "calculate",
        "step",
        "the",
        "this",
        "that",
        "we",
        "you",
        "i",
        "can",
        "have",
        "is",
        "are",
        "was",
        "were",
    }
)
PROSE_MARKER_RE = re.compile(r"\b(?:" + _alternation(PROSE_MARKER_WORDS) + r")\b", re.IGNORECASE)

# A plain English word: letters only, at least two, lowercase after the first.
PROSE_WORD_RE = re.compile(r"^[A-Za-z][a-z]+[.,;:!?]*$")

EQUIPMENT_NAMES: tuple[str, ...] = (
    "spectrophotometer",
    "calorimeter",
    "oscilloscope",
    "voltmeter",
    "ammeter",
    "multimeter",
    "thermometer",
    "barometer",
    "manometer",
    "burette",
    "pipette",
    "beaker",
    "flask",
    "test tube",
    "microscope",
    "telescope",
    "laser",
    "prism",
    "lens",
    "mirror",
    "resistor",
    "capacitor",
    "inductor",
    "transformer",
    "generator",
    "motor",
    "sensor",
    "detector",
    "analyzer",
    "chromatograph",
    "mass spectrometer",
    "electron microscope",
)

# Acronyms are matched case-sensitively so "ir" inside prose does not count.
EQUIPMENT_ACRONYMS: tuple[str, ...] = ("NMR", "IR", "UV", "X-ray")

EQUIPMENT_RE = re.compile(
    r"\b(?:(?i:" + _alternation(EQUIPMENT_NAMES) + r")|" + _alternation(EQUIPMENT_ACRONYMS) + r")\b"
)

METHOD_NAMES: tuple[str, ...] = (
    "integration",
    "differentiation",
    "derivative",
    "integral",
    "substitution",
    "quadratic formula",
    "Pythagorean theorem",
    "Newton",
    "conservation",
    "momentum",
    "energy",
    "force",
    "acceleration",
    "velocity",
    "displacement",
    "kinematics",
    "dynamics",
    "thermodynamics",
    "electrostatics",
    "magnetism",
    "optics",
    "quantum",
    "relativity",
    "stoichiometry",
    "equilibrium",
    "reaction",
    "oxidation",
    "reduction",
    "acid",
    "base",
    "pH",
    "molarity",
    "molar mass",
    "Avogadro",
    "ideal gas",
    "Boyle",
    "Charles",
    "Gay-Lussac",
    "Ohm",
    "Kirchhoff",
    "Faraday",
    "Maxwell",
    "Einstein",
    "Schrödinger",
    "Heisenberg",
    "Bohr",
    "Planck",
    "de Broglie",
    "Fourier",
    "Laplace",
    "Taylor",
    "Maclaurin",
    "L'Hôpital",
    "chain rule",
    "product rule",
    "quotient rule",
    "integration by parts",
    "partial fractions",
    "trigonometric substitution",
    "u-substitution",
)

METHOD_RE = re.compile(r"\b(?:" + _alternation(METHOD_NAMES) + r")\b", re.IGNORECASE)

SUBSCRIPT_WORDS: tuple[str, ...] = (
    "initial",
    "final",
    "total",
    "net",
    "max",
    "min",
    "avg",
    "average",
    "sum",
    "diff",
    "delta",
    "change",
    "i",
    "f",
)
SUBSCRIPT_WORD_PATTERN = "(?:" + _alternation(SUBSCRIPT_WORDS) + ")"

ASIDE_KEYWORDS: tuple[str, ...] = ("note", "explanation", "comment", "description")
