from __future__ import annotations

from typing import Any

SYSTEM_PROMPT = "\n".join(
    [
        "You are an expert solver for mathematics, physics and chemistry.",
        "Return ACCURATE formulas and results ONLY.",
        "",
        "Rules:",
        "- Define short variables for named quantities (e.g. speed => v, circumference => C).",
        "- Output only formulas, equations, calculations and final results.",
        "- No descriptive text, explanations or commentary of any kind.",
        '- No step numbers or labels (no "1.", no "Step 1:", no "Calculate").',
        "- No LaTeX markers such as \\[ \\] or $$; use plain mathematical notation.",
        '- Every variable is a single token: "n" not "Total apples", "v0" not "v 0".',
        "",
        "Format:",
        '- Standard notation with spaces around "=": F = ma, E = mc², PV = nRT, x = a/b.',
        "- Use +, -, ×, ÷, =, ≠, <, >, ≤, ≥, ≈, √, ∑, ∫, ∂, ∇, π where appropriate.",
        "- Subscripts/superscripts as v₀, x², Eₖ or plain v0, x2, Ek.",
        '- One calculation step per line (e.g. "a = 18/6" then "a = 3"); last line is the result.',
        "- For true/false questions answer True or False; for multiple choice answer the letter.",
        "- Separate multiple problems with a blank line.",
        "",
        "Equipment and methods:",
        "- Name equipment (spectrophotometer, calorimeter, ...) or methods (integration,",
        "  quadratic formula, Newton's laws, ...) only on the same line as a formula.",
        "- Never describe how they are used.",
    ]
)

USER_INSTRUCTION = (
    "Solve the following problems. Output ONLY formulas, calculations and results. "
    'Use single-letter or single-word variables (n, a, x, v0; not "Total apples"). '
    "No descriptive text, no step numbers, no explanations, no LaTeX markers."
)


def build_solve_messages(
    *,
    subject: str | None,
    prompt: str | None,
    image: str | None,
) -> list[dict[str, Any]]:
    """
    Create chat-completions messages for one solve request.

    The user message is a list of content parts: the instruction (with the
    subject label), then the problem text and the image when present.
    """

    content: list[dict[str, Any]] = [
        {
            "type": "text",
            "text": f"Subject: {subject or 'unspecified'}.\n{USER_INSTRUCTION}",
        }
    ]
    if prompt:
        content.append({"type": "text", "text": prompt})
    if image:
        content.append({"type": "image_url", "image_url": {"url": image}})

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]
