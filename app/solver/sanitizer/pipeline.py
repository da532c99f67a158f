from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from app.solver.sanitizer.lines import LINE_RULES
from app.solver.sanitizer.structural import STRUCTURAL_PASSES
from app.solver.sanitizer.variables import LINE_NORMALIZERS

TextPass = Callable[[str], str]
LineRule = Callable[[str], bool | None]

# Upper bound for `run`; custom normalizers are not required to shrink text.
_MAX_PASSES = 8


@dataclass(frozen=True)
class SanitizerPipeline:
    """
    Ordered, immutable set of rules that reduces model output to formulas.

    - `text_passes` run over the whole text, in order.
    - `line_rules` decide per trimmed line; the first non-None verdict wins,
      unclaimed lines are dropped.
    - `line_normalizers` rewrite each kept line, in order.

    Lines are filtered and rewritten, never reordered. Every stage is a pure
    function, so one pipeline instance can be shared across requests.
    """

    text_passes: tuple[TextPass, ...]
    line_rules: tuple[LineRule, ...]
    line_normalizers: tuple[TextPass, ...]

    def keep_line(self, line: str) -> bool:
        for rule in self.line_rules:
            verdict = rule(line)
            if verdict is not None:
                return verdict
        return False

    def normalize_line(self, line: str) -> str:
        for normalizer in self.line_normalizers:
            line = normalizer(line)
        return line

    def run_once(self, raw: str) -> str:
        text = raw
        for text_pass in self.text_passes:
            text = text_pass(text)

        lines = [line.strip() for line in text.split("\n")]
        kept = [self.normalize_line(line) for line in lines if self.keep_line(line)]
        # Normalization can empty a line; dropping it keeps the output stable on re-run.
        return "\n".join(line for line in kept if line).strip()

    def run(self, raw: str | None) -> str:
        """Apply the pipeline until the output stops changing.

        Removing one decoration can expose another (a `;` behind a closing
        quote, a step number behind a comma), so a single pass is not always
        stable. Each pass only deletes text, so this settles quickly.
        """
        if not raw:
            return ""

        text = self.run_once(raw)
        for _ in range(_MAX_PASSES - 1):
            again = self.run_once(text)
            if again == text:
                break
            text = again
        return text


DEFAULT_PIPELINE = SanitizerPipeline(
    text_passes=STRUCTURAL_PASSES,
    line_rules=LINE_RULES,
    line_normalizers=LINE_NORMALIZERS,
)


def sanitize_output(raw: str | None) -> str:
    """Strip a raw model response down to formulas, results and answer tokens."""
    return DEFAULT_PIPELINE.run(raw)
