"""Run the answer sanitizer over captured model output.

Useful for checking how a raw response would be cleaned without calling the
model:

    python scripts/sanitize_text.py response.txt
    pbpaste | python scripts/sanitize_text.py
"""

# ruff: noqa: I001
from __future__ import annotations

import sys
from pathlib import Path

from app.solver.sanitizer import sanitize_output


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("usage: sanitize_text.py [FILE]", file=sys.stderr)
        return 2

    if args and args[0] != "-":
        raw = Path(args[0]).read_text(encoding="utf-8", errors="replace")
    else:
        raw = sys.stdin.read()

    print(sanitize_output(raw))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
