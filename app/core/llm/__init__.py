"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (problems and answers are user content).
- Configurable via environment variables.
- Treated as an opaque `messages -> text` function by callers.
"""
