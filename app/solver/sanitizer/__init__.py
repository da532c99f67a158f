"""Deterministic post-processing of model output.

No I/O and no state: the sanitizer maps a raw response string to a
formula-only string and never raises.
"""

from app.solver.sanitizer.pipeline import DEFAULT_PIPELINE, SanitizerPipeline, sanitize_output

__all__ = ["DEFAULT_PIPELINE", "SanitizerPipeline", "sanitize_output"]
