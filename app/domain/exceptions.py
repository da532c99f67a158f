from __future__ import annotations


class SolveRequestError(Exception):
    """Base for errors reported to the caller as `{"error": message}`."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProblemValidationError(SolveRequestError):
    """Raised when the problem input is missing or malformed."""


class InvalidRequestBodyError(SolveRequestError):
    """Raised when the body decodes but does not match the request schema."""

    status_code = 422


class UnsupportedMediaTypeError(SolveRequestError):
    status_code = 415


class PayloadTooLargeError(SolveRequestError):
    status_code = 413


class SolverUpstreamError(SolveRequestError):
    """Raised when the model could not produce an answer.

    The caller only ever sees a generic message; the cause is chained for logs.
    """

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
