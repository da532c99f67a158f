from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from app.api.schemas import ErrorOut
from app.core.llm.deps import get_openai_client
from app.core.metrics import record_solve_outcome
from app.core.settings import get_settings
from app.domain.exceptions import (
    InvalidRequestBodyError,
    ProblemValidationError,
    SolverUpstreamError,
    UnsupportedMediaTypeError,
)
from app.solver.schemas import SolveOut, SolveRequest
from app.solver.service import SolverLLMError, SolverService
from app.solver.uploads import upload_to_data_url

router = APIRouter(prefix="/api", tags=["solver"])
logger = logging.getLogger("app.solver")

_UPLOAD_FIELDS = ("file", "image")


def _validate_payload(raw: object) -> SolveRequest:
    if not isinstance(raw, dict):
        raise InvalidRequestBodyError("Request body must be a JSON object")
    try:
        return SolveRequest.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise InvalidRequestBodyError(f"Invalid {field}: {first.get('msg', 'invalid value')}") from exc


async def _read_solve_request(request: Request) -> SolveRequest:
    """
    Parse either a JSON body or a multipart form into a SolveRequest.

    Multipart forms may carry the image as an uploaded file (`file` or
    `image`), which is converted into a `data:` URL for the model.
    """

    content_type = (request.headers.get("content-type") or "").lower()

    if content_type.startswith("application/json"):
        try:
            raw = await request.json()
        except ValueError as exc:
            raise ProblemValidationError("Request body must be valid JSON") from exc
        return _validate_payload(raw)

    if content_type.startswith("multipart/form-data"):
        # NOTE: multipart parsing requires python-multipart.
        settings = get_settings()
        form = await request.form()
        fields: dict[str, str | None] = {}
        for name in ("subject", "prompt", "image"):
            value = form.get(name)
            fields[name] = value if isinstance(value, str) else None

        for name in _UPLOAD_FIELDS:
            upload = form.get(name)
            if isinstance(upload, UploadFile):
                fields["image"] = await upload_to_data_url(
                    upload=upload,
                    allowed=set(settings.image_allowed_mime_types),
                    max_bytes=settings.max_image_upload_bytes,
                )
                break

        return _validate_payload(fields)

    raise UnsupportedMediaTypeError("Content-Type must be application/json or multipart/form-data")


@router.post(
    "/solve",
    response_model=SolveOut,
    summary="Solve a problem and return formulas only",
    description=(
        "Forward a math/physics/chemistry problem (text and/or image) to the language model "
        "and return its answer stripped down to formulas, numeric results, True/False or a "
        "multiple-choice letter.\n\n"
        "Accepts `application/json` (`subject`, `prompt`, `image` URL) or "
        "`multipart/form-data` (same fields, plus an uploaded image in `file`)."
    ),
    responses={
        400: {"model": ErrorOut},
        413: {"model": ErrorOut},
        415: {"model": ErrorOut},
        422: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def solve(
    request: Request,
    openai_client=Depends(get_openai_client),
) -> SolveOut:
    """
    Solve one problem.

    IMPORTANT:
    - The problem text, image and model output are never logged or stored.
    - Upstream failures are reported as a generic 500; details go to logs only.
    """

    payload = await _read_solve_request(request)
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    log_extra = {
        "request_id": request_id,
        "has_prompt": bool(payload.prompt),
        "has_image": bool(payload.image),
    }

    if not payload.has_problem:
        record_solve_outcome("invalid")
        raise ProblemValidationError("Prompt or image is required")

    if openai_client is None:
        record_solve_outcome("unavailable")
        logger.warning(
            "Solve failed (LLM not configured)", extra={**log_extra, "outcome": "unavailable"}
        )
        raise SolverUpstreamError()

    svc = SolverService(llm_client=openai_client)
    try:
        result = await svc.solve(subject=payload.subject, prompt=payload.prompt, image=payload.image)
    except SolverLLMError as exc:
        cause = exc.__cause__ or exc
        record_solve_outcome("upstream_error")
        logger.warning(
            "Solve failed",
            exc_info=cause,
            extra={**log_extra, "outcome": "upstream_error", "error_type": type(cause).__name__},
        )
        raise SolverUpstreamError() from cause

    record_solve_outcome("success")
    logger.info("Solve completed", extra={**log_extra, "outcome": "success"})
    return SolveOut(result=result)
