"""
Error types surfaced by the generation pipeline and their HTTP mapping.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERATION_FAILED = "GENERATION_FAILED"


class GenerationFailed(Exception):
    """
    Single opaque failure kind for the model boundary: unparseable output, missing fields,
    wrong message count, empty content, API errors and timeouts.

    `detail` is for internal logging only and never reaches the caller.
    """

    code = GENERATION_FAILED

    def __init__(self, detail: str = "AI generation failed") -> None:
        super().__init__(detail)
        self.detail = detail


async def generation_failed_handler(request: Request, exc: GenerationFailed) -> JSONResponse:
    logger.error("AI generation failed: %s", exc.detail)
    return JSONResponse(
        status_code=500,
        content={"error": "AI generation failed", "message": "Please retry later"},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "path": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Validation error", "details": details})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GenerationFailed, generation_failed_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
