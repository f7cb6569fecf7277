"""Translate checklist exceptions into HTTP responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cobra.checklist.exceptions import (
    ChecklistArchivedError,
    ChecklistError,
    ChecklistIntegrityError,
    InvalidStatusError,
    ItemTypeMismatchError,
    NotFoundError,
    TemplateUnavailableError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    NotFoundError: 404,
    ChecklistArchivedError: 400,
    ItemTypeMismatchError: 400,
    InvalidStatusError: 400,
    TemplateUnavailableError: 400,
}


async def checklist_error_handler(request: Request, exc: ChecklistError) -> JSONResponse:
    """Map request-level checklist errors to 4xx responses."""
    status_code = next(
        (code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 400
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def integrity_error_handler(request: Request, exc: ChecklistIntegrityError) -> JSONResponse:
    """Data-integrity faults are server errors, reported distinctly."""
    logger.error(f"Checklist data integrity error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "error": "data_integrity"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    # The more specific handler wins since Starlette walks the exception MRO
    app.add_exception_handler(ChecklistIntegrityError, integrity_error_handler)
    app.add_exception_handler(ChecklistError, checklist_error_handler)
