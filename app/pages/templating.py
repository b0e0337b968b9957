from pathlib import Path
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from app.core.exceptions import (
    AppBaseException, ValidationError, FileTooLargeError, DecodeError,
    ResourceNotFoundError, StorageError
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Most specific first
ERROR_STATUS = (
    (FileTooLargeError, 413),
    (ValidationError, 400),
    (DecodeError, 422),
    (ResourceNotFoundError, 404),
    (StorageError, 500),
)

# htmx listens for this event to refresh the image counter
IMAGES_CHANGED_TRIGGER = {"HX-Trigger": "imagesChanged"}


def is_htmx(request: Request) -> bool:
    """True for requests issued by htmx (partial page refresh)"""
    return request.headers.get("HX-Request", "").lower() == "true"


def error_status(exc: AppBaseException) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "partials/error.html",
        {"message": message},
        status_code=status_code
    )
