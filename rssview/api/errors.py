"""
Error mapper: turns pipeline errors and unmatched routes into HTML pages
built from the index page shell.
"""
import html
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rssview.api.static_assets import ERROR_PLACEHOLDER
from rssview.errors import BadRequestError, NotFoundError, RSSViewError

logger = logging.getLogger(__name__)


def render_error_page(shell: str, error: RSSViewError) -> str:
    """Insert the error message into the first placeholder of the shell."""
    message = f"<p>{html.escape(str(error))}</p>"
    return shell.replace(ERROR_PLACEHOLDER, message, 1)


def error_response(request: Request, error: RSSViewError) -> HTMLResponse:
    if error.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {error}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {error}")
    body = render_error_page(request.app.state.assets.error_shell, error)
    return HTMLResponse(body, status_code=error.status_code)


async def rssview_error_handler(request: Request, exc: RSSViewError):
    return error_response(request, exc)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    return error_response(request, NotFoundError(request.url.path))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg', 'invalid')}")
    return error_response(request, BadRequestError("; ".join(problems) or "invalid request"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RSSViewError, rssview_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
