"""RFC 9457 Problem Details error responses."""

from typing import Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..utils.logging_config import log_exception


class ProblemDetailsException(HTTPException):
    """Enhanced HTTPException that includes RFC 9457 Problem Details."""

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        headers: Optional[dict] = None,
        **extra_fields,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.title = title
        self.type_uri = type_uri or f"https://httpstatuses.com/{status_code}"
        self.instance = instance
        self.extra_fields = extra_fields


DEFAULT_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    413: "Payload Too Large",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def get_default_title(status_code: int) -> str:
    """Get default title for HTTP status codes."""
    return DEFAULT_TITLES.get(status_code, "HTTP Error")


def problem_response(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: Optional[str] = None,
    instance: Optional[str] = None,
    headers: Optional[dict] = None,
    **extra_fields,
) -> JSONResponse:
    """Create a JSON response in RFC 9457 Problem Details format."""
    problem = {
        "type": type_uri or f"https://httpstatuses.com/{status_code}",
        "title": title,
        "status": status_code,
    }

    if detail:
        problem["detail"] = detail
    if instance:
        problem["instance"] = instance

    problem.update(extra_fields)

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(problem),
        headers=headers,
        media_type="application/problem+json",
    )


async def problem_details_exception_handler(
    request: Request, exc: ProblemDetailsException
) -> JSONResponse:
    return problem_response(
        status_code=exc.status_code,
        title=exc.title,
        detail=exc.detail,
        type_uri=exc.type_uri,
        instance=exc.instance or str(request.url),
        headers=exc.headers,
        **exc.extra_fields,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return problem_response(
        status_code=exc.status_code,
        title=get_default_title(exc.status_code),
        detail=exc.detail if isinstance(exc.detail, str) else None,
        instance=str(request.url),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return problem_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        title="Validation Error",
        detail="Request validation failed",
        instance=str(request.url),
        errors=exc.errors(),
    )


class ProblemDetailsMiddleware(BaseHTTPMiddleware):
    """Middleware converting unhandled exceptions to Problem Details responses."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except ProblemDetailsException as exc:
            return await problem_details_exception_handler(request, exc)
        except Exception as exc:
            log_exception("api", exc, {"method": request.method, "path": request.url.path})
            return problem_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                title="Internal Server Error",
                detail="An unexpected error occurred",
                instance=str(request.url),
            )


def install_problem_details(app: FastAPI) -> None:
    """Register Problem Details handlers and the catch-all middleware on an app."""
    app.add_exception_handler(ProblemDetailsException, problem_details_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_middleware(ProblemDetailsMiddleware)
