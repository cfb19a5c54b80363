"""Error taxonomy and its mapping onto HTTP responses.

Every handler failure ends up as one of three errors: bad client input
(400), a credential mismatch (401), or a failing blob store / database
call (500). Bodies carry the raw message text, including the underlying
driver or SDK error for dependency failures.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)


class VidShareError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return PlainTextResponse(self.message, status_code=self.status_code)


class ValidationError(VidShareError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(VidShareError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def to_response(self):
        return JSONResponse({"message": self.message}, status_code=self.status_code)


class DependencyError(VidShareError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, context: str, cause: Exception):
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.cause = cause


@asynccontextmanager
async def dependency_errors(context: str):
    """Turn any blob store or database failure inside the block into a DependencyError."""
    try:
        yield
    except VidShareError:
        raise
    except Exception as e:
        logger.exception("%s", context)
        raise DependencyError(context, e) from e


async def handle_vidshare_error(request: Request, exc: VidShareError):
    return exc.to_response()


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies, form fields and path ids are client input errors too: 400, not 422."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return ValidationError(f"Invalid request: {problems}").to_response()


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(VidShareError, handle_vidshare_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
