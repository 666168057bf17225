"""Exception handlers mapping pipeline errors to HTTP responses.

QueryInputError is the caller's fault and is echoed back as a 400. Every
other failure is logged with its traceback and answered with an opaque 500.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from modules.org_directory.errors import OrgDirectoryError, QueryInputError

logger = get_module_logger()

INTERNAL_SERVER_ERROR = "Internal Server Error"


async def query_input_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("query_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def request_validation_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(str(e.get("msg", "")) for e in errors) or "invalid request"
    logger.info("query_rejected", path=request.url.path, error=message)
    return JSONResponse(status_code=400, content={"error": message})


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "query_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=500, content=INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QueryInputError, query_input_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(OrgDirectoryError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
