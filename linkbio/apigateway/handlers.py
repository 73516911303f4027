from __future__ import annotations
import logging
from typing import List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from ..errors import LinkBioError, ServerError, ValidationError

logger = logging.getLogger("linkbio.apigateway")


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def register_error_handlers(app: FastAPI) -> None:
    """Map every failure onto the `{success: false, message}` envelope."""

    @app.exception_handler(LinkBioError)
    async def _domain_error(request: Request, exc: LinkBioError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        err = ValidationError(errors=_validation_messages(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("unhandled.%s", type(exc).__name__, extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=ServerError().to_payload())
