from __future__ import annotations
import logging
import time, uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..errors import ServerError

logger = logging.getLogger("linkbio.apigateway")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id (echoed as `x-request-id`), logs its start
    and end, and turns an unhandled exception into the 500 envelope.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        client_ip = request.client.host if request.client else "unknown"
        request.state.request_id = request_id
        ctx = {"request_id": request_id, "method": request.method, "path": request.url.path, "client_ip": client_ip}

        logger.info("request.start %s %s - %s", request.method, request.url.path, client_ip, extra=ctx)
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            # built here so CORS and security headers still wrap the 500
            logger.exception("unhandled.%s", type(exc).__name__, extra={**ctx, "duration_ms": _elapsed_ms(start)})
            err = ServerError()
            response = JSONResponse(status_code=err.status_code, content=err.to_payload())
        response.headers["x-request-id"] = request_id
        logger.info(
            "request.end %s", response.status_code,
            extra={**ctx, "status": response.status_code, "duration_ms": _elapsed_ms(start)},
        )
        return response
