from __future__ import annotations

import logging
import re
from typing import List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from ..errors import RateLimitedError
from .contracts import Policy
from .service import RateLimiterService

logger = logging.getLogger("linkbio.ratelimiter")


class RateLimiterMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that applies the first matching policy to each request."""

    def __init__(
        self,
        app,
        policies: List[Policy],
        service: Optional[RateLimiterService] = None,
        skip_paths: Optional[List[str]] = None,
    ):
        super().__init__(app)
        self.policies = policies
        self.service = service or RateLimiterService()
        self.skip_paths = skip_paths or [r"^/health$"]

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        method = request.method.upper()

        for pat in self.skip_paths:
            if re.search(pat, path):
                return await call_next(request)

        policy = self._select_policy(method, path)
        if not policy:
            return await call_next(request)

        key = self._build_key(request, policy)
        result = self.service.consume(key=key, policy=policy)

        # draft IETF RateLimit-* headers
        headers = {
            "RateLimit-Limit": str(result.limit),
            "RateLimit-Remaining": str(result.remaining),
            "RateLimit-Reset": str(result.reset_after),
        }

        if not result.allowed:
            logger.warning("ratelimit.denied", extra={"key": key, "policy": policy.name})
            headers["Retry-After"] = str(result.reset_after)
            err = RateLimitedError()
            return JSONResponse(status_code=err.status_code, content=err.to_payload(), headers=headers)

        response = await call_next(request)
        for k, v in headers.items():
            response.headers[k] = v
        return response

    def _select_policy(self, method: str, path: str) -> Optional[Policy]:
        for p in self.policies:
            if p.matches(method, path):
                return p
        return None

    def _build_key(self, request: Request, policy: Policy) -> str:
        if policy.scope == "global":
            return "global:*"
        client = request.client.host if request.client else "unknown"
        return f"ip:{client}"
