from __future__ import annotations
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
def health(request: Request):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "version": request.app.version,
    }
