"""
Request tagging and timing.

Every request gets an id (the caller's ``X-Request-ID`` when it sends one)
stored on ``request.state.request_id`` and echoed back, so error logs from
``core.errors`` can be matched to the response a client saw.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def tag_and_time(request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "[%s] %s %s -> %d (%.3fs)",
            request.state.request_id, request.method, request.url.path,
            response.status_code, elapsed,
        )
        return response
