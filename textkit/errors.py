from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_INPUT = "Invalid input."
INTERNAL_ERROR = "Internal error."


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def install_defect_handler(app: FastAPI, *exc_types: type[BaseException]) -> None:
    """Answer internal defects with a generic 500 body instead of leaking details."""

    async def _handle(request: Request, exc: Exception) -> JSONResponse:
        logger.error("internal defect on %s: %s", request.url.path, exc)
        return error_response(INTERNAL_ERROR, status_code=500)

    for exc_type in exc_types:
        app.add_exception_handler(exc_type, _handle)


class ValidationNormalizeMiddleware:
    """Normalize FastAPI 422 validation responses into 400 with a short error body."""

    def __init__(self, app: Any, *, message: str = INVALID_INPUT) -> None:
        self.app = app
        self.payload = json.dumps({"error": message}).encode("utf-8")

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        status_code = 500
        headers: List[Tuple[bytes, bytes]] = []
        body_chunks: List[bytes] = []

        async def send_wrapper(message: Dict[str, Any]) -> None:
            nonlocal status_code, headers
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                headers = list(message.get("headers", []))
                return
            if message["type"] != "http.response.body":
                await send(message)
                return

            body_chunks.append(message.get("body", b"") or b"")
            if message.get("more_body"):
                return

            if status_code == 422:
                filtered = [
                    (key, value)
                    for key, value in headers
                    if key.lower() not in {b"content-length", b"content-type"}
                ]
                filtered.append((b"content-type", b"application/json"))
                filtered.append((b"content-length", str(len(self.payload)).encode("latin-1")))
                await send({"type": "http.response.start", "status": 400, "headers": filtered})
                await send({"type": "http.response.body", "body": self.payload})
                return

            await send({"type": "http.response.start", "status": status_code, "headers": headers})
            await send({"type": "http.response.body", "body": b"".join(body_chunks)})

        await self.app(scope, receive, send_wrapper)
