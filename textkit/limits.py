from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from textkit.settings import env_float, env_int

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/healthz", "/docs", "/openapi.json"}


def max_body_bytes() -> int | None:
    return env_int("TEXTKIT_MAX_BODY_BYTES", 5_000_000)


def request_timeout_seconds() -> float | None:
    return env_float("TEXTKIT_REQUEST_TIMEOUT_SECONDS", 15.0)


def _declared_length(scope: Dict[str, Any]) -> int | None:
    for key, value in scope.get("headers", []):
        if key.lower() == b"content-length":
            raw = value.decode("latin-1").strip()
            return int(raw) if raw.isdigit() else None
    return None


async def _plain(send: Any, status_code: int, message: str) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": status_code,
            "headers": [(b"content-type", b"text/plain; charset=utf-8")],
        }
    )
    await send({"type": "http.response.body", "body": message.encode("utf-8")})


class RequestLimitsMiddleware:
    """Cap request bodies (413) and request duration (504).

    Text payloads are small, so the body is read up front, counted, and
    replayed to the app as a single message. A missing or lying
    ``content-length`` therefore cannot get past the cap.
    """

    def __init__(
        self,
        app: Any,
        *,
        max_body: int | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.app = app
        self.max_body = max_body
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        path = scope.get("path", "")
        if scope.get("type") != "http" or path in EXEMPT_PATHS:
            await self.app(scope, receive, send)
            return

        if self.max_body is not None:
            declared = _declared_length(scope)
            if declared is not None and declared > self.max_body:
                logger.warning("rejected %s: content-length %d over %d", path, declared, self.max_body)
                await _plain(send, 413, "Payload too large")
                return
            body = await self._read_body(receive)
            if body is None:
                logger.warning("rejected %s: body over %d bytes", path, self.max_body)
                await _plain(send, 413, "Payload too large")
                return
            receive = _replay(body, receive)

        await self._run(scope, receive, send)

    async def _read_body(self, receive: Any) -> bytes | None:
        chunks = []
        size = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.max_body:
                return None
            chunks.append(chunk)
            if not message.get("more_body"):
                break
        return b"".join(chunks)

    async def _run(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        if self.timeout_seconds is None:
            await self.app(scope, receive, send)
            return

        started = False

        async def tracking_send(message: Dict[str, Any]) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, tracking_send), self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("request %s timed out after %ss", scope.get("path", ""), self.timeout_seconds)
            if not started:
                await _plain(send, 504, "Request timed out")


def _replay(body: bytes, receive: Any) -> Any:
    delivered = False

    async def replay() -> Dict[str, Any]:
        nonlocal delivered
        if delivered:
            return await receive()
        delivered = True
        return {"type": "http.request", "body": body, "more_body": False}

    return replay
