from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_LOG = logging.getLogger("oracle.access")


def _dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def _get_client_ip(request: Request) -> str:
    # X-Forwarded-For first hop is informational only.
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    client = request.client
    return client.host if client else "-"


def _maybe_utf8(b: bytes, limit: int) -> str:
    if limit <= 0 or not b:
        return ""
    sample = b[:limit]
    try:
        s = sample.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        s = "0x" + sample.hex()
    if len(b) > limit:
        s += "…"
    return s


def _detect_jsonrpc_method(b: bytes) -> Optional[str]:
    if not b:
        return None
    try:
        obj = json.loads(b.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None

    if isinstance(obj, list) and obj:
        obj = obj[0]
    if isinstance(obj, dict):
        m = obj.get("method")
        return m if isinstance(m, str) else None
    return None


def _ensure_request_id(request: Request) -> str:
    return request.headers.get("x-request-id") or uuid.uuid4().hex


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Structured access logging.

    - Emits a single JSON line per HTTP request at INFO level (WARNING for
      4xx/5xx, ERROR with traceback if the handler raised):
      {
        "event":"http_request",
        "req_id":"…",
        "method":"POST",
        "path":"/",
        "status":200,
        "duration_ms":1.23,
        "client_ip":"127.0.0.1",
        "jsonrpc_method":"resolve_foreign_call",
        "body_sample":"{…}"
      }
    - Adds `X-Request-ID` response header (and reuses the incoming header if provided).
    - `request_body_sample` controls how many bytes of the request body are logged (default: 0).
    """

    def __init__(self, app, request_body_sample: int = 0) -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self.request_body_sample = max(0, int(request_body_sample))

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        req_id = _ensure_request_id(request)
        start = time.perf_counter()

        method = request.method
        path = request.url.path
        client_ip = _get_client_ip(request)

        # Starlette caches the body on the Request, and BaseHTTPMiddleware
        # replays it to the downstream app.
        body = await request.body()
        jsonrpc_method = _detect_jsonrpc_method(body)

        status = 500
        exc_info: Optional[BaseException] = None
        try:
            response: Response = await call_next(request)
            status = int(response.status_code)
            response.headers["X-Request-ID"] = req_id
            return response
        except Exception as e:
            exc_info = e
            raise
        finally:
            record: Dict[str, Any] = {
                "event": "http_request",
                "req_id": req_id,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round((time.perf_counter() - start) * 1000.0, 3),
                "client_ip": client_ip,
            }
            if jsonrpc_method:
                record["jsonrpc_method"] = jsonrpc_method
            if self.request_body_sample > 0:
                record["body_sample"] = _maybe_utf8(body, self.request_body_sample)

            line = _dumps(record)
            if exc_info is not None:
                _LOG.error(line, exc_info=exc_info)
            elif status < 400:
                _LOG.info(line)
            else:
                _LOG.warning(line)


__all__ = ["LoggingMiddleware"]
