"""
Oracle middleware wiring
==========================

`apply_middleware(app, cfg)` installs the standard stack onto a FastAPI app:

1) Metrics → HTTP counters/latency (only when cfg.metrics_enabled).
2) Logging → one structured access-log line per request.
3) CORS → outermost, so preflight/headers are added even for failures above.

Starlette middlewares nest; the *last* added runs first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.cors import CORSMiddleware

from .logging import LoggingMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI  # pragma: no cover

    from oracle.config import OracleConfig  # pragma: no cover

__all__ = ["apply_middleware", "LoggingMiddleware"]


def apply_middleware(app: "FastAPI", cfg: "OracleConfig") -> None:
    if cfg.metrics_enabled:
        from oracle.metrics import http_metrics_middleware

        app.add_middleware(http_metrics_middleware)

    app.add_middleware(LoggingMiddleware, request_body_sample=cfg.log_body_sample)

    origins = list(cfg.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["x-request-id"],
        max_age=3600,
    )
