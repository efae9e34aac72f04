from __future__ import annotations

import json
import logging
import typing as t

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from oracle import config as oracle_config
from oracle import jsonrpc, methods
from oracle import version as oracle_version
from oracle.errors import InternalError, ParseError, error_response
from oracle.foreign import Transformation
from oracle.middleware import apply_middleware

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
log = logging.getLogger("oracle.server")

RPC_PATHS = ("/", "/rpc")

_USAGE_HINT = {
    "error": "Method not allowed",
    "hint": "Send JSON-RPC requests as POST with application/json.",
    "examples": {
        "single": {
            "jsonrpc": "2.0",
            "method": "resolve_foreign_call",
            "params": [
                {"function": "base64_encode_standard", "inputs": [["00", "01", "02"]]}
            ],
            "id": 1,
        },
        "functions": {"jsonrpc": "2.0", "method": "rpc.listFunctions", "id": 2},
    },
}


def _json_response(content: t.Any) -> Response:
    return Response(
        content=json.dumps(content, separators=(",", ":")),
        media_type="application/json",
    )


async def rpc_endpoint(request: Request) -> Response:
    """
    POST handler shared by every RPC path. Always answers with a well-formed
    JSON-RPC envelope (or 204 for notifications).
    """
    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        return _json_response(error_response(None, ParseError(f"Invalid JSON body: {e}")))

    try:
        result = await jsonrpc.dispatch(payload)
    except Exception as e:
        log.exception("RPC Error")
        rpc_id = payload.get("id") if isinstance(payload, dict) else None
        return _json_response(error_response(rpc_id, InternalError(str(e))))

    if result is None:
        return Response(status_code=204)
    return _json_response(result)


async def _rpc_usage(request: Request) -> JSONResponse:
    return JSONResponse(_USAGE_HINT, status_code=405, headers={"Allow": "POST"})


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------
def create_app(cfg: oracle_config.OracleConfig | None = None) -> FastAPI:
    """
    Build the FastAPI app with:
      - POST / and POST /rpc  (JSON-RPC)
      - GET  /               (banner with available functions)
      - /metrics             (when enabled)
      - /healthz, /version
    """
    cfg = cfg or oracle_config.load()

    # Basic logging if caller hasn't configured it
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, cfg.log_level.upper(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    app = FastAPI(
        title="Foreign-Call Oracle",
        version=oracle_version.__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = cfg

    apply_middleware(app, cfg)

    @app.on_event("startup")
    async def _on_startup() -> None:
        log.info("Foreign-call oracle listening on %s:%s", cfg.host, cfg.port)
        log.info("Available functions: %s", ", ".join(Transformation.names()))

    # --- JSON-RPC ---
    for path in RPC_PATHS:
        app.add_api_route(path, rpc_endpoint, methods=["POST"], include_in_schema=False)
    app.add_api_route(
        "/rpc", _rpc_usage, methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
    )

    # --- Health endpoints ---
    @app.get("/healthz")
    async def healthz() -> JSONResponse:
        return JSONResponse({"ok": True, "version": oracle_version.__version__})

    @app.get("/version")
    async def version() -> JSONResponse:
        return JSONResponse(
            {
                "version": oracle_version.__version__,
                "build": oracle_version.version_with_git(),
            }
        )

    # --- Metrics mount ---
    if cfg.metrics_enabled:
        from oracle.metrics import mount_metrics

        mount_metrics(app)

    # --- JSON index (tiny banner) ---
    @app.get("/")
    async def index() -> JSONResponse:
        endpoints = ["/", "/rpc", "/healthz", "/version"]
        if cfg.metrics_enabled:
            endpoints.append("/metrics")
        return JSONResponse(
            {
                "name": "Foreign-Call Oracle",
                "version": oracle_version.__version__,
                "methods": methods.list_methods(),
                "functions": Transformation.names(),
                "endpoints": endpoints,
            }
        )

    return app


# -----------------------------------------------------------------------------
# Entrypoint (uvicorn)
# -----------------------------------------------------------------------------
def main() -> None:
    cfg = oracle_config.load()
    app = create_app(cfg)
    # Lazy import uvicorn so the module is importable in tests without uvicorn installed
    import uvicorn

    uvicorn.run(
        app,
        host=cfg.host,
        port=cfg.port,
        log_level=cfg.log_level.lower(),
        workers=1,
    )


if __name__ == "__main__":
    main()
