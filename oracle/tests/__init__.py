"""
Test utilities for the foreign-call oracle.

Usage in tests:
    from oracle.tests import new_test_client, rpc_call, foreign_call

    def test_health():
        client, cfg = new_test_client()
        r = client.get("/healthz")
        assert r.json()["ok"] is True

    def test_encode():
        client, _ = new_test_client()
        res = foreign_call(client, "base64_encode_standard", ["00", "01", "02"])
        assert res["result"]["values"] == [["41", "41", "45", "43"]]
"""
from __future__ import annotations

import typing as t

from fastapi.testclient import TestClient

from oracle import config as oracle_config
from oracle import server as oracle_server


def make_test_config(**overrides: t.Any) -> oracle_config.OracleConfig:
    """
    Build a minimal config suitable for tests (quiet logs, wide-open CORS).
    """
    values: dict[str, t.Any] = dict(
        host="127.0.0.1",
        port=0,  # unused by TestClient
        log_level="ERROR",
        cors_allow_origins=["*"],
        log_body_sample=0,
        metrics_enabled=True,
    )
    values.update(overrides)
    return oracle_config.OracleConfig(**values)


def new_test_client(**overrides: t.Any) -> tuple[TestClient, oracle_config.OracleConfig]:
    """
    Create a TestClient bound to a fresh app. Returns (client, cfg).
    """
    cfg = make_test_config(**overrides)
    app = oracle_server.create_app(cfg)
    return TestClient(app), cfg


def rpc_call(
    client: TestClient,
    method: str,
    params: t.Any | None = None,
    *,
    id: t.Any = 1,
    path: str = "/",
    expect_error: bool = False,
) -> dict:
    """
    POST a JSON-RPC request and return the parsed response.
    Set expect_error=True to assert an 'error' object is present.
    """
    payload: dict = {"jsonrpc": "2.0", "method": method, "id": id}
    if params is not None:
        payload["params"] = params
    resp = client.post(path, json=payload)
    assert resp.status_code == 200, f"HTTP {resp.status_code}: {resp.text}"
    data = resp.json()
    if expect_error:
        assert "error" in data, f"expected JSON-RPC error, got {data}"
    else:
        assert "result" in data, f"expected JSON-RPC result, got {data}"
    return data


def foreign_call(
    client: TestClient,
    function: str,
    tokens: t.Sequence[t.Any],
    *,
    expect_error: bool = False,
) -> dict:
    """Shortcut for resolve_foreign_call with a single input group."""
    params = [{"function": function, "inputs": [list(tokens)]}]
    return rpc_call(client, "resolve_foreign_call", params, expect_error=expect_error)


def hex_tokens(data: bytes) -> list[str]:
    """Render bytes the way the host sends them (one hex token per byte)."""
    return [f"{b:02x}" for b in data]


def decode_values(values: list[list[str]]) -> str:
    """Turn a response `values` payload back into the text it encodes."""
    assert len(values) == 1
    return bytes(int(tok, 16) for tok in values[0]).decode("utf-8")


__all__ = [
    "make_test_config",
    "new_test_client",
    "rpc_call",
    "foreign_call",
    "hex_tokens",
    "decode_values",
]
