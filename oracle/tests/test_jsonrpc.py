from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional

from oracle import jsonrpc, methods
from oracle.tests import new_test_client, rpc_call


def _dispatch(payload: Any) -> Any:
    return asyncio.run(jsonrpc.dispatch(payload))


def _foreign(function: str, tokens: List[str], id: Any = 1) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "method": "resolve_foreign_call",
        "params": [{"function": function, "inputs": [tokens]}],
        "id": id,
    }


def test_dispatch_single_call_ok():
    res = _dispatch(_foreign("base64_encode_standard", ["00", "01", "02"]))
    assert res == {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"values": [["41", "41", "45", "43"]]},
    }


def test_unknown_function_is_internal_error_with_message_as_data():
    res = _dispatch(_foreign("rot13", ["66"], id="x"))
    assert res["id"] == "x"
    assert res["error"]["code"] == -32603
    assert res["error"]["message"] == "Internal error"
    assert res["error"]["data"] == "Unknown function: rot13"


def test_malformed_input_is_internal_error():
    res = _dispatch(_foreign("base64_encode_standard", ["zz"]))
    assert res["error"]["code"] == -32603
    assert "zz" in res["error"]["data"]


def test_invalid_foreign_call_shape_is_internal_error():
    payload = {"jsonrpc": "2.0", "method": "resolve_foreign_call", "params": [], "id": 3}
    res = _dispatch(payload)
    assert res["error"]["code"] == -32603
    assert res["error"]["data"] == "Invalid foreign call parameters"


def test_named_params_do_not_bind_to_positional_method():
    payload = {
        "jsonrpc": "2.0",
        "method": "resolve_foreign_call",
        "params": {"function": "base64_encode_standard", "inputs": [["00"]]},
        "id": 4,
    }
    res = _dispatch(payload)
    assert res["error"]["code"] == -32602


def test_method_not_found():
    res = _dispatch({"jsonrpc": "2.0", "method": "nope.method", "id": 42})
    assert res["id"] == 42
    assert res["error"]["code"] == -32601
    assert res["error"]["message"] == "Method not found"


def test_wrong_jsonrpc_version_is_invalid_request():
    res = _dispatch({"jsonrpc": "1.0", "method": "rpc.listMethods", "id": 1})
    assert res["error"]["code"] == -32600


def test_invalid_id_type_is_not_echoed():
    res = _dispatch({"jsonrpc": "2.0", "method": "rpc.listMethods", "id": {"a": 1}})
    assert res["id"] is None
    assert res["error"]["code"] == -32600


def test_notification_gets_no_response_even_on_error():
    ok = {"jsonrpc": "2.0", "method": "rpc.listMethods"}
    bad = {"jsonrpc": "2.0", "method": "resolve_foreign_call", "params": [{"function": "rot13", "inputs": [["00"]]}]}
    assert _dispatch(ok) is None
    assert _dispatch(bad) is None
    assert _dispatch([ok, bad]) is None


def test_batch_mixed_valid_invalid_and_garbage():
    batch = [
        _foreign("base64_encode_standard", ["66"], id="a"),
        {"jsonrpc": "2.0", "method": "no.such.method", "id": "b"},
        _foreign("rot13", ["66"], id="c"),
        "not a request",
    ]
    resp = _dispatch(batch)
    assert isinstance(resp, list) and len(resp) == 4

    def find_by_id(idval: Any) -> Optional[Dict[str, Any]]:
        for item in resp:
            if item.get("id", None) == idval:
                return item
        return None

    assert find_by_id("a")["result"] == {"values": [["5a", "67", "3d", "3d"]]}
    assert find_by_id("b")["error"]["code"] == -32601
    assert find_by_id("c")["error"]["code"] == -32603
    assert find_by_id(None)["error"]["code"] == -32600


def test_empty_batch_is_invalid_request():
    res = _dispatch([])
    assert isinstance(res, dict)
    assert res["error"]["code"] == -32600
    assert res["id"] is None


def test_scalar_payload_is_invalid_request():
    res = _dispatch(17)
    assert res["error"]["code"] == -32600


def test_unexpected_exception_maps_to_internal_error():
    @methods.method("test.raiseInternal", replace=True)
    def raise_internal():
        raise RuntimeError("boom")

    res = _dispatch({"jsonrpc": "2.0", "method": "test.raiseInternal", "id": 9})
    assert res["error"] == {"code": -32603, "message": "Internal error", "data": "boom"}


def test_async_methods_are_awaited():
    @methods.method("test.asyncEcho", replace=True)
    async def echo(value):
        return value

    res = _dispatch({"jsonrpc": "2.0", "method": "test.asyncEcho", "params": ["hi"], "id": 1})
    assert res["result"] == "hi"


def test_introspection_methods():
    names = _dispatch({"jsonrpc": "2.0", "method": "rpc.listMethods", "id": 1})["result"]
    assert "resolve_foreign_call" in names
    assert "rpc.listFunctions" in names
    funcs = _dispatch({"jsonrpc": "2.0", "method": "rpc.listFunctions", "id": 1})["result"]
    assert funcs == [
        "base64_encode_standard",
        "base64_encode_standard_no_pad",
        "base64_encode_url_safe",
        "base64_encode_url_safe_with_pad",
    ]


def test_id_echoing_and_types_preserved_over_http():
    client, _ = new_test_client()
    batch = [
        _foreign("base64_encode_standard", ["00"], id=7),
        _foreign("base64_encode_standard", ["00"], id="07"),
    ]
    r = client.post("/", content=json.dumps(batch), headers={"content-type": "application/json"})
    assert r.status_code == 200
    by_id = {item["id"]: item for item in r.json()}
    assert isinstance(by_id[7]["id"], int)
    assert isinstance(by_id["07"]["id"], str)
    assert by_id[7]["result"] == by_id["07"]["result"]


def test_rpc_call_helper_round_trip():
    client, _ = new_test_client()
    res = rpc_call(client, "rpc.listFunctions", id="fns")
    assert res["id"] == "fns"
    assert len(res["result"]) == 4
