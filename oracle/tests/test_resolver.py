from __future__ import annotations

import pytest

from oracle.foreign import (InvalidRequest, MalformedInput, Transformation,
                            UnknownFunction, resolve, resolve_foreign_call,
                            validate_params)
from oracle.foreign import transforms
from oracle.tests import decode_values, hex_tokens


def _call(function, tokens):
    return [{"function": function, "inputs": [tokens]}]


def test_scenario_standard_three_bytes():
    res = resolve_foreign_call(_call("base64_encode_standard", ["00", "01", "02"]))
    assert res == {"values": [["41", "41", "45", "43"]]}


def test_scenario_single_f_byte_with_and_without_padding():
    padded = resolve_foreign_call(_call("base64_encode_standard", ["66"]))
    bare = resolve_foreign_call(_call("base64_encode_standard_no_pad", ["66"]))
    assert decode_values(padded["values"]) == "Zg=="
    assert decode_values(bare["values"]) == "Zg"
    assert padded["values"] == [["5a", "67", "3d", "3d"]]


@pytest.mark.parametrize("name", Transformation.names())
@pytest.mark.parametrize(
    "data", [b"\x00", b"hello world", b"\xfb\xff\xfe", bytes(range(0, 256, 3))]
)
def test_hex_wire_round_trip_matches_direct_encoding(name, data):
    res = resolve_foreign_call(_call(name, hex_tokens(data)))
    assert decode_values(res["values"]) == resolve(name, data)
    # ASCII output: one token per character
    assert len(res["values"][0]) == len(resolve(name, data))


def test_only_first_input_group_is_consumed():
    params = [{"function": "base64_encode_standard", "inputs": [["66"], ["zz"], "junk"]}]
    res = resolve_foreign_call(params)
    assert decode_values(res["values"]) == "Zg=="


def test_extra_fields_are_ignored():
    params = [{"function": "base64_encode_url_safe", "inputs": [["fb", "ff"]], "extra": 1}]
    assert decode_values(resolve_foreign_call(params)["values"]) == "-_8"


def test_unknown_function_surfaces_name():
    with pytest.raises(UnknownFunction) as ei:
        resolve_foreign_call(_call("rot13", ["66"]))
    assert ei.value.name == "rot13"
    assert "rot13" in str(ei.value)


def test_malformed_input_fails_before_any_transformation(monkeypatch):
    calls = []
    monkeypatch.setitem(
        transforms._ENCODERS,
        Transformation.BASE64_STANDARD,
        lambda data: calls.append(data) or "",
    )
    with pytest.raises(MalformedInput):
        resolve_foreign_call(_call("base64_encode_standard", ["00", "zz"]))
    assert calls == []


def test_malformed_input_is_reported_even_for_unknown_function():
    # tokens are decoded before the name is looked up
    with pytest.raises(MalformedInput):
        resolve_foreign_call(_call("rot13", ["zz"]))


@pytest.mark.parametrize(
    "params",
    [
        [],
        [None],
        ["base64_encode_standard"],
        [{}],
        [{"inputs": [["00"]]}],
        [{"function": "", "inputs": [["00"]]}],
        [{"function": 7, "inputs": [["00"]]}],
        [{"function": "base64_encode_standard"}],
        [{"function": "base64_encode_standard", "inputs": []}],
        [{"function": "base64_encode_standard", "inputs": [[]]}],
        [{"function": "base64_encode_standard", "inputs": ["00"]}],
        [{"function": "base64_encode_standard", "inputs": "00"}],
    ],
)
def test_invalid_shapes_raise_invalid_request(params):
    with pytest.raises(InvalidRequest) as ei:
        validate_params(params)
    assert "Invalid foreign call parameters" in str(ei.value)


def test_invalid_request_names_the_missing_field():
    with pytest.raises(InvalidRequest) as ei:
        validate_params([{"inputs": [["00"]]}])
    assert "function" in str(ei.value)


def test_validate_params_returns_first_group():
    call = validate_params(_call("base64_encode_standard", ["0a", "0b"]))
    assert call.function == "base64_encode_standard"
    assert call.first_group == ["0a", "0b"]


def test_resolver_is_stateless_and_deterministic():
    params = _call("base64_encode_url_safe_with_pad", ["fb", "ff"])
    first = resolve_foreign_call(params)
    resolve_foreign_call(_call("base64_encode_standard", ["00"]))
    with pytest.raises(UnknownFunction):
        resolve_foreign_call(_call("nope", ["00"]))
    assert resolve_foreign_call(params) == first
