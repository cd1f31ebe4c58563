import json

import pytest
from eth_abi import encode as eth_abi_encode
from eth_utils import to_checksum_address

from ethsign.abi import InterfaceDescription, encode_single, load_interface, parse_type
from ethsign.calldata import InterfaceCallDataCompiler, SignatureCallDataCompiler
from ethsign.errors import ErrorKind, InputFileError, ParseError, UnknownMethod

TO = "0x" + "ff" * 20
TO_CHECKSUM = to_checksum_address(TO)


@pytest.fixture
def interface(abi_file):
    return load_interface(abi_file)


def test_signature_compiler_erc20_transfer():
    data = SignatureCallDataCompiler().compile("transfer(address,uint256)", [TO, "42"])
    assert data[:4].hex() == "a9059cbb"
    assert data[4:] == eth_abi_encode(["address", "uint256"], [TO_CHECKSUM, 42])


def test_interface_compiler_uses_canonical_selector(interface):
    # the ABI declares "uint"; the selector must hash uint256
    data = InterfaceCallDataCompiler(interface).compile("transfer", [TO, "42"])
    assert data[:4].hex() == "a9059cbb"
    assert data[4:] == eth_abi_encode(["address", "uint256"], [TO_CHECKSUM, 42])


def test_interface_compiler_packs_as_one_tuple(interface):
    data = InterfaceCallDataCompiler(interface).compile("setNames", ['["a","b c"]', "label"])
    assert data[4:] == eth_abi_encode(["string[]", "string"], [["a", "b c"], "label"])


def test_both_strategies_agree_for_static_arguments(interface):
    by_signature = SignatureCallDataCompiler().compile("transfer(address,uint256)", [TO, "7"])
    by_interface = InterfaceCallDataCompiler(interface).compile("transfer", [TO, "7"])
    assert by_signature == by_interface


def test_signature_compiler_packs_each_argument_on_its_own():
    data = SignatureCallDataCompiler().compile("f(string,string)", ["a", "b"])
    string = parse_type("string")
    assert data[4:] == encode_single(string, "a") + encode_single(string, "b")
    assert data[4:] != eth_abi_encode(["string", "string"], ["a", "b"])


def test_signature_compiler_single_dynamic_argument_matches_tuple():
    data = SignatureCallDataCompiler().compile("setName(string)", ["alice"])
    assert data[4:] == eth_abi_encode(["string"], ["alice"])


def test_constructor_has_no_selector(interface):
    by_signature = SignatureCallDataCompiler(constructor=True).compile("constructor(uint256)", ["5"])
    assert by_signature == eth_abi_encode(["uint256"], [5])

    by_interface = InterfaceCallDataCompiler(interface, constructor=True).compile("", ["Token", "1000"])
    assert by_interface == eth_abi_encode(["string", "uint256"], ["Token", 1000])


@pytest.mark.parametrize("args", [[TO], [TO, "1", "2"]])
def test_signature_arity_mismatch(args):
    with pytest.raises(ParseError) as e:
        SignatureCallDataCompiler().compile("transfer(address,uint256)", args)
    assert "Mismatched length, expected 2" in e.value.message


def test_interface_arity_mismatch(interface):
    with pytest.raises(ParseError) as e:
        InterfaceCallDataCompiler(interface).compile("transfer", [TO])
    assert "expected 2 arguments, got 1" in e.value.message


def test_unknown_method(interface):
    with pytest.raises(UnknownMethod) as e:
        InterfaceCallDataCompiler(interface).compile("mint", ["1"])
    assert e.value.kind == ErrorKind.PARSE
    assert e.value.data["method"] == "mint"


def test_interface_overloads_resolve_by_arity():
    abi = [
        {"type": "function", "name": "f", "inputs": [{"type": "uint8"}]},
        {"type": "function", "name": "f", "inputs": [{"type": "uint8"}, {"type": "bool"}]},
    ]
    compiler = InterfaceCallDataCompiler(InterfaceDescription.from_json(json.dumps(abi)))
    assert compiler.compile("f", ["1", "true"])[4:] == eth_abi_encode(["uint8", "bool"], [1, True])
    assert compiler.compile("f", ["1"])[4:] == eth_abi_encode(["uint8"], [1])


def test_interface_without_constructor_accepts_no_arguments():
    interface = InterfaceDescription.from_json(json.dumps({"abi": []}))
    assert InterfaceCallDataCompiler(interface, constructor=True).compile("", []) == b""


@pytest.mark.parametrize("text", ["not json", "{}", "[1]", '[{"type": "function"}]'])
def test_invalid_interface_json(text):
    with pytest.raises(ParseError):
        InterfaceDescription.from_json(text)


def test_load_interface_missing_file(tmp_path):
    with pytest.raises(InputFileError):
        load_interface(tmp_path / "missing.abi")


def test_load_interface_from_file(abi_file):
    interface = load_interface(abi_file)
    assert interface.constructor.input_types == ("string", "uint256")
    assert [e.input_types for e in interface.overloads("transfer")] == [("address", "uint")]


def test_constructor_compiler_rejects_function_signature():
    with pytest.raises(ParseError) as e:
        SignatureCallDataCompiler(constructor=True).compile("MyToken(uint256)", ["5"])
    assert "constructor(...)" in e.value.message


def test_function_compiler_rejects_constructor_signature():
    with pytest.raises(ParseError):
        SignatureCallDataCompiler().compile("constructor(uint256)", ["5"])


def test_interface_function_compiler_never_resolves_constructor(interface):
    with pytest.raises(UnknownMethod):
        InterfaceCallDataCompiler(interface).compile("constructor", ["Token", "1000"])
    with pytest.raises(UnknownMethod):
        InterfaceCallDataCompiler(interface).compile("", ["Token", "1000"])


def test_interface_constructor_compiler_ignores_method_name(interface):
    data = InterfaceCallDataCompiler(interface, constructor=True).compile("transfer", ["Token", "1000"])
    assert data == eth_abi_encode(["string", "uint256"], ["Token", 1000])
