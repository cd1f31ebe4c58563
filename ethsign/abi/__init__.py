from .codec import encode_abi, encode_single
from .interface import AbiEntry, InterfaceDescription, load_interface
from .signature import MethodSignature, looks_like_signature, parse_signature
from .types import AbiKind, AbiType, parse_type
from .values import ParsedValue, parse_typed_value, parse_value, split_array_literal

__all__ = [
    "AbiEntry",
    "AbiKind",
    "AbiType",
    "InterfaceDescription",
    "MethodSignature",
    "ParsedValue",
    "encode_abi",
    "encode_single",
    "load_interface",
    "looks_like_signature",
    "parse_signature",
    "parse_type",
    "parse_typed_value",
    "parse_value",
    "split_array_literal",
]
