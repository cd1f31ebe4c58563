"""
Conversion of command-line argument strings into typed ABI values.

Python representation per kind:
- address: 20 canonical bytes
- bool: bool
- string: str
- bytes / bytesN: bytes (bytesN exactly N long)
- intN / uintN: int, range checked against N
- T[] / T[N]: tuple of element values
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from eth_utils import decode_hex, is_hex_address, to_canonical_address

from ..errors import ParseError
from .types import AbiKind, AbiType, parse_type

_INT_LITERAL = re.compile(r"^[+-]?[0-9]+$")

# strconv.ParseBool compatible literals
_BOOL_LITERALS: Dict[str, bool] = {
    "1": True,
    "t": True,
    "T": True,
    "true": True,
    "TRUE": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "false": False,
    "FALSE": False,
    "False": False,
}


@dataclass(frozen=True)
class ParsedValue:
    type: AbiType
    value: Any


def parse_value(type_token: str, value: str) -> ParsedValue:
    """
    Parse ``value`` according to ``type_token`` (e.g. ``uint8[]`` and ``[1,2,3]``).
    """
    return parse_typed_value(parse_type(type_token), value)


def parse_typed_value(abi_type: AbiType, value: str) -> ParsedValue:
    if abi_type.is_array:
        return ParsedValue(abi_type, _parse_array(abi_type, value))
    return ParsedValue(abi_type, _parse_scalar(abi_type, value))


def _parse_address(t: AbiType, value: str) -> bytes:
    v = value.strip()
    if not is_hex_address(v):
        raise ParseError(f"Invalid address '{value}'", type=t.canonical, value=value)
    return to_canonical_address(v)


def _parse_bool(t: AbiType, value: str) -> bool:
    v = value.strip()
    if v not in _BOOL_LITERALS:
        raise ParseError(f"Invalid bool '{value}'", type=t.canonical, value=value)
    return _BOOL_LITERALS[v]


def _parse_string(t: AbiType, value: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError(f"Invalid string {value!r}: not valid UTF-8", type=t.canonical, value=value) from e
    return value


def _decode_hex(t: AbiType, value: str) -> bytes:
    try:
        return decode_hex(value.strip())
    except ValueError as e:
        raise ParseError(f"Invalid bytes '{value}': {e}", type=t.canonical, value=value) from e


def _parse_bytes(t: AbiType, value: str) -> bytes:
    return _decode_hex(t, value)


def _parse_fixed_bytes(t: AbiType, value: str) -> bytes:
    b = _decode_hex(t, value)
    if len(b) != t.width:
        raise ParseError(
            f"Invalid bytes length for {t.canonical}, expected {t.width} got {len(b)}",
            type=t.canonical,
            value=value,
        )
    return b


def _parse_integer(t: AbiType, value: str) -> int:
    v = value.strip()
    if not _INT_LITERAL.match(v):
        raise ParseError(f"Invalid number '{value}'", type=t.canonical, value=value)
    n = int(v, 10)
    if t.kind == AbiKind.UINT:
        lo, hi = 0, (1 << t.width) - 1
    else:
        lo, hi = -(1 << (t.width - 1)), (1 << (t.width - 1)) - 1
    if n < lo or n > hi:
        raise ParseError(
            f"Invalid number '{value}': out of range for {t.canonical}",
            type=t.canonical,
            value=value,
        )
    return n


_SCALAR_PARSERS: Dict[AbiKind, Callable[[AbiType, str], Any]] = {
    AbiKind.ADDRESS: _parse_address,
    AbiKind.BOOL: _parse_bool,
    AbiKind.STRING: _parse_string,
    AbiKind.BYTES: _parse_bytes,
    AbiKind.FIXED_BYTES: _parse_fixed_bytes,
    AbiKind.INT: _parse_integer,
    AbiKind.UINT: _parse_integer,
}


def _parse_scalar(t: AbiType, value: str) -> Any:
    return _SCALAR_PARSERS[t.kind](t, value)


def _parse_array(t: AbiType, value: str) -> tuple:
    assert t.element is not None
    elements = split_array_literal(value, type_token=t.canonical)

    if t.kind == AbiKind.FIXED_ARRAY and len(elements) != t.length:
        raise ParseError(
            f"Mismatched array length for {t.canonical}, expected {t.length} got {len(elements)}",
            type=t.canonical,
            value=value,
        )
    return tuple(_parse_scalar(t.element, element) for element in elements)


def split_array_literal(value: str, *, type_token: str = "") -> List[str]:
    """
    Split ``[a, "b c", d]`` into its top-level elements.

    Double quotes suspend interpretation of brackets, commas and whitespace and
    are removed from the result. Unquoted whitespace is dropped.
    """
    s = (value or "").strip()
    if len(s) < 2 or s[0] != "[" or s[-1] != "]":
        raise ParseError(
            "Invalid or mismatched array signature and/or value",
            type=type_token,
            value=value,
        )

    depth = 0
    quoted = False
    closed = False
    seen_element = False
    elements: List[str] = []
    current: List[str] = []
    for ch in s:
        if closed:
            raise ParseError("Unexpected characters after closing ']'", type=type_token, value=value)
        if ch == '"':
            quoted = not quoted
            seen_element = True
            continue
        if quoted:
            current.append(ch)
            continue
        if ch.isspace():
            continue
        if ch == "[":
            depth += 1
            if depth > 1:
                raise ParseError("Nested arrays are not supported", type=type_token, value=value)
            continue
        if ch == "]":
            depth -= 1
            if depth < 0:
                raise ParseError("Unbalanced array brackets", type=type_token, value=value)
            if depth == 0:
                closed = True
            continue
        if depth == 0:
            raise ParseError("Unbalanced array brackets", type=type_token, value=value)
        seen_element = True
        if ch == ",":
            elements.append("".join(current))
            current = []
            continue
        current.append(ch)

    if quoted:
        raise ParseError("Unterminated quote in array value", type=type_token, value=value)
    if depth != 0:
        raise ParseError("Unbalanced array brackets", type=type_token, value=value)

    if seen_element:
        elements.append("".join(current))
    return elements
