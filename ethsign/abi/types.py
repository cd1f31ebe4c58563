"""
Closed grammar of ABI argument types.

Supported tokens:
- address, bool, string, bytes
- bytes1 .. bytes32
- int, uint, int8 .. int256, uint8 .. uint256 (widths in steps of 8)
- one-dimensional arrays of any of the above: T[] or T[N]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import ParseError

MAX_NATIVE_INT_BITS = 64

_ARRAY_SUFFIX = re.compile(r"^(?P<base>[a-z0-9]+)\[(?P<length>[0-9]*)\]$")
_INT_TOKEN = re.compile(r"^(?P<sign>u?)int(?P<width>[0-9]*)$")
_FIXED_BYTES_TOKEN = re.compile(r"^bytes(?P<width>[0-9]+)$")


class AbiKind(Enum):
    ADDRESS = "address"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    FIXED_BYTES = "fixed_bytes"
    INT = "int"
    UINT = "uint"
    DYNAMIC_ARRAY = "dynamic_array"
    FIXED_ARRAY = "fixed_array"


_SIMPLE_KINDS = {
    "address": AbiKind.ADDRESS,
    "bool": AbiKind.BOOL,
    "string": AbiKind.STRING,
    "bytes": AbiKind.BYTES,
}


@dataclass(frozen=True)
class AbiType:
    kind: AbiKind
    width: int = 0
    element: Optional["AbiType"] = None
    length: Optional[int] = None

    @property
    def is_array(self) -> bool:
        return self.kind in (AbiKind.DYNAMIC_ARRAY, AbiKind.FIXED_ARRAY)

    @property
    def is_integer(self) -> bool:
        return self.kind in (AbiKind.INT, AbiKind.UINT)

    @property
    def is_native_int(self) -> bool:
        """
        Integer widths that fit a machine word; wider ones are big integers.

        Descriptive only: both classes parse to a Python int with the same range
        check.
        """
        return self.is_integer and self.width <= MAX_NATIVE_INT_BITS

    @property
    def is_dynamic(self) -> bool:
        if self.kind in (AbiKind.STRING, AbiKind.BYTES, AbiKind.DYNAMIC_ARRAY):
            return True
        if self.kind == AbiKind.FIXED_ARRAY:
            assert self.element is not None
            return self.element.is_dynamic
        return False

    @property
    def canonical(self) -> str:
        if self.kind == AbiKind.FIXED_BYTES:
            return f"bytes{self.width}"
        if self.kind == AbiKind.INT:
            return f"int{self.width}"
        if self.kind == AbiKind.UINT:
            return f"uint{self.width}"
        if self.kind == AbiKind.DYNAMIC_ARRAY:
            assert self.element is not None
            return f"{self.element.canonical}[]"
        if self.kind == AbiKind.FIXED_ARRAY:
            assert self.element is not None
            return f"{self.element.canonical}[{self.length}]"
        return self.kind.value

    def __str__(self) -> str:
        return self.canonical


def parse_type(token: str) -> AbiType:
    """
    Parse a type token such as ``uint256`` or ``address[3]`` into an AbiType.

    Raises ParseError for unknown tokens, illegal widths and multi-dimensional arrays.
    """
    t = (token or "").strip()
    if "[" in t or "]" in t:
        m = _ARRAY_SUFFIX.match(t)
        if not m:
            raise ParseError(f"Unsupported array type '{token}' (one dimension only)", type=token)
        element = _parse_scalar_type(m.group("base"), token)
        raw_length = m.group("length")
        if raw_length == "":
            return AbiType(AbiKind.DYNAMIC_ARRAY, element=element)
        length = int(raw_length)
        if length < 1:
            raise ParseError(f"Invalid fixed array length in '{token}'", type=token)
        return AbiType(AbiKind.FIXED_ARRAY, element=element, length=length)
    return _parse_scalar_type(t, token)


def _parse_scalar_type(t: str, token: str) -> AbiType:
    kind = _SIMPLE_KINDS.get(t)
    if kind is not None:
        return AbiType(kind)

    m = _FIXED_BYTES_TOKEN.match(t)
    if m:
        width = int(m.group("width"))
        if not 1 <= width <= 32:
            raise ParseError(f"Invalid type '{token}': bytes width must be in [1,32]", type=token)
        return AbiType(AbiKind.FIXED_BYTES, width=width)

    m = _INT_TOKEN.match(t)
    if m:
        raw_width = m.group("width")
        width = int(raw_width) if raw_width else 256
        if width < 8 or width > 256 or width % 8 != 0:
            raise ParseError(f"Invalid type '{token}': integer width must be a multiple of 8 in [8,256]", type=token)
        return AbiType(AbiKind.UINT if m.group("sign") else AbiKind.INT, width=width)

    raise ParseError(f"Invalid type '{token}'", type=token)
