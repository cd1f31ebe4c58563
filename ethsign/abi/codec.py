"""
Contract ABI encoding (head/tail layout).

Static values occupy 32-byte slots in the head. Each dynamic value places a
32-byte offset (relative to the start of the enclosing tuple) in the head and
its payload in the tail.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence

from ..errors import ParseError
from .types import AbiKind, AbiType

WORD = 32


def encode_abi(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    """
    Encode ``values`` as the ABI tuple ``(types...)``.
    """
    if len(types) != len(values):
        raise ParseError(
            f"Mismatched length, expected {len(types)} got {len(values)}",
            expected=len(types),
            got=len(values),
        )

    head_size = sum(WORD if t.is_dynamic else _static_size(t) for t in types)
    heads: List[bytes] = []
    tails: List[bytes] = []
    tail_size = 0
    for t, v in zip(types, values):
        if t.is_dynamic:
            heads.append(_uint_word(head_size + tail_size))
            payload = _encode_dynamic(t, v)
            tails.append(payload)
            tail_size += len(payload)
        else:
            heads.append(_encode_static(t, v))
    return b"".join(heads) + b"".join(tails)


def encode_single(t: AbiType, value: Any) -> bytes:
    return encode_abi([t], [value])


def _static_size(t: AbiType) -> int:
    if t.kind == AbiKind.FIXED_ARRAY:
        assert t.element is not None and t.length is not None
        return t.length * _static_size(t.element)
    return WORD


def _uint_word(n: int) -> bytes:
    return n.to_bytes(WORD, "big")


def _pad_right(b: bytes) -> bytes:
    remainder = len(b) % WORD
    if remainder == 0:
        return b
    return b + b"\x00" * (WORD - remainder)


def _encode_address(t: AbiType, v: Any) -> bytes:
    if not isinstance(v, (bytes, bytearray)) or len(v) != 20:
        raise ParseError("address value must be 20 bytes", type=t.canonical)
    return b"\x00" * 12 + bytes(v)


def _encode_bool(t: AbiType, v: Any) -> bytes:
    return _uint_word(1 if v else 0)


def _encode_uint(t: AbiType, v: Any) -> bytes:
    if v < 0 or v >= 1 << t.width:
        raise ParseError(f"value {v} out of range for {t.canonical}", type=t.canonical)
    return _uint_word(v)


def _encode_int(t: AbiType, v: Any) -> bytes:
    bound = 1 << (t.width - 1)
    if v < -bound or v >= bound:
        raise ParseError(f"value {v} out of range for {t.canonical}", type=t.canonical)
    # two's complement across the full word
    return _uint_word(v % (1 << (WORD * 8)))


def _encode_fixed_bytes(t: AbiType, v: Any) -> bytes:
    if len(v) != t.width:
        raise ParseError(f"{t.canonical} value must be {t.width} bytes", type=t.canonical)
    return bytes(v) + b"\x00" * (WORD - t.width)


def _encode_static_array(t: AbiType, v: Any) -> bytes:
    assert t.element is not None
    if len(v) != t.length:
        raise ParseError(f"{t.canonical} value must have {t.length} elements", type=t.canonical)
    return b"".join(_encode_static(t.element, item) for item in v)


_STATIC_ENCODERS: Dict[AbiKind, Callable[[AbiType, Any], bytes]] = {
    AbiKind.ADDRESS: _encode_address,
    AbiKind.BOOL: _encode_bool,
    AbiKind.UINT: _encode_uint,
    AbiKind.INT: _encode_int,
    AbiKind.FIXED_BYTES: _encode_fixed_bytes,
    AbiKind.FIXED_ARRAY: _encode_static_array,
}


def _encode_static(t: AbiType, v: Any) -> bytes:
    return _STATIC_ENCODERS[t.kind](t, v)


def _encode_dynamic(t: AbiType, v: Any) -> bytes:
    if t.kind == AbiKind.STRING:
        data = v.encode("utf-8")
        return _uint_word(len(data)) + _pad_right(data)
    if t.kind == AbiKind.BYTES:
        data = bytes(v)
        return _uint_word(len(data)) + _pad_right(data)

    assert t.element is not None
    items = list(v)
    if t.kind == AbiKind.DYNAMIC_ARRAY:
        return _uint_word(len(items)) + encode_abi([t.element] * len(items), items)
    if len(items) != t.length:
        raise ParseError(f"{t.canonical} value must have {t.length} elements", type=t.canonical)
    return encode_abi([t.element] * len(items), items)
