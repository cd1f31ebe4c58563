"""
Call-data compilation strategies.

- InterfaceCallDataCompiler: argument types come from an ABI JSON description and
  all arguments are packed together as one ABI tuple.
- SignatureCallDataCompiler: argument types come from a ``name(types)`` string and
  each argument is packed on its own, then concatenated. This matches tuple
  encoding only when every argument is static or the single argument is dynamic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from eth_utils import keccak

from .abi import InterfaceDescription, encode_abi, encode_single, parse_signature, parse_type, parse_typed_value
from .abi.interface import AbiEntry
from .abi.signature import SELECTOR_SIZE
from .abi.values import ParsedValue
from .errors import ParseError, UnknownMethod


class CallDataCompiler(ABC):
    """
    Function compilers always prefix the 4-byte selector. Constructor compilers
    (``constructor=True``) never do: their output is appended to bytecode.
    """

    def __init__(self, *, constructor: bool = False) -> None:
        self.constructor = constructor

    @abstractmethod
    def compile(self, method: str, args: Sequence[str]) -> bytes:
        raise NotImplementedError


def encode_arguments(type_tokens: Sequence[str], args: Sequence[str]) -> List[ParsedValue]:
    if len(type_tokens) != len(args):
        raise ParseError(
            f"Mismatched length, expected {len(type_tokens)} got {len(args)}",
            expected=len(type_tokens),
            got=len(args),
        )
    return [parse_typed_value(parse_type(t), a) for t, a in zip(type_tokens, args)]


class InterfaceCallDataCompiler(CallDataCompiler):
    def __init__(self, interface: InterfaceDescription, *, constructor: bool = False) -> None:
        super().__init__(constructor=constructor)
        self._interface = interface

    def resolve(self, method: str, arity: int) -> AbiEntry:
        if self.constructor:
            entry = self._interface.constructor
            if len(entry.input_types) != arity:
                raise ParseError(
                    f"expected {len(entry.input_types)} arguments, got {arity}",
                    expected=len(entry.input_types),
                    got=arity,
                )
            return entry

        candidates = self._interface.overloads(method)
        if not candidates:
            raise UnknownMethod(method)
        for entry in candidates:
            if len(entry.input_types) == arity:
                return entry
        expected = len(candidates[0].input_types)
        raise ParseError(f"expected {expected} arguments, got {arity}", method=method, expected=expected, got=arity)

    def compile(self, method: str, args: Sequence[str]) -> bytes:
        entry = self.resolve(method, len(args))
        values = encode_arguments(entry.input_types, args)
        packed = encode_abi([v.type for v in values], [v.value for v in values])
        if self.constructor:
            return packed
        # selector must hash canonical type names (uint -> uint256)
        canonical = f"{entry.name}({','.join(v.type.canonical for v in values)})"
        return keccak(text=canonical)[:SELECTOR_SIZE] + packed


class SignatureCallDataCompiler(CallDataCompiler):
    """
    Compile from a textual signature such as ``transfer(address,uint256)``.

    A constructor compiler only accepts ``constructor(...)``; a function
    compiler rejects it.
    """

    def compile(self, method: str, args: Sequence[str]) -> bytes:
        signature = parse_signature(method)
        if signature.is_constructor != self.constructor:
            expected = "a constructor(...) signature" if self.constructor else "a function signature"
            raise ParseError(f"Invalid call '{method}': expected {expected}", signature=method)
        values = encode_arguments(signature.types, args)
        packed = b"".join(encode_single(v.type, v.value) for v in values)
        if self.constructor:
            return packed
        return signature.selector + packed
