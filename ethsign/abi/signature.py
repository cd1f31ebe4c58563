from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from eth_utils import keccak

from ..errors import ParseError

CONSTRUCTOR_NAME = "constructor"
SELECTOR_SIZE = 4

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class MethodSignature:
    """
    A parsed ``name(type,type,...)`` signature.

    ``name`` is empty for a constructor. ``text`` is the whitespace-free signature
    the selector is derived from.
    """

    name: str
    types: Tuple[str, ...]
    text: str

    @property
    def is_constructor(self) -> bool:
        return self.name == ""

    @property
    def selector(self) -> bytes:
        return keccak(text=self.text)[:SELECTOR_SIZE]


def looks_like_signature(token: str) -> bool:
    return "(" in (token or "")


def parse_signature(text: str) -> MethodSignature:
    s = _WHITESPACE.sub("", text or "")
    start, end = s.find("("), s.find(")")
    if start < 1 or end < start or end != len(s) - 1:
        raise ParseError(f"Invalid call '{text}'", signature=text)
    if s.count("(") != 1 or s.count(")") != 1:
        raise ParseError(f"Invalid call '{text}': unbalanced parentheses", signature=text)

    name = s[:start]
    interior = s[start + 1 : end]
    types: Tuple[str, ...] = ()
    if interior:
        types = tuple(interior.split(","))
        if any(t == "" for t in types):
            raise ParseError(f"Invalid call '{text}': empty argument type", signature=text)

    if name == CONSTRUCTOR_NAME:
        name = ""
    return MethodSignature(name=name, types=types, text=s)
