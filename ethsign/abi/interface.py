from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..errors import InputFileError, ParseError


@dataclass(frozen=True)
class AbiEntry:
    name: str
    input_types: Tuple[str, ...]


@dataclass(frozen=True)
class InterfaceDescription:
    """
    Function and constructor inputs read from a Solidity ABI JSON document.
    """

    functions: Dict[str, Tuple[AbiEntry, ...]]
    constructor: AbiEntry

    def overloads(self, name: str) -> Tuple[AbiEntry, ...]:
        return self.functions.get(name, ())

    @staticmethod
    def from_json(text: str) -> "InterfaceDescription":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid ABI JSON: {e}") from e
        # solc --combined-json and hardhat artifacts wrap the list
        if isinstance(data, dict) and isinstance(data.get("abi"), list):
            data = data["abi"]
        if not isinstance(data, list):
            raise ParseError("Invalid ABI JSON: expected a list of entries")

        functions: Dict[str, List[AbiEntry]] = {}
        constructor: Optional[AbiEntry] = None
        for item in data:
            if not isinstance(item, dict):
                raise ParseError("Invalid ABI JSON: entries must be objects")
            entry_type = item.get("type", "function")
            if entry_type == "function":
                name = str(item.get("name") or "")
                if not name:
                    raise ParseError("Invalid ABI JSON: function entry without a name")
                entry = AbiEntry(name=name, input_types=_input_types(item))
                functions.setdefault(name, []).append(entry)
            elif entry_type == "constructor":
                constructor = AbiEntry(name="", input_types=_input_types(item))

        return InterfaceDescription(
            functions={name: tuple(entries) for name, entries in functions.items()},
            constructor=constructor or AbiEntry(name="", input_types=()),
        )


def _input_types(item: Dict[str, Any]) -> Tuple[str, ...]:
    inputs = item.get("inputs") or []
    if not isinstance(inputs, list):
        raise ParseError("Invalid ABI JSON: inputs must be a list")
    out = []
    for inp in inputs:
        if not isinstance(inp, dict) or not inp.get("type"):
            raise ParseError("Invalid ABI JSON: input without a type")
        out.append(str(inp["type"]))
    return tuple(out)


def load_interface(path: str | Path) -> InterfaceDescription:
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise InputFileError(f"Cannot read ABI file '{p}': {e.strerror or e}", path=str(p)) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"ABI file '{p}' is not UTF-8 text", path=str(p)) from e
    return InterfaceDescription.from_json(text)
