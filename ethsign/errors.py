from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ErrorKind(Enum):
    PARSE = "parse"
    VALIDATION = "validation"
    IO = "io"
    CRYPTO = "crypto"
    INTERNAL = "internal"


@dataclass
class EthSignError(Exception):
    kind: ErrorKind
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class ParseError(EthSignError):
    """
    Malformed signature, array literal, type token or argument value.
    """

    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(ErrorKind.PARSE, message, data)


class UnknownMethod(ParseError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Method '{name}' not found in interface description", method=name)


class ValidationError(EthSignError):
    """
    Illegal flag combination or out-of-range flag value for the chosen command.
    """

    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(ErrorKind.VALIDATION, message, data)


class InputFileError(EthSignError):
    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(ErrorKind.IO, message, data)


class CryptoError(EthSignError):
    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(ErrorKind.CRYPTO, message, data)


def classify_exception(e: Exception) -> EthSignError:
    """
    Map exceptions escaping library code into the error taxonomy.
    """
    if isinstance(e, EthSignError):
        return e
    if isinstance(e, OSError):
        path = getattr(e, "filename", None)
        reason = e.strerror or str(e)
        if path:
            return InputFileError(f"Cannot read '{path}': {reason}", path=str(path))
        return InputFileError(reason)

    return EthSignError(ErrorKind.INTERNAL, str(e) or type(e).__name__, {"type": type(e).__name__})
