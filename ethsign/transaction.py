"""
Command classification and unsigned transaction assembly.

| command | --to      | method token                         | call data                          |
|---------|-----------|--------------------------------------|------------------------------------|
| ether   | required  | n/a (one optional message argument)  | message bytes or empty             |
| call    | required  | required unless --abi is given       | selector + packed arguments        |
| deploy  | forbidden | optional ``constructor(...)``        | bytecode + packed constructor args |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from eth_utils import decode_hex, is_0x_prefixed, is_hex

from .abi import load_interface, looks_like_signature
from .calldata import InterfaceCallDataCompiler, SignatureCallDataCompiler
from .errors import InputFileError, ParseError, ValidationError
from .observability import log_event
from .settings import Settings

DEFAULT_CONSTRUCTOR = "constructor()"


class Command(Enum):
    TRANSFER = "ether"
    CALL = "call"
    DEPLOY = "deploy"


@dataclass(frozen=True)
class UnsignedTransaction:
    nonce: int
    to: Optional[str]
    value: int
    gas_price: int
    gas: int
    data: bytes
    chain_id: int

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

    def to_tx_dict(self) -> Dict[str, Any]:
        """
        Legacy (type 0) transaction dict in the shape eth_account signs.
        """
        tx: Dict[str, Any] = {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gas": self.gas,
            "value": self.value,
            "data": self.data,
            "chainId": self.chain_id,
        }
        if self.to is not None:
            tx["to"] = self.to
        return tx


def classify_command(settings: Settings) -> Command:
    try:
        command = Command(settings.command)
    except ValueError as e:
        raise ValidationError(
            f"Unknown command '{settings.command}' (expected ether, call or deploy)",
            command=settings.command,
        ) from e

    if command == Command.TRANSFER:
        if settings.recipient is None:
            raise ValidationError("flag --to is required when sending ether", command=command.value)
        if len(settings.args) > 1:
            raise ValidationError(
                f"ether accepts at most one message argument, got {len(settings.args)}",
                command=command.value,
            )
    elif command == Command.CALL:
        if settings.recipient is None:
            raise ValidationError("flag --to is required for contract calls", command=command.value)
        if not settings.args and settings.abi_path is None:
            raise ValidationError(
                "call requires a method signature or an --abi file",
                command=command.value,
            )
    else:
        if settings.bin_path is None:
            raise ValidationError("flag --bin is required for contract deployments", command=command.value)
        if settings.recipient is not None:
            raise ValidationError(
                "flag --to can't be set for contract deployments",
                command=command.value,
            )
        if settings.args and not looks_like_signature(settings.args[0]) and settings.abi_path is None:
            raise ValidationError(
                "deploy arguments need a constructor(...) signature or an --abi file",
                command=command.value,
            )

    log_event("command_classified", command=command.value, args=len(settings.args))
    return command


def assemble_transaction(settings: Settings, command: Optional[Command] = None) -> UnsignedTransaction:
    if command is None:
        command = classify_command(settings)
    data = compile_call_data(command, settings)
    log_event("calldata_compiled", command=command.value, data_bytes=len(data), selector=_selector_hex(command, data))
    return UnsignedTransaction(
        nonce=settings.nonce,
        to=None if command == Command.DEPLOY else settings.recipient,
        value=settings.value_wei,
        gas_price=settings.gas_price_wei,
        gas=settings.gas_limit,
        data=data,
        chain_id=settings.chain_id,
    )


def compile_call_data(command: Command, settings: Settings) -> bytes:
    args = settings.args
    if command == Command.TRANSFER:
        return message_bytes(args[0]) if args else b""

    if command == Command.CALL:
        if args and (settings.abi_path is None or looks_like_signature(args[0])):
            return SignatureCallDataCompiler().compile(args[0], args[1:])
        assert settings.abi_path is not None
        if not args:
            return b""
        interface = load_interface(settings.abi_path)
        return InterfaceCallDataCompiler(interface).compile(args[0], args[1:])

    assert settings.bin_path is not None
    bytecode = read_bytecode(settings.bin_path)
    if args and looks_like_signature(args[0]):
        ctor = SignatureCallDataCompiler(constructor=True).compile(args[0], args[1:])
    elif settings.abi_path is not None:
        ctor = InterfaceCallDataCompiler(load_interface(settings.abi_path), constructor=True).compile("", args)
    else:
        ctor = SignatureCallDataCompiler(constructor=True).compile(DEFAULT_CONSTRUCTOR, ())
    return bytecode + ctor


def message_bytes(arg: str) -> bytes:
    """
    Data attached to a plain ether transfer: ``0x``-prefixed hex is decoded,
    anything else is sent as UTF-8 text.
    """
    if is_0x_prefixed(arg) and is_hex(arg) and len(arg) % 2 == 0:
        return decode_hex(arg)
    try:
        return arg.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError(f"Invalid message {arg!r}: not valid UTF-8", value=arg) from e


def read_bytecode(path: Path) -> bytes:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputFileError(f"Cannot read bytecode file '{path}': {e.strerror or e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Bytecode file '{path}' is not hex text", path=str(path)) from e
    s = text.strip()
    if not s or s.lower() == "0x":
        raise ParseError(f"Bytecode file '{path}' is empty", path=str(path))
    try:
        return decode_hex(s)
    except ValueError as e:
        raise ParseError(f"Invalid bytecode hex in '{path}': {e}", path=str(path)) from e


def _selector_hex(command: Command, data: bytes) -> Optional[str]:
    if command != Command.CALL or len(data) < 4:
        return None
    return "0x" + data[:4].hex()
