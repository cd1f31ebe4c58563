"""
ethsign: offline compiler and signer for EVM transactions.
"""

from .errors import CryptoError, EthSignError, InputFileError, ParseError, UnknownMethod, ValidationError
from .pipeline import compile_and_sign
from .settings import Settings, load_settings
from .transaction import Command, UnsignedTransaction, assemble_transaction, classify_command

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CryptoError",
    "EthSignError",
    "InputFileError",
    "ParseError",
    "Settings",
    "UnknownMethod",
    "UnsignedTransaction",
    "ValidationError",
    "assemble_transaction",
    "classify_command",
    "compile_and_sign",
    "load_settings",
]
