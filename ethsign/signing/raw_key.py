from __future__ import annotations

from eth_account import Account
from eth_keys import keys
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import decode_hex

from ..errors import CryptoError
from .base import LocalKeySigner
from .key_material import KeyKind, KeyMaterial


def parse_private_key(data: bytes) -> keys.PrivateKey:
    """
    Decode hex key text into a secp256k1 private key.
    """
    try:
        raw = decode_hex(data.decode("ascii").strip())
    except (UnicodeDecodeError, ValueError) as e:
        raise CryptoError(f"Invalid private key: {e}") from e
    if len(raw) != 32:
        raise CryptoError(f"Invalid private key length: expected 32 bytes, got {len(raw)}")
    if not any(raw):
        raise CryptoError("Invalid private key: zero scalar")
    try:
        return keys.PrivateKey(raw)
    except (KeyValidationError, ValueError) as e:
        raise CryptoError(f"Invalid private key: {e}") from e


class RawKeySigner(LocalKeySigner):
    """
    Signer for a key file holding the private key as plain hex text.
    """

    def __init__(self, material: KeyMaterial) -> None:
        if material.kind != KeyKind.RAW_PRIVATE_KEY:
            raise CryptoError("RawKeySigner requires raw private key material")
        super().__init__(Account.from_key(parse_private_key(material.data)))
