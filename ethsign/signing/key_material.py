"""
Key file classification.

A file whose size is exactly 64 bytes is taken to be a hex-encoded 32-byte
private key; anything else is treated as an encrypted JSON keystore. A raw key
saved with a trailing newline or a ``0x`` prefix is therefore classified as a
keystore and fails to decrypt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ..errors import InputFileError

RAW_KEY_FILE_LENGTH = 64


class KeyKind(Enum):
    RAW_PRIVATE_KEY = "raw_private_key"
    ENCRYPTED_KEYSTORE = "encrypted_keystore"


@dataclass(frozen=True)
class KeyMaterial:
    kind: KeyKind
    data: bytes = field(repr=False)
    path: Optional[Path] = None


def classify_key_material(data: bytes, path: Optional[Path] = None) -> KeyMaterial:
    if len(data) == RAW_KEY_FILE_LENGTH:
        return KeyMaterial(KeyKind.RAW_PRIVATE_KEY, data, path)
    return KeyMaterial(KeyKind.ENCRYPTED_KEYSTORE, data, path)


def load_key_material(path: Path) -> KeyMaterial:
    p = Path(path).expanduser()
    try:
        data = p.read_bytes()
    except OSError as e:
        raise InputFileError(f"Cannot read key file '{p}': {e.strerror or e}", path=str(p)) from e
    return classify_key_material(data, p)
