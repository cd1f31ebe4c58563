from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from ..errors import ValidationError
from ..observability import log_event
from ..settings import Settings
from .base import Signer
from .encrypted_keystore import EncryptedKeystoreSigner, PassphrasePrompt, prompt_passphrase
from .key_material import KeyKind, KeyMaterial, load_key_material
from .raw_key import RawKeySigner


def resolve_key_path(settings: Settings) -> Path:
    """
    --keystore takes precedence over --key; one of them is required.
    """
    path = settings.keystore_path or settings.key_path
    if path is None:
        raise ValidationError("flag --key (or --keystore) is required", flag="key")
    return path


def get_signer(settings: Settings, *, passphrase_prompt: PassphrasePrompt = prompt_passphrase) -> Signer:
    """
    Select signer based on the size of the designated key file.

    Supported:
    - raw_private_key: 64 hex characters
    - encrypted_keystore: anything else, decrypted with a prompted passphrase
    """
    material = load_key_material(resolve_key_path(settings))
    log_event(
        "key_material_classified",
        kind=material.kind.value,
        path=str(material.path) if material.path else None,
        size=len(material.data),
    )

    builders: Dict[KeyKind, Callable[[KeyMaterial], Signer]] = {
        KeyKind.RAW_PRIVATE_KEY: RawKeySigner,
        KeyKind.ENCRYPTED_KEYSTORE: lambda m: EncryptedKeystoreSigner(m, passphrase_prompt),
    }
    return builders[material.kind](material)
