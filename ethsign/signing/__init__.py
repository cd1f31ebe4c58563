from .base import LocalKeySigner, SignedTx, Signer
from .encrypted_keystore import EncryptedKeystoreSigner, prompt_passphrase
from .factory import get_signer, resolve_key_path
from .key_material import RAW_KEY_FILE_LENGTH, KeyKind, KeyMaterial, classify_key_material, load_key_material
from .raw_key import RawKeySigner, parse_private_key

__all__ = [
    "SignedTx",
    "Signer",
    "LocalKeySigner",
    "RawKeySigner",
    "EncryptedKeystoreSigner",
    "get_signer",
    "resolve_key_path",
    "prompt_passphrase",
    "parse_private_key",
    "KeyKind",
    "KeyMaterial",
    "RAW_KEY_FILE_LENGTH",
    "classify_key_material",
    "load_key_material",
]
