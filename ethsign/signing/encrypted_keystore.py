from __future__ import annotations

import getpass
import json
import sys
from typing import Callable

from eth_account import Account

from ..errors import CryptoError
from .base import LocalKeySigner
from .key_material import KeyKind, KeyMaterial

PassphrasePrompt = Callable[[], str]


def prompt_passphrase() -> str:
    """
    Read the keystore passphrase from the controlling terminal without echo.
    """
    try:
        return getpass.getpass("Passphrase: ", stream=sys.stderr)
    except EOFError as e:
        raise CryptoError("No passphrase supplied") from e


class EncryptedKeystoreSigner(LocalKeySigner):
    """
    Decrypts a Web3 Secret Storage (geth) keystore with an interactively captured
    passphrase. One attempt only: a wrong passphrase is a CryptoError.
    """

    def __init__(self, material: KeyMaterial, passphrase_prompt: PassphrasePrompt = prompt_passphrase) -> None:
        if material.kind != KeyKind.ENCRYPTED_KEYSTORE:
            raise CryptoError("EncryptedKeystoreSigner requires keystore material")
        try:
            keystore = json.loads(material.data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CryptoError(f"Corrupt keystore file: {e}") from e
        if not isinstance(keystore, dict):
            raise CryptoError("Corrupt keystore file: expected a JSON object")

        password = passphrase_prompt()
        try:
            pk_bytes = Account.decrypt(keystore, password)
        except (KeyError, TypeError, ValueError) as e:
            raise CryptoError(f"Unable to decrypt keystore: {e}") from e
        super().__init__(Account.from_key(pk_bytes))
