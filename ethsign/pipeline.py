from __future__ import annotations

from .observability import log_event
from .serializer import decode_signed_transaction, to_hex
from .settings import Settings
from .signing import get_signer, prompt_passphrase, resolve_key_path
from .signing.encrypted_keystore import PassphrasePrompt
from .transaction import assemble_transaction, classify_command


def compile_and_sign(settings: Settings, *, passphrase_prompt: PassphrasePrompt = prompt_passphrase) -> str:
    """
    Build, sign and serialize the transaction described by ``settings``.

    All flag validation happens before call data is compiled; nothing is returned
    unless signing succeeded.
    """
    command = classify_command(settings)
    resolve_key_path(settings)

    tx = assemble_transaction(settings, command)
    signer = get_signer(settings, passphrase_prompt=passphrase_prompt)
    signed = signer.sign_transaction(tx.to_tx_dict(), chain_id=tx.chain_id)

    decoded = decode_signed_transaction(bytes(signed.raw_transaction))
    log_event("transaction_signed", command=command.value, sender=signer.get_address(), **decoded.to_dict())
    return to_hex(signed)
