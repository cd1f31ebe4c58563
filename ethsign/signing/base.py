from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import CryptoError


class SignedTx(Protocol):
    raw_transaction: bytes


class Signer(ABC):
    """
    A minimal signing interface for EVM transactions.
    """

    @abstractmethod
    def get_address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        raise NotImplementedError


class LocalKeySigner(Signer):
    """
    Signs in-process with a decoded private key (EIP-155 when a chain id is set).
    """

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    def get_address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: Dict[str, Any], *, chain_id: int | None = None) -> SignedTx:
        if chain_id is not None:
            tx = dict(tx)
            tx["chainId"] = chain_id
        try:
            return Account.sign_transaction(tx, self._account.key)
        except (TypeError, ValueError) as e:
            raise CryptoError(f"Transaction signing failed: {e}") from e
