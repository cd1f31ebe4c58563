from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import rlp
from eth_utils import to_checksum_address
from rlp.exceptions import DecodingError

from .errors import ParseError
from .signing.base import SignedTx

LEGACY_FIELD_COUNT = 9


def to_hex(signed: SignedTx) -> str:
    return "0x" + bytes(signed.raw_transaction).hex()


@dataclass(frozen=True)
class DecodedTransaction:
    nonce: int
    gas_price: int
    gas: int
    to: Optional[str]
    value: int
    data: bytes
    v: int
    r: int
    s: int

    @property
    def chain_id(self) -> Optional[int]:
        # pre-EIP-155 signatures carry no chain id
        if self.v in (27, 28):
            return None
        return (self.v - 35) // 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "gas_price": self.gas_price,
            "gas": self.gas,
            "to": self.to,
            "value": self.value,
            "data_bytes": len(self.data),
            "chain_id": self.chain_id,
        }


def _rlp_uint(b: bytes) -> int:
    return int.from_bytes(b, "big")


def decode_signed_transaction(raw: bytes) -> DecodedTransaction:
    """
    Decode a signed legacy transaction ``rlp([nonce, gasPrice, gas, to, value, data, v, r, s])``.
    """
    if not raw or raw[0] < 0xC0:
        raise ParseError("Not a legacy RLP transaction")
    try:
        items = rlp.decode(raw)
    except DecodingError as e:
        raise ParseError(f"Invalid RLP transaction: {e}") from e
    if not isinstance(items, list) or len(items) != LEGACY_FIELD_COUNT:
        raise ParseError("Invalid legacy transaction: expected 9 fields")

    nonce, gas_price, gas, to, value, data, v, r, s = items
    return DecodedTransaction(
        nonce=_rlp_uint(nonce),
        gas_price=_rlp_uint(gas_price),
        gas=_rlp_uint(gas),
        to=to_checksum_address(to) if to else None,
        value=_rlp_uint(value),
        data=bytes(data),
        v=_rlp_uint(v),
        r=_rlp_uint(r),
        s=_rlp_uint(s),
    )
