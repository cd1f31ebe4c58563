"""
Invocation settings.

``load_settings`` turns parsed command-line flags (plus ``ETHSIGN_*`` environment
defaults) into one immutable Settings value. Every flag is validated here, so a
bad flag fails before any encoding or signing work starts.

Environment defaults (a flag always wins):
- ETHSIGN_CHAIN_ID: chain id for EIP-155 signing (default 1337)
- ETHSIGN_KEY / ETHSIGN_KEYSTORE: key file paths
- ETHSIGN_GAS_PRICE_GWEI: gas price in gwei (default 1)
- ETHSIGN_GAS_LIMIT: gas limit (default 100000)
- ETHSIGN_LOG_LEVEL: stderr log level (default warning)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from eth_utils import is_hex_address, to_checksum_address

from .errors import ValidationError
from .units import MAX_UINT64, decimal_to_wei, parse_uint

DEFAULT_CHAIN_ID = "1337"
DEFAULT_VALUE_ETHER = "0"
DEFAULT_GAS_PRICE_GWEI = "1"
DEFAULT_GAS_LIMIT = "100000"
DEFAULT_NONCE = "0"
DEFAULT_LOG_LEVEL = "warning"

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass(frozen=True)
class Settings:
    command: str
    args: Tuple[str, ...] = ()
    abi_path: Optional[Path] = None
    bin_path: Optional[Path] = None
    key_path: Optional[Path] = None
    keystore_path: Optional[Path] = None
    recipient: Optional[str] = None
    value_wei: int = 0
    gas_price_wei: int = 10**9
    gas_limit: int = 100_000
    nonce: int = 0
    chain_id: int = 1337
    log_level: str = DEFAULT_LOG_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "args": len(self.args),
            "abi": str(self.abi_path) if self.abi_path else None,
            "bin": str(self.bin_path) if self.bin_path else None,
            "key": str(self.key_path) if self.key_path else None,
            "keystore": str(self.keystore_path) if self.keystore_path else None,
            "to": self.recipient,
            "value_wei": self.value_wei,
            "gas_price_wei": self.gas_price_wei,
            "gas_limit": self.gas_limit,
            "nonce": self.nonce,
            "chain_id": self.chain_id,
        }


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    v = environ.get(name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def _path(raw: Optional[str]) -> Optional[Path]:
    if not raw:
        return None
    return Path(raw).expanduser()


def _recipient(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    v = raw.strip()
    if not is_hex_address(v):
        raise ValidationError(f"Invalid address for --to: '{raw}'", flag="to", value=raw)
    return to_checksum_address(v)


def load_settings(namespace: Any, environ: Mapping[str, str]) -> Settings:
    """
    Build Settings from an argparse namespace and an environment mapping.
    """
    chain_raw = namespace.chain or _env(environ, "ETHSIGN_CHAIN_ID") or DEFAULT_CHAIN_ID
    gas_price_raw = namespace.gas_price or _env(environ, "ETHSIGN_GAS_PRICE_GWEI") or DEFAULT_GAS_PRICE_GWEI
    gas_limit_raw = namespace.gas_limit or _env(environ, "ETHSIGN_GAS_LIMIT") or DEFAULT_GAS_LIMIT
    log_level = (namespace.log_level or _env(environ, "ETHSIGN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).lower()
    if log_level not in LOG_LEVELS:
        raise ValidationError(f"Invalid log level '{log_level}'", flag="log-level", value=log_level)

    return Settings(
        command=str(namespace.command or "").strip().lower(),
        args=tuple(namespace.args or ()),
        abi_path=_path(namespace.abi),
        bin_path=_path(namespace.bin),
        key_path=_path(namespace.key or _env(environ, "ETHSIGN_KEY")),
        keystore_path=_path(namespace.keystore or _env(environ, "ETHSIGN_KEYSTORE")),
        recipient=_recipient(namespace.to),
        value_wei=decimal_to_wei(namespace.value or DEFAULT_VALUE_ETHER, "ether", name="value"),
        gas_price_wei=decimal_to_wei(gas_price_raw, "gwei", name="gasPrice"),
        gas_limit=parse_uint(gas_limit_raw, name="gasLimit"),
        nonce=parse_uint(namespace.nonce or DEFAULT_NONCE, name="nonce", maximum=MAX_UINT64),
        chain_id=parse_uint(chain_raw, name="chain"),
        log_level=log_level,
    )
