import json
import logging
import os
import sys

import pytest
from eth_account import Account

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ethsign.observability.logging import LOGGER_NAME
from ethsign.settings import Settings

PRIVATE_KEY_HEX = "4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
PASSPHRASE = "correct horse"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
TOKEN_ADDRESS = "0x1111111111111111111111111111111111111111"

ERC20_ABI = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "supply", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint"},
        ],
    },
    {
        "type": "function",
        "name": "setNames",
        "inputs": [
            {"name": "names", "type": "string[]"},
            {"name": "label", "type": "string"},
        ],
    },
    {"type": "event", "name": "Transfer", "inputs": []},
]


@pytest.fixture(autouse=True)
def _clean_ethsign_env(monkeypatch):
    for k in list(os.environ.keys()):
        if k.startswith("ETHSIGN_"):
            monkeypatch.delenv(k, raising=False)


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def expected_sender():
    return Account.from_key("0x" + PRIVATE_KEY_HEX).address


@pytest.fixture
def raw_key_file(tmp_path):
    p = tmp_path / "key.txt"
    # exactly 64 bytes: no trailing newline
    p.write_text(PRIVATE_KEY_HEX, encoding="utf-8")
    return p


@pytest.fixture
def keystore_file(tmp_path):
    keystore = Account.encrypt("0x" + PRIVATE_KEY_HEX, PASSPHRASE, kdf="pbkdf2", iterations=1024)
    p = tmp_path / "keystore.json"
    p.write_text(json.dumps(keystore), encoding="utf-8")
    return p


@pytest.fixture
def abi_file(tmp_path):
    p = tmp_path / "token.abi"
    p.write_text(json.dumps(ERC20_ABI), encoding="utf-8")
    return p


@pytest.fixture
def bin_file(tmp_path):
    p = tmp_path / "token.bin"
    p.write_text("0x6080604052\n", encoding="utf-8")
    return p


@pytest.fixture
def make_settings(raw_key_file):
    def _make(**overrides):
        fields = {"command": "ether", "recipient": ZERO_ADDRESS, "key_path": raw_key_file}
        fields.update(overrides)
        return Settings(**fields)

    return _make
