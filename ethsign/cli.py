"""ethsign command-line entrypoint."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import EthSignError, classify_exception
from .observability import configure_logging
from .pipeline import compile_and_sign
from .settings import load_settings

EXAMPLES = """
examples:
  Sending ether:
    ethsign ether --to 0x0000000000000000000000000000000000000000 --key keyfile.json --value 0.05

  Transfer ERC-20 tokens:
    ethsign call "transfer(address,uint256)" 0xffffffffffffffffffffffffffffffffffffffff 42 \\
        --to 0x1111111111111111111111111111111111111111 --key keyfile.json

  Function call from a contract ABI:
    ethsign call funcName arg1 arg2 --to 0x0000000000000000000000000000000000000000 \\
        --abi contract.abi --key keyfile.txt

  Contract deployment, with constructor arguments:
    ethsign deploy arg1 arg2 --abi contract.abi --bin contract.bin --key keyfile.json
    ethsign deploy "constructor(string,uint256)" arg1 arg2 --bin contract.bin --key keyfile.json

  Array arguments are written as [a,b,c]; quote elements containing commas or spaces:
    ethsign call "setNames(string[])" '["alice smith","bob"]' --to 0x... --key keyfile.txt

key files:
  A 64-byte file is read as a hex private key. Any other file is treated as an
  encrypted keystore and the passphrase is prompted for on the terminal.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ethsign",
        description="Compile and sign an EVM transaction offline, printing the raw signed transaction as hex.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", choices=["ether", "call", "deploy"], help="transaction shape")
    parser.add_argument(
        "args",
        nargs="*",
        help="method signature (or ABI method name) followed by its arguments",
    )
    parser.add_argument("--abi", metavar="FILE", help="contract ABI JSON file")
    parser.add_argument("--bin", metavar="FILE", help="contract compiled bytecode file (hex)")
    parser.add_argument("--chain", metavar="N", help="chain id for EIP-155 signing (default 1337)")
    parser.add_argument("--key", metavar="FILE", help="raw hex private key or encrypted keystore file")
    parser.add_argument("--keystore", metavar="FILE", help="encrypted keystore file")
    parser.add_argument("--to", metavar="ADDRESS", help="recipient or contract address (not for deploy)")
    parser.add_argument("--value", metavar="ETHER", help="amount of ether to send (default 0)")
    parser.add_argument("--gasPrice", dest="gas_price", metavar="GWEI", help="gas price in gwei (default 1)")
    parser.add_argument("--gasLimit", dest="gas_limit", metavar="N", help="gas limit (default 100000)")
    parser.add_argument("--nonce", metavar="N", help="next nonce of the signing address (default 0)")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warning", "error"],
        help="stderr log level (default warning)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    namespace = build_parser().parse_intermixed_args(argv)
    try:
        settings = load_settings(namespace, os.environ)
        configure_logging(settings.log_level)
        raw_hex = compile_and_sign(settings)
    except (EthSignError, OSError) as e:
        err = classify_exception(e)
        sys.stderr.write(f"error[{err.kind.value}]: {err.message}\n")
        return 1
    sys.stdout.write(raw_hex)
    sys.stdout.flush()
    return 0
