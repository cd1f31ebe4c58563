import json
from unittest.mock import patch

import pytest
from eth_account import Account

from ethsign.cli import build_parser, main
from ethsign.serializer import decode_signed_transaction

from conftest import PASSPHRASE, TOKEN_ADDRESS, ZERO_ADDRESS


def _decode(out):
    assert out.startswith("0x")
    return decode_signed_transaction(bytes.fromhex(out[2:]))


def test_ether_transfer_end_to_end(capsys, raw_key_file, expected_sender):
    argv = ["ether", "--to", ZERO_ADDRESS, "--key", str(raw_key_file), "--value", "0.05"]
    assert main(argv) == 0
    out = capsys.readouterr().out

    decoded = _decode(out)
    assert decoded.nonce == 0
    assert decoded.value == 5 * 10**16
    assert decoded.to == ZERO_ADDRESS
    assert decoded.chain_id == 1337
    assert decoded.gas == 100_000
    assert decoded.gas_price == 10**9
    assert decoded.data == b""
    assert Account.recover_transaction(out) == expected_sender

    # deterministic signatures (RFC 6979)
    assert main(argv) == 0
    assert capsys.readouterr().out == out


def test_output_has_no_trailing_newline(capsys, raw_key_file):
    main(["ether", "--to", ZERO_ADDRESS, "--key", str(raw_key_file)])
    assert not capsys.readouterr().out.endswith("\n")


def test_erc20_call_with_flags_in_any_position(capsys, raw_key_file):
    argv = [
        "call",
        "--to",
        TOKEN_ADDRESS,
        "transfer(address,uint256)",
        "--nonce",
        "7",
        ZERO_ADDRESS,
        "42",
        "--key",
        str(raw_key_file),
        "--chain",
        "5",
        "--gasPrice",
        "2.5",
        "--gasLimit",
        "60000",
    ]
    assert main(argv) == 0
    decoded = _decode(capsys.readouterr().out)
    assert decoded.to == TOKEN_ADDRESS
    assert decoded.nonce == 7
    assert decoded.chain_id == 5
    assert decoded.gas_price == 2_500_000_000
    assert decoded.gas == 60_000
    assert decoded.data[:4].hex() == "a9059cbb"
    assert int.from_bytes(decoded.data[-32:], "big") == 42


def test_deploy_end_to_end(capsys, raw_key_file, bin_file, abi_file):
    argv = ["deploy", "Token", "1000", "--abi", str(abi_file), "--bin", str(bin_file), "--key", str(raw_key_file)]
    assert main(argv) == 0
    decoded = _decode(capsys.readouterr().out)
    assert decoded.to is None
    assert decoded.data.startswith(bytes.fromhex("6080604052"))


def test_keystore_end_to_end(capsys, keystore_file, expected_sender):
    with patch("getpass.getpass", return_value=PASSPHRASE) as gp:
        assert main(["ether", "--to", ZERO_ADDRESS, "--keystore", str(keystore_file)]) == 0
    gp.assert_called_once()
    assert Account.recover_transaction(capsys.readouterr().out) == expected_sender


def test_validation_error_exit_code(capsys, raw_key_file, bin_file):
    argv = ["deploy", "--to", ZERO_ADDRESS, "--bin", str(bin_file), "--key", str(raw_key_file)]
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error[validation]: ")


def test_missing_key_is_reported_before_anything_else(capsys):
    assert main(["ether", "--to", ZERO_ADDRESS]) == 1
    assert "--key" in capsys.readouterr().err


def test_parse_error_reported(capsys, raw_key_file):
    argv = ["call", "f(uint8)", "256", "--to", TOKEN_ADDRESS, "--key", str(raw_key_file)]
    assert main(argv) == 1
    assert capsys.readouterr().err.startswith("error[parse]: ")


def test_missing_bin_file_is_io_error(capsys, raw_key_file, tmp_path):
    argv = ["deploy", "--bin", str(tmp_path / "none.bin"), "--key", str(raw_key_file)]
    assert main(argv) == 1
    assert capsys.readouterr().err.startswith("error[io]: ")


def test_wrong_passphrase_is_crypto_error(capsys, keystore_file):
    with patch("getpass.getpass", return_value="wrong"):
        assert main(["ether", "--to", ZERO_ADDRESS, "--key", str(keystore_file)]) == 1
    assert capsys.readouterr().err.startswith("error[crypto]: ")


def test_negative_value_rejected(capsys, raw_key_file):
    assert main(["ether", "--to", ZERO_ADDRESS, "--key", str(raw_key_file), "--value=-1"]) == 1
    assert "must not be negative" in capsys.readouterr().err


def test_unknown_command_is_usage_error():
    with pytest.raises(SystemExit) as e:
        main(["sweep"])
    assert e.value.code == 2


def test_environment_defaults(capsys, monkeypatch, raw_key_file):
    monkeypatch.setenv("ETHSIGN_CHAIN_ID", "10")
    monkeypatch.setenv("ETHSIGN_KEY", str(raw_key_file))
    assert main(["ether", "--to", ZERO_ADDRESS]) == 0
    assert _decode(capsys.readouterr().out).chain_id == 10


def test_debug_logs_go_to_stderr_as_json(capsys, raw_key_file):
    argv = ["ether", "--to", ZERO_ADDRESS, "--key", str(raw_key_file), "--log-level", "debug"]
    assert main(argv) == 0
    captured = capsys.readouterr()
    events = [json.loads(line)["event"] for line in captured.err.splitlines()]
    assert "command_classified" in events
    assert "transaction_signed" in events
    assert captured.out.startswith("0x")


def test_parser_accepts_flags_between_positionals():
    ns = build_parser().parse_intermixed_args(["call", "f(uint8)", "--to", TOKEN_ADDRESS, "1"])
    assert ns.args == ["f(uint8)", "1"]
    assert ns.to == TOKEN_ADDRESS


def test_invalid_utf8_string_argument_is_reported(capsys, raw_key_file):
    argv = ["call", "f(string)", "\udcff", "--to", TOKEN_ADDRESS, "--key", str(raw_key_file)]
    assert main(argv) == 1
    err = capsys.readouterr().err
    assert err.startswith("error[parse]: ")
    assert "Traceback" not in err


def test_deploy_with_function_signature_is_rejected(capsys, raw_key_file, bin_file):
    argv = ["deploy", "MyToken(uint256)", "5", "--bin", str(bin_file), "--key", str(raw_key_file)]
    assert main(argv) == 1
    assert capsys.readouterr().err.startswith("error[parse]: ")
