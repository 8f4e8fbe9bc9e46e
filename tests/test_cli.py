"""
Command line interface tests (local mode, no server).
"""

import json

import pytest

from offchain_signer.cli import build_parser, main


@pytest.fixture
def key_hex(identity):
    return identity.to_hex()


class TestKeygen:

    def test_keygen(self, capsys):
        assert main(["keygen"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert len(bytes.fromhex(out["private_key_hex"])) == 32
        assert len(bytes.fromhex(out["public_key_hex"])) == 33
        assert out["address"].startswith("cosmos1")

    def test_keygen_prefix(self, capsys):
        assert main(["--prefix", "osmo", "keygen"]) == 0
        assert json.loads(capsys.readouterr().out)["address"].startswith("osmo1")


class TestSignVerify:

    @pytest.mark.parametrize("fmt", ["json", "binary"])
    def test_sign_then_verify(self, tmp_path, capsysbinary, key_hex, fmt):
        path = tmp_path / f"envelope.{fmt}"
        assert main(["sign", "--key-hex", key_hex, "--data", "hello", "--format", fmt, "--output", str(path)]) == 0
        assert path.stat().st_size > 0

        assert main(["verify", str(path), "--format", fmt]) == 0
        assert capsysbinary.readouterr().out.endswith(b"valid data:hello\n")

    def test_wrong_format_fails(self, tmp_path, capsysbinary, key_hex):
        path = tmp_path / "envelope.bin"
        main(["sign", "--key-hex", key_hex, "--data", "hello", "--format", "binary", "--output", str(path)])
        assert main(["verify", str(path), "--format", "json"]) == 1
        assert b"MALFORMED_ENVELOPE" in capsysbinary.readouterr().err

    def test_tampered_file_fails(self, tmp_path, capsysbinary, key_hex):
        path = tmp_path / "envelope.json"
        main(["sign", "--key-hex", key_hex, "--data", "hello", "--output", str(path)])
        doc = json.loads(path.read_text())
        doc["body"]["messages"][0]["data"] = "Z29vZGJ5ZQ=="
        path.write_text(json.dumps(doc))
        assert main(["verify", str(path)]) == 1
        assert b"INVALID_SIGNATURE" in capsysbinary.readouterr().err

    def test_invalid_key(self, capsys):
        assert main(["sign", "--key-hex", "01" * 31, "--data", "hello"]) == 1
        assert "INVALID_KEY_FORMAT" in capsys.readouterr().err

    def test_invalid_sign_mode(self, capsys, key_hex):
        assert main(["--sign-mode", "SIGN_MODE_TEXTUAL", "sign", "--key-hex", key_hex, "--data", "x"]) == 2

    def test_chain_id_must_match(self, tmp_path, capsysbinary, key_hex):
        path = tmp_path / "envelope.json"
        main(["--chain-id", "chain-a", "sign", "--key-hex", key_hex, "--data", "hello", "--output", str(path)])
        assert main(["--chain-id", "chain-a", "verify", str(path)]) == 0
        assert main(["--chain-id", "chain-b", "verify", str(path)]) == 1


class TestParser:

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_serve_defaults(self):
        args = build_parser().parse_args(["serve"])
        assert args.host == "0.0.0.0"
        assert args.port == 8080


class TestServe:

    def test_serve_builds_app(self, monkeypatch):
        calls = {}

        def fake_run(app, host, port, log_level):
            calls.update(app=app, host=host, port=port, log_level=log_level)

        monkeypatch.setattr("uvicorn.run", fake_run)
        assert main(["--chain-id", "test-1", "serve", "--port", "9000"]) == 0
        assert calls["host"] == "0.0.0.0"
        assert calls["port"] == 9000
        assert calls["log_level"] == "info"
        assert calls["app"].state.config.signing.chain_id == "test-1"
