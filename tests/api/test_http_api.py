"""
HTTP API tests for /sign, /verify and /health.

1. /sign then /verify of "hello" yields "valid data:hello" in both encodings
2. Domain failures are structured 400 bodies
3. Request body problems are plain-text 400 bodies
4. Unknown content types fail closed
"""

import base64
import json

import pytest
from fastapi.testclient import TestClient

from offchain_signer import __version__
from offchain_signer.api.app import create_app
from offchain_signer.config import ServerConfig

JSON = "application/json"
PROTOBUF = "application/protobuf"


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def key_b64(private_key_bytes):
    return base64.b64encode(private_key_bytes).decode()


def _sign(client, key_b64, data="hello", accept=None):
    headers = {"Accept": accept} if accept else {}
    return client.post("/sign", json={"private_key": key_b64, "data": data}, headers=headers)


def _verify(client, body, content_type):
    headers = {"Content-Type": content_type} if content_type else {}
    return client.post("/verify", content=body, headers=headers)


def _assert_structured(response, kind):
    assert response.status_code == 400
    assert response.headers["content-type"].startswith(JSON)
    body = response.json()
    assert body["kind"] == kind
    assert body["codespace"] == "offchain"
    return body


def _assert_plain(response):
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    return response.text


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "offchain-signer", "version": __version__}


class TestSignVerifyFlow:
    """End-to-end sign then verify."""

    def test_hello_json(self, client, key_b64):
        signed = _sign(client, key_b64)
        assert signed.status_code == 200
        assert signed.headers["content-type"].startswith(JSON)
        assert signed.json()["body"]["messages"][0]["signer"].startswith("cosmos1")

        verified = _verify(client, signed.content, JSON)
        assert verified.status_code == 200
        assert verified.content == b"valid data:hello"

    def test_hello_protobuf(self, client, key_b64):
        signed = _sign(client, key_b64, accept=PROTOBUF)
        assert signed.status_code == 200
        assert signed.headers["content-type"].startswith(PROTOBUF)

        verified = _verify(client, signed.content, PROTOBUF)
        assert verified.status_code == 200
        assert verified.content == b"valid data:hello"

    def test_content_type_parameters_ignored(self, client, key_b64):
        signed = _sign(client, key_b64)
        verified = _verify(client, signed.content, "application/json; charset=utf-8")
        assert verified.content == b"valid data:hello"

    @pytest.mark.parametrize("accept", ["*/*", "application/*", "application/json", "text/html, application/json;q=0.9"])
    def test_json_accept_variants(self, client, key_b64, accept):
        signed = _sign(client, key_b64, accept=accept)
        assert signed.status_code == 200
        assert signed.headers["content-type"].startswith(JSON)

    def test_private_key_as_byte_array(self, client, private_key_bytes):
        signed = client.post("/sign", json={"private_key": list(private_key_bytes), "data": "hello"})
        assert signed.status_code == 200
        assert _verify(client, signed.content, JSON).content == b"valid data:hello"

    def test_same_signer_for_both_key_forms(self, client, key_b64, private_key_bytes):
        a = _sign(client, key_b64).json()
        b = client.post("/sign", json={"private_key": list(private_key_bytes), "data": "hello"}).json()
        assert a["body"] == b["body"]
        assert a["auth_info"] == b["auth_info"]

    def test_unicode_data(self, client, key_b64):
        signed = _sign(client, key_b64, data="héllo wörld")
        assert _verify(client, signed.content, JSON).content == "valid data:héllo wörld".encode("utf-8")

    def test_lone_surrogate_replaced(self, client, key_b64):
        """An unpaired surrogate escape is signed as U+FFFD."""
        body = '{"private_key": "%s", "data": "a\\ud800b"}' % key_b64
        signed = client.post("/sign", content=body.encode(), headers={"Content-Type": JSON})
        assert signed.status_code == 200
        assert _verify(client, signed.content, JSON).content == "valid data:a\ufffdb".encode("utf-8")

    def test_surrogate_pair_kept(self, client, key_b64):
        body = '{"private_key": "%s", "data": "\\ud83d\\ude00"}' % key_b64
        signed = client.post("/sign", content=body.encode(), headers={"Content-Type": JSON})
        assert _verify(client, signed.content, JSON).content == "valid data:\U0001F600".encode("utf-8")


class TestSignFailures:

    @pytest.mark.parametrize("length", [31, 33])
    def test_wrong_key_length(self, client, length):
        response = _sign(client, base64.b64encode(b"\x01" * length).decode())
        body = _assert_structured(response, "INVALID_KEY_FORMAT")
        assert body["details"] == {"length": length}

    def test_zero_key(self, client):
        _assert_structured(_sign(client, base64.b64encode(bytes(32)).decode()), "INVALID_KEY_FORMAT")

    def test_empty_data(self, client, key_b64):
        _assert_structured(_sign(client, key_b64, data=""), "EMPTY_PAYLOAD")

    def test_unsupported_accept(self, client, key_b64):
        _assert_structured(_sign(client, key_b64, accept="text/html"), "UNSUPPORTED_CONTENT_TYPE")

    def test_invalid_json_body(self, client):
        text = _assert_plain(client.post("/sign", content=b"{not json", headers={"Content-Type": JSON}))
        assert "invalid JSON" in text

    def test_missing_field(self, client, key_b64):
        text = _assert_plain(client.post("/sign", json={"private_key": key_b64}))
        assert "data" in text

    def test_invalid_base64_key(self, client):
        text = _assert_plain(client.post("/sign", json={"private_key": "***", "data": "hello"}))
        assert "base64" in text

    def test_byte_array_out_of_range(self, client):
        _assert_plain(client.post("/sign", json={"private_key": [256] * 32, "data": "hello"}))

    def test_non_string_data(self, client, key_b64):
        _assert_plain(client.post("/sign", json={"private_key": key_b64, "data": 5}))

    def test_body_not_object(self, client):
        _assert_plain(client.post("/sign", json=["hello"]))


class TestVerifyFailures:

    def test_binary_declared_as_json(self, client, key_b64):
        """A protobuf envelope labelled as JSON is malformed."""
        signed = _sign(client, key_b64, accept=PROTOBUF)
        _assert_structured(_verify(client, signed.content, JSON), "MALFORMED_ENVELOPE")

    def test_json_declared_as_protobuf(self, client, key_b64):
        signed = _sign(client, key_b64)
        _assert_structured(_verify(client, signed.content, PROTOBUF), "MALFORMED_ENVELOPE")

    @pytest.mark.parametrize("content_type", [None, "text/plain", "application/xml"])
    def test_unknown_content_type(self, client, key_b64, content_type):
        signed = _sign(client, key_b64)
        _assert_structured(_verify(client, signed.content, content_type), "UNSUPPORTED_CONTENT_TYPE")

    def test_tampered_signature(self, client, key_b64):
        doc = _sign(client, key_b64).json()
        sig = bytearray(base64.b64decode(doc["signatures"][0]))
        sig[0] ^= 0x01
        doc["signatures"][0] = base64.b64encode(bytes(sig)).decode()
        _assert_structured(_verify(client, json.dumps(doc).encode(), JSON), "INVALID_SIGNATURE")

    def test_tampered_data(self, client, key_b64):
        doc = _sign(client, key_b64).json()
        doc["body"]["messages"][0]["data"] = base64.b64encode(b"goodbye").decode()
        _assert_structured(_verify(client, json.dumps(doc).encode(), JSON), "INVALID_SIGNATURE")

    def test_tampered_signer(self, client, key_b64, other_identity):
        other = _sign(client, base64.b64encode(other_identity.to_bytes()).decode()).json()
        doc = _sign(client, key_b64).json()
        doc["body"]["messages"][0]["signer"] = other["body"]["messages"][0]["signer"]
        _assert_structured(_verify(client, json.dumps(doc).encode(), JSON), "SIGNER_MISMATCH")

    def test_extra_signature(self, client, key_b64):
        doc = _sign(client, key_b64).json()
        doc["signatures"].append(doc["signatures"][0])
        _assert_structured(_verify(client, json.dumps(doc).encode(), JSON), "MALFORMED_SIGNED_ENVELOPE")

    def test_memo_rejected(self, client, key_b64):
        doc = _sign(client, key_b64).json()
        doc["body"]["memo"] = "note"
        _assert_structured(_verify(client, json.dumps(doc).encode(), JSON), "MALFORMED_SIGNED_ENVELOPE")


class TestBodyLimit:

    def test_oversized_body(self, key_b64):
        client = TestClient(create_app(ServerConfig(max_body_bytes=64)))
        response = _sign(client, key_b64, data="x" * 200)
        body = _assert_structured(response, "IO_READ_FAILURE")
        assert body["details"] == {"limit": 64}

    def test_oversized_verify_body(self):
        client = TestClient(create_app(ServerConfig(max_body_bytes=16)))
        _assert_structured(_verify(client, b"{" + b" " * 100 + b"}", JSON), "IO_READ_FAILURE")
