"""
Envelope Codec

Serializes signed envelopes to and from two wire formats and produces the
canonical signing payload.

Wire formats:
- JSON: the Cosmos ``Tx`` JSON shape (``body``, ``auth_info``,
  ``signatures``). 64-bit integers are decimal strings, bytes are base64,
  addresses are bech32 and ``Any`` values carry an ``@type`` key.
- Binary: protobuf ``TxRaw { body_bytes = 1; auth_info_bytes = 2;
  repeated signatures = 3 }`` with nested ``TxBody`` and ``AuthInfo``.

Signing payload:
- ``SIGN_MODE_DIRECT``: protobuf ``SignDoc { body_bytes = 1;
  auth_info_bytes = 2; chain_id = 3; account_number = 4 }``.
- ``SIGN_MODE_LEGACY_AMINO_JSON``: canonical JSON ``StdSignDoc``.

The body and auth info bytes that enter the payload are always re-encoded
from the decoded model, never copied from the transport, so an envelope
signs identically whichever wire format carried it.

Decoders fail closed: unknown fields, wrong types, duplicates, truncation and
unsupported extensions all raise ``MalformedEnvelopeError``.
"""

from __future__ import annotations
import base64
import binascii
import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from ..canonjson import dumps_canonical_bytes
from ..config import SigningConfig
from ..runtime.errors import MalformedEnvelopeError, UnsupportedContentTypeError
from ..tx.types import (
    MSG_SIGN_DATA_AMINO_NAME,
    MSG_SIGN_DATA_TYPE_URL,
    SECP256K1_PUBKEY_TYPE_URL,
    Coin,
    Envelope,
    Fee,
    MsgSignData,
    SignedEnvelope,
    SignerInfo,
    SignMode,
)
from .address import from_bech32, to_bech32
from .reader import BinaryReader
from .writer import MAX_UINT64, WIRE_LEN, WIRE_VARINT, BinaryWriter


JSON_CONTENT_TYPE = "application/json"
PROTOBUF_CONTENT_TYPE = "application/protobuf"

# Field schemas: field number -> (name, wire type, repeated)
_MSG_SIGN_DATA_FIELDS = {1: ("signer", WIRE_LEN, False), 2: ("data", WIRE_LEN, False)}
_ANY_FIELDS = {1: ("type_url", WIRE_LEN, False), 2: ("value", WIRE_LEN, False)}
_TX_BODY_FIELDS = {
    1: ("messages", WIRE_LEN, True),
    2: ("memo", WIRE_LEN, False),
    3: ("timeout_height", WIRE_VARINT, False),
    1023: ("extension_options", WIRE_LEN, True),
    2047: ("non_critical_extension_options", WIRE_LEN, True),
}
_PUBKEY_FIELDS = {1: ("key", WIRE_LEN, False)}
_MODE_INFO_FIELDS = {1: ("single", WIRE_LEN, False), 2: ("multi", WIRE_LEN, False)}
_MODE_INFO_SINGLE_FIELDS = {1: ("mode", WIRE_VARINT, False)}
_SIGNER_INFO_FIELDS = {
    1: ("public_key", WIRE_LEN, False),
    2: ("mode_info", WIRE_LEN, False),
    3: ("sequence", WIRE_VARINT, False),
}
_COIN_FIELDS = {1: ("denom", WIRE_LEN, False), 2: ("amount", WIRE_LEN, False)}
_FEE_FIELDS = {
    1: ("amount", WIRE_LEN, True),
    2: ("gas_limit", WIRE_VARINT, False),
    3: ("payer", WIRE_LEN, False),
    4: ("granter", WIRE_LEN, False),
}
_AUTH_INFO_FIELDS = {1: ("signer_infos", WIRE_LEN, True), 2: ("fee", WIRE_LEN, False)}
_TX_RAW_FIELDS = {
    1: ("body_bytes", WIRE_LEN, False),
    2: ("auth_info_bytes", WIRE_LEN, False),
    3: ("signatures", WIRE_LEN, True),
}


def media_type(content_type: Optional[str]) -> str:
    """Media type of a Content-Type header value, lowercased, parameters dropped."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class EnvelopeCodec:
    """
    JSON and binary codec for signed envelopes.

    One instance is created at startup from the ``SigningConfig`` and shared
    by the signer, verifier and HTTP layer. Instances hold no mutable state.
    """

    def __init__(self, config: SigningConfig):
        self.config = config

    # ------------------------------------------------------------------
    # Content-type routing
    # ------------------------------------------------------------------

    def decoder_for(self, content_type: Optional[str]) -> Callable[[bytes], SignedEnvelope]:
        """
        Select the decoder for a declared content type.

        Raises:
            UnsupportedContentTypeError: For anything other than JSON or protobuf
        """
        kind = media_type(content_type)
        if kind == JSON_CONTENT_TYPE:
            return self.decode_json
        if kind == PROTOBUF_CONTENT_TYPE:
            return self.decode_binary
        raise UnsupportedContentTypeError(
            f"unknown content type: {content_type or ''}",
            details={"supported": [JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE]},
        )

    def encoder_for(self, content_type: Optional[str]) -> Callable[[SignedEnvelope], bytes]:
        """
        Select the encoder for a content type.

        Raises:
            UnsupportedContentTypeError: For anything other than JSON or protobuf
        """
        kind = media_type(content_type)
        if kind == JSON_CONTENT_TYPE:
            return self.encode_json
        if kind == PROTOBUF_CONTENT_TYPE:
            return self.encode_binary
        raise UnsupportedContentTypeError(
            f"unknown content type: {content_type or ''}",
            details={"supported": [JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE]},
        )

    def decode(self, data: bytes, content_type: Optional[str]) -> SignedEnvelope:
        """Decode ``data`` with the decoder selected by ``content_type``."""
        return self.decoder_for(content_type)(data)

    # ------------------------------------------------------------------
    # Canonical signing payload
    # ------------------------------------------------------------------

    def body_bytes(self, envelope: Envelope) -> bytes:
        """Deterministic protobuf encoding of the envelope body."""
        w = BinaryWriter()
        for msg in envelope.messages:
            w.field_message(1, _encode_any(MSG_SIGN_DATA_TYPE_URL, _encode_msg_sign_data(msg)))
        w.field_string(2, envelope.memo)
        w.field_uvarint(3, envelope.timeout_height)
        return w.to_bytes()

    def auth_info_bytes(self, envelope: Envelope, signer_infos: Iterable[SignerInfo]) -> bytes:
        """Deterministic protobuf encoding of the auth info."""
        w = BinaryWriter()
        for info in signer_infos:
            w.field_message(1, _encode_signer_info(info))
        w.field_message(2, _encode_fee(envelope.fee))
        return w.to_bytes()

    def sign_bytes(self, envelope: Envelope, signer_info: SignerInfo) -> bytes:
        """
        Canonical signing payload for one signer.

        A pure function of the envelope, the signer info (public key, mode,
        sequence) and the signing config (chain id, account number).

        Args:
            envelope: The unsigned envelope
            signer_info: The lone signer's info, including the mode tag

        Returns:
            Bytes to hash and sign

        Raises:
            MalformedEnvelopeError: If the mode has no canonicalization rule
        """
        if signer_info.mode == SignMode.SIGN_MODE_DIRECT:
            w = BinaryWriter()
            w.field_bytes(1, self.body_bytes(envelope))
            w.field_bytes(2, self.auth_info_bytes(envelope, (signer_info,)))
            w.field_string(3, self.config.chain_id)
            w.field_uvarint(4, self.config.account_number)
            return w.to_bytes()
        if signer_info.mode == SignMode.SIGN_MODE_LEGACY_AMINO_JSON:
            return dumps_canonical_bytes(self._std_sign_doc(envelope, signer_info))
        raise MalformedEnvelopeError(f"unsupported sign mode: {signer_info.mode.name}")

    def _std_sign_doc(self, envelope: Envelope, signer_info: SignerInfo) -> Dict[str, Any]:
        fee: Dict[str, Any] = {
            "amount": [{"amount": c.amount, "denom": c.denom} for c in envelope.fee.amount],
            "gas": str(envelope.fee.gas_limit),
        }
        if envelope.fee.payer:
            fee["payer"] = envelope.fee.payer
        if envelope.fee.granter:
            fee["granter"] = envelope.fee.granter
        doc: Dict[str, Any] = {
            "account_number": str(self.config.account_number),
            "chain_id": self.config.chain_id,
            "fee": fee,
            "memo": envelope.memo,
            "msgs": [
                {
                    "type": MSG_SIGN_DATA_AMINO_NAME,
                    "value": {
                        "data": _b64(msg.data),
                        "signer": to_bech32(msg.signer, self.config.bech32_prefix),
                    },
                }
                for msg in envelope.messages
            ],
            "sequence": str(signer_info.sequence),
        }
        if envelope.timeout_height:
            doc["timeout_height"] = str(envelope.timeout_height)
        return doc

    # ------------------------------------------------------------------
    # Binary
    # ------------------------------------------------------------------

    def encode_binary(self, signed: SignedEnvelope) -> bytes:
        """Encode a signed envelope as protobuf ``TxRaw``."""
        w = BinaryWriter()
        w.field_message(1, self.body_bytes(signed.envelope))
        w.field_message(2, self.auth_info_bytes(signed.envelope, signed.signer_infos))
        for sig in signed.signatures:
            w.field_bytes(3, sig, always=True)
        return w.to_bytes()

    def decode_binary(self, data: bytes) -> SignedEnvelope:
        """
        Decode a protobuf ``TxRaw``.

        Raises:
            MalformedEnvelopeError: On any structural problem
        """
        raw = _parse(data, _TX_RAW_FIELDS, "TxRaw")
        if "body_bytes" not in raw:
            raise MalformedEnvelopeError("missing body_bytes")
        if "auth_info_bytes" not in raw:
            raise MalformedEnvelopeError("missing auth_info_bytes")

        body = _parse(raw["body_bytes"], _TX_BODY_FIELDS, "TxBody")
        if body.get("extension_options") or body.get("non_critical_extension_options"):
            raise MalformedEnvelopeError("extension options are not supported")
        messages = tuple(_decode_msg_any(m) for m in body.get("messages", []))

        auth = _parse(raw["auth_info_bytes"], _AUTH_INFO_FIELDS, "AuthInfo")
        signer_infos = tuple(_decode_signer_info(s) for s in auth.get("signer_infos", []))
        fee = _decode_fee(auth["fee"]) if "fee" in auth else Fee()

        return _build_signed(
            messages=messages,
            memo=_utf8(body.get("memo", b""), "memo"),
            timeout_height=body.get("timeout_height", 0),
            fee=fee,
            signer_infos=signer_infos,
            signatures=tuple(raw.get("signatures", [])),
        )

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def to_json_dict(self, signed: SignedEnvelope) -> Dict[str, Any]:
        """JSON-compatible dictionary form of a signed envelope."""
        env = signed.envelope
        prefix = self.config.bech32_prefix
        return {
            "body": {
                "messages": [
                    {
                        "@type": MSG_SIGN_DATA_TYPE_URL,
                        "signer": to_bech32(msg.signer, prefix),
                        "data": _b64(msg.data),
                    }
                    for msg in env.messages
                ],
                "memo": env.memo,
                "timeout_height": str(env.timeout_height),
                "extension_options": [],
                "non_critical_extension_options": [],
            },
            "auth_info": {
                "signer_infos": [
                    {
                        "public_key": {"@type": SECP256K1_PUBKEY_TYPE_URL, "key": _b64(info.public_key)},
                        "mode_info": {"single": {"mode": info.mode.name}},
                        "sequence": str(info.sequence),
                    }
                    for info in signed.signer_infos
                ],
                "fee": {
                    "amount": [{"denom": c.denom, "amount": c.amount} for c in env.fee.amount],
                    "gas_limit": str(env.fee.gas_limit),
                    "payer": env.fee.payer,
                    "granter": env.fee.granter,
                },
            },
            "signatures": [_b64(sig) for sig in signed.signatures],
        }

    def encode_json(self, signed: SignedEnvelope) -> bytes:
        """Encode a signed envelope as UTF-8 JSON."""
        return json.dumps(self.to_json_dict(signed), separators=(",", ":")).encode("utf-8")

    def decode_json(self, data: bytes) -> SignedEnvelope:
        """
        Decode a JSON signed envelope.

        Raises:
            MalformedEnvelopeError: On invalid JSON or any structural problem
        """
        try:
            doc = json.loads(data, object_pairs_hook=_reject_duplicate_keys)
        except (ValueError, RecursionError) as e:
            raise MalformedEnvelopeError(f"invalid JSON envelope: {e}", cause=e)
        return self.from_json_dict(doc)

    def from_json_dict(self, doc: Any) -> SignedEnvelope:
        """Build a signed envelope from its parsed JSON form."""
        _check_keys(doc, "tx", required=("body", "auth_info", "signatures"))

        body = doc["body"]
        _check_keys(
            body, "body",
            required=("messages",),
            optional=("memo", "timeout_height", "extension_options", "non_critical_extension_options"),
        )
        for key in ("extension_options", "non_critical_extension_options"):
            options = body.get(key)
            if options is not None and _list(options, f"body.{key}"):
                raise MalformedEnvelopeError("extension options are not supported")
        messages = tuple(
            self._msg_from_json(m, i) for i, m in enumerate(_list(body["messages"], "body.messages"))
        )

        auth = doc["auth_info"]
        _check_keys(auth, "auth_info", required=("signer_infos",), optional=("fee", "tip"))
        if auth.get("tip") is not None:
            raise MalformedEnvelopeError("tips are not supported")
        signer_infos = tuple(
            _signer_info_from_json(s, i)
            for i, s in enumerate(_list(auth["signer_infos"], "auth_info.signer_infos"))
        )
        fee = _fee_from_json(auth["fee"]) if auth.get("fee") is not None else Fee()

        signatures = tuple(
            _b64decode(s, f"signatures[{i}]") for i, s in enumerate(_list(doc["signatures"], "signatures"))
        )

        return _build_signed(
            messages=messages,
            memo=_str(body.get("memo", ""), "body.memo"),
            timeout_height=_uint(body.get("timeout_height", "0"), "body.timeout_height"),
            fee=fee,
            signer_infos=signer_infos,
            signatures=signatures,
        )

    def _msg_from_json(self, obj: Any, index: int) -> MsgSignData:
        what = f"body.messages[{index}]"
        _check_keys(obj, what, required=("@type", "signer", "data"))
        if obj["@type"] != MSG_SIGN_DATA_TYPE_URL:
            raise MalformedEnvelopeError(f"unsupported message type: {obj['@type']!r}")
        signer = from_bech32(_str(obj["signer"], f"{what}.signer"), self.config.bech32_prefix)
        return MsgSignData(signer=signer, data=_b64decode(obj["data"], f"{what}.data"))


# ----------------------------------------------------------------------
# Binary helpers
# ----------------------------------------------------------------------

def _encode_msg_sign_data(msg: MsgSignData) -> bytes:
    w = BinaryWriter()
    w.field_bytes(1, msg.signer)
    w.field_bytes(2, msg.data)
    return w.to_bytes()


def _encode_any(type_url: str, value: bytes) -> bytes:
    w = BinaryWriter()
    w.field_string(1, type_url)
    w.field_bytes(2, value)
    return w.to_bytes()


def _encode_signer_info(info: SignerInfo) -> bytes:
    pubkey = BinaryWriter()
    pubkey.field_bytes(1, info.public_key)

    single = BinaryWriter()
    single.field_uvarint(1, int(info.mode))
    mode_info = BinaryWriter()
    mode_info.field_message(1, single.to_bytes())

    w = BinaryWriter()
    w.field_message(1, _encode_any(SECP256K1_PUBKEY_TYPE_URL, pubkey.to_bytes()))
    w.field_message(2, mode_info.to_bytes())
    w.field_uvarint(3, info.sequence)
    return w.to_bytes()


def _encode_fee(fee: Fee) -> bytes:
    w = BinaryWriter()
    for coin in fee.amount:
        c = BinaryWriter()
        c.field_string(1, coin.denom)
        c.field_string(2, coin.amount)
        w.field_message(1, c.to_bytes())
    w.field_uvarint(2, fee.gas_limit)
    w.field_string(3, fee.payer)
    w.field_string(4, fee.granter)
    return w.to_bytes()


def _parse(data: bytes, schema: Dict[int, Tuple[str, int, bool]], what: str) -> Dict[str, Any]:
    """
    Parse one protobuf message against a field schema.

    Unknown fields, wire-type mismatches and repeated singular fields are
    rejected.
    """
    values: Dict[str, Any] = {}
    for field, wire_type, value in BinaryReader(data).fields():
        entry = schema.get(field)
        if entry is None:
            raise MalformedEnvelopeError(f"unknown field {field} in {what}")
        name, expected_wire, repeated = entry
        if wire_type != expected_wire:
            raise MalformedEnvelopeError(f"wrong wire type {wire_type} for {what}.{name}")
        if repeated:
            values.setdefault(name, []).append(value)
        elif name in values:
            raise MalformedEnvelopeError(f"duplicate field {what}.{name}")
        else:
            values[name] = value
    return values


def _utf8(value: bytes, what: str) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedEnvelopeError(f"{what} is not valid UTF-8", cause=e)


def _decode_any(data: bytes, what: str) -> Tuple[str, bytes]:
    fields = _parse(data, _ANY_FIELDS, what)
    type_url = _utf8(fields.get("type_url", b""), f"{what}.type_url")
    if not type_url:
        raise MalformedEnvelopeError(f"missing type_url in {what}")
    return type_url, fields.get("value", b"")


def _decode_msg_any(data: bytes) -> MsgSignData:
    type_url, value = _decode_any(data, "message")
    if type_url != MSG_SIGN_DATA_TYPE_URL:
        raise MalformedEnvelopeError(f"unsupported message type: {type_url!r}")
    fields = _parse(value, _MSG_SIGN_DATA_FIELDS, "MsgSignData")
    return MsgSignData(signer=fields.get("signer", b""), data=fields.get("data", b""))


def _decode_sign_mode(value: int) -> SignMode:
    try:
        return SignMode(value)
    except ValueError:
        raise MalformedEnvelopeError(f"unknown sign mode: {value}")


def _decode_signer_info(data: bytes) -> SignerInfo:
    fields = _parse(data, _SIGNER_INFO_FIELDS, "SignerInfo")
    if "public_key" not in fields:
        raise MalformedEnvelopeError("missing public_key in SignerInfo")
    if "mode_info" not in fields:
        raise MalformedEnvelopeError("missing mode_info in SignerInfo")

    type_url, value = _decode_any(fields["public_key"], "public_key")
    if type_url != SECP256K1_PUBKEY_TYPE_URL:
        raise MalformedEnvelopeError(f"unsupported public key type: {type_url!r}")
    pubkey = _parse(value, _PUBKEY_FIELDS, "PubKey")

    mode_info = _parse(fields["mode_info"], _MODE_INFO_FIELDS, "ModeInfo")
    if "multi" in mode_info:
        raise MalformedEnvelopeError("multi-signature mode info is not supported")
    if "single" not in mode_info:
        raise MalformedEnvelopeError("missing single mode info")
    single = _parse(mode_info["single"], _MODE_INFO_SINGLE_FIELDS, "ModeInfo.Single")

    return SignerInfo(
        public_key=pubkey.get("key", b""),
        mode=_decode_sign_mode(single.get("mode", 0)),
        sequence=fields.get("sequence", 0),
    )


def _decode_fee(data: bytes) -> Fee:
    fields = _parse(data, _FEE_FIELDS, "Fee")
    coins = []
    for raw in fields.get("amount", []):
        coin = _parse(raw, _COIN_FIELDS, "Coin")
        coins.append(Coin(
            denom=_utf8(coin.get("denom", b""), "coin.denom"),
            amount=_utf8(coin.get("amount", b""), "coin.amount"),
        ))
    return Fee(
        amount=tuple(coins),
        gas_limit=fields.get("gas_limit", 0),
        payer=_utf8(fields.get("payer", b""), "fee.payer"),
        granter=_utf8(fields.get("granter", b""), "fee.granter"),
    )


# ----------------------------------------------------------------------
# JSON helpers
# ----------------------------------------------------------------------

def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: Any, what: str) -> bytes:
    if not isinstance(value, str):
        raise MalformedEnvelopeError(f"{what} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEnvelopeError(f"{what} is not valid base64", cause=e)


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


def _check_keys(obj: Any, what: str, required: Tuple[str, ...] = (), optional: Tuple[str, ...] = ()) -> None:
    if not isinstance(obj, dict):
        raise MalformedEnvelopeError(f"{what} must be an object")
    missing = [k for k in required if k not in obj or obj[k] is None]
    if missing:
        raise MalformedEnvelopeError(f"missing required field(s) in {what}: {', '.join(missing)}")
    unknown = sorted(set(obj) - set(required) - set(optional))
    if unknown:
        raise MalformedEnvelopeError(f"unknown field(s) in {what}: {', '.join(unknown)}")


def _list(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise MalformedEnvelopeError(f"{what} must be an array")
    return value


def _str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise MalformedEnvelopeError(f"{what} must be a string")
    return value


def _uint(value: Any, what: str) -> int:
    """Parse a uint64 given as a decimal string or a JSON integer."""
    if isinstance(value, bool):
        raise MalformedEnvelopeError(f"{what} must be an unsigned integer")
    if isinstance(value, str):
        if not value.isdigit() or not value.isascii():
            raise MalformedEnvelopeError(f"{what} must be an unsigned integer")
        value = int(value)
    if not isinstance(value, int) or value < 0 or value > MAX_UINT64:
        raise MalformedEnvelopeError(f"{what} must be an unsigned integer")
    return value


def _signer_info_from_json(obj: Any, index: int) -> SignerInfo:
    what = f"auth_info.signer_infos[{index}]"
    _check_keys(obj, what, required=("public_key", "mode_info"), optional=("sequence",))

    pubkey = obj["public_key"]
    _check_keys(pubkey, f"{what}.public_key", required=("@type", "key"))
    if pubkey["@type"] != SECP256K1_PUBKEY_TYPE_URL:
        raise MalformedEnvelopeError(f"unsupported public key type: {pubkey['@type']!r}")

    mode_info = obj["mode_info"]
    _check_keys(mode_info, f"{what}.mode_info", optional=("single", "multi"))
    if mode_info.get("multi") is not None:
        raise MalformedEnvelopeError("multi-signature mode info is not supported")
    if mode_info.get("single") is None:
        raise MalformedEnvelopeError("missing single mode info")
    single = mode_info["single"]
    _check_keys(single, f"{what}.mode_info.single", required=("mode",))

    return SignerInfo(
        public_key=_b64decode(pubkey["key"], f"{what}.public_key.key"),
        mode=_sign_mode_from_json(single["mode"], f"{what}.mode_info.single.mode"),
        sequence=_uint(obj.get("sequence", "0"), f"{what}.sequence"),
    )


def _sign_mode_from_json(value: Any, what: str) -> SignMode:
    if isinstance(value, str):
        try:
            return SignMode[value]
        except KeyError:
            raise MalformedEnvelopeError(f"unknown sign mode: {value!r}")
    if isinstance(value, int) and not isinstance(value, bool):
        return _decode_sign_mode(value)
    raise MalformedEnvelopeError(f"{what} must be a sign mode name")


def _fee_from_json(obj: Any) -> Fee:
    _check_keys(obj, "auth_info.fee", optional=("amount", "gas_limit", "payer", "granter"))
    coins = []
    for i, c in enumerate(_list(obj.get("amount", []), "auth_info.fee.amount")):
        _check_keys(c, f"auth_info.fee.amount[{i}]", required=("denom", "amount"))
        coins.append(Coin(
            denom=_str(c["denom"], "coin.denom"),
            amount=_str(c["amount"], "coin.amount"),
        ))
    return Fee(
        amount=tuple(coins),
        gas_limit=_uint(obj.get("gas_limit", "0"), "auth_info.fee.gas_limit"),
        payer=_str(obj.get("payer", ""), "auth_info.fee.payer"),
        granter=_str(obj.get("granter", ""), "auth_info.fee.granter"),
    )


def _build_signed(*, messages, memo, timeout_height, fee, signer_infos, signatures) -> SignedEnvelope:
    try:
        return SignedEnvelope(
            envelope=Envelope(messages=messages, memo=memo, timeout_height=timeout_height, fee=fee),
            signer_infos=signer_infos,
            signatures=signatures,
        )
    except ValidationError as e:
        raise MalformedEnvelopeError(f"invalid envelope: {e.error_count()} validation error(s)", cause=e)


__all__ = [
    "JSON_CONTENT_TYPE",
    "PROTOBUF_CONTENT_TYPE",
    "EnvelopeCodec",
    "media_type",
]
