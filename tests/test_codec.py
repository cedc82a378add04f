# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import base64
import binascii

import pytest

from isolate_sandbox.codec import Base64Codec, ContentCodec, decode_base64, default_codec


def test_decode_scenario() -> None:
    assert decode_base64("aGVsbG8=") == "hello"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello world\n",
        "línea con acentos ñ",
        "日本語のテキスト",
        "emoji 🚀 and tabs\t\r\n",
        "a" * 10_000,
    ],
)
def test_utf8_round_trip(text: str) -> None:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    assert decode_base64(encoded) == text


def test_decode_bytes_keeps_binary() -> None:
    raw = bytes(range(256))
    encoded = base64.b64encode(raw).decode("ascii")
    assert Base64Codec().decode_bytes(encoded) == raw


def test_malformed_base64_is_not_wrapped() -> None:
    with pytest.raises(binascii.Error):
        decode_base64("not base64!!")


def test_non_utf8_payload_raises() -> None:
    encoded = base64.b64encode(b"\xff\xfe\xfd").decode("ascii")
    with pytest.raises(UnicodeDecodeError):
        decode_base64(encoded)


def test_default_codec_satisfies_protocol() -> None:
    assert isinstance(default_codec, ContentCodec)
    assert isinstance(Base64Codec(), ContentCodec)
