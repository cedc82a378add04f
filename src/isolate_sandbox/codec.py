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
from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentCodec(Protocol):
    """
    Protocol for decoding file content sent by the server as base64.
    """

    def decode_bytes(self, encoded: str) -> bytes:
        """
        Decode base64 text to the original bytes.
        """
        ...

    def decode(self, encoded: str) -> str:
        """
        Decode base64 text to a UTF-8 string.
        """
        ...


class Base64Codec:
    """Standard-alphabet base64 with strict input checking.

    Malformed input raises ``binascii.Error`` and non UTF-8 payloads raise
    ``UnicodeDecodeError`` from ``decode``. Neither is wrapped.
    """

    def decode_bytes(self, encoded: str) -> bytes:
        return base64.b64decode(encoded, validate=True)

    def decode(self, encoded: str) -> str:
        return self.decode_bytes(encoded).decode("utf-8")


default_codec: ContentCodec = Base64Codec()


def decode_base64(encoded: str) -> str:
    """Decode base64 text to UTF-8 using the default codec."""
    return default_codec.decode(encoded)
