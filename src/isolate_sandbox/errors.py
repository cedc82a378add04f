# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""The single error type raised by the client for any failed call."""

import httpx

from isolate_sandbox.models import ErrorBody

TRANSPORT_ERROR_STATUS = 0
TIMEOUT_STATUS = 408


class ApiError(Exception):
    """A failed API call.

    The status code tells the failure kinds apart:

    - ``0``: the request never got an HTTP response (DNS, refused, reset).
    - ``408``: the client deadline passed before a response arrived.
    - ``400-499`` / ``500-599``: the server answered with that status.

    A client-side timeout does not cancel the execution on the server.

    Attributes:
        message: Human readable description.
        status_code: HTTP status, or 0 for transport failures.
        response: Parsed JSON error body, when the server sent one.
    """

    def __init__(self, message: str, status_code: int, response: ErrorBody | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"

    @property
    def is_timeout(self) -> bool:
        return self.status_code == TIMEOUT_STATUS

    @property
    def is_transport_error(self) -> bool:
        return self.status_code == TRANSPORT_ERROR_STATUS

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_auth_error(self) -> bool:
        # 403 when the key header is missing, 401 when it is wrong.
        return self.status_code in (401, 403)

    @classmethod
    def timeout(cls, timeout_ms: int) -> "ApiError":
        return cls(f"Request timeout after {timeout_ms}ms", TIMEOUT_STATUS)

    @classmethod
    def transport(cls, exc: BaseException) -> "ApiError":
        return cls(str(exc) or type(exc).__name__, TRANSPORT_ERROR_STATUS)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        """Build an error from a non-2xx response. Never raises.

        The message is taken from, in order: the ``error`` field of a JSON
        body, a non-empty plain text body, then ``"HTTP <status>: <reason>"``.
        """
        body: ErrorBody | None = None
        message: str | None = None

        if _is_json(response):
            body = _json_error_body(response)
            if body is not None:
                message = _error_message(body)
        else:
            message = response.text or None

        if message is None:
            message = f"HTTP {response.status_code}: {response.reason_phrase}"

        return cls(message, response.status_code, body)


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _json_error_body(response: httpx.Response) -> ErrorBody | None:
    # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return ErrorBody.model_validate(payload)


def _error_message(body: ErrorBody) -> str | None:
    if isinstance(body.error, str) and body.error:
        return body.error
    return None
