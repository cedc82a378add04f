# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import pytest
from pydantic import ValidationError

from isolate_sandbox.config import ClientConfig


def test_defaults() -> None:
    config = ClientConfig(base_url="http://localhost:3000")
    assert config.base_url == "http://localhost:3000"
    assert config.timeout_ms == 30000
    assert config.timeout_seconds == 30.0
    assert config.api_key is None


@pytest.mark.parametrize(
    "base_url, expected",
    [
        ("http://localhost:3000", "http://localhost:3000"),
        ("http://localhost:3000/", "http://localhost:3000"),
        ("https://sandbox.example.com/api/", "https://sandbox.example.com/api"),
    ],
)
def test_trailing_slash_stripped(base_url: str, expected: str) -> None:
    assert ClientConfig(base_url=base_url).base_url == expected


def test_only_one_trailing_slash_removed() -> None:
    assert ClientConfig(base_url="http://localhost:3000//").base_url == "http://localhost:3000/"


def test_empty_base_url_rejected() -> None:
    with pytest.raises(ValidationError):
        ClientConfig(base_url="")
    with pytest.raises(ValidationError):
        ClientConfig(base_url="/")


@pytest.mark.parametrize("timeout_ms", [0, -1])
def test_timeout_must_be_positive(timeout_ms: int) -> None:
    with pytest.raises(ValidationError) as excinfo:
        ClientConfig(base_url="http://localhost:3000", timeout_ms=timeout_ms)
    assert "timeout_ms" in str(excinfo.value)


def test_config_is_frozen() -> None:
    config = ClientConfig(base_url="http://localhost:3000")
    with pytest.raises(ValidationError):
        config.timeout_ms = 10  # type: ignore[misc]


def test_api_key_hidden_from_repr() -> None:
    config = ClientConfig(base_url="http://localhost:3000", api_key="s3cret")
    assert config.api_key == "s3cret"
    assert "s3cret" not in repr(config)


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISOLATE_SANDBOX_BASE_URL", "http://env-host:8080/")
    monkeypatch.setenv("ISOLATE_SANDBOX_TIMEOUT_MS", "1500")
    monkeypatch.setenv("ISOLATE_SANDBOX_API_KEY", "env-key")

    config = ClientConfig()  # type: ignore[call-arg]
    assert config.base_url == "http://env-host:8080"
    assert config.timeout_ms == 1500
    assert config.api_key == "env-key"


def test_keywords_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISOLATE_SANDBOX_BASE_URL", "http://env-host:8080")
    config = ClientConfig(base_url="http://explicit:1")
    assert config.base_url == "http://explicit:1"


def test_missing_base_url() -> None:
    with pytest.raises(ValidationError) as excinfo:
        ClientConfig()  # type: ignore[call-arg]
    assert "base_url" in str(excinfo.value)
