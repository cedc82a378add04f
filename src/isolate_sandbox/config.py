# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """
    Connection settings for an isolate-sandbox client.

    Read from keyword arguments first, then ``ISOLATE_SANDBOX_*`` environment
    variables and a ``.env`` file. Frozen once built.
    """

    base_url: str
    timeout_ms: int = Field(default=30000, gt=0)
    api_key: str | None = Field(default=None, repr=False)

    model_config = SettingsConfigDict(
        env_prefix="ISOLATE_SANDBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        # Only one slash is removed; paths always start with "/".
        if value.endswith("/"):
            value = value[:-1]
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000
