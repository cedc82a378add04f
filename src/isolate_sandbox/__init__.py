# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""
isolate-sandbox client
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .client import IsolateSandbox, IsolateSandboxAsync
from .codec import Base64Codec, ContentCodec, decode_base64
from .config import ClientConfig
from .errors import ApiError
from .models import (
    CleanupResult,
    ErrorBody,
    ExecuteRequest,
    ExecuteResult,
    ExecutionMetadata,
    FileContent,
    FileListing,
    HealthStatus,
    LanguageList,
)

__all__ = [
    "IsolateSandboxAsync",
    "IsolateSandbox",
    "ClientConfig",
    "ApiError",
    "ContentCodec",
    "Base64Codec",
    "decode_base64",
    "ExecuteRequest",
    "ExecuteResult",
    "ExecutionMetadata",
    "HealthStatus",
    "LanguageList",
    "FileListing",
    "FileContent",
    "CleanupResult",
    "ErrorBody",
]
