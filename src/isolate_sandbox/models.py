# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""Wire models for the isolate-sandbox HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExecuteRequest(BaseModel):
    """Code submitted to ``POST /execute``.

    Attributes:
        language: Language identifier known to the server (e.g. "python").
        code: Source text. May be empty.
    """

    language: str = Field(..., min_length=1)
    code: str


class ExecutionMetadata(BaseModel):
    """Resource usage reported by the sandbox for one run.

    Python names are used on the model; the wire names are kept as aliases.

    Attributes:
        cpu_time_seconds: CPU time consumed (wire: ``time``).
        wall_time_seconds: Wall clock time (wire: ``time_wall``).
        memory_bytes: Peak memory (wire: ``memory``).
        exit_code: Exit code of the program.
        status: Server-defined status label, e.g. "OK", "TO", "RE".
    """

    model_config = ConfigDict(populate_by_name=True)

    cpu_time_seconds: float = Field(..., ge=0, alias="time")
    wall_time_seconds: float = Field(..., ge=0, alias="time_wall")
    memory_bytes: int = Field(..., ge=0, alias="memory")
    exit_code: int
    status: str


class ExecuteResult(BaseModel):
    """
    Output of a single execution.

    ``box_id`` names the server-side box the code ran in. Pass it to the file
    and cleanup operations; the client does not track it.
    """

    stdout: str = Field(..., description="The standard output stream of the execution.")
    stderr: str = Field(..., description="The standard error stream, if any.")
    metadata: ExecutionMetadata
    box_id: int = Field(..., description="Identifier of the box holding the run's files.")

    @property
    def succeeded(self) -> bool:
        return self.metadata.exit_code == 0


class HealthStatus(BaseModel):
    status: str


class LanguageList(BaseModel):
    languages: list[str]


class FileListing(BaseModel):
    """Files in a box, in the order the server returned them."""

    files: list[str]


class FileContent(BaseModel):
    """A file read from a box.

    ``content`` is base64 as transmitted unless it came from
    ``get_box_file``, which decodes it to text.
    """

    filename: str
    content: str


class CleanupResult(BaseModel):
    message: str


class ErrorBody(BaseModel):
    """JSON error payload. Unknown fields are kept for inspection.

    ``error`` is a string on well-formed responses but is kept as sent, so a
    malformed payload still reaches the caller.
    """

    model_config = ConfigDict(extra="allow")

    error: Any = None
