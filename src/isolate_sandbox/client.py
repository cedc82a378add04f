# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import quote

import aiofiles  # type: ignore[import-untyped]
import anyio
import httpx
from loguru import logger
from pydantic import BaseModel

from isolate_sandbox.codec import ContentCodec, default_codec
from isolate_sandbox.config import ClientConfig
from isolate_sandbox.errors import ApiError
from isolate_sandbox.models import (
    CleanupResult,
    ExecuteRequest,
    ExecuteResult,
    FileContent,
    FileListing,
    HealthStatus,
    LanguageList,
)

API_KEY_HEADER = "X-API-Key"

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def _resolve_config(config: ClientConfig | None, settings: dict[str, Any]) -> ClientConfig:
    if config is None:
        return ClientConfig(**settings)
    if settings:
        raise TypeError("Pass either a ClientConfig or keyword settings, not both")
    return config


def _box_path(box_id: int) -> str:
    return f"/boxes/{int(box_id)}"


def _box_file_path(box_id: int, filename: str) -> str:
    return f"{_box_path(box_id)}/files/{quote(filename, safe='')}"


class IsolateSandboxAsync:
    """Async client for the isolate-sandbox API (The Core).

    Every operation is one HTTP request bounded by the configured timeout.
    Failures of any kind are raised as ``ApiError``; nothing is retried.
    Calls share no mutable state and may be issued concurrently.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        codec: ContentCodec | None = None,
        **settings: Any,
    ):
        """Initializes the client.

        Args:
            config: Connection settings. Built from ``settings`` and the
                environment when omitted.
            client: Optional httpx.AsyncClient for connection pooling. It is
                not closed by this client.
            transport: Transport for the internally created httpx client.
                Ignored when ``client`` is given.
            codec: Decoder for file content. Defaults to base64.
            **settings: ``base_url``, ``timeout_ms`` and ``api_key`` shortcuts.
        """
        self.config = _resolve_config(config, settings)
        self.codec = codec or default_codec
        self._internal_client = client is None
        # Deadlines come from anyio.fail_after, not from httpx.
        self._client = client or httpx.AsyncClient(transport=transport, timeout=None)

        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers[API_KEY_HEADER] = self.config.api_key
        self._headers = headers

    async def __aenter__(self) -> "IsolateSandboxAsync":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Closes the underlying httpx client if this instance created it."""
        if self._internal_client:
            await self._client.aclose()

    async def _send(self, method: str, path: str, body: dict[str, Any] | None = None) -> httpx.Response:
        """Performs one HTTP call under the client deadline.

        Args:
            method: HTTP verb.
            path: Path beginning with "/", appended to the base URL.
            body: JSON payload, if any.

        Returns:
            httpx.Response: The response, whatever its status.

        Raises:
            ApiError: 408 when the deadline passes, 0 when the transport fails.
        """
        url = f"{self.config.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            with anyio.fail_after(self.config.timeout_seconds):
                return await self._client.request(method, url, headers=self._headers, json=body)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {url} timed out after {self.config.timeout_ms}ms")
            raise ApiError.timeout(self.config.timeout_ms) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            raise ApiError.transport(e) from e

    async def _request(self, method: str, path: str, model: type[M], body: dict[str, Any] | None = None) -> M:
        response = await self._send(method, path, body)

        if not response.is_success:
            error = ApiError.from_response(response)
            logger.debug(f"{method} {path} returned {error.status_code}: {error.message}")
            raise error

        return model.model_validate(response.json())

    async def health(self) -> HealthStatus:
        """Checks the health of the service.

        Returns:
            HealthStatus: The reported status.

        Raises:
            ApiError: If the request fails.
        """
        return await self._request("GET", "/health", HealthStatus)

    async def list_languages(self) -> LanguageList:
        """Lists the languages the service can run.

        Returns:
            LanguageList: Supported language identifiers.

        Raises:
            ApiError: If the request fails.
        """
        return await self._request("GET", "/languages", LanguageList)

    async def execute(self, request: ExecuteRequest) -> ExecuteResult:
        """Executes code in a new box.

        The box is left on the server; release it with ``cleanup_box``.
        A timeout here does not stop the execution server side.

        Args:
            request: Language and source code.

        Returns:
            ExecuteResult: Captured output, metadata and the box id.

        Raises:
            ApiError: If the request fails.
        """
        result = await self._request("POST", "/execute", ExecuteResult, body=request.model_dump())
        logger.info(
            "Executed code in sandbox",
            language=request.language,
            box_id=result.box_id,
            status=result.metadata.status,
        )
        return result

    async def list_box_files(self, box_id: int) -> FileListing:
        """Lists files in a box.

        Args:
            box_id: Box returned by ``execute``.

        Returns:
            FileListing: Filenames in server order.

        Raises:
            ApiError: If the request fails or the box is gone.
        """
        return await self._request("GET", f"{_box_path(box_id)}/files", FileListing)

    async def get_box_file_raw(self, box_id: int, filename: str) -> FileContent:
        """Gets a file from a box with its content still base64 encoded.

        Args:
            box_id: Box returned by ``execute``.
            filename: Name of the file in the box.

        Returns:
            FileContent: Filename and base64 content.

        Raises:
            ApiError: If the request fails or the file does not exist.
        """
        return await self._request("GET", _box_file_path(box_id, filename), FileContent)

    async def get_box_file(self, box_id: int, filename: str) -> FileContent:
        """Gets a file from a box with its content decoded to text.

        Args:
            box_id: Box returned by ``execute``.
            filename: Name of the file in the box.

        Returns:
            FileContent: Filename and UTF-8 content.

        Raises:
            ApiError: If the request fails or the file does not exist.
            binascii.Error: If the server sent malformed base64.
            UnicodeDecodeError: If the file is not UTF-8 text.
        """
        raw = await self.get_box_file_raw(box_id, filename)
        return FileContent(filename=raw.filename, content=self.codec.decode(raw.content))

    async def download_box_file(self, box_id: int, filename: str, local_path: Path) -> Path:
        """Downloads a file from a box to the local filesystem as bytes.

        Args:
            box_id: Box returned by ``execute``.
            filename: Name of the file in the box.
            local_path: Destination on the host. Parent directories are created.

        Returns:
            Path: The written path.

        Raises:
            ApiError: If the request fails or the file does not exist.
        """
        raw = await self.get_box_file_raw(box_id, filename)
        content = self.codec.decode_bytes(raw.content)

        local_path = Path(local_path)
        await anyio.Path(local_path.parent).mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(local_path, "wb") as f:
            await f.write(content)

        logger.info(f"Downloaded {filename} from box {box_id} to {local_path} ({len(content)} bytes)")
        return local_path

    async def cleanup_box(self, box_id: int) -> CleanupResult:
        """Deletes a box and its files.

        Args:
            box_id: Box returned by ``execute``.

        Returns:
            CleanupResult: Confirmation message from the server.

        Raises:
            ApiError: If the request fails or the box is already gone.
        """
        return await self._request("DELETE", _box_path(box_id), CleanupResult)


class IsolateSandbox:
    """Sync Facade for IsolateSandboxAsync (The Facade).

    Each method runs one async call via anyio.run with a short-lived async
    client, so no connection pool outlives its event loop. Cannot be used
    from inside a running event loop.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        codec: ContentCodec | None = None,
        **settings: Any,
    ):
        self.config = _resolve_config(config, settings)
        self._transport = transport
        self._codec = codec

    def __enter__(self) -> "IsolateSandbox":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        pass

    def _run(self, operation: Callable[[IsolateSandboxAsync], Awaitable[T]]) -> T:
        async def _call() -> T:
            async with IsolateSandboxAsync(self.config, transport=self._transport, codec=self._codec) as client:
                return await operation(client)

        return anyio.run(_call)

    def health(self) -> HealthStatus:
        return self._run(lambda c: c.health())

    def list_languages(self) -> LanguageList:
        return self._run(lambda c: c.list_languages())

    def execute(self, request: ExecuteRequest) -> ExecuteResult:
        return self._run(lambda c: c.execute(request))

    def list_box_files(self, box_id: int) -> FileListing:
        return self._run(lambda c: c.list_box_files(box_id))

    def get_box_file(self, box_id: int, filename: str) -> FileContent:
        return self._run(lambda c: c.get_box_file(box_id, filename))

    def get_box_file_raw(self, box_id: int, filename: str) -> FileContent:
        return self._run(lambda c: c.get_box_file_raw(box_id, filename))

    def download_box_file(self, box_id: int, filename: str, local_path: Path) -> Path:
        return self._run(lambda c: c.download_box_file(box_id, filename, local_path))

    def cleanup_box(self, box_id: int) -> CleanupResult:
        return self._run(lambda c: c.cleanup_box(box_id))
