import sys
from typing import Any, Callable, Generator

import httpx
import pytest
from loguru import logger

from isolate_sandbox.client import IsolateSandboxAsync

BASE_URL = "http://sandbox.test"

Handler = Callable[[httpx.Request], Any]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("ISOLATE_SANDBOX_BASE_URL", "ISOLATE_SANDBOX_TIMEOUT_MS", "ISOLATE_SANDBOX_API_KEY"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_client() -> Callable[..., IsolateSandboxAsync]:
    """Build an async client whose requests are answered by ``handler``."""

    def _make(handler: Handler, **settings: Any) -> IsolateSandboxAsync:
        settings.setdefault("base_url", BASE_URL)
        return IsolateSandboxAsync(transport=httpx.MockTransport(handler), **settings)

    return _make


@pytest.fixture
def execute_payload() -> dict[str, Any]:
    return {
        "stdout": "2\n",
        "stderr": "",
        "metadata": {"time": 0.01, "time_wall": 0.01, "memory": 1048576, "exit_code": 0, "status": "ok"},
        "box_id": 7,
    }


@pytest.fixture
def restore_logger() -> Generator[None, None, None]:
    yield
    logger.remove()
    logger.add(sys.stderr)
