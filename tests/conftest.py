"""Shared test fixtures for gpt3-client tests."""

import asyncio
from typing import Callable, Optional

import httpx
import pytest

from gpt3_client import GPT3Client


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

API_KEY = "test-key"
BASE_URL = "https://api.openai.com/v1"

MOCK_COMPLETION_EVENT = (
    '{"id":"cmpl-123","object":"text_completion","created":1650000000,'
    '"model":"davinci","choices":[{"text":"%s","index":0,"logprobs":null,"finish_reason":null}]}'
)

MOCK_STREAMING_LINES = [
    "data: " + MOCK_COMPLETION_EVENT % "The",
    "data: " + MOCK_COMPLETION_EVENT % " capital",
    "data: " + MOCK_COMPLETION_EVENT % " of France",
    "data: " + MOCK_COMPLETION_EVENT % " is Paris.",
    "data: [DONE]",
]


def sse_body(lines: list[str]) -> bytes:
    """Join SSE frames the way the API sends them (blank line between frames)."""
    return "".join(f"{line}\n\n" for line in lines).encode()


# ─────────────────────────────────────────────────────────────────────
# FAKE STREAMS
# ─────────────────────────────────────────────────────────────────────

class ErrorStream(httpx.AsyncByteStream):
    """Body that fails on the first read."""

    def __init__(self, message: str = "read error"):
        self.message = message

    async def __aiter__(self):
        raise httpx.ReadError(self.message)
        yield b""  # pragma: no cover


class TrackingStream(httpx.AsyncByteStream):
    """Body that records whether it was closed, optionally hanging after its chunks."""

    def __init__(self, chunks: list[bytes], hang: bool = False):
        self.chunks = chunks
        self.hang = hang
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
        if self.hang:
            await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    """Client on the default httpx transport (intercepted by respx)."""
    return GPT3Client(API_KEY)


@pytest.fixture
def mock_transport_client() -> Callable[..., GPT3Client]:
    """Factory: client whose requests are answered by an httpx.MockTransport handler."""

    def make(handler: Callable[[httpx.Request], httpx.Response], organization: Optional[str] = None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GPT3Client(API_KEY, organization=organization, http_client=http_client)

    return make


@pytest.fixture
def training_file(tmp_path):
    """A small JSONL file to upload."""
    path = tmp_path / "train.jsonl"
    path.write_text('{"prompt": "a", "completion": "b"}\n')
    return path
