"""
Server-sent-event decoding for completion streams.

The wire format is newline-delimited frames. Data frames start with
"data: " and carry one JSON document; the stream ends with "data: [DONE]".
Anything else (comments, event names, keep-alive blank lines) is skipped.
"""

import json
import logging
from enum import Enum
from typing import AsyncIterator, Generic, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from gpt3_client.errors import DecodeError, StreamReadError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DATA_PREFIX = "data: "
DONE_SEQUENCE = "[DONE]"


class StreamState(str, Enum):
    """Lifecycle of a StreamDecoder."""
    READING = "reading"
    COMPLETED = "completed"
    FAILED = "failed"


class StreamDecoder(Generic[T]):
    """
    Decodes a line iterator into typed events.

    Explicit state: starts READING, ends COMPLETED only on [DONE], and
    FAILED on any read or decode error. Not restartable.

    Usage:
        decoder = StreamDecoder(response.aiter_lines(), CompletionResponse)
        async for event in decoder.events():
            ...
    """

    def __init__(self, lines: AsyncIterator[str], model: Type[T]):
        self._lines = lines
        self._model = model
        self.state = StreamState.READING
        self.events_decoded = 0

    async def _next_line(self) -> str:
        try:
            return await self._lines.__anext__()
        except StopAsyncIteration:
            raise StreamReadError("unexpected EOF") from None
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise StreamReadError(e) from e

    def _decode(self, data: str) -> T:
        try:
            return self._model.model_validate(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            raise DecodeError(f"invalid json stream data: {e}") from e

    async def events(self) -> AsyncIterator[T]:
        """
        Yield one decoded event per data frame until [DONE].

        Raises:
            StreamReadError: If reading fails or the stream ends early
            DecodeError: If a data frame is not valid JSON for the model
        """
        if self.state is not StreamState.READING:
            raise RuntimeError(f"stream already {self.state.value}")

        try:
            while True:
                line = (await self._next_line()).strip()
                if not line.startswith(DATA_PREFIX):
                    continue
                data = line[len(DATA_PREFIX):]
                if data.startswith(DONE_SEQUENCE):
                    self.state = StreamState.COMPLETED
                    logger.debug("Stream completed after %d events", self.events_decoded)
                    return
                event = self._decode(data)
                self.events_decoded += 1
                yield event
        except Exception:
            self.state = StreamState.FAILED
            raise
