"""
HTTPXTransport - default Transport over httpx.AsyncClient.

Either wraps a caller-supplied AsyncClient (left open on aclose) or
creates its own with the configured timeout.
"""

import logging
from typing import Optional

import httpx

from gpt3_client.errors import TransportError

logger = logging.getLogger(__name__)


class HTTPXTransport:
    """
    httpx implementation of the Transport protocol.

    Responses are always opened in streaming mode so that completion
    streams can be read line by line; non-streaming callers read the
    body themselves.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 30.0,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds)
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send the request; httpx failures become TransportError."""
        try:
            return await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", request.method, request.url, e)
            raise TransportError(request.method, str(request.url), e) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
