"""
Transport Protocol - defines the contract for sending HTTP requests.

This is the WHAT (interface), not the HOW (implementation).
See httpx_transport.py for the default implementation.
"""

from typing import Protocol

import httpx


class Transport(Protocol):
    """
    Contract for the network layer beneath GPT3Client.

    Implementations must provide:
    - send(): execute one request and return the response with its body unread
    - aclose(): release pooled connections

    The client depends only on this, so tests can swap in a deterministic fake.
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and return the response as soon as headers arrive.

        The caller owns the returned response and must close it.

        Raises:
            TransportError on connection, DNS or timeout failure
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        ...
