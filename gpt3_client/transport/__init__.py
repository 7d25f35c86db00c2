"""
Transports for GPT3Client.

Protocol defines WHAT, implementations define HOW.
"""

from .base import Transport
from .httpx_transport import HTTPXTransport

__all__ = ["Transport", "HTTPXTransport"]
