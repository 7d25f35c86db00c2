"""
RequestBuilder - turns (method, path, payload) into a ready-to-send httpx.Request.

Pure construction: no I/O, no retries. Every request carries the bearer
token, the user agent and, when configured, the organization header.
"""

import json
import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from gpt3_client.config import ClientConfig, ORGANIZATION_HEADER
from gpt3_client.errors import EncodingError

logger = logging.getLogger(__name__)


def encode_json(payload: Any) -> bytes:
    """
    Serialize a payload to a JSON request body.

    None yields an empty body. Pydantic models drop unset optional fields.

    Raises:
        EncodingError: If the payload is not JSON-serializable
    """
    if payload is None:
        return b""
    try:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json", exclude_none=True)
        # allow_nan=False: NaN/Infinity are not valid JSON
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise EncodingError(f"failed encoding json: {e}") from e


class RequestBuilder:
    """Builds authenticated requests against a configured base URL."""

    def __init__(self, config: ClientConfig):
        self._config = config

    def url_for(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    def _common_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "User-Agent": self._config.user_agent,
        }
        if self._config.organization:
            headers[ORGANIZATION_HEADER] = self._config.organization
        return headers

    def build(self, method: str, path: str, payload: Optional[Any] = None) -> httpx.Request:
        """
        Build a JSON request.

        Args:
            method: HTTP verb
            path: Path relative to the base URL, e.g. "/engines"
            payload: JSON-serializable value or pydantic model, or None

        Raises:
            EncodingError: If the payload cannot be serialized
        """
        body = encode_json(payload)
        headers = self._common_headers()
        headers["Content-Type"] = "application/json"
        request = httpx.Request(method.upper(), self.url_for(path), headers=headers, content=body)
        logger.debug("Built %s %s (%d byte body)", request.method, request.url, len(body))
        return request

    def build_multipart(
        self,
        path: str,
        files: dict[str, tuple[str, bytes]],
        data: Optional[dict[str, str]] = None,
    ) -> httpx.Request:
        """
        Build a multipart/form-data POST.

        The Content-Type header, boundary included, comes from the encoder.
        """
        request = httpx.Request(
            "POST",
            self.url_for(path),
            headers=self._common_headers(),
            files=files,
            data=data or {},
        )
        # Body is fully encoded here, before any I/O.
        request.read()
        logger.debug("Built multipart POST %s (%d byte body)", request.url, len(request.content))
        return request
