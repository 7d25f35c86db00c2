"""
Response normalization: status classification, error envelopes, JSON decoding.

Status codes in [200, 300) are success. Everything else becomes an
APIError carrying the HTTP status, whatever the body says.
"""

import json
import logging
from typing import Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from gpt3_client.errors import APIError, BodyReadError, DecodeError
from gpt3_client.models import APIErrorResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

UNEXPECTED_ERROR_TYPE = "Unexpected"


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


async def read_body(response: httpx.Response) -> bytes:
    """
    Read the whole body and close the response.

    Raises:
        BodyReadError: If the body stream fails mid-read
    """
    try:
        return await response.aread()
    except (httpx.HTTPError, httpx.StreamError) as e:
        raise BodyReadError(e) from e
    finally:
        await response.aclose()


def parse_api_error(status_code: int, body: bytes) -> APIError:
    """
    Build an APIError from an error body.

    Bodies that don't match {"error": {"type", "message"}} are reported
    verbatim with type "Unexpected".
    """
    try:
        envelope = APIErrorResponse.model_validate_json(body)
    except ValidationError:
        return APIError(
            status_code=status_code,
            type=UNEXPECTED_ERROR_TYPE,
            message=body.decode("utf-8", errors="replace"),
        )
    return APIError(
        status_code=status_code,
        type=envelope.error.type,
        message=envelope.error.message,
    )


async def check_for_success(response: httpx.Response) -> None:
    """
    Raise if the response is not a 2xx.

    On failure the body is consumed and the response closed. On success the
    body is left untouched for the caller.

    Raises:
        BodyReadError: If the error body cannot be read
        APIError: For any non-2xx status
    """
    if is_success(response.status_code):
        return
    body = await read_body(response)
    error = parse_api_error(response.status_code, body)
    logger.debug("API error response: %s", error)
    raise error


def decode_model(data: bytes, model: Type[T]) -> T:
    """
    Decode a JSON document into a result model.

    Raises:
        DecodeError: On invalid JSON or a shape the model rejects
    """
    try:
        return model.model_validate(json.loads(data))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise DecodeError(f"invalid json response: {e}") from e


async def decode_response(response: httpx.Response, model: Type[T]) -> T:
    """Read a success body and decode it; the response is closed on every path."""
    body = await read_body(response)
    return decode_model(body, model)
