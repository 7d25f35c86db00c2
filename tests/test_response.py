"""Tests for gpt3_client.response — status classification and body decoding."""

import httpx
import pytest

from gpt3_client.errors import APIError, BodyReadError, DecodeError
from gpt3_client.models import EnginesResponse, SearchResponse
from gpt3_client.response import (
    check_for_success,
    decode_model,
    decode_response,
    is_success,
    parse_api_error,
)
from tests.conftest import ErrorStream


class TestIsSuccess:

    @pytest.mark.parametrize("code", [200, 201, 204, 299])
    def test_2xx_is_success(self, code):
        assert is_success(code)

    @pytest.mark.parametrize("code", [100, 199, 300, 301, 400, 429, 500, 503])
    def test_everything_else_fails(self, code):
        assert not is_success(code)


class TestParseApiError:

    def test_envelope(self):
        body = b'{"error": {"type": "invalid_request_error", "message": "No such engine"}}'

        error = parse_api_error(404, body)

        assert error == APIError(404, "invalid_request_error", "No such engine")

    def test_body_status_is_ignored(self):
        body = b'{"error": {"type": "server_error", "message": "boom", "status_code": 200}}'

        assert parse_api_error(502, body).status_code == 502

    def test_plain_text_is_unexpected(self):
        error = parse_api_error(503, b"<html>Service Unavailable</html>")

        assert error == APIError(503, "Unexpected", "<html>Service Unavailable</html>")

    def test_empty_body_keeps_status(self):
        error = parse_api_error(500, b"")

        assert str(error) == "[500:Unexpected] "
        assert error.status_code == 500

    def test_json_without_envelope_is_unexpected(self):
        error = parse_api_error(400, b'{"detail": "bad"}')

        assert error.type == "Unexpected"
        assert error.message == '{"detail": "bad"}'

    def test_error_as_string_is_unexpected(self):
        error = parse_api_error(400, b'{"error": "bad request"}')

        assert error.type == "Unexpected"


class TestCheckForSuccess:

    @pytest.mark.asyncio
    async def test_success_passes_through(self):
        response = httpx.Response(200, content=b'{"data": []}')

        await check_for_success(response)

        assert response.content == b'{"data": []}'

    @pytest.mark.asyncio
    async def test_failure_raises_and_closes(self):
        response = httpx.Response(401, json={"error": {"type": "auth", "message": "bad key"}})

        with pytest.raises(APIError, match=r"^\[401:auth\] bad key$"):
            await check_for_success(response)

        assert response.is_closed

    @pytest.mark.asyncio
    async def test_unreadable_error_body(self):
        response = httpx.Response(500, stream=ErrorStream("read error"))

        with pytest.raises(BodyReadError, match="^failed to read from body: read error$"):
            await check_for_success(response)

        assert response.is_closed


class TestDecode:

    def test_decode_model(self):
        result = decode_model(b'{"data": [{"document": 0, "score": 1.5}], "object": "list"}', SearchResponse)

        assert result.data[0].score == 1.5
        assert result.object == "list"

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_model(b"invalid json", EnginesResponse)

        assert str(exc_info.value) == "invalid json response: Expecting value: line 1 column 1 (char 0)"

    def test_shape_mismatch(self):
        with pytest.raises(DecodeError, match="^invalid json response: "):
            decode_model(b'{"data": [{"ready": "not-a-bool"}]}', EnginesResponse)

    @pytest.mark.asyncio
    async def test_decode_response_closes(self):
        response = httpx.Response(200, json={"data": [], "object": "list"})

        result = await decode_response(response, EnginesResponse)

        assert result == EnginesResponse(object="list")
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_unreadable_success_body(self):
        response = httpx.Response(200, stream=ErrorStream("reset"))

        with pytest.raises(BodyReadError, match="reset"):
            await decode_response(response, EnginesResponse)
