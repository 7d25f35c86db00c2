"""
GPT3Client - typed operations over the request/response pipeline.

Each operation is a fixed (verb, path, payload, result) mapping:
RequestBuilder builds the request, the Transport sends it, and the
response module classifies and decodes what comes back.
"""

import inspect
import logging
import os
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from gpt3_client.config import ClientConfig, Engine, FilePurpose
from gpt3_client.errors import ConfigurationError, TransportError
from gpt3_client.models import (
    CompletionRequest,
    CompletionResponse,
    EditsRequest,
    EditsResponse,
    EmbeddingsRequest,
    EmbeddingsResponse,
    EngineObject,
    EnginesResponse,
    FileDeleteResponse,
    FileUploadResponse,
    FineTuneOptions,
    FineTuneResponse,
    SearchRequest,
    SearchResponse,
)
from gpt3_client.request_builder import RequestBuilder
from gpt3_client.response import check_for_success, decode_response
from gpt3_client.streaming import StreamDecoder
from gpt3_client.transport import HTTPXTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

OnData = Callable[[CompletionResponse], Optional[Awaitable[None]]]


def _engine_name(engine: Union[str, Engine]) -> str:
    return engine.value if isinstance(engine, Engine) else engine


class GPT3Client:
    """
    Async client for the GPT-3 HTTP API.

    The configuration is immutable, so one client can serve many
    concurrent calls. Each call owns its own request and response.

    Usage:
        async with GPT3Client("sk-...") as client:
            rsp = await client.completion(CompletionRequest(prompt="Hello"))

    Cancellation: wrap a call in asyncio.timeout()/wait_for() or cancel
    its task; the in-flight response is closed either way.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        base_url: Optional[str] = None,
        organization: Optional[str] = None,
        default_engine: Optional[Union[str, Engine]] = None,
        timeout_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Create a client from a ClientConfig or from keyword options.

        Keyword options override the matching fields of ``config``.

        Args:
            api_key: API key (required unless config is given)
            config: Base configuration, e.g. from load_config_from_env()
            base_url: API root, default https://api.openai.com/v1
            organization: Sent as the OpenAI-Organization header when set
            default_engine: Engine used when an operation gets none
            timeout_seconds: Timeout for the owned httpx client
            user_agent: User-Agent header value
            http_client: Pre-configured httpx.AsyncClient to send through
            transport: Custom Transport; takes precedence over http_client

        Raises:
            ConfigurationError: If the API key is missing or an option is invalid
        """
        overrides: dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url,
            "organization": organization,
            "default_engine": default_engine,
            "timeout_seconds": timeout_seconds,
            "user_agent": user_agent,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        try:
            if config is not None:
                fields = config.model_dump()
                fields.update(overrides)
                config = ClientConfig(**fields)
            else:
                config = ClientConfig(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"invalid client configuration: {e}") from e

        self._config = config
        self._builder = RequestBuilder(config)
        self._owns_transport = transport is None
        self._transport: Transport = transport or HTTPXTransport(
            http_client=http_client,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "GPT3Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    # ─────────────────────────────────────────────────────────────────
    # PIPELINE
    # ─────────────────────────────────────────────────────────────────

    async def _send(self, request: httpx.Request) -> httpx.Response:
        logger.debug("%s %s", request.method, request.url)
        try:
            return await self._transport.send(request)
        except TransportError:
            raise
        except (httpx.HTTPError, OSError) as e:
            # Custom transports may raise raw network errors
            raise TransportError(request.method, str(request.url), e) from e

    async def _perform(self, request: httpx.Request, result: Type[T]) -> T:
        response = await self._send(request)
        try:
            await check_for_success(response)
            return await decode_response(response, result)
        finally:
            await response.aclose()

    async def _call(
        self,
        method: str,
        path: str,
        result: Type[T],
        payload: Optional[Any] = None,
    ) -> T:
        request = self._builder.build(method, path, payload)
        return await self._perform(request, result)

    def _completions_path(self, engine: Optional[Union[str, Engine]]) -> str:
        return f"/engines/{_engine_name(engine or self._config.default_engine)}/completions"

    # ─────────────────────────────────────────────────────────────────
    # ENGINES
    # ─────────────────────────────────────────────────────────────────

    async def engines(self) -> EnginesResponse:
        """List the available engines with owner and availability."""
        return await self._call("GET", "/engines", EnginesResponse)

    async def engine(self, engine: Union[str, Engine]) -> EngineObject:
        """Retrieve a single engine."""
        return await self._call("GET", f"/engines/{_engine_name(engine)}", EngineObject)

    # ─────────────────────────────────────────────────────────────────
    # COMPLETIONS
    # ─────────────────────────────────────────────────────────────────

    async def completion(
        self,
        request: CompletionRequest,
        engine: Optional[Union[str, Engine]] = None,
    ) -> CompletionResponse:
        """
        Create a completion for the prompt.

        Args:
            request: Prompt and sampling options (stream is forced off)
            engine: Engine to use; the client's default engine when omitted
        """
        payload = request.model_copy(update={"stream": False})
        return await self._call("POST", self._completions_path(engine), CompletionResponse, payload)

    async def iter_completion_stream(
        self,
        request: CompletionRequest,
        engine: Optional[Union[str, Engine]] = None,
    ) -> AsyncIterator[CompletionResponse]:
        """
        Stream a completion, yielding one CompletionResponse per event.

        Nothing is sent until iteration starts. The response is closed
        when the stream completes, fails, or the iterator is closed.

        Raises:
            TransportError, BodyReadError, APIError: Before the first event
            StreamReadError, DecodeError: Mid-stream
        """
        payload = request.model_copy(update={"stream": True})
        http_request = self._builder.build("POST", self._completions_path(engine), payload)
        response = await self._send(http_request)
        try:
            await check_for_success(response)
            decoder = StreamDecoder(response.aiter_lines(), CompletionResponse)
            async with aclosing(decoder.events()) as events:
                async for event in events:
                    yield event
        finally:
            await response.aclose()

    async def completion_stream(
        self,
        request: CompletionRequest,
        on_data: OnData,
        engine: Optional[Union[str, Engine]] = None,
    ) -> None:
        """
        Stream a completion, calling on_data for each event in order.

        on_data runs inline with the read loop; if it returns an awaitable
        that is awaited before the next line is read. Events delivered
        before a failure stay delivered.
        """
        async with aclosing(self.iter_completion_stream(request, engine)) as events:
            async for event in events:
                result = on_data(event)
                if inspect.isawaitable(result):
                    await result

    # ─────────────────────────────────────────────────────────────────
    # EDITS / SEARCH / EMBEDDINGS
    # ─────────────────────────────────────────────────────────────────

    async def edits(self, request: EditsRequest) -> EditsResponse:
        """Return an edited version of the input following the instruction."""
        return await self._call("POST", "/edits", EditsResponse, request)

    async def search(
        self,
        request: SearchRequest,
        engine: Optional[Union[str, Engine]] = None,
    ) -> SearchResponse:
        """Semantic search over the request's documents."""
        engine_name = _engine_name(engine or self._config.default_engine)
        return await self._call("POST", f"/engines/{engine_name}/search", SearchResponse, request)

    async def create_embeddings(self, request: EmbeddingsRequest) -> EmbeddingsResponse:
        """Embed each input string with the requested model."""
        return await self._call("POST", "/embeddings", EmbeddingsResponse, request)

    # ─────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────

    async def upload_file(
        self,
        filename: Union[str, os.PathLike],
        purpose: Union[str, FilePurpose],
    ) -> FileUploadResponse:
        """
        Upload a file for use by other endpoints (fine-tunes, search, ...).

        The file is read while the multipart body is built and closed
        before the request is sent.

        Raises:
            OSError: If the file cannot be opened or read
        """
        purpose_value = purpose.value if isinstance(purpose, FilePurpose) else purpose
        with open(filename, "rb") as fh:
            request = self._builder.build_multipart(
                "/files",
                files={"file": (os.path.basename(os.fspath(filename)), fh.read())},
                data={"purpose": purpose_value},
            )
        return await self._perform(request, FileUploadResponse)

    async def delete_file(self, file_id: str) -> FileDeleteResponse:
        return await self._call("DELETE", f"/files/{file_id}", FileDeleteResponse)

    # ─────────────────────────────────────────────────────────────────
    # FINE-TUNES
    # ─────────────────────────────────────────────────────────────────

    async def create_fine_tune(
        self,
        options: Union[str, FineTuneOptions],
    ) -> FineTuneResponse:
        """
        Start a fine-tune job.

        Args:
            options: Training file id, or full FineTuneOptions
        """
        if isinstance(options, str):
            options = FineTuneOptions(training_file=options)
        return await self._call("POST", "/fine-tunes", FineTuneResponse, options)

    async def get_fine_tune(self, fine_tune_id: str) -> FineTuneResponse:
        """Get status, events and results of a fine-tune job."""
        return await self._call("GET", f"/fine-tunes/{fine_tune_id}", FineTuneResponse)
