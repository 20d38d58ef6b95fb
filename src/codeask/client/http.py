"""HTTP client for the answer server.

Streams answers as Server-Sent Events over httpx.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..config import DEFAULT_SERVER_URL, DEFAULT_TIMEOUT_SECONDS
from ..exceptions import StreamTransportError
from ..resources.models import Resource
from ..stream.decoder import EventStream
from .base import AnswerClient
from .models import ModelConfig, QuestionRequest

logger = logging.getLogger(__name__)


class HttpAnswerClient(AnswerClient):
    """Answer server client over HTTP.

    Hidden design decisions:
    - endpoint paths and payload shapes
    - connection pooling (one shared httpx.AsyncClient)
    - translation of HTTP failures into StreamTransportError
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            base_url: Root URL of the answer server
            timeout: Read timeout in seconds for every request
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout, connect=10.0),
            **client_kwargs
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def list_resources(self) -> list[Resource]:
        data = await self._get_json("/resources")
        return [Resource.model_validate(item) for item in data.get("resources", [])]

    async def get_model(self) -> ModelConfig:
        data = await self._get_json("/config")
        return ModelConfig.model_validate(data)

    @asynccontextmanager
    async def ask_question_stream(
        self,
        question: str,
        resources: list[str]
    ) -> AsyncIterator[EventStream]:
        request = QuestionRequest(question=question, resources=resources)
        logger.debug("Asking %r over %s", question, resources)

        try:
            async with self._client.stream(
                "POST",
                "/question/stream",
                json=request.model_dump(),
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.is_error:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise StreamTransportError(
                        f"Server returned {response.status_code}: {body[:500]}",
                        status_code=response.status_code,
                    )

                stream = EventStream(response.aiter_lines())
                try:
                    yield stream
                finally:
                    await stream.aclose()
        except httpx.HTTPError as e:
            raise StreamTransportError(f"Could not reach {self._base_url}: {e}") from e

    async def _get_json(self, path: str) -> dict[str, Any]:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StreamTransportError(
                f"Server returned {e.response.status_code} for {path}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise StreamTransportError(f"Could not reach {self._base_url}: {e}") from e
        return response.json()

    async def close(self) -> None:
        await self._client.aclose()
