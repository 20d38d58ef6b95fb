"""Abstract client for the answer server.

This module hides the design decision of how questions reach the model.
Implementations handle:
- transport setup and authentication
- request encoding
- mapping of transport failures to codeask errors
"""

from abc import abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from ..resources.base import ResourceRegistry
from ..stream.decoder import EventStream
from .models import ModelConfig


class AnswerClient(ResourceRegistry):
    """Resource registry, model config reader and streaming request issuer.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            async with client.ask_question_stream(question, resources) as stream:
                async for event in stream:
                    ...
    """

    @abstractmethod
    async def get_model(self) -> ModelConfig:
        """Read the provider and model the server is configured with."""

    @abstractmethod
    def ask_question_stream(
        self,
        question: str,
        resources: list[str]
    ) -> AbstractAsyncContextManager[EventStream]:
        """Open a streaming answer for a question.

        Returns:
            Async context manager yielding the decoded event stream

        Raises:
            StreamTransportError: If the stream cannot be opened
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "AnswerClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
