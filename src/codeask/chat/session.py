"""Chat session and turn orchestration.

The session is the single owner of the transcript, the thread lifecycle
and the cancel signal. Surfaces (CLI, TUI) hold a reference to it instead
of sharing global state.
"""

import logging

from pydantic import BaseModel, Field

from ..client.base import AnswerClient
from ..client.models import ModelConfig
from ..config import WELCOME_MESSAGE
from ..exceptions import StreamTransportError
from ..memory.base import ThreadStore
from ..memory.lifecycle import ThreadManager
from ..memory.models import QuestionStatus
from ..resources.resolver import merge_resources, parse_query, resolve_resources
from ..stream.handlers import StreamHandlers
from ..stream.models import ErrorEvent
from .accumulator import MessageAccumulator
from .cancellation import CancellationCoordinator
from .models import Message, Role

logger = logging.getLogger(__name__)


class TurnResult(BaseModel):
    """Outcome of one question/answer turn."""

    question_id: str | None = Field(default=None, description="Store id of the question")
    prompt: str
    resources: list[str]
    status: QuestionStatus
    answer: str = ""
    errors: list[str] = Field(default_factory=list)


class ChatSession:
    """A conversation with the answer server.

    Turns run strictly one at a time and events are applied in arrival
    order. A cancel request does not cut the stream short: every event of
    the turn is still applied, and the turn ends as canceled.

    Example:
        session = ChatSession(client, store)
        await session.start()
        result = await session.ask("@react how does useEffect cleanup work?")
    """

    def __init__(
        self,
        client: AnswerClient,
        store: ThreadStore,
        model: ModelConfig | None = None
    ):
        self._client = client
        self.messages: list[Message] = [Message.text(Role.SYSTEM, WELCOME_MESSAGE)]
        self.threads = ThreadManager(store)
        self.accumulator = MessageAccumulator(self.messages)
        self.cancel = CancellationCoordinator(self.accumulator, self.threads)
        self.model = model
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """Whether a turn is currently streaming."""
        return self._in_flight

    async def start(self) -> None:
        """Read the model configuration unless given, and create the thread."""
        if self.model is None:
            self.model = await self._client.get_model()
        await self.threads.initialize_thread()

    def add_message(self, message: Message) -> None:
        self.messages.append(message)

    def clear_messages(self) -> None:
        """Reset the transcript to the welcome message."""
        self.messages[:] = [Message.text(Role.SYSTEM, WELCOME_MESSAGE)]
        self.accumulator.begin_turn()

    def request_cancel(self) -> bool:
        """Flag the in-flight turn as canceled once its stream ends."""
        return self.cancel.request()

    async def ask(
        self,
        raw: str,
        explicit: list[str] | None = None,
        single: str | None = None,
        handlers: StreamHandlers | None = None,
    ) -> TurnResult:
        """Run one turn: resolve resources, stream the answer, persist it.

        Args:
            raw: Question as typed, possibly with @mentions
            explicit: Resources requested outside the text
            single: One more resource alias
            handlers: Callbacks notified while the answer streams

        Returns:
            TurnResult with the final status of the question

        Raises:
            EmptyResourceSetError: If no resources are named or configured
            PersistenceError: If the thread store rejects a call
        """
        parsed = parse_query(raw)
        names = merge_resources(list(explicit or []), parsed.resources, single)
        resources = await resolve_resources(self._client, names)

        self.cancel.reset()
        await self.threads.initialize_thread()
        self.threads.add_resources_to_thread(resources)

        self.add_message(Message.text(Role.USER, raw.strip()))
        self.accumulator.set_handlers(handlers)
        self.accumulator.begin_turn()

        self._in_flight = True
        try:
            question_id = await self.threads.add_question_to_thread(
                prompt=parsed.query, resources=resources
            )
            errors = await self._stream_answer(parsed.query, resources)

            if self.cancel.is_requested:
                logger.info("Turn for question %s canceled", question_id)
                await self.cancel.acknowledge()
                status = QuestionStatus.CANCELED
            else:
                await self.threads.update_last_question_answer(self.accumulator.answer_text())
                status = QuestionStatus.ANSWERED
        finally:
            self.accumulator.finalize()
            self._in_flight = False

        return TurnResult(
            question_id=question_id,
            prompt=parsed.query,
            resources=resources,
            status=status,
            answer=self.accumulator.answer_text(),
            errors=errors,
        )

    async def _stream_answer(self, question: str, resources: list[str]) -> list[str]:
        errors: list[str] = []
        try:
            async with self._client.ask_question_stream(question, resources) as stream:
                async for event in stream:
                    self.accumulator.apply(event)
                    if isinstance(event, ErrorEvent):
                        errors.append(event.message)
        except StreamTransportError as e:
            self.accumulator.apply(ErrorEvent(message=str(e)))
            errors.append(str(e))
        return errors
