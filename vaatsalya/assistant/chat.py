"""Conversational assistant panel."""

from vaatsalya.llm import (
    DEFAULT_MODEL,
    ConversationTurn,
    GenerationOutcome,
    GenerationRequest,
    GenerationResult,
    RetryClient,
    Role,
)
from vaatsalya.logging_config import get_logger

from .prompts import CHAT_SYSTEM

logger = get_logger("chat")


class ChatSession:
    """Multi-turn conversation with the school assistant.

    The whole history is sent on every turn. A user turn is kept even when
    the call fails; a model turn is only recorded for non-empty replies.
    """

    def __init__(self, client: RetryClient, model: str | None = None):
        self.client = client
        self.model = model or DEFAULT_MODEL
        self.history: list[ConversationTurn] = []

    async def send(self, text: str) -> GenerationOutcome:
        """Send a user message and record the reply."""
        text = text.strip()
        if not text:
            raise ValueError("Message cannot be empty")

        self.history.append(ConversationTurn(role=Role.USER, text=text))
        request = GenerationRequest(turns=tuple(self.history), system_instruction=CHAT_SYSTEM)

        logger.debug(f"Sending chat turn {len(self.history)}")
        outcome = await self.client.generate(self.model, request)

        if isinstance(outcome, GenerationResult) and outcome.text:
            self.history.append(ConversationTurn(role=Role.MODEL, text=outcome.text))
        return outcome

    def reset(self) -> None:
        self.history.clear()
