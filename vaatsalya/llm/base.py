"""Request, result and error types for the generation client."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerationError(Exception):
    """Raised when a generation attempt fails."""


class TransportFailure(GenerationError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class HttpFailure(GenerationError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status: int, detail: str | None = None):
        self.status = status
        self.detail = detail
        message = f"API failed with status: {status}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MalformedResponse(GenerationError):
    """A success response whose body could not be parsed."""


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    MODEL = "model"


class ConversationTurn(BaseModel):
    """One message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="user or model")
    text: str = Field(..., min_length=1, description="Turn text")


class GenerationRequest(BaseModel):
    """Conversation turns plus an optional system instruction."""

    model_config = ConfigDict(frozen=True)

    turns: tuple[ConversationTurn, ...] = Field(..., min_length=1, description="Ordered turns")
    system_instruction: str | None = Field(default=None, description="System-side context")

    @classmethod
    def from_prompt(cls, prompt: str, system_instruction: str | None = None) -> "GenerationRequest":
        """Build a single user-turn request."""
        return cls(
            turns=(ConversationTurn(role=Role.USER, text=prompt),),
            system_instruction=system_instruction,
        )

    def to_payload(self) -> dict[str, Any]:
        """Render the generateContent JSON body."""
        payload: dict[str, Any] = {
            "contents": [
                {"role": turn.role.value, "parts": [{"text": turn.text}]}
                for turn in self.turns
            ],
        }
        if self.system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": self.system_instruction}]}
        return payload


@dataclass(frozen=True)
class Source:
    """A grounding citation backing part of the generated text."""

    uri: str
    title: str


@dataclass
class GenerationResult:
    """Normalized success outcome. Empty text is still a success."""

    text: str
    sources: list[Source] = field(default_factory=list)


@dataclass
class GenerationFailure:
    """Terminal failure outcome of a generate call."""

    error: GenerationError
    attempts: int

    @property
    def message(self) -> str:
        return str(self.error)

    @property
    def status(self) -> int | None:
        if isinstance(self.error, HttpFailure):
            return self.error.status
        return None


GenerationOutcome = GenerationResult | GenerationFailure
