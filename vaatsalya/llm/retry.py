"""Retry wrapper with exponential backoff and shared busy/error state."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from vaatsalya.logging_config import get_logger

from .base import (
    GenerationError,
    GenerationFailure,
    GenerationOutcome,
    GenerationRequest,
    HttpFailure,
    TransportFailure,
)
from .gemini import GeminiClient

logger = get_logger("retry")

RATE_LIMITED = 429

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class ClientState:
    """Busy/error snapshot shared by every call made through one client."""

    last_error: str | None = None
    _in_flight: int = field(default=0, repr=False)

    @property
    def busy(self) -> bool:
        return self._in_flight > 0


class RetryClient:
    """Wraps a single-attempt client with 429 backoff and terminal outcomes.

    ``generate`` never raises for endpoint or transport problems: every call
    ends in either a ``GenerationResult`` or a ``GenerationFailure``, and the
    shared ``state`` is updated once when the call starts and once when it
    settles. Cancellation is not supported.
    """

    def __init__(
        self,
        inner: GeminiClient,
        max_attempts: int = 3,
        rng: random.Random | None = None,
        sleep: Sleep | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.inner = inner
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep
        self.state = ClientState()

    @property
    def busy(self) -> bool:
        return self.state.busy

    @property
    def last_error(self) -> str | None:
        return self.state.last_error

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after a rate-limited attempt: 2**attempt plus [0, 1) jitter."""
        return 2**attempt + self.rng.random()

    async def generate(
        self,
        model: str,
        request: GenerationRequest,
        max_attempts: int | None = None,
    ) -> GenerationOutcome:
        """Generate text, retrying rate-limited attempts with backoff."""
        attempts_allowed = self.max_attempts if max_attempts is None else max_attempts
        if not model:
            raise ValueError("model must be a non-empty string")
        if attempts_allowed < 1:
            raise ValueError("max_attempts must be at least 1")

        self.state._in_flight += 1
        self.state.last_error = None
        try:
            outcome = await self._attempt_loop(model, request, attempts_allowed)
        finally:
            self.state._in_flight -= 1

        if isinstance(outcome, GenerationFailure):
            self.state.last_error = outcome.message
            logger.error(f"Generation with {model} failed after {outcome.attempts} attempt(s): {outcome.message}")
        return outcome

    async def _attempt_loop(
        self,
        model: str,
        request: GenerationRequest,
        attempts_allowed: int,
    ) -> GenerationOutcome:
        last_error: GenerationError | None = None

        for attempt in range(attempts_allowed):
            is_last = attempt == attempts_allowed - 1
            logger.debug(f"{model}: attempt {attempt + 1}/{attempts_allowed}")
            try:
                return await self.inner.send(model, request)
            except TransportFailure as exc:
                if is_last:
                    return GenerationFailure(error=exc, attempts=attempt + 1)
                logger.warning(f"{model}: {exc}; retrying")
                last_error = exc
            except HttpFailure as exc:
                if exc.status != RATE_LIMITED or is_last:
                    return GenerationFailure(error=exc, attempts=attempt + 1)
                delay = self.backoff_delay(attempt)
                logger.warning(f"{model}: rate limited, retrying in {delay:.2f}s")
                last_error = exc
                await self._sleep(delay)
            except GenerationError as exc:
                return GenerationFailure(error=exc, attempts=attempt + 1)
            except Exception as exc:
                logger.exception(f"Unexpected error calling {model}")
                return GenerationFailure(
                    error=GenerationError(f"Unexpected error: {exc}"),
                    attempts=attempt + 1,
                )

        return GenerationFailure(
            error=last_error or GenerationError("No attempts were made"),
            attempts=attempts_allowed,
        )

    async def aclose(self) -> None:
        await self.inner.aclose()

    async def __aenter__(self) -> "RetryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
