"""Hypothesis generator panel."""

from vaatsalya.llm import DEFAULT_MODEL, GenerationOutcome, GenerationRequest, RetryClient
from vaatsalya.logging_config import get_logger

from .prompts import HYPOTHESIS_SYSTEM, HYPOTHESIS_USER

logger = get_logger("hypothesis")


def build_hypothesis_request(age: int | str, challenge: str) -> GenerationRequest:
    """Build the request for a testable learning hypothesis."""
    age_text = str(age).strip()
    challenge = challenge.strip()
    if not age_text or not challenge:
        raise ValueError("Both age and challenge are required")

    return GenerationRequest.from_prompt(
        HYPOTHESIS_USER.format(age=age_text, challenge=challenge),
        system_instruction=HYPOTHESIS_SYSTEM,
    )


async def generate_hypothesis(
    client: RetryClient,
    age: int | str,
    challenge: str,
    model: str | None = None,
) -> GenerationOutcome:
    """Ask the advisor for a hypothesis about a student's learning challenge."""
    request = build_hypothesis_request(age, challenge)
    logger.info(f"Generating hypothesis for age {age}")
    return await client.generate(model or DEFAULT_MODEL, request)
