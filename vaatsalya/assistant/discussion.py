"""Discussion starter panel."""

from vaatsalya.llm import DEFAULT_MODEL, GenerationOutcome, GenerationRequest, RetryClient
from vaatsalya.logging_config import get_logger
from vaatsalya.models import Story

from .prompts import DISCUSSION_SYSTEM, DISCUSSION_USER

logger = get_logger("discussion")


async def generate_discussion(
    client: RetryClient,
    story: Story,
    model: str | None = None,
) -> GenerationOutcome:
    """Generate a moral lesson and discussion prompt for a success story."""
    request = GenerationRequest.from_prompt(
        DISCUSSION_USER.format(story=story.full_story),
        system_instruction=DISCUSSION_SYSTEM,
    )
    logger.info(f"Generating discussion for {story.name}")
    return await client.generate(model or DEFAULT_MODEL, request)
