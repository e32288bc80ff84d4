"""
Content models for the assistant panels.

Using Pydantic for validation and serialization.
"""

from pydantic import BaseModel, Field


class Story(BaseModel):
    """A student success story shown on the testimonials page."""

    id: int = Field(..., ge=1, description="Stable story identifier")
    name: str = Field(..., min_length=1, description="Student first name")
    summary: str = Field(..., description="One-line outcome")
    full_story: str = Field(..., min_length=1, description="Narrative analyzed by the discussion starter")
