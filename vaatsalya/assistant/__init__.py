"""Assistant panels built on the resilient generation client."""

from .chat import ChatSession
from .discussion import generate_discussion
from .hypothesis import build_hypothesis_request, generate_hypothesis

__all__ = [
    "ChatSession",
    "build_hypothesis_request",
    "generate_discussion",
    "generate_hypothesis",
]
