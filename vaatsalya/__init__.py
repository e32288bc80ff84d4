"""Vaatsalya school assistant: Gemini-backed hypothesis, discussion and chat tools."""

__version__ = "0.1.0"
