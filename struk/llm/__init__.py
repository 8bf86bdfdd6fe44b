"""LLM clients for receipt parsing."""

from .gemini_client import GeminiParser
from .prompts import TOKEN_EXTRACTION_PROMPT

__all__ = ["GeminiParser", "TOKEN_EXTRACTION_PROMPT"]
