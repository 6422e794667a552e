"""Shared library utilities."""

from src.core.llm import get_chat_llm
from src.core.logging import get_logger

__all__ = [
    "get_chat_llm",
    "get_logger",
]
