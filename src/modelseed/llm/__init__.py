"""LLM access: chat client, JSON extraction and structured generation."""

from .client import chat, LLMConfigurationError
from .json_parser import extract_json, JSONParseError
from .structured import generate_structured, StructuredGenerator

__all__ = [
    "chat",
    "LLMConfigurationError",
    "extract_json",
    "JSONParseError",
    "generate_structured",
    "StructuredGenerator",
]
