"""Schema-constrained generation on top of the chat client."""

import json
from typing import Callable, Dict, List, Optional, Protocol, Type, TypeVar
from pydantic import BaseModel, ValidationError
from modelseed.llm.client import chat
from modelseed.llm.json_parser import extract_json
from modelseed.generation.constants import (
    ERROR_MESSAGE_TRUNCATE_LENGTH,
    DEBUG_DATA_TRUNCATE_LENGTH,
)
from modelseed.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

SYSTEM_PROMPT = (
    "You generate realistic structured data. Reply with a single JSON object "
    "that validates against this JSON Schema. Do not add explanations, "
    "markdown formatting, or keys that are not in the schema.\n\n"
    "JSON Schema:\n{schema}"
)


class StructuredGenerator(Protocol):
    """Anything that turns a prompt into an instance of a pydantic schema."""

    def __call__(self, prompt: str, schema: Type[T]) -> T:
        ...


def format_validation_error(error: ValidationError) -> str:
    """
    Summarize a ValidationError as one line per failing location.

    Args:
        error: The ValidationError exception

    Returns:
        Multi-line summary, truncated for logging
    """
    lines = []
    for err in error.errors():
        loc = " -> ".join(str(x) for x in err.get("loc", []))
        lines.append(f"{loc}: {err.get('msg', 'Validation error')}")
    summary = "\n".join(lines)
    if len(summary) > ERROR_MESSAGE_TRUNCATE_LENGTH:
        summary = summary[:ERROR_MESSAGE_TRUNCATE_LENGTH] + "..."
    return summary


def generate_structured(
    prompt: str,
    schema: Type[T],
    chat_fn: Optional[Callable[[List[Dict[str, str]], bool], str]] = None,
) -> T:
    """
    Generate an instance of ``schema`` from a natural-language prompt.

    One call, no retry: the reply is parsed and validated, and any failure is
    raised to the caller.

    Args:
        prompt: User prompt
        schema: Pydantic model the reply must validate against
        chat_fn: Chat function (defaults to modelseed.llm.client.chat)

    Returns:
        Validated schema instance

    Raises:
        JSONParseError: If the reply holds no JSON object
        ValidationError: If the reply does not match the schema
    """
    send = chat_fn or chat
    schema_json = json.dumps(schema.model_json_schema(by_alias=True), indent=2)
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT.format(schema=schema_json)},
        {"role": "user", "content": prompt},
    ]
    logger.debug(
        f"Requesting {schema.__name__} (prompt {len(prompt)} chars, "
        f"schema {len(schema_json)} chars)"
    )

    raw = send(messages, True)
    data = extract_json(raw)
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Reply failed {schema.__name__} validation:\n{format_validation_error(e)}"
        )
        logger.debug(f"Rejected data: {str(data)[:DEBUG_DATA_TRUNCATE_LENGTH]}")
        raise
