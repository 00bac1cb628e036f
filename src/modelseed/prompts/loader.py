"""Utilities for loading and rendering prompt files."""

from functools import lru_cache
from pathlib import Path
from typing import Any
from modelseed.config.logging import get_logger

logger = get_logger(__name__)

# Base directory for prompts
PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_prompt(path: str) -> str:
    """
    Load a prompt file from the prompts directory.

    Args:
        path: Relative path from prompts/ directory, e.g., 'records/records_user.txt'

    Returns:
        Prompt file contents as string

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    full_path = PROMPTS_DIR / path
    if not full_path.exists():
        logger.error(f"Prompt file not found: {full_path}")
        raise FileNotFoundError(f"Prompt file not found: {full_path}")

    content = full_path.read_text(encoding="utf-8")
    logger.debug(f"Loaded prompt from {path}")
    return content


def render_prompt(template: str, **kwargs: Any) -> str:
    """
    Render a prompt template with placeholders.

    Uses str.format() for simple templating. Placeholders in files
    should use {PLACEHOLDER_NAME} format.

    Args:
        template: Template string with placeholders
        **kwargs: Values to fill placeholders

    Returns:
        Rendered prompt string
    """
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.error(f"Missing placeholder in template: {e}")
        raise
