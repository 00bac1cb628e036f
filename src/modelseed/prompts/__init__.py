"""Prompt loading and rendering utilities."""

from .loader import load_prompt, render_prompt, PROMPTS_DIR

__all__ = ["load_prompt", "render_prompt", "PROMPTS_DIR"]
