"""Utilities for loading agent schemas and saving generated records."""

import json
from pathlib import Path
from typing import Any, Dict, List
from pydantic import TypeAdapter
from modelseed.ir.schema import AgentSchema


def load_agent_schema(schema_path: Path) -> AgentSchema:
    """
    Load an AgentSchema from a JSON file.

    Args:
        schema_path: Path to the JSON file

    Returns:
        Loaded AgentSchema instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid agent schema
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    file_content = schema_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"Schema file is empty: {schema_path}")

    try:
        return TypeAdapter(AgentSchema).validate_json(file_content)
    except Exception as e:
        raise ValueError(f"Failed to load agent schema from {schema_path}: {e}") from e


def save_records_to_json(
    records_by_model: Dict[str, List[Dict[str, Any]]], out_path: Path
) -> Path:
    """
    Save generated records to a JSON file keyed by model name.

    Note:
        Creates parent directories if they don't exist.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps(records_by_model, indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    return out_path
