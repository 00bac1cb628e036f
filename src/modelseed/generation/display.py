"""Display fields: how a record is summarized when it is referenced elsewhere."""

from typing import Any, Dict, List
from modelseed.ir.schema import ModelDefinition
from modelseed.generation.constants import DESCRIPTIVE_FIELD_TERMS, DISPLAY_SEPARATOR


def resolve_display_fields(model: ModelDefinition) -> List[str]:
    """
    Choose the field names that summarize a record of this model.

    Declared display fields win. Otherwise: the first field whose name
    contains "name" or "title", then descriptive text fields (title, label,
    description, species, type, category), then the first text field, then
    "id".

    Args:
        model: Model definition

    Returns:
        Non-empty list of field names in declaration order
    """
    if model.display_fields:
        return list(model.display_fields)

    display_fields: List[str] = []

    name_field = next(
        (
            f
            for f in model.fields
            if "name" in f.name.lower() or "title" in f.name.lower()
        ),
        None,
    )
    if name_field is not None:
        display_fields.append(name_field.name)

    for f in model.fields:
        if f.type != "text" or f.name in display_fields:
            continue
        lowered = f.name.lower()
        if any(term in lowered for term in DESCRIPTIVE_FIELD_TERMS):
            display_fields.append(f.name)

    if not display_fields:
        first_text = next((f for f in model.fields if f.type == "text"), None)
        if first_text is not None:
            display_fields.append(first_text.name)

    return display_fields or ["id"]


def with_display_fields(model: ModelDefinition) -> ModelDefinition:
    """Return a working copy of the model with display fields resolved."""
    if model.display_fields:
        return model
    return model.model_copy(update={"display_fields": resolve_display_fields(model)})


def format_display_value(record: Dict[str, Any], display_fields: List[str]) -> str:
    """Join the non-empty display values of a record; fall back to its ID."""
    values = [str(record[f]) for f in display_fields if record.get(f)]
    if values:
        return DISPLAY_SEPARATOR.join(values)
    return str(record.get("id", ""))


def build_display_map(
    records: List[Dict[str, Any]], display_fields: List[str]
) -> Dict[str, str]:
    """Map each record ID to its display string."""
    return {
        record["id"]: format_display_value(record, display_fields)
        for record in records
    }
