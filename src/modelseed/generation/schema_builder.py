"""Per-model output schemas for structured record generation."""

from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union
from pydantic import BaseModel, ConfigDict, Field, create_model
from modelseed.ir.schema import FieldDefinition, ModelDefinition
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def _literal(values: List[str]) -> Any:
    """Build Literal[...] over an ordered list of allowed strings."""
    return Literal[tuple(values)]


def _reference_description(field: FieldDefinition) -> str:
    kind = "ID" if field.ref_type == "to_one" else "array of IDs"
    target = field.references_model
    if field.references_field:
        target = f"{target}.{field.references_field}"
    return f"A reference {kind} linking to {target}"


def build_field_spec(
    field: FieldDefinition, record_id_map: Dict[str, List[str]]
) -> Tuple[Any, Any]:
    """
    Build the (annotation, FieldInfo) pair for one model field.

    Reference fields are optional and unconstrained while the target model has
    no generated IDs; once it has, values must be drawn from those IDs.

    Args:
        field: Field definition
        record_id_map: Generated IDs by model name

    Returns:
        Tuple usable as a create_model() field definition
    """
    name = field.name
    description = field.description

    if field.type == "number":
        return Union[int, float], Field(
            ..., alias=name, description=description or f"A numeric {name} value"
        )
    if field.type == "boolean":
        return bool, Field(
            ..., alias=name, description=description or f"A boolean {name} value"
        )
    if field.type == "date":
        return str, Field(
            ...,
            alias=name,
            description=description or f"A date string for {name} in YYYY-MM-DD format",
        )
    if field.type == "enum":
        if field.enum_values:
            allowed = ", ".join(field.enum_values)
            return _literal(field.enum_values), Field(
                ...,
                alias=name,
                description=description
                or f"An enum value for {name}. Must be one of: {allowed}",
            )
        return str, Field(
            ..., alias=name, description=description or f"An enum value for {name}"
        )
    if field.type == "reference":
        ref_description = _reference_description(field)
        referenced_ids = record_id_map.get(field.references_model or "", [])
        if not referenced_ids:
            logger.warning(
                f"No IDs available yet for referenced model '{field.references_model}' "
                f"(field '{name}'); leaving the reference unconstrained"
            )
            if field.ref_type == "to_one":
                return Optional[str], Field(None, alias=name, description=ref_description)
            return Optional[List[str]], Field(None, alias=name, description=ref_description)

        id_type = _literal(referenced_ids)
        if field.ref_type == "to_one":
            return id_type, Field(..., alias=name, description=ref_description)
        return List[id_type], Field(..., alias=name, description=ref_description)

    return str, Field(..., alias=name, description=description or f"A {name} value")


def build_record_schema(
    model: ModelDefinition, record_id_map: Dict[str, List[str]]
) -> Type[BaseModel]:
    """
    Build the pydantic schema of a single record of a model.

    The record ``id`` is not part of the schema; it is always assigned locally.
    Python attribute names are positional so any field name can be used as an
    alias; dump with ``by_alias=True``.
    """
    field_specs = {
        f"field_{idx}": build_field_spec(field, record_id_map)
        for idx, field in enumerate(model.fields)
        if field.name != "id"
    }
    return create_model(
        f"{model.name}Record",
        __config__=ConfigDict(extra="ignore", populate_by_name=False),
        **field_specs,
    )


def build_records_schema(
    model: ModelDefinition, record_id_map: Dict[str, List[str]], count: int
) -> Type[BaseModel]:
    """
    Build the schema of a generation reply: exactly ``count`` records.

    Args:
        model: Model definition (display fields resolved)
        record_id_map: Generated IDs by model name
        count: Number of records required

    Returns:
        Pydantic model with a single ``records`` list field
    """
    record_schema = build_record_schema(model, record_id_map)
    schema = create_model(
        f"{model.name}Records",
        records=(
            List[record_schema],
            Field(
                ...,
                min_length=count,
                max_length=count,
                description=f"Exactly {count} {model.name} records",
            ),
        ),
    )
    logger.debug(
        f"Built records schema for '{model.name}' "
        f"({len(model.fields)} fields, count={count})"
    )
    return schema
