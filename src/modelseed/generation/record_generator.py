"""AI record generation for a single model, with reference repair and fallback."""

import uuid
from typing import Any, Callable, Dict, List, Optional
from modelseed.ir.schema import AgentAction, ModelDefinition, Schedule
from modelseed.llm.structured import StructuredGenerator, generate_structured
from modelseed.generation.schema_builder import build_records_schema
from modelseed.generation.prompting import build_generation_prompt, RecordsByModel
from modelseed.generation.fallback import FallbackRecordGenerator
from modelseed.generation.error_logging import log_error_with_recovery
from modelseed.generation.constants import STEP_OUTPUT_MARKER
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def repair_references(
    record: Dict[str, Any],
    model: ModelDefinition,
    record_id_map: Dict[str, List[str]],
) -> Dict[str, Any]:
    """
    Force reference values onto the known IDs of their target models.

    A to-one value outside the known set becomes the first known ID. A to-many
    list is filtered to known IDs; if that empties a non-empty list, it becomes
    the first known ID alone. Fields whose target has no known IDs are left as
    generated.

    Args:
        record: Record to repair in place
        model: Model the record belongs to
        record_id_map: Generated IDs by model name

    Returns:
        The same record
    """
    for field in model.reference_fields():
        known_ids = record_id_map.get(field.references_model, [])
        if not known_ids:
            continue
        known = set(known_ids)
        value = record.get(field.name)

        if field.ref_type == "to_one":
            if value not in known:
                record[field.name] = known_ids[0]
            continue

        if value is None:
            continue
        if isinstance(value, list):
            valid = [ref_id for ref_id in value if ref_id in known]
            if not valid and value:
                valid = [known_ids[0]]
            record[field.name] = valid
        else:
            record[field.name] = [value] if value in known else [known_ids[0]]
    return record


def generate_records_for_model(
    model: ModelDefinition,
    records_by_model: RecordsByModel,
    record_id_map: Dict[str, List[str]],
    record_display_map: Dict[str, Dict[str, str]],
    actions: List[AgentAction],
    schedules: List[Schedule],
    agent_name: str,
    agent_description: Optional[str] = None,
    count: int = 5,
    generator: Optional[StructuredGenerator] = None,
    id_factory: Callable[[], str] = _new_id,
    fallback: Optional[FallbackRecordGenerator] = None,
) -> List[Dict[str, Any]]:
    """
    Generate exactly ``count`` records for one model.

    One structured generation call produces all records. Every record gets a
    fresh local ID and its references repaired. If anything fails, the whole
    set comes from the fallback generator instead.

    Args:
        model: Model definition with display fields resolved
        records_by_model: Records generated so far, by model name
        record_id_map: Generated IDs by model name
        record_display_map: Display string by record ID, by model name
        actions: All automation actions of the agent
        schedules: All schedules of the agent
        agent_name: Owning agent's name
        agent_description: Owning agent's description
        count: Number of records
        generator: Structured generator (defaults to generate_structured)
        id_factory: Produces record IDs
        fallback: Fallback generator (defaults to an unseeded one)

    Returns:
        List of ``count`` records
    """
    generate = generator or generate_structured
    try:
        schema = build_records_schema(model, record_id_map, count)
        prompt = build_generation_prompt(
            model,
            count,
            records_by_model,
            record_id_map,
            record_display_map,
            actions,
            schedules,
            agent_name,
            agent_description,
        )
        result = generate(prompt, schema)

        step_output_fields = [
            f.name
            for f in model.fields
            if f.description and STEP_OUTPUT_MARKER in f.description
        ]

        records = []
        for generated in result.records:
            record = {"id": id_factory(), **generated.model_dump(by_alias=True)}
            for name in step_output_fields:
                record[name] = None
            records.append(repair_references(record, model, record_id_map))

        if len(records) != count:
            raise ValueError(
                f"Expected {count} records for '{model.name}', got {len(records)}"
            )
        return records

    except Exception as e:
        log_error_with_recovery(
            error=e,
            recovery_action=f"Generating {count} fallback records for '{model.name}'",
            context={"count": count, "fields": len(model.fields)},
            operation="AI record generation",
            model_name=model.name,
        )
        fallback = fallback or FallbackRecordGenerator(id_factory=id_factory)
        return fallback.generate(model, record_id_map, count)
