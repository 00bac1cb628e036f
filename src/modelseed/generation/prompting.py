"""Natural-language generation prompts for one model's records."""

from typing import Any, Dict, List, Optional, Tuple
from modelseed.ir.schema import (
    AgentAction,
    FieldDefinition,
    ModelDefinition,
    Schedule,
)
from modelseed.prompts.loader import load_prompt, render_prompt
from modelseed.generation.constants import REFERENCE_SAMPLE_SIZE, TO_MANY_PROMPT_RANGE

RecordsByModel = Dict[str, List[Dict[str, Any]]]


def find_model_automation(
    model: ModelDefinition,
    actions: List[AgentAction],
    schedules: List[Schedule],
) -> Tuple[List[AgentAction], List[Schedule]]:
    """
    Find the actions and schedules that read or write records of a model.

    A schedule operates on the model when one of its steps queries the model
    or runs an action that targets it.
    """
    actions_by_name = {a.name: a for a in actions}
    model_actions = [a for a in actions if a.target_model == model.name]

    def _touches(step) -> bool:
        if step.model_name == model.name:
            return True
        action = actions_by_name.get(step.action_name or "")
        return action is not None and action.target_model == model.name

    model_schedules = [s for s in schedules if any(_touches(step) for step in s.steps)]
    return model_actions, model_schedules


def _describe_reference_field(
    field: FieldDefinition,
    records_by_model: RecordsByModel,
    record_id_map: Dict[str, List[str]],
    record_display_map: Dict[str, Dict[str, str]],
) -> str:
    target = field.references_model
    target_ref = f"{target}.{field.references_field}" if field.references_field else target
    single = field.ref_type == "to_one"
    available_ids = record_id_map.get(target, [])
    display_map = record_display_map.get(target, {})
    samples = ", ".join(
        f"{record['id']} ({display_map.get(record['id'], record['id'])})"
        for record in records_by_model.get(target, [])[:REFERENCE_SAMPLE_SIZE]
    )
    return (
        f"- {field.label} ({field.name}) "
        f"({'single reference' if single else 'multiple references'}): "
        f"{field.description or 'No description'} -> "
        f"{'must reference exactly one' if single else 'can reference multiple'} {target_ref}\n"
        f"  Available records: {samples or 'none yet'}\n"
        f"  Available IDs: {', '.join(available_ids) or 'none yet'}"
    )


def describe_fields(
    model: ModelDefinition,
    records_by_model: RecordsByModel,
    record_id_map: Dict[str, List[str]],
    record_display_map: Dict[str, Dict[str, str]],
) -> str:
    """Render one line per field, with reference targets for reference fields."""
    lines = []
    for field in model.fields:
        if field.type == "reference":
            lines.append(
                _describe_reference_field(
                    field, records_by_model, record_id_map, record_display_map
                )
            )
            continue
        line = f"- {field.label} ({field.name}) ({field.type or 'text'}): "
        line += field.description or "No description"
        if field.type == "enum" and field.enum_values:
            line += f" [one of: {', '.join(field.enum_values)}]"
        lines.append(line)
    return "\n".join(lines)


def build_relationship_context(
    model: ModelDefinition,
    records_by_model: RecordsByModel,
    record_display_map: Dict[str, Dict[str, str]],
) -> str:
    """List every record a reference field of this model may point at."""
    reference_fields = model.reference_fields()
    if not reference_fields:
        return ""

    lines = ["", "RELATIONSHIP CONTEXT:", "AVAILABLE RECORDS FOR RELATIONSHIPS:"]
    for field in reference_fields:
        target = field.references_model
        relation = "belongs to one" if field.ref_type == "to_one" else "can have multiple"
        display_map = record_display_map.get(target, {})
        lines.append("")
        lines.append(f"{model.name}.{field.name} {relation} {target}:")
        lines.append("Available records:")
        for record in records_by_model.get(target, []):
            lines.append(f"- ID {record['id']}: {display_map.get(record['id'], record['id'])}")
    lines.append("")
    lines.append(
        "IMPORTANT: Use ONLY the IDs shown above when creating references. "
        "Each reference must match an existing record."
    )
    return "\n".join(lines) + "\n"


def build_automation_context(
    model_actions: List[AgentAction],
    model_schedules: List[Schedule],
    actions: List[AgentAction],
) -> str:
    """Describe the automation that will operate on the generated data."""
    if not model_actions and not model_schedules:
        return ""

    actions_by_name = {a.name: a for a in actions}
    lines = ["", "ACTIONS & SCHEDULES THAT WILL OPERATE ON THIS DATA:"]

    if model_actions:
        lines.append("")
        lines.append("Actions:")
        for action in model_actions:
            lines.append(f"- {action.name}: {action.description or 'No description'}")
            for step in action.steps:
                reads = ", ".join(step.input_fields) or "none"
                writes = ", ".join(step.output_fields) or "none"
                lines.append(
                    f"  * {step.name} ({step.type or 'step'}): reads [{reads}] -> generates [{writes}]"
                )

    if model_schedules:
        lines.append("")
        lines.append("Schedules:")
        for schedule in model_schedules:
            if schedule.mode == "recurring" and schedule.interval_hours:
                cadence = f" every {schedule.interval_hours:g} hours"
            elif schedule.mode == "once":
                cadence = " (one-time)"
            else:
                cadence = ""
            lines.append(f"- {schedule.name} ({schedule.mode}{cadence}): {schedule.status}")
            for idx, step in enumerate(schedule.steps, 1):
                action = actions_by_name.get(step.action_name or "")
                query_model = step.model_name or (action.target_model if action else None)
                line = f"  {idx}. Query {query_model or 'matching'} records"
                if step.action_name:
                    line += f" -> Run \"{step.action_name}\" action"
                lines.append(line)

    return "\n".join(lines) + "\n" + load_prompt("records/automation_guidance.txt")


def build_generation_prompt(
    model: ModelDefinition,
    count: int,
    records_by_model: RecordsByModel,
    record_id_map: Dict[str, List[str]],
    record_display_map: Dict[str, Dict[str, str]],
    actions: List[AgentAction],
    schedules: List[Schedule],
    agent_name: str,
    agent_description: Optional[str] = None,
) -> str:
    """
    Build the user prompt asking for ``count`` records of ``model``.

    Args:
        model: Model definition with display fields resolved
        count: Number of records requested
        records_by_model: Records generated so far, by model name
        record_id_map: Generated IDs by model name
        record_display_map: Display string by record ID, by model name
        actions: All automation actions of the agent
        schedules: All schedules of the agent
        agent_name: Owning agent's name
        agent_description: Owning agent's description

    Returns:
        Rendered prompt
    """
    model_actions, model_schedules = find_model_automation(model, actions, schedules)
    guidance = (
        "records/schedule_guidance_scheduled.txt"
        if model_schedules
        else "records/schedule_guidance_default.txt"
    )
    return render_prompt(
        load_prompt("records/records_user.txt"),
        COUNT=count,
        MODEL_NAME=model.name,
        AGENT_NAME=agent_name,
        AGENT_DESCRIPTION=agent_description or "a business system",
        DISPLAY_FIELDS=", ".join(model.display_fields),
        FIELDS=describe_fields(model, records_by_model, record_id_map, record_display_map),
        RELATIONSHIP_CONTEXT=build_relationship_context(
            model, records_by_model, record_display_map
        ),
        AUTOMATION_CONTEXT=build_automation_context(model_actions, model_schedules, actions),
        TO_MANY_MIN=TO_MANY_PROMPT_RANGE[0],
        TO_MANY_MAX=TO_MANY_PROMPT_RANGE[1],
        SCHEDULE_GUIDANCE=load_prompt(guidance).rstrip("\n"),
    )
