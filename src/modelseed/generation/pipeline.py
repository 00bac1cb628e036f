"""Sequential, dependency-ordered record generation for a batch of models."""

import time
import uuid
from typing import Any, Callable, Dict, List, Optional
from modelseed.ir.schema import AgentAction, ModelDefinition, Schedule
from modelseed.llm.structured import StructuredGenerator
from modelseed.generation.dependencies import analyze_model_dependencies, topological_sort
from modelseed.generation.display import with_display_fields, build_display_map
from modelseed.generation.record_generator import generate_records_for_model
from modelseed.generation.fallback import FallbackRecordGenerator
from modelseed.generation.reconcile import reconcile_references
from modelseed.config.settings import get_settings
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def generate_sequential_records(
    models: List[ModelDefinition],
    actions: Optional[List[AgentAction]] = None,
    schedules: Optional[List[Schedule]] = None,
    agent_name: str = "Agent",
    agent_description: Optional[str] = None,
    count: Optional[int] = None,
    generator: Optional[StructuredGenerator] = None,
    id_factory: Callable[[], str] = _new_id,
    seed: Optional[int] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Generate records for every model, referenced models first.

    Models are ordered by their to-one references and generated one at a time;
    each model sees the IDs and display strings of the models generated before
    it. Reverse references are back-filled once all models exist.

    Args:
        models: Model definitions of the agent
        actions: Automation actions (prompt context only)
        schedules: Schedules (prompt context only)
        agent_name: Owning agent's name
        agent_description: Owning agent's description
        count: Records per model (defaults to settings.default_record_count)
        generator: Structured generator (defaults to the configured LLM)
        id_factory: Produces record IDs
        seed: Seed for fallback values (defaults to settings.seed)

    Returns:
        Records by model name
    """
    settings = get_settings()
    if count is None:
        count = settings.default_record_count
    if seed is None:
        seed = settings.seed
    actions = actions or []
    schedules = schedules or []

    run_start = time.time()
    logger.info(f"Starting sequential record generation for {len(models)} model(s), count={count}")

    # Working copies with display fields resolved; callers' models are untouched
    models = [with_display_fields(model) for model in models]

    dependencies = analyze_model_dependencies(models)
    logger.info(
        "Model dependencies: "
        + (", ".join(f"{d.dependent} -> {d.depends_on} ({d.type})" for d in dependencies) or "none")
    )

    sorted_models = topological_sort(models, dependencies)
    logger.info(f"Model generation order: {', '.join(m.name for m in sorted_models)}")

    fallback = FallbackRecordGenerator(seed=seed, id_factory=id_factory)
    records_by_model: Dict[str, List[Dict[str, Any]]] = {}
    record_id_map: Dict[str, List[str]] = {}
    record_display_map: Dict[str, Dict[str, str]] = {}

    for idx, model in enumerate(sorted_models, 1):
        model_start = time.time()
        logger.info(
            f"[{idx}/{len(sorted_models)}] Generating records for model: {model.name} "
            f"(display fields: {', '.join(model.display_fields)})"
        )

        model_records = generate_records_for_model(
            model,
            records_by_model,
            record_id_map,
            record_display_map,
            actions,
            schedules,
            agent_name,
            agent_description,
            count,
            generator=generator,
            id_factory=id_factory,
            fallback=fallback,
        )

        records_by_model[model.name] = model_records
        record_id_map[model.name] = [r["id"] for r in model_records]
        record_display_map[model.name] = build_display_map(model_records, model.display_fields)

        logger.info(
            f"Generated {len(model_records)} records for {model.name} "
            f"in {time.time() - model_start:.3f}s"
        )

    logger.info("Updating bidirectional references...")
    reconcile_references(models, records_by_model)

    logger.info(
        f"Record generation completed: {summarize_counts(records_by_model)} "
        f"(total time: {time.time() - run_start:.3f}s)"
    )
    return records_by_model


def summarize_counts(records_by_model: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
    """Number of records per model."""
    return {name: len(records) for name, records in records_by_model.items()}
