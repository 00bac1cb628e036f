"""Back-fill the reverse side of references after all models are generated."""

from typing import Any, Dict, List, Optional
from modelseed.ir.schema import FieldDefinition, ModelDefinition
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def find_mirror_field(
    model: ModelDefinition, field: FieldDefinition, target: ModelDefinition
) -> Optional[FieldDefinition]:
    """First reference field on ``target`` that points back at ``model``.

    A self-referencing field is never its own mirror.
    """
    return next(
        (
            f
            for f in target.fields
            if f.type == "reference"
            and f.references_model == model.name
            and f is not field
        ),
        None,
    )


def reconcile_references(
    models: List[ModelDefinition],
    records_by_model: Dict[str, List[Dict[str, Any]]],
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Make both sides of every mirrored reference agree.

    A to-one value adds the source record's ID to the target's mirror list.
    A to-many value sets each target's mirror field to the source record's ID
    (last writer wins). Records are mutated in place.

    Args:
        models: Model definitions of the batch
        records_by_model: Generated records by model name

    Returns:
        The same mapping
    """
    models_by_name: Dict[str, ModelDefinition] = {}
    for model in models:
        models_by_name.setdefault(model.name, model)

    for model in models_by_name.values():
        model_records = records_by_model.get(model.name)
        if not model_records:
            continue

        for field in model.reference_fields():
            target = models_by_name.get(field.references_model)
            if target is None:
                continue
            mirror = find_mirror_field(model, field, target)
            if mirror is None:
                continue

            logger.debug(
                f"Reconciling {model.name}.{field.name} <-> {target.name}.{mirror.name}"
            )
            target_by_id = {
                r.get("id"): r for r in records_by_model.get(target.name, [])
            }

            for record in model_records:
                value = record.get(field.name)

                if field.ref_type == "to_one":
                    # A to-one field mirrored by another to-one field may already hold a list
                    if not isinstance(value, str) or not value:
                        continue
                    referenced = target_by_id.get(value)
                    if referenced is None:
                        continue
                    back_refs = referenced.get(mirror.name)
                    if not isinstance(back_refs, list):
                        back_refs = [] if not back_refs else [back_refs]
                        referenced[mirror.name] = back_refs
                    if record["id"] not in back_refs:
                        back_refs.append(record["id"])

                elif isinstance(value, list):
                    for ref_id in value:
                        if not isinstance(ref_id, str):
                            continue
                        referenced = target_by_id.get(ref_id)
                        if referenced is not None:
                            referenced[mirror.name] = record["id"]

    logger.info("Bidirectional references updated")
    return records_by_model
