"""Advisory checks for agent schemas.

Generation never depends on these: problems found here degrade gracefully
during a run (e.g. a reference to an unknown model stays unconstrained).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set
from .schema import ModelDefinition
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class QaIssue:
    """QA issue found during validation."""

    code: str  # e.g., "REF_MODEL_MISSING", "TO_ONE_CYCLE"
    location: str  # e.g., "model_name" or "model_name.field_name"
    message: str
    details: dict = field(default_factory=dict)


def _find_to_one_cycles(models: List[ModelDefinition]) -> List[List[str]]:
    """Cycles of length >= 2 over to-one references (self-references excluded)."""
    graph: Dict[str, List[str]] = {m.name: [] for m in models}
    for model in models:
        for f in model.reference_fields():
            if f.ref_type == "to_one" and f.references_model in graph and f.references_model != model.name:
                graph[model.name].append(f.references_model)

    cycles: List[List[str]] = []
    seen: Set[frozenset] = set()
    done: Set[str] = set()

    def visit(name: str, path: List[str]) -> None:
        if name in path:
            cycle = path[path.index(name):]
            key = frozenset(cycle)
            if key not in seen:
                seen.add(key)
                cycles.append(cycle + [name])
            return
        if name in done:
            return
        for nxt in graph[name]:
            visit(nxt, path + [name])
        done.add(name)

    for name in graph:
        visit(name, [])
    return cycles


def validate_models(models: List[ModelDefinition]) -> List[QaIssue]:
    """
    Check a batch of model definitions for schema problems.

    Args:
        models: Model definitions to validate

    Returns:
        List of QaIssue objects (empty if validation passes)
    """
    issues: List[QaIssue] = []
    names = [m.name for m in models]
    known = set(names)

    for name in sorted({n for n in names if names.count(n) > 1}):
        issues.append(
            QaIssue(
                code="DUPLICATE_MODEL",
                location=name,
                message=f"Model name '{name}' is used more than once",
            )
        )

    for model in models:
        field_names = [f.name for f in model.fields]
        for fname in sorted({n for n in field_names if field_names.count(n) > 1}):
            issues.append(
                QaIssue(
                    code="DUPLICATE_FIELD",
                    location=f"{model.name}.{fname}",
                    message=f"{model.name}: field '{fname}' is declared more than once",
                )
            )

        for f in model.fields:
            location = f"{model.name}.{f.name}"
            if f.type == "enum" and not f.enum_values:
                issues.append(
                    QaIssue(
                        code="ENUM_NO_VALUES",
                        location=location,
                        message=f"{location}: enum field has no enumValues; any string is accepted",
                    )
                )
            if f.type != "reference":
                continue
            if not f.references_model:
                issues.append(
                    QaIssue(
                        code="REF_MODEL_UNSET",
                        location=location,
                        message=f"{location}: reference field does not name a referenced model",
                    )
                )
            elif f.references_model not in known:
                issues.append(
                    QaIssue(
                        code="REF_MODEL_MISSING",
                        location=location,
                        message=f"{location}: references unknown model '{f.references_model}'",
                        details={"references_model": f.references_model},
                    )
                )

        for display_field in model.display_fields:
            if display_field != "id" and model.get_field(display_field) is None:
                issues.append(
                    QaIssue(
                        code="DISPLAY_FIELD_MISSING",
                        location=f"{model.name}.{display_field}",
                        message=f"{model.name}: display field '{display_field}' is not a field",
                    )
                )

    for cycle in _find_to_one_cycles(models):
        issues.append(
            QaIssue(
                code="TO_ONE_CYCLE",
                location=cycle[0],
                message="To-one reference cycle: " + " -> ".join(cycle),
                details={"cycle": cycle},
            )
        )

    if issues:
        logger.debug(f"Schema validation found {len(issues)} issue(s)")
    return issues
