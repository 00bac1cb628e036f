"""Dependency analysis and generation ordering for data models."""

from typing import List, Set
from modelseed.ir.schema import ModelDefinition, DependencyEdge
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def analyze_model_dependencies(models: List[ModelDefinition]) -> List[DependencyEdge]:
    """
    Build one dependency edge per reference field.

    A to-one field makes its owner depend on the referenced model. A to-many
    field is inverted: the referenced model depends on the owner. Edges are
    not deduplicated.

    Args:
        models: Model definitions of one generation batch

    Returns:
        List of DependencyEdge in model/field declaration order
    """
    edges: List[DependencyEdge] = []
    for model in models:
        for field in model.reference_fields():
            if field.ref_type == "to_one":
                edges.append(
                    DependencyEdge(
                        dependent=model.name,
                        depends_on=field.references_model,
                        field=field.name,
                        type="to_one",
                    )
                )
            else:
                edges.append(
                    DependencyEdge(
                        dependent=field.references_model,
                        depends_on=model.name,
                        field=field.name,
                        type="to_many",
                    )
                )
    logger.debug(f"Found {len(edges)} dependency edge(s) across {len(models)} model(s)")
    return edges


def topological_sort(
    models: List[ModelDefinition], dependencies: List[DependencyEdge]
) -> List[ModelDefinition]:
    """
    Order models so that to-one targets are generated before their referrers.

    Depth-first over to-one edges only. Models that own a to-one reference are
    visited first (in input order), then every remaining model. A node that is
    re-entered while still being visited closes a cycle: the cycle is logged
    and the branch is treated as already resolved.

    Args:
        models: Model definitions in input order
        dependencies: Edges from analyze_model_dependencies()

    Returns:
        Every model exactly once, in generation order
    """
    by_name = {}
    for model in models:
        by_name.setdefault(model.name, model)

    sorted_models: List[ModelDefinition] = []
    visited: Set[str] = set()
    visiting: Set[str] = set()

    def visit(model_name: str) -> None:
        if model_name in visiting:
            logger.warning(f"Circular dependency detected at model '{model_name}'")
            return
        if model_name in visited:
            return

        visiting.add(model_name)
        for dep in dependencies:
            if dep.dependent == model_name and dep.type == "to_one":
                visit(dep.depends_on)
        visiting.discard(model_name)
        visited.add(model_name)

        model = by_name.get(model_name)
        if model is not None:
            sorted_models.append(model)

    with_to_one = {d.dependent for d in dependencies if d.type == "to_one"}
    for model in models:
        if model.name in with_to_one:
            visit(model.name)

    for model in models:
        if model.name not in visited:
            visit(model.name)

    return sorted_models
