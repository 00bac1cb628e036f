"""Tests for dependency analysis and generation ordering."""

from conftest import ref, text
from modelseed.ir.schema import ModelDefinition
from modelseed.generation.dependencies import analyze_model_dependencies, topological_sort


def _names(models):
    return [m.name for m in models]


def test_to_one_edge_points_from_owner_to_target():
    pet = ModelDefinition(name="Pet", fields=[ref("owner", "Owner")])
    edges = analyze_model_dependencies([pet])
    assert len(edges) == 1
    assert edges[0].dependent == "Pet"
    assert edges[0].depends_on == "Owner"
    assert edges[0].field == "owner"
    assert edges[0].type == "to_one"


def test_to_many_edge_is_inverted():
    owner = ModelDefinition(name="Owner", fields=[ref("pets", "Pet", "to_many")])
    edges = analyze_model_dependencies([owner])
    assert edges[0].dependent == "Pet"
    assert edges[0].depends_on == "Owner"
    assert edges[0].type == "to_many"


def test_edges_are_not_deduplicated():
    pet = ModelDefinition(
        name="Pet", fields=[ref("owner", "Owner"), ref("vet_contact", "Owner"), text("name")]
    )
    edges = analyze_model_dependencies([pet])
    assert [e.field for e in edges] == ["owner", "vet_contact"]


def test_models_without_references_have_no_edges():
    models = [ModelDefinition(name="A", fields=[text("name")]), ModelDefinition(name="B")]
    assert analyze_model_dependencies(models) == []


def test_to_one_target_precedes_referrer():
    # C -> B -> A via to-one, given in reverse order
    a = ModelDefinition(name="A", fields=[text("name")])
    b = ModelDefinition(name="B", fields=[ref("a", "A")])
    c = ModelDefinition(name="C", fields=[ref("b", "B"), ref("a", "A")])
    models = [c, b, a]
    order = _names(topological_sort(models, analyze_model_dependencies(models)))
    assert order.index("A") < order.index("B") < order.index("C")
    assert sorted(order) == ["A", "B", "C"]


def test_to_many_edges_do_not_affect_order():
    owner = ModelDefinition(name="Owner", fields=[ref("pets", "Pet", "to_many")])
    pet = ModelDefinition(name="Pet", fields=[text("name")])
    models = [pet, owner]
    assert _names(topological_sort(models, analyze_model_dependencies(models))) == ["Pet", "Owner"]


def test_models_with_to_one_references_are_seeded_first():
    lone = ModelDefinition(name="Lone", fields=[text("name")])
    owner = ModelDefinition(name="Owner", fields=[text("name")])
    pet = ModelDefinition(name="Pet", fields=[ref("owner", "Owner")])
    models = [lone, owner, pet]
    # Pet is visited first (pulling in Owner), then the remaining Lone
    assert _names(topological_sort(models, analyze_model_dependencies(models))) == [
        "Owner",
        "Pet",
        "Lone",
    ]


def test_cycle_terminates_with_every_model_once():
    a = ModelDefinition(name="A", fields=[ref("b", "B")])
    b = ModelDefinition(name="B", fields=[ref("a", "A")])
    models = [a, b]
    order = _names(topological_sort(models, analyze_model_dependencies(models)))
    assert order == ["B", "A"]


def test_longer_cycle_with_tail():
    a = ModelDefinition(name="A", fields=[ref("b", "B")])
    b = ModelDefinition(name="B", fields=[ref("c", "C")])
    c = ModelDefinition(name="C", fields=[ref("a", "A")])
    d = ModelDefinition(name="D", fields=[ref("a", "A")])
    models = [d, a, b, c]
    order = _names(topological_sort(models, analyze_model_dependencies(models)))
    assert sorted(order) == ["A", "B", "C", "D"]
    assert len(order) == len(set(order))
    assert order[-1] == "D"


def test_self_reference_is_visited_once():
    employee = ModelDefinition(name="Employee", fields=[text("name"), ref("manager", "Employee")])
    models = [employee]
    assert _names(topological_sort(models, analyze_model_dependencies(models))) == ["Employee"]


def test_reference_to_unknown_model_is_ignored_by_sequencer():
    pet = ModelDefinition(name="Pet", fields=[ref("owner", "Ghost")])
    models = [pet]
    assert _names(topological_sort(models, analyze_model_dependencies(models))) == ["Pet"]
