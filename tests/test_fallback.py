"""Tests for the local fallback record generator."""

from datetime import date, timedelta

from conftest import ref, text
from modelseed.ir.schema import FieldDefinition, ModelDefinition
from modelseed.generation.fallback import FallbackRecordGenerator, generate_fallback_records


def _model():
    return ModelDefinition(
        name="Visit",
        fields=[
            text("notes"),
            FieldDefinition(name="weight", type="number"),
            FieldDefinition(name="paid", type="boolean"),
            FieldDefinition(name="day", type="date"),
            FieldDefinition(name="kind", type="enum", enum_values=["checkup", "surgery"]),
            FieldDefinition(name="mood", type="enum"),
            ref("pet", "Pet"),
            ref("vets", "Vet", "to_many"),
        ],
    )


def test_values_match_field_types(id_factory):
    records = generate_fallback_records(
        _model(), {"Pet": ["p1", "p2"], "Vet": ["v1"]}, 4, seed=1, id_factory=id_factory
    )
    assert len(records) == 4
    today = date.today()
    for n, record in enumerate(records, 1):
        assert record["notes"] == f"Sample notes {n}"
        assert isinstance(record["weight"], int) and 1 <= record["weight"] <= 100
        assert isinstance(record["paid"], bool)
        day = date.fromisoformat(record["day"])
        assert today - timedelta(days=366) <= day <= today
        assert record["kind"] in ("checkup", "surgery")
        assert record["mood"] == "unknown"
        assert record["pet"] in ("p1", "p2")
        assert 1 <= len(record["vets"]) <= 2
        assert set(record["vets"]) == {"v1"}


def test_ids_come_from_factory(id_factory):
    records = generate_fallback_records(_model(), {"Pet": ["p1"], "Vet": ["v1"]}, 3, id_factory=id_factory)
    assert [r["id"] for r in records] == ["rec-1", "rec-2", "rec-3"]


def test_references_without_targets_get_fresh_ids(id_factory):
    model = ModelDefinition(name="Pet", fields=[ref("owner", "Owner")])
    records = generate_fallback_records(model, {}, 2, id_factory=id_factory)
    assert records[0] == {"id": "rec-1", "owner": "rec-2"}
    assert records[1] == {"id": "rec-3", "owner": "rec-4"}


def test_untyped_field_gets_placeholder():
    model = ModelDefinition(name="Note", fields=[FieldDefinition(name="body", type=None)])
    records = generate_fallback_records(model, {}, 2)
    assert [r["body"] for r in records] == ["Sample value 1", "Sample value 2"]


def test_declared_id_field_is_not_overwritten(id_factory):
    model = ModelDefinition(name="Pet", fields=[FieldDefinition(name="id", type="text"), text("name")])
    records = generate_fallback_records(model, {}, 1, id_factory=id_factory)
    assert records == [{"id": "rec-1", "name": "Sample name 1"}]


def test_zero_count_returns_no_records():
    assert generate_fallback_records(_model(), {}, 0) == []


def test_same_seed_same_values():
    ids = {"Pet": ["p1", "p2", "p3"], "Vet": ["v1", "v2"]}

    def run():
        counter = iter(range(100))
        generator = FallbackRecordGenerator(seed=42, id_factory=lambda: f"id-{next(counter)}")
        return generator.generate(_model(), ids, 5)

    assert run() == run()
