"""Shared fixtures: a schema-driven fake generator and sample models."""

import itertools
from typing import Any, Dict, List, Optional, Set

import pytest

from modelseed.ir.schema import FieldDefinition, ModelDefinition


def _resolve(prop: Dict[str, Any], defs: Dict[str, Any]) -> Dict[str, Any]:
    ref = prop.get("$ref")
    if ref:
        return defs[ref.split("/")[-1]]
    return prop


def fake_value(prop: Dict[str, Any], i: int, defs: Dict[str, Any]) -> Any:
    """Produce a value that satisfies a JSON-schema property."""
    prop = _resolve(prop, defs)
    if "const" in prop:
        return prop["const"]
    if "enum" in prop:
        return prop["enum"][i % len(prop["enum"])]
    if "anyOf" in prop:
        if "default" in prop and prop["default"] is None:
            return None
        options = [o for o in prop["anyOf"] if o.get("type") != "null"]
        return fake_value(options[0], i, defs)
    kind = prop.get("type")
    if kind == "string":
        return f"value {i + 1}"
    if kind in ("integer", "number"):
        return i + 1
    if kind == "boolean":
        return i % 2 == 0
    if kind == "array":
        return [fake_value(prop.get("items", {"type": "string"}), i, defs)]
    return f"value {i + 1}"


class FakeGenerator:
    """Stands in for the LLM: fills any records schema with valid values."""

    def __init__(self, fail_for: Optional[Set[str]] = None):
        self.fail_for = fail_for or set()
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, prompt, schema):
        model_name = schema.__name__[: -len("Records")]
        self.calls.append({"model": model_name, "prompt": prompt, "schema": schema})
        if model_name in self.fail_for:
            raise RuntimeError(f"quota exceeded for {model_name}")

        json_schema = schema.model_json_schema(by_alias=True)
        defs = json_schema.get("$defs", {})
        records_prop = json_schema["properties"]["records"]
        record_def = _resolve(records_prop["items"], defs)
        count = records_prop.get("minItems", 0)
        records = [
            {
                name: fake_value(prop, i, defs)
                for name, prop in record_def.get("properties", {}).items()
            }
            for i in range(count)
        ]
        return schema.model_validate({"records": records})

    @property
    def order(self) -> List[str]:
        return [c["model"] for c in self.calls]


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"rec-{next(counter)}"


def text(name: str, **kwargs) -> FieldDefinition:
    return FieldDefinition(name=name, title=name.title(), type="text", **kwargs)


def ref(name: str, target: str, ref_type: str = "to_one") -> FieldDefinition:
    return FieldDefinition(
        name=name,
        title=name.title(),
        type="reference",
        references_model=target,
        references_field="id",
        reference_type=ref_type,
    )


@pytest.fixture
def owner_pet_models():
    owner = ModelDefinition(
        name="Owner",
        fields=[text("name"), ref("pets", "Pet", "to_many")],
    )
    pet = ModelDefinition(
        name="Pet",
        fields=[
            text("name"),
            FieldDefinition(name="species", title="Species", type="enum", enum_values=["dog", "cat"]),
            ref("owner", "Owner", "to_one"),
        ],
    )
    return [owner, pet]
