"""Tests for schema loading and record output."""

import json

import pandas as pd
import pytest

from modelseed.generation.writer import records_to_frame, write_model_csvs
from modelseed.utils.io import load_agent_schema, save_records_to_json


def test_load_agent_schema(tmp_path):
    path = tmp_path / "agent.json"
    path.write_text(
        json.dumps(
            {
                "agent": {"name": "Clinic"},
                "models": [{"name": "Pet", "fields": [{"name": "name"}], "displayFields": ["name"]}],
                "schedules": [{"name": "daily", "intervalHours": 24, "steps": [{"modelName": "Pet"}]}],
            }
        ),
        encoding="utf-8",
    )
    schema = load_agent_schema(path)
    assert schema.agent.name == "Clinic"
    assert schema.models[0].display_fields == ["name"]
    assert schema.models[0].fields[0].type == "text"
    assert schema.schedules[0].interval_hours == 24
    assert schema.actions == []


def test_load_agent_schema_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_agent_schema(tmp_path / "missing.json")

    empty = tmp_path / "empty.json"
    empty.write_text("  ", encoding="utf-8")
    with pytest.raises(ValueError, match="empty"):
        load_agent_schema(empty)

    broken = tmp_path / "broken.json"
    broken.write_text('{"models": [{"fields": []}]}', encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to load agent schema"):
        load_agent_schema(broken)


def test_save_records_to_json(tmp_path):
    records = {"Pet": [{"id": "p1", "name": "Rex"}]}
    path = save_records_to_json(records, tmp_path / "nested" / "records.json")
    assert json.loads(path.read_text(encoding="utf-8")) == records


def test_records_to_frame_encodes_lists(owner_pet_models):
    owner = owner_pet_models[0]
    df = records_to_frame(owner, [{"id": "o1", "name": "Ann", "pets": ["p1", "p2"]}, {"id": "o2", "name": "Bo"}])
    assert list(df.columns) == ["id", "name", "pets"]
    assert df.loc[0, "pets"] == '["p1", "p2"]'
    assert pd.isna(df.loc[1, "pets"])


def test_write_model_csvs(owner_pet_models, tmp_path):
    records = {"Owner": [{"id": "o1", "name": "Ann", "pets": ["p1"]}], "Pet": []}
    files = write_model_csvs(owner_pet_models, records, tmp_path / "csv")
    assert set(files) == {"Owner", "Pet"}
    assert len(pd.read_csv(files["Owner"])) == 1
    assert list(pd.read_csv(files["Pet"]).columns) == ["id", "name", "species", "owner"]
